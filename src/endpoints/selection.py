"""
endpoints/selection.py – Derive the selection state from a raw endpoint URL.
"""

from __future__ import annotations

from dataclasses import replace

from core.config import MIN_URL_LENGTH, VALID_URL_PREFIXES
from endpoints.types import Group, SelectionState


def is_valid_url(url: str) -> bool:
    """Syntactic pre-filter only: minimum length and a ws/wss/light scheme."""
    return len(url) >= MIN_URL_LENGTH and url.startswith(VALID_URL_PREFIXES)


def find_group_index(api_url: str, groups: list[Group]) -> int:
    """
    Index of the group offering *api_url*; failing that the first development
    group; failing that -1.
    """
    for index, group in enumerate(groups):
        if group.has_url(api_url):
            return index
    for index, group in enumerate(groups):
        if group.is_development:
            return index
    return -1


def resolve(api_url: str, groups: list[Group], previous_api_url: str) -> SelectionState:
    """Compute the SelectionState for *api_url* against the applied *previous_api_url*."""
    return SelectionState(
        api_url=api_url,
        group_index=find_group_index(api_url, groups),
        has_url_changed=api_url != previous_api_url,
        is_url_valid=is_valid_url(api_url),
    )


def change_group(state: SelectionState, group_index: int) -> SelectionState:
    # expanding another group keeps the chosen url
    return replace(state, group_index=group_index)
