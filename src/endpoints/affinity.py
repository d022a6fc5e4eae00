"""
endpoints/affinity.py – Remembered provider choice per network.

The map is persisted in the key-value store under ``network:affinities``.
Loading filters it against the live directory, so entries left behind by an
older catalog disappear without any error.
"""

from __future__ import annotations

from core import storage
from core.config import STORAGE_AFFINITIES
from core.logger import LOGGER
from endpoints.directory import has_pair
from endpoints.types import Group

log = LOGGER.getChild("affinity")


def load_affinities(groups: list[Group]) -> dict[str, str]:
    """Return the persisted affinities whose (network, url) pair exists in *groups*."""
    raw = storage.kv_get(STORAGE_AFFINITIES) or {}
    if not isinstance(raw, dict):
        log.debug("ignoring non-mapping affinities value: %r", raw)
        return {}

    result: dict[str, str] = {}
    for network, api_url in raw.items():
        if isinstance(api_url, str) and has_pair(groups, network, api_url):
            result[network] = api_url
        else:
            log.debug("dropping stale affinity %r -> %r", network, api_url)
    return result


def record_affinity(
    current: dict[str, str],
    network: str,
    url: str,
    groups: list[Group],  # noqa: ARG001
) -> dict[str, str]:
    """
    Map *network* to *url* and persist the whole map before returning it.

    *groups* is accepted for symmetry with load_affinities; writes are not
    validated since callers only pick urls taken from the directory.
    """
    updated = {**current, network: url}
    storage.kv_set(STORAGE_AFFINITIES, updated)
    return updated
