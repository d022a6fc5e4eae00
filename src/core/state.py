"""core/state.py — One endpoint-picker instance: directory, selection, affinities."""

from __future__ import annotations

from core.storage import load_settings, save_settings
from endpoints.affinity import load_affinities, record_affinity
from endpoints.catalog import create_ws_endpoints
from endpoints.directory import build_directory, find_network
from endpoints.exceptions import SwitchBlockedError
from endpoints.gate import can_switch, switch_url
from endpoints.selection import change_group, resolve
from endpoints.types import Group, LinkEntry, SelectionState


class EndpointsState:
    """
    Holds the directory (built once), the current selection and the affinities.

    The applied url is re-read from the settings store on every resolve; it is
    never cached here.
    """

    def __init__(self, entries: list[LinkEntry] | None = None) -> None:
        self.groups: list[Group] = build_directory(create_ws_endpoints() if entries is None else entries)
        self.selection: SelectionState = self._resolve(load_settings()["apiUrl"])
        self.affinities: dict[str, str] = load_affinities(self.groups)

    def _resolve(self, api_url: str) -> SelectionState:
        return resolve(api_url, self.groups, load_settings()["apiUrl"])

    # ── User actions ─────────────────────────────────────────────────────────

    def select(self, network: str, api_url: str) -> SelectionState:
        """User picked *api_url* for *network*: remember it and re-resolve."""
        self.affinities = record_affinity(self.affinities, network, api_url, self.groups)
        self.selection = self._resolve(api_url)
        return self.selection

    def select_url(self, api_url: str) -> SelectionState:
        """User typed a url directly (no network, no affinity)."""
        self.selection = self._resolve(api_url)
        return self.selection

    def change_group(self, group_index: int) -> SelectionState:
        self.selection = change_group(self.selection, group_index)
        return self.selection

    @property
    def is_switch_disabled(self) -> bool:
        s = self.selection
        return can_switch(s.has_url_changed, s.api_url, s.is_url_valid)

    def apply(self, base_url: str = "") -> str:
        """
        Persist the selected url as the applied one; return the reload target.

        Raises
        ------
        SwitchBlockedError when the switch is disabled for the current selection.
        """
        if self.is_switch_disabled:
            raise SwitchBlockedError(self.selection)
        api_url = self.selection.api_url
        save_settings({"apiUrl": api_url})
        self.selection = self._resolve(api_url)
        return switch_url(base_url, api_url)

    # ── Lookups ──────────────────────────────────────────────────────────────

    def preferred_url(self, network: str) -> str | None:
        """Affinity for *network*, else its first provider, else None."""
        if network in self.affinities:
            return self.affinities[network]
        found = find_network(self.groups, network)
        if found is None or not found.providers:
            return None
        return found.providers[0].url

    def to_dict(self) -> dict:
        return {
            "groups": [g.to_dict() for g in self.groups],
            "selection": self.selection.to_dict(),
            "affinities": dict(self.affinities),
            "isSwitchDisabled": self.is_switch_disabled,
        }
