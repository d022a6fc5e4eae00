"""
test_selection.py — Unit tests for endpoints/selection.py
"""

import pytest

from endpoints.selection import change_group, find_group_index, is_valid_url, resolve
from endpoints.types import Group, Network, Provider, SelectionState

# ── is_valid_url ───────────────────────────────────────────────────────────────


class TestIsValidUrl:
    @pytest.mark.parametrize(
        "url",
        ["wss://a", "ws://ab", "wss://rpc.polkadot.io", "ws://127.0.0.1:9944", "light://substrate-connect/polkadot"],
    )
    def test_accepted(self, url):
        assert is_valid_url(url) is True

    @pytest.mark.parametrize(
        "url",
        ["", "ws://", "ws://a", "wss://", "http://rpc.polkadot.io", "https://x.io", "rpc.polkadot.io", "WSS://RPC.IO"],
    )
    def test_rejected(self, url):
        assert is_valid_url(url) is False

    def test_length_boundary(self):
        """Seven characters is the minimum; six never passes."""
        assert len("wss://a") == 7
        assert is_valid_url("wss://a")
        assert len("ws://a") == 6
        assert not is_valid_url("ws://a")


# ── find_group_index ───────────────────────────────────────────────────────────


class TestFindGroupIndex:
    def test_group_offering_url(self, sample_groups):
        assert find_group_index("wss://polkadot.api.onfinality.me", sample_groups) == 0
        assert find_group_index("ws://127.0.0.1:9944", sample_groups) == 1

    def test_falls_back_to_development_group(self, sample_groups):
        assert find_group_index("ws://unknown", sample_groups) == 1

    def test_first_development_group_wins(self):
        groups = [Group("A"), Group("Dev1", is_development=True), Group("Dev2", is_development=True)]
        assert find_group_index("wss://nowhere", groups) == 1

    def test_no_match_and_no_development_group(self):
        groups = [Group("A", networks=[Network("N", providers=[Provider("p", "wss://n")])])]
        assert find_group_index("wss://other", groups) == -1
        assert find_group_index("wss://other", []) == -1

    def test_first_matching_group_wins(self):
        """The same url in two groups resolves to the earlier group."""
        shared = "wss://shared.example"
        groups = [
            Group("A", networks=[Network("N1", providers=[Provider("p", shared)])]),
            Group("B", networks=[Network("N2", providers=[Provider("p", shared)])]),
        ]
        assert find_group_index(shared, groups) == 0


# ── resolve ────────────────────────────────────────────────────────────────────


class TestResolve:
    def test_known_url(self, sample_groups):
        state = resolve("wss://rpc.polkadot.io", sample_groups, "")
        assert state == SelectionState(
            api_url="wss://rpc.polkadot.io", group_index=0, has_url_changed=True, is_url_valid=True
        )

    def test_unknown_url_falls_back(self, sample_groups):
        state = resolve("ws://unknown", sample_groups, "")
        assert state.group_index == 1
        assert state.is_url_valid is True
        assert state.has_url_changed is True

    def test_unchanged_url(self, sample_groups):
        state = resolve("ws://127.0.0.1:9944", sample_groups, "ws://127.0.0.1:9944")
        assert state.has_url_changed is False

    def test_invalid_url_is_a_state_not_an_error(self, sample_groups):
        state = resolve("http://x", sample_groups, "wss://rpc.polkadot.io")
        assert state.is_url_valid is False
        assert state.group_index == 1

    def test_to_dict_uses_camel_case(self, sample_groups):
        assert resolve("wss://rpc.polkadot.io", sample_groups, "").to_dict() == {
            "apiUrl": "wss://rpc.polkadot.io",
            "groupIndex": 0,
            "hasUrlChanged": True,
            "isUrlValid": True,
        }


class TestChangeGroup:
    def test_only_group_index_changes(self, sample_groups):
        state = resolve("wss://rpc.polkadot.io", sample_groups, "")
        moved = change_group(state, 1)
        assert moved.group_index == 1
        assert moved.api_url == state.api_url
        assert moved.has_url_changed == state.has_url_changed
        assert state.group_index == 0
