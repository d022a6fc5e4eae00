"""
test_repl.py — Command dispatch tests for cli/repl.py.

The prompt session is never started; dispatch() is driven directly.
"""

import pytest

import core.storage as storage
from cli.repl import REPL
from core.config import STORAGE_AFFINITIES
from core.state import EndpointsState


@pytest.fixture
def repl(isolated_storage, sample_entries):
    shell = REPL.__new__(REPL)
    shell.state = EndpointsState(sample_entries)
    shell._running = True
    return shell


class TestDispatch:
    def test_select_with_provider(self, repl, capsys):
        repl.dispatch("select Polkadot OnFinality")
        assert repl.state.selection.api_url == "wss://polkadot.api.onfinality.me"
        assert storage.kv_get(STORAGE_AFFINITIES) == {"Polkadot": "wss://polkadot.api.onfinality.me"}
        assert "switch" in capsys.readouterr().out

    def test_select_unknown_network(self, repl, capsys):
        repl.dispatch("select Kusama")
        assert "Unknown network" in capsys.readouterr().out
        assert repl.state.selection.api_url == "ws://127.0.0.1:9944"

    def test_bare_url_selects_it(self, repl):
        repl.dispatch("wss://elsewhere.example")
        assert repl.state.selection.api_url == "wss://elsewhere.example"
        assert repl.state.affinities == {}

    def test_switch_applies(self, repl):
        repl.dispatch("select Polkadot")
        repl.dispatch("switch")
        assert storage.load_settings()["apiUrl"] == "wss://rpc.polkadot.io"
        assert repl.state.is_switch_disabled is True

    def test_switch_blocked_reported(self, repl, capsys):
        repl.dispatch("switch")
        assert "Cannot switch" in capsys.readouterr().out

    def test_group(self, repl, capsys):
        repl.dispatch("group 0")
        assert repl.state.selection.group_index == 0
        repl.dispatch("group 9")
        assert "Usage: group" in capsys.readouterr().out
        assert repl.state.selection.group_index == 0

    def test_custom_invalid_reported(self, repl, capsys):
        repl.dispatch("custom add ftp://nope")
        assert "not a valid" in capsys.readouterr().out

    def test_unknown_command(self, repl, capsys):
        repl.dispatch("frobnicate")
        assert "Unknown command" in capsys.readouterr().out

    @pytest.mark.parametrize("line", ["quit", "exit", "/quit", "/exit"])
    def test_quit(self, repl, line):
        repl.dispatch(line)
        assert repl._running is False
