"""
conftest.py — Shared pytest fixtures for the endpoint picker test suite.
"""

import sys
from pathlib import Path

import pytest

# src/ is the Python root for all packages (core, endpoints, cli, dashboard)
_SRC = Path(__file__).parent.parent.parent / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from endpoints.types import HeaderEntry, NodeEntry  # noqa: E402


@pytest.fixture
def isolated_storage(tmp_path, monkeypatch):
    """Point the key-value store and settings file at a temp directory."""
    import core.storage as storage

    store_file = tmp_path / "store.json"
    settings_file = tmp_path / "settings.json"
    monkeypatch.setattr(storage, "STORE_FILE", store_file)
    monkeypatch.setattr(storage, "SETTINGS_FILE", settings_file)
    monkeypatch.delenv("WS_URL", raising=False)
    return tmp_path


@pytest.fixture
def sample_entries():
    """Two groups: Polkadot with two providers, and a development group."""
    return [
        HeaderEntry("Polkadot"),
        NodeEntry(text="Polkadot", text_by="Parity", value="wss://rpc.polkadot.io"),
        NodeEntry(text="Polkadot", text_by="OnFinality", value="wss://polkadot.api.onfinality.me"),
        HeaderEntry("Dev", is_development=True),
        NodeEntry(text="Local", text_by="local", value="ws://127.0.0.1:9944"),
    ]


@pytest.fixture
def sample_groups(sample_entries):
    from endpoints.directory import build_directory

    return build_directory(sample_entries)


@pytest.fixture
def sample_catalog_rows():
    """Catalog rows in their JSON shape."""
    return [
        {"isHeader": True, "text": "Polkadot & parachains"},
        {"text": "Polkadot", "textBy": "Parity", "value": "wss://rpc.polkadot.io", "genesisHash": "0x91b1"},
        {"text": "Polkadot", "textBy": "OnFinality", "value": "wss://polkadot.api.onfinality.io/public-ws"},
        {
            "text": "Acala",
            "textBy": "Acala Foundation",
            "value": "wss://acala-rpc-0.aca-api.network",
            "isChild": True,
            "paraId": 2000,
            "textRelay": "Polkadot",
        },
        {"isHeader": True, "text": "Test networks", "isSpaced": True},
        {"text": "Westend", "textBy": "Parity", "value": "wss://westend-rpc.polkadot.io"},
    ]
