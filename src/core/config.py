"""
core/config.py — Centralised path constants, storage keys and defaults.

All other modules import paths from here rather than computing them from
__file__.  This guarantees consistency regardless of where a module lives
in the source tree.

Usage::

    from core.config import DATA_DIR, STORE_FILE, SETTINGS_FILE
"""

import os
from pathlib import Path

# ── Repository layout ──────────────────────────────────────────────────────────

SRC_DIR: Path = Path(__file__).parent.parent       # …/nodeswitch/src/
REPO_ROOT: Path = SRC_DIR.parent                   # …/nodeswitch/

# Runtime data produced at run-time (gitignored)
DATA_DIR: Path = Path(os.environ.get("NODESWITCH_DATA_DIR", str(REPO_ROOT / "data")))

# Key-value store shared by affinities and custom endpoints
STORE_FILE: Path = DATA_DIR / "store.json"

# Applied settings (the currently connected apiUrl)
SETTINGS_FILE: Path = DATA_DIR / "settings.json"

# Default endpoint catalog shipped with the repo; NODESWITCH_CATALOG may point
# at another file or at an http(s) URL.
CATALOG_JSON: Path = REPO_ROOT / "catalog" / "endpoints.json"
CATALOG_SOURCE: str = os.environ.get("NODESWITCH_CATALOG", "")

# ── Storage keys ───────────────────────────────────────────────────────────────

STORAGE_AFFINITIES: str = "network:affinities"
CUSTOM_ENDPOINT_KEY: str = "polkadot-app-custom-endpoints"

# ── Endpoint defaults ──────────────────────────────────────────────────────────

DEFAULT_API_URL: str = "ws://127.0.0.1:9944"
VALID_URL_PREFIXES: tuple[str, ...] = ("ws://", "wss://", "light://")
LIGHT_CLIENT_PREFIX: str = "light://"
MIN_URL_LENGTH: int = 7

# Nodes operated by us, listed under the development group.
OWN_NODES: list[dict] = [
    {"name": "SYDNEY", "link": "wss://testnet.node.sydney.ggxchain.io"},
    {"name": "BROOKLYN", "link": "wss://testnet.node.brooklyn.ggxchain.io"},
]

# Environment variable carrying a custom environment endpoint
CUSTOM_ENV_VAR: str = "WS_URL"

# ── Feature flags / defaults (overridable via env) ────────────────────────────

DASHBOARD_PORT: int = int(os.environ.get("NODESWITCH_PORT", "5757"))
DEBUG: bool = os.environ.get("NODESWITCH_DEBUG", "") not in ("", "0", "false")

# HTTP timeout (seconds) for remote catalogs
HTTP_TIMEOUT: float = 15.0
