"""
endpoints/catalog.py – Produce the ordered, flat list of catalog entries.

Sources, in the order they appear in the final catalog:

1. The custom environment endpoint from ``$WS_URL`` (own group, first).
2. The catalog proper: a JSON file or an http(s) URL.
3. The development group: local node, our own testnet nodes, then the custom
   endpoints the user saved (key ``polkadot-app-custom-endpoints``).
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path

import httpx

from core import storage
from core.config import (
    CATALOG_JSON,
    CATALOG_SOURCE,
    CUSTOM_ENDPOINT_KEY,
    CUSTOM_ENV_VAR,
    DEFAULT_API_URL,
    HTTP_TIMEOUT,
    OWN_NODES,
)
from core.logger import LOGGER
from endpoints.exceptions import CatalogError, InvalidEndpointError
from endpoints.selection import is_valid_url
from endpoints.types import HeaderEntry, LinkEntry, NodeEntry, parse_entries

log = LOGGER.getChild("catalog")

__all__ = [
    "CUSTOM_ENDPOINT_KEY",
    "load_catalog_file", "fetch_catalog", "resolve_catalog",
    "create_custom", "create_dev", "create_own", "create_stored_custom",
    "load_custom_endpoints", "add_custom_endpoint", "remove_custom_endpoint",
    "create_ws_endpoints",
]


# ── Catalog proper ────────────────────────────────────────────────────────────


def _rows(data, origin: str) -> list:
    if isinstance(data, Mapping):
        data = data.get("entries")
    if not isinstance(data, list):
        raise CatalogError(f"Catalog {origin} must be a JSON array or an object with 'entries'.")
    return data


def load_catalog_file(path: Path) -> list[LinkEntry]:
    """
    Read catalog rows from a JSON file.

    Returns an empty list (with a warning) when the file does not exist.

    Raises
    ------
    CatalogError on unreadable / malformed JSON or undecodable rows.
    """
    path = Path(path)
    if not path.exists():
        log.warning("catalog file %s not found; using built-in entries only", path)
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogError(f"Cannot read catalog '{path}': {exc}") from exc
    return parse_entries(_rows(data, f"'{path}'"))


def fetch_catalog(url: str, client: httpx.Client | None = None) -> list[LinkEntry]:
    """
    Download catalog rows from *url*.

    Raises
    ------
    CatalogError on HTTP status errors, network errors or bad JSON.
    """
    http = client or httpx.Client(timeout=HTTP_TIMEOUT, follow_redirects=True)
    try:
        response = http.get(url)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as exc:
        raise CatalogError(
            f"Catalog server returned HTTP {exc.response.status_code}."
        ) from exc
    except httpx.RequestError as exc:
        raise CatalogError(f"Network error while fetching catalog: {exc}") from exc
    except ValueError as exc:
        raise CatalogError(f"Catalog at {url} is not valid JSON: {exc}") from exc
    finally:
        if client is None:
            http.close()
    return parse_entries(_rows(data, url))


def resolve_catalog(source: str | Path | None = None) -> list[LinkEntry]:
    """Load the catalog from *source*, ``$NODESWITCH_CATALOG`` or the bundled file."""
    source = source or CATALOG_SOURCE or CATALOG_JSON
    if isinstance(source, str) and source.startswith(("http://", "https://")):
        return fetch_catalog(source)
    return load_catalog_file(Path(source))


# ── Built-in entries ──────────────────────────────────────────────────────────


def create_custom(env: Mapping[str, str] | None = None) -> list[LinkEntry]:
    """Custom environment group, present only when ``$WS_URL`` is set."""
    env = os.environ if env is None else env
    ws_url = env.get(CUSTOM_ENV_VAR, "")
    if not ws_url:
        return []
    return [
        HeaderEntry(text="Custom environment"),
        NodeEntry(text=f"Custom {ws_url}", text_by=ws_url, value=ws_url, info=CUSTOM_ENV_VAR),
    ]


def create_dev() -> list[LinkEntry]:
    return [NodeEntry(text="Local Node", text_by="127.0.0.1:9944", value=DEFAULT_API_URL, info="local")]


def create_own(nodes: list[dict] | None = None) -> list[LinkEntry]:
    """One entry per node we operate ourselves."""
    nodes = OWN_NODES if nodes is None else nodes
    return [
        NodeEntry(text=node["name"], text_by=node["link"], value=node["link"], info="local")
        for node in nodes
    ]


# ── Custom endpoints ──────────────────────────────────────────────────────────


def load_custom_endpoints() -> list[str]:
    raw = storage.kv_get(CUSTOM_ENDPOINT_KEY) or []
    if not isinstance(raw, list):
        return []
    return [url for url in raw if isinstance(url, str) and url]


def add_custom_endpoint(url: str) -> list[str]:
    """
    Persist *url* as a custom endpoint; returns the updated list.

    Raises
    ------
    InvalidEndpointError when *url* fails the scheme/length check.
    """
    url = url.strip()
    if not is_valid_url(url):
        raise InvalidEndpointError(f"'{url}' is not a valid ws://, wss:// or light:// endpoint.")
    urls = load_custom_endpoints()
    if url not in urls:
        urls.append(url)
        storage.kv_set(CUSTOM_ENDPOINT_KEY, urls)
    return urls


def remove_custom_endpoint(url: str) -> list[str]:
    """Forget *url*; the storage key goes away with the last endpoint."""
    urls = [u for u in load_custom_endpoints() if u != url]
    if urls:
        storage.kv_set(CUSTOM_ENDPOINT_KEY, urls)
    else:
        storage.kv_delete(CUSTOM_ENDPOINT_KEY)
    return urls


def create_stored_custom() -> list[LinkEntry]:
    # Same text on every row: they merge into a single "Custom" network.
    return [
        NodeEntry(text="Custom", text_by=url, value=url, info="custom")
        for url in load_custom_endpoints()
    ]


# ── Assembly ──────────────────────────────────────────────────────────────────


def create_ws_endpoints(catalog: list[LinkEntry] | None = None, env: Mapping[str, str] | None = None) -> list[LinkEntry]:
    """Full ordered catalog handed to build_directory()."""
    if catalog is None:
        catalog = resolve_catalog()
    return [
        *create_custom(env),
        *catalog,
        HeaderEntry(text="Development", is_development=True, is_spaced=True),
        *create_dev(),
        *create_own(),
        *create_stored_custom(),
    ]
