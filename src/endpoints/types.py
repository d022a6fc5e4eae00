"""
endpoints/types.py – Data model for the endpoint catalog and directory.

Catalog rows are a tagged union: ``LinkEntry = HeaderEntry | NodeEntry``.
The directory built from them is ``list[Group]``; each Group holds Networks,
each Network holds Providers.  ``to_dict()`` on the directory types renders
the camelCase JSON shape served by the dashboard API.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from endpoints.exceptions import CatalogError


@dataclass(frozen=True)
class HeaderEntry:
    """
    Starts a new group in the catalog.

    Attributes
    ----------
    text           : Group label.
    is_development : Group is the non-production fallback target.
    is_spaced      : Rendered with extra spacing above it.
    """

    text: str
    is_development: bool = False
    is_spaced: bool = False


@dataclass(frozen=True)
class NodeEntry:
    """
    One candidate endpoint in the catalog.

    Attributes
    ----------
    text            : Network display name.
    text_by         : Provider display name.
    value           : Connection URL.
    is_child        : Nested under a parent network.
    genesis_hash    : Present when the network is a relay chain.
    text_relay      : Name of the relay this network parachains from.
    para_id         : Parachain id.
    is_unreachable  : Entry is skipped when building the directory.
    is_light_client : Connects through an embedded light client.
    ui              : Presentation hints, opaque here.
    info            : Free-form tag ("local", "WS_URL", "custom", …).
    """

    text: str
    text_by: str
    value: str
    is_child: bool = False
    genesis_hash: str | None = None
    text_relay: str | None = None
    para_id: int | None = None
    is_unreachable: bool = False
    is_light_client: bool = False
    ui: dict = field(default_factory=dict, compare=False)
    info: str | None = None


LinkEntry = HeaderEntry | NodeEntry


@dataclass
class Provider:
    name: str
    url: str
    is_light_client: bool = False

    def to_dict(self) -> dict:
        return {"name": self.name, "url": self.url, "isLightClient": self.is_light_client}


@dataclass
class Network:
    name: str
    name_relay: str | None = None
    is_child: bool = False
    is_relay: bool = False
    para_id: int | None = None
    providers: list[Provider] = field(default_factory=list)
    ui: dict = field(default_factory=dict)

    def has_url(self, url: str) -> bool:
        return any(p.url == url for p in self.providers)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "nameRelay": self.name_relay,
            "isChild": self.is_child,
            "isRelay": self.is_relay,
            "paraId": self.para_id,
            "providers": [p.to_dict() for p in self.providers],
            "ui": dict(self.ui),
        }


@dataclass
class Group:
    header: str
    is_development: bool = False
    is_spaced: bool = False
    networks: list[Network] = field(default_factory=list)

    def has_url(self, url: str) -> bool:
        return any(n.has_url(url) for n in self.networks)

    def to_dict(self) -> dict:
        return {
            "header": self.header,
            "isDevelopment": self.is_development,
            "isSpaced": self.is_spaced,
            "networks": [n.to_dict() for n in self.networks],
        }


@dataclass(frozen=True)
class SelectionState:
    """Currently highlighted endpoint and the flags derived from it."""

    api_url: str
    group_index: int
    has_url_changed: bool
    is_url_valid: bool

    def to_dict(self) -> dict:
        return {
            "apiUrl": self.api_url,
            "groupIndex": self.group_index,
            "hasUrlChanged": self.has_url_changed,
            "isUrlValid": self.is_url_valid,
        }


# ── JSON decoding ─────────────────────────────────────────────────────────────


def parse_entry(raw: dict) -> LinkEntry:
    """
    Decode one catalog row.

    Raises
    ------
    CatalogError when the row is not an object, lacks ``text`` (or, for node
    rows, ``value``), or carries a ``paraId``/``ui`` of the wrong type.
    """
    if not isinstance(raw, dict):
        raise CatalogError(f"Catalog row must be an object, got {type(raw).__name__}.")
    text = raw.get("text")
    if not isinstance(text, str) or not text:
        raise CatalogError(f"Catalog row without 'text': {raw!r}")

    if raw.get("isHeader"):
        return HeaderEntry(
            text=text,
            is_development=bool(raw.get("isDevelopment")),
            is_spaced=bool(raw.get("isSpaced")),
        )

    value = raw.get("value")
    if not isinstance(value, str) or not value:
        raise CatalogError(f"Catalog node '{text}' has no 'value' URL.")

    para_id = raw.get("paraId")
    if para_id is not None:
        try:
            para_id = int(para_id)
        except (TypeError, ValueError) as exc:
            raise CatalogError(f"Catalog node '{text}' has a non-integer 'paraId': {para_id!r}") from exc

    ui = raw.get("ui") or {}
    if not isinstance(ui, Mapping):
        raise CatalogError(f"Catalog node '{text}' has a non-object 'ui': {ui!r}")

    return NodeEntry(
        text=text,
        text_by=str(raw.get("textBy") or ""),
        value=value,
        is_child=bool(raw.get("isChild")),
        genesis_hash=raw.get("genesisHash") or None,
        text_relay=raw.get("textRelay") or None,
        para_id=para_id,
        is_unreachable=bool(raw.get("isUnreachable")),
        is_light_client=bool(raw.get("isLightClient")),
        ui=dict(ui),
        info=raw.get("info") or None,
    )


def parse_entries(rows: list) -> list[LinkEntry]:
    return [parse_entry(row) for row in rows]
