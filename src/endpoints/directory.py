"""
endpoints/directory.py – Fold the flat catalog into a group → network → provider tree.
"""

from __future__ import annotations

from collections.abc import Iterable

from core.logger import LOGGER
from endpoints.exceptions import MalformedCatalogError
from endpoints.types import Group, HeaderEntry, LinkEntry, Network, NodeEntry, Provider

log = LOGGER.getChild("directory")


def build_directory(entries: Iterable[LinkEntry]) -> list[Group]:
    """
    Build the endpoint directory from catalog rows, preserving catalog order.

    A node whose ``text`` equals the name of the network appended last in the
    current group becomes another provider of that network.  Only the last
    network is considered, so same-named networks separated by another name
    stay distinct.  Unreachable nodes are left out and do not affect merging.

    Raises
    ------
    MalformedCatalogError if a node entry appears before the first header.
    """
    groups: list[Group] = []
    group_idx = -1
    network_idx = -1

    for position, entry in enumerate(entries):
        if isinstance(entry, HeaderEntry):
            groups.append(Group(header=entry.text, is_development=entry.is_development, is_spaced=entry.is_spaced))
            group_idx = len(groups) - 1
            network_idx = -1
            continue

        if group_idx < 0:
            raise MalformedCatalogError(
                f"Catalog entry #{position} ('{entry.text}') appears before any header."
            )
        if entry.is_unreachable:
            continue

        networks = groups[group_idx].networks
        if network_idx >= 0 and networks[network_idx].name == entry.text:
            _add_provider(networks[network_idx], entry)
        else:
            networks.append(_new_network(entry))
            network_idx = len(networks) - 1

    log.debug(
        "directory built: %d groups, %d networks",
        len(groups),
        sum(len(g.networks) for g in groups),
    )
    return groups


def _provider(entry: NodeEntry) -> Provider:
    return Provider(name=entry.text_by, url=entry.value, is_light_client=entry.is_light_client)


def _add_provider(network: Network, entry: NodeEntry) -> None:
    # provider urls stay unique within a network, whatever the catalog repeats
    if network.has_url(entry.value):
        log.warning("duplicate provider %s for network %r ignored", entry.value, network.name)
        return
    network.providers.append(_provider(entry))


def _new_network(entry: NodeEntry) -> Network:
    return Network(
        name=entry.text,
        name_relay=entry.text_relay,
        is_child=entry.is_child,
        is_relay=entry.genesis_hash is not None,
        para_id=entry.para_id,
        providers=[_provider(entry)],
        ui=dict(entry.ui),
    )


def find_network(groups: list[Group], name: str) -> Network | None:
    """Return the first network called *name*, or None."""
    for group in groups:
        for network in group.networks:
            if network.name == name:
                return network
    return None


def has_pair(groups: list[Group], network: str, url: str) -> bool:
    """True when some network named *network* offers a provider at *url*."""
    return any(
        n.name == network and n.has_url(url)
        for g in groups
        for n in g.networks
    )
