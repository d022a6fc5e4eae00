"""
endpoints — endpoint directory aggregation and selection state.

Flow::

    entries   = create_ws_endpoints()          # flat, ordered catalog
    groups    = build_directory(entries)       # group → network → providers
    selection = resolve(url, groups, applied)  # group index + url flags
    affinity  = load_affinities(groups)        # remembered provider per network
    disabled  = can_switch(selection.has_url_changed, url, selection.is_url_valid)
"""

from endpoints.affinity import load_affinities, record_affinity
from endpoints.catalog import create_ws_endpoints
from endpoints.directory import build_directory
from endpoints.gate import can_switch, switch_url
from endpoints.selection import change_group, find_group_index, is_valid_url, resolve
from endpoints.types import Group, HeaderEntry, LinkEntry, Network, NodeEntry, Provider, SelectionState

__all__ = [
    "Group", "HeaderEntry", "LinkEntry", "Network", "NodeEntry", "Provider", "SelectionState",
    "build_directory", "create_ws_endpoints",
    "resolve", "change_group", "find_group_index", "is_valid_url",
    "load_affinities", "record_affinity",
    "can_switch", "switch_url",
]
