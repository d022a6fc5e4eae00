"""
endpoints/gate.py – Decide whether the switch action is available, and where it leads.
"""

from urllib.parse import quote, urlsplit, urlunsplit

from core.config import LIGHT_CLIENT_PREFIX


def can_switch(has_url_changed: bool, api_url: str, is_url_valid: bool) -> bool:
    """
    Return True when the switch action must be DISABLED.

    An unchanged url is never switchable.  light:// identifiers are not socket
    urls and skip the validity check.  Anything else needs ``is_url_valid``.
    """
    if not has_url_changed:
        return True
    if api_url.startswith(LIGHT_CLIENT_PREFIX):
        return False
    return not is_url_valid


def switch_url(base_url: str, api_url: str) -> str:
    """
    Reload target for a switch: *base_url* with its query replaced by
    ``rpc=<api_url>``, keeping the fragment.
    """
    parts = urlsplit(base_url)
    query = "rpc=" + quote(api_url, safe="!~*'()")
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))
