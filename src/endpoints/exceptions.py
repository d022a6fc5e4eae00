"""
endpoints/exceptions.py – Exception hierarchy for the endpoint picker.

All errors derive from EndpointsError so callers can catch broadly or
specifically depending on context.  Stale affinities, an unmatched URL and an
invalid URL scheme are states, not errors, and never raise.
"""


class EndpointsError(Exception):
    """Base class for all endpoint picker exceptions."""


class CatalogError(EndpointsError):
    """Raised when the catalog cannot be read, fetched or decoded."""


class MalformedCatalogError(CatalogError):
    """Raised when a node entry appears before any header entry."""


class InvalidEndpointError(EndpointsError):
    """Raised when a custom endpoint URL fails the scheme/length check."""


class SwitchBlockedError(EndpointsError):
    """
    Raised when a switch is applied while the gate disables it.

    Attributes
    ----------
    selection : The SelectionState that was rejected.
    """

    def __init__(self, selection) -> None:
        self.selection = selection
        if not selection.has_url_changed:
            reason = "already connected to this endpoint"
        else:
            reason = "not a valid ws://, wss:// or light:// endpoint"
        super().__init__(f"Cannot switch to '{selection.api_url}': {reason}.")
