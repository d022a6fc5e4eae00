# core/logger.py
"""Project logger.

Exposes:
  LOGGER        — the ``nodeswitch`` logger; modules use ``LOGGER.getChild``
  set_verbose() — switch between WARNING and DEBUG output
"""

import logging
import sys

from core.config import DEBUG

LOGGER = logging.getLogger("nodeswitch")
LOGGER.setLevel(logging.DEBUG if DEBUG else logging.WARNING)

_handler = logging.StreamHandler(sys.stderr)
_handler.setFormatter(logging.Formatter("%(asctime)s %(name)s [%(process)d] %(levelname)-5s %(message)s"))
LOGGER.addHandler(_handler)


def set_verbose(verbose: bool) -> None:
    """Raise LOGGER to DEBUG when verbose, otherwise back to WARNING."""
    LOGGER.setLevel(logging.DEBUG if verbose else logging.WARNING)
