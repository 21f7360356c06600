"""Debug mode management for qnmin.

When debug mode is on, the solvers check their invariants (bracket ordering
and values, symmetry of the inverse-Hessian approximation) after every step.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

_DEBUG_ENV_VAR = "QNMIN_DEBUG"
_TRUTHY = ("1", "true", "yes", "on")

_debug_enabled: bool = os.getenv(_DEBUG_ENV_VAR, "0").lower() in _TRUTHY


def is_debug_enabled() -> bool:
    """
    Return whether invariant checking is currently enabled.

    The initial value comes from the QNMIN_DEBUG environment variable.
    """
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """Globally enable or disable invariant checking."""
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Temporarily enable or disable debug mode.

    Parameters
    ----------
    enabled:
        Debug state inside the block. The previous state is restored on
        exit, including when the block raises.

    Example
    -------
    >>> with debug_context(True):
    ...     pass
    """
    global _debug_enabled
    previous = _debug_enabled
    _debug_enabled = bool(enabled)
    try:
        yield
    finally:
        _debug_enabled = previous
