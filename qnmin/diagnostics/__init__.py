"""Diagnostics and debugging utilities for qnmin."""

from .core import assert_bracketed, assert_finite, assert_symmetric, is_symmetric
from .debug_mode import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "assert_bracketed",
    "assert_finite",
    "assert_symmetric",
    "is_symmetric",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
