"""Shared utilities for the translation manager."""

from transunit.utils.auth import token_required
from transunit.utils.filters import parse_grid_filters

__all__ = [
    'token_required',
    'parse_grid_filters',
]
