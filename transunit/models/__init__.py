"""Database models for the translation manager."""

from .file import File
from .trans_unit import TransUnit
from .translation import Translation

__all__ = ['File', 'TransUnit', 'Translation']
