"""Enumerate every interlocking crossword arrangement of a word set."""

from .compat import CompatibilitySettings, are_compatible
from .crossword import Crossword, CrosswordSettings, SizeConstraint, SizeLimit
from .errors import ConfigError
from .geometry import BoundingBox, Direction, Position, Word, horizontal, vertical
from .placement import candidates_for
from .search import CrosswordGenerator, CrosswordIterator, GenerationRequest, iter_crosswords_recursive

__all__ = [
    "BoundingBox",
    "CompatibilitySettings",
    "ConfigError",
    "Crossword",
    "CrosswordGenerator",
    "CrosswordIterator",
    "CrosswordSettings",
    "Direction",
    "GenerationRequest",
    "Position",
    "SizeConstraint",
    "SizeLimit",
    "Word",
    "are_compatible",
    "candidates_for",
    "horizontal",
    "iter_crosswords_recursive",
    "vertical",
]
