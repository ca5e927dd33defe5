from __future__ import annotations

import functools
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Set, Tuple, Union

from .compat import CompatibilitySettings, are_compatible
from .errors import ConfigError
from .geometry import Direction, Position, Word
from .placement import candidates_for


class SizeLimit(str, Enum):
    MAX_LENGTH = "max_length"
    MAX_HEIGHT = "max_height"
    MAX_AREA = "max_area"
    NONE = "none"


@dataclass(frozen=True)
class SizeConstraint:
    """A cap on the overall grid width, height or area."""
    kind: SizeLimit = SizeLimit.NONE
    limit: int = 0

    @classmethod
    def max_length(cls, n: int) -> "SizeConstraint":
        return cls(SizeLimit.MAX_LENGTH, n)

    @classmethod
    def max_height(cls, n: int) -> "SizeConstraint":
        return cls(SizeLimit.MAX_HEIGHT, n)

    @classmethod
    def max_area(cls, n: int) -> "SizeConstraint":
        return cls(SizeLimit.MAX_AREA, n)

    def is_satisfied(self, cw: "Crossword") -> bool:
        if self.kind is SizeLimit.MAX_LENGTH:
            return cw.width() <= self.limit
        if self.kind is SizeLimit.MAX_HEIGHT:
            return cw.height() <= self.limit
        if self.kind is SizeLimit.MAX_AREA:
            return cw.area() <= self.limit
        return True

    def to_dict(self) -> Union[str, Dict[str, int]]:
        if self.kind is SizeLimit.NONE:
            return SizeLimit.NONE.value
        return {self.kind.value: self.limit}

    @classmethod
    def from_dict(cls, data: Union[str, Mapping[str, Any]]) -> "SizeConstraint":
        """Accepts "none" or a one-entry mapping such as {"max_length": 13}."""
        if isinstance(data, str):
            if data != SizeLimit.NONE.value:
                raise ConfigError(f"Unknown size constraint {data!r}")
            return cls()
        if not isinstance(data, Mapping) or len(data) != 1:
            raise ConfigError(f"Size constraint must be a single-entry mapping, got {data!r}")
        (key, value), = data.items()
        try:
            kind = SizeLimit(key)
        except ValueError:
            raise ConfigError(f"Unknown size constraint {key!r}") from None
        if kind is SizeLimit.NONE:
            return cls()
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigError(f"Size constraint {key!r} needs a non-negative integer, got {value!r}")
        return cls(kind, value)


@dataclass(frozen=True)
class CrosswordSettings:
    """Size constraints that must all hold for a crossword to be valid."""
    size_constraints: Tuple[SizeConstraint, ...] = field(default_factory=tuple)

    def is_valid(self, cw: "Crossword") -> bool:
        return all(c.is_satisfied(cw) for c in self.size_constraints)

    def with_constraints(self, *extra: SizeConstraint) -> "CrosswordSettings":
        return CrosswordSettings(self.size_constraints + tuple(extra))

    def to_dict(self) -> Dict[str, Any]:
        return {"size_constraints": [c.to_dict() for c in self.size_constraints]}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CrosswordSettings":
        unknown = sorted(set(data) - {"size_constraints"})
        if unknown:
            raise ConfigError(f"Unknown crossword settings: {', '.join(unknown)}")
        raw = data.get("size_constraints", [])
        if not isinstance(raw, list):
            raise ConfigError("size_constraints must be a list")
        return cls(tuple(SizeConstraint.from_dict(c) for c in raw))


@functools.total_ordering
class Crossword:
    """
    A normalized set of placed words, unique by text.

    The smallest x and the smallest y among the word positions (not their
    extents) are always 0. Equality, hashing and ordering are structural over
    the sorted words; a crossword must not be mutated while it sits in a set.
    """

    def __init__(self, words: Iterable[Word] = ()) -> None:
        self._words: Dict[str, Word] = {}
        for w in words:
            self._words.setdefault(w.text, w)
        self.normalize()

    def clone(self) -> "Crossword":
        new = Crossword.__new__(Crossword)
        new._words = dict(self._words)
        return new

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[Word]:
        return iter(self.words())

    def words(self) -> List[Word]:
        return sorted(self._words.values())

    def texts(self) -> Set[str]:
        return set(self._words)

    def key(self) -> Tuple[Word, ...]:
        return tuple(self.words())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Crossword):
            return NotImplemented
        return self._words == other._words

    def __lt__(self, other: "Crossword") -> bool:
        if not isinstance(other, Crossword):
            return NotImplemented
        return self.key() < other.key()

    def __hash__(self) -> int:
        return hash(self.key())

    def __repr__(self) -> str:
        return f"Crossword({self.words()!r})"

    def normalize(self) -> None:
        if not self._words:
            return
        minx = min(w.x for w in self._words.values())
        miny = min(w.y for w in self._words.values())
        if minx == 0 and miny == 0:
            return
        self._words = {t: w.translated(-minx, -miny) for t, w in self._words.items()}

    def add_word(self, word: Word) -> None:
        if word.text in self._words:
            return
        self._words[word.text] = word
        self.normalize()

    def remove_word(self, text: str) -> None:
        if self._words.pop(text, None) is not None:
            self.normalize()

    def find_word(self, text: str) -> Optional[Word]:
        return self._words.get(text)

    def contains_crossword(self, other: "Crossword") -> bool:
        """Is `other` a translated sub-arrangement of this crossword?"""
        if len(other) > len(self):
            return False
        offset: Optional[Tuple[int, int]] = None
        for other_word in other._words.values():
            cur = self._words.get(other_word.text)
            if cur is None or cur.direction != other_word.direction:
                return False
            delta = (cur.x - other_word.x, cur.y - other_word.y)
            if offset is None:
                offset = delta
            elif offset != delta:
                return False
        return True

    def can_be_added(self, word: Word, settings: CompatibilitySettings) -> bool:
        return all(are_compatible(existing, word, settings) for existing in self._words.values())

    def calculate_possible_placements(self, text: str, settings: CompatibilitySettings) -> Set[Word]:
        """Every valid way to put `text` into this crossword by crossing a placed word."""
        if not self._words:
            return {Word(Position(0, 0), Direction.HORIZONTAL, text)}

        out: Set[Word] = set()
        for existing in self._words.values():
            out.update(candidates_for(existing, text))
        return {w for w in out if self.can_be_added(w, settings)}

    def size(self) -> Tuple[int, int]:
        """(width, height) of the smallest rectangle holding every letter."""
        maxx = maxy = 0
        for w in self._words.values():
            maxx = max(maxx, w.x + 1)
            maxy = max(maxy, w.y + 1)
            if w.direction is Direction.HORIZONTAL:
                maxx = max(maxx, w.x + w.length)
            else:
                maxy = max(maxy, w.y + w.length)
        return maxx, maxy

    def width(self) -> int:
        return self.size()[0]

    def height(self) -> int:
        return self.size()[1]

    def area(self) -> int:
        w, h = self.size()
        return w * h

    def char_table(self) -> List[List[str]]:
        w, h = self.size()
        table = [[" "] * w for _ in range(h)]
        for word in self._words.values():
            for (x, y), ch in word.cells():
                table[y][x] = ch
        return table

    def render(self) -> str:
        """
        Bordered text form:

            -----------
            |h e l l o|
            |    o    |
            -----------
        """
        table = self.char_table()
        frame = "-" * (2 * self.width() + 1)
        lines = [frame]
        lines.extend("|" + " ".join(row) + "|" for row in table)
        lines.append(frame)
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "words": [
                {"x": w.x, "y": w.y, "direction": w.direction.value, "text": w.text}
                for w in self.words()
            ]
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Crossword":
        try:
            return cls(
                Word(Position(int(d["x"]), int(d["y"])), Direction(d["direction"]), str(d["text"]))
                for d in data["words"]
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Malformed crossword description: {e}") from e
