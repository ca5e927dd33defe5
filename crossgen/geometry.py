from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

Coord = Tuple[int, int]  # (x, y)


class Direction(str, Enum):
    """Orientation of a placed word."""
    HORIZONTAL = "H"
    VERTICAL = "V"

    def opposite(self) -> "Direction":
        if self is Direction.HORIZONTAL:
            return Direction.VERTICAL
        return Direction.HORIZONTAL


@dataclass(frozen=True, order=True)
class Position:
    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class BoundingBox:
    """
    The 1-cell-thick rectangle a word occupies.

    Horizontal words have h == 1, vertical words have w == 1. A single letter
    (w == h == 1) counts as both orientations.
    """
    x: int
    y: int
    w: int
    h: int

    def same_orientation(self, other: "BoundingBox") -> bool:
        return (self.w == 1 and other.w == 1) or (self.h == 1 and other.h == 1)

    def _overlaps_x(self, other: "BoundingBox") -> bool:
        return self.x < other.x + other.w and self.x + self.w > other.x

    def _overlaps_y(self, other: "BoundingBox") -> bool:
        return self.y < other.y + other.h and self.y + self.h > other.y

    def intersects(self, other: "BoundingBox") -> bool:
        """Open-interval overlap on both axes; shared edges are not an intersection."""
        return self._overlaps_x(other) and self._overlaps_y(other)

    def side_touches_side(self, other: "BoundingBox") -> bool:
        if not self.same_orientation(other):
            return False
        if self.h == 1 and other.h == 1:
            return abs(self.y - other.y) == 1 and self._overlaps_x(other)
        return abs(self.x - other.x) == 1 and self._overlaps_y(other)

    def head_touches_head(self, other: "BoundingBox") -> bool:
        if not self.same_orientation(other):
            return False
        if self.h == 1 and other.h == 1:
            return self.y == other.y and (self.x + self.w == other.x or other.x + other.w == self.x)
        return self.x == other.x and (self.y + self.h == other.y or other.y + other.h == self.y)

    def side_touches_head(self, other: "BoundingBox") -> bool:
        """
        The end of one word touches the flank of a perpendicular word without crossing it.

        Exactly one of the four edge conditions may hold; boxes meeting on two
        edges at once only share a corner and are left to `corners_touch`.
        """
        if self.same_orientation(other):
            return False

        if self.h == 1:
            hor, ver = self, other
        else:
            hor, ver = other, self

        if not (
            hor.x + hor.w >= ver.x
            and hor.x <= ver.x + 1
            and hor.y + 1 >= ver.y
            and hor.y <= ver.y + ver.h
        ):
            return False

        edges = (
            hor.x + hor.w == ver.x,
            hor.x == ver.x + 1,
            hor.y + 1 == ver.y,
            hor.y == ver.y + ver.h,
        )
        return sum(edges) == 1

    def corners_touch(self, other: "BoundingBox") -> bool:
        return (
            (self.x == other.x + other.w and self.y == other.y + other.h)
            or (self.x + self.w == other.x and self.y == other.y + other.h)
            or (self.x + self.w == other.x and self.y + self.h == other.y)
            or (self.x == other.x + other.w and self.y + self.h == other.y)
        )

    def intersection_indices(self, other: "BoundingBox") -> Optional[Tuple[int, int]]:
        """(index into self, index into other) of the shared cell of two crossing boxes."""
        if not self.intersects(other) or self.same_orientation(other):
            return None
        if self.h == 1:
            return other.x - self.x, self.y - other.y
        return other.y - self.y, self.x - other.x


@dataclass(frozen=True, order=True)
class Word:
    """One placed word in the grid."""
    position: Position
    direction: Direction
    text: str

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def x(self) -> int:
        return self.position.x

    @property
    def y(self) -> int:
        return self.position.y

    def bounding_box(self) -> BoundingBox:
        if self.direction is Direction.HORIZONTAL:
            return BoundingBox(self.x, self.y, self.length, 1)
        return BoundingBox(self.x, self.y, 1, self.length)

    def cells(self) -> List[Tuple[Coord, str]]:
        if self.direction is Direction.HORIZONTAL:
            return [((self.x + i, self.y), ch) for i, ch in enumerate(self.text)]
        return [((self.x, self.y + i), ch) for i, ch in enumerate(self.text)]

    def translated(self, dx: int, dy: int) -> "Word":
        return Word(Position(self.x + dx, self.y + dy), self.direction, self.text)

    def __repr__(self) -> str:
        return f"Word({self.direction.name.title()}({self.x}, {self.y}), {self.text!r})"


def horizontal(x: int, y: int, text: str) -> Word:
    return Word(Position(x, y), Direction.HORIZONTAL, text)


def vertical(x: int, y: int, text: str) -> Word:
    return Word(Position(x, y), Direction.VERTICAL, text)
