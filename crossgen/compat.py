from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping

from .errors import ConfigError
from .geometry import Word


@dataclass(frozen=True)
class CompatibilitySettings:
    """Which kinds of contact are allowed between two placed words."""
    # parallel words one row/column apart, overlapping along their run
    side_by_side: bool = False
    # parallel words on the same line with no gap between them
    head_by_head: bool = False
    # the end of a word touching the flank of a perpendicular word
    side_by_head: bool = False
    # bounding boxes meeting at a single diagonal corner
    corner_by_corner: bool = True

    def are_words_compatible(self, first: Word, second: Word) -> bool:
        return are_compatible(first, second, self)

    def to_dict(self) -> Dict[str, bool]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CompatibilitySettings":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown compatibility settings: {', '.join(unknown)}")
        values: Dict[str, bool] = {}
        for key, value in data.items():
            if not isinstance(value, bool):
                raise ConfigError(f"Compatibility setting {key!r} must be true or false, got {value!r}")
            values[key] = value
        return cls(**values)


def are_compatible(first: Word, second: Word, settings: CompatibilitySettings) -> bool:
    """Can `first` and `second` coexist in one crossword under `settings`?"""
    first_bb = first.bounding_box()
    second_bb = second.bounding_box()

    if first_bb.corners_touch(second_bb) and not settings.corner_by_corner:
        return False

    if first.direction == second.direction:
        if first_bb.head_touches_head(second_bb) and not settings.head_by_head:
            return False
        if first_bb.side_touches_side(second_bb) and not settings.side_by_side:
            return False
        # parallel words may never overlap
        return not first_bb.intersects(second_bb)

    if first_bb.side_touches_head(second_bb) and not settings.side_by_head:
        return False

    if first_bb.intersects(second_bb):
        indices = first_bb.intersection_indices(second_bb)
        if indices is None:
            return False
        first_ind, second_ind = indices
        if not (0 <= first_ind < first.length and 0 <= second_ind < second.length):
            return False
        return first.text[first_ind] == second.text[second_ind]

    return True
