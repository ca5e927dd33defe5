from __future__ import annotations

from typing import Dict, List, Set, Tuple

from .geometry import Direction, Position, Word


def letter_indices(text: str) -> Dict[str, Tuple[int, ...]]:
    """letter -> indices where it occurs in `text`."""
    idxs: Dict[str, List[int]] = {}
    for i, ch in enumerate(text):
        idxs.setdefault(ch, []).append(i)
    return {ch: tuple(v) for ch, v in idxs.items()}


def candidates_for(existing: Word, new_text: str) -> Set[Word]:
    """
    Every placement of `new_text` crossing `existing` at a shared letter.

    Candidates run perpendicular to `existing`; cell `j` of `existing` lands
    on cell `i` of the candidate for every pair of matching occurrences.
    Nothing is checked against the rest of the crossword.
    """
    direction = existing.direction.opposite()
    existing_idxs = letter_indices(existing.text)
    out: Set[Word] = set()

    for ch, new_idxs in letter_indices(new_text).items():
        for j in existing_idxs.get(ch, ()):
            for i in new_idxs:
                if existing.direction is Direction.HORIZONTAL:
                    pos = Position(existing.x + j, existing.y - i)
                else:
                    pos = Position(existing.x - i, existing.y + j)
                out.add(Word(pos, direction, new_text))

    return out
