"""Writers for generated crosswords: bordered text, JSON and ipuz."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Optional, TextIO, Tuple

from .crossword import Crossword
from .geometry import Direction, Word

logger = logging.getLogger(__name__)


def summary_line(count: int) -> str:
    return f"{count} crossword{'' if count == 1 else 's'} generated"


def write_text(crosswords: Iterable[Crossword], stream: TextIO) -> int:
    """Write each rendered crossword followed by a blank line, then a summary count."""
    count = 0
    for cw in crosswords:
        stream.write(cw.render())
        stream.write("\n")
        count += 1
    stream.write(summary_line(count) + "\n")
    return count


def write_json(crosswords: Iterable[Crossword], stream: TextIO) -> int:
    items = [cw.to_dict() for cw in crosswords]
    json.dump({"count": len(items), "crosswords": items}, stream, indent=2)
    stream.write("\n")
    return len(items)


def ipuz_document(
    cw: Crossword,
    title: str = "Crossword",
    clues_map: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """Build an ipuz (JSON) crossword for one arrangement; every word gets a numbered clue."""
    clues_map = clues_map or {}
    w, h = cw.size()
    table = cw.char_table()

    puzzle_grid: List[List[Any]] = [[0 if ch != " " else "#" for ch in row] for row in table]
    solution_grid: List[List[Any]] = [[ch if ch != " " else "#" for ch in row] for row in table]
    clues: Dict[str, List[List[Any]]] = {"Across": [], "Down": []}

    # Number word starts in reading order, sharing a number when an across and a down start together.
    starts: Dict[Tuple[int, int], List[Word]] = {}
    for word in cw.words():
        starts.setdefault((word.y, word.x), []).append(word)

    number = 1
    for (y, x) in sorted(starts):
        puzzle_grid[y][x] = number
        for word in sorted(starts[(y, x)], key=lambda wd: wd.direction.value):
            hint = clues_map.get(word.text, f"Clue for {word.text}")
            heading = "Across" if word.direction is Direction.HORIZONTAL else "Down"
            clues[heading].append([number, hint])
        number += 1

    return {
        "version": "http://ipuz.org/v2",
        "kind": ["http://ipuz.org/crossword#1"],
        "dimensions": {"width": w, "height": h},
        "puzzle": puzzle_grid,
        "solution": solution_grid,
        "clues": clues,
        "title": title,
        "origin": "Generated by crossgen",
    }


def save_ipuz(
    cw: Crossword,
    filename: str,
    title: str = "Crossword",
    clues_map: Optional[Dict[str, str]] = None,
) -> bool:
    """Save one crossword to an .ipuz file. Returns False if there was nothing to save."""
    if not cw:
        logger.warning("Crossword empty, skipping ipuz save of %s", filename)
        return False
    with open(filename, "w", encoding="utf-8") as f:
        json.dump(ipuz_document(cw, title=title, clues_map=clues_map), f, indent=2)
    return True
