from __future__ import annotations

import argparse
import dataclasses
import itertools
import logging
import sys
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from tqdm import tqdm

from .config import load_request
from .crossword import Crossword, SizeConstraint
from .errors import ConfigError
from .output import save_ipuz, write_json, write_text
from .search import CrosswordGenerator, GenerationRequest


def _apply_overrides(request: GenerationRequest, args: argparse.Namespace) -> GenerationRequest:
    compat = request.compatibility
    overrides = {
        name: True
        for name in ("side_by_side", "head_by_head", "side_by_head")
        if getattr(args, name)
    }
    if args.no_corner_by_corner:
        overrides["corner_by_corner"] = False
    if overrides:
        compat = dataclasses.replace(compat, **overrides)

    extra: List[SizeConstraint] = []
    if args.max_length is not None:
        extra.append(SizeConstraint.max_length(args.max_length))
    if args.max_height is not None:
        extra.append(SizeConstraint.max_height(args.max_height))
    if args.max_area is not None:
        extra.append(SizeConstraint.max_area(args.max_area))

    return GenerationRequest(request.words, compat, request.settings.with_constraints(*extra))


def _non_negative(value: str) -> int:
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError("must be >= 0")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Enumerate every crossword that interlocks a set of words.")
    parser.add_argument("input", type=Path, help="Word list (.txt/.tsv, one word per line) or .json request")
    parser.add_argument("-o", "--output", default="-", help="Output file (default: stdout)")
    parser.add_argument("--format", choices=("text", "json"), default="text", help="Output format")
    parser.add_argument("--ipuz-dir", type=Path, default=None, help="Also save every crossword as .ipuz here")
    parser.add_argument("--limit", type=_non_negative, default=None, help="Stop after this many crosswords")
    parser.add_argument("--engine", choices=("iterative", "recursive"), default="iterative", help="Search engine")
    parser.add_argument("--no-prune", action="store_true", help="Disable explored-shape pruning (slow)")

    parser.add_argument("--side-by-side", action="store_true", help="Allow parallel words on adjacent lines")
    parser.add_argument("--head-by-head", action="store_true", help="Allow parallel words end to end")
    parser.add_argument("--side-by-head", action="store_true", help="Allow a word end to touch a perpendicular word")
    parser.add_argument("--no-corner-by-corner", action="store_true", help="Forbid words touching at a corner")

    parser.add_argument("--max-length", type=_non_negative, default=None, help="Max grid width")
    parser.add_argument("--max-height", type=_non_negative, default=None, help="Max grid height")
    parser.add_argument("--max-area", type=_non_negative, default=None, help="Max grid area")

    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        request = load_request(args.input)
    except (ConfigError, OSError) as e:
        tqdm.write(f"Error reading {args.input}: {e}", file=sys.stderr)
        return 2

    request = _apply_overrides(request, args)
    if not request.words:
        tqdm.write(f"No valid words found in {args.input}", file=sys.stderr)

    generator = CrosswordGenerator(request, prune=not args.no_prune)
    results: Iterator[Crossword] = (
        generator.crossword_iter_rec() if args.engine == "recursive" else generator.crossword_iter()
    )
    if args.limit is not None:
        results = itertools.islice(results, args.limit)

    found: List[Crossword] = []
    for cw in tqdm(results, desc="Crosswords", unit="cw", leave=False):
        found.append(cw)

    if args.ipuz_dir is not None:
        try:
            args.ipuz_dir.mkdir(parents=True, exist_ok=True)
            for i, cw in enumerate(found, start=1):
                filename = str(args.ipuz_dir / f"{args.input.stem}_{i:04d}.ipuz")
                if save_ipuz(cw, filename, title=f"{args.input.stem.replace('_', ' ').title()} #{i}"):
                    tqdm.write(f"Saved {filename}", file=sys.stderr)
        except OSError as e:
            tqdm.write(f"Error writing ipuz files: {e}", file=sys.stderr)
            return 2

    writer = write_json if args.format == "json" else write_text
    try:
        if args.output == "-":
            writer(found, sys.stdout)
        else:
            with open(args.output, "w", encoding="utf-8", newline="\n") as f:
                writer(found, f)
            tqdm.write(f"Wrote {len(found)} crossword(s) to {args.output}", file=sys.stderr)
    except OSError as e:
        tqdm.write(f"Error writing {args.output}: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
