"""
Exhaustive enumeration of crossword arrangements.

Both engines walk the same depth-first tree: pick a remaining word (in
lexicographic order), try every valid placement of it (in structural order)
on one shared crossword, descend, then undo. Subtrees whose crossword already
contains a fully explored shape are skipped, since every completion of such a
shape has been produced already.

`iter_crosswords_recursive` is a recursive generator. `CrosswordIterator`
keeps the traversal on an explicit stack of frames so that each `next()`
resumes where the previous result was produced, without deep recursion.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple

from .compat import CompatibilitySettings
from .crossword import Crossword, CrosswordSettings
from .geometry import Word

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationRequest:
    words: FrozenSet[str]
    compatibility: CompatibilitySettings = field(default_factory=CompatibilitySettings)
    settings: CrosswordSettings = field(default_factory=CrosswordSettings)

    @classmethod
    def of(
        cls,
        words: Iterable[str],
        compatibility: Optional[CompatibilitySettings] = None,
        settings: Optional[CrosswordSettings] = None,
    ) -> "GenerationRequest":
        return cls(
            frozenset(words),
            compatibility if compatibility is not None else CompatibilitySettings(),
            settings if settings is not None else CrosswordSettings(),
        )

    def sorted_words(self) -> Tuple[str, ...]:
        return tuple(sorted(self.words))


class _SearchState:
    """Shared crossword plus the explored-base and emitted bookkeeping of one traversal."""

    def __init__(self, request: GenerationRequest, prune: bool) -> None:
        self.request = request
        self.prune = prune
        self.crossword = Crossword()
        self.explored: Set[Crossword] = set()
        self.emitted: Set[Crossword] = set()

    def placements(self, text: str) -> List[Word]:
        return sorted(self.crossword.calculate_possible_placements(text, self.request.compatibility))

    def is_abandoned(self) -> bool:
        """Size limits broken, or an equivalent shape was already explored."""
        if not self.request.settings.is_valid(self.crossword):
            return True
        if self.prune and any(self.crossword.contains_crossword(base) for base in self.explored):
            return True
        return False

    def record_explored(self) -> None:
        """The subtree under the current crossword is finished; keep it as a base."""
        if not self.prune:
            return
        current = self.crossword
        self.explored = {base for base in self.explored if not base.contains_crossword(current)}
        self.explored.add(current.clone())

    def emit(self) -> Optional[Crossword]:
        """A clone of the current (complete) crossword, or None if it was produced before."""
        if not self.crossword or self.crossword in self.emitted:
            return None
        result = self.crossword.clone()
        self.emitted.add(result)
        logger.debug("found crossword #%d (%d explored bases)", len(self.emitted), len(self.explored))
        return result


def _explore(state: _SearchState, remaining: Tuple[str, ...]) -> Iterator[Crossword]:
    if state.is_abandoned():
        return

    if not remaining:
        result = state.emit()
        if result is not None:
            yield result
        return

    cw = state.crossword
    for text in remaining:
        rest = tuple(w for w in remaining if w != text)
        for step in state.placements(text):
            cw.add_word(step)
            try:
                yield from _explore(state, rest)
                state.record_explored()
            finally:
                cw.remove_word(step.text)


def iter_crosswords_recursive(request: GenerationRequest, *, prune: bool = True) -> Iterator[Crossword]:
    """Lazily yield every complete crossword for `request` (recursive engine)."""
    state = _SearchState(request, prune)
    yield from _explore(state, request.sorted_words())


@dataclass
class _Frame:
    """One level of the traversal: which word and which placement is being tried."""
    remaining: Tuple[str, ...]
    words: Optional[Iterator[str]] = None
    child_remaining: Tuple[str, ...] = ()
    steps: Iterator[Word] = field(default_factory=lambda: iter(()))
    step: Optional[Word] = None


class CrosswordIterator:
    """
    Resumable depth-first enumeration over an explicit frame stack.

    Each frame corresponds to one recursion level of the recursive engine.
    When a complete crossword is found its frame is left on the stack; the
    next call to `__next__` pops it and carries on with the next placement.
    """

    def __init__(self, request: GenerationRequest, *, prune: bool = True) -> None:
        self._state = _SearchState(request, prune)
        self._stack: List[_Frame] = [_Frame(remaining=request.sorted_words())]
        self._started = False
        self._ended = False

    def __iter__(self) -> "CrosswordIterator":
        return self

    @property
    def depth(self) -> int:
        return len(self._stack)

    def _advance_word(self, frame: _Frame) -> bool:
        """Move `frame` to its next placement, switching words as needed."""
        if frame.words is None:
            return False
        while frame.step is None:
            text = next(frame.words, None)
            if text is None:
                return False
            frame.child_remaining = tuple(w for w in frame.remaining if w != text)
            frame.steps = iter(self._state.placements(text))
            frame.step = next(frame.steps, None)
        return True

    def _finish_step(self, frame: _Frame) -> None:
        """The child of `frame.step` is done: record it, undo the step, move on."""
        assert frame.step is not None
        self._state.record_explored()
        self._state.crossword.remove_word(frame.step.text)
        frame.step = next(frame.steps, None)

    def __next__(self) -> Crossword:
        if self._ended:
            raise StopIteration

        if not self._started:
            self._started = True
            root = self._stack[-1]
            if not self._state.is_abandoned():
                root.words = iter(root.remaining)
        else:
            # resume below the frame that produced the previous result
            self._stack.pop()
            self._finish_step(self._stack[-1])

        cw = self._state.crossword
        while True:
            frame = self._stack[-1]
            if frame.step is None and not self._advance_word(frame):
                self._stack.pop()
                if not self._stack:
                    self._ended = True
                    raise StopIteration
                self._finish_step(self._stack[-1])
                continue

            assert frame.step is not None
            cw.add_word(frame.step)
            child = _Frame(remaining=frame.child_remaining)
            self._stack.append(child)

            if self._state.is_abandoned():
                continue

            if child.remaining:
                child.words = iter(child.remaining)
                continue

            result = self._state.emit()
            if result is not None:
                return result


@dataclass
class CrosswordGenerator:
    """Entry point: a word set plus the settings to lay it out with."""
    request: GenerationRequest
    prune: bool = True

    @classmethod
    def from_words(
        cls,
        words: Iterable[str],
        compatibility: Optional[CompatibilitySettings] = None,
        settings: Optional[CrosswordSettings] = None,
    ) -> "CrosswordGenerator":
        return cls(GenerationRequest.of(words, compatibility, settings))

    def crossword_iter(self) -> CrosswordIterator:
        return CrosswordIterator(self.request, prune=self.prune)

    def crossword_iter_rec(self) -> Iterator[Crossword]:
        return iter_crosswords_recursive(self.request, prune=self.prune)

    def generate_crosswords(self) -> Set[Crossword]:
        """Every complete crossword, computed eagerly."""
        results = set(self.crossword_iter())
        logger.info("generated %d crossword(s) from %d word(s)", len(results), len(self.request.words))
        return results
