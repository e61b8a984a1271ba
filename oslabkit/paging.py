"""Page replacement simulations: FIFO, LRU and optimal."""

from __future__ import annotations

import argparse
import itertools
import sys
from dataclasses import dataclass
from typing import Callable, Sequence

from oslabkit.scheduling import _Tokens

FIFO_TITLE = "FIFO Page Replacement"
LRU_TITLE = "LRU Page Replacement"
OPTIMAL_TITLE = "Optimal Page Replacement"

_MENU = (
    "\nPage Replacement Algorithms\n"
    "1. FIFO\n2. LRU\n3. Optimal\n0. Exit\nEnter your choice: "
)

Frames = tuple[int | None, ...]
_Chooser = Callable[[list[int | None], int], int]


@dataclass(frozen=True)
class PagingResult:
    """The frame contents after each reference and the number of faults.

    Each step is a pair of the referenced page and the frames after it was
    handled; an empty frame is ``None``.
    """

    title: str
    frame_count: int
    steps: tuple[tuple[int, Frames], ...]
    faults: int


def _simulate(
    title: str, pages: Sequence[int], frame_count: int, choose: _Chooser
) -> PagingResult:
    frames: list[int | None] = [None] * frame_count
    steps = []
    faults = 0
    for i, page in enumerate(pages):
        if page not in frames:
            frames[choose(frames, i)] = page
            faults += 1
        steps.append((page, tuple(frames)))
    return PagingResult(title, frame_count, tuple(steps), faults)


def _check_frames(frame_count: int) -> None:
    if frame_count <= 0:
        raise ValueError("number of frames must be positive")


def fifo(pages: Sequence[int], frame_count: int) -> PagingResult:
    """Replace the frame that was filled longest ago."""
    _check_frames(frame_count)
    victims = itertools.cycle(range(frame_count))
    return _simulate(FIFO_TITLE, list(pages), frame_count, lambda frames, i: next(victims))


def _last_use(history: list[int], frame: int | None) -> int | None:
    if frame is None:
        return None
    try:
        return len(history) - 1 - history[::-1].index(frame)
    except ValueError:
        return None


def lru(pages: Sequence[int], frame_count: int) -> PagingResult:
    """Replace the frame whose page was used least recently.

    Empty frames are filled first, leftmost first.
    """
    _check_frames(frame_count)
    refs = list(pages)

    def choose(frames: list[int | None], i: int) -> int:
        history = refs[:i]
        victim, oldest = -1, i
        for j, frame in enumerate(frames):
            last = _last_use(history, frame)
            if last is None:
                return j
            if last < oldest:
                victim, oldest = j, last
        return victim

    return _simulate(LRU_TITLE, refs, frame_count, choose)


def _next_use(pages: list[int], frame: int | None, start: int) -> int | None:
    if frame is None:
        return None
    try:
        return pages.index(frame, start)
    except ValueError:
        return None


def optimal(pages: Sequence[int], frame_count: int) -> PagingResult:
    """Replace the frame whose page is next needed farthest in the future.

    A frame that is empty or never needed again is taken at once.
    """
    _check_frames(frame_count)
    refs = list(pages)

    def choose(frames: list[int | None], i: int) -> int:
        victim, farthest = -1, i
        for j, frame in enumerate(frames):
            upcoming = _next_use(refs, frame, i + 1)
            if upcoming is None:
                return j
            if upcoming > farthest:
                victim, farthest = j, upcoming
        return max(victim, 0)

    return _simulate(OPTIMAL_TITLE, refs, frame_count, choose)


def _render_frames(frames: Frames, blank: bool) -> str:
    if blank:
        return "".join("_ " if f is None else f"{f} " for f in frames)
    return " ".join(str(-1 if f is None else f) for f in frames)


def format_result(result: PagingResult, blank: bool = False) -> str:
    """Render a simulation, one line per reference.

    With ``blank`` empty frames show as ``_``; otherwise as ``-1``.
    """
    lines = [f"--- {result.title} ---"]
    lines += [
        f"Page {page} => [{_render_frames(frames, blank)}]"
        for page, frames in result.steps
    ]
    lines.append(f"Total Page Faults: {result.faults}")
    return "\n".join(lines)


_ALGORITHMS = {"fifo": fifo, "lru": lru, "optimal": optimal}


def _read_input(tokens: _Tokens) -> tuple[list[int], int]:
    count = tokens.read_int("Enter number of pages: ")
    print("Enter reference string:")
    pages = [tokens.read_int() for _ in range(count)]
    frame_count = tokens.read_int("Enter number of frames: ")
    return pages, frame_count


def _show(result: PagingResult, blank: bool) -> None:
    print()
    print(format_result(result, blank))


def _menu(tokens: _Tokens) -> None:
    pages, frame_count = _read_input(tokens)
    choices = {1: fifo, 2: lru, 3: optimal}
    while True:
        try:
            choice = tokens.read_int(_MENU)
        except EOFError:
            return
        if choice == 0:
            print("Exiting...")
            return
        algorithm = choices.get(choice)
        if algorithm is None:
            print("Invalid Choice!")
        else:
            _show(algorithm(pages, frame_count), blank=True)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="oslabkit-paging", description="Simulate page replacement algorithms."
    )
    parser.add_argument(
        "algorithm", nargs="?", default="menu", choices=["menu", *_ALGORITHMS]
    )
    args = parser.parse_args(argv)
    tokens = _Tokens(sys.stdin, sys.stdout)
    try:
        if args.algorithm == "menu":
            _menu(tokens)
        else:
            pages, frame_count = _read_input(tokens)
            _show(_ALGORITHMS[args.algorithm](pages, frame_count), blank=False)
    except EOFError:
        print("error: unexpected end of input", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())