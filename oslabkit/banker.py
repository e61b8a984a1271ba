"""Banker's algorithm: safety check and resource requests."""

from __future__ import annotations

import argparse
import enum
import sys
from dataclasses import dataclass
from typing import Sequence

from oslabkit.scheduling import _Tokens

_MENU = (
    "\n--- Banker's Algorithm Menu ---\n"
    "1. Safety Check\n2. Resource Request\n0. Exit\nEnter your choice: "
)


class RequestOutcome(enum.Enum):
    """What became of a resource request; the value is the report."""

    GRANTED = "Request granted. System remains in a safe state."
    EXCEEDS_CLAIM = "Error: Request exceeds maximum claim."
    MUST_WAIT = "Resources not available. Process must wait."
    UNSAFE = "Request denied. System would be in unsafe state."

    @property
    def granted(self) -> bool:
        return self is RequestOutcome.GRANTED


@dataclass
class BankerState:
    """Allocation and maximum claim per process, and free resources."""

    allocation: list[list[int]]
    maximum: list[list[int]]
    available: list[int]

    def __post_init__(self) -> None:
        self.allocation = [list(row) for row in self.allocation]
        self.maximum = [list(row) for row in self.maximum]
        self.available = list(self.available)
        if len(self.allocation) != len(self.maximum):
            raise ValueError("allocation and maximum need one row per process")
        width = len(self.available)
        for row in (*self.allocation, *self.maximum):
            if len(row) != width:
                raise ValueError(f"every row must have {width} resource columns")

    @property
    def processes(self) -> int:
        return len(self.allocation)

    @property
    def resources(self) -> int:
        return len(self.available)

    def need(self) -> list[list[int]]:
        """Remaining claim of each process."""
        return [
            [m - a for m, a in zip(max_row, alloc_row)]
            for max_row, alloc_row in zip(self.maximum, self.allocation)
        ]

    def safe_sequence(self) -> list[int] | None:
        """An order in which all processes can finish, or None if unsafe."""
        need = self.need()
        work = list(self.available)
        finished = [False] * self.processes
        sequence: list[int] = []
        while len(sequence) < self.processes:
            found = False
            for pid, done in enumerate(finished):
                if done or any(n > w for n, w in zip(need[pid], work)):
                    continue
                work = [w + a for w, a in zip(work, self.allocation[pid])]
                finished[pid] = True
                sequence.append(pid)
                found = True
            if not found:
                return None
        return sequence

    def is_safe(self) -> bool:
        return self.safe_sequence() is not None

    def request(self, pid: int, request: Sequence[int]) -> RequestOutcome:
        """Grant the request if it keeps the system safe; otherwise leave it."""
        if not 0 <= pid < self.processes:
            raise ValueError(f"process id must be in 0..{self.processes - 1}")
        request = list(request)
        if len(request) != self.resources:
            raise ValueError(f"request must have {self.resources} values")
        need = self.need()[pid]
        for wanted, remaining, free in zip(request, need, self.available):
            if wanted > remaining:
                return RequestOutcome.EXCEEDS_CLAIM
            if wanted > free:
                return RequestOutcome.MUST_WAIT
        saved_available = list(self.available)
        saved_allocation = list(self.allocation[pid])
        self.available = [f - r for f, r in zip(self.available, request)]
        self.allocation[pid] = [a + r for a, r in zip(self.allocation[pid], request)]
        if self.is_safe():
            return RequestOutcome.GRANTED
        self.available = saved_available
        self.allocation[pid] = saved_allocation
        return RequestOutcome.UNSAFE


def _read_state(tokens: _Tokens) -> BankerState:
    n = tokens.read_int("Enter number of processes: ")
    m = tokens.read_int("Enter number of resources: ")
    print("Enter Allocation Matrix:")
    allocation = [[tokens.read_int() for _ in range(m)] for _ in range(n)]
    print("Enter Maximum Matrix:")
    maximum = [[tokens.read_int() for _ in range(m)] for _ in range(n)]
    print("Enter Available Resources:")
    available = [tokens.read_int() for _ in range(m)]
    return BankerState(allocation, maximum, available)


def _report_safety(state: BankerState) -> None:
    sequence = state.safe_sequence()
    if sequence is None:
        print("System is NOT in a safe state.")
    else:
        print("System is in a safe state.")
        print("Safe Sequence: " + " ".join(f"P{pid}" for pid in sequence))


def _ask_request(tokens: _Tokens, state: BankerState, pid_prompt: str, req_prompt: str) -> None:
    pid = tokens.read_int(pid_prompt.format(last=state.processes - 1))
    sys.stdout.write(req_prompt.format(pid=pid))
    sys.stdout.flush()
    request = [tokens.read_int() for _ in range(state.resources)]
    print(state.request(pid, request).value)


def _menu(tokens: _Tokens, state: BankerState) -> None:
    while True:
        try:
            choice = tokens.read_int(_MENU)
        except EOFError:
            return
        if choice == 1:
            _report_safety(state)
        elif choice == 2:
            try:
                _ask_request(
                    tokens,
                    state,
                    "Enter process number (0 to {last}): ",
                    "Enter resources requested by P{pid}: ",
                )
            except ValueError as exc:
                print(f"error: {exc}")
        elif choice == 0:
            print("Exiting...")
            return
        else:
            print("Invalid choice.")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="oslabkit-banker", description="Run the banker's algorithm."
    )
    parser.add_argument(
        "mode", nargs="?", default="menu", choices=["menu", "safety", "request"]
    )
    args = parser.parse_args(argv)
    tokens = _Tokens(sys.stdin, sys.stdout)
    try:
        state = _read_state(tokens)
        if args.mode == "menu":
            _menu(tokens, state)
        elif args.mode == "safety":
            _report_safety(state)
        else:
            _ask_request(
                tokens,
                state,
                "Enter Process ID (0 to {last}): ",
                "Enter Request for Process P{pid}:\n",
            )
    except EOFError:
        print("error: unexpected end of input", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())