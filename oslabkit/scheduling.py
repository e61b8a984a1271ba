"""CPU scheduling simulations: FCFS, preemptive SJF, priority and round robin."""

from __future__ import annotations

import argparse
import math
import sys
from dataclasses import dataclass
from typing import Callable, Iterable, TextIO

FCFS_TITLE = "First Come First Serve (FCFS)"
SJF_TITLE = "Shortest Job First (Preemptive)"
PRIORITY_TITLE = "Priority Scheduling (Non-Preemptive)"
ROUND_ROBIN_TITLE = "Round Robin (Preemptive)"

_MENU = (
    "\nCPU Scheduling Algorithms:\n"
    "1. FCFS\n2. SJF (Preemptive)\n3. Priority (Non-Preemptive)\n"
    "4. Round Robin\n0. Exit\nEnter choice: "
)


@dataclass(frozen=True)
class ProcessSpec:
    """A process as given to a scheduler."""

    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0


@dataclass(frozen=True)
class ScheduledProcess:
    """A process with the times a scheduler assigned to it.

    The timing fields are ``None`` for a process the scheduler never ran.
    """

    pid: int
    arrival_time: int
    burst_time: int
    priority: int
    completion_time: int | None
    turnaround_time: int | None
    waiting_time: int | None

    @property
    def finished(self) -> bool:
        return self.completion_time is not None


@dataclass(frozen=True)
class Schedule:
    """The outcome of one scheduling run, in the order it is reported."""

    title: str
    processes: tuple[ScheduledProcess, ...]
    show_priority: bool = False

    def _average(self, field: Callable[[ScheduledProcess], int | None]) -> float:
        if not self.processes:
            return math.nan
        values = (field(p) for p in self.processes)
        return sum(v for v in values if v is not None) / len(self.processes)

    def average_turnaround(self) -> float:
        """Mean turnaround time over all processes."""
        return self._average(lambda p: p.turnaround_time)

    def average_waiting(self) -> float:
        """Mean waiting time over all processes."""
        return self._average(lambda p: p.waiting_time)


def _scheduled(spec: ProcessSpec, completion: int | None) -> ScheduledProcess:
    if completion is None:
        turnaround = waiting = None
    else:
        turnaround = completion - spec.arrival_time
        waiting = turnaround - spec.burst_time
    return ScheduledProcess(
        pid=spec.pid,
        arrival_time=spec.arrival_time,
        burst_time=spec.burst_time,
        priority=spec.priority,
        completion_time=completion,
        turnaround_time=turnaround,
        waiting_time=waiting,
    )


def fcfs(processes: Iterable[ProcessSpec]) -> Schedule:
    """First come, first served; the result is ordered by arrival time."""
    time = 0
    result = []
    for spec in sorted(processes, key=lambda p: p.arrival_time):
        time = max(time, spec.arrival_time)
        time += spec.burst_time
        result.append(_scheduled(spec, time))
    return Schedule(FCFS_TITLE, tuple(result))


def sjf_preemptive(processes: Iterable[ProcessSpec]) -> Schedule:
    """Shortest remaining time first, one time unit at a time."""
    specs = list(processes)
    for spec in specs:
        if spec.burst_time <= 0:
            raise ValueError(f"process {spec.pid} has a non-positive burst time")
    remaining = [spec.burst_time for spec in specs]
    completion: list[int | None] = [None] * len(specs)
    left = len(specs)
    time = 0
    while left:
        ready = [
            i
            for i, spec in enumerate(specs)
            if spec.arrival_time <= time and remaining[i] > 0
        ]
        if not ready:
            time = min(s.arrival_time for i, s in enumerate(specs) if remaining[i] > 0)
            continue
        chosen = min(ready, key=remaining.__getitem__)
        remaining[chosen] -= 1
        time += 1
        if remaining[chosen] == 0:
            completion[chosen] = time
            left -= 1
    return Schedule(
        SJF_TITLE,
        tuple(_scheduled(spec, done) for spec, done in zip(specs, completion)),
    )


def priority_nonpreemptive(processes: Iterable[ProcessSpec]) -> Schedule:
    """Run the arrived process with the lowest priority number to completion."""
    specs = list(processes)
    pending = dict(enumerate(specs))
    completion: list[int | None] = [None] * len(specs)
    time = 0
    while pending:
        ready = [i for i, spec in pending.items() if spec.arrival_time <= time]
        if not ready:
            time = min(spec.arrival_time for spec in pending.values())
            continue
        chosen = min(ready, key=lambda i: pending[i].priority)
        time += pending.pop(chosen).burst_time
        completion[chosen] = time
    return Schedule(
        PRIORITY_TITLE,
        tuple(_scheduled(spec, done) for spec, done in zip(specs, completion)),
        show_priority=True,
    )


def round_robin(processes: Iterable[ProcessSpec], quantum: int) -> Schedule:
    """Round robin in input order.

    Scheduling stops after a full pass in which no arrived process had work
    left; processes that had not arrived by then are left unscheduled.
    """
    if quantum <= 0:
        raise ValueError("time quantum must be positive")
    specs = list(processes)
    remaining = [spec.burst_time for spec in specs]
    completion: list[int | None] = [None] * len(specs)
    time = 0
    while True:
        progressed = False
        for i, spec in enumerate(specs):
            if remaining[i] > 0 and spec.arrival_time <= time:
                progressed = True
                run = min(quantum, remaining[i])
                time += run
                remaining[i] -= run
                if remaining[i] == 0:
                    completion[i] = time
        if not progressed:
            break
    return Schedule(
        ROUND_ROBIN_TITLE,
        tuple(_scheduled(spec, done) for spec, done in zip(specs, completion)),
    )


def format_schedule(schedule: Schedule) -> str:
    """Render a schedule as a tab-separated table with averages."""
    columns = ["PID", "AT", "BT"]
    if schedule.show_priority:
        columns.append("PR")
    columns += ["CT", "TAT", "WT"]
    lines = [f"--- {schedule.title} ---", "\t".join(columns)]
    for p in schedule.processes:
        cells = [p.pid, p.arrival_time, p.burst_time]
        if schedule.show_priority:
            cells.append(p.priority)
        cells += [p.completion_time, p.turnaround_time, p.waiting_time]
        lines.append("\t".join("-" if c is None else str(c) for c in cells))
    lines.append(
        f"Avg TAT: {schedule.average_turnaround():.2f}, "
        f"Avg WT: {schedule.average_waiting():.2f}"
    )
    return "\n".join(lines)


class _Tokens:
    """Whitespace-separated integer reader with prompts."""

    def __init__(self, stream: TextIO, out: TextIO) -> None:
        self._stream = stream
        self._out = out
        self._pending: list[str] = []

    def read_int(self, prompt: str = "") -> int:
        if prompt:
            self._out.write(prompt)
            self._out.flush()
        while not self._pending:
            line = self._stream.readline()
            if not line:
                raise EOFError
            self._pending = line.split()
        token = self._pending.pop(0)
        try:
            return int(token)
        except ValueError:
            raise ValueError(f"expected an integer, got {token!r}") from None


def _read_processes(tokens: _Tokens, with_priority: bool) -> list[ProcessSpec]:
    count = tokens.read_int("Enter number of processes: ")
    specs = []
    for pid in range(1, count + 1):
        arrival = tokens.read_int(f"Process {pid} Arrival Time: ")
        burst = tokens.read_int(f"Process {pid} Burst Time: ")
        priority = tokens.read_int(f"Process {pid} Priority: ") if with_priority else 0
        specs.append(ProcessSpec(pid, arrival, burst, priority))
    return specs


def _show(schedule: Schedule) -> None:
    print()
    print(format_schedule(schedule))


def _menu(tokens: _Tokens) -> None:
    specs = _read_processes(tokens, with_priority=True)
    while True:
        try:
            choice = tokens.read_int(_MENU)
        except EOFError:
            return
        if choice == 1:
            _show(fcfs(specs))
        elif choice == 2:
            _show(sjf_preemptive(specs))
        elif choice == 3:
            _show(priority_nonpreemptive(specs))
        elif choice == 4:
            _show(round_robin(specs, tokens.read_int("Enter Time Quantum: ")))
        elif choice == 0:
            print("Exiting...")
            return
        else:
            print("Invalid Choice!")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="oslabkit-schedule", description="Simulate CPU scheduling algorithms."
    )
    parser.add_argument(
        "algorithm",
        nargs="?",
        default="menu",
        choices=["menu", "fcfs", "sjf", "priority", "rr"],
    )
    args = parser.parse_args(argv)
    tokens = _Tokens(sys.stdin, sys.stdout)
    try:
        if args.algorithm == "menu":
            _menu(tokens)
        else:
            specs = _read_processes(tokens, with_priority=args.algorithm == "priority")
            if args.algorithm == "fcfs":
                _show(fcfs(specs))
            elif args.algorithm == "sjf":
                _show(sjf_preemptive(specs))
            elif args.algorithm == "priority":
                _show(priority_nonpreemptive(specs))
            else:
                quantum = tokens.read_int("Enter Time Quantum: ")
                _show(round_robin(specs, quantum))
    except EOFError:
        print("error: unexpected end of input", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())