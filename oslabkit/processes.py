"""Process creation demonstrations and the small computations they run."""

from __future__ import annotations

import argparse
import bisect
import math
import os
import pickle
import re
import sys
import traceback
from typing import Any, Callable, Iterable, Sequence

from oslabkit.scheduling import _Tokens

VOWELS = frozenset("aeiouAEIOU")
SORT_COUNT = 20
MAX_ELEMENTS = 100
SENTENCE_LIMIT = 99
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _wrap_int32(value: int) -> int:
    return (value + 2**31) % 2**32 - 2**31


def sort_ascending(values: Iterable[int]) -> list[int]:
    """The values in ascending order."""
    return sorted(values)


def sort_descending(values: Iterable[int]) -> list[int]:
    """The values in descending order."""
    return sorted(values, reverse=True)


def selection_sort(values: Iterable[int]) -> list[int]:
    """Sort by repeatedly taking the smallest remaining value."""
    remaining = list(values)
    result = []
    while remaining:
        result.append(remaining.pop(remaining.index(min(remaining))))
    return result


def insertion_sort(values: Iterable[int]) -> list[int]:
    """Sort by inserting each value after the equal ones already placed."""
    result: list[int] = []
    for value in values:
        bisect.insort_right(result, value)
    return result


def array_sum(values: Iterable[int]) -> int:
    """Sum with 32-bit wrap-around."""
    return _wrap_int32(sum(values))


def array_product(values: Iterable[int]) -> int:
    """Product with 32-bit wrap-around."""
    return _wrap_int32(math.prod(values))


def count_vowels(text: str) -> int:
    """Number of ASCII vowels, either case."""
    return sum(ch in VOWELS for ch in text)


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return _wrap_int32(int(match.group(1))) if match else 0


def add_arguments(argv: Sequence[str]) -> tuple[int, int, int]:
    """Parse the first two arguments as integers and add them.

    Arguments are read like ``atoi``: a leading integer, or 0.
    Returns the two numbers and their sum.
    """
    if len(argv) < 2:
        raise ValueError("Insufficient arguments")
    first, second = _atoi(argv[0]), _atoi(argv[1])
    return first, second, _wrap_int32(first + second)


def _fork(target: Callable[[], int | None]) -> int:
    """Run target in a forked child that exits with its return code."""
    sys.stdout.flush()
    sys.stderr.flush()
    pid = os.fork()
    if pid == 0:
        status = 1
        try:
            status = target() or 0
        except BaseException:
            traceback.print_exc()
        finally:
            try:
                sys.stdout.flush()
                sys.stderr.flush()
            finally:
                os._exit(status)
    return pid


def _wait(pid: int) -> int:
    _, status = os.waitpid(pid, 0)
    return os.waitstatus_to_exitcode(status)


def run_in_child(func: Callable[..., Any], *args: Any) -> Any:
    """Call func(*args) in a forked child and return its result.

    An exception raised in the child is raised again here; a child that
    dies without reporting raises ChildProcessError.
    """
    read_fd, write_fd = os.pipe()

    def target() -> None:
        os.close(read_fd)
        with os.fdopen(write_fd, "wb") as stream:
            try:
                outcome = (True, func(*args))
            except Exception as exc:
                outcome = (False, exc)
            pickle.dump(outcome, stream)

    try:
        pid = _fork(target)
    except OSError:
        os.close(read_fd)
        os.close(write_fd)
        raise
    os.close(write_fd)
    with os.fdopen(read_fd, "rb") as stream:
        data = stream.read()
    code = _wait(pid)
    if code != 0 or not data:
        raise ChildProcessError(f"child process exited with status {code}")
    ok, value = pickle.loads(data)
    if ok:
        return value
    raise value


def _print_values(header: str, values: Iterable[int]) -> None:
    print(header)
    print("".join(f"{v} " for v in values))


def _demo_pid() -> None:
    pid = _fork(lambda: print(f"Child process: PID = {os.getpid()}"))
    print(f"Parent process: PID = {os.getpid()}, Child PID = {pid}")
    _wait(pid)


def _demo_sort_order(tokens: _Tokens) -> None:
    count = tokens.read_int("Enter number of elements: ")
    if count < 0:
        raise ValueError("number of elements must not be negative")
    print(f"Enter {count} elements:")
    values = [tokens.read_int() for _ in range(count)]
    pid = _fork(
        lambda: _print_values(
            "\nChild process: Sorting in ascending order:", sort_ascending(values)
        )
    )
    _wait(pid)
    _print_values(
        "\nParent process: Sorting in descending order:", sort_descending(values)
    )


def _demo_sorts(tokens: _Tokens) -> None:
    print(f"Enter {SORT_COUNT} integers:")
    values = [tokens.read_int() for _ in range(SORT_COUNT)]

    def child() -> None:
        print("\n[Child] Performing Insertion Sort...")
        _print_values("[Child] Sorted Array (Insertion Sort):", insertion_sort(values))

    _wait(_fork(child))
    print("\n[Parent] Performing Selection Sort...")
    _print_values("[Parent] Sorted Array (Selection Sort):", selection_sort(values))


def _demo_sum(tokens: _Tokens) -> None:
    print("enter size:")
    size = tokens.read_int()
    if not 0 <= size <= MAX_ELEMENTS:
        raise ValueError(f"size must be between 0 and {MAX_ELEMENTS}")
    print("enter array")
    values = [tokens.read_int() for _ in range(size)]
    print("before fork call")

    def child() -> int:
        product = array_product(values)
        sys.stdout.write(
            f"in child process x=0\nProduct of array elements = {product}\n"
        )
        return 0

    pid = _fork(child)
    _wait(pid)
    print(f"in parent process x={pid}")
    print(f"Sum of array elements = {array_sum(values)}")


def _demo_vowels() -> None:
    sys.stdout.write("Enter a sentence: ")
    sys.stdout.flush()
    sentence = sys.stdin.readline()[:SENTENCE_LIMIT]
    _wait(_fork(lambda: print(f"Number of vowels: {count_vowels(sentence)}")))


def _demo_exec_ls() -> None:
    def child() -> int:
        print("Child process replacing itself with 'ls -l'")
        sys.stdout.flush()
        try:
            os.execv("/bin/ls", ["ls", "-l"])
        except OSError as exc:
            print(f"exec failed: {exc.strerror}", file=sys.stderr)
        return 1

    pid = _fork(child)
    print("Parent process: waiting for child...")
    _wait(pid)
    print("Child process finished.")


def _demo_exec_add() -> None:
    def child() -> int:
        print("Child Process")
        sys.stdout.flush()
        try:
            os.execv(
                sys.executable,
                [sys.executable, "-m", "oslabkit.processes", "add", "5", "6"],
            )
        except OSError:
            print("End Process")
        return 1

    pid = _fork(child)
    print("Parent Process")
    _wait(pid)


def _demo_add(args: Sequence[str]) -> int:
    try:
        first, second, total = add_arguments(args)
    except ValueError as exc:
        print(exc)
        return 1
    print(f"Sum of {first} and {second} is {total}")
    print(f"Process ID: {os.getpid()}")
    print(f"Parent Process ID: {os.getppid()}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="oslabkit-processes", description="Process creation demonstrations."
    )
    parser.add_argument(
        "demo",
        choices=["pid", "sort-order", "sort", "sum", "vowels", "exec", "exec-add", "add"],
    )
    parser.add_argument("args", nargs="*", help="arguments for the add demo")
    args = parser.parse_args(argv)
    if args.demo == "add":
        return _demo_add(args.args)
    tokens = _Tokens(sys.stdin, sys.stdout)
    try:
        if args.demo == "pid":
            _demo_pid()
        elif args.demo == "sort-order":
            _demo_sort_order(tokens)
        elif args.demo == "sort":
            _demo_sorts(tokens)
        elif args.demo == "sum":
            _demo_sum(tokens)
        elif args.demo == "vowels":
            _demo_vowels()
        elif args.demo == "exec":
            _demo_exec_ls()
        else:
            _demo_exec_add()
    except EOFError:
        print("error: unexpected end of input", file=sys.stderr)
        return 1
    except (ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())