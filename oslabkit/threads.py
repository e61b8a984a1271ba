"""Thread demonstrations: greeting, per-cell matrix product and sums."""

from __future__ import annotations

import argparse
import sys
import threading
from typing import Sequence

from oslabkit.scheduling import _Tokens

MATRIX_SIZE = 4
EXAMPLE_A = (
    (1, 2, 3, 4),
    (5, 6, 7, 8),
    (9, 10, 11, 12),
    (13, 14, 15, 16),
)
EXAMPLE_B = (
    (16, 15, 14, 13),
    (12, 11, 10, 9),
    (8, 7, 6, 5),
    (4, 3, 2, 1),
)
SUM_LIMITS = (10, 20)


def _wrap_int32(value: int) -> int:
    return (value + 2**31) % 2**32 - 2**31


def multiply_matrices(
    a: Sequence[Sequence[int]], b: Sequence[Sequence[int]]
) -> list[list[int]]:
    """Matrix product, each cell computed by its own thread."""
    rows = [list(row) for row in a]
    inner = len(rows[0]) if rows else 0
    if any(len(row) != inner for row in rows):
        raise ValueError("rows of the first matrix differ in length")
    b_rows = [list(row) for row in b]
    if len(b_rows) != inner:
        raise ValueError(
            f"first matrix has {inner} columns but second has {len(b_rows)} rows"
        )
    width = len(b_rows[0]) if b_rows else 0
    if any(len(row) != width for row in b_rows):
        raise ValueError("rows of the second matrix differ in length")
    columns = [list(col) for col in zip(*b_rows)] if b_rows else []
    result = [[0] * width for _ in rows]

    def cell(i: int, j: int) -> None:
        result[i][j] = _wrap_int32(sum(x * y for x, y in zip(rows[i], columns[j])))

    workers = [
        threading.Thread(target=cell, args=(i, j))
        for i in range(len(rows))
        for j in range(width)
    ]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    return result


def triangular_sum(n: int) -> int:
    """Sum of 1..n with 32-bit wrap-around; 0 when n < 1."""
    return _wrap_int32(n * (n + 1) // 2) if n > 0 else 0


def hello_thread() -> str:
    """Print a greeting from a new thread and return it."""
    messages: list[str] = []

    def greet() -> None:
        message = f"Hello from thread! Thread ID: {threading.get_ident():#x}"
        print(message)
        messages.append(message)

    worker = threading.Thread(target=greet)
    worker.start()
    worker.join()
    return messages[0]


def _print_matrix(matrix: list[list[int]]) -> None:
    print("Resulting Matrix C:")
    for row in matrix:
        print("".join(f"{v} " for v in row))


def _read_matrix(tokens: _Tokens, label: str) -> list[list[int]]:
    print(f"Enter elements for Matrix {label} ({MATRIX_SIZE}x{MATRIX_SIZE}):")
    return [
        [tokens.read_int(f"Enter {label}[{i}][{j}]: ") for j in range(MATRIX_SIZE)]
        for i in range(MATRIX_SIZE)
    ]


def _sums() -> None:
    def report(n: int) -> None:
        print(f"Sum from 1 to {n} = {triangular_sum(n)}")

    workers = [threading.Thread(target=report, args=(n,)) for n in SUM_LIMITS]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    print("Both threads completed.")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="oslabkit-threads", description="Thread demonstrations."
    )
    parser.add_argument("demo", choices=["hello", "matrix", "matrix-input", "sum"])
    args = parser.parse_args(argv)
    try:
        if args.demo == "hello":
            hello_thread()
            print("Thread has finished execution.")
        elif args.demo == "matrix":
            _print_matrix(multiply_matrices(EXAMPLE_A, EXAMPLE_B))
        elif args.demo == "matrix-input":
            tokens = _Tokens(sys.stdin, sys.stdout)
            a = _read_matrix(tokens, "A")
            b = _read_matrix(tokens, "B")
            _print_matrix(multiply_matrices(a, b))
        else:
            _sums()
    except EOFError:
        print("error: unexpected end of input", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())