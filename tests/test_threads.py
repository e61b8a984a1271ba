import io
import threading

import pytest

from oslabkit.threads import (
    EXAMPLE_A,
    EXAMPLE_B,
    hello_thread,
    main,
    multiply_matrices,
    triangular_sum,
)

IDENTITY = [[1 if i == j else 0 for j in range(4)] for i in range(4)]


def test_identity_on_the_right():
    assert multiply_matrices(EXAMPLE_A, IDENTITY) == [list(r) for r in EXAMPLE_A]


def test_identity_on_the_left():
    assert multiply_matrices(IDENTITY, EXAMPLE_B) == [list(r) for r in EXAMPLE_B]


def test_product_is_associative():
    c = [[2, 0, 1, 3], [1, 1, 0, 0], [0, 4, 2, 1], [3, 0, 0, 1]]
    left = multiply_matrices(multiply_matrices(EXAMPLE_A, EXAMPLE_B), c)
    right = multiply_matrices(EXAMPLE_A, multiply_matrices(EXAMPLE_B, c))
    assert left == right


def test_rectangular_shape():
    a = [[1, 2, 3], [4, 5, 6]]
    b = [[1], [0], [0]]
    assert multiply_matrices(a, b) == [[1], [4]]


def test_zero_matrix():
    zero = [[0] * 4 for _ in range(4)]
    assert multiply_matrices(EXAMPLE_A, zero) == zero


def test_mismatched_shapes():
    with pytest.raises(ValueError):
        multiply_matrices([[1, 2]], [[1, 2]])


def test_ragged_rows():
    with pytest.raises(ValueError):
        multiply_matrices([[1, 2], [3]], [[1], [2]])


@pytest.mark.parametrize("n", [1, 2, 10, 20, 500])
def test_triangular_sum_step(n):
    assert triangular_sum(n) - triangular_sum(n - 1) == n


def test_triangular_sum_of_nothing():
    assert triangular_sum(-3) == triangular_sum(0) == 0


def test_triangular_sum_stays_in_32_bits():
    value = triangular_sum(100_000)
    assert -(2**31) <= value < 2**31


def test_hello_thread_runs_elsewhere(capsys):
    message = hello_thread()
    assert message.startswith("Hello from thread! Thread ID: 0x")
    assert int(message.rsplit(" ", 1)[1], 16) != threading.get_ident()
    assert capsys.readouterr().out == message + "\n"


def test_main_hello(capsys):
    assert main(["hello"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[-1] == "Thread has finished execution."


def test_main_matrix(capsys):
    assert main(["matrix"]) == 0
    lines = capsys.readouterr().out.splitlines()
    expected = multiply_matrices(EXAMPLE_A, EXAMPLE_B)
    assert lines[0] == "Resulting Matrix C:"
    assert lines[1:] == ["".join(f"{v} " for v in row) for row in expected]


def test_main_matrix_input(monkeypatch, capsys):
    a_values = " ".join(str(v) for row in EXAMPLE_A for v in row)
    identity_values = " ".join(str(v) for row in IDENTITY for v in row)
    monkeypatch.setattr("sys.stdin", io.StringIO(a_values + "\n" + identity_values + "\n"))
    assert main(["matrix-input"]) == 0
    out = capsys.readouterr().out
    assert "Enter A[3][3]: " in out
    assert out.splitlines()[-4:] == ["".join(f"{v} " for v in row) for row in EXAMPLE_A]


def test_main_matrix_input_short(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("1 2 3\n"))
    assert main(["matrix-input"]) == 1


def test_main_sum(capsys):
    assert main(["sum"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert sorted(lines[:2]) == sorted(
        [f"Sum from 1 to 10 = {triangular_sum(10)}", f"Sum from 1 to 20 = {triangular_sum(20)}"]
    )
    assert lines[2] == "Both threads completed."