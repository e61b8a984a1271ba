import copy
import io
import sys

import pytest

from oslabkit.banker import BankerState, RequestOutcome, main

ALLOCATION = [[0, 1, 0], [2, 0, 0], [3, 0, 2], [2, 1, 1], [0, 0, 2]]
MAXIMUM = [[7, 5, 3], [3, 2, 2], [9, 0, 2], [2, 2, 2], [4, 3, 3]]
AVAILABLE = [3, 3, 2]

STDIN_STATE = (
    "5 3\n"
    + "\n".join(" ".join(map(str, row)) for row in ALLOCATION)
    + "\n"
    + "\n".join(" ".join(map(str, row)) for row in MAXIMUM)
    + "\n"
    + " ".join(map(str, AVAILABLE))
    + "\n"
)


@pytest.fixture
def state():
    return BankerState(copy.deepcopy(ALLOCATION), copy.deepcopy(MAXIMUM), list(AVAILABLE))


def _snapshot(s):
    return (copy.deepcopy(s.allocation), list(s.available))


def test_need_is_maximum_minus_allocation(state):
    need = state.need()
    for need_row, alloc_row, max_row in zip(need, ALLOCATION, MAXIMUM):
        assert [n + a for n, a in zip(need_row, alloc_row)] == max_row


def test_classic_safe_sequence(state):
    assert state.safe_sequence() == [1, 3, 4, 0, 2]
    assert state.is_safe()


def test_safe_sequence_is_permutation(state):
    assert sorted(state.safe_sequence()) == list(range(len(ALLOCATION)))


def test_unsafe_when_nothing_available():
    s = BankerState(copy.deepcopy(ALLOCATION), copy.deepcopy(MAXIMUM), [0, 0, 0])
    assert s.safe_sequence() is None
    assert not s.is_safe()


def test_grant_updates_state(state):
    request = [1, 0, 2]
    outcome = state.request(1, request)
    assert outcome is RequestOutcome.GRANTED
    assert outcome.granted
    assert state.available == [a - r for a, r in zip(AVAILABLE, request)]
    assert state.allocation[1] == [a + r for a, r in zip(ALLOCATION[1], request)]
    assert state.is_safe()


def test_unsafe_request_rolled_back(state):
    before = _snapshot(state)
    outcome = state.request(4, [3, 3, 0])
    assert outcome is RequestOutcome.UNSAFE
    assert not outcome.granted
    assert _snapshot(state) == before


def test_request_exceeding_claim(state):
    before = _snapshot(state)
    assert state.request(1, [2, 0, 0]) is RequestOutcome.EXCEEDS_CLAIM
    assert _snapshot(state) == before


def test_request_must_wait(state):
    before = _snapshot(state)
    assert state.request(0, [4, 0, 0]) is RequestOutcome.MUST_WAIT
    assert _snapshot(state) == before


def test_outcome_messages(state):
    assert state.request(1, [2, 0, 0]).value == "Error: Request exceeds maximum claim."
    assert state.request(0, [4, 0, 0]).value == "Resources not available. Process must wait."


@pytest.mark.parametrize("pid", [-1, 5])
def test_bad_pid(state, pid):
    with pytest.raises(ValueError):
        state.request(pid, [0, 0, 0])


def test_bad_request_length(state):
    with pytest.raises(ValueError):
        state.request(0, [0, 0])


def test_mismatched_dimensions():
    with pytest.raises(ValueError):
        BankerState([[1, 2]], [[1, 2, 3]], [0, 0, 0])
    with pytest.raises(ValueError):
        BankerState([[1, 2, 3]], [[1, 2, 3], [1, 1, 1]], [0, 0, 0])


def test_main_safety(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(STDIN_STATE))
    assert main(["safety"]) == 0
    out = capsys.readouterr().out
    assert "System is in a safe state." in out
    assert "Safe Sequence: P1 P3 P4 P0 P2" in out


def test_main_request(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(STDIN_STATE + "1\n1 0 2\n"))
    assert main(["request"]) == 0
    assert RequestOutcome.GRANTED.value in capsys.readouterr().out


def test_main_menu(monkeypatch, capsys):
    script = STDIN_STATE + "2\n4\n3 3 0\n7\n0\n"
    monkeypatch.setattr(sys, "stdin", io.StringIO(script))
    assert main([]) == 0
    out = capsys.readouterr().out
    assert RequestOutcome.UNSAFE.value in out
    assert "Invalid choice." in out
    assert "Exiting..." in out


def test_main_truncated_input(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("2 2\n1 0\n"))
    assert main(["safety"]) == 1
    assert "unexpected end of input" in capsys.readouterr().err