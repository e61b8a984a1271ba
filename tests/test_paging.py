import io
import sys

import pytest

from oslabkit.paging import fifo, format_result, lru, main, optimal

REFERENCE = [7, 0, 1, 2, 0, 3, 0, 4, 2, 3, 0, 3, 2]


def _all_results(pages, frame_count):
    return [
        fifo(pages, frame_count),
        lru(pages, frame_count),
        optimal(pages, frame_count),
    ]


def test_fifo_reference_faults():
    assert fifo(REFERENCE, 3).faults == 10


def test_lru_reference_faults():
    assert lru(REFERENCE, 3).faults == 9


def test_optimal_reference_faults():
    assert optimal(REFERENCE, 3).faults == 7


def test_one_step_per_reference():
    for result in [fifo(REFERENCE, 3), lru(REFERENCE, 3), optimal(REFERENCE, 3)]:
        assert [page for page, _ in result.steps] == REFERENCE
        assert all(len(frames) == 3 for _, frames in result.steps)


def test_referenced_page_is_resident():
    for result in [fifo(REFERENCE, 3), lru(REFERENCE, 3), optimal(REFERENCE, 3)]:
        assert all(page in frames for page, frames in result.steps)


def test_enough_frames_only_cold_misses():
    assert fifo(REFERENCE, 10).faults == len(set(REFERENCE))
    assert lru(REFERENCE, 10).faults == len(set(REFERENCE))
    assert optimal(REFERENCE, 10).faults == len(set(REFERENCE))


def test_faults_match_frame_changes():
    for result in [fifo(REFERENCE, 3), lru(REFERENCE, 3), optimal(REFERENCE, 3)]:
        previous = (None, None, None)
        changes = 0
        for _, frames in result.steps:
            if frames != previous:
                changes += 1
            previous = frames
        assert changes == result.faults


def test_empty_reference_string():
    for result in [fifo([], 3), lru([], 3), optimal([], 3)]:
        assert result.steps == ()
        assert result.faults == 0


def test_zero_frames_rejected():
    with pytest.raises(ValueError):
        fifo(REFERENCE, 0)
    with pytest.raises(ValueError):
        lru(REFERENCE, 0)
    with pytest.raises(ValueError):
        optimal(REFERENCE, 0)


@pytest.mark.parametrize("frames", [1, 2, 3, 4])
def test_optimal_never_worse(frames):
    best = optimal(REFERENCE, frames).faults
    assert best <= fifo(REFERENCE, frames).faults
    assert best <= lru(REFERENCE, frames).faults


def test_fifo_belady_anomaly():
    pages = [1, 2, 3, 4, 1, 2, 5, 1, 2, 3, 4, 5]
    assert fifo(pages, 4).faults > fifo(pages, 3).faults


def test_all_results_helper_uses_each_algorithm():
    faults = [result.faults for result in _all_results(REFERENCE, 3)]
    assert faults == [10, 9, 7]


def test_format_with_minus_one():
    text = format_result(fifo([7, 0], 3))
    lines = text.splitlines()
    assert lines[0] == "--- FIFO Page Replacement ---"
    assert lines[1] == "Page 7 => [7 -1 -1]"
    assert lines[2] == "Page 0 => [7 0 -1]"
    assert lines[3] == "Total Page Faults: 2"


def test_format_with_blanks():
    text = format_result(lru([7], 3), blank=True)
    assert text.splitlines()[0] == "--- LRU Page Replacement ---"
    assert text.splitlines()[1] == "Page 7 => [7 _ _ ]"


def test_format_total_matches_result():
    result = optimal(REFERENCE, 3)
    assert format_result(result).endswith(f"Total Page Faults: {result.faults}")


def test_main_single_algorithm(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("4\n1 2 1 3\n2\n"))
    assert main(["fifo"]) == 0
    out = capsys.readouterr().out
    assert format_result(fifo([1, 2, 1, 3], 2)) in out


def test_main_menu(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("3\n1 2 3\n2\n3\n9\n0\n"))
    assert main([]) == 0
    out = capsys.readouterr().out
    assert format_result(optimal([1, 2, 3], 2), blank=True) in out
    assert "Invalid Choice!" in out
    assert "Exiting..." in out


def test_main_rejects_zero_frames(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("2\n1 2\n0\n"))
    assert main(["lru"]) == 1
    assert "error" in capsys.readouterr().err