from array import array

import pytest

from pixelwave.synth.trim import trim_bounds, trim_silence


def test_trims_both_ends_only():
    s = array("h", [0, 1, 5, -20, 3, 0, -30, 2, 0])
    assert list(trim_silence(s, 10)) == [-20, 3, 0, -30]
    assert trim_bounds(s, 10) == (3, 7)


def test_all_silent_returns_empty():
    s = array("h", [0, 3, -9, 9, 0])
    out = trim_silence(s, 10)
    assert len(out) == 0
    assert out.typecode == "h"


def test_nothing_below_threshold_is_unchanged():
    s = array("h", [100, -200, 32767, -32767])
    assert trim_silence(s, 50) == s


def test_zero_threshold_keeps_everything():
    s = array("h", [0, 0, 1, 0])
    assert trim_silence(s, 0) == s


def test_empty_input():
    assert len(trim_silence(array("h"), 10)) == 0


def test_threshold_is_exclusive():
    # |s| == threshold counts as sound
    s = array("h", [9, 10, 9])
    assert list(trim_silence(s, 10)) == [10]


@pytest.mark.parametrize(
    "seq,tau",
    [
        ([0, 0, 0], 1),
        ([5, 0, 0, 5], 5),
        ([-7, 1, 2, 3, 8, -1], 7),
        ([1, 2, 3, 4, 5, 6], 4),
        ([32767, 0, -32767], 32767),
    ],
)
def test_result_is_contiguous_and_outside_is_quiet(seq, tau):
    s = array("h", seq)
    start, end = trim_bounds(s, tau)
    out = trim_silence(s, tau)
    assert list(out) == seq[start:end]
    assert all(abs(v) < tau for v in seq[:start] + seq[end:])
    if out:
        assert abs(out[0]) >= tau and abs(out[-1]) >= tau
