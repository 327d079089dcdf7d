"""
Silence trimming: drop leading/trailing samples with |s| < threshold.
Only selects a contiguous range; sample values are never touched.
"""

from __future__ import annotations

from array import array
from typing import Sequence, Tuple


def trim_bounds(samples: Sequence[int], threshold: int) -> Tuple[int, int]:
    """(start, end) of the kept range; start == end when everything is silent."""
    n = len(samples)
    start = 0
    while start < n and abs(samples[start]) < threshold:
        start += 1
    if start == n:
        return n, n
    end = n
    while end > start and abs(samples[end - 1]) < threshold:
        end -= 1
    return start, end


def trim_silence(samples: Sequence[int], threshold: int) -> array:
    start, end = trim_bounds(samples, threshold)
    if start == end:
        return array("h")
    return array("h", samples[start:end])
