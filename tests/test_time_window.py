from __future__ import annotations

from datetime import date, time

import pytest

from app.core.errors import InvalidWindow
from app.services.time_window import TimeWindow, daterange, windows_overlap

DAY = date(2025, 6, 1)


def test_touching_windows_do_not_overlap():
    assert not windows_overlap(time(8), time(12), time(12), time(16))
    assert not windows_overlap(time(12), time(16), time(8), time(12))


@pytest.mark.parametrize(
    "start,end",
    [
        (time(10), time(14)),  # runs past the end
        (time(6), time(9)),  # starts before
        (time(9), time(11)),  # contained
        (time(6), time(20)),  # contains
        (time(8), time(12)),  # identical
    ],
)
def test_overlapping_windows(start, end):
    assert windows_overlap(time(8), time(12), start, end)


def test_overlap_is_symmetric():
    a = TimeWindow(DAY, time(9), time(13))
    b = TimeWindow(DAY, time(12, 30), time(15))
    assert a.overlaps(b.start, b.end)
    assert b.overlaps(a.start, a.end)


@pytest.mark.parametrize("start,end", [(time(10), time(10)), (time(14), time(9))])
def test_invalid_window_rejected(start, end):
    with pytest.raises(InvalidWindow):
        TimeWindow(DAY, start, end)


def test_hours_and_label():
    w = TimeWindow(DAY, time(8, 30), time(12, 0))
    assert w.hours == 3.5
    assert w.label() == "08:30-12:00"
    assert w.contains(time(9), time(12))
    assert not w.contains(time(8), time(9))


def test_daterange_is_inclusive():
    days = list(daterange(date(2025, 6, 1), date(2025, 6, 3)))
    assert days == [date(2025, 6, 1), date(2025, 6, 2), date(2025, 6, 3)]
    assert list(daterange(date(2025, 6, 3), date(2025, 6, 1))) == []
