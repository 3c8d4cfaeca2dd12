from __future__ import annotations

import itertools
import random
from datetime import date, datetime

import pytest

from timeguard.core.enums import Direction
from timeguard.timesheet.aggregator import aggregate
from timeguard.timesheet.model import DayEntry, WeekWindow

WEEK = WeekWindow.containing(date(2026, 3, 4))  # Mon 2026-03-02 .. Sun 2026-03-08
DAY = date(2026, 3, 3)


def at(hour: int, minute: int = 0, day: date = DAY) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute)


def test_users_without_events_get_empty_mapping(alice, bob, make_event):
    events = [make_event(alice, Direction.IN, at(8))]

    data = aggregate([alice, bob], events, WEEK.start, WEEK.end)

    assert data[bob.user_id] == {}
    assert set(data) == {alice.user_id, bob.user_id}


def test_earliest_check_in_wins(alice, make_event):
    events = [make_event(alice, Direction.IN, at(9)), make_event(alice, Direction.IN, at(8))]

    data = aggregate([alice], events, WEEK.start, WEEK.end)

    assert data[alice.user_id][DAY].check_in == at(8)


def test_latest_check_out_wins(alice, make_event):
    events = [make_event(alice, Direction.OUT, at(17, 30)), make_event(alice, Direction.OUT, at(17))]

    data = aggregate([alice], events, WEEK.start, WEEK.end)

    assert data[alice.user_id][DAY].check_out == at(17, 30)


def test_duration_in_hours(alice, make_event):
    events = [make_event(alice, Direction.IN, at(8)), make_event(alice, Direction.OUT, at(16, 30))]

    entry = aggregate([alice], events, WEEK.start, WEEK.end)[alice.user_id][DAY]

    assert entry.duration == pytest.approx(8.5)
    assert entry.is_complete


def test_partial_bucket_has_zero_duration(alice, make_event):
    events = [make_event(alice, Direction.IN, at(8)), make_event(alice, Direction.IN, at(10))]

    entry = aggregate([alice], events, WEEK.start, WEEK.end)[alice.user_id][DAY]

    assert entry == DayEntry(check_in=at(8), check_out=None, duration=0.0)


def test_check_out_only_bucket(alice, make_event):
    entry = aggregate([alice], [make_event(alice, Direction.OUT, at(18))], WEEK.start, WEEK.end)[alice.user_id][DAY]

    assert entry.check_in is None
    assert entry.check_out == at(18)
    assert entry.duration == 0


def test_check_out_before_check_in_keeps_negative_duration(alice, make_event):
    events = [make_event(alice, Direction.OUT, at(7)), make_event(alice, Direction.IN, at(9))]

    entry = aggregate([alice], events, WEEK.start, WEEK.end)[alice.user_id][DAY]

    assert entry.duration == pytest.approx(-2.0)
    assert entry.is_inverted


def test_events_bucket_by_calendar_day(alice, make_event):
    other = date(2026, 3, 5)
    events = [
        make_event(alice, Direction.IN, at(8)),
        make_event(alice, Direction.IN, at(22, day=other)),
        make_event(alice, Direction.OUT, at(23, day=other)),
    ]

    days = aggregate([alice], events, WEEK.start, WEEK.end)[alice.user_id]

    assert set(days) == {DAY, other}
    assert days[other].duration == pytest.approx(1.0)


def test_window_bounds_are_inclusive(alice, make_event):
    events = [
        make_event(alice, Direction.IN, WEEK.start),
        make_event(alice, Direction.OUT, WEEK.end),
        make_event(alice, Direction.IN, datetime(2026, 3, 1, 23, 59, 59)),
        make_event(alice, Direction.IN, datetime(2026, 3, 9, 0, 0)),
    ]

    days = aggregate([alice], events, WEEK.start, WEEK.end)[alice.user_id]

    assert set(days) == {date(2026, 3, 2), date(2026, 3, 8)}


def test_unknown_users_are_dropped(alice, bob, make_event):
    events = [make_event(bob, Direction.IN, at(8)), make_event(alice, Direction.IN, at(9))]

    data = aggregate([alice], events, WEEK.start, WEEK.end)

    assert list(data) == [alice.user_id]
    assert data[alice.user_id][DAY].check_in == at(9)


def test_result_does_not_depend_on_event_order(alice, bob, make_event):
    events = [
        make_event(alice, Direction.IN, at(8, 5)),
        make_event(alice, Direction.IN, at(7, 55)),
        make_event(alice, Direction.OUT, at(12)),
        make_event(alice, Direction.OUT, at(17, 10)),
        make_event(bob, Direction.IN, at(9)),
        make_event(bob, Direction.OUT, at(18)),
    ]
    expected = aggregate([alice, bob], events, WEEK.start, WEEK.end)

    for perm in itertools.islice(itertools.permutations(events), 0, 720, 37):
        assert aggregate([alice, bob], list(perm), WEEK.start, WEEK.end) == expected

    shuffled = list(events)
    random.Random(7).shuffle(shuffled)
    assert aggregate([alice, bob], shuffled, WEEK.start, WEEK.end) == expected
