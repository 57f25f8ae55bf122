from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

import pytest

from src.hrm_attendance.hrm_attendance.attendance.calculation import compute_late_status
from src.hrm_attendance.hrm_attendance.shifts.model import Shift


def _shift(start="09:00", end="18:00", grace=10):
    return Shift(shift_id=1, shift_name="General", start_time=start, end_time=end, grace_period_minutes=grace)


@pytest.mark.parametrize("clock_in", [datetime(2026, 2, 2, 8, 15), datetime(2026, 2, 2, 9, 0), datetime(2026, 2, 2, 9, 9, 59)])
def test_early_or_within_grace_is_not_late(clock_in):
    result = compute_late_status(clock_in, _shift(), date(2026, 2, 2))

    assert result.is_late is False
    assert result.late_minutes == 0


def test_late_minutes_counted_from_grace_threshold():
    result = compute_late_status(datetime(2026, 2, 2, 9, 27), _shift(), date(2026, 2, 2))

    assert result.is_late is True
    assert result.late_minutes == 17
    assert result.shift_start == datetime(2026, 2, 2, 9, 0)
    assert result.late_threshold == datetime(2026, 2, 2, 9, 10)


def test_grace_boundary_is_on_time():
    result = compute_late_status(datetime(2026, 2, 2, 9, 10), _shift(), date(2026, 2, 2))

    assert result.is_late is False
    assert result.late_minutes == 0


def test_late_minutes_are_floored():
    result = compute_late_status(datetime(2026, 2, 2, 9, 12, 59), _shift(), date(2026, 2, 2))

    assert result.late_minutes == 2


def test_one_second_past_threshold_is_zero_minutes():
    result = compute_late_status(datetime(2026, 2, 2, 9, 10, 1), _shift(), date(2026, 2, 2))

    assert result.is_late is True
    assert result.late_minutes == 0


def test_zero_grace_and_negative_grace_behave_the_same():
    clock_in = datetime(2026, 2, 2, 9, 5)

    assert compute_late_status(clock_in, _shift(grace=0), date(2026, 2, 2)).late_minutes == 5
    assert compute_late_status(clock_in, _shift(grace=-30), date(2026, 2, 2)).late_minutes == 5


def test_overnight_shift_anchored_on_attendance_date():
    night = _shift(start="22:00:00", end="06:00:00", grace=15)
    d = date(2026, 2, 2)

    before_start = compute_late_status(datetime(2026, 2, 2, 21, 30), night, d)
    late = compute_late_status(datetime(2026, 2, 2, 22, 30), night, d)

    assert (before_start.is_late, before_start.late_minutes) == (False, 0)
    assert (late.is_late, late.late_minutes) == (True, 15)


def test_post_midnight_clock_in_measured_against_previous_evening():
    night = _shift(start="22:00", end="06:00", grace=15)

    result = compute_late_status(datetime(2026, 2, 3, 0, 15), night, date(2026, 2, 2))

    # 22:15 threshold on Feb 2 -> two hours late, not a phantom early arrival
    assert result.is_late is True
    assert result.late_minutes == 120


def test_attendance_date_accepts_iso_text_and_clock_in_accepts_iso_text():
    result = compute_late_status("2026-02-02T09:20:00", _shift(), "2026-02-02")

    assert result.late_minutes == 10


def test_aware_clock_in_converted_to_local_wall_clock():
    local_clock_in = datetime(2026, 2, 2, 9, 30)
    aware = local_clock_in.astimezone(timezone.utc)

    assert compute_late_status(aware, _shift(), date(2026, 2, 2)) == compute_late_status(
        local_clock_in, _shift(), date(2026, 2, 2)
    )


def test_shift_times_accept_time_and_timedelta_values():
    clock_in = datetime(2026, 2, 2, 9, 30)

    as_time = _shift(start=time(9, 0))
    as_delta = Shift(shift_id=3, shift_name="Db", start_time=timedelta(hours=9), end_time=timedelta(hours=18))

    assert compute_late_status(clock_in, as_time, date(2026, 2, 2)).late_minutes == 20
    assert compute_late_status(clock_in, as_delta, date(2026, 2, 2)).late_minutes == 30


@pytest.mark.parametrize(
    "clock_in, shift, attendance_date",
    [
        (datetime(2026, 2, 2, 11, 0), None, date(2026, 2, 2)),
        (datetime(2026, 2, 2, 11, 0), _shift(start=None), date(2026, 2, 2)),
        (datetime(2026, 2, 2, 11, 0), _shift(start="not-a-time"), date(2026, 2, 2)),
        (datetime(2026, 2, 2, 11, 0), _shift(start="25:00"), date(2026, 2, 2)),
        ("yesterday-ish", _shift(), date(2026, 2, 2)),
        (None, _shift(), date(2026, 2, 2)),
        (datetime(2026, 2, 2, 11, 0), _shift(), "02/02/2026"),
    ],
)
def test_missing_or_malformed_inputs_are_not_late(clock_in, shift, attendance_date):
    result = compute_late_status(clock_in, shift, attendance_date)

    assert result.is_late is False
    assert result.late_minutes == 0


def test_repeated_calls_give_identical_results():
    args = (datetime(2026, 2, 2, 9, 42), _shift(), date(2026, 2, 2))

    assert compute_late_status(*args) == compute_late_status(*args)
