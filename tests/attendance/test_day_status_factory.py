from datetime import date, datetime, time

from src.hrm_attendance.hrm_attendance.attendance.factory import DayStatusStrategyFactory
from src.hrm_attendance.hrm_attendance.attendance.model import AttendanceDay
from src.hrm_attendance.hrm_attendance.attendance.strategies.absent_strategy import NoClockInStrategy, OrphanClockOutStrategy
from src.hrm_attendance.hrm_attendance.attendance.strategies.correction_strategy import MissedClockOutStrategy
from src.hrm_attendance.hrm_attendance.attendance.strategies.threshold_strategy import CompletedDayStrategy
from src.hrm_attendance.hrm_attendance.core.enums import AttendanceStatus
from src.hrm_attendance.hrm_attendance.shifts.model import Shift

D = date(2026, 2, 2)


def _day(clock_in=None, clock_out=None, work_minutes=0):
    return AttendanceDay(
        attendance_id=1, employee_id=1, attendance_date=D, clock_in=clock_in, clock_out=clock_out, work_minutes=work_minutes
    )


def test_factory_picks_strategy_from_clock_state():
    factory = DayStatusStrategyFactory()
    in_at = datetime(2026, 2, 2, 9, 0)
    out_at = datetime(2026, 2, 2, 18, 0)

    assert isinstance(factory.for_record(None, None), NoClockInStrategy)
    assert isinstance(factory.for_record(_day(), None), NoClockInStrategy)
    assert isinstance(factory.for_record(_day(clock_out=out_at), None), OrphanClockOutStrategy)
    assert isinstance(factory.for_record(_day(clock_in=in_at), None), MissedClockOutStrategy)
    assert isinstance(factory.for_record(_day(in_at, out_at), None), CompletedDayStrategy)


def test_shift_thresholds_override_standard_hours():
    shift = Shift(shift_id=1, shift_name="Short", start_time=time(9), end_time=time(15), full_day_hours=6, half_day_hours=3)
    factory = DayStatusStrategyFactory(standard_full_day_hours=8, standard_half_day_hours=4)

    strategy = factory.for_completed_day(shift)
    decision = strategy.decide(_day(datetime(2026, 2, 2, 9), datetime(2026, 2, 2, 15), work_minutes=360))

    assert (strategy.full_day_hours, strategy.half_day_hours) == (6.0, 3.0)
    assert decision.status == AttendanceStatus.PRESENT


def test_standard_hours_used_without_shift():
    strategy = DayStatusStrategyFactory(standard_full_day_hours=9, standard_half_day_hours=5).for_completed_day(None)

    decision = strategy.decide(_day(datetime(2026, 2, 2, 9), datetime(2026, 2, 2, 17), work_minutes=480))

    assert decision.status == AttendanceStatus.HALF_DAY
