from __future__ import annotations

import importlib
from typing import Optional

from dotenv import load_dotenv

from config import get_settings_module

from .attendance.repository import AttendanceRepository
from .common.logger import configure_logging, get_logger
from .container import Container, build_container
from .corrections.repository import CorrectionRepository
from .schedules.repository import ShiftAssignmentRepository
from .settings import settings_from_module
from .shifts.repository import ShiftRepository

logger = get_logger(__name__)


def create_container(
    *,
    attendance: AttendanceRepository,
    shifts: ShiftRepository,
    assignments: ShiftAssignmentRepository,
    corrections: CorrectionRepository,
    settings_module: Optional[str] = None,
) -> Container:
    """Load settings for the current APP_ENV, set up logging and wire the services.

    Storage is supplied by the caller as repository implementations.
    """

    load_dotenv(override=False)

    settings_module = settings_module or get_settings_module()
    settings = settings_from_module(importlib.import_module(settings_module))

    configure_logging(level="DEBUG" if settings.debug else settings.log_level, log_file=settings.log_file)
    logger.info(
        "Attendance engine starting (settings=%s, full day=%sh, half day=%sh, finalization delay=%smin)",
        settings_module,
        settings.standard_full_day_hours,
        settings.standard_half_day_hours,
        settings.finalization_delay_minutes,
    )

    return build_container(
        attendance=attendance,
        shifts=shifts,
        assignments=assignments,
        corrections=corrections,
        settings=settings,
    )
