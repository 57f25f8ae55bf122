from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Optional

from .core import constants


@dataclass(frozen=True)
class EngineSettings:
    standard_full_day_hours: float = constants.STANDARD_FULL_DAY_HOURS
    standard_half_day_hours: float = constants.STANDARD_HALF_DAY_HOURS
    finalization_delay_minutes: int = constants.FINALIZATION_DELAY_MINUTES
    default_work_mode: str = constants.DEFAULT_WORK_MODE
    log_level: str = "INFO"
    log_file: Optional[str] = None
    debug: bool = False


def settings_from_module(module: ModuleType) -> EngineSettings:
    """Read a ``config.<env>`` settings module into ``EngineSettings``."""

    return EngineSettings(
        standard_full_day_hours=float(getattr(module, "STANDARD_FULL_DAY_HOURS", constants.STANDARD_FULL_DAY_HOURS)),
        standard_half_day_hours=float(getattr(module, "STANDARD_HALF_DAY_HOURS", constants.STANDARD_HALF_DAY_HOURS)),
        finalization_delay_minutes=int(getattr(module, "FINALIZATION_DELAY_MINUTES", constants.FINALIZATION_DELAY_MINUTES)),
        default_work_mode=str(getattr(module, "DEFAULT_WORK_MODE", constants.DEFAULT_WORK_MODE)),
        log_level=str(getattr(module, "LOG_LEVEL", "INFO")),
        log_file=getattr(module, "LOG_FILE", None) or None,
        debug=bool(getattr(module, "DEBUG", False)),
    )
