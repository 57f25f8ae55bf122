from __future__ import annotations

from typing import Optional

from ..core.constants import WORK_MODES
from ..core.exceptions import ValidationError


def optional_text(value: Optional[str]) -> Optional[str]:
    return (value or "").strip() or None


def require_work_mode(value: str) -> str:
    mode = (value or "").strip().lower()
    if mode not in WORK_MODES:
        raise ValidationError(f"Unknown work mode {value!r}")
    return mode
