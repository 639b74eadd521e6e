"""Activity duration helpers."""

from __future__ import annotations

import math
from typing import Any, Optional

from activity_log_engine.schema import DurationSplit


def coerce_minutes(value: Any) -> Optional[int]:
    """Return a non-negative whole number of minutes, or None when unusable."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if math.isnan(number) or math.isinf(number) or number < 0:
        return None
    return int(number)


def split_duration(total: Any) -> DurationSplit:
    """Split total minutes into hours and remaining minutes."""

    minutes = coerce_minutes(total)
    if minutes is None:
        return DurationSplit(hours=0, minutes=0)
    return DurationSplit(hours=minutes // 60, minutes=minutes % 60)


def combine_duration(hours: Any, minutes: Any) -> int:
    """Inverse of split_duration; unusable parts count as zero."""

    return (coerce_minutes(hours) or 0) * 60 + (coerce_minutes(minutes) or 0)
