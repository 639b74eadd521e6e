"""Descriptive roll-up statistics for a dashboard view."""

from __future__ import annotations

import numpy as np

from activity_log_engine.schema import DashboardView


def compute_metrics(view: DashboardView) -> dict:
    """Compute record, activity-time and emotion roll-ups."""

    if not view.record_count:
        return {
            "recordCount": 0,
            "activeDays": 0,
            "totalMinutes": 0,
            "averageMinutesPerDay": 0.0,
            "medianMinutesPerDay": 0.0,
            "maxMinutesPerDay": 0,
            "topEmotion": None,
            "distinctEmotions": 0,
        }

    daily = np.asarray([point["minutes"] for point in view.activity_series], dtype=float)
    has_days = daily.size > 0
    top = view.emotion_distribution[0] if view.emotion_distribution else None

    return {
        "recordCount": view.record_count,
        "activeDays": int(daily.size),
        "totalMinutes": int(daily.sum()),
        "averageMinutesPerDay": round(float(np.mean(daily)), 1) if has_days else 0.0,
        "medianMinutesPerDay": round(float(np.median(daily)), 1) if has_days else 0.0,
        "maxMinutesPerDay": int(daily.max()) if has_days else 0,
        "topEmotion": top["name"] if top else None,
        "distinctEmotions": len(view.emotion_distribution),
    }
