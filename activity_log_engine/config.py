"""Policy constants and YAML settings loader."""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Union

import yaml

# Typical session length credited to log entries that record no duration.
DEFAULT_SESSION_MINUTES = 30
UNRECORDED_EMOTION = "unrecorded"
SCORE_RANGE = (0.0, 100.0)


@dataclass(frozen=True)
class Settings:
    """Tunable policy values shared by the normalizer and the aggregator."""

    default_session_minutes: int = DEFAULT_SESSION_MINUTES
    unrecorded_emotion: str = UNRECORDED_EMOTION
    score_range: tuple[float, float] = SCORE_RANGE


DEFAULT_SETTINGS = Settings()


def load_settings(path: Union[str, Path]) -> Settings:
    """Load settings from a YAML mapping, falling back to defaults for missing keys."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML root must be a mapping/dict: {path}")

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown settings keys {unknown} in {path}")

    values: dict[str, Any] = dict(data)
    if "default_session_minutes" in values:
        minutes = values["default_session_minutes"]
        if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes < 0:
            raise ValueError("default_session_minutes must be a non-negative integer")
    if "unrecorded_emotion" in values:
        label = str(values["unrecorded_emotion"] or "").strip()
        if not label:
            raise ValueError("unrecorded_emotion must be a non-empty string")
        values["unrecorded_emotion"] = label
    if "score_range" in values:
        bounds = values["score_range"]
        if not isinstance(bounds, (list, tuple)) or len(bounds) != 2:
            raise ValueError("score_range must be a [low, high] pair")
        try:
            low, high = float(bounds[0]), float(bounds[1])
        except (TypeError, ValueError) as exc:
            raise ValueError("score_range bounds must be numbers") from exc
        if low > high:
            raise ValueError("score_range low bound exceeds high bound")
        values["score_range"] = (low, high)

    return Settings(**values)
