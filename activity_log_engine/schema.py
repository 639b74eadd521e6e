"""Core data schema for activity analyses and log entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Student:
    """Student participating in an activity."""

    id: str
    name: str


@dataclass(frozen=True)
class DurationSplit:
    hours: int
    minutes: int


@dataclass(frozen=True)
class ActivityAnalysis:
    """Canonical analysis record built by the normalizer.

    Every field carries a default so absent information is always represented.
    """

    students: tuple[Student, ...] = ()
    date: Optional[str] = None
    activity_name: str = ""
    activity_type: str = ""
    note: str = ""
    duration_minutes: Optional[int] = None
    level: str = ""
    ability: tuple[str, ...] = ()
    score: Optional[float] = None
    score_explanation: str = ""
    emotion_summary: str = ""
    emotion_cause: str = ""
    observed_behaviors: str = ""
    emotion_tags: frozenset[str] = frozenset()
    raw_text_cleaned: str = ""

    def to_dict(self) -> dict:
        """Render the camelCase view consumed by the editing UI."""

        return {
            "students": [{"id": s.id, "name": s.name} for s in self.students],
            "date": self.date,
            "activityName": self.activity_name,
            "activityType": self.activity_type,
            "note": self.note,
            "durationMinutes": self.duration_minutes,
            "level": self.level,
            "ability": list(self.ability),
            "score": self.score,
            "scoreExplanation": self.score_explanation,
            "emotionSummary": self.emotion_summary,
            "emotionCause": self.emotion_cause,
            "observedBehaviors": self.observed_behaviors,
            "emotionTags": sorted(self.emotion_tags),
            "rawTextCleaned": self.raw_text_cleaned,
        }


@dataclass
class LogEntry:
    """Persisted log row for one student and one activity occurrence."""

    log_date: Optional[str] = None
    emotion_tag: Optional[str] = None
    activity_tags: Any = None
    related_metrics: Any = None
    log_content: Optional[str] = None
    created_at: Optional[str] = None
    student_id: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "LogEntry":
        return cls(
            log_date=row.get("log_date"),
            emotion_tag=row.get("emotion_tag"),
            activity_tags=row.get("activity_tags"),
            related_metrics=row.get("related_metrics"),
            log_content=row.get("log_content"),
            created_at=row.get("created_at"),
            student_id=row.get("student_id"),
        )


@dataclass
class DashboardView:
    """Chart-ready dashboard payload, rebuilt on every query."""

    record_count: int = 0
    emotion_distribution: list[dict] = field(default_factory=list)
    emotion_details: list[dict] = field(default_factory=list)
    activity_series: list[dict] = field(default_factory=list)
    activity_details: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "recordCount": self.record_count,
            "emotionDistribution": self.emotion_distribution,
            "emotionDetails": self.emotion_details,
            "activitySeries": self.activity_series,
            "activityDetails": self.activity_details,
        }
