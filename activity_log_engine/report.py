"""Narrative report input assembly and prompt rendering."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Mapping, Optional

from activity_log_engine.metrics import compute_metrics
from activity_log_engine.schema import DashboardView

DEFAULT_TONE = "분석적이고 요약 중심의 톤"
PURPOSES = {"parent": "학부모 상담용", "school": "학교 제출용"}
DEFAULT_PURPOSE = "기본 리포트"
MAX_SAMPLES = 20


class ReportCategory(Enum):
    FULL = ("full", "전체 리포트")
    EMOTION = ("emotion", "감정 변화")
    ACTIVITY_FLOW = ("activity_flow", "활동 유동 변화")
    ABILITY = ("ability", "활동 능력 변화")

    def __init__(self, code: str, label: str):
        self.code = code
        self.label = label

    @classmethod
    def parse(cls, value: Optional[str]) -> "ReportCategory":
        """Match a code or label; unknown values fall back to the full report."""

        text = (value or "").strip()
        for category in cls:
            if text in (category.code, category.label):
                return category
        return cls.FULL


_FOCUS = {
    ReportCategory.EMOTION: (
        "- 기간 동안 학생의 정서적 흐름(안정감, 불안 등)이 어떻게 변화했는지 분석하세요.\n"
        "- 특정 활동이나 시간대, 환경 요인과 감정의 상관관계를 파악하세요.",
        ["감정 변화 요약", "주요 감정 흐름 분석", "감정 유발 요인 및 반응", "정서적 안정을 위한 제언", "마무리"],
    ),
    ReportCategory.ACTIVITY_FLOW: (
        "- 학생의 활동 참여 패턴이 어떻게 변화했는지 분석하세요.\n"
        "- 선호 활동과 비선호 활동 간의 참여 시간 변화 추이를 서술하세요.",
        ["활동 패턴 요약", "활동 유형별 참여 변화", "활동 전이 및 참여 태도 분석", "활동 다양성 증진을 위한 제언", "마무리"],
    ),
    ReportCategory.ABILITY: (
        "- 활동 수행 수준(매우 우수~도전적)의 변화 추이를 분석하세요.\n"
        "- 이전에 어려워했던 활동에서 성취를 보인 성장 사례를 찾으세요.",
        ["능력 성장 요약", "영역별 수행 능력 변화 추이", "주요 성취 사례", "향후 발달 목표 및 지도 방안", "마무리"],
    ),
    ReportCategory.FULL: (
        "- 학생의 학교생활 전반(감정, 행동, 학습, 사회성)을 균형 있게 요약하세요.\n"
        "- 강점 위주로 서술하되, 지원이 필요한 부분도 명확히 명시하세요.",
        [
            "기본 정보",
            "전체 개요",
            "강점과 긍정적 변화",
            "도움이 필요한 영역",
            "감정 및 행동 패턴",
            "활동별 능력 분석",
            "지원 제안 및 다음 단계",
            "마무리 문장",
        ],
    ),
}


def build_report_input(
    view: DashboardView,
    student_profile: Optional[Mapping[str, Any]] = None,
    date_range: Optional[Mapping[str, Any]] = None,
    report_options: Optional[Mapping[str, Any]] = None,
    max_samples: int = MAX_SAMPLES,
) -> dict:
    """Assemble the JSON payload handed to the report writer."""

    return {
        "student_profile": dict(student_profile) if student_profile else None,
        "date_range": dict(date_range) if date_range else None,
        "summary_stats": {
            **compute_metrics(view),
            "emotionDistribution": view.emotion_distribution,
            "activitySeries": view.activity_series,
        },
        "activity_samples": view.activity_details[:max_samples],
        "report_options": dict(report_options or {}),
    }


def build_report_prompt(
    category: Optional[str],
    purpose: Optional[str],
    tone: Optional[str],
    payload: Mapping[str, Any],
) -> str:
    """Render the Markdown report instruction text for one category."""

    selected = ReportCategory.parse(category)
    focus, sections = _FOCUS[selected]
    outline = "\n".join(f"# {index}. {title}" for index, title in enumerate(sections, start=1))
    return (
        "당신은 특수교육 전문가입니다. 입력된 통계 데이터와 활동 샘플을 바탕으로 "
        "**Markdown 형식**의 리포트를 작성해 주세요.\n"
        f"- 목적: {PURPOSES.get(purpose or '', DEFAULT_PURPOSE)}\n"
        f"- 어조: {tone or DEFAULT_TONE}\n"
        "- 입력된 JSON 데이터에 기반해서만 서술하세요.\n\n"
        f"**[분석 초점: {selected.label}]**\n{focus}\n\n"
        f"**[입력 데이터]**\n{json.dumps(payload, ensure_ascii=False, indent=2)}\n\n"
        f"**[출력 리포트 목차 구조]**\n{outline}\n"
    )
