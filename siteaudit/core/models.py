"""
Audit Result Models
===================

Records produced by the dimension analyzers and the website auditor.
Every record is built fresh for a single audit and serialized with
``to_dict()`` into the JSON shape returned to callers.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union

from siteaudit.core.grading import grade_for


class IssueType(Enum):
    """Kind of finding."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Impact(Enum):
    """Business impact of a finding."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Issue:
    """A single detected deficiency."""
    type: IssueType
    message: str
    impact: Impact

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "message": self.message,
            "impact": self.impact.value,
        }


@dataclass(frozen=True)
class DimensionResult:
    """Score, grade and findings for one audit dimension."""
    score: int
    grade: str
    issues: tuple[Issue, ...] = ()
    recommendations: tuple[str, ...] = ()
    details: dict = field(default_factory=dict)
    core_web_vitals: Optional[dict] = None

    def to_dict(self) -> dict:
        data = {
            "score": self.score,
            "grade": self.grade,
            "issues": [issue.to_dict() for issue in self.issues],
            "recommendations": list(self.recommendations),
            "details": dict(self.details),
        }
        if self.core_web_vitals is not None:
            data["metrics"] = dict(self.details)
            data["coreWebVitals"] = dict(self.core_web_vitals)
        return data


@dataclass(frozen=True)
class DimensionFailure:
    """Placeholder for a dimension whose analysis raised."""
    error: str
    score: int = 0

    def to_dict(self) -> dict:
        return {"error": self.error, "score": self.score}


DimensionOutcome = Union[DimensionResult, DimensionFailure]


class ScoreCard:
    """
    Running score for one analyzer run.

    Starts at 100; each flagged issue subtracts its deduction. The final
    score is clamped at 0. Deductions are summed, so the order in which
    checks run does not change the score, only the order of ``issues``.
    """

    START_SCORE = 100

    def __init__(self):
        self._findings: list[tuple[Issue, int]] = []

    def flag(self, issue_type: IssueType, message: str, impact: Impact, deduction: int = 0) -> Issue:
        issue = Issue(type=issue_type, message=message, impact=impact)
        self._findings.append((issue, deduction))
        return issue

    @property
    def issues(self) -> list[Issue]:
        return [issue for issue, _ in self._findings]

    @property
    def raw_score(self) -> int:
        """Unclamped running total; may be negative."""
        return self.START_SCORE - sum(deduction for _, deduction in self._findings)

    @property
    def score(self) -> int:
        return max(self.raw_score, 0)

    def build(
        self,
        recommendations: list[str],
        details: dict,
        core_web_vitals: Optional[dict] = None,
    ) -> DimensionResult:
        score = self.score
        return DimensionResult(
            score=score,
            grade=grade_for(score),
            issues=tuple(self.issues),
            recommendations=tuple(recommendations),
            details=details,
            core_web_vitals=core_web_vitals,
        )


def round_half_up(value: float) -> int:
    """Round .5 upwards, the way browsers and JSON clients expect."""
    return int(math.floor(value + 0.5))


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class OverallScore:
    """Combined score across all dimensions."""
    score: int
    grade: str
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> dict:
        return {"score": self.score, "grade": self.grade, "timestamp": self.timestamp}


@dataclass(frozen=True)
class AuditSummary:
    """
    Issue totals across dimensions.

    ``critical_issues`` and ``recommendations`` are reserved and always
    left at their defaults.
    """
    total_issues: int = 0
    critical_issues: int = 0
    recommendations: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "totalIssues": self.total_issues,
            "criticalIssues": self.critical_issues,
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class AuditReport:
    """Complete audit of a single page."""
    overall: OverallScore
    seo: DimensionOutcome
    performance: DimensionOutcome
    accessibility: DimensionOutcome
    best_practices: DimensionOutcome
    summary: AuditSummary

    @property
    def dimensions(self) -> dict[str, DimensionOutcome]:
        return {
            "seo": self.seo,
            "performance": self.performance,
            "accessibility": self.accessibility,
            "best_practices": self.best_practices,
        }

    def to_dict(self) -> dict:
        return {
            "overall": self.overall.to_dict(),
            "seo": self.seo.to_dict(),
            "performance": self.performance.to_dict(),
            "accessibility": self.accessibility.to_dict(),
            "bestPractices": self.best_practices.to_dict(),
            "summary": self.summary.to_dict(),
        }
