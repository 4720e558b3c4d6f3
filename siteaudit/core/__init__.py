"""Core building blocks: result records, grading, fetching and URL checks."""

from siteaudit.core.models import (
    AuditReport,
    AuditSummary,
    DimensionFailure,
    DimensionResult,
    Impact,
    Issue,
    IssueType,
    OverallScore,
    ScoreCard,
)
from siteaudit.core.grading import grade_for
from siteaudit.core.exceptions import AuditError, FetchError, AnalysisError
from siteaudit.core.fetcher import FetchedPage, fetch_page

__all__ = [
    "AuditReport",
    "AuditSummary",
    "DimensionFailure",
    "DimensionResult",
    "Impact",
    "Issue",
    "IssueType",
    "OverallScore",
    "ScoreCard",
    "grade_for",
    "AuditError",
    "FetchError",
    "AnalysisError",
    "FetchedPage",
    "fetch_page",
]
