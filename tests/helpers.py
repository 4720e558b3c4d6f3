"""Page and analyzer doubles shared by the tests."""

from typing import Optional

from siteaudit.core.fetcher import FetchedPage
from siteaudit.core.grading import grade_for
from siteaudit.core.models import DimensionResult, Impact, Issue, IssueType


def build_page(
    html: str = "",
    url: str = "https://example.com/",
    headers: Optional[dict] = None,
    elapsed_ms: int = 100,
    body: Optional[bytes] = None,
) -> FetchedPage:
    """A fetched page as the fetcher would return it."""
    return FetchedPage(
        url=url,
        status=200,
        headers={key.lower(): value for key, value in (headers or {}).items()},
        body=body if body is not None else html.encode("utf-8"),
        elapsed_ms=elapsed_ms,
    )


def build_result(score: int, issue_count: int = 0) -> DimensionResult:
    """A DimensionResult with ``issue_count`` placeholder warnings."""
    issues = tuple(
        Issue(type=IssueType.WARNING, message=f"issue {i}", impact=Impact.MEDIUM)
        for i in range(issue_count)
    )
    return DimensionResult(score=score, grade=grade_for(score), issues=issues)


class FakeAnalyzer:
    """Stands in for a dimension analyzer without touching the network."""

    def __init__(self, result: Optional[DimensionResult] = None, error: Optional[Exception] = None):
        self.result = result
        self.error = error
        self.calls: list[str] = []

    async def analyze(self, url: str) -> DimensionResult:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.result
