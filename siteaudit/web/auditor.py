"""
Website Auditor Module
======================

Runs the SEO, performance, accessibility and best-practices analyzers
against one URL and merges their results into a single audit report.
"""

import asyncio
from typing import Optional

from loguru import logger

from siteaudit.core.fetcher import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from siteaudit.core.grading import grade_for
from siteaudit.core.models import (
    AuditReport,
    AuditSummary,
    DimensionFailure,
    DimensionOutcome,
    DimensionResult,
    OverallScore,
    round_half_up,
)
from siteaudit.web.accessibility import AccessibilityChecker
from siteaudit.web.best_practices import BestPracticesAnalyzer
from siteaudit.web.performance import PERFORMANCE_TIMEOUT, PerformanceAnalyzer
from siteaudit.web.seo import SEOAnalyzer

DIMENSIONS = ("seo", "performance", "accessibility", "best_practices")


class WebsiteAuditor:
    """
    Audit a single page across all four dimensions.

    The analyzers run concurrently, each with its own fetch. A failing
    analyzer is replaced by a ``DimensionFailure`` scoring 0; the others
    are unaffected.
    """

    def __init__(
        self,
        seo: Optional[SEOAnalyzer] = None,
        performance: Optional[PerformanceAnalyzer] = None,
        accessibility: Optional[AccessibilityChecker] = None,
        best_practices: Optional[BestPracticesAnalyzer] = None,
    ):
        self.analyzers = {
            "seo": seo or SEOAnalyzer(),
            "performance": performance or PerformanceAnalyzer(),
            "accessibility": accessibility or AccessibilityChecker(),
            "best_practices": best_practices or BestPracticesAnalyzer(),
        }

    @classmethod
    def from_settings(
        cls,
        timeout: float = DEFAULT_TIMEOUT,
        performance_timeout: float = PERFORMANCE_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> "WebsiteAuditor":
        """Build an auditor whose analyzers share a user agent and timeouts."""
        return cls(
            seo=SEOAnalyzer(timeout=timeout, user_agent=user_agent),
            performance=PerformanceAnalyzer(timeout=performance_timeout, user_agent=user_agent),
            accessibility=AccessibilityChecker(timeout=timeout, user_agent=user_agent),
            best_practices=BestPracticesAnalyzer(timeout=timeout, user_agent=user_agent),
        )

    async def audit(self, url: str) -> AuditReport:
        """
        Run the complete audit.

        Args:
            url: Validated http(s) URL to audit

        Returns:
            AuditReport; never raises for analyzer failures
        """
        logger.info("Starting full audit for: {}", url)

        outcomes = await asyncio.gather(
            *(self.analyzers[name].analyze(url) for name in DIMENSIONS),
            return_exceptions=True,
        )

        results: dict[str, DimensionOutcome] = {}
        for name, outcome in zip(DIMENSIONS, outcomes):
            if isinstance(outcome, Exception):
                logger.warning("{} dimension failed for {}: {}", name, url, outcome)
                results[name] = DimensionFailure(error=str(outcome))
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                results[name] = outcome

        report = self.combine(results)
        logger.info("Audit completed for: {} - Score: {}", url, report.overall.score)
        return report

    @staticmethod
    def combine(results: dict[str, DimensionOutcome]) -> AuditReport:
        """Merge per-dimension outcomes into an AuditReport."""
        scores = [results[name].score for name in DIMENSIONS]
        overall_score = round_half_up(sum(scores) / len(scores))

        total_issues = sum(
            len(results[name].issues)
            for name in DIMENSIONS
            if isinstance(results[name], DimensionResult)
        )

        return AuditReport(
            overall=OverallScore(score=overall_score, grade=grade_for(overall_score)),
            seo=results["seo"],
            performance=results["performance"],
            accessibility=results["accessibility"],
            best_practices=results["best_practices"],
            summary=AuditSummary(total_issues=total_issues),
        )


async def run_full_audit(url: str, auditor: Optional[WebsiteAuditor] = None) -> AuditReport:
    """Audit ``url`` with default analyzers unless an auditor is supplied."""
    return await (auditor or WebsiteAuditor()).audit(url)
