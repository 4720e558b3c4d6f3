"""Tests for the website auditor."""

import asyncio

import pytest
from aiohttp import test_utils, web

from siteaudit.core.exceptions import AnalysisError, FetchError
from siteaudit.core.models import DimensionFailure, DimensionResult
from siteaudit.web.auditor import DIMENSIONS, WebsiteAuditor, run_full_audit
from tests.helpers import FakeAnalyzer, build_result

URL = "https://example.com/"

SAMPLE_PAGE = """
<html lang="en">
<head>
  <title>Acme Widgets - Handmade Widgets for Every Home</title>
  <meta name="viewport" content="width=device-width, initial-scale=1">
</head>
<body><main><h1>Widgets</h1><img src="w.png"></main></body>
</html>
"""


def fake_auditor(**analyzers) -> WebsiteAuditor:
    defaults = {name: FakeAnalyzer(build_result(100)) for name in DIMENSIONS}
    defaults.update(analyzers)
    return WebsiteAuditor(**defaults)


class TestWebsiteAuditor:
    """Tests for WebsiteAuditor.audit."""

    @pytest.mark.asyncio
    async def test_overall_is_mean_of_dimensions(self):
        """Test overall score, grade and issue totals."""
        auditor = fake_auditor(
            seo=FakeAnalyzer(build_result(52, issue_count=4)),
            performance=FakeAnalyzer(build_result(77, issue_count=2)),
            accessibility=FakeAnalyzer(build_result(90, issue_count=1)),
            best_practices=FakeAnalyzer(build_result(42, issue_count=5)),
        )

        report = await auditor.audit(URL)

        assert report.overall.score == 65
        assert report.overall.grade == "D"
        assert report.summary.total_issues == 12
        assert report.summary.critical_issues == 0
        assert report.summary.recommendations == ()

    @pytest.mark.asyncio
    async def test_overall_rounds_half_up(self):
        """Test that a .5 mean rounds upward."""
        auditor = fake_auditor(
            seo=FakeAnalyzer(build_result(90)),
            performance=FakeAnalyzer(build_result(91)),
            accessibility=FakeAnalyzer(build_result(90)),
            best_practices=FakeAnalyzer(build_result(91)),
        )

        report = await auditor.audit(URL)

        assert report.overall.score == 91
        assert report.overall.grade == "A"

    @pytest.mark.asyncio
    async def test_every_analyzer_gets_the_url(self):
        """Test that each dimension is analyzed exactly once."""
        analyzers = {name: FakeAnalyzer(build_result(100)) for name in DIMENSIONS}
        await WebsiteAuditor(**analyzers).audit(URL)

        for analyzer in analyzers.values():
            assert analyzer.calls == [URL]

    @pytest.mark.asyncio
    async def test_failed_dimension_is_isolated(self):
        """Test that one failing analyzer does not affect the others."""
        timeout = AnalysisError("Performance", FetchError("Request timed out after 15s"))
        auditor = fake_auditor(
            seo=FakeAnalyzer(build_result(80, issue_count=3)),
            performance=FakeAnalyzer(error=timeout),
            accessibility=FakeAnalyzer(build_result(90, issue_count=2)),
            best_practices=FakeAnalyzer(build_result(70, issue_count=1)),
        )

        report = await auditor.audit(URL)

        assert isinstance(report.performance, DimensionFailure)
        assert report.performance.to_dict() == {
            "error": "Performance analysis failed: Request timed out after 15s",
            "score": 0,
        }
        assert report.seo.score == 80
        assert report.overall.score == 60
        assert report.overall.grade == "D"
        assert report.summary.total_issues == 6

    @pytest.mark.asyncio
    async def test_all_dimensions_failing(self):
        """Test that a total failure still produces a report."""
        error = AnalysisError("SEO", FetchError("getaddrinfo ENOTFOUND"))
        auditor = WebsiteAuditor(**{name: FakeAnalyzer(error=error) for name in DIMENSIONS})

        report = await auditor.audit(URL)

        assert report.overall.score == 0
        assert report.overall.grade == "F"
        assert report.summary.total_issues == 0
        for outcome in report.dimensions.values():
            assert isinstance(outcome, DimensionFailure)
            assert outcome.score == 0

    @pytest.mark.asyncio
    async def test_analyzers_run_concurrently(self):
        """Test that no analyzer waits for another to finish."""
        started = []
        all_started = asyncio.Event()

        class BarrierAnalyzer:
            async def analyze(self, url):
                started.append(url)
                if len(started) == len(DIMENSIONS):
                    all_started.set()
                await asyncio.wait_for(all_started.wait(), timeout=1)
                return build_result(100)

        report = await WebsiteAuditor(**{name: BarrierAnalyzer() for name in DIMENSIONS}).audit(URL)

        assert all(isinstance(outcome, DimensionResult) for outcome in report.dimensions.values())
        assert report.overall.score == 100

    @pytest.mark.asyncio
    async def test_report_serialization(self):
        """Test the wire shape of a report."""
        auditor = fake_auditor(performance=FakeAnalyzer(error=RuntimeError("boom")))

        data = (await auditor.audit(URL)).to_dict()

        assert list(data) == ["overall", "seo", "performance", "accessibility", "bestPractices", "summary"]
        assert set(data["overall"]) == {"score", "grade", "timestamp"}
        assert data["overall"]["timestamp"].endswith("Z")
        assert data["performance"] == {"error": "boom", "score": 0}
        assert data["summary"] == {"totalIssues": 0, "criticalIssues": 0, "recommendations": []}

    def test_combine_is_independent_of_issue_counts(self):
        """Test that issues do not affect the overall score."""
        results = {name: build_result(75, issue_count=10) for name in DIMENSIONS}
        report = WebsiteAuditor.combine(results)

        assert report.overall.score == 75
        assert report.overall.grade == "C"
        assert report.summary.total_issues == 40

    def test_from_settings_configures_analyzers(self):
        """Test that timeouts and user agent reach every analyzer."""
        auditor = WebsiteAuditor.from_settings(timeout=3, performance_timeout=7, user_agent="Bot/1.0")

        assert auditor.analyzers["performance"].timeout == 7
        for name in ("seo", "accessibility", "best_practices"):
            assert auditor.analyzers[name].timeout == 3
        assert all(a.user_agent == "Bot/1.0" for a in auditor.analyzers.values())


class TestRunFullAudit:
    """End-to-end audits against an in-process server."""

    @pytest.mark.asyncio
    async def test_audit_of_live_page(self):
        """Test every dimension against a real HTTP response."""
        async def home(request):
            return web.Response(text=SAMPLE_PAGE, content_type="text/html")

        app = web.Application()
        app.router.add_get("/", home)

        async with test_utils.TestServer(app) as server:
            url = str(server.make_url("/"))
            report = await run_full_audit(url, WebsiteAuditor.from_settings(timeout=5, performance_timeout=5))

        for outcome in report.dimensions.values():
            assert isinstance(outcome, DimensionResult)
        assert report.seo.details["h1Count"] == 1
        assert report.seo.details["imagesWithoutAlt"] == 1
        assert report.best_practices.details["isHTTPS"] is False
        assert report.performance.core_web_vitals is not None

        mean = sum(outcome.score for outcome in report.dimensions.values()) / 4
        assert abs(report.overall.score - mean) <= 0.5

    @pytest.mark.asyncio
    async def test_unreachable_host(self):
        """Test that an unreachable host fails every dimension without raising."""
        url = f"http://127.0.0.1:{test_utils.unused_port()}/"

        report = await run_full_audit(url, WebsiteAuditor.from_settings(timeout=2, performance_timeout=2))

        assert report.overall.score == 0
        assert report.overall.grade == "F"
        for outcome in report.dimensions.values():
            assert isinstance(outcome, DimensionFailure)
