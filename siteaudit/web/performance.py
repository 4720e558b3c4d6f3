"""
Performance Analyzer Module
===========================

Load-time, page-size and response-header checks for a single page, with
a heuristic Core Web Vitals estimate derived from the measured load time.
"""

from loguru import logger

from siteaudit.core.exceptions import AnalysisError
from siteaudit.core.fetcher import DEFAULT_USER_AGENT, FetchedPage, fetch_page
from siteaudit.core.models import DimensionResult, Impact, IssueType, ScoreCard, round_half_up

PERFORMANCE_TIMEOUT = 15.0

CDN_SERVERS = ("cloudflare", "cloudfront", "fastly", "maxcdn")


def estimate_core_web_vitals(load_time_ms: int) -> dict:
    """
    Rough Core Web Vitals from the document load time.

    Only LCP is derived; FID and CLS need real user or layout data and are
    always reported as good.
    """
    if load_time_ms < 2500:
        lcp = "good"
    elif load_time_ms < 4000:
        lcp = "needs-improvement"
    else:
        lcp = "poor"

    return {"lcp": lcp, "fid": "good", "cls": "good"}


class PerformanceAnalyzer:
    """
    Analyze page performance from a single timed fetch.

    Analyzes:
    - Document load time
    - Page size
    - Compression
    - Caching headers
    - CDN usage
    """

    dimension = "Performance"

    SLOW_LOAD_MS = 3000
    MODERATE_LOAD_MS = 1500
    LARGE_PAGE_KB = 1000
    HEAVY_PAGE_KB = 500

    def __init__(self, timeout: float = PERFORMANCE_TIMEOUT, user_agent: str = DEFAULT_USER_AGENT):
        self.timeout = timeout
        self.user_agent = user_agent

    async def analyze(self, url: str) -> DimensionResult:
        """
        Fetch a page, timing the request, and analyze it.

        Args:
            url: URL to analyze

        Returns:
            DimensionResult with metrics and Core Web Vitals estimates

        Raises:
            AnalysisError: if the page could not be fetched or analyzed
        """
        logger.info("Analyzing performance for: {}", url)
        try:
            page = await fetch_page(url, timeout=self.timeout, user_agent=self.user_agent)
            result = self.evaluate(page)
        except Exception as e:
            logger.error("Performance analysis error for {}: {}", url, e)
            raise AnalysisError(self.dimension, e) from e

        logger.info("Performance analysis completed - Score: {}", result.score)
        return result

    def evaluate(self, page: FetchedPage) -> DimensionResult:
        """Score a fetched page using its timing, size and headers."""
        card = ScoreCard()
        load_time = page.elapsed_ms
        size_kb = round_half_up(len(page.body) / 1024)

        if load_time > self.SLOW_LOAD_MS:
            card.flag(IssueType.ERROR, f"Slow page load time: {load_time}ms", Impact.HIGH, 20)
        elif load_time > self.MODERATE_LOAD_MS:
            card.flag(IssueType.WARNING, f"Moderate page load time: {load_time}ms", Impact.MEDIUM, 10)

        if size_kb > self.LARGE_PAGE_KB:
            card.flag(IssueType.WARNING, f"Large page size: {size_kb}KB", Impact.MEDIUM, 15)

        has_compression = bool(page.header("content-encoding"))
        if not has_compression:
            card.flag(IssueType.WARNING, "No compression detected", Impact.MEDIUM, 10)

        has_caching = bool(page.header("cache-control") or page.header("expires"))
        if not has_caching:
            card.flag(IssueType.WARNING, "No caching headers found", Impact.MEDIUM, 8)

        server = page.header("server").lower()
        has_cdn = any(cdn in server for cdn in CDN_SERVERS)
        if not has_cdn:
            card.flag(IssueType.INFO, "Consider using a CDN for better performance", Impact.LOW, 5)

        recommendations = []
        if load_time > self.MODERATE_LOAD_MS:
            recommendations.append("Optimize images and reduce file sizes")
            recommendations.append("Enable compression (gzip/brotli)")
            recommendations.append("Minimize HTTP requests")
        if size_kb > self.HEAVY_PAGE_KB:
            recommendations.append("Reduce page size by optimizing assets")

        metrics = {
            "loadTime": load_time,
            "pageSize": size_kb,
            "hasCompression": has_compression,
            "hasCaching": has_caching,
            "hasCDN": has_cdn,
            "responseTime": load_time,
        }
        return card.build(recommendations, metrics, core_web_vitals=estimate_core_web_vitals(load_time))
