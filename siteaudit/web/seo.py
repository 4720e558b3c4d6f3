"""
SEO Analyzer Module
===================

On-page SEO checks: title and meta description, heading usage, image alt
text, canonical URL and Open Graph tags.
"""

from bs4 import BeautifulSoup
from loguru import logger

from siteaudit.core.exceptions import AnalysisError
from siteaudit.core.fetcher import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, FetchedPage, fetch_page
from siteaudit.core.models import DimensionResult, Impact, IssueType, ScoreCard

NOT_FOUND = "Not found"


class SEOAnalyzer:
    """
    Analyze SEO factors of a single page.

    Analyzes:
    - Title tag and meta description lengths
    - H1 usage
    - Images without alt attributes
    - Canonical URL
    - Open Graph title and description
    """

    dimension = "SEO"

    TITLE_LENGTH = (30, 60)
    DESCRIPTION_LENGTH = (120, 160)
    MAX_ALT_DEDUCTION = 15

    RECOMMENDATIONS = [
        "Fix critical SEO issues first (missing title, meta description, H1)",
        "Optimize title and meta description lengths",
        "Add alt text to all images",
    ]

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, user_agent: str = DEFAULT_USER_AGENT):
        self.timeout = timeout
        self.user_agent = user_agent

    async def analyze(self, url: str) -> DimensionResult:
        """
        Fetch and analyze a page.

        Args:
            url: URL to analyze

        Returns:
            DimensionResult for the SEO dimension

        Raises:
            AnalysisError: if the page could not be fetched or analyzed
        """
        logger.info("Analyzing SEO for: {}", url)
        try:
            page = await fetch_page(url, timeout=self.timeout, user_agent=self.user_agent)
            result = self.evaluate(page)
        except Exception as e:
            logger.error("SEO analysis error for {}: {}", url, e)
            raise AnalysisError(self.dimension, e) from e

        logger.info("SEO analysis completed - Score: {}", result.score)
        return result

    def evaluate(self, page: FetchedPage) -> DimensionResult:
        """Score an already fetched page."""
        soup = page.soup()
        card = ScoreCard()
        details: dict = {}

        self._analyze_title(soup, card, details)
        self._analyze_meta_description(soup, card, details)
        self._analyze_headings(soup, card, details)
        self._analyze_images(soup, card, details)
        self._analyze_canonical(soup, card, details)
        self._analyze_open_graph(soup, card, details)

        recommendations = list(self.RECOMMENDATIONS) if card.issues else []
        return card.build(recommendations, details)

    def _analyze_title(self, soup: BeautifulSoup, card: ScoreCard, details: dict) -> None:
        title = "".join(tag.get_text() for tag in soup.find_all("title")).strip()
        details["title"] = title or NOT_FOUND
        details["titleLength"] = len(title)

        low, high = self.TITLE_LENGTH
        if not title:
            card.flag(IssueType.ERROR, "Missing title tag", Impact.HIGH, 15)
        elif not low <= len(title) <= high:
            card.flag(
                IssueType.WARNING,
                f"Title length should be {low}-{high} characters (current: {len(title)})",
                Impact.MEDIUM,
                10,
            )

    def _analyze_meta_description(self, soup: BeautifulSoup, card: ScoreCard, details: dict) -> None:
        meta = soup.select_one('meta[name="description"]')
        description = meta.get("content") if meta else None
        details["metaDescription"] = description or NOT_FOUND
        details["metaDescriptionLength"] = len(description) if description else 0

        low, high = self.DESCRIPTION_LENGTH
        if not description:
            card.flag(IssueType.ERROR, "Missing meta description", Impact.HIGH, 15)
        elif not low <= len(description) <= high:
            card.flag(
                IssueType.WARNING,
                f"Meta description should be {low}-{high} characters (current: {len(description)})",
                Impact.MEDIUM,
                8,
            )

    def _analyze_headings(self, soup: BeautifulSoup, card: ScoreCard, details: dict) -> None:
        h1_count = len(soup.find_all("h1"))
        details["h1Count"] = h1_count

        if h1_count == 0:
            card.flag(IssueType.ERROR, "Missing H1 tag", Impact.HIGH, 12)
        elif h1_count > 1:
            card.flag(IssueType.WARNING, "Multiple H1 tags found", Impact.MEDIUM, 8)

    def _analyze_images(self, soup: BeautifulSoup, card: ScoreCard, details: dict) -> None:
        missing_alt = len(soup.select("img:not([alt])"))
        details["imagesWithoutAlt"] = missing_alt

        if missing_alt > 0:
            card.flag(
                IssueType.WARNING,
                f"{missing_alt} images missing alt text",
                Impact.MEDIUM,
                min(missing_alt * 2, self.MAX_ALT_DEDUCTION),
            )

    def _analyze_canonical(self, soup: BeautifulSoup, card: ScoreCard, details: dict) -> None:
        canonical = soup.select_one('link[rel="canonical"]')
        has_canonical = bool(canonical and canonical.get("href"))
        details["hasCanonical"] = has_canonical

        if not has_canonical:
            card.flag(IssueType.WARNING, "Missing canonical URL", Impact.LOW, 5)

    def _analyze_open_graph(self, soup: BeautifulSoup, card: ScoreCard, details: dict) -> None:
        og_title = soup.select_one('meta[property="og:title"]')
        og_description = soup.select_one('meta[property="og:description"]')
        has_open_graph = bool(
            og_title and og_title.get("content")
            and og_description and og_description.get("content")
        )
        details["hasOpenGraph"] = has_open_graph

        if not has_open_graph:
            card.flag(IssueType.INFO, "Missing Open Graph tags for social sharing", Impact.LOW, 3)
