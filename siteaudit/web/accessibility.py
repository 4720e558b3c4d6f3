"""
Accessibility Checker Module
============================

Static accessibility checks for a single page: alternative text, heading
structure, form labels, inline colours, keyboard navigation, landmarks,
page language and skip links.
"""

from bs4 import BeautifulSoup
from loguru import logger

from siteaudit.core.exceptions import AnalysisError
from siteaudit.core.fetcher import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, FetchedPage, fetch_page
from siteaudit.core.models import DimensionResult, Impact, IssueType, ScoreCard

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
FOCUSABLE_SELECTOR = "a, button, input, select, textarea, [tabindex]"
LANDMARK_SELECTOR = (
    '[role="main"], [role="navigation"], [role="banner"], [role="contentinfo"], '
    "main, nav, header, footer"
)
SKIP_LINK_WORDS = ("skip", "jump")


class AccessibilityChecker:
    """
    Check a page for common accessibility problems.

    Checks:
    - Images without alt attributes
    - Missing H1 and skipped heading levels
    - Form inputs without an associated label
    - Inline colour styles (contrast needs review)
    - Explicit tab order
    - ARIA landmarks / semantic sections
    - Page language
    - Skip navigation links
    """

    dimension = "Accessibility"

    MAX_ALT_DEDUCTION = 20

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, user_agent: str = DEFAULT_USER_AGENT):
        self.timeout = timeout
        self.user_agent = user_agent

    async def analyze(self, url: str) -> DimensionResult:
        """
        Fetch and check a page.

        Args:
            url: URL to check

        Returns:
            DimensionResult for the accessibility dimension

        Raises:
            AnalysisError: if the page could not be fetched or analyzed
        """
        logger.info("Analyzing accessibility for: {}", url)
        try:
            page = await fetch_page(url, timeout=self.timeout, user_agent=self.user_agent)
            result = self.evaluate(page)
        except Exception as e:
            logger.error("Accessibility analysis error for {}: {}", url, e)
            raise AnalysisError(self.dimension, e) from e

        logger.info("Accessibility analysis completed - Score: {}", result.score)
        return result

    check = analyze

    def evaluate(self, page: FetchedPage) -> DimensionResult:
        """Score an already fetched page."""
        soup = page.soup()
        card = ScoreCard()
        details: dict = {}

        self._check_images(soup, card, details)
        self._check_headings(soup, card, details)
        self._check_forms(soup, card, details)
        self._check_color_contrast(soup, card, details)
        self._check_keyboard(soup, card, details)
        self._check_landmarks(soup, card, details)
        self._check_language(soup, card, details)
        self._check_skip_links(soup, card, details)

        recommendations = []
        if details["imagesWithoutAlt"] > 0:
            recommendations.append("Add descriptive alt text to all images")
        if details["inputsWithoutLabels"] > 0:
            recommendations.append("Associate all form inputs with proper labels")
        if details["headingIssues"] > 0:
            recommendations.append("Fix heading hierarchy (H1 → H2 → H3, etc.)")
        recommendations.append("Test with screen readers and keyboard navigation")
        recommendations.append("Ensure sufficient color contrast (4.5:1 for normal text)")

        return card.build(recommendations, details)

    def _check_images(self, soup: BeautifulSoup, card: ScoreCard, details: dict) -> None:
        """WCAG 1.1.1: Non-text Content"""
        total_images = len(soup.find_all("img"))
        missing_alt = len(soup.select("img:not([alt])"))
        details["totalImages"] = total_images
        details["imagesWithoutAlt"] = missing_alt

        if missing_alt > 0:
            card.flag(
                IssueType.ERROR,
                f"{missing_alt} of {total_images} images missing alt text",
                Impact.HIGH,
                min(missing_alt * 3, self.MAX_ALT_DEDUCTION),
            )

    def _check_headings(self, soup: BeautifulSoup, card: ScoreCard, details: dict) -> None:
        """WCAG 1.3.1: Info and Relationships"""
        headings = soup.find_all(HEADING_TAGS)
        heading_issues = 0

        if not soup.find("h1"):
            card.flag(IssueType.ERROR, "Missing H1 heading", Impact.HIGH, 15)
            heading_issues += 1

        previous_level = 0
        for heading in headings:
            level = int(heading.name[1])
            if previous_level != 0 and level > previous_level + 1:
                heading_issues += 1
            previous_level = level

        if heading_issues > 1:
            card.flag(IssueType.WARNING, "Improper heading hierarchy", Impact.MEDIUM, 10)

        details["headingCount"] = len(headings)
        details["headingIssues"] = heading_issues

    def _check_forms(self, soup: BeautifulSoup, card: ScoreCard, details: dict) -> None:
        """WCAG 1.3.1 / 4.1.2: inputs need an accessible name"""
        unlabeled = 0
        for input_elem in soup.find_all("input"):
            if (input_elem.get("type") or "").lower() == "hidden":
                continue
            if input_elem.has_attr("aria-label") or input_elem.has_attr("aria-labelledby"):
                continue
            input_id = input_elem.get("id")
            if not input_id or not soup.find("label", attrs={"for": input_id}):
                unlabeled += 1

        details["inputsWithoutLabels"] = unlabeled
        if unlabeled > 0:
            card.flag(
                IssueType.ERROR,
                f"{unlabeled} form inputs missing labels",
                Impact.HIGH,
                unlabeled * 5,
            )

    def _check_color_contrast(self, soup: BeautifulSoup, card: ScoreCard, details: dict) -> None:
        """WCAG 1.4.3: Contrast (inline styles only)"""
        inline_colors = len(soup.select('[style*="color"]'))
        details["inlineColorElements"] = inline_colors

        if inline_colors > 0:
            card.flag(
                IssueType.WARNING,
                "Elements with inline colors detected - check contrast ratios",
                Impact.MEDIUM,
                5,
            )

    def _check_keyboard(self, soup: BeautifulSoup, card: ScoreCard, details: dict) -> None:
        """WCAG 2.4.3: Focus Order"""
        focusable = len(soup.select(FOCUSABLE_SELECTOR))
        with_tabindex = len(soup.select("[tabindex]"))
        details["focusableElements"] = focusable
        details["elementsWithTabindex"] = with_tabindex

        if focusable > 0 and with_tabindex == 0:
            card.flag(IssueType.INFO, "Consider adding proper tab navigation order", Impact.LOW, 3)

    def _check_landmarks(self, soup: BeautifulSoup, card: ScoreCard, details: dict) -> None:
        """WCAG 1.3.1: landmarks"""
        landmarks = len(soup.select(LANDMARK_SELECTOR))
        details["landmarkCount"] = landmarks

        if landmarks == 0:
            card.flag(
                IssueType.WARNING,
                "No ARIA landmarks or semantic HTML5 elements found",
                Impact.MEDIUM,
                8,
            )

    def _check_language(self, soup: BeautifulSoup, card: ScoreCard, details: dict) -> None:
        """WCAG 3.1.1: Language of Page"""
        html_tag = soup.find("html")
        has_lang = bool(html_tag and html_tag.get("lang"))
        details["hasLanguageAttribute"] = has_lang

        if not has_lang:
            card.flag(IssueType.WARNING, "Missing language attribute on HTML element", Impact.MEDIUM, 7)

    def _check_skip_links(self, soup: BeautifulSoup, card: ScoreCard, details: dict) -> None:
        """WCAG 2.4.1: Bypass Blocks"""
        skip_links = [
            anchor for anchor in soup.select('a[href^="#"]')
            if any(word in anchor.get_text().lower() for word in SKIP_LINK_WORDS)
        ]
        details["skipLinksCount"] = len(skip_links)

        if not skip_links:
            card.flag(IssueType.INFO, "No skip navigation links found", Impact.LOW, 3)
