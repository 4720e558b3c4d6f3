"""
Best Practices Analyzer Module
==============================

Transport security, security headers, mobile viewport, favicon, external
link hygiene, mixed content, deprecated markup and inline code checks.
"""

from bs4 import BeautifulSoup
from bs4.element import Tag
from loguru import logger

from siteaudit.core.exceptions import AnalysisError
from siteaudit.core.fetcher import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, FetchedPage, fetch_page
from siteaudit.core.models import DimensionResult, Impact, IssueType, ScoreCard
from siteaudit.core.validators import extract_domain

# header name -> (details key, issue message)
SECURITY_HEADERS = {
    "x-content-type-options": ("contentTypeOptions", "Missing X-Content-Type-Options header"),
    "x-frame-options": ("frameOptions", "Missing X-Frame-Options header"),
    "x-xss-protection": ("xssProtection", "Missing X-XSS-Protection header"),
    "strict-transport-security": ("hsts", "Missing Strict-Transport-Security header"),
}

MIXED_CONTENT_SELECTOR = 'img[src^="http:"], script[src^="http:"], link[href^="http:"]'
DEPRECATED_SELECTOR = "center, font, marquee, blink"


def attr_text(tag: Tag, name: str) -> str:
    """Attribute value as a string; multi-valued attributes are space-joined."""
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return value


class BestPracticesAnalyzer:
    """
    Check a page against general web best practices.

    Checks:
    - HTTPS and security headers
    - Viewport meta tag
    - Favicon
    - rel="noopener noreferrer" on external links
    - Mixed content on HTTPS pages
    - Deprecated HTML elements
    - Inline styles and scripts
    """

    dimension = "Best practices"

    MAX_EXTERNAL_LINK_DEDUCTION = 10
    INLINE_STYLE_LIMIT = 5
    INLINE_SCRIPT_LIMIT = 2

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, user_agent: str = DEFAULT_USER_AGENT):
        self.timeout = timeout
        self.user_agent = user_agent

    async def analyze(self, url: str) -> DimensionResult:
        """
        Fetch and analyze a page.

        Args:
            url: URL to analyze; its scheme and host drive the HTTPS and
                external-link checks

        Returns:
            DimensionResult for the best-practices dimension

        Raises:
            AnalysisError: if the page could not be fetched or analyzed
        """
        logger.info("Analyzing best practices for: {}", url)
        try:
            page = await fetch_page(url, timeout=self.timeout, user_agent=self.user_agent)
            result = self.evaluate(page, url)
        except Exception as e:
            logger.error("Best practices analysis error for {}: {}", url, e)
            raise AnalysisError(self.dimension, e) from e

        logger.info("Best practices analysis completed - Score: {}", result.score)
        return result

    def evaluate(self, page: FetchedPage, url: str = "") -> DimensionResult:
        """
        Score an already fetched page.

        ``url`` is the audited URL as requested; it defaults to the page URL.
        """
        url = url or page.url
        soup = page.soup()
        card = ScoreCard()

        is_https = url.startswith("https://")
        if not is_https:
            card.flag(IssueType.ERROR, "Website not using HTTPS", Impact.HIGH, 20)

        header_flags = {}
        for header, (key, message) in SECURITY_HEADERS.items():
            present = bool(page.header(header))
            header_flags[key] = present
            if not present:
                card.flag(IssueType.WARNING, message, Impact.MEDIUM, 5)

        viewport = self._viewport_content(soup)
        if not viewport:
            card.flag(IssueType.ERROR, "Missing viewport meta tag", Impact.HIGH, 15)
        elif "width=device-width" not in viewport:
            card.flag(
                IssueType.WARNING,
                "Viewport meta tag should include width=device-width",
                Impact.MEDIUM,
                8,
            )

        has_favicon = bool(soup.select('link[rel*="icon"], link[rel="shortcut icon"]'))
        if not has_favicon:
            card.flag(IssueType.INFO, "No favicon found", Impact.LOW, 3)

        external_links = self._external_links(soup, url)
        unsafe_links = len([link for link in external_links if self._is_unsafe_link(link)])
        if unsafe_links > 0:
            card.flag(
                IssueType.WARNING,
                f'{unsafe_links} external links missing rel="noopener noreferrer"',
                Impact.MEDIUM,
                min(unsafe_links * 2, self.MAX_EXTERNAL_LINK_DEDUCTION),
            )

        mixed_content = len(soup.select(MIXED_CONTENT_SELECTOR)) if is_https else 0
        if mixed_content > 0:
            card.flag(
                IssueType.ERROR,
                f"{mixed_content} HTTP resources on HTTPS page (mixed content)",
                Impact.HIGH,
                15,
            )

        deprecated = len(soup.select(DEPRECATED_SELECTOR))
        if deprecated > 0:
            card.flag(
                IssueType.WARNING,
                f"{deprecated} deprecated HTML elements found",
                Impact.LOW,
                deprecated * 2,
            )

        inline_styles = len(soup.select("[style]"))
        inline_scripts = len(soup.select("script:not([src])"))
        if inline_styles > self.INLINE_STYLE_LIMIT:
            card.flag(
                IssueType.INFO,
                f"Many inline styles found ({inline_styles}) - consider using external CSS",
                Impact.LOW,
                3,
            )
        if inline_scripts > self.INLINE_SCRIPT_LIMIT:
            card.flag(
                IssueType.INFO,
                f"Multiple inline scripts found ({inline_scripts}) - consider using external JS",
                Impact.LOW,
                3,
            )

        recommendations = []
        if not is_https:
            recommendations.append("Implement HTTPS with valid SSL certificate")
        if not all(header_flags.values()):
            recommendations.append("Add security headers for better protection")
        if not viewport:
            recommendations.append("Add viewport meta tag for mobile responsiveness")
        if unsafe_links > 0:
            recommendations.append('Add rel="noopener noreferrer" to external links')

        details = {
            "isHTTPS": is_https,
            "hasViewport": bool(viewport),
            "hasFavicon": has_favicon,
            "securityHeaders": header_flags,
            "externalLinksCount": len(external_links),
            "unsafeExternalLinks": unsafe_links,
            "mixedContentResources": mixed_content,
            "deprecatedElements": deprecated,
            "inlineStyles": inline_styles,
            "inlineScripts": inline_scripts,
        }
        return card.build(recommendations, details)

    def _viewport_content(self, soup: BeautifulSoup) -> str:
        viewport = soup.select_one('meta[name="viewport"]')
        return attr_text(viewport, "content") if viewport else ""

    def _external_links(self, soup: BeautifulSoup, url: str) -> list[Tag]:
        """Absolute http(s) links whose href does not mention the audited host."""
        hostname = extract_domain(url)
        return [
            anchor for anchor in soup.select('a[href^="http"]')
            if hostname not in attr_text(anchor, "href")
        ]

    def _is_unsafe_link(self, anchor: Tag) -> bool:
        # Flags links lacking either token, so rel="noopener" alone is still unsafe.
        rel = attr_text(anchor, "rel")
        return "noopener" not in rel or "noreferrer" not in rel
