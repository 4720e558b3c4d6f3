"""Dimension analyzers and the website auditor that combines them."""

from siteaudit.web.auditor import WebsiteAuditor, run_full_audit
from siteaudit.web.performance import PerformanceAnalyzer
from siteaudit.web.seo import SEOAnalyzer
from siteaudit.web.accessibility import AccessibilityChecker
from siteaudit.web.best_practices import BestPracticesAnalyzer

__all__ = [
    "WebsiteAuditor",
    "run_full_audit",
    "PerformanceAnalyzer",
    "SEOAnalyzer",
    "AccessibilityChecker",
    "BestPracticesAnalyzer",
]
