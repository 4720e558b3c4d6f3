"""
Site Audit
==========

Single-page website auditor. Scores a page for SEO, performance,
accessibility and best practices, and combines the four into an
overall grade.
"""

__version__ = "1.0.0"

from siteaudit.core.grading import grade_for
from siteaudit.core.models import AuditReport, DimensionFailure, DimensionResult
from siteaudit.web.auditor import WebsiteAuditor, run_full_audit
from siteaudit.web.seo import SEOAnalyzer
from siteaudit.web.performance import PerformanceAnalyzer
from siteaudit.web.accessibility import AccessibilityChecker
from siteaudit.web.best_practices import BestPracticesAnalyzer

__all__ = [
    "grade_for",
    "AuditReport",
    "DimensionFailure",
    "DimensionResult",
    "WebsiteAuditor",
    "run_full_audit",
    "SEOAnalyzer",
    "PerformanceAnalyzer",
    "AccessibilityChecker",
    "BestPracticesAnalyzer",
]
