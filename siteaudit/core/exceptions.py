"""Exceptions raised while auditing a page."""


class AuditError(Exception):
    """Base class for audit failures."""


class FetchError(AuditError):
    """The page could not be retrieved (network fault, timeout, non-2xx)."""


class AnalysisError(AuditError):
    """A dimension analyzer could not produce a result."""

    def __init__(self, dimension: str, cause: Exception):
        self.dimension = dimension
        self.cause = cause
        super().__init__(f"{dimension} analysis failed: {cause}")
