"""
Site Audit API
==============

HTTP surface for the auditor: a full audit endpoint, one endpoint per
dimension and a health check.

Run with: siteaudit serve  (or uvicorn siteaudit.api:app)
"""

import json
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from siteaudit import __version__
from siteaudit.config import configure_logging, get_settings
from siteaudit.core.exceptions import AnalysisError
from siteaudit.core.models import utc_timestamp
from siteaudit.core.validators import validate_url
from siteaudit.web.auditor import WebsiteAuditor

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

# Sent on every response, matching helmet's defaults.
SECURITY_HEADERS = {
    "Content-Security-Policy": (
        "default-src 'self';base-uri 'self';font-src 'self' https: data:;"
        "form-action 'self';frame-ancestors 'self';img-src 'self' data:;"
        "object-src 'none';script-src 'self';script-src-attr 'none';"
        "style-src 'self' https: 'unsafe-inline';upgrade-insecure-requests"
    ),
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


async def requested_url(request: Request) -> Any:
    """
    The ``url`` field of a JSON or form-encoded body.

    Returns None when the body is empty, unreadable or has no ``url``;
    the value is otherwise returned untyped for ``validate_url`` to judge.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return form.get("url")

    body = await request.body()
    if not body:
        return None
    try:
        data = json.loads(body)
    except ValueError:
        return None
    return data.get("url") if isinstance(data, dict) else None


def get_auditor() -> WebsiteAuditor:
    settings = get_settings()
    return WebsiteAuditor.from_settings(
        timeout=settings.fetch_timeout_seconds,
        performance_timeout=settings.performance_timeout_seconds,
        user_agent=settings.user_agent,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(get_settings().log_level)
    logger.info("Website Audit API ready")
    yield


app = FastAPI(
    title="Site Audit API",
    description="Single-page SEO, performance, accessibility and best-practices audits",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[get_settings().frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def security_headers(request: Request, call_next):
    """Add the security headers to every response."""
    response = await call_next(request)
    for header, value in SECURITY_HEADERS.items():
        response.headers.setdefault(header, value)
    return response


def _invalid_url() -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid URL", "message": "Please provide a valid website URL"},
    )


async def _analyze_dimension(dimension: str, key: str, url: Any, auditor: WebsiteAuditor):
    if not validate_url(url):
        return _invalid_url()

    logger.info("{} analysis requested for: {}", dimension, url)
    try:
        result = await auditor.analyzers[dimension].analyze(url)
    except AnalysisError as e:
        return JSONResponse(
            status_code=500,
            content={"error": f"{e.dimension} analysis failed", "message": str(e)},
        )

    return {
        "success": True,
        "url": url,
        "timestamp": utc_timestamp(),
        key: result.to_dict(),
    }


@app.get("/api/health")
async def health():
    """Health check."""
    return {
        "status": "OK",
        "message": "Website Audit Backend is running!",
        "timestamp": utc_timestamp(),
    }


@app.post("/api/audit/run")
async def run_audit(url: Any = Depends(requested_url), auditor: WebsiteAuditor = Depends(get_auditor)):
    """Run the complete four-dimension audit."""
    if not validate_url(url):
        return _invalid_url()

    logger.info("Starting audit for: {}", url)
    try:
        report = await auditor.audit(url)
    except Exception as e:
        logger.exception("Audit error for {}: {}", url, e)
        return JSONResponse(status_code=500, content={"error": "Audit failed", "message": str(e)})

    return {
        "success": True,
        "url": url,
        "timestamp": utc_timestamp(),
        "results": report.to_dict(),
    }


@app.post("/api/seo/analyze")
async def analyze_seo(url: Any = Depends(requested_url), auditor: WebsiteAuditor = Depends(get_auditor)):
    return await _analyze_dimension("seo", "seo", url, auditor)


@app.post("/api/performance/analyze")
async def analyze_performance(url: Any = Depends(requested_url), auditor: WebsiteAuditor = Depends(get_auditor)):
    return await _analyze_dimension("performance", "performance", url, auditor)


@app.post("/api/accessibility/analyze")
async def analyze_accessibility(url: Any = Depends(requested_url), auditor: WebsiteAuditor = Depends(get_auditor)):
    return await _analyze_dimension("accessibility", "accessibility", url, auditor)


@app.post("/api/best-practices/analyze")
async def analyze_best_practices(url: Any = Depends(requested_url), auditor: WebsiteAuditor = Depends(get_auditor)):
    return await _analyze_dimension("best_practices", "bestPractices", url, auditor)


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(status_code=404, content={"error": "Route not found"})
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on {}: {}", request.url.path, exc)
    message = str(exc) if get_settings().is_development else "Internal Server Error"
    return JSONResponse(
        status_code=500,
        content={"error": "Something went wrong!", "message": message},
    )
