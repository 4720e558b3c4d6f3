"""
Command Line Interface for Site Audit
=====================================

Main CLI entry point for auditing a single web page.
"""

import asyncio
import json
import sys
from typing import Optional

import click
from rich.console import Console

from siteaudit import __version__
from siteaudit.config import configure_logging, get_settings
from siteaudit.core.exceptions import AnalysisError
from siteaudit.core.validators import sanitize_url, validate_url
from siteaudit.web.accessibility import AccessibilityChecker
from siteaudit.web.auditor import WebsiteAuditor
from siteaudit.web.best_practices import BestPracticesAnalyzer
from siteaudit.web.performance import PerformanceAnalyzer
from siteaudit.web.report import export_report, print_audit, print_dimension
from siteaudit.web.seo import SEOAnalyzer

console = Console()


def _checked_url(url: str) -> str:
    url = sanitize_url(url)
    if not validate_url(url):
        console.print(f"[red]Invalid URL: {url or '(empty)'}[/red]")
        sys.exit(2)
    return url


def _run_dimension(title: str, analyzer, url: str, as_json: bool) -> None:
    try:
        result = asyncio.run(analyzer.analyze(url))
    except AnalysisError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        print_dimension(title, result)


@click.group()
@click.version_option(version=__version__, prog_name="Site Audit")
@click.option("--log-level", default=None, help="Override LOG_LEVEL for this run")
def main(log_level: Optional[str]):
    """
    Site Audit

    Score a web page for SEO, performance, accessibility and best practices.
    """
    configure_logging(log_level or get_settings().log_level)


@main.command()
@click.argument("url")
@click.option("--output", "-o", type=click.Path(), help="Export report to file")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
def audit(url: str, output: Optional[str], as_json: bool):
    """Run a complete audit of a page."""
    url = _checked_url(url)
    settings = get_settings()

    if not as_json:
        console.print(f"[bold blue]Auditing website: {url}[/bold blue]")

    auditor = WebsiteAuditor.from_settings(
        timeout=settings.fetch_timeout_seconds,
        performance_timeout=settings.performance_timeout_seconds,
        user_agent=settings.user_agent,
    )
    report = asyncio.run(auditor.audit(url))

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        print_audit(url, report)

    if output:
        export_report(url, report, output)


@main.command()
@click.argument("url")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def seo(url: str, as_json: bool):
    """Analyze SEO factors."""
    settings = get_settings()
    analyzer = SEOAnalyzer(timeout=settings.fetch_timeout_seconds, user_agent=settings.user_agent)
    _run_dimension("SEO", analyzer, _checked_url(url), as_json)


@main.command()
@click.argument("url")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def performance(url: str, as_json: bool):
    """Analyze page performance."""
    settings = get_settings()
    analyzer = PerformanceAnalyzer(
        timeout=settings.performance_timeout_seconds, user_agent=settings.user_agent
    )
    _run_dimension("Performance", analyzer, _checked_url(url), as_json)


@main.command()
@click.argument("url")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def accessibility(url: str, as_json: bool):
    """Check accessibility."""
    settings = get_settings()
    checker = AccessibilityChecker(timeout=settings.fetch_timeout_seconds, user_agent=settings.user_agent)
    _run_dimension("Accessibility", checker, _checked_url(url), as_json)


@main.command("best-practices")
@click.argument("url")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def best_practices(url: str, as_json: bool):
    """Check security headers, HTTPS and markup best practices."""
    settings = get_settings()
    analyzer = BestPracticesAnalyzer(
        timeout=settings.fetch_timeout_seconds, user_agent=settings.user_agent
    )
    _run_dimension("Best Practices", analyzer, _checked_url(url), as_json)


@main.command()
@click.option("--host", default=None, help="Bind address (defaults to HOST)")
@click.option("--port", default=None, type=int, help="Port (defaults to PORT)")
def serve(host: Optional[str], port: Optional[int]):
    """Run the HTTP API."""
    import uvicorn

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    console.print(f"[bold blue]Website Audit API on http://{host}:{port}[/bold blue]")
    console.print(f"[dim]Health check: http://{host}:{port}/api/health[/dim]")
    uvicorn.run("siteaudit.api:app", host=host, port=port)


if __name__ == "__main__":
    main()
