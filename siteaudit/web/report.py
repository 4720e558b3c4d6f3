"""Console rendering and JSON export for audit results."""

import json

from rich.console import Console
from rich.table import Table

from siteaudit.core.models import AuditReport, DimensionFailure, DimensionOutcome, DimensionResult

console = Console()

DIMENSION_TITLES = {
    "seo": "SEO",
    "performance": "Performance",
    "accessibility": "Accessibility",
    "best_practices": "Best Practices",
}

ISSUE_COLORS = {"error": "red", "warning": "yellow", "info": "blue"}


def _score_status(score: int) -> str:
    if score >= 80:
        return "[green]Good[/green]"
    elif score >= 60:
        return "[yellow]Needs Work[/yellow]"
    return "[red]Poor[/red]"


def print_dimension(title: str, outcome: DimensionOutcome) -> None:
    """Print one dimension: score, details, issues and recommendations."""
    console.print(f"\n[bold]{title} Report[/bold]")
    console.print("=" * 60)

    if isinstance(outcome, DimensionFailure):
        console.print(f"[red]Analysis failed:[/red] {outcome.error}")
        return

    console.print(f"Score: {outcome.score}/100 (Grade {outcome.grade})")

    table = Table(title="Details")
    table.add_column("Metric", style="cyan")
    table.add_column("Value")
    for key, value in outcome.details.items():
        if isinstance(value, dict):
            value = ", ".join(f"{k}={v}" for k, v in value.items())
        table.add_row(key, str(value))
    console.print(table)

    if outcome.core_web_vitals:
        vitals = ", ".join(f"{k.upper()}: {v}" for k, v in outcome.core_web_vitals.items())
        console.print(f"Core Web Vitals (estimated): {vitals}")

    if outcome.issues:
        console.print("\n[bold]Issues Found:[/bold]")
        for issue in outcome.issues:
            color = ISSUE_COLORS[issue.type.value]
            console.print(
                f"  [{color}][{issue.type.value.upper()}][/{color}] {issue.message} "
                f"[dim](impact: {issue.impact.value})[/dim]"
            )

    if outcome.recommendations:
        console.print("\n[bold]Recommendations:[/bold]")
        for rec in outcome.recommendations:
            console.print(f"  - {rec}")


def print_audit(url: str, report: AuditReport) -> None:
    """Print a formatted audit report."""
    console.print("\n[bold]Website Audit Report[/bold]")
    console.print("=" * 60)
    console.print(f"URL: {url}")
    console.print(f"Audit Date: {report.overall.timestamp}")

    table = Table(title="Category Scores")
    table.add_column("Category", style="cyan")
    table.add_column("Score", style="green")
    table.add_column("Grade")
    table.add_column("Status")

    for name, outcome in report.dimensions.items():
        if isinstance(outcome, DimensionResult):
            table.add_row(DIMENSION_TITLES[name], f"{outcome.score}/100", outcome.grade,
                          _score_status(outcome.score))
        else:
            table.add_row(DIMENSION_TITLES[name], "0/100", "-", "[red]Failed[/red]")

    table.add_row(
        "[bold]Overall[/bold]",
        f"[bold]{report.overall.score}/100[/bold]",
        f"[bold]{report.overall.grade}[/bold]",
        "",
    )
    console.print(table)
    console.print(f"\nTotal issues: {report.summary.total_issues}")

    for name, outcome in report.dimensions.items():
        print_dimension(DIMENSION_TITLES[name], outcome)


def export_report(url: str, report: AuditReport, output_path: str) -> None:
    """Export an audit report to a JSON file."""
    data = {"url": url, "results": report.to_dict()}

    with open(output_path, "w") as f:
        json.dump(data, f, indent=2)

    console.print(f"[green]Report exported to {output_path}[/green]")
