"""CLI to show the progress dashboard and export a report."""
import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from studybuddy.settings import Settings
from studybuddy.tools.progress_aggregation import build_report, format_minutes
from studybuddy.tools.progress_store import ProgressStore
from studybuddy.tools.report_export import NO_FOCUS_DATA, NO_SUBJECT_DATA, focus_chart_data, write_report


console = Console()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Show study progress")
    parser.add_argument(
        "--storage",
        type=Path,
        help="Storage directory (defaults to STUDYBUDDY_STORAGE or ./storage)"
    )
    parser.add_argument(
        "--days",
        type=int,
        default=None,
        help="Trend window in days (default 7)"
    )
    parser.add_argument(
        "--export",
        type=Path,
        help="Write the report to a .md, .csv or .json file"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    overrides = {}
    if args.storage:
        overrides["storage_dir"] = args.storage
    if args.days is not None:
        overrides["trend_window_days"] = args.days

    try:
        settings = Settings.load(overrides)
        data = ProgressStore(settings.progress_path).load()
    except (ValidationError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    report = build_report(data, window_days=settings.trend_window_days)

    console.print("\n[bold cyan]My Progress[/bold cyan]\n")

    overall = Table(title="Overall Stats")
    overall.add_column("Metric", style="cyan")
    overall.add_column("Value", style="magenta", justify="right")
    overall.add_row("Total Study Time", format_minutes(report.totals.total_study_minutes))
    overall.add_row("Total Quizzes", str(report.totals.total_quizzes))
    overall.add_row("Average Score", f"{report.totals.average_score_percent:.1f}%")
    console.print(overall)

    trend = Table(title=f"Study vs. Performance Trend (Last {len(report.trend.dates)} Days)")
    trend.add_column("Day", style="cyan")
    trend.add_column("Study Time (min)", justify="right")
    trend.add_column("Avg. Quiz Score", justify="right")
    for label, minutes, score in zip(
        report.trend.labels, report.trend.study_minutes_by_day, report.trend.avg_score_by_day
    ):
        trend.add_row(label, str(minutes), "-" if score is None else f"{score:.1f}%")
    console.print(trend)

    chart = focus_chart_data(report.focus)
    if chart is None:
        console.print(f"\n[yellow]{NO_FOCUS_DATA}[/yellow]")
    else:
        console.print("\n[bold]Focus Quality[/bold]")
        for label, minutes in zip(chart["labels"], chart["minutes"]):
            console.print(f"  {label}: {minutes} minutes")

    if report.subjects:
        subjects = Table(title="Subject-wise Breakdown")
        subjects.add_column("Subject", style="cyan")
        subjects.add_column("Quizzes Taken", justify="center")
        subjects.add_column("Average Score", style="magenta", justify="right")
        for stats in report.subjects:
            subjects.add_row(stats.subject, str(stats.quizzes_taken), f"{stats.average_score_percent:.1f}%")
        console.print(subjects)
    else:
        console.print(f"\n[yellow]{NO_SUBJECT_DATA}[/yellow]")

    if args.export:
        try:
            path = write_report(report, args.export)
        except ValueError as e:
            console.print(f"[red]Error: {e}[/red]")
            sys.exit(1)
        console.print(f"\n✓ [green]Report written to {path}[/green]")


if __name__ == "__main__":
    main()
