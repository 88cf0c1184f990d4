"""Chart series and progress report export (Markdown, CSV, JSON)."""
import csv
import io
import logging
from pathlib import Path
from typing import Optional

from studybuddy.models.aggregates import FocusBreakdown, ProgressReport, ProgressTrend
from studybuddy.tools.progress_aggregation import format_minutes

logger = logging.getLogger(__name__)

REPORT_TITLE = "Study Buddy: Progress Report"
NO_FOCUS_DATA = "No focus data recorded yet. Complete a Pomodoro session to see your stats."
NO_SUBJECT_DATA = "No quiz data available for subject breakdown."
NO_SCORE = "n/a"


def score_line_points(trend: ProgressTrend) -> list[tuple[int, float]]:
    """
    Points for the average-score line: (day index, percent) for days with a quiz.

    Days without a quiz are left out rather than plotted as 0, so the line
    connects across them.
    """
    return [
        (index, score)
        for index, score in enumerate(trend.avg_score_by_day)
        if score is not None
    ]


def study_bar_values(trend: ProgressTrend) -> list[int]:
    """Bar heights for study minutes; a day without study is a real 0."""
    return list(trend.study_minutes_by_day)


def focus_chart_data(focus: FocusBreakdown) -> Optional[dict]:
    """Doughnut chart data, or None when the empty state should be shown."""
    if focus.is_empty:
        return None
    return {
        "labels": ["Deep Focus", "Distracted"],
        "minutes": [focus.deep_minutes, focus.distracted_minutes],
    }


def _format_score(score: Optional[float]) -> str:
    return NO_SCORE if score is None else f"{score:.1f}%"


def export_to_markdown(report: ProgressReport) -> str:
    """Render the progress report as Markdown."""
    lines = [
        f"# {REPORT_TITLE}",
        "",
        f"Report generated on: {report.generated_on.isoformat()}",
        "",
        "## Overall Stats",
        "",
        "| Metric | Value |",
        "| --- | --- |",
        f"| Total Study Time | {format_minutes(report.totals.total_study_minutes)} |",
        f"| Total Quizzes Taken | {report.totals.total_quizzes} |",
        f"| Average Quiz Score | {report.totals.average_score_percent:.1f}% |",
        "",
        f"## Study vs. Performance Trend (Last {len(report.trend.dates)} Days)",
        "",
        "| Day | Date | Study Time (minutes) | Avg. Quiz Score |",
        "| --- | --- | ---: | ---: |",
    ]
    for label, day, minutes, score in zip(
        report.trend.labels,
        report.trend.dates,
        report.trend.study_minutes_by_day,
        report.trend.avg_score_by_day,
    ):
        lines.append(f"| {label} | {day.isoformat()} | {minutes} | {_format_score(score)} |")

    lines += ["", "## Focus Quality", ""]
    chart = focus_chart_data(report.focus)
    if chart is None:
        lines.append(NO_FOCUS_DATA)
    else:
        for label, minutes in zip(chart["labels"], chart["minutes"]):
            lines.append(f"- {label}: {minutes} minutes")

    lines += ["", "## Subject-wise Breakdown", ""]
    if not report.subjects:
        lines.append(NO_SUBJECT_DATA)
    else:
        lines += [
            "| Subject | Quizzes Taken | Average Score |",
            "| --- | ---: | ---: |",
        ]
        for stats in report.subjects:
            lines.append(
                f"| {stats.subject} | {stats.quizzes_taken} | {stats.average_score_percent:.1f}% |"
            )

    return "\n".join(lines) + "\n"


def export_to_csv(report: ProgressReport) -> str:
    """Render the report as a flat CSV of (section, key, value, extra) rows."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["section", "key", "value", "extra"])

    writer.writerow(["overall", "total_study_minutes", report.totals.total_study_minutes, ""])
    writer.writerow(["overall", "total_quizzes", report.totals.total_quizzes, ""])
    writer.writerow(["overall", "average_score_percent", f"{report.totals.average_score_percent:.1f}", ""])

    for day, minutes, score in zip(
        report.trend.dates,
        report.trend.study_minutes_by_day,
        report.trend.avg_score_by_day,
    ):
        writer.writerow(["day", day.isoformat(), minutes, "" if score is None else f"{score:.1f}"])

    writer.writerow(["focus", "deep_minutes", report.focus.deep_minutes, ""])
    writer.writerow(["focus", "distracted_minutes", report.focus.distracted_minutes, ""])

    for stats in report.subjects:
        writer.writerow(["subject", stats.subject, f"{stats.average_score_percent:.1f}", stats.quizzes_taken])

    return buffer.getvalue()


def export_to_json(report: ProgressReport) -> str:
    return report.model_dump_json(indent=2)


_EXPORTERS = {
    ".md": export_to_markdown,
    ".csv": export_to_csv,
    ".json": export_to_json,
}


def write_report(report: ProgressReport, output_path: Path) -> Path:
    """Write the report in the format implied by the file suffix."""
    output_path = Path(output_path)
    exporter = _EXPORTERS.get(output_path.suffix.lower())
    if exporter is None:
        raise ValueError(
            f"Unsupported report format '{output_path.suffix}'. Use one of: {', '.join(sorted(_EXPORTERS))}"
        )
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(exporter(report), encoding="utf-8")
    logger.info("Wrote progress report to %s", output_path)
    return output_path
