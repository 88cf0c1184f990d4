"""Derive dashboard statistics from the study/quiz log.

Every function here is pure: it reads a ``ProgressData`` snapshot (or one of
its histories) and returns fresh aggregate models. Nothing is cached and the
input is never modified, so an empty log simply yields zeroed aggregates.
"""
from datetime import date, timedelta
from typing import Iterable, Optional

from studybuddy.models.aggregates import (
    FocusBreakdown,
    ProgressReport,
    ProgressTotals,
    ProgressTrend,
    SubjectStats,
)
from studybuddy.models.progress import ProgressData, QuizResult, StudySession

TREND_WINDOW_DAYS = 7
# Fixed English labels, indexed by date.weekday()
WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def _as_progress_data(data) -> ProgressData:
    """Accept a ProgressData or its JSON-shaped dict; reject anything else."""
    if isinstance(data, ProgressData):
        return data
    if isinstance(data, dict):
        return ProgressData.model_validate(data)
    raise TypeError(f"expected ProgressData or dict, got {type(data).__name__}")


def _mean(values: list[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def totals(data) -> ProgressTotals:
    """Total study time, number of quizzes and mean quiz percentage."""
    data = _as_progress_data(data)
    percents = [p for p in (q.percent for q in data.quiz_history) if p is not None]
    average = _mean(percents)
    return ProgressTotals(
        total_study_minutes=sum(s.minutes for s in data.study_history),
        total_quizzes=len(data.quiz_history),
        average_score_percent=average if average is not None else 0.0,
    )


def trend(data, window_days: int = TREND_WINDOW_DAYS, today: Optional[date] = None) -> ProgressTrend:
    """
    Per-day study minutes and average quiz score over the last ``window_days``.

    Days run oldest to newest and end with ``today`` (the local calendar day
    unless given). A day without sessions reports 0 minutes; a day without
    quizzes reports ``None`` as its score so charts can tell "no quiz" apart
    from "scored zero".
    """
    if window_days < 1:
        raise ValueError(f"window_days must be at least 1, got {window_days}")
    data = _as_progress_data(data)
    today = today or date.today()

    minutes_by_date: dict[date, int] = {}
    for session in data.study_history:
        minutes_by_date[session.date] = minutes_by_date.get(session.date, 0) + session.minutes

    percents_by_date: dict[date, list[float]] = {}
    for quiz in data.quiz_history:
        percent = quiz.percent
        if percent is not None:
            percents_by_date.setdefault(quiz.date, []).append(percent)

    result = ProgressTrend()
    for offset in range(window_days - 1, -1, -1):
        day = today - timedelta(days=offset)
        result.dates.append(day)
        result.labels.append(WEEKDAY_LABELS[day.weekday()])
        result.study_minutes_by_day.append(minutes_by_date.get(day, 0))
        result.avg_score_by_day.append(_mean(percents_by_date.get(day, [])))
    return result


def focus_breakdown(study_history: Iterable[StudySession]) -> FocusBreakdown:
    """Sum study minutes by focus rating."""
    breakdown = FocusBreakdown()
    for session in study_history:
        if session.rating == "deep":
            breakdown.deep_minutes += session.minutes
        elif session.rating == "distracted":
            breakdown.distracted_minutes += session.minutes
    return breakdown


def subject_breakdown(quiz_history: Iterable[QuizResult]) -> list[SubjectStats]:
    """
    Point-weighted average per subject, best subject first.

    The average is ``sum(score) / sum(total) * 100`` over the subject's
    quizzes, so a 10-question quiz weighs five times a 2-question one.
    Quizzes without a subject, or without a usable total, are left out.
    Ties keep the order in which subjects first appeared.
    """
    groups: dict[str, list[int]] = {}  # subject -> [quizzes, score_sum, total_sum]
    for quiz in quiz_history:
        if not quiz.subject or not quiz.subject.strip():
            continue
        if quiz.total <= 0:
            continue
        group = groups.setdefault(quiz.subject, [0, 0, 0])
        group[0] += 1
        group[1] += quiz.score
        group[2] += quiz.total

    stats = [
        SubjectStats(
            subject=subject,
            quizzes_taken=count,
            average_score_percent=score_sum / total_sum * 100 if total_sum > 0 else 0.0,
        )
        for subject, (count, score_sum, total_sum) in groups.items()
    ]
    return sorted(stats, key=lambda s: s.average_score_percent, reverse=True)


def build_report(data, window_days: int = TREND_WINDOW_DAYS, today: Optional[date] = None) -> ProgressReport:
    """Compute every aggregate shown on the progress page in one pass."""
    data = _as_progress_data(data)
    today = today or date.today()
    return ProgressReport(
        generated_on=today,
        totals=totals(data),
        trend=trend(data, window_days=window_days, today=today),
        focus=focus_breakdown(data.study_history),
        subjects=subject_breakdown(data.quiz_history),
    )


def format_minutes(minutes: int) -> str:
    """Format a minute count as ``"Xh Ym"``."""
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins}m"
