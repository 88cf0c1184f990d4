"""Derived progress aggregates. Recomputed on demand, never persisted."""
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class ProgressTotals(BaseModel):
    """Headline numbers for the stat cards."""
    total_study_minutes: int = 0
    total_quizzes: int = 0
    average_score_percent: float = 0.0


class ProgressTrend(BaseModel):
    """Per-day series over the trailing window, oldest day first."""
    dates: list[date] = Field(default_factory=list)
    labels: list[str] = Field(default_factory=list)  # short weekday names
    study_minutes_by_day: list[int] = Field(default_factory=list)
    avg_score_by_day: list[Optional[float]] = Field(default_factory=list)  # None = no quiz that day


class FocusBreakdown(BaseModel):
    """Minutes studied per focus rating."""
    deep_minutes: int = 0
    distracted_minutes: int = 0

    @property
    def is_empty(self) -> bool:
        """True when no study time has been recorded yet."""
        return self.deep_minutes == 0 and self.distracted_minutes == 0


class SubjectStats(BaseModel):
    """Point-weighted quiz performance for one subject."""
    subject: str
    quizzes_taken: int
    average_score_percent: float


class ProgressReport(BaseModel):
    """Everything the progress view and the exported report show."""
    generated_on: date
    totals: ProgressTotals
    trend: ProgressTrend
    focus: FocusBreakdown
    subjects: list[SubjectStats] = Field(default_factory=list)
