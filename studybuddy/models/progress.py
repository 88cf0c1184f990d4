"""Study session and quiz history models (persisted progress log)."""
import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


FocusRating = Literal["deep", "distracted"]


class StudySession(BaseModel):
    """A completed focus session, rated by the student afterwards."""
    date: datetime.date
    minutes: int = Field(ge=0)
    rating: FocusRating


class QuizResult(BaseModel):
    """Score of a single finished quiz."""
    date: datetime.date
    subject: Optional[str] = None
    score: int = Field(ge=0)
    total: int = Field(ge=1)

    @model_validator(mode="after")
    def check_score_within_total(self) -> "QuizResult":
        """Ensure score never exceeds the number of questions."""
        if self.score > self.total:
            raise ValueError(f"score ({self.score}) must not exceed total ({self.total})")
        return self

    @property
    def percent(self) -> Optional[float]:
        """Score as a percentage, or None when total is not positive."""
        if self.total <= 0:
            return None
        return self.score / self.total * 100


class ProgressData(BaseModel):
    """Entire persisted progress state: append-only study and quiz logs."""
    model_config = ConfigDict(populate_by_name=True)

    study_history: list[StudySession] = Field(default_factory=list, alias="studyHistory")
    quiz_history: list[QuizResult] = Field(default_factory=list, alias="quizHistory")

    @property
    def is_empty(self) -> bool:
        return not self.study_history and not self.quiz_history
