"""Progress store I/O: load, save and append study/quiz records."""
import json
import logging
import random
from datetime import date, timedelta
from pathlib import Path
from typing import Optional

from studybuddy.models.progress import FocusRating, ProgressData, QuizResult, StudySession

logger = logging.getLogger(__name__)

SAMPLE_SUBJECTS = ["Math", "Science", "History"]


class ProgressStore:
    """
    JSON-file repository for the student's progress log.

    The store is created once and handed to whatever records or displays
    progress; aggregation functions only ever receive ``store.load()``.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> ProgressData:
        """Load progress from disk. Returns an empty log if the file is missing."""
        if not self.path.exists():
            return ProgressData()
        data = json.loads(self.path.read_text(encoding="utf-8"))
        return ProgressData.model_validate(data)

    def save(self, data: ProgressData) -> None:
        """Save progress to JSON atomically (write temp then replace)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)

        temp_path = self.path.with_suffix(".tmp")
        temp_path.write_text(data.model_dump_json(by_alias=True, indent=2), encoding="utf-8")

        temp_path.replace(self.path)

    def add_study_session(
        self,
        minutes: int,
        rating: FocusRating,
        on: Optional[date] = None,
    ) -> StudySession:
        """Append a finished focus session, dated today unless ``on`` is given."""
        session = StudySession(date=on or date.today(), minutes=minutes, rating=rating)
        data = self.load()
        data.study_history.append(session)
        self.save(data)
        logger.info("Recorded %d min %s study session", minutes, rating)
        return session

    def add_quiz_result(
        self,
        score: int,
        total: int,
        subject: Optional[str] = None,
        on: Optional[date] = None,
    ) -> QuizResult:
        """Append a quiz score, dated today unless ``on`` is given."""
        result = QuizResult(date=on or date.today(), subject=subject, score=score, total=total)
        data = self.load()
        data.quiz_history.append(result)
        self.save(data)
        logger.info("Recorded quiz result %d/%d (%s)", score, total, subject or "no subject")
        return result

    def seed_sample_data(
        self,
        today: Optional[date] = None,
        rng: Optional[random.Random] = None,
    ) -> bool:
        """
        Fill an empty store with a week of demo history.

        Each of the last 7 days gets a deep-focus session (15-59 min) and, when
        non-zero, a distracted one (0-29 min). Every other day, ending today,
        gets a 10-question quiz scored 5-9 in a random subject.

        Returns:
            True if sample data was written, False if the store already had data
        """
        data = self.load()
        if not data.is_empty:
            return False

        today = today or date.today()
        rng = rng or random.Random()

        for offset in range(6, -1, -1):
            day = today - timedelta(days=offset)

            deep_minutes = rng.randint(15, 59)
            distracted_minutes = rng.randint(0, 29)
            data.study_history.append(StudySession(date=day, minutes=deep_minutes, rating="deep"))
            if distracted_minutes > 0:
                data.study_history.append(
                    StudySession(date=day, minutes=distracted_minutes, rating="distracted")
                )

            if offset % 2 == 0:
                data.quiz_history.append(QuizResult(
                    date=day,
                    subject=rng.choice(SAMPLE_SUBJECTS),
                    score=rng.randint(5, 9),
                    total=10,
                ))

        self.save(data)
        logger.info(
            "Seeded sample progress: %d sessions, %d quizzes",
            len(data.study_history), len(data.quiz_history),
        )
        return True
