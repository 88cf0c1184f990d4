"""Weekly study plan model."""
from pydantic import BaseModel


class StudyBlock(BaseModel):
    """Single session in a weekly study plan."""
    day: str  # e.g., "Monday"
    time: str  # e.g., "Morning", "6 PM"
    task: str
    duration: str  # e.g., "45 minutes"


class StudyPlan(BaseModel):
    """One-week schedule built from the student's availability and goals."""
    plan: list[StudyBlock]

    def blocks_for(self, day: str) -> list[StudyBlock]:
        """Return the blocks scheduled on ``day`` (case-insensitive)."""
        return [b for b in self.plan if b.day.lower() == day.lower()]
