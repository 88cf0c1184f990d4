"""ADK tool wrappers for Study Buddy functionality.

Each tool is a plain function returning a dict with a ``status`` key
("success" or "error") so the agent can relay failures to the student.
"""
from datetime import date
from pathlib import Path
import logging
from typing import Literal, Optional

from pydantic import ValidationError

from studybuddy.models.results import Ok
from studybuddy.settings import Settings
from studybuddy.tools.context_retrieval import find_relevant_context
from studybuddy.tools.progress_aggregation import build_report, format_minutes
from studybuddy.tools.progress_store import ProgressStore
from studybuddy.tools.study_ai import StudyAI
from studybuddy.tools.text_extraction import extract_text

# Set up logging
logger = logging.getLogger(__name__)
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def _settings() -> Settings:
    return Settings.load()


def _store() -> ProgressStore:
    return ProgressStore(_settings().progress_path)


def _load_document(file_path: str) -> tuple[Optional[str], Optional[dict]]:
    """Return (text, None) or (None, error dict)."""
    try:
        extracted = extract_text(Path(file_path))
    except (FileNotFoundError, ValueError, RuntimeError) as e:
        return None, {"status": "error", "message": str(e)}
    if extracted.is_empty:
        return None, {"status": "error", "message": f"No text found in {file_path}"}
    return extracted.full_text, None


def _to_response(result, key: str) -> dict:
    """Convert a tagged AI result into a tool response."""
    if isinstance(result, Ok):
        value = result.value
        if isinstance(value, list):
            value = [item.model_dump() if hasattr(item, "model_dump") else item for item in value]
        elif hasattr(value, "model_dump"):
            value = value.model_dump()
        return {"status": "success", key: value}
    return {"status": "error", "message": result.message}


# ============================================================================
# TUTOR AGENT TOOLS
# ============================================================================

def search_document(file_path: str, query: str) -> dict:
    """
    Find the passages of a document most relevant to a query.

    Args:
        file_path: Path to a TXT, PDF or DOCX file
        query: What to look for

    Returns:
        dict with status and the retrieved context
    """
    text, error = _load_document(file_path)
    if error:
        return error
    settings = _settings()
    context = find_relevant_context(
        query, text,
        max_context_length=settings.max_context_length,
        max_chunks=settings.max_chunks,
    )
    return {"status": "success", "query": query, "context": context}


def ask_document(file_path: str, question: str) -> dict:
    """Answer a question using only the content of a document."""
    text, error = _load_document(file_path)
    if error:
        return error
    logger.info("Answering question about %s", file_path)
    return _to_response(StudyAI.from_settings(_settings()).answer_from_document(question, text), "answer")


def quiz_from_document(file_path: str) -> dict:
    """Generate a multiple-choice quiz from a document."""
    text, error = _load_document(file_path)
    if error:
        return error
    return _to_response(StudyAI.from_settings(_settings()).generate_quiz_from_content(text), "quiz")


def flashcards_from_document(file_path: str) -> dict:
    """Generate term/definition flashcards from a document."""
    text, error = _load_document(file_path)
    if error:
        return error
    return _to_response(StudyAI.from_settings(_settings()).generate_flashcards(text), "flashcards")


def summarize_document(file_path: str) -> dict:
    """Summarize a document into key points."""
    text, error = _load_document(file_path)
    if error:
        return error
    return _to_response(StudyAI.from_settings(_settings()).summarize_text(text), "summary")


# ============================================================================
# COACH AGENT TOOLS
# ============================================================================

def get_progress_summary(days: int = 7) -> dict:
    """
    Summarize the student's study time, quiz scores and focus quality.

    Args:
        days: Number of trailing days in the trend

    Returns:
        dict with status, totals, per-day trend, focus and subject breakdown
    """
    try:
        report = build_report(_store().load(), window_days=days)
    except (ValidationError, ValueError) as e:
        return {"status": "error", "message": f"Failed to load progress: {e}"}

    return {
        "status": "success",
        "total_study_time": format_minutes(report.totals.total_study_minutes),
        "report": report.model_dump(mode="json"),
        "has_focus_data": not report.focus.is_empty,
    }


def log_study_session(minutes: int, rating: Literal["deep", "distracted"]) -> dict:
    """Record a finished study session and how focused it was."""
    try:
        session = _store().add_study_session(minutes, rating)
    except (ValidationError, ValueError) as e:
        return {"status": "error", "message": f"Could not record session: {e}"}
    return {"status": "success", "session": session.model_dump(mode="json")}


def log_quiz_result(score: int, total: int, subject: Optional[str] = None) -> dict:
    """Record a quiz score."""
    try:
        result = _store().add_quiz_result(score, total, subject=subject or None)
    except (ValidationError, ValueError) as e:
        return {"status": "error", "message": f"Could not record quiz: {e}"}
    return {"status": "success", "quiz_result": result.model_dump(mode="json")}


def plan_study_week(availability: list[str], goals: str) -> dict:
    """Create a one-week study plan from available days and goals."""
    return _to_response(StudyAI.from_settings(_settings()).generate_study_plan(availability, goals), "plan")


def get_current_date() -> dict:
    """Return today's date so the agent can reason about schedules."""
    today = date.today()
    return {"status": "success", "date": today.isoformat(), "weekday": today.strftime("%A")}
