"""Tests for studybuddy.agents.tools."""
from pathlib import Path
from unittest.mock import patch

import pytest

from studybuddy.agents import tools
from studybuddy.models.results import Ok, ServiceError
from studybuddy.models.study_content import Summary


@pytest.fixture(autouse=True)
def storage(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("STUDYBUDDY_STORAGE", str(tmp_path / "storage"))
    for name in ["STUDYBUDDY_MAX_CONTEXT", "STUDYBUDDY_MAX_CHUNKS", "STUDYBUDDY_TREND_DAYS"]:
        monkeypatch.delenv(name, raising=False)
    return tmp_path / "storage"


def test_log_and_summarize_progress() -> None:
    assert tools.log_study_session(25, "deep")["status"] == "success"
    assert tools.log_quiz_result(3, 4, "Science")["status"] == "success"

    summary = tools.get_progress_summary()

    assert summary["status"] == "success"
    assert summary["total_study_time"] == "0h 25m"
    assert summary["has_focus_data"] is True
    assert summary["report"]["subjects"][0]["subject"] == "Science"


def test_invalid_quiz_is_error() -> None:
    result = tools.log_quiz_result(5, 4)
    assert result["status"] == "error"


def test_search_document(tmp_path: Path) -> None:
    document = tmp_path / "notes.txt"
    document.write_text("Cats are mammals.\n\nDogs are also mammals and pets.")
    result = tools.search_document(str(document), "dogs pets")
    assert result == {"status": "success", "query": "dogs pets", "context": "Dogs are also mammals and pets."}


def test_missing_document_is_error(tmp_path: Path) -> None:
    result = tools.ask_document(str(tmp_path / "missing.txt"), "why?")
    assert result["status"] == "error"


def test_ai_results_are_converted(tmp_path: Path) -> None:
    document = tmp_path / "notes.txt"
    document.write_text("Mitochondria produce energy.")

    summary = Summary(summaryPoints=["Mitochondria make ATP"])
    with patch("studybuddy.agents.tools.StudyAI.summarize_text", return_value=Ok(summary)):
        result = tools.summarize_document(str(document))
    assert result == {"status": "success", "summary": {"summaryPoints": ["Mitochondria make ATP"]}}

    with patch("studybuddy.agents.tools.StudyAI.generate_flashcards", return_value=ServiceError("down")):
        result = tools.flashcards_from_document(str(document))
    assert result == {"status": "error", "message": "down"}


def test_get_current_date() -> None:
    result = tools.get_current_date()
    assert result["status"] == "success"
    assert len(result["date"]) == 10