"""Tests for studybuddy.tools.study_ai (Gemini client mocked)."""
import json
from unittest.mock import MagicMock

import pytest

from studybuddy.models.results import Ok, ParseError, ServiceError
from studybuddy.models.study_content import QuizQuestion
from studybuddy.tools.study_ai import INVALID_KEY_MESSAGE, MISSING_KEY_MESSAGE, StudyAI


def _client(text: str) -> MagicMock:
    client = MagicMock()
    client.models.generate_content.return_value = MagicMock(text=text)
    return client


def _sent(client: MagicMock) -> dict:
    return client.models.generate_content.call_args.kwargs


QUIZ_JSON = json.dumps({
    "quiz": [
        {"question": "2 + 2?", "options": ["3", "4", "5", "6"], "answer": "4"},
    ]
})


class TestDocumentAnswers:
    def test_answer_uses_retrieved_context(self) -> None:
        client = _client("Dogs are pets.")
        ai = StudyAI(client=client)

        result = ai.answer_from_document("dogs pets", "Cats are mammals.\n\nDogs are also mammals and pets.")

        assert result == Ok("Dogs are pets.")
        prompt = _sent(client)["contents"]
        assert "Dogs are also mammals and pets." in prompt
        assert "Cats are mammals." not in prompt
        assert _sent(client)["model"] == "gemini-2.5-flash"

    def test_context_budget_is_configurable(self) -> None:
        client = _client("ok")
        ai = StudyAI(client=client, max_context_length=10)

        ai.answer_from_document("zebra", "A long paragraph with no match at all.")

        assert "A long par\n" in _sent(client)["contents"]

    def test_coach_reply_sends_system_instruction(self) -> None:
        client = _client("Keep going!")
        result = StudyAI(client=client).coach_reply("I'm tired")
        assert result == Ok("Keep going!")
        assert "Study Coach" in _sent(client)["config"].system_instruction


class TestStructuredResponses:
    def test_generate_quiz_returns_questions(self) -> None:
        client = _client(QUIZ_JSON)

        result = StudyAI(client=client).generate_quiz("Grade 10", "Mathematics")

        assert isinstance(result, Ok)
        assert result.value == [QuizQuestion(question="2 + 2?", options=["3", "4", "5", "6"], answer="4")]
        config = _sent(client)["config"]
        assert config.response_mime_type == "application/json"
        assert "Grade 10" in _sent(client)["contents"]

    def test_flashcards(self) -> None:
        client = _client('{"flashcards": [{"term": "Mitosis", "definition": "Cell division"}]}')
        result = StudyAI(client=client).generate_flashcards("notes")
        assert isinstance(result, Ok)
        assert result.value[0].definition == "Cell division"

    def test_study_plan(self) -> None:
        client = _client(json.dumps({"plan": [
            {"day": "Monday", "time": "6 PM", "task": "Review algebra", "duration": "45 minutes"},
        ]}))
        result = StudyAI(client=client).generate_study_plan(["Monday", "Wednesday"], "Pass algebra")
        assert isinstance(result, Ok)
        assert result.value.blocks_for("monday")[0].task == "Review algebra"
        assert "Monday, Wednesday" in _sent(client)["contents"]

    def test_feynman_clarity_is_clamped(self) -> None:
        client = _client(json.dumps({
            "feedback": "Good start",
            "weakSpots": ["units"],
            "clarityScore": 14,
            "textbookDefinition": "Force equals mass times acceleration.",
        }))
        result = StudyAI(client=client).evaluate_feynman("Newton's second law", "Push harder, go faster")
        assert isinstance(result, Ok)
        assert result.value.clarityScore == 10

    def test_title_prompt_is_truncated(self) -> None:
        client = _client('{"title": "Cells", "tags": ["biology"]}')
        result = StudyAI(client=client).generate_title_and_tags("x" * 5000 + "TAIL")
        assert isinstance(result, Ok)
        assert "TAIL" not in _sent(client)["contents"]

    def test_semantic_search_returns_ids(self) -> None:
        client = _client('{"relevant_ids": ["doc-2"]}')
        docs = [{"id": "doc-1", "title": "French history"}, {"id": "doc-2", "title": "Cell biology"}]
        result = StudyAI(client=client).semantic_search("mitochondria", docs)
        assert result == Ok(["doc-2"])
        assert "Cell biology" in _sent(client)["contents"]

    def test_mind_map_without_schema(self) -> None:
        client = _client('{"mindMap": {"topic": "Water cycle", "children": [{"topic": "Evaporation"}]}}')
        result = StudyAI(client=client).generate_mind_map("notes")
        assert isinstance(result, Ok)
        assert result.value.children[0].topic == "Evaporation"
        assert _sent(client)["config"].response_schema is None

    def test_solve_from_image_sends_image_part(self) -> None:
        client = _client(json.dumps({
            "stepByStepExplanation": ["Subtract 3", "Divide by 2"],
            "finalAnswer": "x = 2",
            "confidenceScore": 95,
            "relatedConcepts": [{"name": "Linear Equations", "query": "what are linear equations"}],
        }))
        result = StudyAI(client=client).solve_from_image(b"\x89PNG", "image/png")
        assert isinstance(result, Ok)
        assert result.value.finalAnswer == "x = 2"
        contents = _sent(client)["contents"]
        assert len(contents) == 2
        assert contents[1] == "Please solve the problem in this image."

    def test_malformed_response_is_parse_error(self) -> None:
        client = _client('{"questions": "oops"}')
        result = StudyAI(client=client).generate_quiz_from_content("text")
        assert isinstance(result, ParseError)
        assert result.raw_text == '{"questions": "oops"}'


class TestFailures:
    def test_missing_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        result = StudyAI().summarize_text("notes")
        assert result == ServiceError(MISSING_KEY_MESSAGE)

    def test_upstream_error_becomes_service_error(self) -> None:
        client = MagicMock()
        client.models.generate_content.side_effect = RuntimeError("503 UNAVAILABLE")
        result = StudyAI(client=client).generate_flashcards("notes")
        assert isinstance(result, ServiceError)
        assert "503 UNAVAILABLE" in result.message
        assert result.message.startswith("Failed to generate flashcards")

    def test_invalid_key_message(self) -> None:
        client = MagicMock()
        client.models.generate_content.side_effect = ValueError("400 API_KEY_INVALID")
        result = StudyAI(client=client).coach_reply("hi")
        assert result == ServiceError(INVALID_KEY_MESSAGE)

    def test_missing_required_key_is_parse_error(self) -> None:
        client = _client('{"cards": []}')
        result = StudyAI(client=client).generate_flashcards("notes")
        assert isinstance(result, ParseError)
        assert "FlashcardSet" in result.message

    def test_study_plan_without_plan_is_parse_error(self) -> None:
        client = _client("{}")
        result = StudyAI(client=client).generate_study_plan(["Monday"], "Pass algebra")
        assert isinstance(result, ParseError)


def _search_tool_sent(client: MagicMock) -> bool:
    config = _sent(client)["config"]
    return bool(config.tools) and config.tools[0].google_search is not None


class TestVideosAndPapers:
    def test_search_videos_extracts_ids(self) -> None:
        client = _client("```json\n" + json.dumps({"videos": [
            {"videoUrl": "https://www.youtube.com/watch?v=dQw4w9WgXcQ", "title": "Cells", "channelName": "Bio"},
            {"videoUrl": "https://example.com/not-a-video", "title": "Broken", "channelName": "Nobody"},
            {"videoUrl": "https://youtu.be/abcdefghijk", "title": "Mitosis", "channelName": "Bio"},
        ]}) + "\n```")

        result = StudyAI(client=client).search_educational_videos("cell biology")

        assert isinstance(result, Ok)
        assert [v.videoId for v in result.value] == ["dQw4w9WgXcQ", "abcdefghijk"]
        assert result.value[1].title == "Mitosis"
        assert _search_tool_sent(client)
        assert _sent(client)["config"].response_mime_type is None
        assert '"cell biology"' in _sent(client)["contents"]

    def test_search_videos_without_any_id_is_parse_error(self) -> None:
        client = _client(json.dumps({"videos": [
            {"videoUrl": "https://example.com/a", "title": "A", "channelName": "C"},
        ]}))
        result = StudyAI(client=client).search_educational_videos("cells")
        assert isinstance(result, ParseError)
        assert "video IDs could not be extracted" in result.message

    def test_search_videos_empty_list_is_ok(self) -> None:
        client = _client('{"videos": []}')
        assert StudyAI(client=client).search_educational_videos("cells") == Ok([])

    def test_search_videos_missing_key_is_parse_error(self) -> None:
        client = _client('{"results": []}')
        result = StudyAI(client=client).search_educational_videos("cells")
        assert isinstance(result, ParseError)

    def test_video_summary(self) -> None:
        client = _client('{"tldr": "Cells divide.", "keyPoints": ["Prophase", "Metaphase"]}')
        result = StudyAI(client=client).generate_video_summary("Mitosis explained")
        assert isinstance(result, Ok)
        assert result.value.keyPoints == ["Prophase", "Metaphase"]
        assert "Mitosis explained" in _sent(client)["contents"]

    def test_video_summary_blank_tldr_is_parse_error(self) -> None:
        client = _client('{"tldr": "  ", "keyPoints": []}')
        result = StudyAI(client=client).generate_video_summary("Mitosis explained")
        assert isinstance(result, ParseError)

    def test_quiz_from_video(self) -> None:
        client = _client(QUIZ_JSON)
        result = StudyAI(client=client).generate_quiz_from_video("Fractions for beginners")
        assert isinstance(result, Ok)
        assert result.value[0].answer == "4"
        assert _sent(client)["config"].response_schema is not None

    def test_past_papers(self) -> None:
        client = _client("```json\n" + json.dumps({"papers": [
            {"name": "Mathematics Paper 1", "type": "Question Paper", "url": "https://www.education.gov.za/p1.pdf"},
            {"name": "Mathematics Paper 1 Memo", "type": "Memorandum", "url": "https://www.education.gov.za/m1.pdf"},
        ]}) + "\n```")

        result = StudyAI(client=client).search_past_papers("Mathematics", "2022")

        assert isinstance(result, Ok)
        assert [p.type for p in result.value] == ["Question Paper", "Memorandum"]
        assert _search_tool_sent(client)
        assert '"2022"' in _sent(client)["contents"]

    def test_past_paper_with_unknown_type_is_parse_error(self) -> None:
        client = _client(json.dumps({"papers": [
            {"name": "Maths", "type": "Study Guide", "url": "https://example.com/guide.pdf"},
        ]}))
        result = StudyAI(client=client).search_past_papers("Mathematics", "2022")
        assert isinstance(result, ParseError)
