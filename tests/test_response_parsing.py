"""Tests for studybuddy.tools.response_parsing."""
from studybuddy.models.results import Ok, ParseError
from studybuddy.models.study_content import FlashcardSet, MindMap, PhotoSolution, Summary
from studybuddy.tools.response_parsing import parse_model_response, strip_code_fence


def test_valid_json_is_ok() -> None:
    result = parse_model_response('{"summaryPoints": ["a", "b"]}', Summary)
    assert isinstance(result, Ok)
    assert result.value.summaryPoints == ["a", "b"]


def test_field_is_unwrapped() -> None:
    raw = '{"flashcards": [{"term": "Cell", "definition": "Basic unit of life"}]}'
    result = parse_model_response(raw, FlashcardSet, field="flashcards")
    assert isinstance(result, Ok)
    assert result.value[0].term == "Cell"


def test_code_fence_is_tolerated() -> None:
    raw = '```json\n{"summaryPoints": ["only point"]}\n```'
    result = parse_model_response(raw, Summary)
    assert isinstance(result, Ok)
    assert result.value.summaryPoints == ["only point"]


def test_strip_code_fence_leaves_plain_text() -> None:
    assert strip_code_fence('  {"a": 1}  ') == '{"a": 1}'


def test_invalid_json_is_parse_error() -> None:
    result = parse_model_response("Sure! Here are your flashcards: ...", FlashcardSet)
    assert isinstance(result, ParseError)
    assert result.raw_text == "Sure! Here are your flashcards: ..."
    assert "not valid JSON" in result.message
    assert not result.ok


def test_wrong_shape_is_parse_error() -> None:
    result = parse_model_response('{"cards": []}', MindMap)
    assert isinstance(result, ParseError)
    assert "MindMap" in result.message


def test_out_of_range_value_is_parse_error() -> None:
    raw = '{"stepByStepExplanation": ["x"], "finalAnswer": "4", "confidenceScore": 180, "relatedConcepts": []}'
    assert isinstance(parse_model_response(raw, PhotoSolution), ParseError)


def test_empty_response_is_parse_error() -> None:
    assert isinstance(parse_model_response("", Summary), ParseError)
    assert isinstance(parse_model_response(None, Summary), ParseError)


def test_nested_mind_map() -> None:
    raw = '{"mindMap": {"topic": "Biology", "children": [{"topic": "Cells", "children": [{"topic": "Organelles"}]}]}}'
    result = parse_model_response(raw, MindMap, field="mindMap")
    assert isinstance(result, Ok)
    assert list(result.value.iter_topics()) == ["Biology", "Cells", "Organelles"]
