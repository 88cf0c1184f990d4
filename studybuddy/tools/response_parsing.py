"""Turn raw model output into validated models or an explicit ParseError."""
import logging
from typing import Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from studybuddy.models.results import Ok, ParseError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ```json ... ``` fence if the model added one."""
    stripped = text.strip()
    if not stripped.startswith("```"):
        return stripped
    lines = stripped.splitlines()
    if len(lines) < 2:
        return stripped
    body = lines[1:]
    if body and body[-1].strip().startswith("```"):
        body = body[:-1]
    return "\n".join(body).strip()


def parse_model_response(
    raw_text: Optional[str],
    schema: Type[M],
    field: Optional[str] = None,
):
    """
    Validate a JSON response against ``schema``.

    Args:
        raw_text: Text returned by the model
        schema: Pydantic model describing the expected JSON object
        field: Optional attribute to unwrap from the validated object
            (e.g. ``"quiz"`` to return the question list)

    Returns:
        Ok(model or field value) on success, ParseError(raw_text, message) otherwise
    """
    if raw_text is None or not raw_text.strip():
        return ParseError(raw_text=raw_text or "", message="The AI returned an empty response.")

    try:
        parsed = schema.model_validate_json(strip_code_fence(raw_text))
    except ValidationError as e:
        if any(err.get("type") == "json_invalid" for err in e.errors()):
            message = "The AI returned a response that is not valid JSON."
        else:
            message = f"The AI returned an unexpected format for {schema.__name__}: {e.error_count()} validation error(s)."
        logger.warning("%s Raw response starts with: %r", message, raw_text[:200])
        return ParseError(raw_text=raw_text, message=message)

    return Ok(getattr(parsed, field) if field else parsed)
