"""Tagged results returned at the generative-model boundary.

Callers branch on the result type instead of catching exceptions:

    result = ai.summarize_text(notes)
    if isinstance(result, Ok):
        show(result.value)
    elif isinstance(result, ParseError):
        report_bad_response(result.raw_text)
    else:
        report_failure(result.message)
"""
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful call with a validated payload."""
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class ParseError:
    """The model answered, but not in the requested shape."""
    raw_text: str
    message: str

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class ServiceError:
    """The call could not be made or failed upstream."""
    message: str

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], ParseError, ServiceError]
