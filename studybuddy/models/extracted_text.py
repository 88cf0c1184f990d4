"""Plain text pulled out of an uploaded study document."""
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class ExtractedText(BaseModel):
    """Text of a TXT, PDF or DOCX document, ready for context retrieval."""
    path: str
    source_type: Literal["text", "pdf", "docx"]
    num_pages: int
    pages: list[str] = Field(default_factory=list)  # text per page (one entry for non-paged formats)
    full_text: str = ""
    extracted_at: str  # ISO timestamp

    @field_validator('num_pages')
    @classmethod
    def validate_num_pages(cls, v: int) -> int:
        """Ensure num_pages is non-negative."""
        if v < 0:
            raise ValueError('num_pages must be non-negative')
        return v

    @property
    def is_empty(self) -> bool:
        return not self.full_text.strip()
