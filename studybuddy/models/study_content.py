"""Structured responses requested from the generative model.

Each top-level model doubles as the ``response_schema`` sent with the request,
so field names match the JSON keys the model is asked to produce.
"""
from typing import Literal, Optional

from pydantic import BaseModel, field_validator


class QuizQuestion(BaseModel):
    """Multiple-choice question; ``answer`` is one of ``options``."""
    question: str
    options: list[str]
    answer: str


class Quiz(BaseModel):
    quiz: list[QuizQuestion]


class Flashcard(BaseModel):
    term: str
    definition: str


class FlashcardSet(BaseModel):
    flashcards: list[Flashcard]


class Summary(BaseModel):
    summaryPoints: list[str]


class MindMapNode(BaseModel):
    """Node of a hierarchical mind map."""
    topic: str
    children: Optional[list["MindMapNode"]] = None

    def iter_topics(self):
        """Yield every topic in the tree, depth first."""
        yield self.topic
        for child in self.children or []:
            yield from child.iter_topics()


class MindMap(BaseModel):
    mindMap: MindMapNode


class FeynmanEvaluation(BaseModel):
    """Feedback on a student's plain-language explanation of a concept."""
    feedback: str
    weakSpots: list[str]
    clarityScore: int
    textbookDefinition: str

    @field_validator("clarityScore")
    @classmethod
    def clamp_clarity(cls, v: int) -> int:
        """Keep clarity on the 1-10 scale."""
        return min(max(v, 1), 10)


class TitleAndTags(BaseModel):
    title: str
    tags: list[str]

    @field_validator("title")
    @classmethod
    def require_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title must not be empty")
        return v.strip()


class RelevantDocuments(BaseModel):
    relevant_ids: list[str]


class RelatedConcept(BaseModel):
    name: str
    query: str  # search phrase for learning more


class PhotoSolution(BaseModel):
    """Step-by-step solution to a problem photographed by the student."""
    stepByStepExplanation: list[str]
    finalAnswer: str
    confidenceScore: int  # 0-100
    relatedConcepts: list[RelatedConcept]

    @field_validator("confidenceScore")
    @classmethod
    def validate_confidence(cls, v: int) -> int:
        """Ensure confidence is between 0 and 100."""
        if not 0 <= v <= 100:
            raise ValueError("confidenceScore must be between 0 and 100")
        return v


class VideoLink(BaseModel):
    """Video as returned by the search-grounded model, before id extraction."""
    videoUrl: str
    title: str
    channelName: str


class VideoSearchResults(BaseModel):
    videos: list[VideoLink]


class YouTubeVideo(BaseModel):
    videoId: str  # 11-character YouTube id
    title: str
    channelName: str


class VideoSummary(BaseModel):
    tldr: str
    keyPoints: list[str]

    @field_validator("tldr")
    @classmethod
    def require_tldr(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("tldr must not be empty")
        return v


class PastPaper(BaseModel):
    """Link to an NSC past examination paper or its memorandum."""
    name: str
    type: Literal["Question Paper", "Memorandum", "Answer Book"]
    url: str


class PastPaperResults(BaseModel):
    papers: list[PastPaper]
