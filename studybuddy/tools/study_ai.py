"""Gemini-backed study tools (Q&A, quizzes, flashcards, summaries, ...).

Every public method returns ``Ok``, ``ParseError`` or ``ServiceError`` rather
than raising, so callers handle a failed or malformed model call as data.
"""
import json
import logging
import os
from typing import Iterable, Optional, Type

from google import genai
from google.genai import types
from pydantic import BaseModel

from studybuddy.models.plan import StudyPlan
from studybuddy.models.results import Ok, ParseError, ServiceError
from studybuddy.models.study_content import (
    FeynmanEvaluation,
    FlashcardSet,
    MindMap,
    PastPaperResults,
    PhotoSolution,
    Quiz,
    RelevantDocuments,
    Summary,
    TitleAndTags,
    VideoSearchResults,
    VideoSummary,
    YouTubeVideo,
)
from studybuddy.settings import DEFAULT_MODEL, Settings
from studybuddy.tools.context_retrieval import MAX_CHUNKS, MAX_CONTEXT_LENGTH, find_relevant_context
from studybuddy.tools.response_parsing import parse_model_response
from studybuddy.tools.youtube_links import youtube_id_from_url

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "GOOGLE_API_KEY environment variable not set. AI features are disabled."
INVALID_KEY_MESSAGE = "The provided API key is invalid. Please check your configuration."
NOT_FOUND_ANSWER = "I'm sorry, I couldn't find information about that in the provided document."
TITLE_SAMPLE_CHARS = 4000
VIDEO_RESULTS = 12
GOOGLE_SEARCH_TOOL = types.Tool(google_search=types.GoogleSearch())

DOCUMENT_QA_PROMPT = """
You are an AI Study Buddy. Your task is to answer the user's question based *only* on the provided context.
- If the answer is in the context, provide a clear and concise answer based on that information.
- If the answer is not in the context, you MUST state: "{not_found}"
- Do not use any external knowledge.
- Do not make up information.
- Be helpful and friendly.

Here is the context from the document:
---
{context}
---

Here is the user's question:
"{question}"

Answer:
"""

COACH_INSTRUCTION = (
    "You are a friendly and encouraging AI Study Coach. Your goal is to help students understand "
    "concepts, get motivated, and learn effectively. You can explain topics, provide summaries, or "
    "offer words of encouragement. Keep your tone conversational and avoid overly formal language. "
    "Your responses must be in plain text. Do not use any special formatting like markdown "
    "(e.g., no asterisks '*' or hash symbols '#'). Do not include unnecessary punctuation."
)

QUIZ_INSTRUCTION = (
    "You are an expert quiz creator for students, specializing in the South African education "
    "curriculum (CAPS). Create a comprehensive multiple-choice quiz based on the provided grade level "
    "and subject. The questions should be appropriate for the specified grade and align with the CAPS curriculum."
)

CONTENT_QUIZ_INSTRUCTION = (
    "You are an expert at creating study materials. Your task is to analyze the provided text and "
    "generate a comprehensive multiple-choice quiz from it. The questions should cover the key topics "
    "and information present in the text."
)

SELECTION_QUIZ_INSTRUCTION = (
    "You are an expert quiz creator. Based *only* on the provided text selection, create a small "
    "multiple-choice quiz (2-4 questions) to test the user's understanding of that specific information."
)

FLASHCARD_INSTRUCTION = (
    "You are an expert at creating study materials. Your task is to analyze the provided text and "
    "generate a concise set of flashcards from it. Each flashcard should have a clear term and a "
    "corresponding definition."
)

SUMMARY_INSTRUCTION = (
    "You are an expert at text analysis and summarization. Your task is to read the provided text and "
    "distill it into a concise list of key points or bullet points. Focus on the most important information."
)

MIND_MAP_INSTRUCTION = (
    "You are an expert at creating structured learning aids. Your task is to analyze the provided text "
    "and generate a hierarchical mind map. The mind map should have a central topic and nested child "
    "topics. Keep the structure logical and the topics concise."
)

STUDY_PLAN_INSTRUCTION = (
    "You are an expert academic planner. Your task is to create a personalized, one-week study plan "
    "for a student based on their availability and goals. The plan should be realistic, actionable, "
    "and spread out across the week."
)

FEYNMAN_INSTRUCTION = (
    "You are an expert tutor specializing in the Feynman Technique. Your task is to evaluate a "
    "student's explanation of a concept. Provide constructive feedback, identify weak spots, give a "
    "clarity score from 1-10, and provide a correct, concise 'textbook' definition."
)

TITLE_INSTRUCTION = (
    "You are an expert at analyzing text. Your task is to read the provided text and generate a "
    "concise, descriptive title for it, and a list of 3-5 relevant topic tags."
)

SEARCH_INSTRUCTION = (
    "You are a semantic search engine. Based on the user's query, find the most relevant documents "
    "from the provided list. Respond with only a JSON array of the relevant document IDs."
)

PHOTO_INSTRUCTION = (
    "You are an expert tutor that helps students solve problems from images. Analyze the image "
    "provided by the user, which could be a math problem, a physics diagram, a chemistry equation, "
    "etc. Provide a detailed, step-by-step explanation of how to arrive at the solution. Conclude with "
    "the final answer. Also, provide a confidence score (0-100) indicating how sure you are about the "
    "solution, and list a few related concepts that the student might want to learn more about."
)

VIDEO_SEARCH_INSTRUCTION = (
    "You are a helpful assistant that finds educational YouTube videos. Your goal is to return "
    "high-quality, relevant, and safe-for-all-ages educational content based on the user's query. "
    "You must only use the Google Search tool."
)

VIDEO_SUMMARY_INSTRUCTION = (
    "You are an expert at summarizing educational content. Your task is to provide a concise summary "
    "and a list of key learning points based on the title of a YouTube video."
)

VIDEO_QUIZ_INSTRUCTION = (
    "You are an expert at creating study materials from video content. Based on the video's title, "
    "generate a multiple-choice quiz that tests understanding of the likely topics covered in the video."
)

PAST_PAPER_INSTRUCTION = (
    "You are an expert search assistant for South African educational materials. You only respond "
    "with JSON. Do not include any text outside of the JSON block."
)


class StudyAI:
    """Study tools backed by a ``google.genai`` client."""

    def __init__(
        self,
        client: Optional[genai.Client] = None,
        model: str = DEFAULT_MODEL,
        api_key: Optional[str] = None,
        max_context_length: int = MAX_CONTEXT_LENGTH,
        max_chunks: int = MAX_CHUNKS,
    ):
        self.model = model
        self.max_context_length = max_context_length
        self.max_chunks = max_chunks
        self._client = client
        self._api_key = api_key

    @classmethod
    def from_settings(cls, settings: Settings) -> "StudyAI":
        return cls(
            model=settings.gemini_model,
            api_key=settings.google_api_key,
            max_context_length=settings.max_context_length,
            max_chunks=settings.max_chunks,
        )

    def _get_client(self) -> Optional[genai.Client]:
        """Create the client lazily; None when no API key is configured."""
        if self._client is None:
            api_key = self._api_key or os.getenv("GOOGLE_API_KEY")
            if not api_key:
                return None
            self._client = genai.Client(api_key=api_key)
        return self._client

    def _generate(
        self,
        action: str,
        contents,
        system_instruction: Optional[str] = None,
        schema: Optional[Type[BaseModel]] = None,
        send_schema: bool = True,
        tools: Optional[list] = None,
    ):
        """Run one generate_content call. Returns Ok(text) or ServiceError."""
        client = self._get_client()
        if client is None:
            return ServiceError(MISSING_KEY_MESSAGE)

        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            response_mime_type="application/json" if schema else None,
            response_schema=schema if schema and send_schema else None,
            tools=tools,
        )

        try:
            response = client.models.generate_content(
                model=self.model,
                contents=contents,
                config=config,
            )
        except Exception as e:
            logger.error("Error trying to %s: %s", action, e)
            if "API_KEY_INVALID" in str(e):
                return ServiceError(INVALID_KEY_MESSAGE)
            return ServiceError(f"Failed to {action}: {e}")

        return Ok(response.text or "")

    def _structured(
        self,
        action: str,
        contents,
        schema: Type[BaseModel],
        system_instruction: str,
        field: Optional[str] = None,
        send_schema: bool = True,
    ):
        """Generate JSON and validate it against ``schema``."""
        result = self._generate(action, contents, system_instruction, schema, send_schema)
        if not isinstance(result, Ok):
            return result
        return parse_model_response(result.value, schema, field)

    # Document Q&A and coaching

    def answer_from_context(self, question: str, context: str):
        """Answer ``question`` using only ``context``."""
        prompt = DOCUMENT_QA_PROMPT.format(
            not_found=NOT_FOUND_ANSWER, context=context, question=question
        )
        return self._generate("get a response from the AI", prompt)

    def answer_from_document(self, question: str, document_text: str):
        """Retrieve the relevant passages of a document and answer from them."""
        context = find_relevant_context(
            question,
            document_text,
            max_context_length=self.max_context_length,
            max_chunks=self.max_chunks,
        )
        logger.info("Answering from %d chars of context", len(context))
        return self.answer_from_context(question, context)

    def coach_reply(self, prompt: str):
        return self._generate("get a response from the AI Coach", prompt, COACH_INSTRUCTION)

    # Quizzes

    def generate_quiz(self, grade: str, subject: str):
        prompt = (
            f"Generate a multiple-choice quiz for a {grade} student on the subject of {subject}, "
            "following the South African education curriculum."
        )
        return self._structured("generate quiz", prompt, Quiz, QUIZ_INSTRUCTION, field="quiz")

    def generate_quiz_from_content(self, content: str):
        prompt = (
            "Based on the following text, please generate a multiple-choice quiz. "
            "Each question must have 4 options and a correct answer.\n\n"
            f"Text:\n---\n{content}\n---\n"
        )
        return self._structured("generate quiz from content", prompt, Quiz, CONTENT_QUIZ_INSTRUCTION, field="quiz")

    def generate_quiz_from_selection(self, selection: str):
        prompt = f"Generate a short quiz from this text selection:\n\n---\n{selection}\n---"
        return self._structured("generate quiz from selection", prompt, Quiz, SELECTION_QUIZ_INSTRUCTION, field="quiz")

    # Notes

    def generate_flashcards(self, text: str):
        prompt = (
            "Based on the following text, please generate a list of flashcards with a term and a "
            f"definition for each.\n\nText:\n---\n{text}\n---\n"
        )
        return self._structured("generate flashcards", prompt, FlashcardSet, FLASHCARD_INSTRUCTION, field="flashcards")

    def summarize_text(self, text: str):
        prompt = f"Please summarize the following text into key bullet points:\n\n---\n{text}\n---"
        return self._structured("summarize text", prompt, Summary, SUMMARY_INSTRUCTION)

    def generate_mind_map(self, text: str):
        prompt = (
            "Based on the following text, generate a mind map structure with a root topic and nested "
            f"children.\n\n---\n{text}\n---"
        )
        # Recursive schema is described in the prompt only; the response is still validated
        return self._structured(
            "generate mind map", prompt, MindMap, MIND_MAP_INSTRUCTION, field="mindMap", send_schema=False
        )

    def generate_title_and_tags(self, content: str):
        prompt = (
            "Analyze the following text and provide a title and tags.\n\n"
            f"Text snippet:\n---\n{content[:TITLE_SAMPLE_CHARS]}\n---"
        )
        return self._structured("generate title and tags", prompt, TitleAndTags, TITLE_INSTRUCTION)

    def semantic_search(self, query: str, documents: Iterable[dict]):
        """Return ids of library documents (``{"id", "title"}`` dicts) related to ``query``."""
        prompt = (
            f'User Query: "{query}"\n\n'
            f"Available Documents:\n{json.dumps(list(documents))}\n\n"
            "Return a JSON array of the document IDs that are most conceptually related to the user's query."
        )
        return self._structured("search documents", prompt, RelevantDocuments, SEARCH_INSTRUCTION, field="relevant_ids")

    # Planning and techniques

    def generate_study_plan(self, availability: list[str], goals: str):
        prompt = (
            f'A student has the following weekly study goals: "{goals}".\n'
            f"They are available to study on the following days: {', '.join(availability)}.\n\n"
            "Create a one-week study schedule with specific tasks and estimated durations for each session."
        )
        return self._structured("generate study plan", prompt, StudyPlan, STUDY_PLAN_INSTRUCTION)

    def evaluate_feynman(self, concept: str, explanation: str):
        prompt = (
            f'Concept: "{concept}"\n'
            f"Student's Explanation: \"{explanation}\"\n\n"
            "Please evaluate the student's explanation."
        )
        return self._structured("evaluate explanation", prompt, FeynmanEvaluation, FEYNMAN_INSTRUCTION)

    # Photo solver

    def solve_from_image(self, image_bytes: bytes, mime_type: str):
        contents = [
            types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
            "Please solve the problem in this image.",
        ]
        return self._structured("solve problem from image", contents, PhotoSolution, PHOTO_INSTRUCTION)

    # Videos and past papers (Google Search grounded)

    def search_educational_videos(self, query: str):
        """
        Find educational YouTube videos about ``query``.

        Search grounding cannot be combined with a response schema, so the
        JSON is requested in the prompt and validated afterwards. Entries whose
        link carries no usable video id are dropped.

        Returns:
            Ok(list[YouTubeVideo]), ParseError or ServiceError
        """
        prompt = (
            f'Find {VIDEO_RESULTS} relevant and high-quality educational YouTube videos about "{query}". '
            "Focus on videos from well-known educational channels or creators.\n\n"
            'You MUST respond with ONLY a JSON object containing a key "videos" which is an array of video '
            "objects. Do not include any other text, explanation, or markdown formatting. Each object in the "
            'array must have the following properties: "videoUrl", "title", and "channelName".\n'
            'The "videoUrl" MUST be a direct and valid link to a YouTube video '
            '(e.g., "https://www.youtube.com/watch?v=...").'
        )
        result = self._generate(
            "search videos", prompt, VIDEO_SEARCH_INSTRUCTION, tools=[GOOGLE_SEARCH_TOOL]
        )
        if not isinstance(result, Ok):
            return result
        parsed = parse_model_response(result.value, VideoSearchResults, field="videos")
        if not isinstance(parsed, Ok):
            return parsed

        videos = []
        for link in parsed.value:
            video_id = youtube_id_from_url(link.videoUrl)
            if video_id is None:
                logger.warning("Could not extract videoId from URL: %s", link.videoUrl)
                continue
            videos.append(YouTubeVideo(videoId=video_id, title=link.title, channelName=link.channelName))

        if not videos and parsed.value:
            return ParseError(
                raw_text=result.value,
                message="The AI returned video data, but video IDs could not be extracted from the URLs.",
            )
        return Ok(videos)

    def generate_video_summary(self, video_title: str):
        prompt = (
            "Generate a TL;DR (Too Long; Didn't Read) summary and 3-5 key learning points for a video "
            f'titled: "{video_title}". The summary should be a short paragraph, and the key points should '
            "be brief, one-sentence bullet points."
        )
        return self._structured("summarize video", prompt, VideoSummary, VIDEO_SUMMARY_INSTRUCTION)

    def generate_quiz_from_video(self, video_title: str):
        prompt = (
            f'Based on a video titled "{video_title}", please generate a multiple-choice quiz with 5 '
            "questions. Each question must have 4 options and a correct answer."
        )
        return self._structured("generate quiz from video", prompt, Quiz, VIDEO_QUIZ_INSTRUCTION, field="quiz")

    def search_past_papers(self, subject: str, year: str):
        """Find NSC past papers and memorandums for ``subject`` in ``year``."""
        prompt = (
            "Find official NSC (National Senior Certificate) past examination papers and memorandums for "
            f'the subject "{subject}" from the year "{year}".\n'
            'Prioritize links from the "education.gov.za" domain.\n'
            'You MUST return a JSON object with a single key "papers". The value should be an array of objects.\n'
            "Each object must have the following keys:\n"
            '- "name": A descriptive name, e.g., "Mathematics Paper 1".\n'
            '- "type": Can be "Question Paper", "Memorandum", or "Answer Book".\n'
            '- "url": The direct, full URL to the PDF file.'
        )
        result = self._generate(
            "search past papers", prompt, PAST_PAPER_INSTRUCTION, tools=[GOOGLE_SEARCH_TOOL]
        )
        if not isinstance(result, Ok):
            return result
        return parse_model_response(result.value, PastPaperResults, field="papers")
