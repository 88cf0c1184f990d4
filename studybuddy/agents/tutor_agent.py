"""Tutor agent: answers questions and builds study material from documents."""
from google.adk.agents.llm_agent import Agent

from studybuddy.agents.tools import (
    ask_document,
    flashcards_from_document,
    quiz_from_document,
    search_document,
    summarize_document,
)
from studybuddy.settings import DEFAULT_MODEL

tutor_agent = Agent(
    model=DEFAULT_MODEL,
    name="tutor_agent",
    description="Answers questions about the student's documents and turns them into quizzes, flashcards and summaries.",
    instruction=(
        "Use search_document or ask_document to answer questions from the student's files; never answer "
        "from outside knowledge when a document is given. Use quiz_from_document, flashcards_from_document "
        "and summarize_document when the student wants study material."
    ),
    tools=[search_document, ask_document, quiz_from_document, flashcards_from_document, summarize_document],
)
