"""CLI to ask a question about a study document (keyword retrieval + Gemini)."""
import argparse
import logging
import sys
from pathlib import Path

from studybuddy.models.results import Ok
from studybuddy.settings import Settings
from studybuddy.tools.context_retrieval import find_relevant_context
from studybuddy.tools.study_ai import StudyAI
from studybuddy.tools.text_extraction import extract_text


def main(argv=None):
    """Answer a question from the most relevant passages of a document."""
    parser = argparse.ArgumentParser(
        description="Ask a question about a TXT, PDF or DOCX document"
    )
    parser.add_argument("document", type=Path, help="Document to answer from")
    parser.add_argument("question", type=str, help="Your question")
    parser.add_argument(
        "--context-only",
        action="store_true",
        help="Print the retrieved context without calling the AI"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        settings = Settings.load()
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    try:
        extracted = extract_text(args.document)
    except (FileNotFoundError, ValueError, RuntimeError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    if extracted.is_empty:
        print(f"Error: no text could be extracted from {args.document.name}")
        sys.exit(1)

    if args.context_only:
        print(find_relevant_context(
            args.question,
            extracted.full_text,
            max_context_length=settings.max_context_length,
            max_chunks=settings.max_chunks,
        ))
        return

    ai = StudyAI.from_settings(settings)
    result = ai.answer_from_document(args.question, extracted.full_text)

    if isinstance(result, Ok):
        print(result.value.strip())
    else:
        print(f"Error: {result.message}")
        sys.exit(1)


if __name__ == "__main__":
    main()
