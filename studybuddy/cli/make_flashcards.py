"""CLI to generate flashcards from study documents with progress display."""
import argparse
import sys
from pathlib import Path

from tqdm import tqdm

from studybuddy.models.results import Ok
from studybuddy.models.study_content import FlashcardSet
from studybuddy.settings import Settings
from studybuddy.tools.study_ai import StudyAI
from studybuddy.tools.text_extraction import extract_text


def main(argv=None):
    """Generate a flashcard set for each document and save it as JSON."""
    parser = argparse.ArgumentParser(description="Generate flashcards from documents")
    parser.add_argument("documents", type=Path, nargs="+", help="TXT, PDF or DOCX files")
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output directory (defaults to storage/state/flashcards)"
    )
    args = parser.parse_args(argv)

    try:
        settings = Settings.load()
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    out_dir = args.out or settings.state_dir / "flashcards"
    out_dir.mkdir(parents=True, exist_ok=True)

    ai = StudyAI.from_settings(settings)
    stats = {"generated": 0, "failed": 0}
    failures = []

    pbar = tqdm(total=len(args.documents), desc="Generating flashcards", unit="file")

    for document in args.documents:
        pbar.set_postfix_str(document.name[:40])
        try:
            extracted = extract_text(document)
        except (FileNotFoundError, ValueError, RuntimeError) as e:
            stats["failed"] += 1
            failures.append((document.name, str(e)))
            pbar.update(1)
            continue

        result = ai.generate_flashcards(extracted.full_text)
        if isinstance(result, Ok):
            output_path = out_dir / f"{document.stem}.flashcards.json"
            output_path.write_text(FlashcardSet(flashcards=result.value).model_dump_json(indent=2))
            stats["generated"] += 1
        else:
            stats["failed"] += 1
            failures.append((document.name, result.message))
        pbar.update(1)

    pbar.close()

    print("\n=== Flashcard Summary ===")
    print(f"Generated: {stats['generated']}")
    print(f"Failed:    {stats['failed']}")

    if failures:
        print("\n=== Failed Files ===")
        for name, message in failures:
            print(f"  {name}: {message}")
        sys.exit(1)


if __name__ == "__main__":
    main()
