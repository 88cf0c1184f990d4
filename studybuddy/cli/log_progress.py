"""CLI to record study sessions and quiz results in the progress store."""
import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from studybuddy.settings import Settings
from studybuddy.tools.progress_store import ProgressStore


def main(argv=None):
    """Append a study session or quiz result, or seed demo data."""
    parser = argparse.ArgumentParser(description="Record study progress")
    parser.add_argument(
        "--storage",
        type=Path,
        help="Storage directory (defaults to STUDYBUDDY_STORAGE or ./storage)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    session_parser = subparsers.add_parser("session", help="Record a finished focus session")
    session_parser.add_argument("minutes", type=int, help="Minutes studied")
    session_parser.add_argument("rating", choices=["deep", "distracted"], help="How focused you were")

    quiz_parser = subparsers.add_parser("quiz", help="Record a quiz result")
    quiz_parser.add_argument("score", type=int, help="Correct answers")
    quiz_parser.add_argument("total", type=int, help="Number of questions")
    quiz_parser.add_argument("--subject", type=str, default=None, help="Quiz subject")

    subparsers.add_parser("seed", help="Fill an empty store with a week of sample data")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    overrides = {"storage_dir": args.storage} if args.storage else None
    settings = Settings.load(overrides)
    store = ProgressStore(settings.progress_path)

    try:
        if args.command == "session":
            session = store.add_study_session(args.minutes, args.rating)
            print(f"✓ Logged {session.minutes} min ({session.rating}) on {session.date.isoformat()}")
        elif args.command == "quiz":
            result = store.add_quiz_result(args.score, args.total, subject=args.subject)
            print(f"✓ Logged quiz {result.score}/{result.total} on {result.date.isoformat()}")
        elif store.seed_sample_data():
            print(f"✓ Seeded sample data into {store.path}")
        else:
            print("Store already has data; nothing seeded.")
    except (ValidationError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
