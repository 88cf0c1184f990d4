"""Configuration for Study Buddy (.env, environment, then explicit overrides)."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent
DEFAULT_MODEL = "gemini-2.5-flash"


@dataclass
class Settings:
    google_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_MODEL
    storage_dir: Path = field(default_factory=lambda: PROJECT_ROOT / "storage")
    max_context_length: int = 1500  # characters
    max_chunks: int = 3
    trend_window_days: int = 7

    @property
    def state_dir(self) -> Path:
        return self.storage_dir / "state"

    @property
    def progress_path(self) -> Path:
        return self.state_dir / "progress.json"

    @classmethod
    def load(cls, overrides: dict | None = None, dotenv: bool = True) -> "Settings":
        """Load settings from .env and the environment, then apply overrides."""
        if dotenv:
            load_dotenv()

        settings = cls()
        settings = cls._apply_dict(settings, {
            key: value for key, value in {
                "google_api_key": os.getenv("GOOGLE_API_KEY"),
                "gemini_model": os.getenv("STUDYBUDDY_MODEL"),
                "storage_dir": os.getenv("STUDYBUDDY_STORAGE"),
                "max_context_length": os.getenv("STUDYBUDDY_MAX_CONTEXT"),
                "max_chunks": os.getenv("STUDYBUDDY_MAX_CHUNKS"),
                "trend_window_days": os.getenv("STUDYBUDDY_TREND_DAYS"),
            }.items() if value
        })

        if overrides:
            settings = cls._apply_dict(settings, overrides)

        return settings

    @classmethod
    def _apply_dict(cls, settings: "Settings", data: dict) -> "Settings":
        if "google_api_key" in data:
            settings.google_api_key = data["google_api_key"] or None
        if "gemini_model" in data:
            settings.gemini_model = str(data["gemini_model"])
        if "storage_dir" in data:
            settings.storage_dir = Path(data["storage_dir"]).expanduser()
        if "max_context_length" in data:
            settings.max_context_length = _positive_int("max_context_length", data["max_context_length"])
        if "max_chunks" in data:
            settings.max_chunks = _positive_int("max_chunks", data["max_chunks"])
        if "trend_window_days" in data:
            settings.trend_window_days = _positive_int("trend_window_days", data["trend_window_days"])
        return settings


def _positive_int(name: str, value) -> int:
    number = int(value)
    if number < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return number
