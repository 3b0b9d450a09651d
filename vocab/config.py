"""
Runtime configuration loaded from environment variables (and a .env file).

Settings are resolved once and passed explicitly into the store and
controllers instead of living in module-level singletons.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv


DEFAULT_DATABASE_URL = "sqlite:///vocab.db"
DEFAULT_LANGUAGE = "en"
SUPPORTED_LANGUAGES = ("en", "zh")
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class Settings:
    """
    Resolved configuration for a vocab process.
    """
    database_url: str = DEFAULT_DATABASE_URL
    test_mode: bool = False
    language: str = DEFAULT_LANGUAGE
    log_level: str = "WARNING"


def is_test_mode() -> bool:
    """Check if running in test mode."""
    return os.getenv("TEST_MODE", "false").lower() == "true"


def get_database_url(test_mode: bool = False) -> str:
    """
    Get the database URL from the environment.

    In test mode the database name "vocab" is swapped for "test_vocab",
    so sqlite:///vocab.db becomes sqlite:///test_vocab.db and
    postgresql://host/vocab becomes postgresql://host/test_vocab.
    """
    url = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
    if test_mode and "/vocab" in url:
        head, tail = url.rsplit("/vocab", 1)
        url = f"{head}/test_vocab{tail}"
    return url


def load_settings(dotenv: bool = True) -> Settings:
    """
    Build Settings from the environment.

    Args:
        dotenv: If True, load a .env file first (existing variables win)

    Returns:
        Frozen Settings instance
    """
    if dotenv:
        load_dotenv()

    test_mode = is_test_mode()
    language = os.getenv("VOCAB_LANGUAGE", DEFAULT_LANGUAGE).lower()
    if language not in SUPPORTED_LANGUAGES:
        language = DEFAULT_LANGUAGE

    return Settings(
        database_url=get_database_url(test_mode),
        test_mode=test_mode,
        language=language,
        log_level=os.getenv("VOCAB_LOG_LEVEL", "WARNING").upper(),
    )


def configure_logging(settings: Settings) -> None:
    """Configure root logging for scripts using the vocab package."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format=LOG_FORMAT,
    )
