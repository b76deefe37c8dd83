import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _parse_int(name: str, raw: str, default: int) -> int:
    if not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Config:
    """Runtime configuration loaded from environment variables.

    Raw values are read once at import time (``.env`` files are honoured
    via python-dotenv) and converted by the accessors below.
    """

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING").upper()

    FIXTURE_SEED_ENV: str = os.getenv("FIXTURE_SEED", "")
    FIXTURE_LENGTH_ENV: str = os.getenv("FIXTURE_LENGTH", "")
    DEFAULT_MERGE_LIMIT_ENV: str = os.getenv("DEFAULT_MERGE_LIMIT", "")

    @staticmethod
    def log_level() -> int:
        level = logging.getLevelName(Config.LOG_LEVEL)
        if not isinstance(level, int):
            raise ValueError(f"Unknown LOG_LEVEL: {Config.LOG_LEVEL}")
        return level

    @staticmethod
    def fixture_seed() -> int:
        return _parse_int("FIXTURE_SEED", Config.FIXTURE_SEED_ENV, 0)

    @staticmethod
    def fixture_length() -> int:
        return _parse_int("FIXTURE_LENGTH", Config.FIXTURE_LENGTH_ENV, 64)

    @staticmethod
    def default_merge_limit() -> int:
        return _parse_int("DEFAULT_MERGE_LIMIT", Config.DEFAULT_MERGE_LIMIT_ENV, 100)

    @classmethod
    def validate(cls) -> None:
        cls.fixture_seed()
        if cls.fixture_length() < 0:
            raise ValueError("FIXTURE_LENGTH must be non-negative")
        if cls.default_merge_limit() < 0:
            raise ValueError("DEFAULT_MERGE_LIMIT must be non-negative")
        cls.log_level()
