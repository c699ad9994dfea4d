# src/similarword/core/config.py
"""
Settings, read from SIMILARWORD_* environment variables or .env.
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SIMILARWORD_", env_file=".env", extra="ignore")

    # Corpus
    CORPUS_PATH: str = "data/words.txt"

    # Archive
    REDIS_URL: str = "redis://localhost:6379/0"
    ARCHIVE_KEY: str = "similarword:archive"

    # Matching
    SIMILARITY_THRESHOLD: float = 0.6

    # Translation: "none", "baidu" or "openai"
    TRANSLATOR: str = "none"
    BAIDU_APPID: str | None = None
    BAIDU_KEY: str | None = None
    TRANSLATE_FROM: str = "en"
    TRANSLATE_TO: str = "zh"
    OPENAI_MODEL: str = "gpt-4o-mini"
    TRANSLATE_TIMEOUT: float = 10.0  # seconds, whole fan-out
    TRANSLATE_WORKERS: int = 8

    @field_validator("SIMILARITY_THRESHOLD")
    @classmethod
    def _threshold_in_range(cls, v: float) -> float:
        if not 0.5 <= v <= 1.0:
            raise ValueError("SIMILARITY_THRESHOLD must be between 0.5 and 1.0")
        return v

    @field_validator("TRANSLATOR")
    @classmethod
    def _known_translator(cls, v: str) -> str:
        v = v.lower()
        if v not in ("none", "baidu", "openai"):
            raise ValueError(f"Unknown translator: {v}")
        return v


@lru_cache()
def get_settings() -> Settings:
    return Settings()
