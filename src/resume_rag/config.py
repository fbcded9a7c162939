"""Shared configuration loaded from environment / ``.env`` file."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

from resume_rag.errors import ConfigError

DEFAULT_SECTIONS: list[str] = [
    "/personalInfo",
    "/experience",
    "/education",
    "/skills",
    "/projects",
    "/interests",
]


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # Embedding
    openai_api_key: str = Field(default="", description="OpenAI API key used for embeddings")
    embedding_provider: Literal["openai", "huggingface"] = "openai"
    embedding_model: str = "text-embedding-ada-002"
    https_proxy: str = Field(
        default="",
        description="Optional proxy for the embedding provider, e.g. 'http://127.0.0.1:15236'",
    )

    # Vector store
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    chroma_ssl: bool = False
    chroma_token: str = ""
    chroma_collection: str = "documents"

    # Cache (optional; no URL means nothing to flush)
    redis_url: str = ""
    redis_token: str = ""

    # Ingestion
    resume_path: str = "data/resumeData.json"
    resume_sections: list[str] = Field(default_factory=lambda: list(DEFAULT_SECTIONS))
    chunk_size: int = 1000
    chunk_overlap: int = 200
    embed_delay_seconds: float = 1.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    def check_ingestion(self) -> None:
        """Raise :class:`ConfigError` if a value the ingestion run needs is missing."""
        missing: list[str] = []
        if not self.chroma_host:
            missing.append("CHROMA_HOST")
        if not self.chroma_collection:
            missing.append("CHROMA_COLLECTION")
        if self.embedding_provider == "openai" and not self.openai_api_key:
            missing.append("OPENAI_API_KEY")
        if missing:
            raise ConfigError(f"Please set {', '.join(missing)} environment variable(s).")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide default settings, read on first use."""
    return Settings()
