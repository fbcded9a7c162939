"""Unit tests for handle construction."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from resume_rag.config import Settings
from resume_rag.errors import ConfigError, StoreError
from resume_rag.store.clients import build_cache, build_collection, build_embeddings


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def test_build_embeddings_requires_openai_key() -> None:
    with pytest.raises(ConfigError, match="OPENAI_API_KEY"):
        build_embeddings(_settings(openai_api_key=""))


def test_build_embeddings_passes_proxy() -> None:
    with patch("langchain_openai.OpenAIEmbeddings") as factory:
        build_embeddings(_settings(openai_api_key="sk-test", https_proxy="http://127.0.0.1:15236"))
    factory.assert_called_once_with(
        model="text-embedding-ada-002",
        api_key="sk-test",
        openai_proxy="http://127.0.0.1:15236",
    )


def test_build_collection_sends_bearer_token() -> None:
    with patch("chromadb.HttpClient") as http_client:
        build_collection(_settings(chroma_host="chroma.local", chroma_port=9000, chroma_token="t0k"))
    http_client.assert_called_once_with(
        host="chroma.local",
        port=9000,
        ssl=False,
        headers={"Authorization": "Bearer t0k"},
    )
    http_client.return_value.get_or_create_collection.assert_called_once_with("documents")


def test_build_collection_connection_failure() -> None:
    with patch("chromadb.HttpClient", side_effect=ValueError("Could not connect")):
        with pytest.raises(StoreError, match="Could not connect"):
            build_collection(_settings())


def test_build_cache_absent_without_url() -> None:
    assert build_cache(_settings(redis_url="")) is None


def test_build_cache_from_url() -> None:
    with patch("redis.Redis.from_url", return_value=MagicMock()) as from_url:
        build_cache(_settings(redis_url="rediss://cache.example.com:6379", redis_token="secret"))
    from_url.assert_called_once_with("rediss://cache.example.com:6379", password="secret")
