"""Tests for common.config module."""

from unittest.mock import MagicMock

import pytest

from common.config import (
    ConfigSingleton,
    EmbeddingConfig,
    PipelineConfig,
    RetryConfig,
    StorageConfig,
    VectorIndexConfig,
    find_config_path,
    load_config,
    parse_config,
)

SECRET_VARS = [
    "S3_BUCKET_NAME",
    "NEWS_API_KEY",
    "PINECONE_API_KEY",
    "PINECONE_INDEX_NAME",
    "MODEL_ID",
    "EMBEDDING_MODEL_ID",
    "FROM_EMAIL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in SECRET_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("PIPELINE_CONFIG", raising=False)
    monkeypatch.delenv("PIPELINE_CONFIG_DIR", raising=False)
    return monkeypatch


class TestParseConfig:
    def test_empty_config_uses_defaults(self, clean_env) -> None:
        config = parse_config({})
        assert config.storage.backend == "s3"
        assert config.embedding.max_documents == 50
        assert config.embedding.concurrency == 2
        assert config.embedding.max_chars == 8000
        assert config.retry.attempts == 2
        assert config.vector_index.index_name == "ai-content-pipe"
        assert config.generation.parse_retries == 0

    def test_yaml_sections_applied(self, clean_env) -> None:
        config = parse_config({"storage": {"backend": "local", "local_path": "/tmp/out"}, "ingest": {"page_size": 25}})
        assert config.storage.backend == "local"
        assert config.storage.local_path == "/tmp/out"
        assert config.ingest.page_size == 25

    def test_secrets_come_from_environment(self, clean_env) -> None:
        clean_env.setenv("S3_BUCKET_NAME", "news-bucket")
        clean_env.setenv("NEWS_API_KEY", "news-key")
        clean_env.setenv("PINECONE_API_KEY", "pc-key")
        clean_env.setenv("PINECONE_INDEX_NAME", "custom-index")
        clean_env.setenv("FROM_EMAIL", "news@example.com")
        clean_env.setenv("MODEL_ID", "some-model")

        config = parse_config({})
        assert config.storage.bucket == "news-bucket"
        assert config.news_api.api_key == "news-key"
        assert config.vector_index.api_key == "pc-key"
        assert config.vector_index.index_name == "custom-index"
        assert config.email.from_email == "news@example.com"
        assert config.generation.model_id == "some-model"

    def test_section_must_be_mapping(self, clean_env) -> None:
        with pytest.raises(ValueError, match="storage"):
            parse_config({"storage": ["s3"]})

    def test_unknown_key_rejected(self, clean_env) -> None:
        with pytest.raises(TypeError):
            parse_config({"storage": {"bogus": 1}})


class TestPipelineConfigValidation:
    def test_invalid_storage_backend(self) -> None:
        with pytest.raises(ValueError, match="storage backend"):
            PipelineConfig(storage=StorageConfig(backend="ftp"))

    def test_invalid_vector_backend(self) -> None:
        with pytest.raises(ValueError, match="vector index backend"):
            PipelineConfig(vector_index=VectorIndexConfig(backend="faiss"))

    def test_invalid_provider(self) -> None:
        with pytest.raises(ValueError, match="embedding provider"):
            PipelineConfig(embedding=EmbeddingConfig(provider="local"))

    def test_concurrency_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="concurrency"):
            PipelineConfig(embedding=EmbeddingConfig(concurrency=0))

    def test_retry_attempts_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="attempts"):
            PipelineConfig(retry=RetryConfig(attempts=0))


class TestRetryConfig:
    def test_to_policy(self) -> None:
        policy = RetryConfig(attempts=4, backoff_seconds=1.5).to_policy()
        assert policy.attempts == 4
        assert policy.backoff_seconds == 1.5


class TestFindConfigPath:
    def test_finds_named_config(self, tmp_path, clean_env) -> None:
        (tmp_path / "dev.yaml").write_text("{}")
        assert find_config_path("dev", config_dir=tmp_path) == tmp_path / "dev.yaml"

    def test_env_var_selects_config(self, tmp_path, clean_env) -> None:
        (tmp_path / "staging.yaml").write_text("{}")
        clean_env.setenv("PIPELINE_CONFIG", "staging")
        assert find_config_path(None, config_dir=tmp_path) == tmp_path / "staging.yaml"

    def test_falls_back_to_default_name(self, tmp_path, clean_env) -> None:
        (tmp_path / "prod.yaml").write_text("{}")
        assert find_config_path(None, config_dir=tmp_path) == tmp_path / "prod.yaml"

    def test_config_dir_from_environment(self, tmp_path, clean_env) -> None:
        (tmp_path / "prod.yaml").write_text("storage:\n  backend: local\n")
        clean_env.setenv("PIPELINE_CONFIG_DIR", str(tmp_path))

        assert find_config_path(None) == tmp_path / "prod.yaml"
        assert load_config().storage.backend == "local"

    def test_accepts_explicit_path(self, tmp_path) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text("{}")
        assert find_config_path(str(path)) == path

    def test_missing_config_raises(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            find_config_path("missing", config_dir=tmp_path)


class TestLoadConfig:
    def test_loads_bundled_local_config(self, clean_env) -> None:
        config = load_config("local")
        assert config.storage.backend == "local"
        assert config.vector_index.backend == "memory"

    def test_loads_bundled_prod_config(self, clean_env) -> None:
        config = load_config("prod")
        assert config.storage.backend == "s3"
        assert config.vector_index.backend == "pinecone"
        assert config.embedding.dimension == 1536


class TestConfigSingleton:
    def test_loads_lazily_once(self) -> None:
        loader = MagicMock(return_value="config")
        manager = ConfigSingleton(loader)

        assert manager.get() == "config"
        assert manager.get() == "config"
        loader.assert_called_once()

    def test_set_and_reset(self) -> None:
        loader = MagicMock(return_value="loaded")
        manager = ConfigSingleton(loader)

        manager.set("explicit")
        assert manager.get() == "explicit"
        manager.reset()
        assert manager.get() == "loaded"

    def test_no_loader_raises(self) -> None:
        with pytest.raises(RuntimeError):
            ConfigSingleton().get()
