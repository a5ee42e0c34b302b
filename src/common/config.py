"""Pipeline configuration.

Non-secret settings come from ``configs/<name>.yaml``; secrets (API keys,
bucket, sender address) come from the environment, optionally via ``.env``.

Config names resolve against ``configs/`` in a source checkout. An installed
package does not carry that directory: set ``PIPELINE_CONFIG_DIR`` to a
directory holding the YAML files, or ``PIPELINE_CONFIG`` to a file path.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Generic, TypeVar

import yaml
from dotenv import load_dotenv

from common.retry import RetryPolicy

load_dotenv()

T = TypeVar("T")

CONFIG_DIR = Path(__file__).resolve().parents[2] / "configs"
CONFIG_ENV_VAR = "PIPELINE_CONFIG"
CONFIG_DIR_ENV_VAR = "PIPELINE_CONFIG_DIR"


@dataclass
class StorageConfig:
    backend: str = "s3"  # "s3" or "local"
    bucket: str = ""
    local_path: str = "output"
    region: str | None = None
    connect_timeout: float = 5
    read_timeout: float = 15


@dataclass
class NewsApiConfig:
    api_key: str = ""
    base_url: str = "https://newsapi.org/v2"
    timeout: float = 15


@dataclass
class EmbeddingConfig:
    provider: str = "bedrock"  # "bedrock" or "openai"
    model_id: str = "amazon.titan-embed-text-v1"
    dimension: int = 1536
    max_chars: int = 8000
    max_documents: int = 50
    concurrency: int = 2
    region: str | None = None
    timeout: float = 30


@dataclass
class VectorIndexConfig:
    backend: str = "pinecone"  # "pinecone" or "memory"
    api_key: str = ""
    index_name: str = "ai-content-pipe"
    metric: str = "cosine"
    cloud: str = "aws"
    region: str = "us-east-1"
    timeout: float = 30


@dataclass
class GenerationConfig:
    provider: str = "bedrock"  # "bedrock" or "openai"
    model_id: str = "us.meta.llama3-3-70b-instruct-v1:0"
    max_tokens: int = 4096
    temperature: float = 0.7
    top_p: float = 0.9
    region: str | None = None
    timeout: float = 60
    parse_retries: int = 0


@dataclass
class EmailConfig:
    from_email: str = ""
    region: str | None = None
    timeout: float = 15


@dataclass
class RetryConfig:
    attempts: int = 2
    backoff_seconds: float = 0.5
    backoff_multiplier: float = 2.0
    max_backoff_seconds: float = 8.0

    def to_policy(self) -> RetryPolicy:
        return RetryPolicy(
            attempts=self.attempts,
            backoff_seconds=self.backoff_seconds,
            backoff_multiplier=self.backoff_multiplier,
            max_backoff_seconds=self.max_backoff_seconds,
        )


@dataclass
class IngestConfig:
    topic: str = "Artificial Intelligence"
    page: int = 1
    page_size: int = 10
    cache_max_size: int = 10_000


@dataclass
class NewsletterConfig:
    default_max_articles: int = 10


@dataclass
class PipelineConfig:
    storage: StorageConfig = field(default_factory=StorageConfig)
    news_api: NewsApiConfig = field(default_factory=NewsApiConfig)
    embedding: EmbeddingConfig = field(default_factory=EmbeddingConfig)
    vector_index: VectorIndexConfig = field(default_factory=VectorIndexConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    email: EmailConfig = field(default_factory=EmailConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    ingest: IngestConfig = field(default_factory=IngestConfig)
    newsletter: NewsletterConfig = field(default_factory=NewsletterConfig)

    def __post_init__(self) -> None:
        if self.storage.backend not in ("s3", "local"):
            raise ValueError(f"Invalid storage backend: {self.storage.backend}. Must be 's3' or 'local'")
        if self.vector_index.backend not in ("pinecone", "memory"):
            raise ValueError(
                f"Invalid vector index backend: {self.vector_index.backend}. Must be 'pinecone' or 'memory'"
            )
        for name, provider in (("embedding", self.embedding.provider), ("generation", self.generation.provider)):
            if provider not in ("bedrock", "openai"):
                raise ValueError(f"Invalid {name} provider: {provider}. Must be 'bedrock' or 'openai'")
        if self.embedding.concurrency < 1:
            raise ValueError("embedding.concurrency must be >= 1")
        if self.retry.attempts < 1:
            raise ValueError("retry.attempts must be >= 1")


def find_config_path(
    config_name: str | None,
    config_dir: Path | None = None,
    default_name: str = "prod",
    env_var: str | None = CONFIG_ENV_VAR,
) -> Path:
    """Find config file path, checking env var and defaults.

    Args:
        config_name: Name of config (without .yaml), a path, or None for default
        config_dir: Directory containing config files (default: $PIPELINE_CONFIG_DIR or
            the repository configs/ directory)
        default_name: Default config name if config_name is None
        env_var: Environment variable to check for config name

    Returns:
        Path to the config file

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    if config_name is None:
        config_name = os.environ.get(env_var, default_name) if env_var else default_name

    if config_dir is None:
        config_dir = Path(os.environ.get(CONFIG_DIR_ENV_VAR) or CONFIG_DIR)

    if "/" in config_name or config_name.endswith((".yaml", ".yml")):
        config_path = Path(config_name)
    else:
        config_path = config_dir / f"{config_name}.yaml"

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    return config_path


def load_yaml(path: Path) -> dict:
    """Load YAML file and return dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_config(data: dict) -> PipelineConfig:
    """Parse a config dict (YAML sections) plus environment secrets."""

    def section(name: str) -> dict:
        value = data.get(name) or {}
        if not isinstance(value, dict):
            raise ValueError(f"Config section '{name}' must be a mapping")
        return value

    storage = StorageConfig(**section("storage"))
    storage.bucket = os.environ.get("S3_BUCKET_NAME", storage.bucket)

    news_api = NewsApiConfig(**section("news_api"))
    news_api.api_key = os.environ.get("NEWS_API_KEY", news_api.api_key)

    vector_index = VectorIndexConfig(**section("vector_index"))
    vector_index.api_key = os.environ.get("PINECONE_API_KEY", vector_index.api_key)
    vector_index.index_name = os.environ.get("PINECONE_INDEX_NAME", vector_index.index_name)

    generation = GenerationConfig(**section("generation"))
    generation.model_id = os.environ.get("MODEL_ID", generation.model_id)

    embedding = EmbeddingConfig(**section("embedding"))
    embedding.model_id = os.environ.get("EMBEDDING_MODEL_ID", embedding.model_id)

    email = EmailConfig(**section("email"))
    email.from_email = os.environ.get("FROM_EMAIL", email.from_email)

    return PipelineConfig(
        storage=storage,
        news_api=news_api,
        embedding=embedding,
        vector_index=vector_index,
        generation=generation,
        email=email,
        retry=RetryConfig(**section("retry")),
        ingest=IngestConfig(**section("ingest")),
        newsletter=NewsletterConfig(**section("newsletter")),
    )


def load_config(config_name: str | None = None) -> PipelineConfig:
    """Load configuration by name (e.g. 'prod', 'local') or path."""
    return parse_config(load_yaml(find_config_path(config_name)))


class ConfigSingleton(Generic[T]):
    """Generic config singleton manager.

    Provides get/set/reset pattern for managing a global config instance.
    """

    def __init__(self, loader: Callable[[], T] | None = None):
        self._config: T | None = None
        self._loader = loader

    def get(self) -> T:
        """Get the config, loading it lazily if needed."""
        if self._config is None:
            if self._loader is None:
                raise RuntimeError("No config loaded and no loader set")
            self._config = self._loader()
        return self._config

    def set(self, config: T) -> None:
        """Set the config directly."""
        self._config = config

    def reset(self) -> None:
        """Reset the config, forcing reload on next get()."""
        self._config = None


_manager: ConfigSingleton[PipelineConfig] = ConfigSingleton(load_config)
get_config = _manager.get
set_config = _manager.set
reset_config = _manager.reset
