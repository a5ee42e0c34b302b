"""Build provider clients from pipeline configuration."""

import logging

from common.aws import get_bedrock_client, get_s3_client, get_ses_client
from common.config import PipelineConfig
from providers.base import BlobStore, Deliverer, DocumentSource, Embedder, Generator, VectorIndex
from providers.blob_store import LocalBlobStore, S3BlobStore
from providers.memory_index import InMemoryVectorIndex
from providers.news_api import NewsApiSource

logger = logging.getLogger(__name__)


def build_blob_store(config: PipelineConfig) -> BlobStore:
    storage = config.storage
    if storage.backend == "local":
        return LocalBlobStore(storage.local_path)
    client = get_s3_client(storage.region, storage.connect_timeout, storage.read_timeout)
    return S3BlobStore(storage.bucket, client)


def build_document_source(config: PipelineConfig) -> DocumentSource:
    news_api = config.news_api
    return NewsApiSource(news_api.api_key, base_url=news_api.base_url, timeout=news_api.timeout)


def build_embedder(config: PipelineConfig) -> Embedder:
    embedding = config.embedding
    if embedding.provider == "openai":
        from providers.openai_models import OpenAIEmbedder

        return OpenAIEmbedder(model=embedding.model_id, timeout=embedding.timeout)

    from providers.bedrock import BedrockEmbedder

    client = get_bedrock_client(embedding.region, read_timeout=embedding.timeout)
    return BedrockEmbedder(client, model_id=embedding.model_id)


def build_generator(config: PipelineConfig) -> Generator:
    generation = config.generation
    if generation.provider == "openai":
        from providers.openai_models import OpenAIGenerator

        return OpenAIGenerator(
            model=generation.model_id,
            temperature=generation.temperature,
            timeout=generation.timeout,
        )

    from providers.bedrock import BedrockGenerator

    client = get_bedrock_client(generation.region, read_timeout=generation.timeout)
    return BedrockGenerator(
        client,
        model_id=generation.model_id,
        temperature=generation.temperature,
        top_p=generation.top_p,
    )


_memory_indexes: dict[str, InMemoryVectorIndex] = {}


def build_vector_index(config: PipelineConfig) -> VectorIndex:
    vector_index = config.vector_index
    if vector_index.backend == "memory":
        # One shared instance per index name so the stages of a local run see the same vectors.
        if vector_index.index_name not in _memory_indexes:
            _memory_indexes[vector_index.index_name] = InMemoryVectorIndex(config.embedding.dimension)
        return _memory_indexes[vector_index.index_name]

    from providers.pinecone_index import PineconeVectorIndex

    return PineconeVectorIndex(vector_index.api_key, vector_index.index_name, timeout=vector_index.timeout)


def build_deliverer(config: PipelineConfig) -> Deliverer:
    from providers.ses import SesDeliverer

    email = config.email
    return SesDeliverer(get_ses_client(email.region, read_timeout=email.timeout), email.from_email)
