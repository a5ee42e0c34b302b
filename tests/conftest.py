import pytest

from fakes import DIMENSION, FakeDeliverer, FakeEmbedder, make_document
from providers.blob_store import LocalBlobStore
from providers.memory_index import InMemoryVectorIndex


@pytest.fixture
def documents():
    return [make_document(n) for n in range(1, 6)]


@pytest.fixture
def blob_store(tmp_path):
    return LocalBlobStore(tmp_path)


@pytest.fixture
def vector_index():
    return InMemoryVectorIndex(DIMENSION)


@pytest.fixture
def embedder():
    return FakeEmbedder()


@pytest.fixture
def deliverer():
    return FakeDeliverer()
