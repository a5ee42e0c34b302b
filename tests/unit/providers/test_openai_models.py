"""Tests for providers.openai_models module."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from openai import OpenAIError

from common.errors import IntegrationError
from providers.openai_models import OpenAIEmbedder, OpenAIGenerator


class TestOpenAIEmbedder:
    def test_returns_embedding(self) -> None:
        client = MagicMock()
        client.embeddings.create.return_value = SimpleNamespace(data=[SimpleNamespace(embedding=[0.5, 0.25])])

        assert OpenAIEmbedder(client=client).embed("text") == [0.5, 0.25]
        client.embeddings.create.assert_called_once_with(model="text-embedding-3-small", input="text")

    def test_error_wrapped(self) -> None:
        client = MagicMock()
        client.embeddings.create.side_effect = OpenAIError("rate limited")
        with pytest.raises(IntegrationError, match="rate limited"):
            OpenAIEmbedder(client=client).embed("text")


class TestOpenAIGenerator:
    def test_returns_completion_text(self) -> None:
        client = MagicMock()
        client.chat.completions.create.return_value = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content="  SUBJECT: s\nBODY: b  "))]
        )
        assert OpenAIGenerator(client=client).generate("prompt", max_tokens=50) == "SUBJECT: s\nBODY: b"
        assert client.chat.completions.create.call_args.kwargs["max_tokens"] == 50

    def test_empty_completion_raises(self) -> None:
        client = MagicMock()
        client.chat.completions.create.return_value = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=None))]
        )
        with pytest.raises(IntegrationError):
            OpenAIGenerator(client=client).generate("prompt")
