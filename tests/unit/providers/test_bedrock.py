"""Tests for providers.bedrock module."""

import io
import json
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from common.errors import IntegrationError
from providers.bedrock import BedrockEmbedder, BedrockGenerator


def _body(payload) -> dict:
    return {"body": io.BytesIO(json.dumps(payload).encode("utf-8"))}


class TestBedrockEmbedder:
    def test_returns_embedding(self) -> None:
        client = MagicMock()
        client.invoke_model.return_value = _body({"embedding": [0.1, 0.2, 0.3]})

        assert BedrockEmbedder(client).embed("hello") == [0.1, 0.2, 0.3]

        kwargs = client.invoke_model.call_args.kwargs
        assert kwargs["modelId"] == "amazon.titan-embed-text-v1"
        assert json.loads(kwargs["body"]) == {"inputText": "hello"}

    def test_missing_embedding_raises(self) -> None:
        client = MagicMock()
        client.invoke_model.return_value = _body({"inputTextTokenCount": 3})
        with pytest.raises(IntegrationError):
            BedrockEmbedder(client).embed("hello")

    def test_client_error_wrapped(self) -> None:
        client = MagicMock()
        client.invoke_model.side_effect = ClientError(
            {"Error": {"Code": "ThrottlingException", "Message": "slow down"}}, "InvokeModel"
        )
        with pytest.raises(IntegrationError, match="bedrock"):
            BedrockEmbedder(client).embed("hello")


class TestBedrockGenerator:
    def test_joins_text_blocks(self) -> None:
        client = MagicMock()
        client.converse.return_value = {
            "output": {"message": {"content": [{"text": "SUBJECT: Weekly"}, {"text": "BODY:\n<p>Hi</p>"}]}}
        }
        generator = BedrockGenerator(client, model_id="model", temperature=0.5, top_p=0.8)

        assert generator.generate("prompt", max_tokens=100) == "SUBJECT: Weekly\nBODY:\n<p>Hi</p>"
        kwargs = client.converse.call_args.kwargs
        assert kwargs["messages"] == [{"role": "user", "content": [{"text": "prompt"}]}]
        assert kwargs["inferenceConfig"] == {"maxTokens": 100, "temperature": 0.5, "topP": 0.8}

    def test_empty_response_raises(self) -> None:
        client = MagicMock()
        client.converse.return_value = {"output": {"message": {"content": []}}}
        with pytest.raises(IntegrationError):
            BedrockGenerator(client, model_id="model").generate("prompt")

    def test_client_error_wrapped(self) -> None:
        client = MagicMock()
        client.converse.side_effect = ClientError(
            {"Error": {"Code": "ValidationException", "Message": "bad"}}, "Converse"
        )
        with pytest.raises(IntegrationError):
            BedrockGenerator(client, model_id="model").generate("prompt")
