"""AWS Bedrock embedding and text-generation clients."""

import json
import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from common.errors import IntegrationError

logger = logging.getLogger(__name__)

SERVICE = "bedrock"


class BedrockEmbedder:
    """Titan text embeddings via ``invoke_model``."""

    def __init__(self, client: Any, model_id: str = "amazon.titan-embed-text-v1") -> None:
        self.client = client
        self.model_id = model_id

    def embed(self, text: str) -> list[float]:
        try:
            response = self.client.invoke_model(
                modelId=self.model_id,
                contentType="application/json",
                accept="application/json",
                body=json.dumps({"inputText": text}),
            )
            response_body = json.loads(response["body"].read())
        except (BotoCoreError, ClientError, ValueError) as e:
            logger.error("Error generating Bedrock embedding (text length %d): %s", len(text), e)
            raise IntegrationError(SERVICE, f"embedding with {self.model_id} failed: {e}") from e

        embedding = response_body.get("embedding")
        if not embedding:
            raise IntegrationError(SERVICE, f"no embedding in {self.model_id} response")
        return embedding


class BedrockGenerator:
    """Single-turn text generation via the Converse API."""

    def __init__(
        self,
        client: Any,
        model_id: str,
        temperature: float = 0.7,
        top_p: float = 0.9,
    ) -> None:
        self.client = client
        self.model_id = model_id
        self.temperature = temperature
        self.top_p = top_p
        logger.info("Initialized Bedrock generator with model: %s", model_id)

    def generate(self, prompt: str, max_tokens: int = 4096) -> str:
        logger.info("Invoking %s with Converse API (prompt length %d)", self.model_id, len(prompt))
        try:
            response = self.client.converse(
                modelId=self.model_id,
                messages=[{"role": "user", "content": [{"text": prompt}]}],
                inferenceConfig={
                    "maxTokens": max_tokens,
                    "temperature": self.temperature,
                    "topP": self.top_p,
                },
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("Error calling Bedrock Converse with %s: %s", self.model_id, e)
            raise IntegrationError(SERVICE, f"converse with {self.model_id} failed: {e}") from e

        content = response.get("output", {}).get("message", {}).get("content") or []
        text = "\n".join(block["text"] for block in content if "text" in block)
        if not text:
            raise IntegrationError(SERVICE, "response contains no text blocks")

        logger.info("Generated %d characters with %s", len(text), self.model_id)
        return text.strip()
