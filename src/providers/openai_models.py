"""OpenAI embedding and text-generation clients."""

import logging
from typing import Optional

from openai import OpenAI, OpenAIError

from common.errors import IntegrationError

logger = logging.getLogger(__name__)

SERVICE = "openai"


class OpenAIEmbedder:
    def __init__(
        self,
        model: str = "text-embedding-3-small",
        client: Optional[OpenAI] = None,
        timeout: float = 30,
    ) -> None:
        self.model = model
        self.client = client or OpenAI(timeout=timeout, max_retries=0)

    def embed(self, text: str) -> list[float]:
        try:
            response = self.client.embeddings.create(model=self.model, input=text)
        except OpenAIError as e:
            logger.error("Error generating OpenAI embedding (text length %d): %s", len(text), e)
            raise IntegrationError(SERVICE, f"embedding with {self.model} failed: {e}") from e
        return list(response.data[0].embedding)


class OpenAIGenerator:
    def __init__(
        self,
        model: str = "gpt-4o-mini",
        client: Optional[OpenAI] = None,
        temperature: float = 0.7,
        timeout: float = 60,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self.client = client or OpenAI(timeout=timeout, max_retries=0)

    def generate(self, prompt: str, max_tokens: int = 4096) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=max_tokens,
                temperature=self.temperature,
            )
        except OpenAIError as e:
            logger.error("Error calling OpenAI %s: %s", self.model, e)
            raise IntegrationError(SERVICE, f"completion with {self.model} failed: {e}") from e

        content = response.choices[0].message.content
        if not content:
            raise IntegrationError(SERVICE, f"empty completion from {self.model}")
        return content.strip()
