"""Data models for generate_newsletter pipeline stage."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from common.retry import RetryPolicy

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class NewsletterRequest(BaseModel):
    """On-demand newsletter request."""

    model_config = ConfigDict(populate_by_name=True)

    topic: str
    recipients: list[str] = Field(min_length=1)
    max_articles: int = Field(default=10, ge=1, le=100, alias="maxArticles")

    @field_validator("topic")
    @classmethod
    def topic_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("topic must not be blank")
        return value

    @field_validator("recipients")
    @classmethod
    def valid_addresses(cls, value: list[str]) -> list[str]:
        addresses = [address.strip() for address in value]
        invalid = [address for address in addresses if not EMAIL_PATTERN.match(address)]
        if invalid:
            raise ValueError(f"invalid email address: {', '.join(invalid)}")
        return addresses


class NewsletterResponse(BaseModel):
    """Structured result returned to the caller; never carries a traceback."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str
    articles_found: Optional[int] = Field(default=None, alias="articlesFound")
    email_sent: Optional[bool] = Field(default=None, alias="emailSent")
    message_id: Optional[str] = Field(default=None, alias="messageId")

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class NewsletterStage(str, Enum):
    START = "start"
    SEARCHING = "searching"
    GENERATING = "generating"
    DELIVERING = "delivering"
    DONE = "done"
    ERROR = "error"


@dataclass
class NewsletterContent:
    subject: str
    body: str


@dataclass
class NewsletterSettings:
    max_tokens: int = 4096
    parse_retries: int = 0
    retry: RetryPolicy = RetryPolicy(attempts=2)
