"""Data models for ingest_news pipeline stage."""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class IngestRequest(BaseModel):
    """Scheduler payload. All fields optional."""

    model_config = ConfigDict(populate_by_name=True)

    topic: str = Field(default="Artificial Intelligence", min_length=1)
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1, le=100, alias="pageSize")
    headlines: bool = False


@dataclass
class IngestResult:
    """Outcome of one ingestion run. ``batch_key`` is None when nothing new was found."""
    topic: str
    fetched: int
    new: int
    duplicates: int
    batch_key: Optional[str] = None
    cache_saved: bool = False
