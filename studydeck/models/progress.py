from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EvaluationLevel(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize to aware UTC. Naive values are taken to be UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class StudyItemProgress(BaseModel):
    last_seen: Optional[datetime] = None
    last_result: Optional[EvaluationLevel] = None
    times_seen: int = 0
    easy_count: int = 0
    medium_count: int = 0
    hard_count: int = 0
    next_due: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("last_seen", "next_due")
    @classmethod
    def as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)


class ProgressPatch(BaseModel):
    """Partial progress. Only fields explicitly sent are written."""

    last_seen: Optional[datetime] = None
    last_result: Optional[EvaluationLevel] = None
    times_seen: Optional[int] = Field(default=None, ge=0)
    easy_count: Optional[int] = Field(default=None, ge=0)
    medium_count: Optional[int] = Field(default=None, ge=0)
    hard_count: Optional[int] = Field(default=None, ge=0)
    next_due: Optional[datetime] = None

    @field_validator("last_seen", "next_due")
    @classmethod
    def as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)

    @field_validator("times_seen", "easy_count", "medium_count", "hard_count")
    @classmethod
    def counters_not_null(cls, value: Optional[int]) -> Optional[int]:
        # counters may be omitted but never cleared
        if value is None:
            raise ValueError("counter cannot be null")
        return value


class SaveProgressRequest(BaseModel):
    item_id: int
    stats_patch: ProgressPatch


class SaveProgressResponse(BaseModel):
    success: bool = True


class EvaluationRequest(BaseModel):
    level: EvaluationLevel


class EvaluationRead(BaseModel):
    progress: StudyItemProgress
    queue_offset: int
