from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from studydeck.models.item import ItemWithProgress
from studydeck.models.progress import ensure_utc


class SubjectCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)


class SubjectRead(BaseModel):
    id: int
    name: str
    slug: str
    item_count: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)


class SubjectStats(BaseModel):
    easy: int = 0
    medium: int = 0
    hard: int = 0
    seen: int = 0
    last_studied: Optional[datetime] = None


class SubjectDetailRead(BaseModel):
    subject: SubjectRead
    items: List[ItemWithProgress] = Field(default_factory=list)
    stats: SubjectStats = Field(default_factory=SubjectStats)
