from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import Column, JSON, UniqueConstraint
from sqlmodel import Field, SQLModel


class StudyItem(SQLModel, table=True):
    __tablename__ = "study_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    subject_id: int = Field(foreign_key="subjects.id", index=True)
    term: str
    definition: str
    question: Optional[str] = Field(default=None)
    choices: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False, default=list),
    )
    answer_index: Optional[int] = Field(default=None)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ItemProgress(SQLModel, table=True):
    __tablename__ = "item_progress"
    __table_args__ = (UniqueConstraint("item_id", "user_id", name="ux_progress_item_user"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    item_id: int = Field(foreign_key="study_items.id", index=True)
    user_id: str = Field(index=True)
    last_seen: Optional[datetime] = Field(default=None)
    last_result: Optional[str] = Field(default=None)
    times_seen: int = Field(default=0)
    easy_count: int = Field(default=0)
    medium_count: int = Field(default=0)
    hard_count: int = Field(default=0)
    next_due: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
