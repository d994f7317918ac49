from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator, model_validator

from studydeck.models.progress import StudyItemProgress, ensure_utc

Choice = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]


class StudyItemBase(BaseModel):
    term: str = Field(min_length=1, max_length=200)
    definition: str = Field(min_length=1, max_length=1000)
    question: Optional[str] = Field(default=None, max_length=400)
    choices: List[Choice] = Field(default_factory=list, max_length=10)
    answer_index: Optional[int] = Field(default=None, ge=0, le=9)

    @field_validator("question")
    @classmethod
    def blank_question_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def check_choices(self) -> "StudyItemBase":
        if len(self.choices) < 2:
            self.choices = []
            self.answer_index = None
        elif self.answer_index is not None and self.answer_index >= len(self.choices):
            raise ValueError("answer_index must point at one of the choices")
        return self


class StudyItemCreate(StudyItemBase):
    pass


class StudyItemUpdate(StudyItemBase):
    pass


class StudyItemRead(BaseModel):
    id: int
    subject_id: int
    term: str
    definition: str
    question: Optional[str] = None
    choices: List[str] = Field(default_factory=list)
    answer_index: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)


class ItemWithProgress(StudyItemRead):
    progress: StudyItemProgress = Field(default_factory=StudyItemProgress)
