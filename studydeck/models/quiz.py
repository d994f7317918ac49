from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from studydeck.models.progress import EvaluationLevel, StudyItemProgress


class QuizCardRead(BaseModel):
    item_id: int
    prompt: str
    choices: List[str] = Field(default_factory=list)
    answer_index: int


class QuizAnswerRequest(BaseModel):
    choice: str = Field(min_length=1)


class QuizAnswerRead(BaseModel):
    correct: bool
    correct_choice: str
    level: EvaluationLevel
    progress: StudyItemProgress
    queue_offset: int
