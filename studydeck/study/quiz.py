from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from studydeck.models.item import ItemWithProgress
from studydeck.models.progress import EvaluationLevel
from studydeck.study.scheduler import default_rng

MAX_DISTRACTORS = 3


@dataclass(frozen=True)
class QuizCard:
    item: ItemWithProgress
    prompt: str
    choices: List[str] = field(default_factory=list)
    answer_index: int = 0


def default_prompt(term: str) -> str:
    return f'What does "{term}" mean?'


def build_quiz_card(
    item: ItemWithProgress,
    pool: Sequence[ItemWithProgress],
    rng: Optional[random.Random] = None,
) -> QuizCard:
    """Build a multiple-choice card for ``item``.

    Authored choices are used as-is when the item has at least two and a
    correct index. Otherwise the item's definition is mixed with up to three
    definitions drawn from the other items in ``pool``.
    """
    if len(item.choices) >= 2 and item.answer_index is not None:
        return QuizCard(
            item=item,
            prompt=item.question or default_prompt(item.term),
            choices=list(item.choices),
            answer_index=item.answer_index,
        )
    rng = rng or default_rng
    alternatives = [other.definition for other in pool if other.id != item.id and other.definition]
    distractors = rng.sample(alternatives, min(MAX_DISTRACTORS, len(alternatives)))
    choices = [item.definition, *distractors]
    rng.shuffle(choices)
    return QuizCard(
        item=item,
        prompt=default_prompt(item.term),
        choices=choices,
        answer_index=choices.index(item.definition),
    )


def correct_choice(item: ItemWithProgress) -> str:
    if len(item.choices) >= 2 and item.answer_index is not None:
        return item.choices[item.answer_index]
    return item.definition


def grade_quiz_answer(item: ItemWithProgress, choice: str) -> EvaluationLevel:
    """A right answer counts as easy, a wrong one as hard."""
    if choice.strip() == correct_choice(item):
        return EvaluationLevel.EASY
    return EvaluationLevel.HARD
