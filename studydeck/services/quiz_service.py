from __future__ import annotations

import random
from datetime import datetime
from typing import List, Optional

from sqlmodel import Session as DBSession

from studydeck.models.progress import EvaluationLevel
from studydeck.models.quiz import QuizAnswerRead, QuizCardRead
from studydeck.services.progress_service import ProgressService
from studydeck.services.subject_service import SubjectService, get_owned_subject
from studydeck.study import build_quiz_card, correct_choice, grade_quiz_answer


class QuizService:
    def __init__(self, session: DBSession) -> None:
        self.session = session
        self.progress = ProgressService(session)

    def build_quiz(self, user_id: str, slug: str, rng: Optional[random.Random] = None) -> List[QuizCardRead]:
        subject = get_owned_subject(self.session, user_id, slug)
        items = SubjectService(self.session).list_items_with_progress(subject, user_id)
        cards = [build_quiz_card(item, items, rng=rng) for item in items]
        return [
            QuizCardRead(
                item_id=card.item.id,
                prompt=card.prompt,
                choices=card.choices,
                answer_index=card.answer_index,
            )
            for card in cards
        ]

    def answer(
        self,
        user_id: str,
        slug: str,
        item_id: int,
        choice: str,
        now: Optional[datetime] = None,
        rng: Optional[random.Random] = None,
    ) -> QuizAnswerRead:
        item = self.progress.load_item(user_id, slug, item_id)
        level = grade_quiz_answer(item, choice)
        evaluation = self.progress.evaluate(user_id, slug, item_id, level, now=now, rng=rng)
        return QuizAnswerRead(
            correct=level == EvaluationLevel.EASY,
            correct_choice=correct_choice(item),
            level=level,
            progress=evaluation.progress,
            queue_offset=evaluation.queue_offset,
        )
