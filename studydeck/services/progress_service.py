from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Optional

import structlog
from fastapi import HTTPException, status
from sqlmodel import Session as DBSession, select

from studydeck.db.schemas import ItemProgress, StudyItem, Subject
from studydeck.models.item import ItemWithProgress
from studydeck.models.progress import (
    EvaluationLevel,
    EvaluationRead,
    ProgressPatch,
    StudyItemProgress,
)
from studydeck.services.item_service import get_subject_item
from studydeck.services.subject_service import SubjectService, get_owned_subject, to_item_with_progress
from studydeck.study import apply_evaluation, select_next

logger = structlog.get_logger(__name__)


class ProgressService:
    """Persists review progress and drives the scheduler for one subject."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    def save(self, user_id: str, item_id: int, patch: ProgressPatch) -> StudyItemProgress:
        """Write the fields present in ``patch``; absent fields stay as they are.

        Concurrent saves for the same item are last-write-wins.
        """
        self._get_owned_item(user_id, item_id)
        values = patch.model_dump(exclude_unset=True)
        if isinstance(values.get("last_result"), EvaluationLevel):
            values["last_result"] = values["last_result"].value
        progress = self.session.exec(
            select(ItemProgress).where(ItemProgress.item_id == item_id).where(ItemProgress.user_id == user_id)
        ).first()
        if progress is None:
            progress = ItemProgress(item_id=item_id, user_id=user_id)
        for key, value in values.items():
            setattr(progress, key, value)
        progress.updated_at = datetime.now(timezone.utc)
        self.session.add(progress)
        self.session.commit()
        self.session.refresh(progress)
        logger.info("progress.saved", user_id=user_id, item_id=item_id, fields=sorted(values))
        return StudyItemProgress.model_validate(progress)

    def next_item(
        self,
        user_id: str,
        slug: str,
        now: Optional[datetime] = None,
        rng: Optional[random.Random] = None,
    ) -> Optional[ItemWithProgress]:
        subject = get_owned_subject(self.session, user_id, slug)
        items = SubjectService(self.session).list_items_with_progress(subject, user_id)
        return select_next(items, now=now, rng=rng)

    def evaluate(
        self,
        user_id: str,
        slug: str,
        item_id: int,
        level: EvaluationLevel,
        now: Optional[datetime] = None,
        rng: Optional[random.Random] = None,
    ) -> EvaluationRead:
        item = self.load_item(user_id, slug, item_id)
        result = apply_evaluation(item, level, now=now, rng=rng)
        progress = self.save(user_id, item_id, ProgressPatch(**result.progress.model_dump()))
        logger.info(
            "item.evaluated",
            user_id=user_id,
            item_id=item_id,
            level=EvaluationLevel(level).value,
            queue_offset=result.queue_offset,
        )
        return EvaluationRead(progress=progress, queue_offset=result.queue_offset)

    def load_item(self, user_id: str, slug: str, item_id: int) -> ItemWithProgress:
        subject = get_owned_subject(self.session, user_id, slug)
        item = get_subject_item(self.session, subject, item_id)
        progress = self.session.exec(
            select(ItemProgress).where(ItemProgress.item_id == item.id).where(ItemProgress.user_id == user_id)
        ).first()
        return to_item_with_progress(item, progress)

    def _get_owned_item(self, user_id: str, item_id: int) -> StudyItem:
        row = self.session.exec(
            select(StudyItem, Subject)
            .join(Subject, Subject.id == StudyItem.subject_id)
            .where(StudyItem.id == item_id)
        ).first()
        if not row or row[1].owner_id != user_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
        return row[0]
