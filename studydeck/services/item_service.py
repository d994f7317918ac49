from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import HTTPException, status
from sqlmodel import Session as DBSession, select

from studydeck.db.schemas import ItemProgress, StudyItem, Subject
from studydeck.models.item import ItemWithProgress, StudyItemCreate, StudyItemUpdate
from studydeck.services.subject_service import (
    delete_item_rows,
    get_owned_subject,
    to_item_with_progress,
)

logger = structlog.get_logger(__name__)


def get_subject_item(session: DBSession, subject: Subject, item_id: int) -> StudyItem:
    item = session.get(StudyItem, item_id)
    if not item or item.subject_id != subject.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return item


class ItemService:
    def __init__(self, session: DBSession) -> None:
        self.session = session

    def create_item(self, owner_id: str, slug: str, data: StudyItemCreate) -> ItemWithProgress:
        subject = get_owned_subject(self.session, owner_id, slug)
        item = StudyItem(
            subject_id=subject.id,
            term=data.term,
            definition=data.definition,
            question=data.question,
            choices=list(data.choices),
            answer_index=data.answer_index,
        )
        self.session.add(item)
        self.session.flush()
        progress = ItemProgress(item_id=item.id, user_id=owner_id)
        self.session.add(progress)
        subject.updated_at = datetime.now(timezone.utc)
        self.session.add(subject)
        self.session.commit()
        self.session.refresh(item)
        self.session.refresh(progress)
        logger.info("item.created", owner_id=owner_id, subject=slug, item_id=item.id)
        return to_item_with_progress(item, progress)

    def update_item(self, owner_id: str, slug: str, item_id: int, data: StudyItemUpdate) -> ItemWithProgress:
        subject = get_owned_subject(self.session, owner_id, slug)
        item = get_subject_item(self.session, subject, item_id)
        item.term = data.term
        item.definition = data.definition
        item.question = data.question
        item.choices = list(data.choices)
        item.answer_index = data.answer_index
        item.updated_at = datetime.now(timezone.utc)
        self.session.add(item)
        self.session.commit()
        self.session.refresh(item)
        progress = self.session.exec(
            select(ItemProgress).where(ItemProgress.item_id == item.id).where(ItemProgress.user_id == owner_id)
        ).first()
        logger.info("item.updated", owner_id=owner_id, subject=slug, item_id=item.id)
        return to_item_with_progress(item, progress)

    def delete_item(self, owner_id: str, slug: str, item_id: int) -> None:
        subject = get_owned_subject(self.session, owner_id, slug)
        item = get_subject_item(self.session, subject, item_id)
        delete_item_rows(self.session, item)
        self.session.commit()
        logger.info("item.deleted", owner_id=owner_id, subject=slug, item_id=item_id)
