from __future__ import annotations

from typing import Dict, List, Optional

import structlog
from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session as DBSession, select

from studydeck.db.schemas import ItemProgress, StudyItem, Subject
from studydeck.models.item import ItemWithProgress
from studydeck.models.progress import StudyItemProgress
from studydeck.models.subject import SubjectCreate, SubjectDetailRead, SubjectRead
from studydeck.study import summarize
from studydeck.utils import slugify

logger = structlog.get_logger(__name__)


def get_owned_subject(session: DBSession, owner_id: str, slug: str) -> Subject:
    statement = select(Subject).where(Subject.owner_id == owner_id).where(Subject.slug == slug)
    subject = session.exec(statement).first()
    if not subject:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subject not found")
    return subject


def load_progress(session: DBSession, user_id: str, item_ids: List[int]) -> Dict[int, ItemProgress]:
    if not item_ids:
        return {}
    rows = session.exec(
        select(ItemProgress).where(ItemProgress.user_id == user_id).where(ItemProgress.item_id.in_(item_ids))
    ).all()
    return {row.item_id: row for row in rows}


def delete_item_rows(session: DBSession, item: StudyItem) -> None:
    for progress in session.exec(select(ItemProgress).where(ItemProgress.item_id == item.id)).all():
        session.delete(progress)
    session.delete(item)


def to_item_with_progress(item: StudyItem, progress: Optional[ItemProgress]) -> ItemWithProgress:
    read = ItemWithProgress.model_validate(item)
    if progress is not None:
        read.progress = StudyItemProgress.model_validate(progress)
    return read


class SubjectService:
    def __init__(self, session: DBSession) -> None:
        self.session = session

    def list_subjects(self, owner_id: str) -> List[SubjectRead]:
        subjects = self.session.exec(
            select(Subject).where(Subject.owner_id == owner_id).order_by(Subject.created_at, Subject.id)
        ).all()
        counts = self._item_counts([subject.id for subject in subjects])
        return [self._to_read_model(subject, counts.get(subject.id, 0)) for subject in subjects]

    def create_subject(self, owner_id: str, data: SubjectCreate) -> SubjectRead:
        slug = slugify(data.name)
        if not slug:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Subject name must contain letters or digits",
            )
        subject = Subject(owner_id=owner_id, name=data.name, slug=slug)
        self.session.add(subject)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Subject with same name already exists",
            ) from exc
        self.session.refresh(subject)
        logger.info("subject.created", owner_id=owner_id, subject_id=subject.id, slug=slug)
        return self._to_read_model(subject, 0)

    def get_detail(self, owner_id: str, slug: str) -> SubjectDetailRead:
        subject = get_owned_subject(self.session, owner_id, slug)
        items = self.list_items_with_progress(subject, owner_id)
        return SubjectDetailRead(
            subject=self._to_read_model(subject, len(items)),
            items=items,
            stats=summarize(items),
        )

    def list_items_with_progress(self, subject: Subject, user_id: str) -> List[ItemWithProgress]:
        items = self.session.exec(
            select(StudyItem).where(StudyItem.subject_id == subject.id).order_by(StudyItem.created_at, StudyItem.id)
        ).all()
        progress_map = load_progress(self.session, user_id, [item.id for item in items])
        return [to_item_with_progress(item, progress_map.get(item.id)) for item in items]

    def delete_subject(self, owner_id: str, slug: str) -> None:
        subject = self.session.exec(
            select(Subject).where(Subject.owner_id == owner_id).where(Subject.slug == slug)
        ).first()
        if not subject:
            return
        items = self.session.exec(select(StudyItem).where(StudyItem.subject_id == subject.id)).all()
        for item in items:
            delete_item_rows(self.session, item)
        self.session.delete(subject)
        self.session.commit()
        logger.info("subject.deleted", owner_id=owner_id, slug=slug)

    def _item_counts(self, subject_ids: List[int]) -> Dict[int, int]:
        if not subject_ids:
            return {}
        rows = self.session.exec(
            select(StudyItem.subject_id, func.count(StudyItem.id))
            .where(StudyItem.subject_id.in_(subject_ids))
            .group_by(StudyItem.subject_id)
        ).all()
        return {subject_id: count for subject_id, count in rows}

    def _to_read_model(self, subject: Subject, item_count: int) -> SubjectRead:
        return SubjectRead(
            id=subject.id,
            name=subject.name,
            slug=subject.slug,
            item_count=item_count,
            created_at=subject.created_at,
            updated_at=subject.updated_at,
        )
