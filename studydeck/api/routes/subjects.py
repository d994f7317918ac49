from typing import List

from fastapi import APIRouter, Depends, status

from studydeck.api.dependencies import get_current_user_id, get_session
from studydeck.models.subject import SubjectCreate, SubjectDetailRead, SubjectRead
from studydeck.services.subject_service import SubjectService


def get_subject_service(db=Depends(get_session)) -> SubjectService:
    return SubjectService(db)


router = APIRouter(prefix="/subjects", tags=["subjects"])


@router.get("", response_model=List[SubjectRead])
def list_subjects(
    user_id: str = Depends(get_current_user_id),
    service: SubjectService = Depends(get_subject_service),
) -> List[SubjectRead]:
    return service.list_subjects(user_id)


@router.post("", response_model=SubjectRead, status_code=status.HTTP_201_CREATED)
def create_subject(
    payload: SubjectCreate,
    user_id: str = Depends(get_current_user_id),
    service: SubjectService = Depends(get_subject_service),
) -> SubjectRead:
    return service.create_subject(user_id, payload)


@router.get("/{slug}", response_model=SubjectDetailRead)
def get_subject(
    slug: str,
    user_id: str = Depends(get_current_user_id),
    service: SubjectService = Depends(get_subject_service),
) -> SubjectDetailRead:
    return service.get_detail(user_id, slug)


@router.delete("/{slug}", status_code=status.HTTP_204_NO_CONTENT)
def delete_subject(
    slug: str,
    user_id: str = Depends(get_current_user_id),
    service: SubjectService = Depends(get_subject_service),
) -> None:
    service.delete_subject(user_id, slug)


__all__ = ["router"]
