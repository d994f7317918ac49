from fastapi import APIRouter, Depends, status

from studydeck.api.dependencies import get_current_user_id, get_session
from studydeck.models.item import ItemWithProgress, StudyItemCreate, StudyItemUpdate
from studydeck.services.item_service import ItemService


def get_item_service(db=Depends(get_session)) -> ItemService:
    return ItemService(db)


router = APIRouter(prefix="/subjects/{slug}/items", tags=["items"])


@router.post("", response_model=ItemWithProgress, status_code=status.HTTP_201_CREATED)
def create_item(
    slug: str,
    payload: StudyItemCreate,
    user_id: str = Depends(get_current_user_id),
    service: ItemService = Depends(get_item_service),
) -> ItemWithProgress:
    return service.create_item(user_id, slug, payload)


@router.put("/{item_id}", response_model=ItemWithProgress)
def update_item(
    slug: str,
    item_id: int,
    payload: StudyItemUpdate,
    user_id: str = Depends(get_current_user_id),
    service: ItemService = Depends(get_item_service),
) -> ItemWithProgress:
    return service.update_item(user_id, slug, item_id, payload)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    slug: str,
    item_id: int,
    user_id: str = Depends(get_current_user_id),
    service: ItemService = Depends(get_item_service),
) -> None:
    service.delete_item(user_id, slug, item_id)


__all__ = ["router"]
