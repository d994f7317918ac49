from fastapi import APIRouter, Depends

from studydeck.api.dependencies import get_current_user_id, get_session
from studydeck.models.progress import SaveProgressRequest, SaveProgressResponse
from studydeck.services.progress_service import ProgressService


def get_progress_service(db=Depends(get_session)) -> ProgressService:
    return ProgressService(db)


router = APIRouter(prefix="/progress", tags=["progress"])


@router.post("", response_model=SaveProgressResponse)
def save_progress(
    payload: SaveProgressRequest,
    user_id: str = Depends(get_current_user_id),
    service: ProgressService = Depends(get_progress_service),
) -> SaveProgressResponse:
    service.save(user_id, payload.item_id, payload.stats_patch)
    return SaveProgressResponse(success=True)


__all__ = ["router"]
