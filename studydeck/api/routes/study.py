import random
from collections.abc import Callable
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends

from studydeck.api.dependencies import get_clock, get_current_user_id, get_rng, get_session
from studydeck.models.item import ItemWithProgress
from studydeck.models.progress import EvaluationRead, EvaluationRequest
from studydeck.models.quiz import QuizAnswerRead, QuizAnswerRequest, QuizCardRead
from studydeck.services.progress_service import ProgressService
from studydeck.services.quiz_service import QuizService


def get_progress_service(db=Depends(get_session)) -> ProgressService:
    return ProgressService(db)


def get_quiz_service(db=Depends(get_session)) -> QuizService:
    return QuizService(db)


router = APIRouter(prefix="/subjects/{slug}", tags=["study"])


@router.get("/study/next", response_model=Optional[ItemWithProgress])
def next_item(
    slug: str,
    user_id: str = Depends(get_current_user_id),
    rng: random.Random = Depends(get_rng),
    clock: Callable[[], datetime] = Depends(get_clock),
    service: ProgressService = Depends(get_progress_service),
) -> Optional[ItemWithProgress]:
    return service.next_item(user_id, slug, now=clock(), rng=rng)


@router.post("/study/{item_id}/evaluate", response_model=EvaluationRead)
def evaluate_item(
    slug: str,
    item_id: int,
    payload: EvaluationRequest,
    user_id: str = Depends(get_current_user_id),
    rng: random.Random = Depends(get_rng),
    clock: Callable[[], datetime] = Depends(get_clock),
    service: ProgressService = Depends(get_progress_service),
) -> EvaluationRead:
    return service.evaluate(user_id, slug, item_id, payload.level, now=clock(), rng=rng)


@router.get("/quiz", response_model=List[QuizCardRead])
def build_quiz(
    slug: str,
    user_id: str = Depends(get_current_user_id),
    rng: random.Random = Depends(get_rng),
    service: QuizService = Depends(get_quiz_service),
) -> List[QuizCardRead]:
    return service.build_quiz(user_id, slug, rng=rng)


@router.post("/quiz/{item_id}/answer", response_model=QuizAnswerRead)
def answer_quiz(
    slug: str,
    item_id: int,
    payload: QuizAnswerRequest,
    user_id: str = Depends(get_current_user_id),
    rng: random.Random = Depends(get_rng),
    clock: Callable[[], datetime] = Depends(get_clock),
    service: QuizService = Depends(get_quiz_service),
) -> QuizAnswerRead:
    return service.answer(user_id, slug, item_id, payload.choice, now=clock(), rng=rng)


__all__ = ["router"]
