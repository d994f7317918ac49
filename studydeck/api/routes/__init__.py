from fastapi import APIRouter

from . import subjects, items, progress, study

api_router = APIRouter()
api_router.include_router(subjects.router)
api_router.include_router(items.router)
api_router.include_router(progress.router)
api_router.include_router(study.router)

__all__ = ["api_router"]
