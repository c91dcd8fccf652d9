from fastapi import APIRouter

from .entries import entries_router
from .score import score_router

router = APIRouter()

router.include_router(entries_router, tags=["Entries"])
router.include_router(score_router, tags=["Scores"])
