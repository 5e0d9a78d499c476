from __future__ import annotations

from fastapi import APIRouter

from app.core.config import settings
from app.modules.conjugation.tenses import TENSES, Tense


router = APIRouter()


@router.get(
    f"/{settings.app.version}/tense",
    response_model=list[Tense],
    tags=["tenses"],
)
async def list_tenses() -> list[Tense]:
    return TENSES
