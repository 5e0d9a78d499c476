"""Question endpoints.

One path serves every read variant, selected by query parameters:

- ``?list=true[&username=u]``       index entries, filtered by owner when given
- ``?generate=true&username=u...``  generate and persist a new set
- ``?id=X[&username=u]``            the questions of one set, 404 with a ``null`` body when absent
- no parameters                     the built-in questions
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse

from app.apis.deps import get_generation_service, get_repository
from app.core.config import settings
from app.core.logging import get_logger
from app.modules.conjugation.base_questions import BASE_QUESTIONS
from app.modules.conjugation.models import GenerationResult, Question, TenseId
from app.modules.conjugation.repository import QuestionSetRepository
from app.modules.conjugation.service import QuestionSetGenerationService
from .schemas import DeleteQuestionSetResponse, QuestionSetListResponse


router = APIRouter()
logger = get_logger(__name__)

QUESTION_PATH = f"/{settings.app.version}/question"


def _clean(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    return value or None


def _parse_tenses(raw: Optional[str]) -> Optional[list[TenseId]]:
    keys = [k.strip().lower() for k in (raw or "").split(",") if k.strip()]
    if not keys:
        return None
    valid = {t.value for t in TenseId}
    unknown = [k for k in keys if k not in valid]
    if unknown:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown tense id(s): {', '.join(unknown)}",
        )
    # De-duplicate, keep request order
    return [TenseId(k) for k in dict.fromkeys(keys)]


@router.get(QUESTION_PATH, tags=["questions"])
async def get_questions(
    list_sets: bool = Query(default=False, alias="list"),
    generate: bool = Query(default=False),
    set_id: Optional[str] = Query(default=None, alias="id"),
    username: Optional[str] = Query(default=None),
    count: int = Query(
        default=settings.generation.default_question_count,
        ge=1,
        le=settings.generation.max_question_count,
    ),
    tenses: Optional[str] = Query(default=None),
    title: Optional[str] = Query(default=None),
    repository: QuestionSetRepository = Depends(get_repository),
    service: QuestionSetGenerationService = Depends(get_generation_service),
):
    username = _clean(username)

    if list_sets:
        index = await repository.get_index(username)
        return QuestionSetListResponse(sets=index.entries)

    if generate:
        if not username:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="username is required to generate questions",
            )
        result: GenerationResult = await service.generate_question_set(
            title=title,
            count=count,
            tenses=_parse_tenses(tenses),
            owner_username=username,
        )
        return result

    set_id = _clean(set_id)
    if set_id:
        qs = await repository.get_set(set_id, username)
        if qs is None:
            return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=None)
        return qs.questions

    questions: list[Question] = BASE_QUESTIONS
    return questions


@router.delete(
    QUESTION_PATH,
    response_model=DeleteQuestionSetResponse,
    tags=["questions"],
)
async def delete_question_set(
    set_id: Optional[str] = Query(default=None, alias="id"),
    username: Optional[str] = Query(default=None),
    repository: QuestionSetRepository = Depends(get_repository),
) -> DeleteQuestionSetResponse:
    set_id, username = _clean(set_id), _clean(username)
    if not set_id or not username:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="id and username are required",
        )
    if not await repository.delete_set(set_id, username):
        raise HTTPException(status_code=404, detail="Question set not found")
    return DeleteQuestionSetResponse(ok=True, id=set_id)
