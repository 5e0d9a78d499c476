from __future__ import annotations

from pydantic import BaseModel, Field

from app.modules.conjugation.models import IndexEntry


class QuestionSetListResponse(BaseModel):
    sets: list[IndexEntry] = Field(default_factory=list)


class DeleteQuestionSetResponse(BaseModel):
    ok: bool
    id: str
