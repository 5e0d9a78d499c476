"""Pydantic models for conjugation drills and stored question sets.

Questions travel over the wire and in stored documents with the short keys
``es``/``en``/``fr``/``answer``/``tense``/``inf``; the descriptive attribute
names are accepted on input as well.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

BLANK_MARKER = "__"


class TenseId(str, Enum):
    PRES = "pres"
    PRET = "pret"
    IMP = "imp"
    FUT = "fut"
    COND = "cond"
    PRESPERF = "presperf"
    PLUP = "plup"
    FUTPERF = "futperf"
    CONDPERF = "condperf"
    SUBPRES = "subpres"
    SUBIMP = "subimp"
    SUBPERF = "subperf"
    SUBPLUP = "subplup"


class Question(BaseModel):
    """A single fill-in-the-blank item."""

    model_config = ConfigDict(populate_by_name=True)

    spanish_text: str = Field(alias="es")
    english_translation: str = Field(default="", alias="en")
    french_translation: Optional[str] = Field(default=None, alias="fr")
    answer: str
    tense_id: TenseId = Field(alias="tense")
    infinitive: Optional[str] = Field(default=None, alias="inf")

    @field_validator("spanish_text")
    @classmethod
    def _one_blank(cls, v: str) -> str:
        v = v.strip()
        if v.count(BLANK_MARKER) != 1:
            raise ValueError(f"must contain {BLANK_MARKER!r} exactly once")
        return v

    @field_validator("answer")
    @classmethod
    def _non_empty_answer(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("answer must not be empty")
        return v

    @field_validator("tense_id", mode="before")
    @classmethod
    def _normalize_tense(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class QuestionSetDocument(BaseModel):
    """Stored body of a set blob. Legacy documents carry no owner."""

    title: str
    questions: list[Question] = Field(default_factory=list)
    owner_username: Optional[str] = None


class QuestionSet(BaseModel):
    id: str
    title: str
    owner_username: Optional[str] = None
    questions: list[Question] = Field(default_factory=list)


class IndexEntry(BaseModel):
    id: str
    title: str
    owner_username: Optional[str] = None


class QuestionSetIndex(BaseModel):
    """Directory of all known sets, in append order."""

    model_config = ConfigDict(populate_by_name=True)

    entries: list[IndexEntry] = Field(default_factory=list, alias="sets")

    def for_owner(self, username: str) -> "QuestionSetIndex":
        return QuestionSetIndex(
            entries=[e for e in self.entries if e.owner_username == username]
        )


class GenerationFailure(str, Enum):
    NO_OUTPUT = "no_output"
    MALFORMED_OUTPUT = "malformed_output"
    STORE_WRITE_FAILURE = "store_write_failure"


GENERATION_FAILED_TITLE = "No se pudieron generar preguntas"


class GenerationResult(BaseModel):
    """Outcome of a generation request; failures are set-shaped with no questions."""

    ok: bool
    id: Optional[str] = None
    title: str
    owner_username: Optional[str] = None
    questions: list[Question] = Field(default_factory=list)
    failure: Optional[GenerationFailure] = None

    @classmethod
    def from_set(cls, qs: QuestionSet) -> "GenerationResult":
        return cls(
            ok=True,
            id=qs.id,
            title=qs.title,
            owner_username=qs.owner_username,
            questions=qs.questions,
        )

    @classmethod
    def failed(
        cls, failure: GenerationFailure, owner_username: Optional[str] = None
    ) -> "GenerationResult":
        return cls(
            ok=False,
            title=GENERATION_FAILED_TITLE,
            owner_username=owner_username,
            failure=failure,
        )
