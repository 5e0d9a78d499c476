"""Conjugation drills module exports."""

from .models import (
    GenerationFailure,
    GenerationResult,
    IndexEntry,
    Question,
    QuestionSet,
    QuestionSetIndex,
    TenseId,
)
from .repository import QuestionSetRepository
from .service import QuestionSetGenerationService

__all__ = [
    "GenerationFailure",
    "GenerationResult",
    "IndexEntry",
    "Question",
    "QuestionSet",
    "QuestionSetIndex",
    "TenseId",
    "QuestionSetRepository",
    "QuestionSetGenerationService",
]
