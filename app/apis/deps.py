from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from app.core.blob_store import BlobStore, build_blob_store
from app.core.config import settings
from app.modules.auth import Authenticator, SharedPasswordAuthenticator
from app.modules.conjugation.generator import AgentTextGenerator, TextGenerator
from app.modules.conjugation.repository import QuestionSetRepository
from app.modules.conjugation.service import QuestionSetGenerationService


@lru_cache
def get_blob_store() -> BlobStore:
    return build_blob_store(settings.blob)


def get_repository(store: BlobStore = Depends(get_blob_store)) -> QuestionSetRepository:
    return QuestionSetRepository(
        store,
        prefix=settings.blob.question_set_prefix,
        index_write_retries=settings.blob.index_write_retries,
        index_retry_backoff=settings.blob.index_retry_backoff,
    )


@lru_cache
def get_text_generator() -> TextGenerator:
    # Model is resolved on first use so missing credentials only fail generation
    return AgentTextGenerator()


def get_generation_service(
    repository: QuestionSetRepository = Depends(get_repository),
    generator: TextGenerator = Depends(get_text_generator),
) -> QuestionSetGenerationService:
    return QuestionSetGenerationService(
        repository, generator, max_count=settings.generation.max_question_count
    )


@lru_cache
def get_authenticator() -> Authenticator:
    return SharedPasswordAuthenticator(settings.auth.shared_password)
