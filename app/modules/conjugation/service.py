"""Question set generation: prompt, generate, validate, persist.

Failures of the generation step itself (no output, unparsable output, no
valid questions) and of persisting the result are reported as a
``GenerationResult`` with ``ok=False`` and no questions; nothing is written
in that case.
"""

from __future__ import annotations

from typing import Optional, Sequence

from app.core.blob_store import BlobStoreError
from app.core.logging import for_user, get_logger
from app.modules.conjugation.generator import TextGenerator
from app.modules.conjugation.models import (
    GenerationFailure,
    GenerationResult,
    TenseId,
)
from app.modules.conjugation.prompts import build_instruction
from app.modules.conjugation.repository import QuestionSetRepository
from app.modules.conjugation.validation import (
    MalformedOutputError,
    parse_generated_output,
    validate_questions,
)

logger = get_logger(__name__)


def default_title(count: int) -> str:
    return f"{int(count)} preguntas"


class QuestionSetGenerationService:
    def __init__(
        self,
        repository: QuestionSetRepository,
        generator: TextGenerator,
        *,
        max_count: int = 50,
    ) -> None:
        self.repository = repository
        self.generator = generator
        self.max_count = max(1, int(max_count))

    async def generate_question_set(
        self,
        title: Optional[str],
        count: int,
        tenses: Optional[Sequence[TenseId]],
        owner_username: str,
    ) -> GenerationResult:
        if not owner_username:
            raise ValueError("owner_username is required")
        count = int(count)
        if count < 1 or count > self.max_count:
            raise ValueError(f"count must be between 1 and {self.max_count}")

        log = for_user(logger, owner_username)
        title = (title or "").strip() or default_title(count)
        tenses = [TenseId(t) for t in tenses] if tenses else None
        prompt = build_instruction(count, tenses)

        log.info(
            "Generating %d question(s) (tenses=%s)",
            count,
            ",".join(t.value for t in tenses) if tenses else "all",
        )
        text = await self.generator.generate(prompt)
        if not text or not text.strip():
            log.warning("Generation failed: no output")
            return GenerationResult.failed(GenerationFailure.NO_OUTPUT, owner_username)

        try:
            items = parse_generated_output(text)
        except MalformedOutputError as e:
            log.warning("Generation failed: %s", e)
            return GenerationResult.failed(
                GenerationFailure.MALFORMED_OUTPUT, owner_username
            )

        questions = validate_questions(items, limit=count)
        if not questions:
            log.warning(
                "Generation failed: none of %d item(s) were valid",
                len(items),
            )
            return GenerationResult.failed(
                GenerationFailure.MALFORMED_OUTPUT, owner_username
            )

        try:
            qs = await self.repository.create_set(title, questions, owner_username)
        except BlobStoreError:
            log.exception("Generation failed: could not persist set")
            return GenerationResult.failed(
                GenerationFailure.STORE_WRITE_FAILURE, owner_username
            )
        return GenerationResult.from_set(qs)
