from __future__ import annotations

import json
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from app.apis.deps import get_repository, get_text_generator
from app.core.blob_store import MemoryBlobStore
from app.modules.conjugation.repository import QuestionSetRepository
from main import app


def make_item(**overrides) -> dict:
    item = {
        "es": "Yo __ español todos los días.",
        "en": "I speak Spanish every day.",
        "fr": "Je parle espagnol tous les jours.",
        "answer": "hablo",
        "tense": "pres",
        "inf": "hablar",
    }
    item.update(overrides)
    return item


class ScriptedGenerator:
    """Returns queued outputs in order and records the prompts it was given."""

    def __init__(self, *outputs: Optional[str]) -> None:
        self.outputs = list(outputs)
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> Optional[str]:
        self.prompts.append(prompt)
        return self.outputs.pop(0) if self.outputs else None


@pytest.fixture
def store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def repository(store) -> QuestionSetRepository:
    return QuestionSetRepository(store)


@pytest.fixture
def generator() -> ScriptedGenerator:
    return ScriptedGenerator(json.dumps([make_item(), make_item(answer="hablas", es="Tú __ mucho.")]))


@pytest.fixture
def client(repository, generator):
    app.dependency_overrides[get_repository] = lambda: repository
    app.dependency_overrides[get_text_generator] = lambda: generator
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
