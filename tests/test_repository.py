import json

import pytest

from app.core.blob_store import BlobStoreError, MemoryBlobStore, PutOptions
from app.modules.conjugation.models import IndexEntry, Question, QuestionSetIndex
from app.modules.conjugation import repository as repository_module
from app.modules.conjugation.repository import IndexConflictError, QuestionSetRepository
from tests.conftest import make_item

Q1 = Question.model_validate(make_item())
Q2 = Question.model_validate(make_item(es="Ayer yo __ pan.", answer="compré", tense="pret", inf="comprar"))


async def _put_json(store, path, data):
    await store.put(path, json.dumps(data).encode("utf-8"))


async def test_empty_index_when_absent(repository):
    assert (await repository.get_index()).entries == []
    assert (await repository.get_index("alice")).entries == []


async def test_create_then_list_for_owner(repository):
    qs = await repository.create_set("Practice 1", [Q1, Q2], "alice")

    assert qs.title == "Practice 1"
    assert qs.owner_username == "alice"
    assert qs.questions == [Q1, Q2]

    index = await repository.get_index("alice")
    assert [(e.id, e.title) for e in index.entries] == [(qs.id, "Practice 1")]


async def test_filtered_index_excludes_other_owners_and_legacy(repository, store):
    a = await repository.create_set("A", [Q1], "alice")
    b = await repository.create_set("B", [Q1], "bob")
    index = await repository.get_index()
    index.entries.append(IndexEntry(id="legacy1", title="Old"))
    await store.put(repository.index_path, index.model_dump_json(by_alias=True).encode())

    assert [e.id for e in (await repository.get_index("alice")).entries] == [a.id]
    assert [e.id for e in (await repository.get_index("bob")).entries] == [b.id]
    assert [e.id for e in (await repository.get_index()).entries] == [a.id, b.id, "legacy1"]


async def test_get_set_is_gated_by_owner(repository):
    qs = await repository.create_set("Mine", [Q1], "alice")

    assert await repository.get_set(qs.id, "bob") is None
    assert (await repository.get_set(qs.id, "alice")).questions == [Q1]
    assert (await repository.get_set(qs.id, None)).title == "Mine"


async def test_legacy_set_is_readable_by_anyone(repository, store):
    await _put_json(store, repository.set_path("legacy1"), {"title": "Old", "questions": [make_item()]})

    for who in (None, "alice", "bob"):
        qs = await repository.get_set("legacy1", who)
        assert qs is not None
        assert qs.owner_username is None
        assert qs.questions == [Q1]


async def test_bare_array_document_is_read_as_legacy(repository, store):
    await _put_json(store, repository.set_path("older"), [make_item()])
    qs = await repository.get_set("older", "alice")
    assert qs.title == "older"
    assert qs.questions == [Q1]


async def test_stored_invalid_questions_are_skipped(repository, store):
    await _put_json(
        store,
        repository.set_path("mixed"),
        {"title": "Mixed", "questions": [make_item(), make_item(tense="aorist")]},
    )
    assert (await repository.get_set("mixed")).questions == [Q1]


async def test_get_missing_or_malformed_id_is_none(repository):
    assert await repository.get_set("nonexistent-id", None) is None
    assert await repository.get_set("../index", None) is None


async def test_ids_are_unique_and_content_is_stable(repository):
    ids = set()
    for i in range(25):
        qs = await repository.create_set(f"S{i}", [Q1], "alice")
        ids.add(qs.id)
    assert len(ids) == 25

    first = sorted(ids)[0]
    before = await repository.get_set(first)
    await repository.create_set("Another", [Q2], "alice")
    assert await repository.get_set(first) == before


async def test_delete_by_non_owner_is_denied(repository):
    qs = await repository.create_set("Mine", [Q1], "alice")

    assert await repository.delete_set(qs.id, "bob") is False
    assert await repository.get_set(qs.id, "alice") is not None
    assert [e.id for e in (await repository.get_index("alice")).entries] == [qs.id]


async def test_delete_removes_blob_and_entry(repository):
    qs = await repository.create_set("Practice 1", [Q1, Q2], "alice")
    other = await repository.create_set("Keep", [Q1], "alice")

    assert await repository.delete_set(qs.id, "alice") is True
    assert [e.id for e in (await repository.get_index("alice")).entries] == [other.id]
    assert await repository.get_set(qs.id, "alice") is None
    assert await repository.delete_set(qs.id, "alice") is False


async def test_delete_tolerates_missing_blob(repository, store):
    qs = await repository.create_set("Drifted", [Q1], "alice")
    await store.delete(repository.set_path(qs.id))

    assert await repository.delete_set(qs.id, "alice") is True
    assert (await repository.get_index()).entries == []


async def test_legacy_entries_cannot_be_deleted(repository, store):
    await store.put(
        repository.index_path,
        QuestionSetIndex(entries=[IndexEntry(id="legacy1", title="Old")])
        .model_dump_json(by_alias=True)
        .encode(),
    )
    assert await repository.delete_set("legacy1", "alice") is False


async def test_index_uses_sets_key_on_disk(repository, store):
    qs = await repository.create_set("T", [Q1], "alice")
    head = await store.head(repository.index_path)
    data = json.loads(await store.get(head.url))
    assert data == {"sets": [{"id": qs.id, "title": "T", "owner_username": "alice"}]}

    head = await store.head(repository.set_path(qs.id))
    doc = json.loads(await store.get(head.url))
    assert doc["owner_username"] == "alice"
    assert doc["questions"][0]["es"] == Q1.spanish_text


class RacingStore(MemoryBlobStore):
    """Injects a competing index write just before our next index write."""

    def __init__(self, index_path: str, races: int) -> None:
        super().__init__()
        self.index_path = index_path
        self.races = races

    async def put(self, path, data, options=None):
        if path == self.index_path and self.races > 0:
            self.races -= 1
            index = QuestionSetIndex()
            try:
                head = await self.head(path)
                index = QuestionSetIndex.model_validate_json(await self.get(head.url))
            except BlobStoreError:
                pass
            index.entries.append(IndexEntry(id=f"rival{self.races}", title="Rival", owner_username="bob"))
            await super().put(path, index.model_dump_json(by_alias=True).encode(), PutOptions())
        return await super().put(path, data, options)


async def test_concurrent_index_write_is_retried_not_lost():
    store = RacingStore("question-sets/index.json", races=1)
    repository = QuestionSetRepository(store, index_write_retries=3, index_retry_backoff=0)

    qs = await repository.create_set("Mine", [Q1], "alice")

    ids = [e.id for e in (await repository.get_index()).entries]
    assert ids == ["rival0", qs.id]


async def test_index_conflict_after_retries_exhausted():
    store = RacingStore("question-sets/index.json", races=10)
    repository = QuestionSetRepository(store, index_write_retries=2, index_retry_backoff=0)

    with pytest.raises(IndexConflictError):
        await repository.create_set("Mine", [Q1], "alice")


async def test_index_retries_pause_with_growing_backoff(monkeypatch):
    pauses = []

    async def fake_sleep(delay):
        pauses.append(delay)

    monkeypatch.setattr(repository_module.asyncio, "sleep", fake_sleep)
    monkeypatch.setattr(repository_module.random, "uniform", lambda low, high: high)
    store = RacingStore("question-sets/index.json", races=10)
    repository = QuestionSetRepository(store, index_write_retries=3, index_retry_backoff=0.1)

    with pytest.raises(IndexConflictError):
        await repository.create_set("Mine", [Q1], "alice")

    # No pause after the final attempt
    assert pauses == pytest.approx([0.1, 0.2])


async def test_successful_retry_pauses_once(monkeypatch):
    pauses = []

    async def fake_sleep(delay):
        pauses.append(delay)

    monkeypatch.setattr(repository_module.asyncio, "sleep", fake_sleep)
    store = RacingStore("question-sets/index.json", races=1)
    repository = QuestionSetRepository(store, index_write_retries=3, index_retry_backoff=0.05)

    await repository.create_set("Mine", [Q1], "alice")

    assert len(pauses) == 1
    assert 0 <= pauses[0] <= 0.05


class FailingIndexStore(MemoryBlobStore):
    def __init__(self, index_path: str) -> None:
        super().__init__()
        self.index_path = index_path

    async def put(self, path, data, options=None):
        if path == self.index_path:
            raise BlobStoreError("index write failed")
        return await super().put(path, data, options)


async def test_failed_index_write_leaves_orphan_not_dangling_entry():
    store = FailingIndexStore("question-sets/index.json")
    repository = QuestionSetRepository(store)

    with pytest.raises(BlobStoreError):
        await repository.create_set("Mine", [Q1], "alice")

    report = await repository.check_consistency()
    assert len(report.orphaned_set_ids) == 1
    assert report.dangling_entries == []


async def test_corrupt_index_propagates(repository, store):
    await store.put(repository.index_path, b"not json")
    with pytest.raises(BlobStoreError):
        await repository.get_index()


async def test_check_consistency_reports_drift(repository, store):
    kept = await repository.create_set("Kept", [Q1], "alice")
    gone = await repository.create_set("Gone", [Q1], "alice")
    await store.delete(repository.set_path(gone.id))
    await _put_json(store, repository.set_path("stray"), {"title": "Stray", "questions": []})

    report = await repository.check_consistency()
    assert report.ok is False
    assert report.orphaned_set_ids == ["stray"]
    assert [e.id for e in report.dangling_entries] == [gone.id]
    assert kept.id not in report.orphaned_set_ids
