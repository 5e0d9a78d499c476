"""Question set persistence on top of a blob store.

Layout under the configured prefix::

    <prefix>/index.json        directory of all sets ({"sets": [...]})
    <prefix>/sets/<id>.json    one document per set ({title, questions, owner_username})

The store has no multi-key transactions, so every multi-step write is ordered
to fail towards extra data rather than missing data: a set blob is written
before its index entry, and removed before its index entry is dropped.

Index writes are read-modify-write guarded by the blob etag. A write that
loses a race is re-applied to a fresh read, up to ``index_write_retries``
attempts with a jittered exponential pause between them.
"""

from __future__ import annotations

import asyncio
import json
import random
import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional
from uuid import uuid4

from app.core.blob_store import (
    BlobNotFoundError,
    BlobPreconditionFailedError,
    BlobStore,
    BlobStoreError,
    PutOptions,
)
from app.core.logging import for_user, get_logger
from app.modules.conjugation.models import (
    IndexEntry,
    Question,
    QuestionSet,
    QuestionSetDocument,
    QuestionSetIndex,
)
from app.modules.conjugation.validation import validate_questions

logger = get_logger(__name__)

_SET_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,128}$")


class IndexConflictError(BlobStoreError):
    """The index kept changing underneath us; the write was not applied."""


@dataclass
class ConsistencyReport:
    orphaned_set_ids: list[str] = field(default_factory=list)
    dangling_entries: list[IndexEntry] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.orphaned_set_ids and not self.dangling_entries


def new_set_id() -> str:
    return uuid4().hex


class QuestionSetRepository:
    def __init__(
        self,
        store: BlobStore,
        *,
        prefix: str = "question-sets",
        index_write_retries: int = 3,
        index_retry_backoff: float = 0.05,
    ) -> None:
        self.store = store
        self.prefix = prefix.strip("/")
        self.index_write_retries = max(1, int(index_write_retries))
        self.index_retry_backoff = max(0.0, float(index_retry_backoff))

    @property
    def index_path(self) -> str:
        return f"{self.prefix}/index.json"

    @property
    def sets_prefix(self) -> str:
        return f"{self.prefix}/sets/"

    def set_path(self, set_id: str) -> str:
        return f"{self.sets_prefix}{set_id}.json"

    @staticmethod
    def is_valid_id(set_id: str) -> bool:
        return bool(set_id) and bool(_SET_ID_RE.match(set_id))

    # Index

    async def _load_index(self) -> tuple[QuestionSetIndex, Optional[str]]:
        try:
            meta = await self.store.head(self.index_path)
            raw = await self.store.get(meta.url)
        except BlobNotFoundError:
            return QuestionSetIndex(), None
        try:
            return QuestionSetIndex.model_validate_json(raw), meta.etag
        except ValueError as e:
            raise BlobStoreError(f"Corrupt index document at {self.index_path}") from e

    async def _save_index(self, index: QuestionSetIndex, etag: Optional[str]) -> None:
        options = PutOptions(if_match=etag) if etag else PutOptions(if_absent=True)
        payload = index.model_dump_json(by_alias=True).encode("utf-8")
        await self.store.put(self.index_path, payload, options)

    async def _update_index(
        self, mutate: Callable[[QuestionSetIndex], bool]
    ) -> QuestionSetIndex:
        """Apply ``mutate`` to a fresh copy and persist it; skip the write when it reports no change."""
        for attempt in range(1, self.index_write_retries + 1):
            index, etag = await self._load_index()
            if not mutate(index):
                return index
            try:
                await self._save_index(index, etag)
                return index
            except BlobPreconditionFailedError:
                logger.warning(
                    "Index changed concurrently (attempt %d/%d)",
                    attempt,
                    self.index_write_retries,
                )
                if attempt < self.index_write_retries:
                    await asyncio.sleep(self._backoff(attempt))
        raise IndexConflictError(
            f"Index write at {self.index_path} failed after "
            f"{self.index_write_retries} attempt(s)"
        )

    def _backoff(self, attempt: int) -> float:
        return random.uniform(0, self.index_retry_backoff * 2 ** (attempt - 1))

    async def get_index(self, filter_username: Optional[str] = None) -> QuestionSetIndex:
        """All entries, or only those owned by ``filter_username``.

        Entries without an owner never appear in a filtered view.
        """
        index, _ = await self._load_index()
        if filter_username is None:
            return index
        return index.for_owner(filter_username)

    # Sets

    def _parse_document(self, set_id: str, raw: bytes) -> QuestionSetDocument:
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise BlobStoreError(f"Corrupt set document {set_id}") from e
        # Oldest documents are a bare question array
        if isinstance(data, list):
            data = {"title": set_id, "questions": data}
        if not isinstance(data, dict):
            raise BlobStoreError(f"Corrupt set document {set_id}")
        return QuestionSetDocument(
            title=str(data.get("title") or set_id),
            questions=validate_questions(data.get("questions") or []),
            owner_username=data.get("owner_username"),
        )

    async def get_set(
        self, set_id: str, requesting_username: Optional[str] = None
    ) -> Optional[QuestionSet]:
        """Load a set, or ``None`` when it is absent or owned by someone else.

        Sets without an owner are readable by anyone.
        """
        if not self.is_valid_id(set_id):
            return None
        try:
            meta = await self.store.head(self.set_path(set_id))
            raw = await self.store.get(meta.url)
        except BlobNotFoundError:
            logger.debug("Set %s not found", set_id)
            return None

        doc = self._parse_document(set_id, raw)
        if (
            requesting_username is not None
            and doc.owner_username is not None
            and doc.owner_username != requesting_username
        ):
            logger.debug("Set %s hidden from %r", set_id, requesting_username)
            return None
        return QuestionSet(
            id=set_id,
            title=doc.title,
            owner_username=doc.owner_username,
            questions=doc.questions,
        )

    async def create_set(
        self, title: str, questions: Iterable[Question], owner_username: str
    ) -> QuestionSet:
        set_id = new_set_id()
        doc = QuestionSetDocument(
            title=title, questions=list(questions), owner_username=owner_username
        )
        await self.store.put(
            self.set_path(set_id),
            doc.model_dump_json(by_alias=True).encode("utf-8"),
            PutOptions(if_absent=True),
        )

        entry = IndexEntry(id=set_id, title=title, owner_username=owner_username)

        def _append(index: QuestionSetIndex) -> bool:
            index.entries.append(entry)
            return True

        await self._update_index(_append)
        for_user(logger, owner_username).info(
            "Created set %s with %d question(s)", set_id, len(doc.questions)
        )
        return QuestionSet(
            id=set_id,
            title=doc.title,
            owner_username=owner_username,
            questions=doc.questions,
        )

    async def delete_set(self, set_id: str, requesting_username: str) -> bool:
        """Delete an owned set. ``False`` covers both absent and not owned."""
        if not requesting_username or not self.is_valid_id(set_id):
            return False

        log = for_user(logger, requesting_username)

        def _matches(e: IndexEntry) -> bool:
            return e.id == set_id and e.owner_username == requesting_username

        index, _ = await self._load_index()
        if not any(_matches(e) for e in index.entries):
            log.debug("Delete of %s: not found or denied", set_id)
            return False

        try:
            await self.store.delete(self.set_path(set_id))
        except BlobNotFoundError:
            log.info("Set blob %s already absent; removing index entry", set_id)

        def _remove(index: QuestionSetIndex) -> bool:
            before = len(index.entries)
            index.entries = [e for e in index.entries if not _matches(e)]
            return len(index.entries) != before

        await self._update_index(_remove)
        log.info("Deleted set %s", set_id)
        return True

    # Maintenance

    async def check_consistency(self) -> ConsistencyReport:
        """Compare stored set blobs against index entries."""
        index, _ = await self._load_index()
        paths = await self.store.list_paths(self.sets_prefix)
        blob_ids = {
            p[len(self.sets_prefix):-len(".json")]
            for p in paths
            if p.endswith(".json")
        }
        indexed_ids = {e.id for e in index.entries}
        return ConsistencyReport(
            orphaned_set_ids=sorted(blob_ids - indexed_ids),
            dangling_entries=[e for e in index.entries if e.id not in blob_ids],
        )
