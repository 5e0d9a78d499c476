"""Blob storage backends for question set documents.

A blob is addressed by a forward-slash path relative to the store root
(``question-sets/index.json``). ``head`` resolves a path to a ``BlobMeta``
carrying the URL that ``get`` accepts, plus an ``etag`` used for conditional
writes. Absent blobs raise ``BlobNotFoundError`` from every operation.
"""

from __future__ import annotations

import asyncio
import hashlib
import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional, Protocol
from urllib.parse import urlparse
from urllib.request import url2pathname

from app.core.config import BlobSettings


class BlobStoreError(Exception):
    """Base error for blob store failures."""


class BlobNotFoundError(BlobStoreError):
    def __init__(self, path: str):
        super().__init__(f"Blob not found: {path}")
        self.path = path


class BlobPreconditionFailedError(BlobStoreError):
    def __init__(self, path: str):
        super().__init__(f"Blob changed concurrently: {path}")
        self.path = path


@dataclass(frozen=True)
class BlobMeta:
    path: str
    url: str
    etag: str
    size: int


@dataclass(frozen=True)
class PutOptions:
    """Write options. ``if_match``/``if_absent`` make the write conditional."""

    content_type: str = "application/json"
    if_match: Optional[str] = None
    if_absent: bool = False


class BlobStore(Protocol):
    async def put(
        self, path: str, data: bytes, options: Optional[PutOptions] = None
    ) -> BlobMeta: ...

    async def head(self, path: str) -> BlobMeta: ...

    async def get(self, url: str) -> bytes: ...

    async def delete(self, path: str) -> None: ...

    async def list_paths(self, prefix: str = "") -> list[str]: ...


def compute_etag(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _normalize_path(path: str) -> str:
    parts = PurePosixPath(path.strip("/")).parts
    if not parts or any(p in ("..", ".") for p in parts):
        raise ValueError(f"Invalid blob path: {path!r}")
    return "/".join(parts)


def _check_preconditions(
    path: str, current_etag: Optional[str], options: PutOptions
) -> None:
    if options.if_absent and current_etag is not None:
        raise BlobPreconditionFailedError(path)
    if options.if_match is not None and current_etag != options.if_match:
        raise BlobPreconditionFailedError(path)


class MemoryBlobStore:
    """Process-local store; contents vanish with the process."""

    scheme = "memory"

    def __init__(self) -> None:
        self._blobs: dict[str, bytes] = {}

    def _url(self, path: str) -> str:
        return f"{self.scheme}://{path}"

    def _meta(self, path: str, data: bytes) -> BlobMeta:
        return BlobMeta(
            path=path, url=self._url(path), etag=compute_etag(data), size=len(data)
        )

    async def put(
        self, path: str, data: bytes, options: Optional[PutOptions] = None
    ) -> BlobMeta:
        path = _normalize_path(path)
        options = options or PutOptions()
        current = self._blobs.get(path)
        _check_preconditions(
            path, compute_etag(current) if current is not None else None, options
        )
        self._blobs[path] = bytes(data)
        return self._meta(path, data)

    async def head(self, path: str) -> BlobMeta:
        path = _normalize_path(path)
        data = self._blobs.get(path)
        if data is None:
            raise BlobNotFoundError(path)
        return self._meta(path, data)

    async def get(self, url: str) -> bytes:
        prefix = f"{self.scheme}://"
        if not url.startswith(prefix):
            raise BlobStoreError(f"Unsupported blob url: {url}")
        path = url[len(prefix):]
        data = self._blobs.get(path)
        if data is None:
            raise BlobNotFoundError(path)
        return data

    async def delete(self, path: str) -> None:
        path = _normalize_path(path)
        if self._blobs.pop(path, None) is None:
            raise BlobNotFoundError(path)

    async def list_paths(self, prefix: str = "") -> list[str]:
        return sorted(p for p in self._blobs if p.startswith(prefix))


class LocalBlobStore:
    """Filesystem-backed store rooted at a directory."""

    _TMP_SUFFIX = ".tmp"

    def __init__(self, root: str | Path = "blob-data"):
        self.root = Path(root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)
        # Serializes conditional writes within this process
        self._write_lock = asyncio.Lock()

    def _resolve(self, path: str) -> tuple[str, Path]:
        path = _normalize_path(path)
        return path, self.root.joinpath(*path.split("/"))

    def _meta(self, path: str, file_path: Path, data: bytes) -> BlobMeta:
        return BlobMeta(
            path=path, url=file_path.as_uri(), etag=compute_etag(data), size=len(data)
        )

    @staticmethod
    def _read(file_path: Path) -> Optional[bytes]:
        try:
            return file_path.read_bytes()
        except FileNotFoundError:
            return None

    @classmethod
    def _write(cls, file_path: Path, data: bytes) -> None:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        tmp = file_path.with_name(file_path.name + cls._TMP_SUFFIX)
        tmp.write_bytes(data)
        os.replace(tmp, file_path)

    async def put(
        self, path: str, data: bytes, options: Optional[PutOptions] = None
    ) -> BlobMeta:
        path, file_path = self._resolve(path)
        options = options or PutOptions()
        async with self._write_lock:
            if options.if_match is not None or options.if_absent:
                current = await asyncio.to_thread(self._read, file_path)
                _check_preconditions(
                    path,
                    compute_etag(current) if current is not None else None,
                    options,
                )
            await asyncio.to_thread(self._write, file_path, bytes(data))
        return self._meta(path, file_path, data)

    async def head(self, path: str) -> BlobMeta:
        path, file_path = self._resolve(path)
        data = await asyncio.to_thread(self._read, file_path)
        if data is None:
            raise BlobNotFoundError(path)
        return self._meta(path, file_path, data)

    async def get(self, url: str) -> bytes:
        parsed = urlparse(url)
        if parsed.scheme != "file":
            raise BlobStoreError(f"Unsupported blob url: {url}")
        file_path = Path(url2pathname(parsed.path)).resolve()
        if not file_path.is_relative_to(self.root):
            raise BlobStoreError(f"Blob url outside store root: {url}")
        data = await asyncio.to_thread(self._read, file_path)
        if data is None:
            raise BlobNotFoundError(file_path.relative_to(self.root).as_posix())
        return data

    async def delete(self, path: str) -> None:
        path, file_path = self._resolve(path)
        try:
            await asyncio.to_thread(file_path.unlink)
        except FileNotFoundError:
            raise BlobNotFoundError(path) from None

    async def list_paths(self, prefix: str = "") -> list[str]:
        def _scan() -> list[str]:
            out = []
            for item in self.root.rglob("*"):
                if item.is_file() and not item.name.endswith(self._TMP_SUFFIX):
                    rel = item.relative_to(self.root).as_posix()
                    if rel.startswith(prefix):
                        out.append(rel)
            return sorted(out)

        return await asyncio.to_thread(_scan)


def build_blob_store(blob_settings: BlobSettings) -> BlobStore:
    backend = (blob_settings.backend or "local").lower()
    if backend == "memory":
        return MemoryBlobStore()
    if backend == "local":
        return LocalBlobStore(blob_settings.root)
    raise ValueError(f"Unknown blob backend: {blob_settings.backend!r}")
