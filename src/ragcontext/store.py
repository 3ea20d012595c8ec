# Ragcontext – Grounding context retrieval for document Q&A
# Copyright (c) 2026 4rce.com Digital Technologies GmbH.
# Use of this software is governed by the Business Source License 1.1. See LICENSE.md.

"""
Chunk store: the persisted corpus of embedded chunks.

On disk it is a single JSON array of chunk records, written by ingestion
as one atomic replacement and validated record-by-record on load.
"""
import os
from pathlib import Path
from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .config import Config
from .errors import StoreUnavailable
from .lazy import Lazy


class Chunk(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0)
    source: str
    page: Optional[int] = Field(default=None, ge=1)
    text: str
    embedding: list[float] = Field(min_length=1)
    # placeholder for image references, always written empty
    images: list[str] = Field(default_factory=list)


_CHUNKS = TypeAdapter(list[Chunk])


def read_store(path: str | Path) -> list[Chunk]:
    """Load and validate the store at *path*. Raises StoreUnavailable."""
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise StoreUnavailable(f"cannot read chunk store {path}: {e}") from e

    try:
        chunks = _CHUNKS.validate_json(raw)
    except ValidationError as e:
        raise StoreUnavailable(f"malformed chunk store {path}: {e.error_count()} invalid field(s)") from e

    ids = [c.id for c in chunks]
    if len(set(ids)) != len(ids):
        raise StoreUnavailable(f"duplicate chunk ids in {path}")

    dims = {len(c.embedding) for c in chunks}
    if len(dims) > 1:
        raise StoreUnavailable(f"mixed embedding dimensions {sorted(dims)} in {path}")

    return chunks


def write_store(chunks: Sequence[Chunk], path: str | Path) -> Path:
    """Replace the store at *path* with *chunks* (write temp file, then rename)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(f".{path.name}.tmp")
    payload = _CHUNKS.dump_json(list(chunks))
    try:
        tmp.write_bytes(payload)
        os.replace(tmp, path)
    finally:
        tmp.unlink(missing_ok=True)
    return path


class ChunkStore:
    """Process-wide, read-only view of the persisted store.

    Loaded on first access and cached until reload(). A missing or
    corrupt artifact loads as an empty store.
    """

    def __init__(self, config: Config):
        self.path = Path(config.store_path)
        self._chunks: Lazy[tuple[Chunk, ...]] = Lazy(self._load)

    def _load(self) -> tuple[Chunk, ...]:
        try:
            chunks = read_store(self.path)
        except StoreUnavailable as e:
            print(f"[RAG] Warning: {e}. Did you run the ingest command?")
            return ()
        print(f"[RAG] Loaded {len(chunks)} embedded chunks from {self.path}")
        return tuple(chunks)

    def load(self) -> tuple[Chunk, ...]:
        return self._chunks.get()

    def reload(self) -> tuple[Chunk, ...]:
        self._chunks.reset()
        return self.load()

    @property
    def loaded(self) -> bool:
        return self._chunks.loaded

    def __len__(self) -> int:
        return len(self.load())

    @property
    def dimension(self) -> Optional[int]:
        chunks = self.load()
        return len(chunks[0].embedding) if chunks else None
