# Ragcontext – Grounding context retrieval for document Q&A
# Copyright (c) 2026 4rce.com Digital Technologies GmbH.
# Use of this software is governed by the Business Source License 1.1. See LICENSE.md.

"""Context assembly: selected chunk texts -> one bounded string."""
from dataclasses import dataclass
from typing import Sequence

from .config import MAX_CONTEXT_CHARS
from .store import Chunk

CHUNK_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class RetrievalResult:
    context: str
    selected_chunk_ids: tuple[int, ...] = ()

    @property
    def used_any_context(self) -> bool:
        return bool(self.context)

    def to_dict(self) -> dict:
        return {
            "context": self.context,
            "used_any_context": self.used_any_context,
            "chunk_ids": list(self.selected_chunk_ids),
        }


def assemble(chunks: Sequence[Chunk], max_chars: int = MAX_CONTEXT_CHARS) -> str:
    """Join chunk texts in order with blank lines, then hard-cut the whole
    string at *max_chars* (the tail chunk may end mid-word)."""
    return CHUNK_SEPARATOR.join(c.text for c in chunks)[:max(0, max_chars)]
