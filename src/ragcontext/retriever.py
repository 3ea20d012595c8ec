# Ragcontext – Grounding context retrieval for document Q&A
# Copyright (c) 2026 4rce.com Digital Technologies GmbH.
# Use of this software is governed by the Business Source License 1.1. See LICENSE.md.

"""
Online retrieval: question -> embedding -> hybrid scores over the whole
store -> adaptive selection -> bounded context string.

A missing or empty store yields an empty context (used_any_context is
False). A model failure raises ModelUnavailable to the caller.
"""
from typing import Optional

from .chunker import tokenize
from .config import Config
from .context import RetrievalResult, assemble
from .embeddings import Embedder
from .errors import ModelUnavailable
from .health import HealthTracker
from .scoring import ScoredChunk, score_chunks
from .selection import select
from .store import Chunk, ChunkStore


class Retriever:
    def __init__(
        self,
        config: Config,
        embedder: Optional[Embedder] = None,
        store: Optional[ChunkStore] = None,
        health: Optional[HealthTracker] = None,
    ):
        self.config = config
        self.embedder = embedder or Embedder(config)
        self.store = store or ChunkStore(config)
        self.health = health

    def _chunks(self) -> tuple[Chunk, ...]:
        first_load = not self.store.loaded
        chunks = self.store.load()
        if first_load and self.health:
            self.health.record_store_load(len(chunks))
        return chunks

    def reload(self) -> int:
        """Re-read the persisted store; returns the new chunk count."""
        chunks = self.store.reload()
        if self.health:
            self.health.record_store_load(len(chunks))
        return len(chunks)

    def search(self, question: str) -> list[ScoredChunk]:
        """Selected chunks for *question*, best first."""
        chunks = self._chunks()
        if not chunks:
            print("[RAG] No chunks loaded; returning empty context.")
            return []

        cfg = self.config
        query_embedding = self.embedder.embed(question)
        query_tokens = tokenize(question, cfg.min_token_len)

        scored = score_chunks(
            query_embedding, query_tokens, chunks,
            similarity_weight=cfg.similarity_weight,
            lexical_weight=cfg.lexical_weight,
            min_token_len=cfg.min_token_len,
        )
        return select(
            scored,
            top_k=cfg.top_k,
            absolute_floor=cfg.absolute_score_floor,
            relative_floor=cfg.relative_score_floor,
        )

    def get_context(self, question: str) -> RetrievalResult:
        try:
            selected = self.search(question)
        except ModelUnavailable:
            if self.health:
                self.health.record_query_failure()
            raise

        result = RetrievalResult(
            context=assemble([s.chunk for s in selected], self.config.max_context_chars),
            selected_chunk_ids=tuple(s.chunk.id for s in selected),
        )
        if self.health:
            self.health.record_query(result.used_any_context)
        return result
