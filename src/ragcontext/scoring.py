# Ragcontext – Grounding context retrieval for document Q&A
# Copyright (c) 2026 4rce.com Digital Technologies GmbH.
# Use of this software is governed by the Business Source License 1.1. See LICENSE.md.

"""
Hybrid relevance scoring: cosine similarity of embeddings blended with
lexical token overlap.

    blended = similarity_weight * cosine + lexical_weight * overlap

Each chunk is scored independently of the others.
"""
import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from .chunker import tokenize
from .config import LEXICAL_WEIGHT, MIN_TOKEN_LEN, SIMILARITY_WEIGHT
from .store import Chunk


@dataclass(frozen=True)
class ScoredChunk:
    chunk: Chunk
    similarity: float
    lexical: float
    blended: float


def cosine_sim(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity over the shared prefix of *a* and *b*; 0.0 when
    either side has zero norm."""
    dot = na = nb = 0.0
    for x, y in zip(a, b):
        dot += x * y
        na += x * x
        nb += y * y
    if na == 0 or nb == 0:
        return 0.0
    return dot / (math.sqrt(na) * math.sqrt(nb))


def lexical_score(query_tokens: set[str], chunk_tokens: set[str]) -> float:
    """Fraction of query tokens present in the chunk."""
    if not query_tokens:
        return 0.0
    return len(query_tokens & chunk_tokens) / len(query_tokens)


def score_chunk(
    query_embedding: Sequence[float],
    query_tokens: set[str],
    chunk: Chunk,
    *,
    similarity_weight: float = SIMILARITY_WEIGHT,
    lexical_weight: float = LEXICAL_WEIGHT,
    min_token_len: int = MIN_TOKEN_LEN,
) -> ScoredChunk:
    similarity = cosine_sim(query_embedding, chunk.embedding)
    lexical = lexical_score(query_tokens, tokenize(chunk.text, min_token_len))
    return ScoredChunk(
        chunk=chunk,
        similarity=similarity,
        lexical=lexical,
        blended=similarity_weight * similarity + lexical_weight * lexical,
    )


def score_chunks(
    query_embedding: Sequence[float],
    query_tokens: set[str],
    chunks: Iterable[Chunk],
    **weights,
) -> list[ScoredChunk]:
    """Score every chunk, preserving store order."""
    return [score_chunk(query_embedding, query_tokens, c, **weights) for c in chunks]
