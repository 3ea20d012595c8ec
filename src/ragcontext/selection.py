# Ragcontext – Grounding context retrieval for document Q&A
# Copyright (c) 2026 4rce.com Digital Technologies GmbH.
# Use of this software is governed by the Business Source License 1.1. See LICENSE.md.

"""
Adaptive selection of the working set from scored chunks.

Keep the top-k entries scoring at least max(absolute_floor,
best * relative_floor); if none qualify, keep the single best one.
"""
from typing import Sequence

from .config import ABSOLUTE_SCORE_FLOOR, RELATIVE_SCORE_FLOOR, TOP_K
from .scoring import ScoredChunk


def rank(scored: Sequence[ScoredChunk]) -> list[ScoredChunk]:
    """Blended score descending; ties keep their original order."""
    return sorted(scored, key=lambda s: s.blended, reverse=True)


def min_score_for(
    best_score: float,
    *,
    absolute_floor: float = ABSOLUTE_SCORE_FLOOR,
    relative_floor: float = RELATIVE_SCORE_FLOOR,
) -> float:
    return max(absolute_floor, best_score * relative_floor)


def select(
    scored: Sequence[ScoredChunk],
    *,
    top_k: int = TOP_K,
    absolute_floor: float = ABSOLUTE_SCORE_FLOOR,
    relative_floor: float = RELATIVE_SCORE_FLOOR,
) -> list[ScoredChunk]:
    """Rank-ordered selection, never empty for non-empty input."""
    best = rank(scored)[:top_k]
    if not best:
        return []

    min_score = min_score_for(
        best[0].blended,
        absolute_floor=absolute_floor,
        relative_floor=relative_floor,
    )
    filtered = [s for s in best if s.blended >= min_score]
    selected = filtered or best[:1]

    print(
        f"[RAG] Top {len(best)} chunk scores: "
        + ", ".join(f"{s.blended:.3f} (sim:{s.similarity:.3f}, kw:{s.lexical:.3f})" for s in best)
    )
    print(f"[RAG] Using {len(selected)} chunks with minScore {min_score:.3f}")
    return selected
