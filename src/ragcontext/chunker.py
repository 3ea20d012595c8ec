# Ragcontext – Grounding context retrieval for document Q&A
# Copyright (c) 2026 4rce.com Digital Technologies GmbH.
# Use of this software is governed by the Business Source License 1.1. See LICENSE.md.

"""
Text normalization, sliding-window chunking and tokenization.

The same normalize() is applied to stored chunk text and to queries, so
embeddings and token sets on both sides are comparable.
"""
import re
import unicodedata
from pathlib import Path
from typing import Optional

from .config import CHUNK_OVERLAP, CHUNK_SIZE, MIN_TOKEN_LEN

_WHITESPACE_RE = re.compile(r"\s+")
_NON_WORD_RE = re.compile(r"\W+", re.ASCII)
_REPLACEMENT_CHAR = "\ufffd"


def normalize(text: str) -> str:
    """NFKC, collapse whitespace, drop U+FFFD, trim, lower-case.

    Idempotent: normalize(normalize(x)) == normalize(x).
    """
    # strip U+FFFD before collapsing so no double space is left behind
    text = unicodedata.normalize("NFKC", text.replace(_REPLACEMENT_CHAR, ""))
    return _WHITESPACE_RE.sub(" ", text).strip().lower()


def chunk_text(text: str, size: int = CHUNK_SIZE, overlap: int = CHUNK_OVERLAP) -> list[str]:
    """Split *text* into windows of *size* chars, consecutive windows
    sharing *overlap* chars. The window that reaches the end of the text
    is the last one. Windows empty after trimming are dropped."""
    if size <= 0 or not 0 <= overlap < size:
        raise ValueError(f"need size > overlap >= 0, got size={size} overlap={overlap}")

    chunks: list[str] = []
    length = len(text)
    stride = size - overlap
    start = 0

    while start < length:
        end = min(start + size, length)
        window = text[start:end].strip()
        if window:
            chunks.append(window)
        if end == length:
            break
        start += stride

    return chunks


def tag_for(source: str | Path, page: Optional[int] = None) -> str:
    """Human-readable provenance prefix, e.g. ``[manual - pagina 3]``."""
    stem = Path(source).stem
    if page is None:
        return f"[{stem}]"
    return f"[{stem} - pagina {page}]"


def tokenize(text: str, min_len: int = MIN_TOKEN_LEN) -> set[str]:
    """Lower-cased, NFKC-normalized tokens of at least *min_len* chars.

    Splits on anything outside [A-Za-z0-9_], so accented letters break a
    word apart (``capătul`` -> ``cap``, ``tul``).
    """
    normalized = unicodedata.normalize("NFKC", text.lower())
    return {t for t in _NON_WORD_RE.split(normalized) if len(t) >= min_len}
