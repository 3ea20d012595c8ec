# Ragcontext – Grounding context retrieval for document Q&A
# Copyright (c) 2026 4rce.com Digital Technologies GmbH.
# Use of this software is governed by the Business Source License 1.1. See LICENSE.md.

"""
File readers — extract normalized text from source documents, one entry
per page for paginated formats.

Supported: .pdf, .txt, .md
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .chunker import normalize
from .errors import EmptyExtraction, UnsupportedSource

SUPPORTED_EXTENSIONS: set[str] = {".pdf", ".txt", ".md"}


@dataclass(frozen=True)
class Page:
    """Normalized text of one page. ``number`` is 1-based, None for
    unpaginated sources."""
    number: Optional[int]
    text: str


def extract_pages(filepath: Path) -> list[Page]:
    """Read *filepath* and return its non-empty normalized pages.

    Raises UnsupportedSource for unknown file types and EmptyExtraction
    when nothing survives normalization.
    """
    suffix = filepath.suffix.lower()
    handler = _HANDLERS.get(suffix)
    if handler is None:
        raise UnsupportedSource(f"no extractor for '{suffix or filepath.name}'")
    pages = handler(filepath)
    if not pages:
        raise EmptyExtraction(f"no extractable text in {filepath}")
    return pages


# ── Per-format handlers ──────────────────────────────


def _read_text(path: Path) -> list[Page]:
    text = normalize(path.read_text(encoding="utf-8", errors="ignore"))
    return [Page(None, text)] if text else []


def _read_pdf(path: Path) -> list[Page]:
    try:
        from pypdf import PdfReader  # type: ignore[import-untyped]
    except ImportError as exc:
        raise UnsupportedSource(f"pypdf not installed, cannot read {path.name}") from exc

    reader = PdfReader(path)
    pages: list[Page] = []
    # empty pages are dropped but numbering keeps the original position
    for i, page in enumerate(reader.pages, 1):
        text = normalize(page.extract_text() or "")
        if text:
            pages.append(Page(i, text))
    return pages


_HANDLERS = {
    ".pdf": _read_pdf,
    ".txt": _read_text,
    ".md": _read_text,
}
