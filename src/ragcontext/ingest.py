# Ragcontext – Grounding context retrieval for document Q&A
# Copyright (c) 2026 4rce.com Digital Technologies GmbH.
# Use of this software is governed by the Business Source License 1.1. See LICENSE.md.

"""
Offline ingestion: documents -> normalized pages -> windows -> embeddings
-> chunk store.

Every regular file directly inside the source directory is processed in
name order, so identical inputs and model produce an identical store.
Per-file problems skip that file; a model failure aborts the whole build
and leaves the previous store untouched.
"""
import time
from pathlib import Path
from typing import Optional

from .chunker import chunk_text, tag_for
from .config import Config
from .embeddings import Embedder
from .errors import EmptyExtraction, ModelUnavailable, UnsupportedSource
from .health import HealthTracker
from .readers import extract_pages
from .store import Chunk, write_store


def _iter_sources(source_dir: Path):
    for p in sorted(source_dir.iterdir()):
        if p.is_file() and not p.name.startswith("."):
            yield p


def build_store(
    config: Config,
    embedder: Embedder,
    source_dir: Optional[str | Path] = None,
    output_path: Optional[str | Path] = None,
    health: Optional[HealthTracker] = None,
) -> dict:
    """Rebuild the chunk store from *source_dir* (default: config.data_path)
    into *output_path* (default: config.store_path)."""
    source_dir = Path(source_dir or config.data_path)
    output_path = Path(output_path or config.store_path)

    if not source_dir.is_dir():
        msg = f"Source directory does not exist: {source_dir}"
        if health:
            health.record_index(ok=False, error=msg)
        return {"status": "error", "message": msg}

    started = time.monotonic()
    chunks: list[Chunk] = []
    skipped: list[dict] = []
    file_count = 0

    try:
        for path in _iter_sources(source_dir):
            try:
                pages = extract_pages(path)
            except UnsupportedSource as e:
                print(f"Skipping unsupported file: {path} ({e})")
                skipped.append({"file": path.name, "reason": str(e)})
                continue
            except EmptyExtraction as e:
                print(f"No extractable text in {path}")
                skipped.append({"file": path.name, "reason": str(e)})
                continue
            except Exception as e:
                print(f"Warning: could not extract text from {path}: {e}")
                skipped.append({"file": path.name, "reason": str(e)})
                continue

            before = len(chunks)
            for page in pages:
                prefix = tag_for(path, page.number)
                for window in chunk_text(page.text, config.chunk_size, config.chunk_overlap):
                    text = f"{prefix} {window}"
                    chunks.append(Chunk(
                        id=len(chunks),
                        source=str(path),
                        page=page.number,
                        text=text,
                        embedding=embedder.embed(text),
                    ))
            file_count += 1
            print(f"File {path.name}: {len(chunks) - before} chunks generated from {len(pages)} page(s).")
    except ModelUnavailable as e:
        if health:
            health.record_index(ok=False, error=str(e))
        raise

    write_store(chunks, output_path)
    elapsed = time.monotonic() - started
    print(f"Saved {len(chunks)} chunks with embeddings to {output_path} in {elapsed:.1f}s")

    if health:
        health.record_index(ok=True, chunks=len(chunks), files=file_count)
        health.record_skipped_files(skipped)

    return {
        "status": "success",
        "files_indexed": file_count,
        "files_skipped": len(skipped),
        "skipped": skipped,
        "chunks_total": len(chunks),
        "store_path": str(output_path),
        "elapsed_s": round(elapsed, 3),
    }
