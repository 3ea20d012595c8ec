# Ragcontext – Grounding context retrieval for document Q&A
# Copyright (c) 2026 4rce.com Digital Technologies GmbH.
# Use of this software is governed by the Business Source License 1.1. See LICENSE.md.

"""
Retrieve the passages of a document corpus most relevant to a question,
as bounded grounding context for a language-model answer.

Offline: build_store() turns a directory of PDF/text/markdown files into
a persisted store of embedded chunks. Online: Retriever.get_context()
scores every chunk against the question and assembles the best ones.
"""

__version__ = "1.0.0"

from .config import Config
from .context import RetrievalResult, assemble
from .embeddings import Embedder
from .errors import (
    EmptyExtraction,
    ModelUnavailable,
    RagError,
    StoreUnavailable,
    UnsupportedSource,
)
from .ingest import build_store
from .retriever import Retriever
from .store import Chunk, ChunkStore

__all__ = [
    "Chunk",
    "ChunkStore",
    "Config",
    "Embedder",
    "EmptyExtraction",
    "ModelUnavailable",
    "RagError",
    "RetrievalResult",
    "Retriever",
    "StoreUnavailable",
    "UnsupportedSource",
    "assemble",
    "build_store",
]
