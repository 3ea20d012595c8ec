# Ragcontext – Grounding context retrieval for document Q&A
# Copyright (c) 2026 4rce.com Digital Technologies GmbH.
# Use of this software is governed by the Business Source License 1.1. See LICENSE.md.

"""
Embedding model adapter: text -> mean-pooled, L2-normalized vector.

Wraps a sentence-transformers model behind embed(). The model is loaded
lazily on first use and shared by every caller in the process (ingestion
and queries must use the same model so vectors are comparable).
"""
from concurrent import futures
from typing import Callable, Optional

from .chunker import normalize
from .config import Config
from .errors import ModelUnavailable
from .lazy import Lazy


def _load_sentence_transformer(model_name: str):
    from sentence_transformers import SentenceTransformer
    return SentenceTransformer(model_name)


class Embedder:
    def __init__(self, config: Config, model_factory: Optional[Callable[[str], object]] = None):
        """*model_factory* builds the model from its name; it must return
        an object with a sentence-transformers style ``encode()``."""
        self.model_name = config.embedding_model
        self.timeout = config.embedding_timeout
        self._factory = model_factory or _load_sentence_transformer
        self._model = Lazy(self._load)

    def _load(self):
        print(f"Loading embedding model '{self.model_name}' ...")
        try:
            return self._factory(self.model_name)
        except Exception as e:
            raise ModelUnavailable(f"could not load embedding model '{self.model_name}': {e}") from e

    @property
    def model(self):
        try:
            return self._model.get(timeout=self.timeout)
        except futures.TimeoutError as e:
            raise ModelUnavailable(
                f"embedding model '{self.model_name}' still loading after {self.timeout}s"
            ) from e

    @property
    def loaded(self) -> bool:
        return self._model.loaded

    def reset(self):
        """Drop the loaded model (next embed() reloads it)."""
        self._model.reset()

    def embed(self, text: str) -> list[float]:
        """Embed *text* after applying the chunk normalization to it."""
        model = self.model
        try:
            vector = model.encode(
                normalize(text),
                normalize_embeddings=True,
                convert_to_numpy=True,
                show_progress_bar=False,
            )
        except Exception as e:
            raise ModelUnavailable(f"embedding failed with '{self.model_name}': {e}") from e
        return [float(x) for x in vector]
