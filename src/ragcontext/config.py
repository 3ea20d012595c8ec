# Ragcontext – Grounding context retrieval for document Q&A
# Copyright (c) 2026 4rce.com Digital Technologies GmbH.
# Use of this software is governed by the Business Source License 1.1. See LICENSE.md.

"""
Central configuration – configurable via:
1. Environment variables (RAG_ prefix)
2. .env file
3. JSON overrides file (CONFIG_FILE)

The retrieval tuning values are empirical; they live here as named
constants so the pure scoring/selection functions and Config share them.
"""
import json
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings

CONFIG_FILE = Path("cache/config.json")

# ── Retrieval tuning ─────────────────────────────
TOP_K = 6
SIMILARITY_WEIGHT = 0.7
LEXICAL_WEIGHT = 0.3
RELATIVE_SCORE_FLOOR = 0.45
ABSOLUTE_SCORE_FLOOR = 0.1
MIN_TOKEN_LEN = 3
MAX_CONTEXT_CHARS = 4000

# ── Chunking ─────────────────────────────────────
CHUNK_SIZE = 1000
CHUNK_OVERLAP = 200


class Config(BaseSettings):
    # ── Paths ────────────────────────────────────
    data_path: str = "./data"
    store_path: str = "./cache/embeddings.json"

    # ── Embeddings ───────────────────────────────
    embedding_model: str = "all-MiniLM-L6-v2"
    embedding_timeout: Optional[float] = None

    # ── Chunking ─────────────────────────────────
    chunk_size: int = CHUNK_SIZE
    chunk_overlap: int = CHUNK_OVERLAP

    # ── Retrieval ────────────────────────────────
    top_k: int = TOP_K
    similarity_weight: float = SIMILARITY_WEIGHT
    lexical_weight: float = LEXICAL_WEIGHT
    relative_score_floor: float = RELATIVE_SCORE_FLOOR
    absolute_score_floor: float = ABSOLUTE_SCORE_FLOOR
    min_token_len: int = MIN_TOKEN_LEN
    max_context_chars: int = MAX_CONTEXT_CHARS

    # ── Server ───────────────────────────────────
    web_host: str = "0.0.0.0"
    web_port: int = 8000

    class Config:
        env_prefix = "RAG_"
        env_file = ".env"

    @classmethod
    def load(cls) -> "Config":
        """Load config: ENV -> .env -> config.json overrides."""
        config = cls()

        if CONFIG_FILE.exists():
            try:
                overrides = json.loads(CONFIG_FILE.read_text())
                for key, value in overrides.items():
                    if hasattr(config, key) and value != "":
                        setattr(config, key, value)
            except Exception as e:
                print(f"Warning: Config file error: {e}")

        return config

    def to_safe_dict(self) -> dict:
        """Config as plain JSON types (for the status endpoint)."""
        return json.loads(json.dumps(self.model_dump(), default=str))
