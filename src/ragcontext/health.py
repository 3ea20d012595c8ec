# Ragcontext – Grounding context retrieval for document Q&A
# Copyright (c) 2026 4rce.com Digital Technologies GmbH.
# Use of this software is governed by the Business Source License 1.1. See LICENSE.md.

"""
Centralized health/status tracker – shared across ingestion, retriever,
web app. Thread-safe, no external dependencies.
"""
import threading
from datetime import datetime, timezone


class HealthTracker:
    def __init__(self):
        self._lock = threading.Lock()
        self._data = {
            "last_index_at": None,
            "last_index_ok": False,
            "last_index_chunks": 0,
            "last_index_files": 0,
            "last_index_error": None,

            "store_loaded_at": None,
            "store_chunks": 0,

            "queries_total": 0,
            "queries_hits": 0,
            "queries_misses": 0,
            "queries_failed": 0,
            "last_query_at": None,

            "started_at": datetime.now(timezone.utc).isoformat(),
            "skipped_files": [],
        }

    def record_index(self, ok: bool, chunks: int = 0, files: int = 0, error: str | None = None):
        with self._lock:
            self._data["last_index_at"] = datetime.now(timezone.utc).isoformat()
            self._data["last_index_ok"] = ok
            self._data["last_index_chunks"] = chunks
            self._data["last_index_files"] = files
            self._data["last_index_error"] = error

    def record_store_load(self, chunks: int):
        with self._lock:
            self._data["store_loaded_at"] = datetime.now(timezone.utc).isoformat()
            self._data["store_chunks"] = chunks

    def record_query(self, hit: bool):
        with self._lock:
            self._data["queries_total"] += 1
            if hit:
                self._data["queries_hits"] += 1
            else:
                self._data["queries_misses"] += 1
            self._data["last_query_at"] = datetime.now(timezone.utc).isoformat()

    def record_query_failure(self):
        with self._lock:
            self._data["queries_total"] += 1
            self._data["queries_failed"] += 1
            self._data["last_query_at"] = datetime.now(timezone.utc).isoformat()

    def record_skipped_files(self, skipped: list[dict]):
        with self._lock:
            self._data["skipped_files"] = list(skipped)

    @property
    def status(self) -> dict:
        with self._lock:
            return dict(self._data)

    @property
    def is_healthy(self) -> bool:
        """Healthy once a non-empty store is loaded."""
        with self._lock:
            return self._data["store_chunks"] > 0
