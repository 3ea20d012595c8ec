# Ragcontext – Grounding context retrieval for document Q&A
# Copyright (c) 2026 4rce.com Digital Technologies GmbH.
# Use of this software is governed by the Business Source License 1.1. See LICENSE.md.

"""
Once-initialized, thread-safe holder for expensive process-wide resources
(embedding model, chunk store).

The first get() runs the factory; callers arriving while it runs wait on
the same in-flight result. A factory that raises leaves the holder empty,
so a later get() retries instead of replaying the failure forever.
"""
import threading
from concurrent.futures import Future
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class Lazy(Generic[T]):
    def __init__(self, factory: Callable[[], T]):
        self._factory = factory
        self._lock = threading.Lock()
        self._future: Optional[Future] = None

    def get(self, timeout: Optional[float] = None) -> T:
        """Return the value, initializing it on first use.

        *timeout* bounds how long this caller waits on an in-flight
        initialization; the initialization itself is not cancelled.
        """
        with self._lock:
            owner = self._future is None
            if owner:
                self._future = Future()
            future = self._future

        if owner:
            try:
                value = self._factory()
            except BaseException as exc:
                with self._lock:
                    if self._future is future:
                        self._future = None
                future.set_exception(exc)
                raise
            future.set_result(value)

        return future.result(timeout=timeout)

    def reset(self) -> None:
        """Forget the value; the next get() initializes again."""
        with self._lock:
            self._future = None

    @property
    def loaded(self) -> bool:
        with self._lock:
            future = self._future
        return future is not None and future.done() and future.exception() is None
