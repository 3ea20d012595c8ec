# Ragcontext – Grounding context retrieval for document Q&A
# Copyright (c) 2026 4rce.com Digital Technologies GmbH.
# Use of this software is governed by the Business Source License 1.1. See LICENSE.md.

"""
HTTP surface (FastAPI) for the retrieval API consumed by the chat
backend. All state (config, retriever, health) is injected via
create_web_app().
"""
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from .config import Config
from .errors import ModelUnavailable
from .health import HealthTracker
from .retriever import Retriever


class ContextRequest(BaseModel):
    question: str = Field(min_length=1)


class ContextResponse(BaseModel):
    context: str
    used_any_context: bool
    chunk_ids: list[int]


def create_web_app(
    config: Config,
    retriever: Retriever,
    health: HealthTracker | None = None,
) -> FastAPI:
    """Factory: returns a FastAPI app sharing the retriever's lazy state."""
    from . import __version__

    app = FastAPI(
        title="ragcontext",
        description="Grounding context retrieval for document Q&A",
        version=__version__,
    )

    @app.get("/health")
    async def health_check():
        status = health.status if health else {}
        return {
            "status": "ok" if (not health or health.is_healthy) else "degraded",
            "version": __version__,
            "store_loaded": retriever.store.loaded,
            "model_loaded": retriever.embedder.loaded,
            "embedding_model": config.embedding_model,
            **status,
        }

    @app.get("/api/config")
    async def get_config():
        return config.to_safe_dict()

    # sync handlers run in the threadpool; embedding blocks
    @app.post("/api/context", response_model=ContextResponse)
    def get_context(req: ContextRequest):
        try:
            result = retriever.get_context(req.question)
        except ModelUnavailable as e:
            raise HTTPException(status_code=503, detail=str(e))
        return result.to_dict()

    @app.post("/api/reload")
    def reload_store():
        count = retriever.reload()
        return {"status": "reloaded", "chunks": count}

    return app
