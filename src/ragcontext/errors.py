# Ragcontext – Grounding context retrieval for document Q&A
# Copyright (c) 2026 4rce.com Digital Technologies GmbH.
# Use of this software is governed by the Business Source License 1.1. See LICENSE.md.

"""
Error taxonomy.

- ModelUnavailable:  embedding model failed to load or run (fatal per query)
- StoreUnavailable:  chunk store missing or corrupt (degrades to no context)
- UnsupportedSource: ingestion has no extractor for this file type (skipped)
- EmptyExtraction:   source yielded no text after normalization (skipped)
"""


class RagError(Exception):
    """Base class for all ragcontext errors."""


class ModelUnavailable(RagError):
    pass


class StoreUnavailable(RagError):
    pass


class UnsupportedSource(RagError):
    pass


class EmptyExtraction(RagError):
    pass
