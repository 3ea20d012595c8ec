"""Tests for offline ingestion (build_store)."""
from unittest.mock import patch

import pytest

from conftest import make_pdf
from ragcontext.embeddings import Embedder
from ragcontext.errors import ModelUnavailable
from ragcontext.ingest import build_store
from ragcontext.store import read_store, write_store


class TestBuildStore:
    def test_two_document_round_trip(self, config, embedder, corpus):
        result = build_store(config, embedder)
        assert result["status"] == "success"
        assert result["files_indexed"] == 2

        chunks = read_store(config.store_path)
        assert len(chunks) == result["chunks_total"] > 2
        assert [c.id for c in chunks] == list(range(len(chunks)))
        assert {c.source for c in chunks} == {str(corpus / "capitals.txt"), str(corpus / "rivers.md")}
        assert all(c.page is None for c in chunks)
        for c in chunks:
            assert c.embedding == pytest.approx(embedder.embed(c.text))

    def test_chunks_tagged_with_source(self, config, embedder, corpus):
        build_store(config, embedder)
        chunks = read_store(config.store_path)
        capitals = [c for c in chunks if c.source.endswith("capitals.txt")]
        assert capitals[0].text.startswith("[capitals] paris is the capital of france.")
        assert all(c.text.startswith("[capitals] ") for c in capitals)

    def test_windows_respect_chunk_size(self, config, embedder, corpus):
        build_store(config, embedder)
        for c in read_store(config.store_path):
            body = c.text.split("] ", 1)[1]
            assert len(body) <= config.chunk_size

    def test_files_processed_in_name_order(self, config, embedder, corpus):
        build_store(config, embedder)
        sources = [c.source for c in read_store(config.store_path)]
        assert sources == sorted(sources)

    def test_idempotent(self, config, embedder, corpus, tmp_path):
        build_store(config, embedder, output_path=tmp_path / "a.json")
        build_store(config, embedder, output_path=tmp_path / "b.json")
        assert (tmp_path / "a.json").read_bytes() == (tmp_path / "b.json").read_bytes()

    def test_pdf_pages_tagged(self, config, embedder, corpus):
        make_pdf(corpus / "atlas.pdf", ["Mont Blanc is the highest peak", None, "The Alps span eight countries"])
        build_store(config, embedder)
        pdf_chunks = [c for c in read_store(config.store_path) if c.source.endswith("atlas.pdf")]
        assert [c.page for c in pdf_chunks] == [1, 3]
        assert pdf_chunks[0].text.startswith("[atlas - pagina 1] ")
        assert pdf_chunks[1].text.startswith("[atlas - pagina 3] ")

    def test_unsupported_and_empty_files_skipped(self, config, embedder, corpus):
        (corpus / "photo.png").write_bytes(b"\x89PNG\r\n")
        (corpus / "empty.txt").write_text("   \n")
        (corpus / "broken.pdf").write_bytes(b"not a pdf")
        (corpus / "subdir").mkdir()

        result = build_store(config, embedder)
        assert result["status"] == "success"
        assert result["files_indexed"] == 2
        assert result["files_skipped"] == 3
        assert {s["file"] for s in result["skipped"]} == {"photo.png", "empty.txt", "broken.pdf"}

    def test_missing_source_dir(self, config, embedder, health):
        result = build_store(config, embedder, source_dir="/does/not/exist", health=health)
        assert result["status"] == "error"
        assert not health.status["last_index_ok"]

    def test_empty_directory_writes_empty_store(self, config, embedder, tmp_path):
        (tmp_path / "data").mkdir()
        result = build_store(config, embedder)
        assert result["chunks_total"] == 0
        assert read_store(config.store_path) == []

    def test_model_failure_keeps_previous_store(self, config, corpus):
        write_store([], config.store_path)
        before = (corpus.parent / "cache" / "embeddings.json").read_bytes()

        def broken(name):
            raise OSError("model download failed")

        with pytest.raises(ModelUnavailable):
            build_store(config, Embedder(config, model_factory=broken))
        assert (corpus.parent / "cache" / "embeddings.json").read_bytes() == before

    def test_records_health(self, config, embedder, corpus, health):
        (corpus / "photo.png").write_bytes(b"\x89PNG")
        build_store(config, embedder, health=health)
        s = health.status
        assert s["last_index_ok"] is True
        assert s["last_index_files"] == 2
        assert s["last_index_chunks"] > 0
        assert s["skipped_files"][0]["file"] == "photo.png"

    def test_model_failure_recorded(self, config, corpus, health):
        embedder = Embedder(config, model_factory=lambda name: None)
        with patch.object(Embedder, "embed", side_effect=ModelUnavailable("gone")):
            with pytest.raises(ModelUnavailable):
                build_store(config, embedder, health=health)
        assert health.status["last_index_error"] == "gone"
