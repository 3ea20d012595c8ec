import hashlib
import math
import re
from pathlib import Path

import pytest

from ragcontext.config import Config
from ragcontext.embeddings import Embedder
from ragcontext.health import HealthTracker
from ragcontext.store import Chunk

FAKE_DIM = 64


class FakeModel:
    """Deterministic stand-in for a SentenceTransformer: hashed bag of
    words, L2-normalized. Texts sharing words get similar vectors."""

    def __init__(self, name: str = "fake"):
        self.name = name
        self.calls = 0

    def encode(self, text, normalize_embeddings=True, **kwargs):
        self.calls += 1
        vec = [0.0] * FAKE_DIM
        for tok in re.findall(r"\w+", text.lower()):
            h = int(hashlib.md5(tok.encode()).hexdigest(), 16)
            vec[h % FAKE_DIM] += 1.0
        norm = math.sqrt(sum(v * v for v in vec))
        if normalize_embeddings and norm:
            vec = [v / norm for v in vec]
        return vec


def make_pdf(path, page_texts):
    """Write a PDF with one page per entry; None makes a blank page."""
    from pypdf import PdfWriter
    from pypdf.generic import DecodedStreamObject, DictionaryObject, NameObject

    writer = PdfWriter()
    for text in page_texts:
        writer.add_blank_page(width=300, height=300)
        if text is None:
            continue
        page = writer.pages[-1]
        font_dict = DictionaryObject()
        font_dict[NameObject("/Type")] = NameObject("/Font")
        font_dict[NameObject("/Subtype")] = NameObject("/Type1")
        font_dict[NameObject("/BaseFont")] = NameObject("/Helvetica")

        resources = page.get("/Resources", DictionaryObject())
        if "/Font" not in resources:
            resources[NameObject("/Font")] = DictionaryObject()
        resources["/Font"][NameObject("/F1")] = font_dict
        page[NameObject("/Resources")] = resources

        stream = DecodedStreamObject()
        stream.set_data(f"BT /F1 12 Tf 20 250 Td ({text}) Tj ET".encode("latin-1"))
        page[NameObject("/Contents")] = stream

    with open(path, "wb") as f:
        writer.write(f)
    return path


@pytest.fixture
def config(tmp_path):
    return Config(
        data_path=str(tmp_path / "data"),
        store_path=str(tmp_path / "cache" / "embeddings.json"),
        embedding_model="fake-model",
        chunk_size=200,
        chunk_overlap=50,
    )


@pytest.fixture
def embedder(config):
    return Embedder(config, model_factory=FakeModel)


@pytest.fixture
def make_chunk(config):
    """Build a Chunk with a fake embedding of its text."""
    counter = iter(range(10_000))
    embedder = Embedder(config, model_factory=FakeModel)

    def _make(text, source="doc.txt", page=None, embedding=None):
        return Chunk(
            id=next(counter),
            source=source,
            page=page,
            text=text,
            embedding=embedding if embedding is not None else embedder.embed(text),
        )

    return _make


@pytest.fixture
def corpus(config):
    """Two-document source directory."""
    data = Path(config.data_path)
    data.mkdir(parents=True)
    (data / "capitals.txt").write_text(
        "Paris is the capital of France.\n\n"
        "Berlin is the capital of Germany. Rome is the capital of Italy. "
        "Madrid is the capital of Spain and Lisbon is the capital of Portugal. "
        "Vienna is the capital of Austria, and Bern hosts the Swiss federal government.\n"
    )
    (data / "rivers.md").write_text(
        "# Rivers\n\n"
        "The Seine flows through Paris before reaching the English Channel.\n"
        "The Danube crosses ten countries, more than any other river in the world, "
        "and empties into the Black Sea after passing Vienna, Bratislava and Budapest.\n"
    )
    return data


@pytest.fixture
def health():
    return HealthTracker()
