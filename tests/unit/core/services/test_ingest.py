# tests/unit/core/services/test_ingest.py
from pathlib import Path

import pytest

from postrev.core.domain.entities import Document
from postrev.core.errors import EmptyBodyWarning, MalformedFrontMatterError
from postrev.core.services.ingest import IngestService
from postrev.core.services.similarity import EditDistanceScorer
from postrev.infrastructure.persistence.memory import InMemoryDocumentStore


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def service(store):
    return IngestService(store)


def test_ingest_directory_reports_every_file(service, store, posts_dir, corpus):
    statuses = service.ingest_directory(posts_dir)

    assert [s.path for s in statuses] == sorted(corpus)
    by_path = {s.path: s for s in statuses}
    assert by_path["broken.md"].status == "malformed"
    assert by_path["broken.md"].slug is None
    assert "never closed" in by_path["broken.md"].error
    assert sum(1 for s in statuses if s.ok) == len(corpus) - 1
    assert len(store) == len(corpus) - 1


def test_malformed_file_does_not_affect_others(service, store, posts_dir):
    service.ingest_directory(posts_dir)
    spark = store.get_collection("apache-spark-serialize").latest
    assert spark.front_matter["title"] == "Apache Spark serialize"
    assert spark.body.startswith("\nApache Spark has to serialze")


def test_same_slug_in_subdirectory_extends_collection(service, store, posts_dir):
    service.ingest_directory(posts_dir)
    coll = store.get_collection("concurrenthashmap-vs-synchronizedmap")
    assert len(coll) == 2
    assert [d.path for d in coll] == [
        "2019-05-01-concurrenthashmap-vs-synchronizedmap.md",
        "drafts/2019-05-01-concurrenthashmap-vs-synchronizedmap.md",
    ]


def test_empty_body_is_warned_but_ingested(service, store, posts_dir, caplog):
    with caplog.at_level("WARNING"):
        statuses = service.ingest_directory(posts_dir)
    empty = next(s for s in statuses if s.path == "empty.md")
    assert empty.ok
    assert any("EmptyBodyWarning" in w for w in empty.warnings)
    assert "EmptyBodyWarning" in caplog.text
    assert store.get_collection("empty").latest.is_empty


def test_markup_only_body_is_warned(service, store, tmp_path):
    post = tmp_path / "teaser.md"
    post.write_text("---\ntitle: t\n---\n<!-- more -->\n", encoding="utf-8")

    with pytest.warns(EmptyBodyWarning, match="teaser.md"):
        status = service.ingest_file(post, display_path="teaser.md")

    assert status.ok
    assert status.warnings == ["EmptyBodyWarning: teaser.md has an empty body"]
    doc = store.get_collection("teaser").latest
    empty = Document(slug="other", raw_text="", front_matter={}, body="")
    assert EditDistanceScorer().score(doc, empty) == 1.0


def test_bom_before_front_matter(service, store, tmp_path):
    raw = "\ufeff---\ntitle: Bom\n---\nbody\n"
    post = tmp_path / "bom.md"
    post.write_bytes(raw.encode("utf-8"))

    assert service.ingest_file(post).ok
    doc = store.get_collection("bom").latest
    assert doc.title == "Bom"
    assert doc.body == "body\n"
    assert doc.raw_text == raw


def test_crlf_text_is_preserved(service, store, tmp_path):
    raw = "---\r\ntitle: crlf\r\n---\r\nline one\r\nline two\r\n"
    post = tmp_path / "crlf.md"
    post.write_bytes(raw.encode("utf-8"))

    status = service.ingest_file(post)
    assert status.ok
    doc = store.get_collection("crlf").latest
    assert doc.raw_text == raw
    assert doc.body == "line one\r\nline two\r\n"


def test_undecodable_file_is_io_error(service, store, tmp_path):
    bad = tmp_path / "latin.md"
    bad.write_bytes(b"---\ntitle: caf\xe9\n---\nbody\n")
    good = tmp_path / "good.md"
    good.write_text("---\ntitle: ok\n---\nbody\n", encoding="utf-8")

    statuses = service.ingest_paths([bad, good])
    assert [s.status for s in statuses] == ["io_error", "ok"]
    assert len(store) == 1


def test_missing_file_is_io_error(service, tmp_path):
    status = service.ingest_file(tmp_path / "nope.md")
    assert status.status == "io_error"
    assert status.error


def test_missing_directory_raises(service, tmp_path):
    with pytest.raises(FileNotFoundError):
        service.ingest_directory(tmp_path / "does-not-exist")


def test_ingest_text_raises_malformed(service):
    with pytest.raises(MalformedFrontMatterError):
        service.ingest_text("---\ntitle: open\n", path="x.md")


def test_ingestion_sequence_is_monotonic(service, store):
    a = service.ingest_text("---\ntitle: A\n---\nbody a")
    b = service.ingest_text("---\ntitle: B\n---\nbody b")
    assert a.seq < b.seq


@pytest.mark.parametrize(
    "path,front_matter,expected",
    [
        ("_posts/2019-03-04-apache-spark-serialize.md", {}, "apache-spark-serialize"),
        ("notes/Hardware Build.markdown", {}, "hardware-build"),
        (None, {"title": "ConcurrentHashMap vs synchronizedMap"}, "concurrenthashmap-vs-synchronizedmap"),
    ],
)
def test_derive_slug(path, front_matter, expected):
    assert IngestService.derive_slug(path, front_matter, "raw") == expected


def test_derive_slug_falls_back_to_digest():
    slug = IngestService.derive_slug(None, {}, "some raw text")
    assert slug.startswith("untitled-")
    assert slug == IngestService.derive_slug(None, {}, "some raw text")


def test_explicit_slug_wins(service, store):
    doc = service.ingest_text("body only", path=str(Path("a/b/whatever.md")), slug="custom")
    assert doc.slug == "custom"
    assert store.get_collection("custom").latest is doc
