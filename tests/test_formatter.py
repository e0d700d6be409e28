"""Tests for shaping candidates into public book records."""

from app.domain.entities import Candidate
from app.services.formatter import ResultFormatter


def make_candidate() -> Candidate:
    return Candidate(id="works/OL1W", title="Middlemarch", author="George Eliot", cover_id=42, subject_tag="classics")


def test_default_record_shape():
    record = ResultFormatter(covers_base_url="https://covers.test/").format(make_candidate())

    assert record == {
        "id": "/works/OL1W",
        "title": "Middlemarch",
        "author": "George Eliot",
        "image": "https://covers.test/b/id/42-L.jpg",
        "description": "",
        "rating": None,
        "category": "classics",
        "publishedDate": None,
    }


def test_missing_title_and_author_get_placeholders():
    record = ResultFormatter().format(Candidate(id="/works/OL2W"))
    assert record["title"] == "Untitled"
    assert record["author"] == "Unknown"


def test_mapper_returning_non_mapping_falls_back():
    formatter = ResultFormatter(mapper=lambda c: ["not", "a", "record"])
    record = formatter.format(make_candidate())
    assert record["title"] == "Middlemarch"
    assert record["id"] == "/works/OL1W"


def test_mapper_returning_incomplete_record_falls_back():
    formatter = ResultFormatter(mapper=lambda c: {"id": c.id, "title": ""})
    assert formatter.format(make_candidate())["title"] == "Middlemarch"


def test_mapper_returning_none_falls_back():
    formatter = ResultFormatter(mapper=lambda c: None)
    assert formatter.format(make_candidate())["author"] == "George Eliot"


def test_mapper_record_is_used_as_is():
    formatter = ResultFormatter(mapper=lambda c: {"id": "custom-1", "title": "Custom", "extra": 1})
    assert formatter.format(make_candidate()) == {"id": "custom-1", "title": "Custom", "extra": 1}
