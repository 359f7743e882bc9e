"""Test near-duplicate title collapsing."""
import random
import time

from src.core.models.document import ContentType
from src.core.strategies.dedup import (
    TitleDeduplicator,
    edit_distance,
    length_ratio,
    title_similarity,
)

from conftest import make_group


def test_edit_distance() -> None:
    assert edit_distance("kitten", "sitting") == 3
    assert edit_distance("", "abc") == 3
    assert edit_distance("same", "same") == 0


def test_title_similarity() -> None:
    assert title_similarity("", "") == 1.0
    assert title_similarity("Hello", "hello") == 1.0
    assert title_similarity("AI and the Future of Work", "AI and the Future of Work ") > 0.8
    assert title_similarity("Formula 1 timing", "Cooking with kids") < 0.8


def test_source_url_wins() -> None:
    clipped = make_group("AI and the Future of Work", content_type=ContentType.CLIPPINGS)
    blog = make_group(
        "AI and the Future of Work ",
        content_type=ContentType.BLOG,
        source="https://example.com/future-of-work",
    )
    survivors = TitleDeduplicator().deduplicate({g.document_key: g for g in [clipped, blog]})
    assert list(survivors) == ["AI and the Future of Work "]


def test_source_beats_primary_partition() -> None:
    blog = make_group("Remote Teams", content_type=ContentType.BLOG)
    clipping = make_group(
        "Remote Teams!", content_type=ContentType.CLIPPINGS, source="https://x.org/a"
    )
    survivors = TitleDeduplicator().deduplicate({g.document_key: g for g in [blog, clipping]})
    assert list(survivors) == ["Remote Teams!"]


def test_primary_partition_wins_without_sources() -> None:
    blog = make_group("Remote Teams", content_type=ContentType.BLOG)
    clipping = make_group("Remote Teams!", content_type=ContentType.CLIPPINGS)
    survivors = TitleDeduplicator().deduplicate({g.document_key: g for g in [clipping, blog]})
    assert list(survivors) == ["Remote Teams"]


def test_ambiguous_pair_keeps_both() -> None:
    a = make_group("Remote Teams", content_type=ContentType.CLIPPINGS)
    b = make_group("Remote Teams!", content_type=ContentType.CLIPPINGS)
    survivors = TitleDeduplicator().deduplicate({g.document_key: g for g in [a, b]})
    assert set(survivors) == {"Remote Teams", "Remote Teams!"}

    c = make_group("Remote Teams", source="https://a.com")
    d = make_group("Remote Teams!", source="https://b.com")
    survivors = TitleDeduplicator().deduplicate({g.document_key: g for g in [c, d]})
    assert len(survivors) == 2


def test_dissimilar_titles_untouched() -> None:
    a = make_group("Formula 1 timing", source="https://a.com")
    b = make_group("Cooking with kids")
    survivors = TitleDeduplicator().deduplicate({g.document_key: g for g in [a, b]})
    assert len(survivors) == 2


def test_symmetric_under_discovery_order() -> None:
    groups = [
        make_group("The Future of Work", content_type=ContentType.CLIPPINGS),
        make_group("The Future of Work.", content_type=ContentType.BLOG),
        make_group("The Future of Work..", content_type=ContentType.OTHER, source="https://s.io"),
        make_group("Unrelated"),
    ]
    dedup = TitleDeduplicator()
    forward = dedup.deduplicate({g.document_key: g for g in groups})
    backward = dedup.deduplicate({g.document_key: g for g in reversed(groups)})
    assert set(forward) == set(backward)
    assert set(forward) == {"The Future of Work..", "Unrelated"}


def test_length_ratio_bounds_similarity() -> None:
    assert length_ratio("", "") == 1.0
    assert length_ratio("abcd", "abcdefgh") == 0.5
    for a, b in [("Remote Teams", "Remote Teams!"), ("kitten", "sitting"), ("AI", "AI news")]:
        assert title_similarity(a, b) <= length_ratio(a, b)


def test_large_pool_is_fast() -> None:
    rng = random.Random(7)
    letters = "abcdefghijklmnopqrstuvwxyz "
    groups = [
        make_group("".join(rng.choice(letters) for _ in range(50)) + f" {i}")
        for i in range(200)
    ]

    started = time.perf_counter()
    survivors = TitleDeduplicator().deduplicate({g.document_key: g for g in groups})
    elapsed = time.perf_counter() - started

    assert len(survivors) == 200
    assert elapsed < 2.0
