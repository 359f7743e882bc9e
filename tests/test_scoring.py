"""Test keyword boost scoring."""
import pytest

from src.core.strategies.scoring import KeywordBoostStrategy, query_terms

from conftest import make_chunk

TITLE = "Milliseconds Matter Understanding Time in High-Speed Sports"
TEXT = "In the world of motorsport, particularly Formula 1, performance is measured in milliseconds."


def test_query_terms() -> None:
    assert query_terms("What is AI, and is AI the future?") == ["what", "and", "the", "future"]


def test_body_match_weight() -> None:
    booster = KeywordBoostStrategy()
    assert booster.boost("motorsport", TEXT, TITLE) == pytest.approx(0.2)


def test_title_and_body_match() -> None:
    booster = KeywordBoostStrategy()
    # once in title (0.5) and once in body (0.2)
    assert booster.boost("milliseconds", TEXT, TITLE) == pytest.approx(0.7)


def test_multi_term_bonus() -> None:
    booster = KeywordBoostStrategy()
    two = booster.explain("understanding sports", "", TITLE)
    assert two.title_terms == 2
    assert two.bonus == 0.5
    assert two.total == pytest.approx(1.5)

    three = booster.explain("understanding time high-speed sports", "", TITLE)
    assert three.title_terms == 4
    assert three.bonus == 1.0


def test_word_boundary() -> None:
    booster = KeywordBoostStrategy()
    assert booster.boost("art", "article artist", "Articles") == 0


def test_no_overlap_no_boost() -> None:
    assert KeywordBoostStrategy().boost("formula", "", "Cooking") == 0


def test_boost_monotonic_in_title_matches() -> None:
    booster = KeywordBoostStrategy()
    query = "future work remote teams"
    titles = [
        "Notes",
        "Future",
        "Future of Work",
        "Future of Remote Work",
        "Future of Remote Work for Teams",
        "Future of Remote Work for Teams and Future Work",
    ]
    boosts = [booster.boost(query, "", t) for t in titles]
    assert boosts == sorted(boosts)


def test_score_keeps_raw_distance() -> None:
    chunk = make_chunk("Future of Work", distance=0.4, text="remote work")
    [scored] = KeywordBoostStrategy().score("future work", [chunk])
    assert scored.raw_distance == 0.4
    # title: future + work (1.0), body: work (0.2), two-term bonus (0.5)
    assert scored.boost == pytest.approx(1.7)
    assert scored.adjusted_distance == pytest.approx(-1.3)


def test_custom_weights() -> None:
    booster = KeywordBoostStrategy(body_weight=1.0, title_weight=2.0)
    assert booster.boost("speed", "speed speed", "Speed") == pytest.approx(4.0)
