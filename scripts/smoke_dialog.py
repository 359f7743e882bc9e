#!/usr/bin/env python3
"""
Smoke test of the paginated chat flow against a live Chroma collection.

Run (with Chroma up and the vault indexed):
  python scripts/smoke_dialog.py

Options:
  --session          Session id to use (default: random)
  --print-results    Print every page in full
  --dialog           Also run the scripted multi-turn dialogue
"""

import argparse
import sys
import uuid
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config.settings import settings
from src.container import configure_container
from src.core.models.chat import ChatTurn, TurnKind
from src.core.services.chat_service import ChatService
from src.core.strategies.ranking import parse_date
from src.presentation.cli import warmup

TESTS = [
    {
        "q": "recent blog posts",
        "expect_kind": "results",
        "expect_types": ["blog"],
        "expect_sorted_by_date": True,
    },
    {
        "q": "articles I've saved about AI",
        "expect_kind": "results",
        "expect_types": ["clippings"],
    },
    {
        "q": "latest clippings",
        "expect_kind": "results",
        "expect_types": ["clippings"],
        "expect_sorted_by_date": True,
    },
]

DIALOGUE = [
    "What have I written about the future of work?",
    "yes please",
    "more",
    "Anything on motorsport timing?",
    "no thanks",
    "sure",
]


def summarize(turn: ChatTurn) -> str:
    names = ", ".join(r.document_key for r in turn.page.results)
    return (
        f"[{turn.kind.value}] {len(turn.page.results)} shown, "
        f"{turn.remaining_count} left: {names}"
    )


def check_expectations(turn: ChatTurn, test: dict) -> list[str]:
    errors = []

    if turn.kind.value != test.get("expect_kind", TurnKind.RESULTS.value):
        errors.append(f"unexpected turn kind: {turn.kind.value}")

    expect_types = test.get("expect_types") or []
    for r in turn.page.results:
        if expect_types and r.metadata.content_type.value not in expect_types:
            errors.append(
                f"{r.document_key} is {r.metadata.content_type.value}, "
                f"expected {expect_types}"
            )

    if test.get("expect_sorted_by_date"):
        dates = [parse_date(r.metadata.date) for r in turn.page.results]
        if not dates:
            errors.append("no results")
        elif any(d is None for d in dates):
            errors.append("undated result in date-sorted query")
        elif any(a < b for a, b in zip(dates, dates[1:])):
            errors.append("results not sorted newest first")

    return errors


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--session", default=None)
    parser.add_argument("--print-results", action="store_true")
    parser.add_argument("--dialog", action="store_true")
    args = parser.parse_args()

    container = configure_container(settings)
    if not warmup(container):
        sys.exit(1)
    chat = container.resolve(ChatService)

    failures = 0
    for idx, test in enumerate(TESTS, start=1):
        q = test["q"]
        print(f"\nQ{idx}: {q}")
        turn = chat.handle(q, f"smoke-{idx}")
        if args.print_results:
            print("A:", summarize(turn))

        errors = check_expectations(turn, test)
        if errors:
            failures += 1
            print("FAIL:", "; ".join(errors))
        else:
            print("OK")

    if failures:
        print(f"\nFAILED: {failures} test(s) failed")
        sys.exit(1)
    print("\nALL OK")

    if args.dialog:
        session_id = args.session or str(uuid.uuid4())
        print("\nDIALOGUE:\n")
        for idx, q in enumerate(DIALOGUE, start=1):
            print(f"U{idx}: {q}")
            turn = chat.handle(q, session_id)
            print(f"A{idx}: {summarize(turn)}\n")
    return 0


if __name__ == "__main__":
    main()
