"""Test pagination session storage and expiry."""
import threading
import time

from src.core.services.session_store import SessionStore

from conftest import FakeClock, make_results


def test_replace_overwrites_previous_session(session_store) -> None:
    session_store.replace("s1", "first", make_results(3))
    session_store.replace("s1", "second", make_results(1))
    session = session_store.get("s1")
    assert session.query == "second"
    assert len(session.remaining) == 1
    assert len(session_store) == 1


def test_take_pops_from_front_and_deletes_when_empty(session_store) -> None:
    results = make_results(4)
    session_store.replace("s1", "q", results)

    batch, remaining = session_store.take("s1", 3)
    assert batch == results[:3]
    assert remaining == 1
    assert session_store.has("s1")

    batch, remaining = session_store.take("s1", 3)
    assert batch == results[3:]
    assert remaining == 0
    assert not session_store.has("s1")


def test_take_unknown_session(session_store) -> None:
    assert session_store.take("missing", 5) is None


def test_discard(session_store) -> None:
    session_store.replace("s1", "q", make_results(2))
    assert session_store.discard("s1")
    assert not session_store.discard("s1")


def test_sessions_are_isolated(session_store) -> None:
    session_store.replace("a", "qa", make_results(2))
    session_store.replace("b", "qb", make_results(2))
    session_store.discard("a")
    assert session_store.has("b")


def test_sweep_expires_idle_sessions(clock, session_store) -> None:
    session_store.replace("stale", "q", make_results(2))
    clock.advance(300)
    session_store.replace("fresh", "q", make_results(2))
    clock.advance(301)

    assert session_store.sweep() == 1
    assert not session_store.has("stale")
    assert session_store.has("fresh")


def test_session_touched_just_before_ttl_survives(clock, session_store) -> None:
    session_store.replace("s1", "q", make_results(10))
    clock.advance(599)
    session_store.take("s1", 2)
    clock.advance(599)

    assert session_store.sweep() == 0
    assert session_store.has("s1")

    clock.advance(2)
    assert session_store.sweep() == 1


def test_background_sweeper() -> None:
    clock = FakeClock()
    store = SessionStore(ttl_seconds=10, clock=clock)
    store.replace("s1", "q", make_results(2))
    clock.advance(11)

    store.start_sweeper(interval=0.01)
    try:
        deadline = time.time() + 2
        while store.has("s1") and time.time() < deadline:
            time.sleep(0.01)
    finally:
        store.stop_sweeper()

    assert not store.has("s1")


def test_concurrent_takes_never_repeat_or_skip(session_store) -> None:
    results = make_results(200)
    session_store.replace("s1", "q", results)
    served: list = []
    served_lock = threading.Lock()

    def worker() -> None:
        while True:
            taken = session_store.take("s1", 3)
            if taken is None:
                return
            with served_lock:
                served.extend(taken[0])

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(r.id for r in served) == sorted(r.id for r in results)
    assert len(served) == len(results)
