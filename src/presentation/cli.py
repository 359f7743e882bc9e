import logging
import sys
import time
import uuid
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from src.config.settings import settings
from src.container import Container, configure_container
from src.core.errors import NotReadyError, RetrievalError, StoreUnavailableError
from src.core.models.chat import TurnKind
from src.core.protocols.embedder import EmbedderProtocol
from src.core.protocols.vector_store import VectorStoreProtocol
from src.core.services.chat_service import ChatService
from src.core.services.search_service import SearchService
from src.core.services.session_store import SessionStore
from src.core.strategies.scoring import KeywordBoostStrategy

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def warmup(container: Container, attempts: int = 30) -> bool:
    """Load the embedding model and connect to the vector store.

    Returns:
        True if both are ready, False otherwise.
    """
    container.resolve(EmbedderProtocol).warmup()

    store = container.resolve(VectorStoreProtocol)
    for attempt in range(attempts):
        try:
            store.warmup()
            return True
        except StoreUnavailableError:
            logger.info(f"Waiting for Chroma... ({attempt + 1}/{attempts})")
            time.sleep(2)
        except NotReadyError as e:
            logger.error(str(e))
            return False

    logger.error("Chroma not available")
    return False


def print_results(results) -> None:
    for i, r in enumerate(results, 1):
        meta = r.metadata
        date = f" {meta.date}" if meta.date else ""
        mark = "✓" if meta.has_source else "✗"
        print(
            f"{i}. {r.document_key} ({meta.content_type.value} {mark}{date}) "
            f"similarity={r.similarity:.3f}"
        )
        if meta.source:
            print(f"   {meta.source}")


def cmd_status():
    """Status command - readiness of embedder and store."""
    container = configure_container(settings)
    warmup(container, attempts=1)
    status = container.resolve(SearchService).status()
    status["page_size"] = settings.rag_page_size
    status["max_results"] = settings.rag_max_results
    for key, value in status.items():
        print(f"{key}: {value}")


def cmd_search(query: str):
    """Search command - print ranked results for one query."""
    container = configure_container(settings)
    if not warmup(container):
        sys.exit(1)

    try:
        response = container.resolve(SearchService).search(query)
    except RetrievalError as e:
        logger.error(f"Search failed: {e}")
        sys.exit(1)

    print(f"Strategy: {response.strategy}")
    print_results(response.results)


def cmd_chat():
    """Chat command - interactive paginated search."""
    container = configure_container(settings)
    if not warmup(container):
        sys.exit(1)

    store = container.resolve(SessionStore)
    store.start_sweeper(settings.session_sweep_interval)
    chat = container.resolve(ChatService)
    session_id = str(uuid.uuid4())

    try:
        while True:
            try:
                message = input("> ").strip()
            except EOFError:
                break
            if not message:
                continue

            try:
                turn = chat.handle(message, session_id)
            except RetrievalError as e:
                logger.error(f"Search failed: {e}")
                continue

            if turn.kind is TurnKind.DECLINED:
                print("OK, no more results. What else can I look up?")
                continue

            if not turn.page.results:
                print("Nothing in the vault about that.")
                continue

            print_results(turn.page.results)
            if turn.has_more:
                print(f"I have {turn.remaining_count} more. Want to see them?")
    finally:
        store.stop_sweeper()


def cmd_boost(title: str, query: str, text: str = ""):
    """Boost command - show how a query boosts a document title."""
    breakdown = KeywordBoostStrategy().explain(query, text, title)
    for t in breakdown.terms:
        if t.boost > 0:
            print(
                f'  "{t.term}": {t.title_matches} in title, '
                f"{t.body_matches} in text = +{t.boost:.2f}"
            )
    if breakdown.bonus:
        print(f"  Multi-word bonus ({breakdown.title_terms} words in title): +{breakdown.bonus}")
    print(f"  TOTAL BOOST: {breakdown.total:.2f}")


def main():
    """CLI entry point."""
    if len(sys.argv) < 2:
        print("Usage: python -m src.presentation.cli <command>")
        print("Commands: status, search <query>, chat, boost <title> <query> [text]")
        sys.exit(1)

    command = sys.argv[1]

    if command == "status":
        cmd_status()
    elif command == "search" and len(sys.argv) > 2:
        cmd_search(" ".join(sys.argv[2:]))
    elif command == "chat":
        cmd_chat()
    elif command == "boost" and len(sys.argv) > 3:
        cmd_boost(*sys.argv[2:5])
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()
