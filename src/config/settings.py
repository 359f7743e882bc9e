from pydantic_settings import BaseSettings


class Settings(BaseSettings):

    chroma_host: str = "localhost"
    chroma_port: int = 8001
    chroma_collection: str = "vault"
    chroma_timeout: float = 30.0

    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    embedding_query_prefix: str = ""

    default_profile: str = "public"

    # Results per chat turn, and total ranked results per query
    rag_page_size: int = 5
    rag_max_results: int = 20
    rag_overfetch_factor: int = 10
    rag_recency_fetch_k: int = 2000
    rag_recency_limit_factor: int = 4

    # Keyword boost
    boost_body_weight: float = 0.2
    boost_title_weight: float = 0.5
    boost_two_term_bonus: float = 0.5
    boost_three_term_bonus: float = 1.0

    dedup_threshold: float = 0.8
    relevance_tolerance: float = 0.1
    primary_content_type: str = "blog"

    # Pagination sessions
    session_ttl_seconds: float = 600.0
    session_sweep_interval: float = 60.0

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
