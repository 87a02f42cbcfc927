from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # e.g. mongodb://localhost:27017/docseq, the path is the database name
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3200
    debug: bool = False
    cors_origins: list[str] = []
    counters_record_id: str = "counters"  # _id of the single CounterSet document
    cache_ttl_seconds: float = 60.0  # Lifetime of the peek cache
    document_number_width: int = 5  # Zero-pad width, MO00001
    retry_max_attempts: int = 5
    retry_initial_wait: float = 0.05  # Seconds before the first retry
    retry_max_wait: float = 1.0
    retry_jitter: float = 0.05
    # Build metadata injected during Docker build via environment variables
    git_commit_hash: str = "unknown"
    git_commit_date: str = "unknown"
    build_time: str = "unknown"

    model_config = {
        "env_file": [".env"],
        "env_prefix": "DOCSEQ_",
        "extra": "ignore",
    }
