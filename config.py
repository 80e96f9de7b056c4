import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_SEARCH_MODEL = "google/gemini-2.0-flash-001"
DEFAULT_REVIEW_MODEL = "openrouter/pony-alpha"


@dataclass(frozen=True)
class Settings:
    """
    Runtime configuration, read from the environment (and .env if present).

    Attributes:
        api_key: OpenRouter key; without it both LLM collaborators are skipped
            and the pipeline runs on static/heuristic data
        base_url: Chat-completions API root
        search_model: Model used to simulate multi-platform product search
        review_model: Model used to summarize review snippets
        request_timeout: Seconds before an outbound call counts as failed
        host: Bind address for the HTTP server
        port: Port for the HTTP server
        log_level: Root logging level name
    """
    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    search_model: str = DEFAULT_SEARCH_MODEL
    review_model: str = DEFAULT_REVIEW_MODEL
    request_timeout: float = 30.0
    host: str = "127.0.0.1"
    port: int = 4000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        api_key = os.getenv("OPENROUTER_API_KEY", "").strip().strip("'\"")
        return cls(
            api_key=api_key or None,
            base_url=os.getenv("OPENROUTER_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            search_model=os.getenv("SEARCH_MODEL", DEFAULT_SEARCH_MODEL),
            review_model=os.getenv("REVIEW_MODEL", DEFAULT_REVIEW_MODEL),
            request_timeout=float(os.getenv("REQUEST_TIMEOUT", "30")),
            host=os.getenv("HOST", "127.0.0.1"),
            port=int(os.getenv("PORT", "4000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
