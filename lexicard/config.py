"""Application configuration using Pydantic Settings."""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_CUTOFF_MARKERS = [
    r"synonyms?\s*:",
    r"antonyms?\s*:",
    r"see also\s*:",
    r"related(?: terms)?\s*:",
    r"derived(?: terms)?\s*:",
    r"compounds?\s*:",
    r"sinónimos?\s*:",
    r"antónimos?\s*:",
    r"véase también\s*:",
    r"relacionados?\s*:",
    r"derivados?\s*:",
    r"compuestos?\s*:",
    r"—",
    r" - ",
]


class Settings(BaseSettings):
    """Application settings, configurable via environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Paths
    data_dir: Path = Path("data")
    tables_dir: Path | None = None  # Override for the bundled lexical tables

    # Logging
    log_level: LogLevel = "INFO"
    log_file_enabled: bool = False
    log_file_path: Path | None = None
    log_file_max_bytes: int = 10 * 1024 * 1024  # 10 MB
    log_file_backup_count: int = 5

    @property
    def resolved_log_file_path(self) -> Path:
        """Return log file path, defaulting to data_dir/lexicard.log if not set."""
        return self.log_file_path or self.data_dir / "lexicard.log"

    @property
    def fallback_media_dir(self) -> Path:
        return self.data_dir / "media"

    # Languages
    supported_languages: list[str] = ["en", "es"]

    # Image search (Pixabay)
    pixabay_api_key: str = ""
    image_results_per_query: int = 5

    # OpenAI (translation)
    openai_api_key: str = ""
    openai_model: str = "gpt-4.1-mini"

    # AnkiConnect
    anki_connect_url: str = "http://localhost:8765"
    anki_allowed_hosts: list[str] = ["localhost", "127.0.0.1"]
    anki_allowed_port: int = 8765
    anki_deck: str = "Default"
    anki_note_type: str = "Basic"
    anki_media_path: Path | None = None
    anki_base_path: Path | None = None

    # Per-source timeouts in seconds
    dictionary_timeout: float = 10.0
    wiktionary_timeout: float = 10.0
    sentence_timeout: float = 8.0
    browser_timeout: float = 20.0
    translation_timeout: float = 15.0
    image_timeout: float = 10.0
    search_timeout: float = 60.0

    # Headless browser
    browser_enabled: bool = True
    browser_max_pages: int = 2

    # Example acceptance
    example_min_words: int = 4
    example_max_words: int = 20
    primary_example_min_words: int = 4
    clean_min_length: int = 3
    cutoff_markers: list[str] = DEFAULT_CUTOFF_MARKERS

    # HTTP server
    host: str = "0.0.0.0"  # noqa: S104  # nosec B104 - Development server
    port: int = 3001
    cors_origins: list[str] = ["*"]
    max_upload_size_mb: int = 10  # Maximum upload size in MB


settings = Settings()
