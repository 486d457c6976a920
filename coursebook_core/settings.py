from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Content tooling settings loaded from environment variables."""

    # Content location
    content_dir: Path = Path("content")
    toc_filename: str = "toc.json"

    # Logging
    log_level: str = "INFO"

    # Treat a corpus with no loadable chapters as a failed validation run
    fail_on_empty_corpus: bool = False

    model_config = {
        "env_prefix": "COURSEBOOK_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
