"""
File: postrev/settings.py
Path: postrev/settings.py
Global configuration loaded via environment variables (prefix POSTREV_).
Use a `.env` file or export vars before running.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # INPUT
    posts_dir: str = "posts"
    file_glob: str = "*.md"
    encoding: str = "utf-8"
    # DETECTION
    similarity_threshold: float = Field(0.85, ge=0.0, le=1.0)
    similarity_metric: str = Field("edit", pattern="^(edit|token)$")
    candidate_mode: str = Field("all", pattern="^(all|bm25)$")
    candidate_k: int = Field(10, ge=1)
    max_workers: int = Field(1, ge=1)
    # STORE
    store_backend: str = Field("memory", pattern="^(memory|sql)$")
    sqlite_url: str = "sqlite:///./data/postrev.db"
    # REPORT
    include_diffs: bool = False
    report_path: str | None = None  # None -> stdout

    model_config = SettingsConfigDict(
        env_prefix="POSTREV_", env_file=".env", env_file_encoding="utf-8"
    )


settings = Settings()
