"""Application settings loaded from environment variables via pydantic-settings.

Settings are read from two sources (in priority order):

  1. **Environment variables** -- e.g. ``ANTHROPIC_API_KEY=sk-ant-...``
  2. **.env file** -- key=value lines in the working directory ``.env``

Field ``anthropic_api_key`` maps to env var ``ANTHROPIC_API_KEY``; defaults
apply when neither source sets a value.  The ``.env`` file is never
committed.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

LLMBackend = Literal["claude", "openai", "gemini"]


class Settings(BaseSettings):
    """auto-minutes settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === LLM Providers ===
    # Empty string = "not configured".  The backend is an explicit choice
    # (llm_backend / --model); a missing key for the chosen backend is a
    # configuration error rather than a silent fallback.
    llm_backend: LLMBackend = "claude"
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-20250514"
    openai_api_key: str = ""
    openai_base_url: str = ""  # Custom base URL for OpenAI-compatible APIs
    openai_model: str = "gpt-4o-mini"
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    gemini_model: str = "gemini-2.0-flash"
    generation_max_tokens: int = 4096
    generation_temperature: float = 0.3

    # === Session discovery / transcripts ===
    item_source: Literal["meetecho", "proceedings"] = "meetecho"
    http_timeout: float = 30.0
    user_agent: str = "ietf-agenda/0.1 (+https://github.com/ekr/ietf-agenda)"

    # === Storage ===
    # "file" keeps one Markdown blob per session plus manifest.json under
    # cache_dir/<meeting>/; "sqlite" keeps both in a single database file.
    storage_backend: Literal["file", "sqlite"] = "file"
    cache_dir: str = "cache"
    sqlite_path: str = "cache/auto_minutes.db"

    # === Site output ===
    site_dir: str = "site"
    collection_prefix: str = "ietf"
    collection_label: str = "IETF {collection_id}"
    page_layout: str = "minutes.njk"

    # === GitHub Pages deployment ===
    pages_repo_url: str = "git@github.com:ekr/auto-minutes.git"
    pages_branch: str = "gh-pages"
    pages_baseline_tag: str = "baseline"
    pages_workdir: str = "gh-pages-repo"

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    def get_available_llm_backends(self) -> list[str]:
        """Return the LLM backends that have a non-empty API key configured."""
        backends: list[str] = []
        if self.anthropic_api_key:
            backends.append("claude")
        if self.openai_api_key:
            backends.append("openai")
        if self.gemini_api_key:
            backends.append("gemini")
        return backends
