"""
Code Analyzer Configuration — pydantic-settings based.

Values come from environment variables or a .env file. Structured values
(ENGINE_PLUGINS, ANALYZER_CONFIG, CORS_ORIGINS) are given as JSON.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from codeanalyzer.models.config_models import CodeAnalyzerConfig

APP_VERSION = "1.0.0"


class Settings(BaseSettings):
    """Service settings; field names map to upper-case environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    # ── Logging ──
    log_level: str = Field(default="INFO", description="Level passed to logging.basicConfig")

    # ── Engines ──
    engine_plugins: list[str] = Field(
        default=["codeanalyzer.engines.regex.plugin"],
        description="Plugin module references (dotted names or .py paths) loaded at startup",
    )
    analyzer_config: CodeAnalyzerConfig = Field(
        default_factory=CodeAnalyzerConfig,
        description="Per-engine config and per-rule severity/tag overrides",
    )

    # ── Audit ──
    audit_log_path: str = Field(default="audit.jsonl", description="JSON-lines file receiving one entry per run")

    # ── CORS ──
    cors_origins: list[str] = Field(default=["*"], description="Origins allowed by the CORS middleware")


settings = Settings()
