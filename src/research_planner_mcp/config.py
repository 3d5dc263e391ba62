"""Server configuration via environment variables."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field, field_validator

VALID_THINKING_LEVELS = {"minimal", "low", "medium", "high"}


def _resolve_tracing_enabled(flag_value: str, tracking_uri: str) -> bool:
    """Derive tracing_enabled from env vars.

    - ``PLANNER_TRACING_ENABLED=false`` → always disabled (explicit opt-out).
    - Otherwise enabled when ``MLFLOW_TRACKING_URI`` is non-empty.
    """
    if flag_value.lower() == "false":
        return False
    return bool(tracking_uri)


class ServerConfig(BaseModel):
    """Runtime configuration resolved from environment."""

    gemini_api_key: str = Field(default="")
    default_model: str = Field(default="gemini-3-flash-preview")
    default_thinking_level: str = Field(default="low")
    default_temperature: float = Field(default=0.3)
    tavily_api_key: str = Field(default="")
    youtube_api_key: str = Field(default="")
    wikipedia_lang: str = Field(default="en")
    default_max_words: int = Field(default=300)
    tool_timeout_seconds: float = Field(default=30.0)
    http_timeout_seconds: float = Field(default=15.0)
    web_max_results: int = Field(default=3)
    youtube_max_videos: int = Field(default=3)
    rag_top_k: int = Field(default=3)
    retry_max_attempts: int = Field(default=3)
    retry_base_delay: float = Field(default=1.0)
    retry_max_delay: float = Field(default=30.0)
    tracing_enabled: bool = Field(default=False)
    mlflow_tracking_uri: str = Field(default="")
    mlflow_experiment_name: str = Field(default="research-planner-mcp")

    @field_validator("default_thinking_level")
    @classmethod
    def validate_thinking_level(cls, value: str) -> str:
        level = value.strip().lower()
        if level not in VALID_THINKING_LEVELS:
            allowed = ", ".join(sorted(VALID_THINKING_LEVELS))
            raise ValueError(f"Invalid thinking level '{value}'. Allowed: {allowed}")
        return level

    @field_validator(
        "default_max_words", "web_max_results", "youtube_max_videos", "rag_top_k", "retry_max_attempts",
    )
    @classmethod
    def validate_positive_ints(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Configuration values must be >= 1")
        return value

    @field_validator("tool_timeout_seconds", "http_timeout_seconds", "retry_base_delay", "retry_max_delay")
    @classmethod
    def validate_positive_durations(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Timeouts and delays must be > 0")
        return value

    @field_validator("wikipedia_lang")
    @classmethod
    def validate_wikipedia_lang(cls, value: str) -> str:
        lang = value.strip().lower()
        if not lang.replace("-", "").isalpha():
            raise ValueError(f"Invalid Wikipedia language code '{value}'")
        return lang

    @classmethod
    def from_env(cls) -> ServerConfig:
        """Build config from environment variables."""
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            default_model=os.getenv("GEMINI_MODEL", "gemini-3-flash-preview"),
            default_thinking_level=os.getenv("GEMINI_THINKING_LEVEL", "low"),
            default_temperature=float(os.getenv("GEMINI_TEMPERATURE", "0.3")),
            tavily_api_key=os.getenv("TAVILY_API_KEY", ""),
            youtube_api_key=os.getenv("YOUTUBE_API_KEY", ""),
            wikipedia_lang=os.getenv("WIKIPEDIA_LANG", "en"),
            default_max_words=int(os.getenv("PLANNER_MAX_WORDS", "300")),
            tool_timeout_seconds=float(os.getenv("PLANNER_TOOL_TIMEOUT", "30.0")),
            http_timeout_seconds=float(os.getenv("PLANNER_HTTP_TIMEOUT", "15.0")),
            web_max_results=int(os.getenv("PLANNER_WEB_RESULTS", "3")),
            youtube_max_videos=int(os.getenv("PLANNER_YOUTUBE_VIDEOS", "3")),
            rag_top_k=int(os.getenv("PLANNER_RAG_TOP_K", "3")),
            retry_max_attempts=int(os.getenv("PLANNER_RETRY_MAX_ATTEMPTS", "3")),
            retry_base_delay=float(os.getenv("PLANNER_RETRY_BASE_DELAY", "1.0")),
            retry_max_delay=float(os.getenv("PLANNER_RETRY_MAX_DELAY", "30.0")),
            tracing_enabled=_resolve_tracing_enabled(
                os.getenv("PLANNER_TRACING_ENABLED", ""),
                os.getenv("MLFLOW_TRACKING_URI", ""),
            ),
            mlflow_tracking_uri=os.getenv("MLFLOW_TRACKING_URI", ""),
            mlflow_experiment_name=os.getenv("MLFLOW_EXPERIMENT_NAME", "research-planner-mcp"),
        )


# Singleton — initialised on first access.
_config: ServerConfig | None = None


def get_config() -> ServerConfig:
    """Return the global config singleton, creating it on first access.

    Loads ``~/.config/research-planner-mcp/.env`` before reading env vars.
    Process environment always takes precedence over the config file.
    """
    global _config
    if _config is None:
        import logging

        from .dotenv import load_dotenv

        injected = load_dotenv()
        if injected:
            logger = logging.getLogger(__name__)
            logger.info(
                "Loaded %d var(s) from config: %s",
                len(injected),
                ", ".join(injected.keys()),
            )
        _config = ServerConfig.from_env()
    return _config


def update_config(**overrides: object) -> ServerConfig:
    """Patch the live config (used by the ``infra_configure`` tool)."""
    global _config
    cfg = get_config()
    data = cfg.model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    _config = ServerConfig(**data)
    return _config
