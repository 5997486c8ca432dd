import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv


DEFAULT_MODEL = "meta-llama/llama-3.2-3b-instruct:free"
DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"


def _csv_env(name: str, default: str = "") -> List[str]:
    val = os.getenv(name, default)
    return [x.strip() for x in val.split(",") if x.strip()] if val else []


def _bool_env(name: str, default: bool) -> bool:
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class AIConfig:
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    temperature: float = 0.7
    max_tokens: int = 500
    timeout_seconds: float = 30.0
    site_url: str = "http://localhost:3000"
    app_title: str = "CareerSync Pro"


@dataclass
class Settings:
    database_url: str = "sqlite:///./careersync.db"
    ai: AIConfig = field(default_factory=AIConfig)
    analysis_fallback_enabled: bool = True
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Build settings from the process environment (and a local .env file)."""
    load_dotenv()
    ai = AIConfig(
        api_key=os.getenv("OPENROUTER_API_KEY") or os.getenv("OPENAI_API_KEY"),
        model=os.getenv("AI_MODEL", DEFAULT_MODEL),
        base_url=os.getenv("AI_BASE_URL", DEFAULT_BASE_URL),
        timeout_seconds=float(os.getenv("AI_TIMEOUT_SECONDS", "30")),
        site_url=os.getenv("SITE_URL", "http://localhost:3000"),
    )
    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///./careersync.db"),
        ai=ai,
        analysis_fallback_enabled=_bool_env("ANALYSIS_FALLBACK_ENABLED", True),
        cors_origins=_csv_env("CORS_ORIGINS", "*"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger("careersync")
    root.setLevel(level.upper())
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        root.addHandler(handler)
