"""Application configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_MODEL = "gemini-2.5-flash"


def _first_env(*names: str) -> Optional[str]:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    base_url: Optional[str] = GEMINI_OPENAI_BASE_URL
    timeout: float = 60.0
    temperature: float = 0.3
    secret_key: Optional[str] = None
    log_level: str = "INFO"
    max_sessions: int = 256
    report_title: str = "mainsim CMMS HealthCheck"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv()
        return cls(
            api_key=_first_env("LLM_API_KEY", "GEMINI_API_KEY", "OPENAI_API_KEY"),
            model=os.getenv("LLM_MODEL", DEFAULT_MODEL),
            base_url=os.getenv("LLM_BASE_URL", GEMINI_OPENAI_BASE_URL) or None,
            timeout=float(os.getenv("LLM_TIMEOUT", "60")),
            temperature=float(os.getenv("LLM_TEMPERATURE", "0.3")),
            secret_key=os.getenv("SECRET_KEY"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            max_sessions=int(os.getenv("MAX_SESSIONS", "256")),
            report_title=os.getenv("REPORT_TITLE", cls.report_title),
        )
