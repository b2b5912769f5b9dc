from __future__ import annotations
import os
from typing import Any, Optional
from langchain_google_genai import ChatGoogleGenerativeAI

from .errors import ConfigurationError
from .schemas import REPORT_RESPONSE_SCHEMA


DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TEMPERATURE = 0.2
API_KEY_NAMES = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")


def _read_secrets() -> dict[str, Any]:
    try:
        import streamlit as st  # type: ignore
        if hasattr(st, "secrets"):
            return dict(st.secrets)
    except Exception:
        # No secrets.toml outside a configured Streamlit app
        pass
    return {}


def _get_secret(name: str) -> Optional[str]:
    secrets = _read_secrets()
    return secrets.get(name) or os.getenv(name)


def get_api_key() -> str:
    for name in API_KEY_NAMES:
        key = _get_secret(name)
        if key:
            return key
    raise ConfigurationError(
        "GEMINI_API_KEY (or GOOGLE_API_KEY / API_KEY) is missing. Set it in .env or Streamlit secrets."
    )


def get_temperature() -> float:
    raw = _get_secret("GEMINI_TEMPERATURE")
    if not raw:
        return DEFAULT_TEMPERATURE
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"GEMINI_TEMPERATURE must be a number, got {raw!r}") from e


def build_gemini(temperature: float | None = None) -> ChatGoogleGenerativeAI:
    """Gemini chat model constrained to JSON output matching the report contract."""
    key = get_api_key()
    model = _get_secret("GEMINI_MODEL") or DEFAULT_MODEL
    return ChatGoogleGenerativeAI(
        model=model,
        temperature=get_temperature() if temperature is None else temperature,
        google_api_key=key,
        response_mime_type="application/json",
        response_schema=REPORT_RESPONSE_SCHEMA,
        max_retries=0,
    )


def get_llm(temperature: float | None = None) -> Any:
    return build_gemini(temperature)
