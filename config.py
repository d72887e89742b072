# config.py
import os
from dataclasses import dataclass
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _env_str(name: str, default: str = "") -> str:
    return (os.getenv(name, default) or "").strip()


def _env_int(name: str, default: int) -> int:
    raw = _env_str(name)
    return int(raw) if raw else default


def _env_float(name: str, default: float) -> float:
    raw = _env_str(name)
    return float(raw) if raw else default


# --- CONFIGURACIÓN GENERAL ---
DATABASE_URL = _env_str("DATABASE_URL", "sqlite:///./gastos.db")
APP_ENV = _env_str("APP_ENV", "production").lower()

CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in _env_str("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",")
    if origin.strip()
]


def is_development() -> bool:
    return APP_ENV in ("dev", "development")


# --- CONFIGURACIÓN DE AZURE DOCUMENT INTELLIGENCE (OCR) ---
@dataclass(frozen=True)
class OcrSettings:
    endpoint: str
    api_key: str
    model: str = "prebuilt-read"
    api_version: str = "2024-11-30"
    timeout_seconds: int = 30
    max_retry_attempts: int = 3
    retry_delay_ms: int = 1000
    poll_interval_seconds: float = 1.0

    @classmethod
    def from_env(cls) -> "OcrSettings":
        return cls(
            endpoint=_env_str("AZURE_DI_ENDPOINT"),
            api_key=_env_str("AZURE_DI_KEY"),
            model=_env_str("AZURE_DI_MODEL", "prebuilt-read"),
            api_version=_env_str("AZURE_DI_API_VERSION", "2024-11-30"),
            timeout_seconds=_env_int("AZURE_DI_TIMEOUT", 30),
            max_retry_attempts=_env_int("AZURE_DI_MAX_RETRIES", 3),
            retry_delay_ms=_env_int("AZURE_DI_RETRY_DELAY_MS", 1000),
            poll_interval_seconds=_env_float("AZURE_DI_POLL_INTERVAL", 1.0),
        )

    def is_valid(self) -> bool:
        """Verifica que la configuración esté completa (no hace llamadas de red)."""
        return bool(
            self.endpoint
            and self.api_key
            and self.model
            and self.timeout_seconds > 0
            and self.max_retry_attempts > 0
        )

    def __repr__(self) -> str:
        return (
            f"OcrSettings(endpoint={self.endpoint!r}, api_key='***HIDDEN***', model={self.model!r}, "
            f"timeout_seconds={self.timeout_seconds}, max_retry_attempts={self.max_retry_attempts}, "
            f"retry_delay_ms={self.retry_delay_ms})"
        )


# --- CONFIGURACIÓN DE HUGGING FACE (LLM) ---
@dataclass(frozen=True)
class LlmSettings:
    token: str
    api_url: str = "https://router.huggingface.co/v1/chat/completions"
    model: str = "meta-llama/Llama-3.1-8B-Instruct:cerebras"
    max_tokens: int = 1000
    temperature: float = 0.3
    timeout_seconds: int = 30
    max_retry_attempts: int = 3
    retry_delay_ms: int = 1000

    @classmethod
    def from_env(cls) -> "LlmSettings":
        return cls(
            token=_env_str("HF_TOKEN"),
            api_url=_env_str("HF_API_URL", "https://router.huggingface.co/v1/chat/completions"),
            model=_env_str("HF_MODEL", "meta-llama/Llama-3.1-8B-Instruct:cerebras"),
            max_tokens=_env_int("HF_MAX_TOKENS", 1000),
            temperature=_env_float("HF_TEMPERATURE", 0.3),
            timeout_seconds=_env_int("HF_TIMEOUT", 30),
            max_retry_attempts=_env_int("HF_MAX_RETRIES", 3),
            retry_delay_ms=_env_int("HF_RETRY_DELAY_MS", 1000),
        )

    def is_valid(self) -> bool:
        return bool(
            self.token
            and self.api_url
            and self.model
            and self.max_tokens > 0
            and 0.0 <= self.temperature <= 1.0
            and self.timeout_seconds > 0
            and self.max_retry_attempts > 0
        )

    def __repr__(self) -> str:
        return (
            f"LlmSettings(token='***HIDDEN***', api_url={self.api_url!r}, model={self.model!r}, "
            f"max_tokens={self.max_tokens}, temperature={self.temperature}, "
            f"timeout_seconds={self.timeout_seconds}, max_retry_attempts={self.max_retry_attempts}, "
            f"retry_delay_ms={self.retry_delay_ms})"
        )


# --- CONFIGURACIÓN DE OPENKM (ARCHIVO DOCUMENTAL) ---
@dataclass(frozen=True)
class ArchiveSettings:
    url: str
    username: str
    password: str
    timeout_seconds: int = 30

    @classmethod
    def from_env(cls) -> "ArchiveSettings":
        return cls(
            url=_env_str("OPENKM_URL"),
            username=_env_str("OPENKM_USERNAME"),
            password=_env_str("OPENKM_PASSWORD"),
            timeout_seconds=_env_int("OPENKM_TIMEOUT", 30),
        )

    def is_valid(self) -> bool:
        return bool(self.url and self.username and self.password and self.timeout_seconds > 0)

    def __repr__(self) -> str:
        return f"ArchiveSettings(url={self.url!r}, username={self.username!r}, password='***HIDDEN***')"
