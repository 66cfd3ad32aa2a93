#!/usr/bin/env python3
"""
Configuration management for the GoldAI backend.

Values are read once from the environment (and an optional .env file) when
the module is imported. Factories receive the config object explicitly, so
tests can hand them a subclass with overridden attributes.
"""

import os
from decimal import Decimal
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

PROVIDERS = ("openai", "ollama")
LEDGER_BACKENDS = ("memory", "sql", "redis")


def _default_provider() -> str:
    explicit = os.getenv("LLM_PROVIDER")
    if explicit:
        return explicit.lower()
    return "openai" if os.getenv("OPENAI_API_KEY") else "ollama"


class Config:
    """Configuration class for the application."""

    # Completion provider (openai|ollama)
    LLM_PROVIDER = _default_provider()
    LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.7"))
    LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "60"))

    # Hosted API
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
    OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")
    OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")

    # Locally served model
    OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
    OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "llama3.2:3b")

    # Ledger backend (memory|sql|redis)
    LEDGER_BACKEND = os.getenv("LEDGER_BACKEND", "memory").lower()
    DATABASE_URL = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(os.path.dirname(__file__), "..", "data", "goldai.db"),
    )

    # Redis Configuration
    REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
    REDIS_PORT = int(os.getenv("REDIS_PORT", 6379))
    REDIS_DB = int(os.getenv("REDIS_DB", 0))

    # Simulated market
    GOLD_BASE_PRICE = Decimal(os.getenv("GOLD_BASE_PRICE", "10310"))
    PRICE_SPREAD = Decimal("100")

    # Demo seed
    DEFAULT_USER_ID = "default-user-id"
    DEFAULT_USERNAME = "Parag"
    DEFAULT_PASSWORD = "password123"

    @classmethod
    def validate(cls):
        """Validate that the configured provider and backend can be built."""
        problems = []

        if cls.LLM_PROVIDER not in PROVIDERS:
            problems.append(f"LLM_PROVIDER must be one of {', '.join(PROVIDERS)}")
        elif cls.LLM_PROVIDER == "openai" and not cls.OPENAI_API_KEY:
            problems.append("OPENAI_API_KEY is required for the openai provider")

        if cls.LEDGER_BACKEND not in LEDGER_BACKENDS:
            problems.append(f"LEDGER_BACKEND must be one of {', '.join(LEDGER_BACKENDS)}")

        if problems:
            raise ValueError(f"Invalid configuration: {'; '.join(problems)}")

        return True

    @classmethod
    def describe(cls) -> dict:
        """Non-secret settings, for the startup log line."""
        return {
            "provider": cls.LLM_PROVIDER,
            "model": cls.OPENAI_MODEL if cls.LLM_PROVIDER == "openai" else cls.OLLAMA_MODEL,
            "ledger": cls.LEDGER_BACKEND,
            "base_price": str(cls.GOLD_BASE_PRICE),
            "api_key_set": bool(cls.OPENAI_API_KEY),
        }
