#!/usr/bin/env python3
"""
Completion providers for the GoldAI assistant.

Two interchangeable backends turn a prompt into text:
- openai: hosted OpenAI-compatible chat completions API
- ollama: a locally served model behind Ollama's /api/generate

The provider is picked once at process start by ``create_provider`` and
handed to the intent classifier and the response generator.
"""

from abc import ABC, abstractmethod

import requests

from ..utils.logger import get_logger
from .config import Config

logger = get_logger()


class CompletionError(Exception):
    """The provider could not produce a completion."""


class CompletionProvider(ABC):
    name: str = "base"

    @abstractmethod
    def complete(self, prompt: str) -> str:
        """Return the model's text for ``prompt``."""
        ...

    def _post(self, url: str, payload: dict, headers: dict = None) -> dict:
        try:
            response = requests.post(url, json=payload, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            status = getattr(getattr(e, "response", None), "status_code", None)
            logger.warning("[%s] completion request failed (status=%s): %s", self.name, status, e)
            raise CompletionError(f"{self.name} request failed") from e
        except ValueError as e:
            raise CompletionError(f"{self.name} returned a non-JSON body") from e


class OpenAIProvider(CompletionProvider):
    """Hosted chat-completions API."""

    name = "openai"

    def __init__(self, api_key: str, model: str = "gpt-3.5-turbo",
                 base_url: str = "https://api.openai.com/v1",
                 temperature: float = 0.7, timeout: float = 60):
        if not api_key:
            raise ValueError("OpenAI API key is required")
        self.api_key = api_key
        self.model = model
        self.api_base_url = f"{base_url.rstrip('/')}/chat/completions"
        self.temperature = temperature
        self.timeout = timeout

    def complete(self, prompt: str) -> str:
        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
        }
        logger.debug("[openai] model=%s prompt_length=%d", self.model, len(prompt))
        data = self._post(self.api_base_url, payload, headers=headers)
        try:
            return data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as e:
            raise CompletionError("Unexpected openai response structure") from e


class OllamaProvider(CompletionProvider):
    """Model served locally by Ollama."""

    name = "ollama"

    def __init__(self, base_url: str = "http://localhost:11434", model: str = "llama3.2:3b",
                 temperature: float = 0.7, timeout: float = 60):
        self.model = model
        self.api_base_url = f"{base_url.rstrip('/')}/api/generate"
        self.temperature = temperature
        self.timeout = timeout

    def complete(self, prompt: str) -> str:
        payload = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {"temperature": self.temperature},
        }
        logger.debug("[ollama] model=%s prompt_length=%d", self.model, len(prompt))
        data = self._post(self.api_base_url, payload)
        try:
            return data["response"] or ""
        except (KeyError, TypeError) as e:
            raise CompletionError("Unexpected ollama response structure") from e


def create_provider(config=Config) -> CompletionProvider:
    """Build the provider named by ``config.LLM_PROVIDER``."""
    if config.LLM_PROVIDER == "openai":
        provider = OpenAIProvider(
            api_key=config.OPENAI_API_KEY,
            model=config.OPENAI_MODEL,
            base_url=config.OPENAI_BASE_URL,
            temperature=config.LLM_TEMPERATURE,
            timeout=config.LLM_TIMEOUT,
        )
    elif config.LLM_PROVIDER == "ollama":
        provider = OllamaProvider(
            base_url=config.OLLAMA_BASE_URL,
            model=config.OLLAMA_MODEL,
            temperature=config.LLM_TEMPERATURE,
            timeout=config.LLM_TIMEOUT,
        )
    else:
        raise ValueError(f"Unknown LLM provider: {config.LLM_PROVIDER}")
    logger.info("GoldAI initialized with %s (model=%s)", provider.name, provider.model)
    return provider
