"""LLM client abstractions, one adapter per provider envelope."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict

import requests

from .exceptions import ConfigError, ProviderError, TransportError, UnsupportedProviderError
from .models import Configuration

logger = logging.getLogger(__name__)

OPENAI_BASE_URL = "https://api.openai.com"
ANTHROPIC_BASE_URL = "https://api.anthropic.com"
ANTHROPIC_VERSION = "2023-06-01"
OLLAMA_BASE_URL = "http://localhost:11434"
AZURE_API_VERSION = "2023-12-01-preview"
REQUEST_TIMEOUT = 120


def _join_prompts(system_prompt: str, user_prompt: str) -> str:
    return f"{system_prompt}\n\n{user_prompt}"


class LLMClient(ABC):
    """Base interface for text generation.

    Subclasses describe the endpoint, headers and payload; the POST itself and
    the mapping of failures onto ``ProviderError``/``TransportError`` live here.
    """

    name = "LLM"

    def __init__(self, config: Configuration):
        self.config = config

    @abstractmethod
    def endpoint(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def headers(self) -> Dict[str, str]:
        raise NotImplementedError

    @abstractmethod
    def build_payload(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def extract_text(self, data: Any) -> str:
        raise NotImplementedError

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        url = self.endpoint()
        payload = self.build_payload(system_prompt, user_prompt)
        logger.debug("POST %s (provider=%s, model=%s)", url, self.config.provider, self.config.model)

        try:
            response = requests.post(
                url,
                headers={"Content-Type": "application/json", **self.headers()},
                json=payload,
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as exc:
            raise TransportError(f"{self.name} request failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise ProviderError(self.name, response.status_code, response.text)

        try:
            data = response.json()
            text = self.extract_text(data)
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise ProviderError(self.name, response.status_code, response.text) from exc

        if not isinstance(text, str):
            raise ProviderError(self.name, response.status_code, response.text)
        logger.debug("%s returned %d characters", self.name, len(text))
        return text


class OpenAIClient(LLMClient):
    """OpenAI chat-completions API (or any compatible gateway via base_url)."""

    name = "OpenAI"

    def endpoint(self) -> str:
        base = (self.config.base_url or OPENAI_BASE_URL).rstrip("/")
        if base.endswith("/v1"):
            return f"{base}/chat/completions"
        return f"{base}/v1/chat/completions"

    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.config.api_key}"}

    def build_payload(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        return {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
        }

    def extract_text(self, data: Any) -> str:
        return data["choices"][0]["message"]["content"]


class AzureOpenAIClient(OpenAIClient):
    """Azure OpenAI deployment; the model name is the deployment name."""

    name = "Azure"

    def endpoint(self) -> str:
        base = self.config.base_url.rstrip("/")
        return (
            f"{base}/openai/deployments/{self.config.model}/chat/completions"
            f"?api-version={AZURE_API_VERSION}"
        )

    def headers(self) -> Dict[str, str]:
        return {"api-key": self.config.api_key}


class AnthropicClient(LLMClient):
    """Anthropic messages API; system and user prompts go in one user turn."""

    name = "Anthropic"

    def endpoint(self) -> str:
        base = (self.config.base_url or ANTHROPIC_BASE_URL).rstrip("/")
        if base.endswith("/v1"):
            return f"{base}/messages"
        return f"{base}/v1/messages"

    def headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self.config.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
        }

    def build_payload(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        return {
            "model": self.config.model,
            "max_tokens": self.config.max_tokens,
            "messages": [
                {"role": "user", "content": _join_prompts(system_prompt, user_prompt)},
            ],
        }

    def extract_text(self, data: Any) -> str:
        return data["content"][0]["text"]


class OllamaClient(LLMClient):
    """Local Ollama server, non-streaming generate endpoint."""

    name = "Ollama"

    def endpoint(self) -> str:
        base = (self.config.base_url or OLLAMA_BASE_URL).rstrip("/")
        return f"{base}/api/generate"

    def headers(self) -> Dict[str, str]:
        return {}

    def build_payload(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        return {
            "model": self.config.model,
            "prompt": _join_prompts(system_prompt, user_prompt),
            "stream": False,
        }

    def extract_text(self, data: Any) -> str:
        return data["response"]


PROVIDERS: Dict[str, Callable[[Configuration], LLMClient]] = {
    "openai": OpenAIClient,
    "anthropic": AnthropicClient,
    "local": OllamaClient,
    "azure": AzureOpenAIClient,
}

# Providers reachable without an API key.
KEYLESS_PROVIDERS = {"local"}


def build_llm_client(config: Configuration) -> LLMClient:
    """Pick the adapter for ``config.provider`` after checking required settings."""

    provider = config.provider.strip().lower()
    factory = PROVIDERS.get(provider)
    if factory is None:
        raise UnsupportedProviderError(config.provider)

    if provider not in KEYLESS_PROVIDERS and not config.api_key:
        raise ConfigError("No API key configured. Run: lexi config set api_key <your-key>")
    if provider == "azure" and not config.base_url:
        raise ConfigError(
            "Azure base_url not configured. Set: lexi config set base_url "
            "https://your-resource.openai.azure.com"
        )
    return factory(config)
