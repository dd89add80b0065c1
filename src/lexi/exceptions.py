"""Custom exceptions for the Lexi compiler."""


class LexiError(RuntimeError):
    """Base class for domain-specific runtime errors."""


class InputError(LexiError):
    """Raised when the .lxi source file is missing, misnamed or empty."""


class ConfigError(LexiError):
    """Raised when required configuration is missing or a key/profile is invalid."""


class UnsupportedProviderError(ConfigError):
    """Raised when the configured provider has no adapter."""

    def __init__(self, provider: str):
        super().__init__(f"Unsupported provider: {provider}")
        self.provider = provider


class ProviderError(LexiError):
    """Raised when an LLM provider answers with a non-success status."""

    def __init__(self, provider: str, status: int, body: str):
        super().__init__(f"{provider} API error ({status}): {body}")
        self.provider = provider
        self.status = status
        self.body = body


class TransportError(LexiError):
    """Raised when the HTTP request cannot be sent or received."""


class PromptNotFoundError(LexiError):
    """Raised when an expected prompt template cannot be loaded."""


class ExecutionError(LexiError):
    """Raised when the generated program cannot be started."""
