from unittest.mock import patch

import pytest
import requests

from lexi.exceptions import ConfigError, ProviderError, TransportError, UnsupportedProviderError
from lexi.llm_client import (
    AnthropicClient,
    AzureOpenAIClient,
    OllamaClient,
    OpenAIClient,
    build_llm_client,
)
from lexi.models import Configuration

OPENAI_REPLY = {"choices": [{"message": {"role": "assistant", "content": "print(1)"}}]}


def test_openai_request_shape(make_response) -> None:
    config = Configuration(api_key="sk-test", temperature=0.3, max_tokens=99)
    with patch("lexi.llm_client.requests.post", return_value=make_response(200, OPENAI_REPLY)) as post:
        text = OpenAIClient(config).complete("SYS", "USER")

    assert text == "print(1)"
    url = post.call_args.args[0]
    kwargs = post.call_args.kwargs
    assert url == "https://api.openai.com/v1/chat/completions"
    assert kwargs["headers"]["Authorization"] == "Bearer sk-test"
    assert kwargs["json"] == {
        "model": "gpt-4",
        "messages": [
            {"role": "system", "content": "SYS"},
            {"role": "user", "content": "USER"},
        ],
        "temperature": 0.3,
        "max_tokens": 99,
    }


def test_openai_base_url_override() -> None:
    client = OpenAIClient(Configuration(api_key="k", base_url="https://gateway.example/v1/"))
    assert client.endpoint() == "https://gateway.example/v1/chat/completions"


def test_anthropic_request_shape(make_response) -> None:
    config = Configuration(provider="anthropic", model="claude-3", api_key="key", max_tokens=10)
    reply = {"content": [{"type": "text", "text": "SELECT 1;"}]}
    with patch("lexi.llm_client.requests.post", return_value=make_response(200, reply)) as post:
        text = AnthropicClient(config).complete("SYS", "USER")

    assert text == "SELECT 1;"
    assert post.call_args.args[0] == "https://api.anthropic.com/v1/messages"
    headers = post.call_args.kwargs["headers"]
    assert headers["x-api-key"] == "key"
    assert headers["anthropic-version"] == "2023-06-01"
    assert post.call_args.kwargs["json"] == {
        "model": "claude-3",
        "max_tokens": 10,
        "messages": [{"role": "user", "content": "SYS\n\nUSER"}],
    }


def test_ollama_request_shape(make_response) -> None:
    config = Configuration(provider="local", model="codellama")
    with patch("lexi.llm_client.requests.post", return_value=make_response(200, {"response": "x = 1"})) as post:
        text = OllamaClient(config).complete("SYS", "USER")

    assert text == "x = 1"
    assert post.call_args.args[0] == "http://localhost:11434/api/generate"
    assert "Authorization" not in post.call_args.kwargs["headers"]
    assert post.call_args.kwargs["json"] == {
        "model": "codellama",
        "prompt": "SYS\n\nUSER",
        "stream": False,
    }


def test_ollama_custom_base_url() -> None:
    client = OllamaClient(Configuration(provider="local", base_url="http://gpu-box:11434/"))
    assert client.endpoint() == "http://gpu-box:11434/api/generate"


def test_azure_request_shape(make_response) -> None:
    config = Configuration(
        provider="azure", model="my-deploy", api_key="az", base_url="https://res.openai.azure.com"
    )
    with patch("lexi.llm_client.requests.post", return_value=make_response(200, OPENAI_REPLY)) as post:
        text = AzureOpenAIClient(config).complete("SYS", "USER")

    assert text == "print(1)"
    assert post.call_args.args[0] == (
        "https://res.openai.azure.com/openai/deployments/my-deploy/chat/completions"
        "?api-version=2023-12-01-preview"
    )
    headers = post.call_args.kwargs["headers"]
    assert headers["api-key"] == "az"
    assert "Authorization" not in headers
    assert post.call_args.kwargs["json"]["messages"][0]["role"] == "system"


def test_non_success_status_raises_provider_error(make_response) -> None:
    response = make_response(401, text='{"error": "bad key"}')
    with patch("lexi.llm_client.requests.post", return_value=response):
        with pytest.raises(ProviderError) as excinfo:
            OpenAIClient(Configuration(api_key="k")).complete("s", "u")

    assert excinfo.value.status == 401
    assert excinfo.value.body == '{"error": "bad key"}'
    assert "bad key" in str(excinfo.value)


def test_unexpected_body_raises_provider_error(make_response) -> None:
    with patch("lexi.llm_client.requests.post", return_value=make_response(200, {"choices": []})):
        with pytest.raises(ProviderError):
            OpenAIClient(Configuration(api_key="k")).complete("s", "u")

    with patch("lexi.llm_client.requests.post", return_value=make_response(200, ValueError("no json"))):
        with pytest.raises(ProviderError):
            OllamaClient(Configuration(provider="local")).complete("s", "u")


def test_network_failure_raises_transport_error() -> None:
    with patch("lexi.llm_client.requests.post", side_effect=requests.ConnectionError("refused")):
        with pytest.raises(TransportError):
            OllamaClient(Configuration(provider="local")).complete("s", "u")


@pytest.mark.parametrize(
    "provider, cls",
    [("openai", OpenAIClient), ("anthropic", AnthropicClient), ("local", OllamaClient), ("azure", AzureOpenAIClient)],
)
def test_build_llm_client_dispatch(provider: str, cls: type) -> None:
    config = Configuration(provider=provider, api_key="k", base_url="https://res.example")
    assert type(build_llm_client(config)) is cls


@pytest.mark.parametrize("provider", ["other", "gemini", ""])
def test_unsupported_provider_fails_before_network(provider: str) -> None:
    with patch("lexi.llm_client.requests.post") as post:
        with pytest.raises(UnsupportedProviderError):
            build_llm_client(Configuration(provider=provider, api_key="k"))
    post.assert_not_called()


def test_hosted_provider_requires_api_key() -> None:
    with pytest.raises(ConfigError, match="API key"):
        build_llm_client(Configuration(provider="openai"))
    with pytest.raises(ConfigError, match="API key"):
        build_llm_client(Configuration(provider="anthropic"))
    assert isinstance(build_llm_client(Configuration(provider="local")), OllamaClient)


def test_azure_requires_base_url() -> None:
    with pytest.raises(ConfigError, match="base_url"):
        build_llm_client(Configuration(provider="azure", api_key="k"))
