"""LLM Client Package"""

from easy_commits.config import Config, ConfigError
from easy_commits.llm.base import LLMClient, LLMResponse, LLMError
from easy_commits.llm.anthropic import AnthropicClient
from easy_commits.llm.ollama import OllamaClient
from easy_commits.llm.openai import OpenAIClient

PROVIDERS = {
    "openai": OpenAIClient,
    "anthropic": AnthropicClient,
    "ollama": OllamaClient,
}


def get_client(config: Config) -> LLMClient:
    """Build the client for the configured provider."""
    client_class = PROVIDERS.get(config.provider)
    if client_class is None:
        raise ConfigError(
            f"Unsupported provider: {config.provider}. "
            f"Use one of: {', '.join(sorted(PROVIDERS))}."
        )
    return client_class.from_config(config)


__all__ = [
    "LLMClient",
    "LLMResponse",
    "LLMError",
    "OpenAIClient",
    "AnthropicClient",
    "OllamaClient",
    "get_client",
    "PROVIDERS",
]
