"""Anthropic Messages Client"""

from anthropic import Anthropic

from easy_commits.config import Config, DEFAULT_MODELS
from easy_commits.llm.base import LLMClient, LLMResponse, LLMError


class AnthropicClient(LLMClient):
    """Hosted messages backend. The SDK sends x-api-key and anthropic-version headers."""

    DEFAULT_MODEL = DEFAULT_MODELS["anthropic"]
    MAX_TOKENS = 150
    TIMEOUT = 30.0

    def __init__(self, api_key: str, model: str | None = None):
        self.model = model or self.DEFAULT_MODEL
        self._client = Anthropic(api_key=api_key, timeout=self.TIMEOUT, max_retries=0)

    @classmethod
    def from_config(cls, config: Config) -> 'AnthropicClient':
        return cls(api_key=config.api_key, model=config.model)

    @property
    def name(self) -> str:
        return f"Anthropic ({self.model})"

    def generate(self, prompt: str) -> LLMResponse:
        response = self._client.messages.create(
            model=self.model,
            max_tokens=self.MAX_TOKENS,
            messages=[{"role": "user", "content": prompt}],
        )

        content = getattr(response, "content", None)
        if not isinstance(content, list) or not content:
            raise LLMError("No response from Anthropic")

        text = getattr(content[0], "text", None)
        if not isinstance(text, str):
            raise LLMError("No text in Anthropic response")

        usage = getattr(response, "usage", None)
        tokens_used = (getattr(usage, "input_tokens", 0) or 0) + (getattr(usage, "output_tokens", 0) or 0)
        return LLMResponse(content=text.strip(), model=self.model, tokens_used=tokens_used)
