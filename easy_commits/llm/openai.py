"""OpenAI Chat Completions Client"""

from openai import OpenAI

from easy_commits.config import Config, DEFAULT_MODELS
from easy_commits.llm.base import LLMClient, LLMResponse, LLMError


class OpenAIClient(LLMClient):
    """Hosted chat-completions backend. Authenticates with a bearer token."""

    DEFAULT_MODEL = DEFAULT_MODELS["openai"]
    TIMEOUT = 30.0

    def __init__(self, api_key: str, model: str | None = None):
        self.model = model or self.DEFAULT_MODEL
        self._client = OpenAI(api_key=api_key, timeout=self.TIMEOUT, max_retries=0)

    @classmethod
    def from_config(cls, config: Config) -> 'OpenAIClient':
        return cls(api_key=config.api_key, model=config.model)

    @property
    def name(self) -> str:
        return f"OpenAI ({self.model})"

    def generate(self, prompt: str) -> LLMResponse:
        response = self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
        )

        if not response.choices:
            raise LLMError("No response from OpenAI")

        content = response.choices[0].message.content
        if not isinstance(content, str):
            raise LLMError("No message content in OpenAI response")

        usage = getattr(response, "usage", None)
        return LLMResponse(
            content=content.strip(),
            model=self.model,
            tokens_used=getattr(usage, "total_tokens", 0) or 0,
        )
