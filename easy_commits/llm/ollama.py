"""Ollama LLM Client for Local Models"""

import json
import urllib.error
import urllib.request

from easy_commits.config import Config, DEFAULT_BASE_URL
from easy_commits.llm.base import LLMClient, LLMResponse, LLMError


class OllamaClient(LLMClient):
    """Ollama client for local models. Requires: ollama serve"""

    DEFAULT_TIMEOUT = 60

    def __init__(self, model: str, host: str | None = None):
        self.model = model
        self.host = (host or DEFAULT_BASE_URL).rstrip('/')
        self.timeout = self.DEFAULT_TIMEOUT

    @classmethod
    def from_config(cls, config: Config) -> 'OllamaClient':
        return cls(model=config.model, host=config.base_url)

    @property
    def name(self) -> str:
        return f"Ollama ({self.model})"

    def _call_api(self, prompt: str) -> bytes:
        """Make a single API call to Ollama and return the raw body."""
        url = f"{self.host}/api/generate"
        payload = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
        }

        data = json.dumps(payload).encode('utf-8')
        req = urllib.request.Request(url, data=data, headers={"Content-Type": "application/json"}, method="POST")

        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                return response.read()
        except urllib.error.HTTPError as e:
            # Ollama reports failures as {"error": "..."} with a non-2xx status
            try:
                detail = json.loads(e.read().decode('utf-8')).get("error")
            except (ValueError, AttributeError, OSError):
                detail = None
            if e.code == 404:
                raise LLMError(f"Model '{self.model}' not found. Run: ollama pull {self.model}")
            raise LLMError(f"Ollama error ({e.code}): {detail or e.reason}")

    def generate(self, prompt: str) -> LLMResponse:
        """Call Ollama's generate API once."""
        body = self._call_api(prompt)

        try:
            result = json.loads(body.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError):
            raise LLMError("Invalid response from Ollama")

        content = result.get("response") if isinstance(result, dict) else None
        if not isinstance(content, str):
            raise LLMError("No response from Ollama")

        return LLMResponse(
            content=content.strip(),
            model=self.model,
            tokens_used=result.get("eval_count", 0),
        )
