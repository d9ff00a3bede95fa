"""LLM Base Classes and Shared Code"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from easy_commits.config import Config


@dataclass
class LLMResponse:
    """Structured response from any LLM provider."""
    content: str
    model: str = ""
    tokens_used: int = 0


class LLMError(Exception):
    """Raised when a provider answers with something other than a usable message."""
    pass


class LLMClient(ABC):
    """Abstract base for LLM clients.

    Each client sends exactly one request per ``generate`` call. Connection
    and timeout errors from the underlying library are not wrapped.
    """

    @classmethod
    @abstractmethod
    def from_config(cls, config: Config) -> 'LLMClient':
        pass

    @abstractmethod
    def generate(self, prompt: str) -> LLMResponse:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass
