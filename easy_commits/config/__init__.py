"""Configuration Management Package"""

import json
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

# Provider names as stored in the config file
HOSTED_PROVIDERS = {"openai", "anthropic"}
LOCAL_PROVIDERS = {"ollama"}
VALID_PROVIDERS = HOSTED_PROVIDERS | LOCAL_PROVIDERS

DEFAULT_MODELS = {
    "openai": "gpt-3.5-turbo",
    "anthropic": "claude-3-haiku-20240307",
}
DEFAULT_BASE_URL = "http://localhost:11434"

SETUP_HINT = "Run 'easy-commits config' to set up your AI provider"


class ConfigError(Exception):
    """Raised when the configuration is missing, unreadable or incomplete."""
    pass


@dataclass
class Config:
    """Settings for the text-generation backend."""
    provider: str
    model: str
    api_key: Optional[str] = None
    base_url: Optional[str] = None

    @property
    def is_local(self) -> bool:
        return self.provider in LOCAL_PROVIDERS

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def validate(self) -> list[str]:
        """Check field shapes and return a list of problems.

        A local provider without a base_url gets the default address.
        """
        problems = []

        if not isinstance(self.model, str):
            problems.append("'model' must be a string")
        if not isinstance(self.provider, str) or not self.provider:
            problems.append("'provider' must be a non-empty string")
            return problems

        for field in ("api_key", "base_url"):
            value = getattr(self, field)
            if value is not None and not isinstance(value, str):
                problems.append(f"'{field}' must be a string")

        if self.provider in HOSTED_PROVIDERS and not self.api_key:
            problems.append(f"'api_key' is required for provider '{self.provider}'")

        if self.is_local and not self.base_url:
            self.base_url = DEFAULT_BASE_URL

        return problems

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        filtered.setdefault("provider", "")
        filtered.setdefault("model", "")
        return cls(**filtered)


def mask_secret(secret: Optional[str]) -> str:
    """Hide all but the last four characters of a credential."""
    if not secret:
        return "(not set)"
    if len(secret) <= 4:
        return "*" * len(secret)
    return "*" * (len(secret) - 4) + secret[-4:]


class ConfigManager:
    """Loads and saves the single settings file in the user's home directory."""

    CONFIG_FILENAME = ".easy-commits-config.json"

    def __init__(self, path: Optional[Path] = None):
        self._path = path

    @property
    def path(self) -> Path:
        if self._path is None:
            try:
                home = Path.home()
            except RuntimeError as e:
                raise ConfigError(f"Could not determine home directory: {e}")
            self._path = home / self.CONFIG_FILENAME
        return self._path

    def load(self) -> Config:
        path = self.path
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            raise ConfigError(f"No configuration found at {path}.\n{SETUP_HINT}")
        except json.JSONDecodeError as e:
            raise ConfigError(f"Could not parse {path}: {e}\n{SETUP_HINT}")
        except OSError as e:
            raise ConfigError(f"Could not read {path}: {e}\n{SETUP_HINT}")

        if not isinstance(data, dict):
            raise ConfigError(f"Could not parse {path}: expected a JSON object\n{SETUP_HINT}")

        config = Config.from_dict(data)
        problems = config.validate()
        if problems:
            raise ConfigError(f"Invalid configuration in {path}: {'; '.join(problems)}\n{SETUP_HINT}")
        return config

    def save(self, config: Config) -> Path:
        """Overwrite the settings file; only the owner may read or write it."""
        path = self.path
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(), f, indent=2)
        os.chmod(path, 0o600)
        return path


__all__ = [
    "Config",
    "ConfigError",
    "ConfigManager",
    "mask_secret",
    "VALID_PROVIDERS",
    "HOSTED_PROVIDERS",
    "LOCAL_PROVIDERS",
    "DEFAULT_MODELS",
    "DEFAULT_BASE_URL",
    "SETUP_HINT",
]
