"""CLI Commands"""

from typing import Callable

from easy_commits.config import (
    Config,
    ConfigError,
    ConfigManager,
    DEFAULT_BASE_URL,
    DEFAULT_MODELS,
    VALID_PROVIDERS,
    mask_secret,
)
from easy_commits.output import bold, dim, info, print_success, print_error

PROVIDER_CHOICES = ['openai', 'anthropic', 'ollama']


def _ask(read_input: Callable[[str], str], prompt: str, default: str | None = None) -> str:
    """Read one line; blank answers repeat the question unless a default exists."""
    while True:
        answer = read_input(prompt).strip()
        if answer:
            return answer
        if default is not None:
            return default


def display_config(config_manager: ConfigManager | None = None) -> int:
    """Display the saved configuration with the credential masked."""
    manager = config_manager or ConfigManager()
    try:
        config = manager.load()
    except ConfigError as e:
        print_error(str(e))
        return 1

    print(f"\n{bold('Current Configuration')}\n")
    print(f"  {dim('Loaded from:')} {manager.path}\n")
    print(f"    provider:  {info(config.provider)}")
    print(f"    model:     {info(config.model or '(not set)')}")
    if config.is_local:
        print(f"    base_url:  {info(config.base_url)}")
    else:
        print(f"    api_key:   {info(mask_secret(config.api_key))}")
    print(f"\n  {dim('Run')} easy-commits config {dim('to change it')}\n")
    return 0


def run_config(config_manager: ConfigManager | None = None, read_input: Callable[[str], str] = input) -> int:
    """Interactive setup: provider, then credential or local address, then model."""
    manager = config_manager or ConfigManager()

    try:
        while True:
            provider = read_input(f"Select AI provider ({'/'.join(PROVIDER_CHOICES)}): ").strip().lower()
            if provider in VALID_PROVIDERS:
                break
            print(dim(f"  Choose one of: {', '.join(PROVIDER_CHOICES)}"))

        if provider == 'ollama':
            base_url = _ask(read_input, f"Enter Ollama base URL (default: {DEFAULT_BASE_URL}): ", DEFAULT_BASE_URL)
            model = _ask(read_input, "Enter model name (e.g., llama2, codellama): ")
            config = Config(provider=provider, model=model, base_url=base_url)
        else:
            api_key = _ask(read_input, "Enter API key: ")
            default_model = DEFAULT_MODELS[provider]
            model = _ask(read_input, f"Model (Enter for {default_model}): ", default_model)
            config = Config(provider=provider, model=model, api_key=api_key)
    except (KeyboardInterrupt, EOFError):
        print()
        print(dim("Cancelled."))
        return 1

    try:
        path = manager.save(config)
    except (ConfigError, OSError) as e:
        print_error(f"Error writing config file: {e}")
        return 1

    print_success(f"Configuration saved to {path}")
    return 0
