"""Commit Session - diff, generate, confirm, commit."""

import http.client
import time
import urllib.error
from typing import Callable

import anthropic
import openai

from easy_commits.config import Config, ConfigError, ConfigManager
from easy_commits.git import GitError, VersionControl
from easy_commits.llm import LLMClient, LLMError, LLMResponse, get_client
from easy_commits.prompts import build_prompt
from easy_commits.output import bold, dim, info, rule, colorize_commit_type, print_error, print_success

CONFIRM_ANSWERS = {'y', 'yes'}

# Transport failures are reported as-is, without retrying
GENERATION_ERRORS = (LLMError, openai.OpenAIError, anthropic.AnthropicError, urllib.error.URLError, http.client.HTTPException, OSError)


def _display_message(message: str) -> None:
    """Display commit message between horizontal rules with colored type."""
    print(bold("Generated commit message:"))
    print(rule())
    print(colorize_commit_type(message))
    print(rule())


def _confirm(read_input: Callable[[str], str]) -> bool:
    try:
        answer = read_input("Use this commit message? (y/n): ")
    except (KeyboardInterrupt, EOFError):
        print()
        return False
    return answer.strip().lower() in CONFIRM_ANSWERS


def _print_verbose_stats(prompt: str, response: LLMResponse, timings: dict) -> None:
    """Print prompt size, token usage and timings."""
    print(dim(f"  Prompt: ~{len(prompt)//4} tokens ({len(prompt)} chars)"))
    print(dim(f"  Response: {response.tokens_used} tokens"))
    print(dim(f"  Timings: git={timings['git']:.2f}s, generate={timings['generate']:.2f}s"))


def _generate(config: Config, prompt: str, client_factory: Callable[[Config], LLMClient]) -> LLMResponse:
    client = client_factory(config)
    print(f"Generating commit message using {info(client.name)}...")
    return client.generate(prompt)


def run_commit(
    vcs: VersionControl,
    context: str | None = None,
    *,
    config_manager: ConfigManager | None = None,
    client_factory: Callable[[Config], LLMClient] = get_client,
    read_input: Callable[[str], str] = input,
    verbose: bool = False,
) -> int:
    """Main commit flow.

    Returns:
        int: Exit code. Cancelling and having nothing to commit both return 0.
    """
    timings = {}

    if not vcs.is_repository():
        print_error("Not in a git repository")
        return 1

    t0 = time.time()
    try:
        diff = vcs.get_change_set()
    except GitError as e:
        print_error(f"Error getting git diff: {e}")
        return 1
    timings['git'] = time.time() - t0

    if not diff.strip():
        print("No changes to commit")
        return 0

    manager = config_manager or ConfigManager()
    try:
        config = manager.load()
    except ConfigError as e:
        print_error(f"Error loading config: {e}")
        return 1

    prompt = build_prompt(diff, context)

    t0 = time.time()
    try:
        response = _generate(config, prompt, client_factory)
    except ConfigError as e:
        print_error(f"Error loading config: {e}")
        return 1
    except GENERATION_ERRORS as e:
        print_error(f"Error generating commit message: {e}")
        return 1
    timings['generate'] = time.time() - t0

    if verbose:
        _print_verbose_stats(prompt, response, timings)

    message = response.content
    _display_message(message)

    if not _confirm(read_input):
        print("Commit cancelled")
        return 0

    try:
        vcs.commit_all(message)
    except GitError as e:
        print_error(f"Error creating commit: {e}")
        return 1

    print_success("Commit created successfully!")
    return 0
