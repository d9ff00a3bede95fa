"""Prompt Construction Package"""

from easy_commits.prompts.builder import PromptBuilder, build_prompt, CONTEXT_LABEL

__all__ = [
    "PromptBuilder",
    "build_prompt",
    "CONTEXT_LABEL",
]
