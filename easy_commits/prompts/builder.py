"""Prompt Builder - Construct LLM prompts for commit message generation."""

from easy_commits import COMMIT_TYPE_NAMES

MAX_SUBJECT_LENGTH = 50
CONTEXT_LABEL = "Additional context from user:"


class PromptBuilder:
    """Renders a diff and optional user context into a single prompt."""

    def build(self, diff: str, context: str | None = None) -> str:
        sections = [
            self._build_role_section(),
            self._build_diff_section(diff),
            self._build_context_section(context),
            self._build_final_instructions(),
        ]
        return "\n\n".join(filter(None, sections))

    def _build_role_section(self) -> str:
        return f"""You are an expert at writing clear, concise git commit messages. Based on the git diff provided, generate a commit message that follows these guidelines:

1. Use the conventional commit format: type(scope): description
2. Types: {', '.join(COMMIT_TYPE_NAMES)}
3. Keep the first line under {MAX_SUBJECT_LENGTH} characters
4. Use imperative mood ("add" not "added")
5. Be specific about what changed and why"""

    def _build_diff_section(self, diff: str) -> str:
        # Diff text is passed through verbatim
        return f"Git diff:\n{diff}"

    def _build_context_section(self, context: str | None) -> str:
        if not context or not context.strip():
            return ""
        return f"{CONTEXT_LABEL} {context}"

    def _build_final_instructions(self) -> str:
        return "Generate only the commit message, no additional text or explanation."


def build_prompt(diff: str, context: str | None = None) -> str:
    return PromptBuilder().build(diff, context)
