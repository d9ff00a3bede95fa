"""Git Repository - Read pending changes and record commits."""

import subprocess
from abc import ABC, abstractmethod


class GitError(Exception):
    """Raised when git operations fail."""
    pass


class VersionControl(ABC):
    """The version-control operations the commit flow depends on."""

    @abstractmethod
    def is_repository(self) -> bool:
        pass

    @abstractmethod
    def get_change_set(self) -> str:
        pass

    @abstractmethod
    def commit_all(self, message: str) -> None:
        pass


class GitRepository(VersionControl):
    """Runs git in the current working directory (or ``cwd`` when given)."""

    def __init__(self, cwd: str | None = None):
        self.cwd = cwd

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                cwd=self.cwd,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or e.stdout or '').strip()
            raise GitError(f"git {' '.join(args)} exited with status {e.returncode}" + (f"\n{detail}" if detail else ""))
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def is_repository(self) -> bool:
        try:
            self._run_git('rev-parse', '--git-dir')
        except GitError:
            return False
        return True

    def get_change_set(self) -> str:
        """Staged diff, or the unstaged diff when nothing is staged."""
        diff = self._run_git('diff', '--cached')
        if not diff.strip():
            diff = self._run_git('diff')
        return diff

    def commit_all(self, message: str) -> None:
        """Stage everything, then commit. Staging is not undone if the commit fails."""
        try:
            self._run_git('add', '.')
        except GitError as e:
            raise GitError(f"Failed to stage changes: {e}")

        try:
            self._run_git('commit', '-m', message)
        except GitError as e:
            raise GitError(f"Failed to create commit: {e}")
