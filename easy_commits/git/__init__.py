"""Git Operations Package"""

from easy_commits.git.repository import GitRepository, GitError, VersionControl

__all__ = [
    "GitRepository",
    "GitError",
    "VersionControl",
]
