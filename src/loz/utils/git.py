"""Git operations used by the commit message flow."""
import logging
from pathlib import Path
from typing import Optional

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo

from ..errors import GitError

logger = logging.getLogger(__name__)


class GitRepository:
    """Thin wrapper over the working repository.

    The repository is opened on first use so that constructing this object
    never fails outside a git checkout.
    """

    def __init__(self, repo_path: Optional[Path] = None):
        self.repo_path = repo_path or Path.cwd()
        self._repo: Optional[Repo] = None

    @property
    def repo(self) -> Repo:
        if self._repo is None:
            try:
                self._repo = Repo(self.repo_path, search_parent_directories=True)
                logger.debug(f"Opened git repository at {self._repo.working_dir}")
            except (InvalidGitRepositoryError, NoSuchPathError):
                raise GitError(f"Not a git repository: {self.repo_path}") from None
        return self._repo

    def get_staged_diff(self) -> str:
        """Return the raw ``git diff --cached`` text."""
        try:
            diff = self.repo.git.diff("--cached")
        except GitCommandError as e:
            raise GitError(f"Failed to read staged changes: {e}") from e
        if not diff.strip():
            raise GitError("No staged changes. Stage files with 'git add' first.")
        # GitPython strips the trailing newline the CLI prints
        return diff + "\n"

    def commit(self, message: str) -> None:
        try:
            output = self.repo.git.commit("-m", message)
        except GitCommandError as e:
            raise GitError(f"Failed to create commit: {e}") from e
        logger.info(output)

    def show_head(self) -> str:
        try:
            return self.repo.git.show("HEAD", "--stat")
        except (GitCommandError, ValueError) as e:
            raise GitError(f"Failed to show HEAD: {e}") from e
