"""Staged diff to commit message, through the active provider."""
import logging
import re

from rich.console import Console

from .core import LozSession
from .errors import GitError
from .models.chat_turn import COMMIT_MODE, ChatTurn
from .utils.console import console as default_console
from .utils.console import print_error
from .utils.git import GitRepository
from .utils.prompts import COMMIT_PIPE_PROMPT, COMMIT_PROMPT, COMMIT_PROVENANCE_TEMPLATE

logger = logging.getLogger(__name__)

AUTHOR_LINE = re.compile(r"Author: .*\n")
DATE_LINE = re.compile(r"Date: .*\n")


def strip_first_line(text: str) -> str:
    """Drop the header line (``diff --git ...`` or ``commit <sha>``)."""
    parts = text.split("\n", 1)
    return parts[1] if len(parts) > 1 else ""


class CommitMessageFlow:
    def __init__(self, session: LozSession, git: GitRepository | None = None, console: Console | None = None):
        self.session = session
        self.git = git or GitRepository()
        self.console = console or default_console

    def build_prompt(self, diff: str) -> str:
        return COMMIT_PROMPT + strip_first_line(diff)

    def _generate(self, prompt: str) -> str:
        params = self.session.build_params(
            prompt,
            max_tokens=self.session.config.COMMIT_MAX_TOKENS,
            stream=False,
        )
        return self.session.pipeline.run(params)

    def run(self) -> bool:
        """Generate a message for the staged changes and commit it.

        Returns True only when the commit was created. Nothing is committed
        unless a non-empty message came back from the provider.
        """
        try:
            diff = self.git.get_staged_diff()
        except GitError as e:
            logger.error(f"Could not read staged diff: {e}")
            print_error(str(e))
            return False

        prompt = self.build_prompt(diff)
        message = self._generate(prompt)
        if not message:
            print_error("Failed to generate a commit message")
            return False

        model = self.session.pipeline.last_model or self.session.client.model
        try:
            self.git.commit(message + COMMIT_PROVENANCE_TEMPLATE.format(model=model))
        except GitError as e:
            logger.error(f"Commit failed: {e}")
            print_error(str(e))
            return False
        self.session.history.append(ChatTurn(COMMIT_MODE, prompt, message))

        try:
            self.console.print(self.git.show_head(), highlight=False, markup=False)
        except GitError as e:
            logger.warning(f"Commit created but HEAD could not be shown: {e}")
        return True

    def run_from_pipe(self, text: str) -> str:
        """Draft a message for piped ``git show``/``git diff`` output. Never commits."""
        body = strip_first_line(text)
        body = AUTHOR_LINE.sub("", body, count=1)
        body = DATE_LINE.sub("", body, count=1)
        message = self._generate(COMMIT_PIPE_PROMPT + body)
        if not message:
            print_error("Failed to generate a commit message")
            return ""
        self.console.print(message, highlight=False, markup=False)
        return message
