from __future__ import annotations

import json
import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any

# Set up logging
logger = logging.getLogger(__name__)

PR_LIST_FIELDS = ("number", "title", "headRefName", "isDraft", "createdAt")


class GhCommandError(Exception):
    """Raised when a `gh` invocation fails.

    Attributes:
        args_: The arguments passed to `gh`.
        returncode: Exit status of the process, or None if it never started.
        stderr: Whatever the process wrote to standard error.
    """

    def __init__(self, args_: list[str], returncode: int | None, stderr: str, message: str | None = None) -> None:
        self.args_ = list(args_)
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message or f"gh {' '.join(args_)} exited with status {returncode}")


class PullRequestParseError(ValueError):
    """Raised when `gh pr list` output does not have the expected shape."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"failed to parse PR list: {reason}")


@dataclass(frozen=True)
class PullRequest:
    """An open pull request as reported by `gh pr list`.

    Attributes:
        number: Pull request number.
        title: PR title.
        head_ref_name: Head branch name.
        is_draft: Whether the PR is marked as draft.
        created_at: When the PR was opened (timezone-aware).
    """

    number: int
    title: str
    head_ref_name: str
    is_draft: bool
    created_at: datetime

    @staticmethod
    def from_dict(data: Any) -> PullRequest:
        """Build a `PullRequest` from one element of the `gh pr list` JSON array.

        Args:
            data: A decoded JSON value expected to be an object with exactly the
                keys `number`, `title`, `headRefName`, `isDraft` and `createdAt`.

        Returns:
            The parsed `PullRequest`.

        Raises:
            PullRequestParseError: If a key is missing, unexpected, or has the wrong type.
        """
        if not isinstance(data, dict):
            raise PullRequestParseError(f"expected an object, got {type(data).__name__}")
        missing = [k for k in PR_LIST_FIELDS if k not in data]
        if missing:
            raise PullRequestParseError(f"missing field(s): {', '.join(missing)}")
        unknown = sorted(set(data) - set(PR_LIST_FIELDS))
        if unknown:
            raise PullRequestParseError(f"unknown field(s): {', '.join(unknown)}")

        number = data["number"]
        # bool is a subclass of int
        if isinstance(number, bool) or not isinstance(number, int) or number <= 0:
            raise PullRequestParseError(f"invalid number: {number!r}")
        title = data["title"]
        if not isinstance(title, str):
            raise PullRequestParseError(f"invalid title for #{number}: {title!r}")
        branch = data["headRefName"]
        if not isinstance(branch, str):
            raise PullRequestParseError(f"invalid headRefName for #{number}: {branch!r}")
        draft = data["isDraft"]
        if not isinstance(draft, bool):
            raise PullRequestParseError(f"invalid isDraft for #{number}: {draft!r}")
        return PullRequest(
            number=number,
            title=title,
            head_ref_name=branch,
            is_draft=draft,
            created_at=parse_timestamp(data["createdAt"], number),
        )


def parse_timestamp(value: Any, number: int) -> datetime:
    """Parse a GitHub ISO-8601 timestamp such as ``2024-05-01T12:00:00Z``."""
    if not isinstance(value, str):
        raise PullRequestParseError(f"invalid createdAt for #{number}: {value!r}")
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise PullRequestParseError(f"invalid createdAt for #{number}: {value!r}") from e
    if parsed.tzinfo is None:
        raise PullRequestParseError(f"createdAt for #{number} has no timezone: {value!r}")
    return parsed


def parse_pull_requests(raw: str) -> list[PullRequest]:
    """Decode `gh pr list --json` output, keeping the order `gh` returned.

    Args:
        raw: Standard output of `gh pr list`.

    Returns:
        The parsed pull requests.

    Raises:
        PullRequestParseError: If the output is not a JSON array of PR objects.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise PullRequestParseError(str(e)) from e
    if not isinstance(data, list):
        raise PullRequestParseError(f"expected a JSON array, got {type(data).__name__}")
    return [PullRequest.from_dict(item) for item in data]


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of a `gh` process."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class GitHubCli(ABC):
    """Operations delegated to the GitHub CLI."""

    @abstractmethod
    def list_pull_requests(self) -> list[PullRequest]:
        """List open pull requests of the current repository.

        Raises:
            GhCommandError: If `gh` exits with a non-zero status.
            PullRequestParseError: If its output cannot be parsed.
        """

    @abstractmethod
    def resolve_repository_name(self) -> str | None:
        """Return ``owner/name`` of the current repository, or None if unknown."""

    @abstractmethod
    def checkout(self, number: int) -> CommandResult:
        """Check out the pull request's head branch, capturing the output."""

    @abstractmethod
    def open_in_browser(self, number: int) -> int:
        """Open the pull request in a web browser and return the exit status."""


class GhCli(GitHubCli):
    """`GitHubCli` backed by `gh` subprocesses."""

    def __init__(self, executable: str = "gh") -> None:
        """Initialize the client.

        Args:
            executable: Name or path of the `gh` binary.
        """
        self._executable = executable

    def _run(self, args: list[str], capture: bool = True) -> subprocess.CompletedProcess:
        """Run `gh` with `args` and wait for it to finish.

        Args:
            args: Arguments after the executable name.
            capture: Capture stdout/stderr as text; otherwise inherit the terminal.

        Returns:
            The completed process; a non-zero status is not raised.

        Raises:
            GhCommandError: If the executable cannot be started.
        """
        cmd = [self._executable, *args]
        logger.debug(f"Running {' '.join(cmd)}")
        try:
            if capture:
                result = subprocess.run(cmd, check=False, capture_output=True, text=True, encoding="utf-8")
            else:
                result = subprocess.run(cmd, check=False)
        except FileNotFoundError as e:
            logger.error(f"{self._executable} not found: {e}")
            raise GhCommandError(
                args,
                None,
                f"{self._executable}: command not found. Install the GitHub CLI from https://cli.github.com/\n",
                f"{self._executable} not found",
            ) from e
        logger.debug(f"{' '.join(cmd)} exited with status {result.returncode}")
        return result

    def list_pull_requests(self) -> list[PullRequest]:
        args = ["pr", "list", "--json", ",".join(PR_LIST_FIELDS)]
        result = self._run(args)
        if result.returncode != 0:
            logger.warning(f"gh pr list failed with status {result.returncode}")
            raise GhCommandError(args, result.returncode, result.stderr or "")
        return parse_pull_requests(result.stdout)

    def resolve_repository_name(self) -> str | None:
        try:
            result = self._run(["repo", "view", "--json", "nameWithOwner", "-q", ".nameWithOwner"])
        except GhCommandError:
            return None
        if result.returncode != 0:
            logger.debug(f"Could not resolve repository name: {result.stderr.strip()}")
            return None
        return result.stdout.strip() or None

    def checkout(self, number: int) -> CommandResult:
        result = self._run(["pr", "checkout", str(number)])
        return CommandResult(result.returncode, result.stdout or "", result.stderr or "")

    def open_in_browser(self, number: int) -> int:
        return self._run(["browse", str(number)], capture=False).returncode
