from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from ghpo.github import CommandResult, GhCommandError, GitHubCli, PullRequest

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_pr(number: int, **kwargs) -> PullRequest:
    """Create a test PullRequest object.

    Args:
        number: Pull request number.
        **kwargs: Optional fields to override on the `PullRequest`.

    Returns:
        A `PullRequest` instance populated with defaults and any overrides.
    """
    defaults = {
        "title": "Test PR",
        "head_ref_name": "main",
        "is_draft": False,
        "created_at": NOW - timedelta(hours=2),
    }
    defaults.update(kwargs)
    return PullRequest(number=number, **defaults)


class FakeGitHubCli(GitHubCli):
    """In-memory stand-in for `gh` that records every call."""

    def __init__(
        self,
        prs: list[PullRequest] | None = None,
        list_error: Exception | None = None,
        repo: str | None = "octo/repo",
        checkout_result: CommandResult | None = None,
        browse_status: int = 0,
    ) -> None:
        self.prs = prs or []
        self.list_error = list_error
        self.repo = repo
        self.checkout_result = checkout_result or CommandResult(0, "Switched to branch 'main'\n", "")
        self.browse_status = browse_status
        self.calls: list[tuple] = []

    def list_pull_requests(self) -> list[PullRequest]:
        self.calls.append(("list",))
        if self.list_error is not None:
            raise self.list_error
        return list(self.prs)

    def resolve_repository_name(self) -> str | None:
        self.calls.append(("repo",))
        return self.repo

    def checkout(self, number: int) -> CommandResult:
        self.calls.append(("checkout", number))
        return self.checkout_result

    def open_in_browser(self, number: int) -> int:
        self.calls.append(("browse", number))
        return self.browse_status


class MissingGhCli(FakeGitHubCli):
    """Fake whose checkout and browse behave as if `gh` vanished mid-run."""

    def checkout(self, number: int) -> CommandResult:
        self.calls.append(("checkout", number))
        raise GhCommandError(["pr", "checkout", str(number)], None, "gh: command not found\n")

    def open_in_browser(self, number: int) -> int:
        self.calls.append(("browse", number))
        raise GhCommandError(["browse", str(number)], None, "gh: command not found\n")


@pytest.fixture
def fake_gh() -> FakeGitHubCli:
    return FakeGitHubCli(prs=[make_pr(42, title="Fix bug", head_ref_name="fix/bug")])
