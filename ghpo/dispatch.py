from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable
from contextlib import AbstractContextManager
from dataclasses import dataclass
from enum import Enum

from rich.console import Console

from .github import GhCommandError, GitHubCli, PullRequest, PullRequestParseError
from .ui.picker import SelectionCancelled
from .ui.render import format_summary
from .ui.styles import Palette

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1

LOADING_MESSAGE = "Loading pull requests..."
CHECKOUT_MESSAGE = "Checking out PR..."

Selector = Callable[[list[PullRequest]], PullRequest]
BusyIndicator = Callable[[str], AbstractContextManager]


class Action(Enum):
    """What to do with the chosen pull request."""

    VIEW_ONLY = "view"
    CHECKOUT_ONLY = "checkout"
    CHECKOUT_AND_VIEW = "checkout+view"


@dataclass(frozen=True)
class RunFlags:
    """Parsed command-line switches.

    Attributes:
        web: Open the PR in the browser after a successful checkout.
        view: Open the PR in the browser instead of checking it out.
    """

    web: bool = False
    view: bool = False


def plan_action(flags: RunFlags) -> Action:
    """Decide the actions for `flags`; `view` wins over `web`."""
    if flags.view:
        return Action.VIEW_ONLY
    if flags.web:
        return Action.CHECKOUT_AND_VIEW
    return Action.CHECKOUT_ONLY


def console_status(console: Console) -> BusyIndicator:
    """Return a busy indicator that animates on `console` while a block runs.

    Nothing is drawn when the console is not a terminal. The dispatcher draws
    on stderr so stdout carries only the summary and relayed `gh` output.
    """

    def busy(title: str) -> AbstractContextManager:
        if not console.is_terminal:
            return contextlib.nullcontext()
        return console.status(title)

    return busy


class Dispatcher:
    """Runs one list → select → checkout/browse cycle against a `GitHubCli`."""

    def __init__(
        self,
        gh: GitHubCli,
        selector: Selector,
        console: Console,
        err_console: Console,
        palette: Palette | None = None,
        busy: BusyIndicator | None = None,
    ) -> None:
        """Wire the collaborators together.

        Args:
            gh: Gateway to the GitHub CLI.
            selector: Shows the menu; returns the chosen PR or raises `SelectionCancelled`.
            console: Standard output.
            err_console: Standard error.
            palette: Styles for the summary line.
            busy: Context-manager factory shown around slow `gh` calls.
        """
        self.gh = gh
        self.selector = selector
        self.console = console
        self.err_console = err_console
        self.palette = palette or Palette()
        self.busy = busy or console_status(err_console)

    def run(self, flags: RunFlags) -> int:
        """Execute the whole flow and return the process exit status."""
        try:
            with self.busy(LOADING_MESSAGE):
                prs = self.gh.list_pull_requests()
        except GhCommandError as e:
            self._relay(self.err_console, e.stderr)
            return EXIT_FAILURE
        except PullRequestParseError as e:
            self._error(str(e))
            return EXIT_FAILURE

        if not prs:
            self.report_empty()
            return EXIT_OK

        try:
            selected = self.selector(prs)
        except SelectionCancelled as e:
            self._error(str(e))
            return EXIT_FAILURE

        action = plan_action(flags)
        logger.info(f"Selected PR #{selected.number}, action={action.value}")
        if action is Action.VIEW_ONLY:
            return self.browse(selected, after_checkout=False)
        status = self.checkout(selected)
        if status != EXIT_OK or action is Action.CHECKOUT_ONLY:
            return status
        return self.browse(selected, after_checkout=True)

    def report_empty(self) -> None:
        """Tell the user there is nothing to pick, naming the repository when known."""
        repo = self.gh.resolve_repository_name()
        if repo:
            self.console.print(f"no open pull requests in {repo}", markup=False, highlight=False, soft_wrap=True)
        else:
            self.console.print("no open pull requests", markup=False, highlight=False, soft_wrap=True)

    def checkout(self, pr: PullRequest) -> int:
        """Check out `pr`, relaying everything `gh` printed.

        Args:
            pr: Pull request to check out.

        Returns:
            The exit status for the process.
        """
        self.console.print(format_summary(pr, self.palette), highlight=False, soft_wrap=True)
        self.console.print()
        try:
            with self.busy(CHECKOUT_MESSAGE):
                result = self.gh.checkout(pr.number)
        except GhCommandError as e:
            self._relay(self.err_console, e.stderr)
            self._error(f"failed to checkout PR #{pr.number}: {e}")
            return EXIT_FAILURE
        self._relay(self.console, result.stdout)
        self._relay(self.console, result.stderr)
        if not result.ok:
            logger.warning(f"gh pr checkout {pr.number} exited with status {result.returncode}")
            self._error(f"failed to checkout PR #{pr.number}: exit status {result.returncode}")
            return EXIT_FAILURE
        return EXIT_OK

    def browse(self, pr: PullRequest, after_checkout: bool) -> int:
        """Open `pr` in the browser.

        Args:
            pr: Pull request to open.
            after_checkout: Separate the browser output from the checkout output
                with a blank line.

        Returns:
            The exit status for the process.
        """
        if after_checkout:
            self.console.print()
        try:
            returncode = self.gh.open_in_browser(pr.number)
        except GhCommandError as e:
            self._relay(self.err_console, e.stderr)
            self._error(f"failed to open PR #{pr.number} in browser: {e}")
            return EXIT_FAILURE
        if returncode != 0:
            logger.warning(f"gh browse {pr.number} exited with status {returncode}")
            self._error(f"failed to open PR #{pr.number} in browser: exit status {returncode}")
            return EXIT_FAILURE
        return EXIT_OK

    @staticmethod
    def _relay(console: Console, text: str) -> None:
        """Write collaborator output through unchanged."""
        if text:
            console.file.write(text)
            console.file.flush()

    def _error(self, message: str) -> None:
        self.err_console.print(f"Error: {message}", markup=False, highlight=False, soft_wrap=True)
