from __future__ import annotations

import logging
import sys

from rich.console import Console

from . import __version__
from .config import CONFIG_PATH, AppConfig, load_config
from .dispatch import Dispatcher, RunFlags
from .github import GhCli, PullRequest
from .ui.picker import select_pr
from .ui.styles import Palette

EXIT_USAGE = 2

# Go-style single-dash long names are accepted too
WEB_FLAGS = {"-w", "--web", "-web"}
VIEW_FLAGS = {"-v", "--view", "-view"}
HELP_FLAGS = {"-h", "--help", "-help"}
VERSION_FLAGS = {"--version"}

HELP_TEXT = """Interactively select and checkout a pull request.
Optionally open the PR in the browser.

USAGE
  gh po [flags]

FLAGS
  -w, --web     Open the PR in browser after checkout
  -v, --view    Open the PR in browser without checkout
  --help        Show help for command

EXAMPLES
  $ gh po              # Checkout only
  $ gh po --web        # Checkout and open in browser
  $ gh po --view       # Open in browser without checkout
"""


class UsageError(Exception):
    """Raised for command-line arguments the tool does not understand."""


def parse_flags(args: list[str]) -> RunFlags:
    """Turn command-line arguments into `RunFlags`.

    Args:
        args: Arguments after the program name.

    Returns:
        The parsed flags. `--web` and `--view` may both be set.

    Raises:
        UsageError: On an unknown flag or any positional argument.
    """
    web = False
    view = False
    for arg in args:
        if arg in WEB_FLAGS:
            web = True
        elif arg in VIEW_FLAGS:
            view = True
        elif arg.startswith("-"):
            raise UsageError(f"unknown flag: {arg}")
        else:
            raise UsageError(f"unexpected argument: {arg}")
    return RunFlags(web=web, view=view)


def configure_logging(level_name: str) -> None:
    """Send log records to stderr at `level_name` (falls back to WARNING)."""
    level = getattr(logging, level_name.upper(), logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")


def build_dispatcher(cfg: AppConfig, console: Console, err_console: Console) -> Dispatcher:
    """Assemble the production dispatcher: `gh` subprocesses and the Textual menu."""
    palette = Palette()

    def selector(prs: list[PullRequest]) -> PullRequest:
        return select_pr(prs, palette, title_max=cfg.title_max_width, branch_max=cfg.branch_max_width)

    return Dispatcher(GhCli(cfg.gh_path), selector, console, err_console, palette)


def main(argv: list[str] | None = None) -> None:
    """Entry point for the `gh-po` console script.

    Handles `--help`/`--version`, then lists, selects and acts on a pull request.

    Args:
        argv: Arguments after the program name; defaults to `sys.argv[1:]`.

    Returns:
        None; exits the process with the resulting status.
    """
    args = sys.argv[1:] if argv is None else list(argv)
    if any(a in HELP_FLAGS for a in args):
        print_help()
        return
    if any(a in VERSION_FLAGS for a in args):
        print(f"gh-po {__version__}")
        return

    try:
        flags = parse_flags(args)
    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(HELP_TEXT, file=sys.stderr, end="")
        sys.exit(EXIT_USAGE)

    try:
        cfg = load_config()
    except (OSError, ValueError) as e:
        print(f"Error: invalid config file {CONFIG_PATH}: {e}", file=sys.stderr)
        sys.exit(1)
    configure_logging(cfg.log_level)

    console = Console(highlight=False)
    err_console = Console(stderr=True, highlight=False)
    sys.exit(build_dispatcher(cfg, console, err_console).run(flags))


def print_help() -> None:
    """Print help message for the gh-po command.

    Returns:
        None
    """
    print(HELP_TEXT, end="")
