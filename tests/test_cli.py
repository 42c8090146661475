from __future__ import annotations

import pytest

import ghpo.cli as cli
import ghpo.config as config_module
from ghpo import __version__
from ghpo.config import AppConfig
from ghpo.dispatch import RunFlags


@pytest.mark.parametrize(
    ("args", "expected"),
    [
        ([], RunFlags()),
        (["--web"], RunFlags(web=True)),
        (["-w"], RunFlags(web=True)),
        (["--view"], RunFlags(view=True)),
        (["-v"], RunFlags(view=True)),
        (["-web", "-view"], RunFlags(web=True, view=True)),
        (["-w", "--view"], RunFlags(web=True, view=True)),
    ],
)
def test_parse_flags(args: list[str], expected: RunFlags):
    assert cli.parse_flags(args) == expected


@pytest.mark.parametrize("args", [["--bogus"], ["42"], ["-w", "extra"]])
def test_parse_flags_rejects_unknown(args: list[str]):
    with pytest.raises(cli.UsageError):
        cli.parse_flags(args)


def test_help_prints_usage_and_exits_cleanly(capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch):
    def fail(*_args):
        raise AssertionError("help must not run the flow")

    monkeypatch.setattr(cli, "build_dispatcher", fail)

    cli.main(["--help"])

    out = capsys.readouterr().out
    assert out.startswith("Interactively select and checkout a pull request.")
    assert "-w, --web" in out
    assert "-v, --view" in out


def test_version(capsys: pytest.CaptureFixture[str]):
    cli.main(["--version"])
    assert capsys.readouterr().out == f"gh-po {__version__}\n"


def test_unknown_flag_exits_with_usage(capsys: pytest.CaptureFixture[str]):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--nope"])

    assert excinfo.value.code == cli.EXIT_USAGE
    err = capsys.readouterr().err
    assert err.startswith("Error: unknown flag: --nope\n")
    assert "USAGE" in err


def test_main_runs_dispatcher_and_exits_with_status(monkeypatch: pytest.MonkeyPatch):
    seen: dict[str, object] = {}

    class StubDispatcher:
        def run(self, flags: RunFlags) -> int:
            seen["flags"] = flags
            return 1

    def fake_build(cfg, console, err_console):
        seen["cfg"] = cfg
        return StubDispatcher()

    cfg = AppConfig(gh_path="/usr/local/bin/gh")
    monkeypatch.setattr(cli, "load_config", lambda: cfg)
    monkeypatch.setattr(cli, "build_dispatcher", fake_build)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["-w"])

    assert excinfo.value.code == 1
    assert seen == {"cfg": cfg, "flags": RunFlags(web=True)}


def test_invalid_config_is_reported(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]):
    import json

    def broken():
        raise json.JSONDecodeError("Expecting value", "{", 1)

    monkeypatch.setattr(cli, "load_config", broken)

    with pytest.raises(SystemExit) as excinfo:
        cli.main([])

    assert excinfo.value.code == 1
    assert "invalid config file" in capsys.readouterr().err


def test_build_dispatcher_uses_configured_gh():
    from rich.console import Console

    dispatcher = cli.build_dispatcher(AppConfig(gh_path="/opt/gh"), Console(), Console(stderr=True))
    assert dispatcher.gh._executable == "/opt/gh"


@pytest.mark.parametrize("content", ['{"title_max_width": "wide"}', '{"branch_max_width": 0}'])
def test_bad_width_setting_is_reported(
    tmp_path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], content: str
):
    path = tmp_path / "config.json"
    path.write_text(content)
    monkeypatch.setattr(cli, "load_config", lambda: config_module.load_config(path))

    with pytest.raises(SystemExit) as excinfo:
        cli.main([])

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: invalid config file")
    assert "must be a positive integer" in err
