"""Tests for the ovs-unixctl CLI."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from unixctl import __version__
from unixctl.cli import app
from unixctl.cli import helpers as cli_helpers
from unixctl.cli.helpers import ConnectionOptions, build_config
from unixctl.cli.output import output_error
from tests.helpers import reply_to, write_pidfile

runner = CliRunner()


class TestVersionFlag:
    """Tests for the --version flag."""

    def test_version_shows_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestListCommands:
    """Tests for the list-commands command."""

    def test_table_output(self, make_server, ovs_commands) -> None:
        server = make_server(commands=ovs_commands)
        result = runner.invoke(app, ["--socket", str(server.path), "list-commands"])
        assert result.exit_code == 0, result.output
        assert "bond/show" in result.stdout
        assert "[port]" in result.stdout

    def test_json_output(self, make_server, ovs_commands) -> None:
        server = make_server(commands=ovs_commands)
        result = runner.invoke(app, ["--socket", str(server.path), "list-commands", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert {"command": "dpif-netdev/bond-show", "arguments": "[dp]"} in data


class TestVersionCommand:
    """Tests for the version command."""

    def test_discovered_through_rundir(self, sock_dir: Path, make_server, ovs_commands) -> None:
        write_pidfile(sock_dir, "ovs-vswitchd", "31")
        make_server("ovs-vswitchd.31.ctl", commands=ovs_commands)
        result = runner.invoke(app, ["--rundir", str(sock_dir), "version"])
        assert result.exit_code == 0, result.output
        assert "3.2.1" in result.stdout

    def test_json_output(self, make_server, ovs_commands) -> None:
        server = make_server(commands=ovs_commands)
        result = runner.invoke(app, ["-s", str(server.path), "version", "--json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {"major": 3, "minor": 2, "patch": 1, "suffix": ""}

    def test_explicit_target(self, sock_dir: Path, make_server) -> None:
        write_pidfile(sock_dir, "ovn-northd", "5")
        make_server("ovn-northd.5.ctl", commands={"version": "ovn-northd (Open vSwitch) 23.9.0"})
        result = runner.invoke(
            app, ["--rundir", str(sock_dir), "--target", "ovn-northd", "version", "--json"]
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["major"] == 23


class TestRunCommand:
    """Tests for the run command."""

    def test_prints_raw_result(self, make_server, ovs_commands) -> None:
        server = make_server(commands=ovs_commands)
        result = runner.invoke(app, ["-s", str(server.path), "run", "bond/show", "bond0"])
        assert result.exit_code == 0, result.output
        assert result.stdout == "---- bond0 ----\n"

    def test_command_error_exits_1(self, make_server, ovs_commands) -> None:
        server = make_server(commands=ovs_commands)
        result = runner.invoke(app, ["-s", str(server.path), "run", "nope"])
        assert result.exit_code == 1
        assert "is not a valid command" in result.stdout

    def test_empty_result_prints_nothing(self, make_server) -> None:
        server = make_server(handler=lambda r: reply_to(r, None))
        result = runner.invoke(app, ["-s", str(server.path), "run", "exit"])
        assert result.exit_code == 0
        assert result.stdout == ""


class TestErrors:
    """Connection failures are reported, never raised."""

    def test_missing_socket(self, sock_dir: Path) -> None:
        result = runner.invoke(app, ["-s", str(sock_dir / "gone.ctl"), "version"])
        assert result.exit_code == 1
        assert "socket not found" in result.stdout

    def test_not_running(self, sock_dir: Path) -> None:
        result = runner.invoke(app, ["--rundir", str(sock_dir), "version"])
        assert result.exit_code == 1
        assert "not running" in result.stdout

    def test_not_running_json(self, sock_dir: Path) -> None:
        result = runner.invoke(app, ["--rundir", str(sock_dir), "version", "--json"])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["success"] is False
        assert data["error_code"] == "DaemonNotRunningError"

    def test_invalid_timeout(self, make_server, ovs_commands) -> None:
        server = make_server(commands=ovs_commands)
        result = runner.invoke(app, ["-s", str(server.path), "--timeout", "0", "version"])
        assert result.exit_code == 1
        assert "Invalid connection options" in result.stdout


class TestBuildConfig:
    """CLI options map onto UnixCtlConfig."""

    def test_unset_options_use_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("OVS_RUNDIR", raising=False)
        config = build_config(ConnectionOptions())
        assert config.target == "ovs-vswitchd"
        assert config.timeout == 1.0
        assert config.rundir == Path("/var/run/openvswitch")

    def test_options_override(self) -> None:
        config = build_config(
            ConnectionOptions(target="ovsdb-server", rundir=Path("/r"), timeout=3.0)
        )
        assert (config.target, config.rundir, config.timeout) == ("ovsdb-server", Path("/r"), 3.0)


class TestLoggingOptions:
    """--log-level and --log-format accept only known values."""

    def test_unknown_log_format_rejected(self, make_server, ovs_commands) -> None:
        server = make_server(commands=ovs_commands)
        result = runner.invoke(app, ["-s", str(server.path), "--log-format", "xml", "version"])
        assert result.exit_code == 2

    def test_unknown_log_level_rejected(self, make_server, ovs_commands) -> None:
        server = make_server(commands=ovs_commands)
        result = runner.invoke(app, ["-s", str(server.path), "-L", "LOUD", "version"])
        assert result.exit_code == 2

    def test_level_is_case_insensitive(self, make_server, ovs_commands) -> None:
        server = make_server(commands=ovs_commands)
        result = runner.invoke(
            app, ["-s", str(server.path), "-L", "error", "--log-format", "JSON", "version"]
        )
        assert result.exit_code == 0, result.output
        assert cli_helpers._log_config.level == "ERROR"
        assert cli_helpers._log_config.format == "json"


class TestOutputError:
    """Error rendering shared by all commands."""

    def test_plain_message_escapes_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        output_error("bad argument [dp]")
        assert "Error: bad argument [dp]" in capsys.readouterr().out

    def test_json_without_error_code(self, capsys: pytest.CaptureFixture[str]) -> None:
        output_error("boom", json_output=True)
        assert json.loads(capsys.readouterr().out) == {"success": False, "message": "boom"}
