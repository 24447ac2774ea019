"""
Tests for CLI commands — run, logs, agent and package groups, global options.
"""

import json
import textwrap
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from oz_action.main import cli


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Oz Action" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestRunCommand:
    def test_missing_task(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["run"], env={"INPUT_WARP_API_KEY": "k"})
        assert result.exit_code == 1
        assert "Either `prompt`, `saved_prompt`, or `skill` must be provided" in result.output

    def test_missing_key(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["run"], env={"INPUT_PROMPT": "p"})
        assert result.exit_code == 1
        assert "`warp_api_key` must be provided." in result.output

    def test_failure_in_actions_is_error_command(self):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["run"],
            env={"GITHUB_ACTIONS": "true", "INPUT_PROMPT": "p", "INPUT_WARP_API_KEY": "k",
                 "INPUT_OZ_CHANNEL": "beta"},
        )
        assert result.exit_code == 1
        assert "::error::Unsupported channel beta" in result.output

    def test_passes_inputs_to_agent(self, tmp_path: Path):
        inputs = tmp_path / "oz.yml"
        inputs.write_text(textwrap.dedent("""\
            prompt: from file
            warp_api_key: k
        """))
        runner = CliRunner()
        with patch("oz_action.core.services.agent.run_agent") as run_agent:
            result = runner.invoke(
                cli, ["--inputs", str(inputs), "--debug", "run", "--skip-install"]
            )
        assert result.exit_code == 0, result.output
        (args, kwargs) = run_agent.call_args
        assert args[0].prompt == "from file"
        assert args[0].debug is True
        assert kwargs["install"] is False

    def test_bad_inputs_file(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--inputs", str(tmp_path / "missing.yml"), "run"])
        assert result.exit_code == 1
        assert "Inputs file not found" in result.output


class TestLogsCommand:
    def test_prints_log(self, tmp_path: Path):
        log_path = tmp_path / "warp-terminal" / "warp.log"
        log_path.parent.mkdir(parents=True)
        log_path.write_text("oz log line")
        runner = CliRunner()
        result = runner.invoke(
            cli, ["logs"], env={"XDG_STATE_DIR": str(tmp_path), "GITHUB_ACTIONS": "true"}
        )
        assert result.exit_code == 0
        assert "::group::Warp Logs" in result.output
        assert "oz log line" in result.output

    def test_unknown_channel(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["logs", "--channel", "beta"], env={"XDG_STATE_DIR": str(tmp_path)})
        assert result.exit_code == 1
        assert "Unsupported channel beta" in result.output


class TestAgentGroup:
    def test_command_stable(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["agent", "command", "stable"])
        assert result.exit_code == 0
        assert result.output.strip() == "oz"

    def test_command_preview(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["agent", "command", "preview"])
        assert result.output.strip() == "oz-preview"

    def test_command_unknown(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["agent", "command", "beta"])
        assert result.exit_code == 1
        assert "Unsupported channel beta" in result.output

    def test_args_json(self):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["-q", "agent", "args", "--json"],
            env={"INPUT_PROMPT": "fix it", "INPUT_PROFILE": "ci", "INPUT_SHARE": "a@x.com"},
        )
        assert result.exit_code == 0
        assert json.loads(result.output) == [
            "agent", "run", "--prompt", "fix it", "--profile", "ci", "--share", "a@x.com",
        ]

    def test_args_plain(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["-q", "agent", "args"])
        assert result.output.strip() == "agent run --sandboxed"


class TestPackageGroup:
    def test_locate_json(self, linux_x64):
        runner = CliRunner()
        result = runner.invoke(cli, ["-q", "package", "locate", "--version", "1.2.3", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["url"] == "https://releases.warp.dev/stable/v1.2.3/oz_stable_1.2.3_amd64.deb"
        assert data["cache_key"] == "stable-v1.2.3"

    def test_locate_plain(self, linux_x64):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["-q", "package", "locate", "--channel", "preview", "--version", "v2.0.0"]
        )
        assert result.exit_code == 0
        assert "preview-v2.0.0" in result.output

    def test_locate_unknown_channel(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["package", "locate", "--channel", "beta"])
        assert result.exit_code == 1
        assert "Unsupported channel beta" in result.output

    def test_locate_unsupported_platform(self, monkeypatch):
        monkeypatch.setattr("platform.system", lambda: "Darwin")
        runner = CliRunner()
        result = runner.invoke(cli, ["package", "locate", "--version", "1.2.3"])
        assert result.exit_code == 1
        assert "Only Linux runners are supported" in result.output
