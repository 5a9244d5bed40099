"""Tests for the stubborn CLI commands."""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock, patch

import httpx
import pytest
from click.testing import CliRunner

from stubborn import __version__
from stubborn.cli.main import cli
from stubborn.cli.probe import probe_once
from stubborn.cli.run import EXIT_CANCELLED, exit_code_for
from stubborn.errors import CommandFailedError, ProbeFailedError
from stubborn.model.outcome import Outcome


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _completed(returncode: int) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=["cmd"], returncode=returncode)


# ---------------------------------------------------------------------------
# Group
# ---------------------------------------------------------------------------

def test_version(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------

class TestRun:
    @patch("stubborn.cli.run.subprocess.run")
    def test_success_first_try(self, mock_run: MagicMock, runner: CliRunner) -> None:
        mock_run.return_value = _completed(0)
        result = runner.invoke(cli, ["run", "--", "true"])
        assert result.exit_code == 0
        mock_run.assert_called_once_with(["true"])

    @patch("stubborn.cli.run.subprocess.run")
    def test_retries_until_success(self, mock_run: MagicMock, runner: CliRunner) -> None:
        mock_run.side_effect = [_completed(1), _completed(1), _completed(0)]
        result = runner.invoke(cli, ["run", "--max-attempts", "5", "--", "flaky", "--arg"])
        assert result.exit_code == 0
        assert mock_run.call_count == 3
        assert mock_run.call_args.args[0] == ["flaky", "--arg"]
        assert "attempt 2 failed" in result.output

    @patch("stubborn.cli.run.subprocess.run")
    def test_exhaustion_exits_with_last_returncode(
        self, mock_run: MagicMock, runner: CliRunner
    ) -> None:
        mock_run.return_value = _completed(3)
        result = runner.invoke(cli, ["run", "--max-attempts", "2", "--", "broken"])
        assert result.exit_code == 3
        assert mock_run.call_count == 2

    @patch("stubborn.cli.run.subprocess.run")
    def test_preset_overrides_options(self, mock_run: MagicMock, runner: CliRunner) -> None:
        mock_run.return_value = _completed(1)
        result = runner.invoke(
            cli, ["run", "--preset", "none", "--max-attempts", "9", "--", "broken"]
        )
        assert result.exit_code == 1
        assert mock_run.call_count == 1

    @patch("stubborn.cli.run.subprocess.run")
    def test_missing_program_exits_127(self, mock_run: MagicMock, runner: CliRunner) -> None:
        mock_run.side_effect = FileNotFoundError("no such file")
        result = runner.invoke(cli, ["run", "--max-attempts", "1", "--", "nope"])
        assert result.exit_code == 127

    @patch("stubborn.cli.run.subprocess.run")
    def test_max_attempts_from_environment(
        self, mock_run: MagicMock, runner: CliRunner
    ) -> None:
        mock_run.return_value = _completed(1)
        result = runner.invoke(
            cli, ["run", "--", "broken"], env={"STUBBORN_RUN_MAX_ATTEMPTS": "4"}
        )
        assert result.exit_code == 1
        assert mock_run.call_count == 4

    def test_command_is_required(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["run"])
        assert result.exit_code != 0


class TestExitCodeFor:
    def test_success(self) -> None:
        assert exit_code_for(Outcome(value=0, attempts=1)) == 0

    def test_cancelled(self) -> None:
        err = CommandFailedError("x", returncode=2)
        assert exit_code_for(Outcome(error=err, attempts=1, cancelled=True)) == EXIT_CANCELLED

    def test_last_returncode(self) -> None:
        err = CommandFailedError("x", returncode=3)
        assert exit_code_for(Outcome(error=err, attempts=2)) == 3

    def test_signal_killed_child_maps_like_a_shell(self) -> None:
        err = CommandFailedError("x", returncode=-15)
        assert exit_code_for(Outcome(error=err, attempts=1)) == 143

    def test_zero_attempts(self) -> None:
        assert exit_code_for(Outcome()) == 1


# ---------------------------------------------------------------------------
# probe
# ---------------------------------------------------------------------------

def _client_factory(statuses: list[int]):
    """Return a _make_client replacement serving *statuses* in order."""
    remaining = list(statuses)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(remaining.pop(0) if len(remaining) > 1 else remaining[0])

    def factory(timeout: float) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(handler))

    return factory


class TestProbe:
    def test_probe_once_accepts_expected_status(self) -> None:
        client = _client_factory([204])(1.0)
        response = probe_once(client, "http://svc/health", 204)
        assert response.status_code == 204

    def test_probe_once_rejects_other_status(self) -> None:
        client = _client_factory([503])(1.0)
        with pytest.raises(ProbeFailedError) as excinfo:
            probe_once(client, "http://svc/health", 200)
        assert excinfo.value.status_code == 503

    def test_probe_once_wraps_transport_errors(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        with pytest.raises(ProbeFailedError) as excinfo:
            probe_once(client, "http://svc/health", 200)
        assert excinfo.value.status_code is None
        assert isinstance(excinfo.value.cause, httpx.ConnectError)

    def test_probe_retries_until_up(self, runner: CliRunner) -> None:
        with patch("stubborn.cli.probe._make_client", _client_factory([503, 503, 200])):
            result = runner.invoke(cli, ["probe", "--max-attempts", "5", "http://svc/health"])
        assert result.exit_code == 0
        assert "after 3 attempt(s)" in result.output

    def test_probe_gives_up(self, runner: CliRunner) -> None:
        with patch("stubborn.cli.probe._make_client", _client_factory([500])):
            result = runner.invoke(cli, ["probe", "--max-attempts", "2", "http://svc/health"])
        assert result.exit_code == 1
        assert "did not come up" in result.output


# ---------------------------------------------------------------------------
# schedule
# ---------------------------------------------------------------------------

class TestSchedule:
    def test_exponential_schedule_is_capped(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli,
            ["schedule", "--policy", "exponential", "--initial-interval-ms", "500", "--attempts", "8"],
        )
        assert result.exit_code == 0
        assert "wait     0.500s" in result.output
        assert "wait     4.000s" in result.output
        assert "wait    30.000s" in result.output
        assert "still retrying after 8 attempt(s)" in result.output

    def test_fixed_schedule_stops_at_default_ceiling(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["schedule", "--policy", "fixed", "--backoff-period-ms", "1000", "--attempts", "40"]
        )
        assert result.exit_code == 0
        assert "stop before attempt 31" in result.output

    def test_simple_schedule(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["schedule", "--max-attempts", "2"])
        assert result.exit_code == 0
        assert "stop before attempt 3" in result.output
