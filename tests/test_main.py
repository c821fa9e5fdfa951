"""Unit tests for the main entry point.

Tests the main() function including:
- CLI argument parsing
- Log level priority (CLI > env > config)
- The list, get and check commands
- Exit code handling
- Error handling
"""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from jobboard.config.environment import EnvironmentConfig
from jobboard.config.exceptions import ConfigurationError
from jobboard.config.models import AppConfig
from jobboard.domain.models import Job, Salary
from jobboard.main import build_parser, format_job_details, job_to_dict, load_runtime_config, main


def make_job(job_id, posted_date="2025-11-01", salary=None, **overrides):
    data = {
        "id": job_id,
        "title": f"Role {job_id}",
        "company": "Example Corp",
        "type": "Full-time",
        "salary": salary,
        "description": "**About:** Do things.",
        "apply_url": f"https://example.com/{job_id}",
        "posted_date": posted_date,
        "status": "active",
    }
    data.update(overrides)
    return Job(**data)


@pytest.fixture
def env_config():
    return EnvironmentConfig(airtable_access_token="patTestToken123", airtable_base_id="appTestBase123")


@pytest.fixture
def cli(env_config):
    """Patch configuration, logging setup and the service used by main()."""
    with patch("jobboard.main.load_config") as mock_load, \
            patch("jobboard.main.configure_logging") as mock_logging, \
            patch("jobboard.main.JobRetrievalService") as mock_service_class:
        mock_load.return_value = (AppConfig(), env_config)
        service = MagicMock()
        mock_service_class.from_config.return_value = service

        mocks = MagicMock()
        mocks.load_config = mock_load
        mocks.configure_logging = mock_logging
        mocks.service_class = mock_service_class
        mocks.service = service
        yield mocks


# ============================================================================
# Argument parsing and configuration
# ============================================================================


class TestArgumentParsing:
    """Test suite for the CLI parser."""

    def test_command_required(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args([])
        assert exc_info.value.code == 2

    def test_list_defaults(self):
        args = build_parser().parse_args(["list"])
        assert args.sort == "date"
        assert args.limit == 0
        assert args.format == "text"
        assert args.config is None

    def test_global_options(self):
        args = build_parser().parse_args(["--config", "custom.yaml", "--log-level", "DEBUG", "get", "recA1"])
        assert args.config == Path("custom.yaml")
        assert args.log_level == "DEBUG"
        assert args.record_id == "recA1"

    def test_invalid_sort(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["list", "--sort", "title"])


class TestLoadRuntimeConfig:
    """Test suite for load_runtime_config helper."""

    def test_cli_log_level_wins(self):
        with patch("jobboard.main.load_config") as mock_load:
            mock_load.return_value = (AppConfig(), EnvironmentConfig(log_level="WARNING"))
            _, env_config = load_runtime_config(None, "DEBUG")
        assert env_config.log_level == "DEBUG"

    def test_environment_log_level_beats_config(self):
        app_config = AppConfig(logging={"level": "ERROR"})
        with patch("jobboard.main.load_config") as mock_load:
            mock_load.return_value = (app_config, EnvironmentConfig(log_level="WARNING"))
            _, env_config = load_runtime_config(None, None)
        assert env_config.log_level == "WARNING"

    def test_config_log_level_is_fallback(self):
        app_config = AppConfig(logging={"level": "ERROR"})
        with patch("jobboard.main.load_config") as mock_load:
            mock_load.return_value = (app_config, EnvironmentConfig())
            _, env_config = load_runtime_config(Path("config.yaml"), None)

        mock_load.assert_called_once_with(Path("config.yaml"))
        assert env_config.log_level == "ERROR"

    def test_logging_configured_from_runtime_config(self, cli):
        cli.service.list_active_jobs.return_value = []
        main(["--log-level", "DEBUG", "list"])

        kwargs = cli.configure_logging.call_args.kwargs
        assert kwargs["level"] == "DEBUG"
        assert kwargs["format_type"] == "key-value"


# ============================================================================
# Commands
# ============================================================================


class TestListCommand:
    """Test suite for ``jobboard list``."""

    def test_text_output(self, cli, capsys):
        cli.service.list_active_jobs.return_value = [
            make_job("recNew", "2025-11-05", Salary(min=50000, max=80000)),
            make_job("recOld", "2025-11-01"),
        ]

        assert main(["list"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "recNew  2025-11-05  Role recNew @ Example Corp  [$50k-80k/year]",
            "recOld  2025-11-01  Role recOld @ Example Corp  [Not specified]",
        ]

    def test_sort_by_salary(self, cli, capsys):
        cli.service.list_active_jobs.return_value = [
            make_job("recNone"),
            make_job("recHourly", salary=Salary(min=20, unit="hour")),
            make_job("recYearly", salary=Salary(min=60000)),
        ]

        assert main(["list", "--sort", "salary"]) == 0

        ids = [line.split()[0] for line in capsys.readouterr().out.splitlines()]
        assert ids == ["recYearly", "recHourly", "recNone"]

    def test_limit(self, cli, capsys):
        cli.service.list_active_jobs.return_value = [make_job(f"rec{i}") for i in range(5)]

        assert main(["list", "--limit", "2"]) == 0
        assert len(capsys.readouterr().out.splitlines()) == 2

    def test_json_output(self, cli, capsys):
        cli.service.list_active_jobs.return_value = [make_job("recA", salary=Salary(max=4000, currency="EUR", unit="month"))]

        assert main(["list", "--format", "json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data[0]["id"] == "recA"
        assert data[0]["salary_display"] == "€4,000/month"
        assert data[0]["salary"]["currency"] == "EUR"

    def test_empty_listing(self, cli, capsys):
        cli.service.list_active_jobs.return_value = []

        assert main(["list"]) == 0
        assert capsys.readouterr().out == ""

    def test_service_built_from_loaded_config(self, cli, env_config):
        cli.service.list_active_jobs.return_value = []
        main(["list"])

        app_config = cli.load_config.return_value[0]
        cli.service_class.from_config.assert_called_once_with(app_config, env_config)


class TestGetCommand:
    """Test suite for ``jobboard get``."""

    def test_found(self, cli, capsys):
        cli.service.get_job.return_value = make_job(
            "recA",
            languages=["en", "de"],
            workplace_type="Remote",
            remote_region="Europe Only",
            timezone_requirements="CET +/- 2h",
        )

        assert main(["get", "recA"]) == 0

        out = capsys.readouterr().out
        cli.service.get_job.assert_called_once_with("recA")
        assert "Role recA @ Example Corp" in out
        assert "Workplace:     Remote (Europe Only)" in out
        assert "Languages:     English, German" in out
        assert "Timezone:      CET +/- 2h" in out
        assert out.rstrip().endswith("**About:** Do things.")

    def test_json_output(self, cli, capsys):
        cli.service.get_job.return_value = make_job("recA")

        assert main(["get", "recA", "--format", "json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["id"] == "recA"
        assert data["salary_display"] == "Not specified"

    def test_not_found(self, cli, capsys):
        cli.service.get_job.return_value = None

        assert main(["get", "recMissing"]) == 1
        assert "Job not found: recMissing" in capsys.readouterr().err


class TestCheckCommand:
    """Test suite for ``jobboard check``."""

    def test_connection_ok(self, cli, capsys):
        cli.service.test_connection.return_value = True

        assert main(["check"]) == 0
        assert "Record store connection OK" in capsys.readouterr().out

    def test_connection_failed(self, cli, capsys):
        cli.service.test_connection.return_value = False

        assert main(["check"]) == 1
        assert "connection failed" in capsys.readouterr().err

    def test_missing_credentials(self, cli, capsys):
        cli.load_config.return_value = (AppConfig(), EnvironmentConfig())

        assert main(["check"]) == 1

        assert "AIRTABLE_ACCESS_TOKEN, AIRTABLE_BASE_ID" in capsys.readouterr().err
        cli.service.test_connection.assert_not_called()


# ============================================================================
# Error handling
# ============================================================================


class TestErrorHandling:
    """Test suite for exit codes on failure."""

    def test_configuration_error(self, cli, capsys):
        cli.load_config.side_effect = ConfigurationError("Configuration validation failed", errors=["store -> type: bad"])

        assert main(["list"]) == 1

        err = capsys.readouterr().err
        assert "Configuration Error: Configuration validation failed" in err
        assert "store -> type: bad" in err

    def test_unexpected_error(self, cli, capsys):
        cli.service.list_active_jobs.side_effect = RuntimeError("boom")

        assert main(["list"]) == 1
        assert "Fatal error: boom" in capsys.readouterr().err

    def test_keyboard_interrupt(self, cli, capsys):
        cli.service.list_active_jobs.side_effect = KeyboardInterrupt()

        assert main(["list"]) == 130
        assert "Interrupted by user" in capsys.readouterr().err


# ============================================================================
# Output helpers
# ============================================================================


def test_job_to_dict_adds_salary_display():
    data = job_to_dict(make_job("recA", salary=Salary(min=25.5, currency="GBP", unit="hour")))
    assert data["salary_display"] == "£25.5/hour"
    assert data["posted_date"] == "2025-11-01"


def test_format_job_details_on_site_location():
    job = make_job("recA", workplace_type="On-site", workplace_city="Lisbon", workplace_country="Portugal")
    details = format_job_details(job)

    assert "Workplace:     On-site - Lisbon, Portugal" in details
    assert "Languages:" not in details
