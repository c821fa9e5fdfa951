"""Integration tests for configuration module."""

import warnings
from pathlib import Path

import pytest

from jobboard.config import (
    AppConfig,
    ConfigurationError,
    SalaryConfig,
    StoreConfig,
    load_config,
)
from jobboard.config.environment import EnvironmentConfig, load_environment_config
from jobboard.config.validators import check_for_warnings

# Test fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"


class TestConfigurationLoading:
    """Test configuration loading from YAML files."""

    def test_load_valid_config(self, mock_env_vars):
        """Test loading a fully specified configuration file."""
        with pytest.warns(UserWarning, match="Legacy mapping mode"):
            app_config, env_config = load_config(FIXTURES_DIR / "valid_config.yaml")

        # Verify store
        assert app_config.store.type == "airtable"
        assert app_config.store.table_name == "Open Roles"
        assert app_config.store.page_size == 50
        assert app_config.store.max_records == 500

        # Verify mapping and salary tables
        assert app_config.mapping.mode == "legacy"
        assert app_config.salary.currency_rates["EUR"] == 1.08
        assert app_config.salary.currency_rates["USD"] == 1.0

        # Verify logging and advanced
        assert app_config.logging.level == "DEBUG"
        assert app_config.logging.format == "json"
        assert app_config.advanced.http_request_timeout == 45
        assert app_config.advanced.user_agent == "JobBoardTests/1.0"

        assert env_config.airtable_access_token == "patTestToken123"

    def test_load_minimal_config(self, mock_env_vars):
        """Test loading a minimal configuration with defaults."""
        app_config, _ = load_config(FIXTURES_DIR / "minimal_config.yaml")

        assert app_config.store.table_name is None
        assert app_config.store.page_size == 100
        assert app_config.store.max_records == 0
        assert app_config.mapping.mode == "unified"
        assert app_config.logging.level == "INFO"
        assert app_config.logging.format == "key-value"
        assert app_config.advanced.http_request_timeout == 30

    def test_accepts_string_path(self, mock_env_vars):
        """Test that a str path works like a Path."""
        app_config, _ = load_config(str(FIXTURES_DIR / "minimal_config.yaml"))
        assert app_config.store.type == "airtable"

    def test_no_config_file_uses_defaults(self, tmp_path, mock_env_vars):
        """Test that defaults apply when no config file is found."""
        mock_env_vars.chdir(tmp_path)
        app_config, _ = load_config()
        assert app_config == AppConfig()

    def test_config_yaml_in_working_directory(self, tmp_path, mock_env_vars):
        """Test that config.yaml is picked up from the working directory."""
        (tmp_path / "config.yaml").write_text("store:\n  page_size: 20\n")
        mock_env_vars.chdir(tmp_path)

        app_config, _ = load_config()
        assert app_config.store.page_size == 20

    def test_config_subdirectory(self, tmp_path, mock_env_vars):
        """Test that config/config.yaml is the second candidate."""
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "config.yaml").write_text("advanced:\n  http_request_timeout: 60\n")
        mock_env_vars.chdir(tmp_path)

        app_config, _ = load_config()
        assert app_config.advanced.http_request_timeout == 60

    def test_empty_file_uses_defaults(self, tmp_path, mock_env_vars):
        """Test that an empty config file is valid."""
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")

        app_config, _ = load_config(config_file)
        assert app_config == AppConfig()

    def test_config_file_not_found(self, mock_env_vars):
        """Test error when an explicit config file doesn't exist."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(Path("nonexistent.yaml"))

        assert "not found" in str(exc_info.value)

    def test_invalid_yaml_syntax(self, tmp_path, mock_env_vars):
        """Test error with invalid YAML syntax."""
        config_file = tmp_path / "invalid.yaml"
        config_file.write_text("store: [unclosed\n  page_size: 10")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)

        assert "Failed to parse YAML" in str(exc_info.value)

    def test_top_level_must_be_mapping(self, tmp_path, mock_env_vars):
        """Test error when the file holds a list instead of a mapping."""
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- store\n- mapping\n")

        with pytest.raises(ConfigurationError, match="mapping at the top level"):
            load_config(config_file)


class TestConfigurationValidation:
    """Test configuration validation rules."""

    def test_invalid_store_type(self, mock_env_vars):
        """Test error with an unsupported store type."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "invalid_store_type.yaml")

        error = exc_info.value
        assert error.message == "Configuration validation failed"
        assert any("store -> type" in message for message in error.errors)

    def test_page_size_out_of_range(self, mock_env_vars):
        """Test error when page_size exceeds the Airtable limit."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "invalid_page_size.yaml")

        assert any("store -> page_size" in message for message in exc_info.value.errors)

    def test_unknown_salary_currency(self, mock_env_vars):
        """Test error when a rate is given for an unsupported currency."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "invalid_salary_rates.yaml")

        assert "JPY" in str(exc_info.value)

    def test_wrong_type_reported(self, tmp_path, mock_env_vars):
        """Test that type errors name the expected type."""
        config_file = tmp_path / "bad_type.yaml"
        config_file.write_text("advanced:\n  http_request_timeout: soon\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)

        assert "expected int" in exc_info.value.errors[0]

    def test_error_render_lists_errors_and_suggestions(self):
        error = ConfigurationError("Broken", errors=["first", "second"], suggestions=["fix it"])
        rendered = str(error)

        assert rendered.startswith("Broken")
        assert "  1. first" in rendered
        assert "  2. second" in rendered
        assert "  - fix it" in rendered

    def test_blank_table_name_falls_back(self):
        assert StoreConfig(table_name="   ").table_name is None

    def test_salary_tables_merge_over_defaults(self):
        salary = SalaryConfig(currency_rates={"gbp": 1.3}, unit_multipliers={"HOUR": 2000})

        assert salary.currency_rates == {"USD": 1.0, "EUR": 1.1, "GBP": 1.3}
        assert salary.unit_multipliers["hour"] == 2000
        assert salary.unit_multipliers["day"] == 260.0

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"currency_rates": {"USD": 0}},
            {"unit_multipliers": {"hour": -1}},
            {"unit_multipliers": {"fortnight": 26}},
        ],
    )
    def test_invalid_salary_tables(self, kwargs):
        with pytest.raises(ValueError):
            SalaryConfig(**kwargs)


class TestConfigurationWarnings:
    """Test non-fatal configuration warnings."""

    def test_clean_config_has_no_warnings(self):
        assert check_for_warnings({"store": {"page_size": 50}}) == []

    def test_legacy_mode_warns(self):
        messages = check_for_warnings({"mapping": {"mode": "legacy"}})
        assert len(messages) == 1
        assert "Legacy mapping mode" in messages[0]

    def test_small_page_size_warns(self):
        messages = check_for_warnings({"store": {"page_size": 5}})
        assert messages == ["Small page_size (5) makes listings issue many requests"]

    def test_unlimited_listing_with_short_timeout_warns(self):
        messages = check_for_warnings({"advanced": {"http_request_timeout": 5}})
        assert any("Unlimited max_records" in message for message in messages)

    def test_capped_listing_with_short_timeout_is_fine(self):
        config = {"store": {"max_records": 100}, "advanced": {"http_request_timeout": 5}}
        assert check_for_warnings(config) == []

    def test_warnings_emitted_on_load(self, tmp_path, mock_env_vars):
        config_file = tmp_path / "small_pages.yaml"
        config_file.write_text("store:\n  page_size: 5\n")

        with pytest.warns(UserWarning, match="Small page_size"):
            load_config(config_file)

    def test_no_warnings_for_minimal_config(self, mock_env_vars):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            load_config(FIXTURES_DIR / "minimal_config.yaml")

        assert not [w for w in caught if issubclass(w.category, UserWarning)]


class TestEnvironmentVariables:
    """Test environment variable loading."""

    def test_load_valid_environment_config(self, mock_env_vars):
        """Test loading valid environment configuration."""
        env_config = load_environment_config()

        assert env_config.airtable_access_token == "patTestToken123"
        assert env_config.airtable_base_id == "appTestBase123"
        assert env_config.airtable_table_name == "Jobs"
        assert env_config.airtable_endpoint_url == "https://api.airtable.com"
        assert env_config.has_credentials

    def test_missing_credentials_are_not_fatal(self, clean_env):
        """Test that missing credentials are reported, not raised."""
        env_config = load_environment_config()

        assert env_config.missing_credentials() == ["AIRTABLE_ACCESS_TOKEN", "AIRTABLE_BASE_ID"]
        assert not env_config.has_credentials
        assert env_config.airtable_table_name == "Jobs"

    def test_blank_values_count_as_unset(self, clean_env):
        clean_env.setenv("AIRTABLE_ACCESS_TOKEN", "   ")
        clean_env.setenv("AIRTABLE_TABLE_NAME", "")

        env_config = load_environment_config()

        assert env_config.airtable_access_token is None
        assert env_config.airtable_table_name == "Jobs"

    def test_endpoint_override(self, mock_env_vars):
        mock_env_vars.setenv("AIRTABLE_ENDPOINT_URL", "http://localhost:9999/")
        assert load_environment_config().airtable_endpoint_url == "http://localhost:9999"

    def test_invalid_endpoint_url(self, mock_env_vars):
        """Test error with a non-http endpoint."""
        mock_env_vars.setenv("AIRTABLE_ENDPOINT_URL", "ftp://example.com")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        assert "AIRTABLE_ENDPOINT_URL" in str(exc_info.value)

    def test_log_level_normalized(self, mock_env_vars):
        mock_env_vars.setenv("LOG_LEVEL", "debug")
        assert load_environment_config().log_level == "DEBUG"

    def test_invalid_log_level(self, mock_env_vars):
        mock_env_vars.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        assert "LOG_LEVEL" in str(exc_info.value)

    def test_environment_config_defaults(self):
        env_config = EnvironmentConfig()
        assert env_config.airtable_table_name == "Jobs"
        assert env_config.log_level is None
