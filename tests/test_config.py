"""Tests for warikan.config."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from warikan.config import create_default_config, load_config, load_settings, settings_from_config
from warikan.errors import ConfigError

FULL_CONFIG = {
    "zaim": {
        "consumer_key": "ck",
        "consumer_secret": "cs",
        "access_token": "at",
        "access_token_secret": "ats",
    },
    "line": {"channel_access_token": "line-token"},
    "app": {"web_app_url": "https://example.com/app", "card_keywords": ["イオン", "カード"]},
    "store": {"db_path": "/tmp/warikan-test.db"},
}


class TestSettingsFromConfig:
    """Tests for settings_from_config."""

    def test_reads_all_sections(self) -> None:
        """Should map every config section onto Settings."""
        settings = settings_from_config(FULL_CONFIG)

        credentials = settings.zaim_credentials()
        assert credentials.consumer_key == "ck"
        assert credentials.access_token_secret == "ats"
        assert settings.line_token() == "line-token"
        assert settings.web_app_url == "https://example.com/app"
        assert settings.card_keywords == ("イオン", "カード")
        assert settings.db_path == Path("/tmp/warikan-test.db")

    def test_defaults(self) -> None:
        """Should fall back to defaults for an empty config."""
        settings = settings_from_config({})

        assert settings.card_keywords == ("楽天", "カード")
        assert settings.timezone == "Asia/Tokyo"
        assert settings.db_path is None
        assert settings.web_app_url == ""

    def test_environment_overrides_file(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should prefer environment variables over the file."""
        monkeypatch.setenv("LINE_CHANNEL_ACCESS_TOKEN", "from-env")
        monkeypatch.setenv("ZAIM_CONSUMER_KEY", "env-ck")

        settings = settings_from_config(FULL_CONFIG)

        assert settings.line_token() == "from-env"
        assert settings.zaim_credentials().consumer_key == "env-ck"
        assert settings.zaim_credentials().consumer_secret == "cs"

    def test_empty_environment_value_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should keep the file value when the variable is set but empty."""
        monkeypatch.setenv("WEB_APP_URL", "")

        assert settings_from_config(FULL_CONFIG).web_app_url == "https://example.com/app"

    def test_environment_values_are_coerced(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should convert environment strings to the field types."""
        monkeypatch.setenv("WARIKAN_DB_PATH", "~/warikan.db")
        monkeypatch.setenv("WARIKAN_CARD_KEYWORDS", '["イオン"]')

        settings = settings_from_config({})

        assert settings.db_path == Path("~/warikan.db").expanduser()
        assert settings.card_keywords == ("イオン",)

    def test_single_keyword_string(self) -> None:
        """Should accept a bare string for card_keywords."""
        assert settings_from_config({"app": {"card_keywords": "イオン"}}).card_keywords == ("イオン",)

    def test_settings_are_frozen(self) -> None:
        """Should refuse assignment after construction."""
        settings = settings_from_config({})

        with pytest.raises(ValidationError):
            settings.web_app_url = "https://example.com/other"

    def test_missing_credentials_raise(self) -> None:
        """Should name the missing credentials."""
        settings = settings_from_config({"zaim": {"consumer_key": "ck"}})

        with pytest.raises(ConfigError, match="zaim.consumer_secret"):
            settings.zaim_credentials()
        with pytest.raises(ConfigError, match="line.channel_access_token"):
            settings.line_token()


class TestConfigFile:
    """Tests for the TOML config file helpers."""

    def test_default_config_round_trip(self, tmp_path: Path) -> None:
        """Should write a loadable default config with private permissions."""
        config_path = tmp_path / "warikan" / "config.toml"

        create_default_config(config_path)

        config = load_config(config_path)
        assert config["app"]["card_keywords"] == ["楽天", "カード"]
        assert config["zaim"]["consumer_key"] == ""
        assert oct(config_path.stat().st_mode & 0o777) == "0o600"

    def test_load_settings_without_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should fall back to environment-only settings."""
        monkeypatch.setenv("WEB_APP_URL", "https://example.com/env")

        settings = load_settings(tmp_path / "missing.toml")

        assert settings.web_app_url == "https://example.com/env"
