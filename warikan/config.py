"""Configuration file management for warikan."""

import os
import tomllib
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo

import tomli_w
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from warikan.domain.credit_card import DEFAULT_CARD_KEYWORDS
from warikan.errors import ConfigError

DEFAULT_TIMEZONE = "Asia/Tokyo"


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "warikan" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    default_config: dict[str, Any] = {
        "zaim": {
            "consumer_key": "",
            "consumer_secret": "",
            "access_token": "",
            "access_token_secret": "",
        },
        "line": {"channel_access_token": ""},
        "app": {
            "web_app_url": "",
            "card_keywords": list(DEFAULT_CARD_KEYWORDS),
            "timezone": DEFAULT_TIMEZONE,
            "log_level": "INFO",
        },
        "store": {},
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(default_config, f)

    os.chmod(config_path, 0o600)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


@dataclass(frozen=True)
class ZaimCredentials:
    """OAuth 1.0a credentials for the Zaim ledger API."""

    consumer_key: str
    consumer_secret: str
    access_token: str
    access_token_secret: str


class Settings(BaseSettings):
    """Immutable application settings, passed explicitly to services.

    Values come from keyword arguments (the config file), overridden by
    environment variables named by each field's alias.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
        env_ignore_empty=True,
    )

    zaim_consumer_key: str = Field("", alias="ZAIM_CONSUMER_KEY")
    zaim_consumer_secret: str = Field("", alias="ZAIM_CONSUMER_SECRET")
    zaim_access_token: str = Field("", alias="ZAIM_ACCESS_TOKEN")
    zaim_access_token_secret: str = Field("", alias="ZAIM_ACCESS_TOKEN_SECRET")
    line_channel_access_token: str = Field("", alias="LINE_CHANNEL_ACCESS_TOKEN")
    web_app_url: str = Field("", alias="WEB_APP_URL")
    card_keywords: tuple[str, ...] = Field(DEFAULT_CARD_KEYWORDS, alias="WARIKAN_CARD_KEYWORDS")
    timezone: str = Field(DEFAULT_TIMEZONE, alias="WARIKAN_TIMEZONE")
    log_level: str = Field("INFO", alias="WARIKAN_LOG_LEVEL")
    db_path: Path | None = Field(None, alias="WARIKAN_DB_PATH")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment wins over values loaded from the config file.
        return env_settings, init_settings

    @field_validator("card_keywords", mode="before")
    @classmethod
    def _single_keyword(cls, value: Any) -> Any:
        if isinstance(value, str):
            return (value,)
        return value or DEFAULT_CARD_KEYWORDS

    @field_validator("db_path", mode="before")
    @classmethod
    def _expand_db_path(cls, value: Any) -> Any:
        if not value:
            return None
        return Path(value).expanduser()

    def zaim_credentials(self) -> ZaimCredentials:
        """Return the ledger credentials.

        Raises:
            ConfigError: If any credential is empty.
        """
        values = {
            "zaim.consumer_key": self.zaim_consumer_key,
            "zaim.consumer_secret": self.zaim_consumer_secret,
            "zaim.access_token": self.zaim_access_token,
            "zaim.access_token_secret": self.zaim_access_token_secret,
        }
        missing = [name for name, value in values.items() if not value]
        if missing:
            raise ConfigError(f"Zaim OAuth credentials not configured: {', '.join(missing)}")
        return ZaimCredentials(
            consumer_key=self.zaim_consumer_key,
            consumer_secret=self.zaim_consumer_secret,
            access_token=self.zaim_access_token,
            access_token_secret=self.zaim_access_token_secret,
        )

    def line_token(self) -> str:
        """Return the LINE channel access token.

        Raises:
            ConfigError: If the token is empty.
        """
        if not self.line_channel_access_token:
            raise ConfigError("LINE channel access token not configured: line.channel_access_token")
        return self.line_channel_access_token

    def today(self) -> date:
        """Today's date in the configured timezone."""
        return datetime.now(ZoneInfo(self.timezone)).date()


def config_values(config: dict[str, Any]) -> dict[str, Any]:
    """Map the config file's sections onto Settings field names."""
    values: dict[str, Any] = {f"zaim_{key}": value for key, value in config.get("zaim", {}).items()}
    values.update({f"line_{key}": value for key, value in config.get("line", {}).items()})
    values.update(config.get("app", {}))
    values.update(config.get("store", {}))
    return values


def settings_from_config(config: dict[str, Any]) -> Settings:
    """Build Settings from a config dictionary, with environment overrides.

    Args:
        config: Parsed config file contents.

    Returns:
        Settings instance.

    Raises:
        pydantic.ValidationError: If a value has the wrong type.
    """
    return Settings(**config_values(config))


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings from the config file, if present, and the environment.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Settings instance. A missing config file means env-only settings.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = {}
    return settings_from_config(config)
