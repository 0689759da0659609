import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource


# =============================================================================
# Application Configuration
# =============================================================================


CONFIG_FILE_ENV = "ARCHIVE_CONFIG_FILE"


def _read_config_file() -> dict[str, Any]:
    """Top-level sections from the file named by ARCHIVE_CONFIG_FILE, if it exists."""
    location = os.environ.get(CONFIG_FILE_ENV)
    if not location or not Path(location).is_file():
        return {}
    data = yaml.safe_load(Path(location).read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{location}: expected a mapping of config sections")
    return data


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings read from the archive's YAML config file.

    Sits below environment variables, so ``ARCHIVE_<SECTION>__<KEY>`` still
    overrides a single value from the file.
    """

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)
        self._sections = _read_config_file()

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._sections.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        known = self.settings_cls.model_fields
        return {name: value for name, value in self._sections.items() if name in known}


class Server(BaseModel):
    """Site identity and deployment environment."""

    name: str = "Fic Archive"  # APP_NAME, appended to page titles
    version: str = "0.1.0"
    description: str = "A fan-fiction archive"
    environment: str = "development"  # development, test, staging, production


class SessionConfig(BaseModel):
    """Cookie session configuration."""

    secret_key: str = ""  # Must be set in production
    cookie_name: str = "_archive_session"
    https_only: bool = False
    same_site: str = "lax"
    # Sign-in/sign-out endpoints, exempt from the lost-cookie check
    sessions_paths: list[str] = ["/users/login", "/users/logout"]
    credentials_max_age_days: int = 365


class NavigationConfig(BaseModel):
    """Well-known paths used by redirects."""

    root_path: str = "/"
    sign_in_path: str = "/users/login"
    admins_path: str = "/admins"
    user_path: str = "/users/{login}"
    lost_cookie_path: str = "/lost_cookie"
    auth_error_path: str = "/auth_error"
    timeout_error_path: str = "/timeout_error"
    not_found_path: str = "/404"
    abuse_report_path: str = "/abuse_reports/new"
    max_return_to_length: int = 200  # Longer paths are never stored in the session

    def path_for_user(self, login: str) -> str:
        return self.user_path.format(login=login)


class DisplayConfig(BaseModel):
    """Rendering defaults."""

    default_time_zone: str = "UTC"
    time_format: str = "%a %d %b %Y %I:%M%p %Z"


class CacheConfig(BaseModel):
    """Advisory cache configuration."""

    user_menu_expires_in: int = 2 * 60 * 60  # seconds
    race_condition_ttl: int = 5  # seconds a stale entry is still served while recomputing
    caching_environments: list[str] = ["staging", "production", "test"]


class ContentConfig(BaseModel):
    """Content limits and site-wide versions."""

    min_length: int = 10
    max_length: int = 500_000
    tos_version: int = 2024_11_19  # YYYYMMDD of the board-approved TOS


class AdminSettingsConfig(BaseModel):
    """Initial values for the admin-editable site settings."""

    tag_wrangling_off: bool = False
    enable_test_caching: bool = False


class I18nConfig(BaseModel):
    """Translation catalog configuration."""

    locale: str = "en"
    locales_dir: str = ""  # Empty string = packaged ficarchive/locales


class LoggingConfig(BaseModel):
    """Root logger settings."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @field_validator("level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        return v.upper()

    @property
    def file(self) -> str | None:
        """Get log file path from ARCHIVE_LOG_FILE env var."""
        return os.environ.get("ARCHIVE_LOG_FILE")


class Config(BaseSettings):
    """Archive settings.

    Sources, strongest first: constructor arguments, ``ARCHIVE_*`` environment
    variables, ``.env``, the ARCHIVE_CONFIG_FILE YAML file, secret files.
    """

    server: Server = Server()
    session: SessionConfig = SessionConfig()
    navigation: NavigationConfig = NavigationConfig()
    display: DisplayConfig = DisplayConfig()
    cache: CacheConfig = CacheConfig()
    content: ContentConfig = ContentConfig()
    admin_settings: AdminSettingsConfig = AdminSettingsConfig()
    i18n: I18nConfig = I18nConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = {
        "env_prefix": "ARCHIVE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # ARCHIVE_SESSION__SECRET_KEY -> session.secret_key
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


# Libraries whose INFO output drowns out the archive's own audit lines
_QUIET_LOGGERS = ("asyncio", "httpcore", "httpx", "uvicorn.access")


def _log_handler(config: LoggingConfig) -> logging.Handler:
    if config.file is None:
        return logging.StreamHandler(sys.stderr)
    log_path = Path(config.file).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(log_path, encoding="utf-8")


def configure_logging(config: LoggingConfig) -> None:
    """Send every log record to a single handler: ARCHIVE_LOG_FILE if set, else stderr.

    Called once by the app factory before anything logs. Replaces whatever
    handlers the root logger already had.
    """
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler = _log_handler(config)
    handler.setFormatter(logging.Formatter(config.format, datefmt=config.date_format))
    root.addHandler(handler)
    root.setLevel(config.level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    root.debug("Logging to %s at %s", config.file or "stderr", config.level)
