"""Configuration loading from YAML and environment.

Secrets (GitHub token, SMTP password) are taken from environment variables
or from files (Docker secrets). Never put real credentials in config files
committed to the repo.
"""

import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_WATERMARK_PATH = "/tmp/gist-notifications-last-run-time"
DEFAULT_SMTP_SERVER = "smtp.gmail.com"
SUBMISSION_PORT = 587


def _read_secret(env: Mapping[str, str], env_key: str, file_env_key: str) -> str | None:
    """Read secret from env var or from file path in env (e.g. Docker
    secrets)."""
    value = (env.get(env_key) or "").strip()
    if value:
        return value
    file_path = env.get(file_env_key)
    if file_path:
        return Path(file_path).read_text().strip() or None
    return None


def _strip_secret(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def _usable(value: str | None) -> str | None:
    """Value unless empty or an unresolved ${VAR} placeholder."""
    if value and not value.startswith("${"):
        return value
    return None


class GitHubConfig(BaseSettings):
    """GitHub API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    token: str | None = Field(default=None, description="Optional token for higher rate limits")
    api_url: str = Field(default="https://api.github.com", description="API base URL")
    timeout: int = Field(default=30, ge=1, description="Per-request timeout in seconds")
    # Pause before each comments request (env: GITHUB_COMMENT_FETCH_DELAY)
    comment_fetch_delay: float = Field(default=3.0, ge=0, description="Seconds to wait before each comments fetch")

    @field_validator("token")
    @classmethod
    def strip_token(cls, v: str | None) -> str | None:
        return _strip_secret(v)


class MailConfig(BaseSettings):
    """Outbound mail (SMTP submission) settings."""

    model_config = SettingsConfigDict(env_prefix="SMTP_", extra="ignore")

    server: str = Field(default=DEFAULT_SMTP_SERVER, description="Mail relay host")
    port: int = Field(default=SUBMISSION_PORT, ge=1, le=65535, description="Submission port")
    sender: str | None = Field(default=None, description="Sender address, also the SMTP login")
    recipient: str | None = Field(default=None, description="Digest recipient address")
    password: str | None = Field(default=None, description="Sender credential; prefer env or secret file")

    @field_validator("password")
    @classmethod
    def strip_password(cls, v: str | None) -> str | None:
        return _strip_secret(v)


class WatchConfig(BaseSettings):
    """Whose gists to watch and where the watermark lives."""

    model_config = SettingsConfigDict(env_prefix="WATCH_", extra="ignore")

    username: str | None = Field(default=None, description="GitHub user whose gists are polled")
    watermark_path: Path = Field(default=Path(DEFAULT_WATERMARK_PATH), description="Last run time file")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    mail: MailConfig = Field(default_factory=MailConfig)
    watch: WatchConfig = Field(default_factory=WatchConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def github_token_resolved(self) -> str | None:
        """GitHub token, unless unset or an unresolved placeholder."""
        return _usable(self.github.token)

    @property
    def smtp_password_resolved(self) -> str | None:
        """SMTP password, unless unset or an unresolved placeholder."""
        return _usable(self.mail.password)


def _substitute_env(value: Any, env: Mapping[str, str]) -> Any:
    """Replace ${VAR} and $VAR in strings with values from env."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v, env) for v in value]
    return value


def load_config(config_path: Path | None = None, env: Mapping[str, str] | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    A missing file is not an error: every section falls back to its env
    variables and defaults. ``env`` (default ``os.environ``) feeds ${VAR}
    substitution and the secret fallbacks: GITHUB_TOKEN or GITHUB_TOKEN_FILE,
    SMTP_PASSWORD or SMTP_PASSWORD_FILE.
    """
    env = os.environ if env is None else env

    raw: dict[str, Any] = {}
    if config_path is not None and config_path.is_file():
        raw = yaml.safe_load(config_path.read_text()) or {}
        raw = _substitute_env(raw, env)

    github = GitHubConfig(**(raw.get("github") or {}))
    if not _usable(github.token):
        github = github.model_copy(update={"token": _read_secret(env, "GITHUB_TOKEN", "GITHUB_TOKEN_FILE")})
    mail = MailConfig(**(raw.get("mail") or {}))
    if not _usable(mail.password):
        mail = mail.model_copy(update={"password": _read_secret(env, "SMTP_PASSWORD", "SMTP_PASSWORD_FILE")})

    return AppConfig(
        github=github,
        mail=mail,
        watch=WatchConfig(**(raw.get("watch") or {})),
        logging=LoggingConfig(**(raw.get("logging") or {})),
    )
