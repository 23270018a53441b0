"""Config loading for badgerelay.

Reads an optional YAML file, then applies environment overrides.
Raises ConfigError on any invalid setting and when the GitHub credential is
missing, so the process refuses to start.

Config file search order:
  1. ``config_path`` argument (if provided, for tests or explicit override)
  2. BADGERELAY_CONFIG environment variable (if set)
  3. ``.badgerelay/config.yaml`` (working directory)
  4. ``~/.badgerelay/config.yaml`` (home directory)

Environment variables (always win over the file):
  GITHUB_ACCESS_TOKEN — required upstream credential (never read from the file)
  ALLOWED_USERS       — comma-separated owner allow-list
  GITHUB_API_URL      — upstream base URL (GitHub Enterprise)
  BADGERELAY_HOST     — bind host
  BADGERELAY_PORT     — bind port (integer)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

import yaml

from badgerelay.allowlist import parse_allowlist
from badgerelay.constants import (
    BRAND_LOGOS,
    DEFAULT_HOST,
    DEFAULT_PORT,
    GITHUB_API_URL,
    UPSTREAM_TIMEOUT_S,
)
from badgerelay.errors import ConfigError
from badgerelay.utils.logger import get_logger

logger = get_logger(__name__)

SUPPORTED_VERSIONS: frozenset[int] = frozenset({1})

# CI providers with an implementation in badgerelay.providers
SUPPORTED_PROVIDERS: frozenset[str] = frozenset(BRAND_LOGOS)

DEFAULT_CONFIG_PATHS = [
    ".badgerelay/config.yaml",
    os.path.expanduser("~/.badgerelay/config.yaml"),
]

ENV_TOKEN = "GITHUB_ACCESS_TOKEN"
ENV_ALLOWED_USERS = "ALLOWED_USERS"
ENV_API_URL = "GITHUB_API_URL"
ENV_HOST = "BADGERELAY_HOST"
ENV_PORT = "BADGERELAY_PORT"
ENV_CONFIG = "BADGERELAY_CONFIG"


# ─── Dataclasses ─────────────────────────────────────────────────────────────


@dataclass
class GitHubConfig:
    """GitHub REST API settings."""

    api_url: str = GITHUB_API_URL
    timeout_s: float = UPSTREAM_TIMEOUT_S
    token: str = field(default="", repr=False)


@dataclass
class ServerConfig:
    """Listener binding."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


@dataclass
class Config:
    """Root configuration object.

    All fields except the GitHub token have safe defaults; load_config()
    enforces the token.
    """

    version: int = 1
    provider: str = "github"
    github: GitHubConfig = field(default_factory=GitHubConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    allowed_users: tuple[str, ...] = ()
    path: Optional[str] = None

    @classmethod
    def defaults(cls) -> "Config":
        return cls()

    @classmethod
    def from_dict(cls, raw: dict, path: Optional[str] = None) -> "Config":
        """Construct Config from a parsed YAML dict.

        Unknown keys are ignored.

        Raises:
            ConfigError: On an unsupported provider or a malformed section.
        """
        provider = raw.get("provider", "github")
        if provider not in SUPPORTED_PROVIDERS:
            raise ConfigError(
                f"Unsupported provider: '{provider}'. "
                f"Supported values: {sorted(SUPPORTED_PROVIDERS)}."
            )

        github_raw = _section(raw, "github")
        server_raw = _section(raw, "server")

        github = GitHubConfig(
            api_url=github_raw.get("api_url", GITHUB_API_URL),
            timeout_s=_parse_timeout(
                github_raw.get("timeout_s", UPSTREAM_TIMEOUT_S), "github.timeout_s"
            ),
        )
        server = ServerConfig(
            host=server_raw.get("host", DEFAULT_HOST),
            port=_parse_port(server_raw.get("port", DEFAULT_PORT), "server.port"),
        )

        return cls(
            version=raw.get("version", 1),
            provider=provider,
            github=github,
            server=server,
            allowed_users=parse_allowlist(raw.get("allowed_users")),
            path=path,
        )


# ─── Config loading ───────────────────────────────────────────────────────────


def load_config(config_path: Optional[str] = None) -> Config:
    """Load and validate badgerelay configuration.

    A missing config file is not an error; defaults are used. Environment
    overrides are applied in both cases.

    Returns:
        Fully populated Config, including the GitHub token.

    Raises:
        ConfigError: On YAML parse errors, a missing or unsupported
                     ``version``, an unsupported provider, an invalid port or timeout,
                     or a missing GITHUB_ACCESS_TOKEN.
    """
    found_path = _find_config_file(config_path)

    if found_path is None:
        logger.debug("No config file found, using defaults")
        config = Config.defaults()
    else:
        config = Config.from_dict(_read_config_file(found_path), path=found_path)

    _apply_env_overrides(config)

    if config.server.host == "0.0.0.0":
        logger.warning(
            "badgerelay is configured to bind on 0.0.0.0 (all interfaces)",
            port=config.server.port,
        )

    logger.info(
        "Config loaded",
        path=found_path,
        provider=config.provider,
        api_url=config.github.api_url,
        allowed_users=list(config.allowed_users),
        host=config.server.host,
        port=config.server.port,
    )
    return config


def _find_config_file(config_path: Optional[str]) -> Optional[str]:
    search_paths: list[str] = []
    if config_path:
        search_paths.append(config_path)
    env_config = os.environ.get(ENV_CONFIG)
    if env_config:
        search_paths.append(env_config)
    search_paths.extend(DEFAULT_CONFIG_PATHS)

    for candidate in search_paths:
        expanded = os.path.expanduser(candidate)
        if os.path.isfile(expanded):
            return expanded
    return None


def _read_config_file(path: str) -> dict:
    logger.info("Loading config", path=path)
    try:
        with open(path) as fh:
            raw = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Could not read {path}: {exc}") from exc

    if raw is None:
        raise ConfigError(
            f"{path} is missing the required 'version' field. "
            "Add 'version: 1' to the top of your config file."
        )
    if not isinstance(raw, dict):
        raise ConfigError(f"{path} is not a valid YAML mapping.")

    version = raw.get("version")
    if version is None:
        raise ConfigError(
            f"{path} is missing the required 'version' field. "
            "Add 'version: 1' to the top of your config file."
        )
    if version not in SUPPORTED_VERSIONS:
        raise ConfigError(
            f"Unsupported config version: {version}. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}."
        )
    return raw


def _apply_env_overrides(config: Config) -> None:
    """Apply environment variable overrides to a Config object in-place.

    Raises:
        ConfigError: If GITHUB_ACCESS_TOKEN is unset/empty or BADGERELAY_PORT
                     is not an integer.
    """
    token = os.environ.get(ENV_TOKEN, "")
    if not token:
        raise ConfigError(f"No {ENV_TOKEN} set in environment")
    config.github.token = token

    allowed = os.environ.get(ENV_ALLOWED_USERS)
    if allowed:
        config.allowed_users = parse_allowlist(allowed)

    api_url = os.environ.get(ENV_API_URL)
    if api_url:
        config.github.api_url = api_url

    host = os.environ.get(ENV_HOST)
    if host:
        config.server.host = host

    port = os.environ.get(ENV_PORT)
    if port is not None:
        config.server.port = _parse_port(port, ENV_PORT)


def _section(raw: dict, name: str) -> dict:
    value = raw.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{name}' must be a mapping, got {type(value).__name__}")
    return value


def _parse_port(value: object, source: str) -> int:
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{source} is not a valid integer: '{value}'") from exc


def _parse_timeout(value: object, source: str) -> float:
    try:
        timeout = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{source} is not a valid number: '{value}'") from exc
    if not timeout > 0:
        raise ConfigError(f"{source} must be greater than zero, got {timeout}")
    return timeout
