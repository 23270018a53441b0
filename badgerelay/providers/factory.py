"""CI provider factory: provider selection and initialization.

create_provider() is the startup step that turns configuration into an
authenticated provider. It runs once in the FastAPI lifespan, before the
server accepts requests; any failure here is fatal to startup.
"""

from __future__ import annotations

from typing import Optional

import httpx

from badgerelay.config import Config
from badgerelay.errors import ConfigError
from badgerelay.providers.github import GitHubActionsProvider, create_github_client
from badgerelay.providers.protocol import CIProvider
from badgerelay.utils.logger import get_logger

logger = get_logger(__name__)


def create_provider(
    config: Config,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> CIProvider:
    """Create the configured CI provider.

    Args:
        config:    Loaded Config (token already validated by load_config()).
        transport: Optional httpx transport override, used by tests.

    Raises:
        ConfigError: Unknown provider, or the credential is empty.
    """
    if config.provider != "github":
        raise ConfigError(f"Unsupported provider: '{config.provider}'")
    if not config.github.token:
        raise ConfigError("GitHub access token is empty")

    client = create_github_client(
        token=config.github.token,
        api_url=config.github.api_url,
        timeout_s=config.github.timeout_s,
        transport=transport,
    )
    logger.info(
        "CI provider created",
        provider=config.provider,
        api_url=config.github.api_url,
        timeout_s=config.github.timeout_s,
    )
    return GitHubActionsProvider(client)
