"""Programmatic uvicorn entry point for badgerelay.

Reads host and port from the loaded config (127.0.0.1:80 by default) and
starts uvicorn with fixed connection limits:

  --limit-concurrency 100  Max concurrent connections; HTTP 503 when exceeded
  --backlog 50             OS connection queue depth
  --timeout-keep-alive 15  Idle connection timeout (seconds)

Upstream GitHub calls are separately bounded by the 15 s httpx timeout
(constants.UPSTREAM_TIMEOUT_S).

Usage:
    python -m badgerelay.run
    badgerelay                 # via pyproject.toml [project.scripts]

A missing GITHUB_ACCESS_TOKEN (or any other ConfigError) prints
``CONFIG ERROR: ...`` to stderr and exits 1 before the server starts.
"""

from __future__ import annotations

import sys

import uvicorn

from badgerelay.config import load_config
from badgerelay.constants import SERVER_TIMEOUT_KEEP_ALIVE
from badgerelay.errors import ConfigError

UVICORN_LIMIT_CONCURRENCY: int = 100

UVICORN_BACKLOG: int = 50


def main() -> None:
    """Start the badgerelay server.

    Raises:
        SystemExit(1): On any configuration error.
    """
    try:
        config = load_config()
    except ConfigError as exc:
        print(f"CONFIG ERROR: {exc.message}", file=sys.stderr)
        raise SystemExit(1) from exc

    uvicorn.run(
        "badgerelay.main:app",
        host=config.server.host,
        port=config.server.port,
        limit_concurrency=UVICORN_LIMIT_CONCURRENCY,
        backlog=UVICORN_BACKLOG,
        timeout_keep_alive=SERVER_TIMEOUT_KEEP_ALIVE,
    )


if __name__ == "__main__":
    main()
