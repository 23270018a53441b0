"""Process-wide relay context.

RelayContext bundles everything a status request needs: configuration,
the CI provider and the allow-list. It is built once in the lifespan and
stored at ``app.state.context``; handlers receive it through the
get_context() dependency. Nothing in it is mutated after startup.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import HTTPException, Request

from badgerelay.config import Config
from badgerelay.providers.protocol import CIProvider


@dataclass(frozen=True)
class RelayContext:
    config: Config
    provider: CIProvider

    @property
    def allowed_users(self) -> tuple[str, ...]:
        return self.config.allowed_users


def get_context(request: Request) -> RelayContext:
    """FastAPI dependency: the RelayContext, or HTTP 503 before startup completes."""
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise HTTPException(status_code=503, detail="badgerelay is starting up")
    return context
