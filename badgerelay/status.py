"""CI status endpoint for badgerelay.

GET /ci/status/{user}/{repo}/{branch}/

Per request:
  1. Path parameters come straight from routing; no further validation.
  2. Owner checked against the allow-list → ForbiddenError when rejected.
     This happens before the upstream call, so disallowed owners never
     cost a GitHub API request.
  3. provider.get_status() → NotFoundError / UpstreamError propagate.
  4. 200 with the shields.io endpoint JSON.

RelayErrors are turned into plain-text 400 responses by the exception
handler registered in main.create_app().
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from badgerelay.allowlist import is_allowed
from badgerelay.context import RelayContext, get_context
from badgerelay.errors import ForbiddenError
from badgerelay.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["status"])


@router.get("/ci/status/{user}/{repo}/{branch}/")
async def ci_status(
    user: str,
    repo: str,
    branch: str,
    context: RelayContext = Depends(get_context),
) -> JSONResponse:
    """Return the badge payload for the latest workflow run on ``branch``."""
    logger.debug("CI status requested", user=user, repo=repo, branch=branch)

    if not is_allowed(context.allowed_users, user):
        raise ForbiddenError()

    shield = await context.provider.get_status(user, repo, branch)

    logger.info(
        "CI status served",
        user=user,
        repo=repo,
        branch=branch,
        message=shield.message,
        color=shield.color,
    )
    content: dict[str, Any] = shield.to_dict()
    return JSONResponse(content=content)
