"""Health endpoint for badgerelay.

GET /health always answers 200 ``{"alive": true}``. It reads nothing from
app.state: it must stay green when the upstream credential is invalid or
before the lifespan has built the provider.
"""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, bool]:
    return {"alive": True}
