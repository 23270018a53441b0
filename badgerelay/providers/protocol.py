"""CIProvider Protocol, the pluggable CI status interface.

Implementations: GitHubActionsProvider (providers/github.py).
Selection via create_provider() (providers/factory.py).

A provider is built once at startup and shared by all in-flight requests.
It must hold no per-request mutable state.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from badgerelay.models.shield import ShieldSchema


@runtime_checkable
class CIProvider(Protocol):
    """Latest-build status for an (owner, repo, branch) triple."""

    brand: str
    """Key into BRAND_LOGOS; selects the badge's namedLogo."""

    async def get_status(self, owner: str, repo: str, branch: str) -> ShieldSchema:
        """Return the badge for the most recent workflow run on ``branch``.

        Raises:
            NotFoundError: No runs exist for the branch.
            UpstreamError: Any transport, auth or API failure.
        """
        ...

    async def aclose(self) -> None:
        """Release network resources. Called once at shutdown."""
        ...
