"""GitHub Actions CI provider.

Two REST calls per badge request, no caching and no retries:

  GET /repos/{owner}/{repo}/actions/runs?branch={branch}
      → workflow_runs[0] (GitHub orders runs newest first; not re-sorted)
  GET /repos/{owner}/{repo}/actions/workflows/{workflow_id}
      → workflow display name

owner and repo are percent-encoded as single path segments. Redirects are
followed: GitHub answers 301 for renamed or transferred repositories.

Failure mapping:
  - empty workflow_runs                      → NotFoundError("workflow not found")
  - httpx transport errors (connect/timeout) → UpstreamError(str(exc))
  - non-2xx responses                        → UpstreamError("GET <url>: <status> <message>")
  - non-JSON or missing fields               → UpstreamError

The httpx.AsyncClient is created once at startup by create_github_client()
and shared across requests; it is never instantiated per-request.
"""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote

import httpx

from badgerelay.constants import (
    GITHUB_ACCEPT,
    GITHUB_API_URL,
    GITHUB_API_VERSION,
    UPSTREAM_TIMEOUT_S,
    USER_AGENT,
)
from badgerelay.errors import NotFoundError, UpstreamError
from badgerelay.models.shield import ShieldSchema, build_shield
from badgerelay.utils.logger import get_logger, log_duration

logger = get_logger(__name__)


def create_github_client(
    token: str,
    api_url: str = GITHUB_API_URL,
    timeout_s: float = UPSTREAM_TIMEOUT_S,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create the shared, authenticated GitHub API client.

    Args:
        token:     GitHub access token (sent as a Bearer credential).
        api_url:   REST API base URL.
        timeout_s: Per-request timeout for every phase (connect/read/write/pool).
        transport: Optional transport override (httpx.MockTransport in tests).
    """
    return httpx.AsyncClient(
        base_url=api_url,
        headers={
            "Authorization": f"Bearer {token}",
            "Accept": GITHUB_ACCEPT,
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
            "User-Agent": USER_AGENT,
        },
        timeout=httpx.Timeout(timeout_s),
        follow_redirects=True,
        transport=transport,
    )


class GitHubActionsProvider:
    """CIProvider backed by the GitHub Actions REST API."""

    brand = "github"

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def get_status(self, owner: str, repo: str, branch: str) -> ShieldSchema:
        runs = await self._get_json(
            f"/repos/{_segment(owner)}/{_segment(repo)}/actions/runs",
            params={"branch": branch},
        )
        workflow_runs = runs.get("workflow_runs")
        if not isinstance(workflow_runs, list):
            raise UpstreamError("malformed workflow runs response: missing 'workflow_runs'")
        if not workflow_runs:
            raise NotFoundError()

        latest = workflow_runs[0]
        if not isinstance(latest, dict):
            raise UpstreamError("malformed workflow runs response: run is not an object")
        workflow_id = latest.get("workflow_id")
        if workflow_id is None:
            raise UpstreamError("malformed workflow run: missing 'workflow_id'")
        # conclusion is null while a run is still in progress
        conclusion = latest.get("conclusion") or ""

        workflow = await self._get_json(
            f"/repos/{_segment(owner)}/{_segment(repo)}"
            f"/actions/workflows/{_segment(str(workflow_id))}"
        )
        workflow_name = workflow.get("name") or ""

        logger.info(
            "Workflow status resolved",
            owner=owner,
            repo=repo,
            branch=branch,
            workflow=workflow_name,
            conclusion=conclusion,
        )
        return build_shield(owner, repo, workflow_name, conclusion, brand=self.brand)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get_json(
        self, path: str, params: Optional[dict[str, str]] = None
    ) -> dict[str, Any]:
        """GET ``path`` and decode a JSON object, raising UpstreamError on any failure."""
        with log_duration("github_api_call", logger, path=path):
            try:
                response = await self._client.get(path, params=params)
            except httpx.HTTPError as exc:
                raise UpstreamError(str(exc) or type(exc).__name__) from exc

        if response.is_error:
            raise UpstreamError(_describe_error(response))

        try:
            body = response.json()
        except ValueError as exc:
            raise UpstreamError(
                f"{response.request.method} {response.request.url}: invalid JSON body"
            ) from exc
        if not isinstance(body, dict):
            raise UpstreamError(
                f"{response.request.method} {response.request.url}: unexpected JSON payload"
            )
        return body


def _describe_error(response: httpx.Response) -> str:
    """Format a non-2xx GitHub response as '<METHOD> <url>: <status> <message>'."""
    detail = ""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        detail = str(body["message"])
    else:
        detail = response.reason_phrase

    request = response.request
    return f"{request.method} {request.url}: {response.status_code} {detail}".rstrip()


def _segment(value: str) -> str:
    """Percent-encode one URL path segment; '/', '?' and '#' never pass through."""
    return quote(value, safe="")
