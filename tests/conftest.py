"""Root test configuration for badgerelay.

Every test runs with a known GitHub token and no allow-list, and with the
default config-file search paths disabled so a developer's local
``.badgerelay/config.yaml`` cannot leak into results.

Fixtures:
  fake_provider — in-memory CIProvider test double
  make_client   — factory returning a started TestClient wired to a provider
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, Optional

import pytest
from starlette.testclient import TestClient

from badgerelay.config import Config, GitHubConfig
from badgerelay.errors import NotFoundError, RelayError
from badgerelay.models.shield import ShieldSchema, build_shield

TEST_TOKEN = "ghp_test_token"


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Provide a token and strip every other badgerelay env override."""
    monkeypatch.setenv("GITHUB_ACCESS_TOKEN", TEST_TOKEN)
    for name in (
        "ALLOWED_USERS",
        "GITHUB_API_URL",
        "BADGERELAY_CONFIG",
        "BADGERELAY_HOST",
        "BADGERELAY_PORT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("badgerelay.config.DEFAULT_CONFIG_PATHS", [])


class FakeProvider:
    """CIProvider double returning canned runs keyed by (owner, repo, branch).

    ``runs`` maps the triple to ``(workflow_name, conclusion)``; a missing
    triple raises NotFoundError. ``error`` (if set) is raised for every call.
    """

    brand = "github"

    def __init__(
        self,
        runs: Optional[dict[tuple[str, str, str], tuple[str, str]]] = None,
        error: Optional[RelayError] = None,
    ) -> None:
        self.runs = runs or {}
        self.error = error
        self.calls: list[tuple[str, str, str]] = []
        self.closed = False

    async def get_status(self, owner: str, repo: str, branch: str) -> ShieldSchema:
        self.calls.append((owner, repo, branch))
        if self.error is not None:
            raise self.error
        if (owner, repo, branch) not in self.runs:
            raise NotFoundError()
        name, conclusion = self.runs[(owner, repo, branch)]
        return build_shield(owner, repo, name, conclusion, brand=self.brand)

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def make_fake_provider() -> Callable[..., FakeProvider]:
    return FakeProvider


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider(
        runs={
            ("acme", "widget", "main"): ("Build", "success"),
            ("acme", "widget", "broken"): ("Build", "failure"),
        }
    )


@pytest.fixture
def make_client(
    monkeypatch: pytest.MonkeyPatch,
) -> Iterator[Callable[..., TestClient]]:
    """Build a started app whose lifespan uses the given provider.

    Usage::

        client = make_client(provider, allowed_users=("acme",))
    """
    from badgerelay.main import create_app

    opened: list[TestClient] = []

    def _factory(provider: Any, allowed_users: tuple[str, ...] = ()) -> TestClient:
        config = Config(
            github=GitHubConfig(token=TEST_TOKEN),
            allowed_users=allowed_users,
        )
        monkeypatch.setattr("badgerelay.main.load_config", lambda: config)
        monkeypatch.setattr("badgerelay.main.create_provider", lambda _config: provider)
        client = TestClient(create_app())
        client.__enter__()
        opened.append(client)
        return client

    yield _factory

    for client in opened:
        client.__exit__(None, None, None)
