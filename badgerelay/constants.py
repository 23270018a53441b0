"""Shared constants for badgerelay.

Schema values, palette colors, brand logos, timeouts and bind defaults used
across modules are defined here. Import from here; no magic values elsewhere.
"""

# ─── shields.io endpoint schema ───────────────────────────────────────────────

# Always 1 (https://shields.io/badges/endpoint-badge).
SCHEMA_VERSION: int = 1

COLOR_SUCCESS: str = "brightgreen"
COLOR_FAILURE: str = "red"

# The only conclusion rendered green.
SUCCESS_CONCLUSION: str = "success"

# Logical CI brand → shields.io namedLogo value.
BRAND_LOGOS: dict[str, str] = {
    "github": "GitHub Actions",
}

DEFAULT_BRAND: str = "github"

# ─── Upstream (GitHub REST API) ───────────────────────────────────────────────

GITHUB_API_URL: str = "https://api.github.com"
GITHUB_API_VERSION: str = "2022-11-28"
GITHUB_ACCEPT: str = "application/vnd.github+json"
USER_AGENT: str = "badgerelay/1.0"

# Bounds worst-case latency of a single upstream call (connect/read/write/pool).
UPSTREAM_TIMEOUT_S: float = 15.0

# ─── Server ───────────────────────────────────────────────────────────────────

DEFAULT_HOST: str = "127.0.0.1"
DEFAULT_PORT: int = 80

# Keep-alive timeout for idle client connections (seconds).
SERVER_TIMEOUT_KEEP_ALIVE: int = 15

# ─── Messages returned to clients ─────────────────────────────────────────────

MSG_WORKFLOW_NOT_FOUND: str = "workflow not found"
MSG_USER_NOT_ALLOWED: str = "user not allowed"
