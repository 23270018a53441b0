"""ULID generation for request correlation IDs.

Every inbound request gets a 26-character ULID, bound into the structlog
context and echoed back in the ``X-Request-ID`` response header.

Uses the `python-ulid` library; ULIDs are never hand-rolled here.
"""

from __future__ import annotations

from ulid import ULID


def generate_ulid() -> str:
    """Generate a new ULID as a 26-character uppercase string.

    Returns:
        str: Crockford Base32 ULID (e.g. ``"01KJ0JRVHYA7KX32VPN5ZSCTMV"``).
    """
    return str(ULID())
