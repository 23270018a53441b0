"""Owner allow-list for badgerelay.

The allow-list is parsed once at startup (from ALLOWED_USERS or the
``allowed_users`` config key) and is immutable afterwards. An empty
allow-list means no restriction.
"""

from __future__ import annotations

from typing import Iterable, Optional, Union

from badgerelay.errors import ConfigError


def parse_allowlist(raw: Optional[Union[str, Iterable[str]]]) -> tuple[str, ...]:
    """Normalise a configured allow-list into an ordered tuple of owners.

    Accepts a comma-separated string (environment form), a list of strings
    (YAML form) or None. Entries are kept verbatim; empty fragments left by
    stray commas are dropped.

    Raises:
        ConfigError: A non-empty value names no owner at all (e.g. ``","``).
    """
    if raw is None:
        return ()
    if isinstance(raw, str):
        items: list[str] = raw.split(",") if raw else []
    else:
        items = [str(item) for item in raw]

    owners = tuple(item for item in items if item != "")
    if items and not owners:
        raise ConfigError(f"Allow-list {raw!r} contains no owner names")
    return owners


def is_allowed(owners: Iterable[str], owner: str) -> bool:
    """Return True if ``owner`` may be queried.

    True when ``owners`` is empty, otherwise only on an exact,
    case-sensitive match.
    """
    owners = tuple(owners)
    if not owners:
        return True
    return owner in owners
