"""badgerelay models package.

  - shield.py — ShieldSchema (shields.io endpoint payload) and its builders
"""

from badgerelay.models.shield import (
    ShieldSchema,
    build_shield,
    color_for_conclusion,
    default_shield,
)

__all__ = ["ShieldSchema", "build_shield", "color_for_conclusion", "default_shield"]
