"""shields.io endpoint schema model and builders.

Schema reference: https://shields.io/badges/endpoint-badge

The JSON body returned by GET /ci/status/... is exactly:

.. code-block:: json

    {
      "schemaVersion": 1,
      "label": "<owner>/<repo>",
      "message": "<workflow name> - <conclusion>",
      "color": "brightgreen" | "red",
      "namedLogo": "GitHub Actions"
    }

ShieldSchema is frozen: default_shield() produces the brand defaults and
build_shield() derives a new instance with the query-specific values.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from badgerelay.constants import (
    BRAND_LOGOS,
    COLOR_FAILURE,
    COLOR_SUCCESS,
    DEFAULT_BRAND,
    SCHEMA_VERSION,
    SUCCESS_CONCLUSION,
)


class ShieldSchema(BaseModel):
    """Badge payload in the shields.io endpoint format."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    schema_version: int = Field(default=SCHEMA_VERSION, alias="schemaVersion")
    label: str = ""
    message: str = ""
    color: str = COLOR_SUCCESS
    named_logo: str = Field(default="", alias="namedLogo")

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready mapping using the camelCase wire names."""
        return self.model_dump(by_alias=True)


def default_shield(brand: str = DEFAULT_BRAND) -> ShieldSchema:
    """Return a schema carrying the fixed defaults for a CI brand.

    Raises:
        KeyError: If ``brand`` has no entry in BRAND_LOGOS.
    """
    return ShieldSchema(
        schema_version=SCHEMA_VERSION,
        named_logo=BRAND_LOGOS[brand],
        color=COLOR_SUCCESS,
    )


def color_for_conclusion(conclusion: str) -> str:
    """Map a run conclusion to a badge color (exact, case-sensitive match)."""
    if conclusion == SUCCESS_CONCLUSION:
        return COLOR_SUCCESS
    return COLOR_FAILURE


def build_shield(
    owner: str,
    repo: str,
    workflow_name: str,
    conclusion: str,
    brand: str = DEFAULT_BRAND,
) -> ShieldSchema:
    """Build the badge for the latest run of a workflow.

    Owner and repo are used verbatim in the label; nothing is trimmed or
    case-folded.
    """
    return default_shield(brand).model_copy(
        update={
            "label": f"{owner}/{repo}",
            "message": f"{workflow_name} - {conclusion}",
            "color": color_for_conclusion(conclusion),
        }
    )
