# pylint: disable=E0213
"""Desired-state records for the three ML Commons artifact kinds.

Every field is replace-only: there is no update endpoint for any of these
artifacts, so any difference between two declarations means the remote
artifact has to be deleted and created again.
"""
import json
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from pydantic.v1 import validator
else:
    try:
        from pydantic.v1 import validator
    except ImportError:
        from pydantic import validator

from .pydantic_base import ImmutableModel


def ensure_json_object(body: str) -> str:
    try:
        parsed = json.loads(body)
    except ValueError as err:
        raise ValueError(f"body is not valid JSON: {err}") from err
    if not isinstance(parsed, dict):
        raise ValueError(
            f"body must be a JSON object, got {type(parsed).__name__}"
        )
    return body


class Declaration(ImmutableModel):
    def requires_replacement(self, other: Optional["Declaration"]) -> bool:
        """True if moving from ``other`` to ``self`` means recreating the artifact."""
        if other is None or type(other) is not type(self):
            return True
        return self.dict() != other.dict()


class ModelGroupDeclaration(Declaration):
    name: str
    description: str = ""

    @validator("name")  # pylint: disable=used-before-assignment
    def name_not_empty(cls, v):
        if not v.strip():
            raise ValueError("name must not be empty")
        return v


class ConnectorDeclaration(Declaration):
    """``body`` is the connector definition exactly as ML Commons expects it."""

    body: str

    _check_body = validator("body", allow_reuse=True)(ensure_json_object)


class ModelRegisterDeclaration(Declaration):
    """``body`` is the registration payload; the model is deployed on register."""

    body: str

    _check_body = validator("body", allow_reuse=True)(ensure_json_object)
