"""
NOTE:
Declarations and response payloads are written against the pydantic v1 API.
pydantic v2 ships that API as ``pydantic.v1``, so we import from there when it
exists and fall back to the top-level package on a v1 install.
"""
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pydantic.v1 import BaseModel, ValidationError
else:
    try:
        from pydantic.v1 import (  # pylint: disable=no-name-in-module
            BaseModel,
            ValidationError,
        )
    except ImportError:
        from pydantic import BaseModel, ValidationError


class ImmutableModel(BaseModel):  # pylint: disable=used-before-assignment
    class Config:
        allow_mutation = False


class ResponseModel(BaseModel):
    """Parsed view of a JSON response body.

    Unknown keys are ignored so new server-side fields never break parsing.
    Allows us to access model.key with model["key"].
    """

    class Config:
        extra = "ignore"

    def __getitem__(self, key):
        return getattr(self, key)


def parse_response(model_type, payload: dict):
    """Parses ``payload`` into ``model_type``, or returns None if it does not fit."""
    try:
        return model_type.parse_obj(payload)
    except ValidationError:  # pylint: disable=used-before-assignment
        return None
