"""Translation between declarations and the ML Commons REST API.

Each artifact kind is one :class:`ResourceAdapter` value. Adapters are pure:
they build requests and parse responses but never talk to the cluster. ::

    request = MODEL_GROUP.build_create_request(
        ModelGroupDeclaration(name="embeddings", description="text models")
    )
    request.route  # "_plugins/_ml/model_groups/_register"
"""
import json
from dataclasses import dataclass, field
from typing import Callable, Dict, Type

from .constants import (
    CONNECTOR_CREATE_ROUTE,
    CONNECTOR_ID_KEY,
    CONNECTORS_ROUTE,
    DESCRIPTION_KEY,
    JSON_HEADERS,
    MODEL_GROUP_ID_KEY,
    MODEL_GROUP_REGISTER_ROUTE,
    MODEL_GROUPS_ROUTE,
    MODEL_REGISTER_ROUTE,
    MODELS_ROUTE,
    NAME_KEY,
    TASK_ID_KEY,
)
from .data_transfer_object.responses import (
    ConnectorCreateResponse,
    ModelGroupCreateResponse,
    ModelRegisterResponse,
)
from .declarations import (
    ConnectorDeclaration,
    Declaration,
    ModelGroupDeclaration,
    ModelRegisterDeclaration,
)
from .errors import MalformedResponse
from .pydantic_base import ResponseModel, parse_response
from .url_utils import sanitize_field


@dataclass(frozen=True)
class CreateRequest:
    method: str
    route: str
    body: str
    headers: Dict[str, str] = field(default_factory=lambda: dict(JSON_HEADERS))


@dataclass(frozen=True)
class ResourceAdapter:
    """Wire shape of one artifact kind.

    Attributes:
        kind: Short name used in logs and errors, e.g. ``"model_group"``.
        declaration_type: Declaration class accepted by ``build_create_request``.
        create_route: Route the create request is POSTed to.
        collection_route: Parent route of ``{collection_route}/{id}``.
        response_type: Model used to parse the create response.
        id_key: Field of the create response holding the identifier. For
          asynchronous kinds this is the task id, not the artifact id.
        encode_body: Turns a declaration into the request body.
        is_async: Whether creation finishes through an ML task.
    """

    kind: str
    declaration_type: Type[Declaration]
    create_route: str
    collection_route: str
    response_type: Type[ResponseModel]
    id_key: str
    encode_body: Callable[[Declaration], str]
    is_async: bool = False

    def build_create_request(self, desired: Declaration) -> CreateRequest:
        if not isinstance(desired, self.declaration_type):
            raise TypeError(
                f"{self.kind} expects a {self.declaration_type.__name__}, got {type(desired).__name__}"
            )
        return CreateRequest(
            method="POST",
            route=self.create_route,
            body=self.encode_body(desired),
        )

    def parse_create_response(self, body: str) -> str:
        try:
            payload = json.loads(body)
        except ValueError as err:
            raise MalformedResponse(
                f"Could not parse {self.kind} create response as JSON", body
            ) from err
        if not isinstance(payload, dict):
            raise MalformedResponse(
                f"Expected a JSON object in {self.kind} create response", body
            )
        parsed = parse_response(self.response_type, payload)
        identifier = parsed[self.id_key] if parsed is not None else None
        if not identifier:
            raise MalformedResponse(
                f"{self.kind} create response has no {self.id_key}", body
            )
        return identifier

    def read_route(self, resource_id: str) -> str:
        return self._item_route(resource_id)

    def delete_route(self, resource_id: str) -> str:
        return self._item_route(resource_id)

    def _item_route(self, resource_id: str) -> str:
        if not resource_id:
            raise ValueError(f"{self.kind} id must not be empty")
        return f"{self.collection_route}/{sanitize_field(resource_id)}"


def encode_model_group(desired: ModelGroupDeclaration) -> str:
    payload = {NAME_KEY: desired.name}
    if desired.description:
        payload[DESCRIPTION_KEY] = desired.description
    return json.dumps(payload)


def encode_raw_body(desired) -> str:
    return desired.body


MODEL_GROUP = ResourceAdapter(
    kind="model_group",
    declaration_type=ModelGroupDeclaration,
    create_route=MODEL_GROUP_REGISTER_ROUTE,
    collection_route=MODEL_GROUPS_ROUTE,
    response_type=ModelGroupCreateResponse,
    id_key=MODEL_GROUP_ID_KEY,
    encode_body=encode_model_group,
)

CONNECTOR = ResourceAdapter(
    kind="connector",
    declaration_type=ConnectorDeclaration,
    create_route=CONNECTOR_CREATE_ROUTE,
    collection_route=CONNECTORS_ROUTE,
    response_type=ConnectorCreateResponse,
    id_key=CONNECTOR_ID_KEY,
    encode_body=encode_raw_body,
)

MODEL_REGISTER = ResourceAdapter(
    kind="model_register",
    declaration_type=ModelRegisterDeclaration,
    create_route=MODEL_REGISTER_ROUTE,
    collection_route=MODELS_ROUTE,
    response_type=ModelRegisterResponse,
    id_key=TASK_ID_KEY,
    encode_body=encode_raw_body,
    is_async=True,
)

ADAPTERS = {
    adapter.kind: adapter for adapter in (MODEL_GROUP, CONNECTOR, MODEL_REGISTER)
}
