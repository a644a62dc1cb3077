from typing import Any, Dict, Optional

from opensearch_ml.pydantic_base import ResponseModel


class ModelGroupCreateResponse(ResponseModel):
    model_group_id: Optional[str]


class ConnectorCreateResponse(ResponseModel):
    connector_id: Optional[str]


class ModelRegisterResponse(ResponseModel):
    task_id: Optional[str]
    status: Optional[str]


class TaskGetResponse(ResponseModel):
    task_id: Optional[str]
    state: Optional[str]
    model_id: Optional[str]
    response: Optional[Dict[str, Any]]
