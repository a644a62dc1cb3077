import json
from typing import List, Optional, Union

import requests

from opensearch_ml import Connection

TEST_ADDRESS = "https://opensearch.test:9200"

TEST_CONNECTOR_BODY = json.dumps(
    {
        "name": "OpenAI Chat Connector",
        "description": "The connector to public OpenAI model service for GPT 3.5",
        "version": 1,
        "protocol": "http",
        "parameters": {
            "endpoint": "api.openai.com",
            "model": "gpt-3.5-turbo",
        },
        "credential": {"openAI_key": "..."},
        "actions": [
            {
                "action_type": "predict",
                "method": "POST",
                "url": "https://${parameters.endpoint}/v1/chat/completions",
                "request_body": '{ "model": "${parameters.model}", "messages": ${parameters.messages} }',
            }
        ],
    }
)

TEST_MODEL_REGISTER_BODY = json.dumps(
    {
        "name": "openAI-gpt-3.5-turbo",
        "function_name": "remote",
        "model_group_id": "wlcnb4kBJ1eYAeTMHlV6",
        "description": "test model",
        "connector_id": "a1eMb4kBJ1eYAeTMAljY",
    }
)


def make_response(
    status_code: int, body: Union[dict, str, None] = None
) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    if body is None:
        body = ""
    elif isinstance(body, dict):
        body = json.dumps(body)
    response._content = body.encode("utf-8")  # pylint: disable=protected-access
    response.encoding = "utf-8"
    return response


def task_response(state: str, model_id: Optional[str] = None, task_id="task_1"):
    body = {"task_id": task_id, "state": state}
    if model_id is not None:
        body["model_id"] = model_id
    return make_response(200, body)


class FakeConnection(Connection):
    """Connection that answers from a script instead of the network.

    ``responses`` is consumed in order; each call is recorded as
    ``(METHOD, route, payload)``.
    """

    def __init__(self, responses: Optional[List[requests.Response]] = None):
        super().__init__(TEST_ADDRESS)
        self.responses = list(responses or [])
        self.calls: List[tuple] = []

    def queue(self, *responses: requests.Response):
        self.responses.extend(responses)

    def perform(self, payload, route, requests_command=requests.post):
        self.calls.append((requests_command.__name__.upper(), route, payload))
        if not self.responses:
            raise AssertionError(f"Unexpected request to {route}")
        return self.responses.pop(0)

    def routes(self):
        return [(method, route) for method, route, _ in self.calls]


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FakeCancelEvent:
    """Stands in for threading.Event; waiting advances the fake clock.

    Becomes set after ``set_after_waits`` waits, if given.
    """

    def __init__(self, clock: FakeClock, set_after_waits: Optional[int] = None):
        self.clock = clock
        self.set_after_waits = set_after_waits
        self.waits: List[float] = []
        self._set = False

    def is_set(self):
        return self._set

    def set(self):
        self._set = True

    def wait(self, timeout=None):
        self.waits.append(timeout)
        self.clock.advance(timeout)
        if (
            self.set_after_waits is not None
            and len(self.waits) >= self.set_after_waits
        ):
            self._set = True
        return self._set
