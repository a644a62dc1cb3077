from ._metadata import __version__

INFRA_FLAKE_MESSAGES = [
    "circuit_breaking_exception",
    "es_rejected_execution_exception",
    "no_shard_available_action_exception",
]


class OpenSearchMLError(Exception):
    def __init__(self, message):
        self.message = message
        super().__init__(self.message)


class MissingAddress(OpenSearchMLError):
    def __init__(
        self,
        message="You need to pass an address to the OpenSearchMLClient or set the environment variable OPENSEARCH_ADDRESS",
    ):
        super().__init__(message)


class TransportError(OpenSearchMLError):
    """The request never produced an HTTP response (connection, TLS, timeout)."""

    def __init__(self, method: str, endpoint: str, reason: str):
        self.method = method
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(f"Tried to {method} {endpoint}, but the request failed: {reason}")


class RemoteRejected(OpenSearchMLError):
    """OpenSearch answered with a status we do not accept for this call."""

    def __init__(self, method: str, route: str, status_code: int, body: str):
        self.method = method
        self.route = route
        self.status_code = status_code
        self.body = body
        message = f"opensearch-ml client {__version__}: tried to {method} /{route}, but OpenSearch returned {status_code}."
        if body:
            message += f"\nThe detailed error is:\n{body}"
        if any(flake in body for flake in INFRA_FLAKE_MESSAGES):
            message += "\n This likely indicates the cluster is temporarily overloaded, please try again in a minute or two"
        super().__init__(message)


class MalformedResponse(OpenSearchMLError):
    """A 2xx response did not carry a field the ML Commons API promises."""

    def __init__(self, message: str, body: str = ""):
        self.body = body
        if body:
            message += f"\nThe response body was:\n{body}"
        super().__init__(message)


class TaskFailed(OpenSearchMLError):
    def __init__(self, task_id: str, detail: str):
        self.task_id = task_id
        self.detail = detail
        super().__init__(f"Task {task_id} failed: {detail}")


class TaskOutcomeUnknown(OpenSearchMLError):
    """We stopped waiting on a task; it may still finish on the cluster."""

    def __init__(self, task_id: str, message: str):
        self.task_id = task_id
        super().__init__(message)


class TaskTimedOut(TaskOutcomeUnknown):
    def __init__(self, task_id: str, elapsed: float):
        self.elapsed = elapsed
        super().__init__(
            task_id,
            f"Timed out after {elapsed:.1f}s waiting for task {task_id}",
        )


class TaskCancelled(TaskOutcomeUnknown):
    def __init__(self, task_id: str):
        super().__init__(
            task_id, f"Cancelled while waiting for task {task_id}"
        )
