import json
import threading
import time
from enum import Enum
from typing import Callable, Optional, Tuple

import requests

from .connection import Connection
from .constants import (
    DEFAULT_POLL_INTERVAL_SEC,
    DEFAULT_POLL_TIMEOUT_SEC,
    TASKS_ROUTE,
)
from .data_transfer_object.responses import TaskGetResponse
from .errors import (
    MalformedResponse,
    TaskCancelled,
    TaskFailed,
    TaskTimedOut,
)
from .logger import logger
from .pydantic_base import parse_response
from .url_utils import sanitize_field


class TaskState(str, Enum):
    CREATED = "CREATED"
    PENDING = "PENDING"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class TaskPoller:
    """Blocks until an ML Commons task reaches a terminal state.

    The task is read every ``poll_interval`` seconds, starting one interval
    after :meth:`wait` is called. Between reads the poller sleeps on the
    caller's cancel event, bounded by both the next read and the deadline, so
    cancellation and timeout are noticed with the same granularity as reads
    and never more than one interval late.

    Parameters:
        connection: Connection to the cluster the task runs on.
        poll_interval: Seconds between two task reads.
        timeout: Seconds after which :meth:`wait` gives up.
        clock: Monotonic clock, injectable for tests.
    """

    def __init__(
        self,
        connection: Connection,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SEC,
        timeout: float = DEFAULT_POLL_TIMEOUT_SEC,
        clock: Callable[[], float] = time.monotonic,
    ):
        if poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {poll_interval}")
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self.connection = connection
        self.poll_interval = poll_interval
        self.timeout = timeout
        self._clock = clock

    def __repr__(self):
        return f"TaskPoller(connection={self.connection!r}, poll_interval={self.poll_interval}, timeout={self.timeout})"

    def get_task(self, task_id: str) -> TaskGetResponse:
        """Reads the task once.

        Raises:
            RemoteRejected: the task read returned a non-2xx status.
            MalformedResponse: the body is not JSON or has no ``state``.
        """
        task, _ = self._fetch_task(task_id)
        return task

    def _fetch_task(self, task_id: str) -> Tuple[TaskGetResponse, str]:
        """Reads the task once, returning it with its raw body."""
        route = f"{TASKS_ROUTE}/{sanitize_field(task_id)}"
        response = self.connection.perform(None, route, requests.get)
        if not response.ok:
            self.connection.handle_bad_response(route, requests.get, response)
        try:
            payload = json.loads(response.text)
        except ValueError as err:
            raise MalformedResponse(
                f"Could not parse task {task_id} as JSON", response.text
            ) from err
        task = (
            parse_response(TaskGetResponse, payload)
            if isinstance(payload, dict)
            else None
        )
        if task is None or not task.state:
            raise MalformedResponse(
                f"Task {task_id} has no state", response.text
            )
        return task, response.text

    def wait(
        self, task_id: str, cancel_event: Optional[threading.Event] = None
    ) -> str:
        """Waits for the task and returns the model id it produced.

        Parameters:
            task_id: Task returned by an asynchronous ML Commons call.
            cancel_event: Set it from another thread to stop waiting.

        Raises:
            TaskFailed: the task failed, or completed without a model id.
            TaskTimedOut: the deadline passed; the task may still finish.
            TaskCancelled: ``cancel_event`` was set; the task may still finish.
            RemoteRejected: a task read returned a non-2xx status.
        """
        if not task_id:
            raise ValueError("task_id must not be empty")
        if cancel_event is None:
            cancel_event = threading.Event()

        started = self._clock()
        deadline = started + self.timeout
        next_poll = started + self.poll_interval
        polls = 0

        while True:
            if cancel_event.is_set():
                logger.info("Stopped waiting for task %s: cancelled", task_id)
                raise TaskCancelled(task_id)
            now = self._clock()
            if now >= deadline:
                raise TaskTimedOut(task_id, now - started)
            if now < next_poll:
                cancel_event.wait(min(next_poll, deadline) - now)
                continue

            polls += 1
            task, body = self._fetch_task(task_id)
            logger.info(
                "Task %s is %s after %d polls", task_id, task.state, polls
            )

            if task.state == TaskState.COMPLETED:
                if task.model_id:
                    return task.model_id
                raise TaskFailed(
                    task_id, "task completed without producing an identifier"
                )
            if task.state == TaskState.FAILED:
                raise TaskFailed(task_id, body)

            next_poll = self._clock() + self.poll_interval
