import threading
from dataclasses import dataclass
from typing import Optional

import requests

from .adapters import ResourceAdapter
from .connection import Connection
from .declarations import Declaration
from .logger import logger
from .task import TaskPoller

NOT_FOUND = 404


@dataclass(frozen=True)
class RemoteArtifact:
    """What a read learned about a remote artifact.

    Only existence and the raw body are kept; declared fields are never
    rebuilt from the body since the cluster does not echo them back
    faithfully.
    """

    resource_id: Optional[str]
    exists: bool
    body: Optional[str] = None


class Reconciler:
    """Create, read, update and delete for one artifact kind.

    A Reconciler holds no state between calls. The identifier returned by
    :meth:`create` belongs to the caller, who hands it back to :meth:`read`
    and :meth:`delete`. ::

        import opensearch_ml

        client = opensearch_ml.OpenSearchMLClient(address="https://localhost:9200")
        group_id = client.model_groups.create(
            opensearch_ml.ModelGroupDeclaration(name="embeddings")
        )
        client.model_groups.read(group_id).exists  # True
        client.model_groups.delete(group_id)

    Parameters:
        connection: Connection shared with the other reconcilers.
        adapter: Wire shape of the artifact kind.
        poller: Required when ``adapter.is_async``.
    """

    def __init__(
        self,
        connection: Connection,
        adapter: ResourceAdapter,
        poller: Optional[TaskPoller] = None,
    ):
        if adapter.is_async and poller is None:
            raise ValueError(f"{adapter.kind} needs a TaskPoller")
        self.connection = connection
        self.adapter = adapter
        self.poller = poller

    def __repr__(self):
        return f"Reconciler(kind='{self.adapter.kind}', connection={self.connection!r})"

    def create(
        self,
        desired: Declaration,
        cancel_event: Optional[threading.Event] = None,
    ) -> str:
        """Creates the artifact and returns its identifier.

        Not idempotent: every successful call creates a new artifact.

        Raises:
            RemoteRejected: the create call (or a task read) was not 2xx.
            MalformedResponse: the response lacks the identifier or task id.
            TaskFailed, TaskTimedOut, TaskCancelled: asynchronous kinds only.
        """
        request = self.adapter.build_create_request(desired)
        response = self.connection.perform(
            request.body, request.route, requests.post
        )
        if not response.ok:
            self.connection.handle_bad_response(
                request.route, requests.post, response
            )

        identifier = self.adapter.parse_create_response(response.text)
        if self.adapter.is_async:
            logger.info(
                "Waiting for %s task %s", self.adapter.kind, identifier
            )
            identifier = self.poller.wait(identifier, cancel_event)  # type: ignore

        logger.info("Created %s %s", self.adapter.kind, identifier)
        return identifier

    def read(self, resource_id: Optional[str]) -> RemoteArtifact:
        """Checks whether the artifact still exists.

        An empty id or a 404 means absent; the caller should drop the id.
        """
        if not resource_id:
            return RemoteArtifact(resource_id=resource_id, exists=False)

        route = self.adapter.read_route(resource_id)
        response = self.connection.perform(None, route, requests.get)
        if response.status_code == NOT_FOUND:
            logger.info("%s %s no longer exists", self.adapter.kind, resource_id)
            return RemoteArtifact(resource_id=resource_id, exists=False)
        if not response.ok:
            self.connection.handle_bad_response(route, requests.get, response)
        return RemoteArtifact(
            resource_id=resource_id, exists=True, body=response.text
        )

    def exists(self, resource_id: Optional[str]) -> bool:
        return self.read(resource_id).exists

    def update(
        self, resource_id: Optional[str], desired: Declaration
    ) -> Optional[str]:
        # Every declared field is replace-only; there is nothing to patch.
        logger.debug(
            "No-op update of %s %s to %r",
            self.adapter.kind,
            resource_id,
            desired,
        )
        return resource_id

    def delete(self, resource_id: Optional[str]) -> None:
        """Deletes the artifact. Safe to call again after a partial failure.

        Raises:
            RemoteRejected: any non-2xx status except 404. The caller must
              keep the id in that case.
        """
        if not resource_id:
            return

        route = self.adapter.delete_route(resource_id)
        response = self.connection.perform(None, route, requests.delete)
        if response.status_code == NOT_FOUND:
            logger.info(
                "%s %s was already deleted", self.adapter.kind, resource_id
            )
            return
        if not response.ok:
            self.connection.handle_bad_response(route, requests.delete, response)
        logger.info("Deleted %s %s", self.adapter.kind, resource_id)
