"""OpenSearch ML Commons resource client.

Converges model groups, connectors and registered models on an OpenSearch
cluster from declarations, waiting on ML tasks where the cluster works
asynchronously. """

__all__ = [
    "CONNECTOR",
    "ConnectorDeclaration",
    "Connection",
    "MalformedResponse",
    "MissingAddress",
    "MODEL_GROUP",
    "MODEL_REGISTER",
    "ModelGroupDeclaration",
    "ModelRegisterDeclaration",
    "OpenSearchMLClient",
    "OpenSearchMLError",
    "ProviderConfig",
    "Reconciler",
    "RemoteArtifact",
    "RemoteRejected",
    "ResourceAdapter",
    "TaskCancelled",
    "TaskFailed",
    "TaskOutcomeUnknown",
    "TaskPoller",
    "TaskState",
    "TaskTimedOut",
    "TransportError",
]

from typing import Dict, Optional

from requests.auth import AuthBase

from ._metadata import __version__
from .adapters import (
    ADAPTERS,
    CONNECTOR,
    MODEL_GROUP,
    MODEL_REGISTER,
    ResourceAdapter,
)
from .config import ProviderConfig
from .connection import Connection
from .declarations import (
    ConnectorDeclaration,
    ModelGroupDeclaration,
    ModelRegisterDeclaration,
)
from .errors import (
    MalformedResponse,
    MissingAddress,
    OpenSearchMLError,
    RemoteRejected,
    TaskCancelled,
    TaskFailed,
    TaskOutcomeUnknown,
    TaskTimedOut,
    TransportError,
)
from .reconciler import Reconciler, RemoteArtifact
from .task import TaskPoller, TaskState


class OpenSearchMLClient:
    """Client to converge ML Commons artifacts on an OpenSearch cluster.

    One client owns one :class:`Connection` and hands it, read-only, to a
    :class:`Reconciler` per artifact kind. ::

        import opensearch_ml

        client = opensearch_ml.OpenSearchMLClient(
            address="https://localhost:9200", username="admin", password="admin"
        )
        connector_id = client.connectors.create(
            opensearch_ml.ConnectorDeclaration(body=open("connector.json").read())
        )
        model_id = client.models.create(
            opensearch_ml.ModelRegisterDeclaration(body=open("model.json").read())
        )

    Parameters:
        address: Base address of the cluster. Read from ``OPENSEARCH_ADDRESS``
          if not given.
        username: Basic auth username. Read from ``OPENSEARCH_USERNAME`` if not given.
        password: Basic auth password. Read from ``OPENSEARCH_PASSWORD`` if not given.
        insecure: Skip TLS verification. For testing only.
        auth: A ``requests`` auth object, e.g. a SigV4 signer, used instead of
          basic auth.
        config: A complete :class:`ProviderConfig`; other settings are ignored
          when given.
    """

    def __init__(
        self,
        address: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        insecure: Optional[bool] = None,
        auth: Optional[AuthBase] = None,
        config: Optional[ProviderConfig] = None,
    ):
        if config is None:
            config = ProviderConfig.from_env(
                address=address,
                username=username,
                password=password,
                insecure=insecure,
            )
        self.config = config
        self.connection = Connection(
            config.address,
            username=config.username,
            password=config.password,
            insecure=config.insecure,
            auth=auth,
            timeout=config.network_timeout,
        )
        self.poller = TaskPoller(
            self.connection,
            poll_interval=config.poll_interval,
            timeout=config.poll_timeout,
        )
        self.reconcilers: Dict[str, Reconciler] = {
            kind: Reconciler(
                self.connection,
                adapter,
                poller=self.poller if adapter.is_async else None,
            )
            for kind, adapter in ADAPTERS.items()
        }

    def __repr__(self):
        return f"OpenSearchMLClient(connection={self.connection!r})"

    def __eq__(self, other):
        return self.connection == other.connection

    @property
    def model_groups(self) -> Reconciler:
        return self.reconcilers[MODEL_GROUP.kind]

    @property
    def connectors(self) -> Reconciler:
        return self.reconcilers[CONNECTOR.kind]

    @property
    def models(self) -> Reconciler:
        """Registered (and deployed) models. Creation waits on the register task."""
        return self.reconcilers[MODEL_REGISTER.kind]

    def reconciler(self, kind: str) -> Reconciler:
        """Looks a reconciler up by adapter kind, e.g. ``"connector"``."""
        try:
            return self.reconcilers[kind]
        except KeyError as err:
            raise ValueError(
                f"Unknown resource kind {kind!r}, expected one of {sorted(self.reconcilers)}"
            ) from err

    def wait_for_task(
        self,
        task_id: str,
        cancel_event=None,
        timeout: Optional[float] = None,
    ) -> str:
        """Waits on any ML task and returns the model id it produced.

        ``timeout`` replaces the configured poll timeout for this wait only.
        """
        poller = self.poller
        if timeout is not None:
            poller = TaskPoller(
                self.connection,
                poll_interval=self.config.poll_interval,
                timeout=timeout,
            )
        return poller.wait(task_id, cancel_event)
