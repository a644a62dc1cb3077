import json
from typing import Optional, Union

import requests
from requests.auth import AuthBase

from .constants import DEFAULT_NETWORK_TIMEOUT_SEC, JSON_HEADERS
from .errors import MissingAddress, RemoteRejected, TransportError
from .logger import logger, quiet_insecure_request_warnings

Payload = Union[dict, str, None]


def command_name(requests_command) -> str:
    return getattr(requests_command, "__name__", "request").upper()


class Connection:
    """Wrapper of HTTP requests to an OpenSearch cluster.

    Parameters:
        endpoint: Base address of the cluster, e.g. ``https://localhost:9200``.
        username: Username for HTTP basic auth.
        password: Password for HTTP basic auth.
        insecure: Skip TLS certificate verification.
        auth: Any ``requests`` auth object (e.g. a SigV4 signer). Takes
          precedence over username/password.
        timeout: Per-request network timeout in seconds.
    """

    def __init__(
        self,
        endpoint: Optional[str],
        username: Optional[str] = None,
        password: Optional[str] = None,
        insecure: bool = False,
        auth: Optional[AuthBase] = None,
        timeout: float = DEFAULT_NETWORK_TIMEOUT_SEC,
    ):
        if not endpoint:
            raise MissingAddress()
        self.endpoint = endpoint.rstrip("/")
        self.username = username
        self.password = password
        self.insecure = insecure
        if insecure:
            quiet_insecure_request_warnings()
        self.timeout = timeout
        if auth is None and username is not None:
            auth = requests.auth.HTTPBasicAuth(username, password or "")
        self.auth = auth

    def __repr__(self):
        return f"Connection(endpoint='{self.endpoint}', username='{self.username}', password='***', insecure={self.insecure})"

    def __eq__(self, other):
        return (
            self.endpoint == other.endpoint
            and self.username == other.username
            and self.password == other.password
            and self.insecure == other.insecure
        )

    def perform(
        self,
        payload: Payload,
        route: str,
        requests_command=requests.post,
    ) -> requests.Response:
        """Sends one request and returns the raw response whatever its status.

        Only failures to get a response at all are raised, as TransportError.
        """
        endpoint = f"{self.endpoint}/{route}"

        logger.info("Make request to %s", endpoint)

        body_kwargs = {}
        if isinstance(payload, str):
            body_kwargs["data"] = payload.encode("utf-8")
        elif payload is not None:
            body_kwargs["data"] = json.dumps(payload).encode("utf-8")

        try:
            response = requests_command(
                endpoint,
                headers=dict(JSON_HEADERS),
                timeout=self.timeout,
                verify=not self.insecure,
                auth=self.auth,
                **body_kwargs,
            )
        except requests.exceptions.RequestException as err:
            raise TransportError(
                command_name(requests_command), endpoint, str(err)
            ) from err

        logger.info("API request has response code %s", response.status_code)
        return response

    def handle_bad_response(self, route, requests_command, response):
        """Raises RemoteRejected for a response the caller cannot accept."""
        raise RemoteRejected(
            command_name(requests_command),
            route,
            response.status_code,
            response.text,
        )
