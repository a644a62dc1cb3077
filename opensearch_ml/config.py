# pylint: disable=E0213
import os
from typing import TYPE_CHECKING, Mapping, Optional

if TYPE_CHECKING:
    from pydantic.v1 import validator
else:
    try:
        from pydantic.v1 import validator
    except ImportError:
        from pydantic import validator

from .constants import (
    ADDRESS_ENV,
    DEFAULT_NETWORK_TIMEOUT_SEC,
    DEFAULT_POLL_INTERVAL_SEC,
    DEFAULT_POLL_TIMEOUT_SEC,
    INSECURE_ENV,
    NETWORK_TIMEOUT_ENV,
    PASSWORD_ENV,
    POLL_INTERVAL_ENV,
    POLL_TIMEOUT_ENV,
    USERNAME_ENV,
)
from .errors import MissingAddress
from .pydantic_base import ImmutableModel

TRUTHY = {"1", "true", "yes", "on"}


class ProviderConfig(ImmutableModel):
    """Settings shared by every reconciler of one client.

    Attributes:
        address: Base address of the cluster, e.g. ``https://localhost:9200``.
        username: Username for HTTP basic auth.
        password: Password for HTTP basic auth.
        insecure: Skip TLS verification. For testing only.
        network_timeout: Per-request timeout in seconds.
        poll_interval: Seconds between two ML task reads.
        poll_timeout: Seconds to wait for an ML task before giving up.
    """

    address: str
    username: Optional[str] = None
    password: Optional[str] = None
    insecure: bool = False
    network_timeout: float = DEFAULT_NETWORK_TIMEOUT_SEC
    poll_interval: float = DEFAULT_POLL_INTERVAL_SEC
    poll_timeout: float = DEFAULT_POLL_TIMEOUT_SEC

    @validator("address")  # pylint: disable=used-before-assignment
    def strip_trailing_slash(cls, address):
        address = address.strip().rstrip("/")
        if not address:
            raise ValueError("address must not be empty")
        return address

    @validator("network_timeout", "poll_interval", "poll_timeout")
    def ensure_positive(cls, value, field):
        if value <= 0:
            raise ValueError(f"{field.name} must be positive, got {value}")
        return value

    def __repr__(self):
        return f"ProviderConfig(address='{self.address}', username='{self.username}', insecure={self.insecure})"

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, **overrides
    ) -> "ProviderConfig":
        """Builds a config from ``OPENSEARCH_*`` environment variables.

        Keyword arguments that are not None win over the environment.
        """
        if environ is None:
            environ = os.environ
        values = {
            "address": environ.get(ADDRESS_ENV),
            "username": environ.get(USERNAME_ENV),
            "password": environ.get(PASSWORD_ENV),
            "insecure": environ.get(INSECURE_ENV, "").lower() in TRUTHY,
            "network_timeout": environ.get(NETWORK_TIMEOUT_ENV),
            "poll_interval": environ.get(POLL_INTERVAL_ENV),
            "poll_timeout": environ.get(POLL_TIMEOUT_ENV),
        }
        values.update(
            {key: value for key, value in overrides.items() if value is not None}
        )
        if not values["address"]:
            raise MissingAddress()
        return cls(**{k: v for k, v in values.items() if v is not None})
