from unittest import mock

import pytest
from click.testing import CliRunner

from opensearch_ml import OpenSearchMLClient, ProviderConfig
from tests.helpers import TEST_ADDRESS, FakeConnection


@pytest.fixture
def runner():
    yield CliRunner()


@pytest.fixture
def cli_connection():
    return FakeConnection()


@pytest.fixture
def cli_client(cli_connection):
    client = OpenSearchMLClient(
        config=ProviderConfig(
            address=TEST_ADDRESS, poll_interval=0.001, poll_timeout=5
        )
    )
    client.connection = cli_connection
    client.poller.connection = cli_connection
    for reconciler in client.reconcilers.values():
        reconciler.connection = cli_connection
    with mock.patch("cli.resources.init_client", return_value=client), mock.patch(
        "cli.tasks.init_client", return_value=client
    ):
        yield client
