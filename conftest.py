import pytest

from opensearch_ml import (
    CONNECTOR,
    MODEL_GROUP,
    MODEL_REGISTER,
    Reconciler,
    TaskPoller,
)
from tests.helpers import FakeClock, FakeConnection


@pytest.fixture()
def connection():
    return FakeConnection()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def poller(connection, clock):
    return TaskPoller(connection, poll_interval=2, timeout=15 * 60, clock=clock)


@pytest.fixture()
def fast_poller(connection):
    return TaskPoller(connection, poll_interval=0.001, timeout=5)


@pytest.fixture()
def model_group_reconciler(connection):
    return Reconciler(connection, MODEL_GROUP)


@pytest.fixture()
def connector_reconciler(connection):
    return Reconciler(connection, CONNECTOR)


@pytest.fixture()
def model_reconciler(connection, fast_poller):
    return Reconciler(connection, MODEL_REGISTER, poller=fast_poller)
