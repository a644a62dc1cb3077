import pytest

from opensearch_ml import (
    MODEL_REGISTER,
    ConnectorDeclaration,
    MalformedResponse,
    ModelGroupDeclaration,
    ModelRegisterDeclaration,
    Reconciler,
    RemoteRejected,
    TaskCancelled,
    TaskFailed,
    TaskPoller,
    TaskState,
    TaskTimedOut,
)
from tests.helpers import (
    FakeCancelEvent,
    TEST_CONNECTOR_BODY,
    TEST_MODEL_REGISTER_BODY,
    make_response,
    task_response,
)

ALL_KINDS = [
    ("model_group_reconciler", "_plugins/_ml/model_groups"),
    ("connector_reconciler", "_plugins/_ml/connectors"),
    ("model_reconciler", "_plugins/_ml/models"),
]


@pytest.mark.parametrize("fixture, collection", ALL_KINDS)
def test_delete_is_idempotent(request, connection, fixture, collection):
    reconciler = request.getfixturevalue(fixture)
    connection.queue(
        make_response(200, {"result": "deleted"}),
        make_response(404, {"error": "not found"}),
    )

    reconciler.delete("abc")
    reconciler.delete("abc")

    assert connection.routes() == [("DELETE", f"{collection}/abc")] * 2


@pytest.mark.parametrize("fixture, collection", ALL_KINDS)
@pytest.mark.parametrize("resource_id", ["", None])
def test_read_of_empty_id_sends_nothing(request, connection, fixture, collection, resource_id):
    reconciler = request.getfixturevalue(fixture)

    artifact = reconciler.read(resource_id)

    assert not artifact.exists
    assert not reconciler.exists(resource_id)
    assert connection.calls == []


@pytest.mark.parametrize("fixture, collection", ALL_KINDS)
def test_delete_of_empty_id_sends_nothing(request, connection, fixture, collection):
    reconciler = request.getfixturevalue(fixture)

    reconciler.delete("")
    reconciler.delete(None)

    assert connection.calls == []


@pytest.mark.parametrize("fixture, collection", ALL_KINDS)
def test_read_404_is_absent(request, connection, fixture, collection):
    reconciler = request.getfixturevalue(fixture)
    connection.queue(make_response(404, {"status": 404}))

    artifact = reconciler.read("gone")

    assert not artifact.exists
    assert artifact.resource_id == "gone"
    assert connection.routes() == [("GET", f"{collection}/gone")]


@pytest.mark.parametrize("fixture, collection", ALL_KINDS)
def test_read_other_errors_are_raised(request, connection, fixture, collection):
    reconciler = request.getfixturevalue(fixture)
    connection.queue(make_response(403, "no permissions"))

    with pytest.raises(RemoteRejected) as excinfo:
        reconciler.read("abc")

    assert excinfo.value.status_code == 403
    assert excinfo.value.body == "no permissions"


@pytest.mark.parametrize("fixture, collection", ALL_KINDS)
def test_delete_other_errors_are_raised(request, connection, fixture, collection):
    reconciler = request.getfixturevalue(fixture)
    connection.queue(make_response(500, "boom"))

    with pytest.raises(RemoteRejected) as excinfo:
        reconciler.delete("abc")

    assert excinfo.value.status_code == 500
    assert "boom" in str(excinfo.value)


def test_model_group_create_then_read(model_group_reconciler, connection):
    connection.queue(
        make_response(200, {"model_group_id": "mg_1", "status": "CREATED"}),
        make_response(200, {"name": "embeddings", "owner": {"name": "admin"}}),
    )

    group_id = model_group_reconciler.create(
        ModelGroupDeclaration(name="embeddings", description="text models")
    )
    artifact = model_group_reconciler.read(group_id)

    assert group_id == "mg_1"
    assert artifact.exists
    assert "owner" in artifact.body
    method, route, payload = connection.calls[0]
    assert (method, route) == ("POST", "_plugins/_ml/model_groups/_register")
    assert '"name": "embeddings"' in payload
    assert connection.routes()[1] == ("GET", "_plugins/_ml/model_groups/mg_1")


def test_connector_create_then_read(connector_reconciler, connection):
    connection.queue(
        make_response(200, {"connector_id": "c_1"}),
        make_response(200, {"name": "OpenAI Chat Connector"}),
    )

    connector_id = connector_reconciler.create(
        ConnectorDeclaration(body=TEST_CONNECTOR_BODY)
    )

    assert connector_id == "c_1"
    assert connector_reconciler.exists(connector_id)
    assert connection.calls[0] == (
        "POST",
        "_plugins/_ml/connectors/_create",
        TEST_CONNECTOR_BODY,
    )


def test_model_create_waits_for_the_register_task(model_reconciler, connection):
    connection.queue(
        make_response(200, {"task_id": "task_1", "status": "CREATED"}),
        task_response(TaskState.RUNNING),
        task_response(TaskState.COMPLETED, model_id="m1"),
        make_response(200, {"model_id": "m1", "model_state": "DEPLOYED"}),
    )

    model_id = model_reconciler.create(
        ModelRegisterDeclaration(body=TEST_MODEL_REGISTER_BODY)
    )

    assert model_id == "m1"
    assert model_reconciler.read(model_id).exists
    assert connection.routes() == [
        ("POST", "_plugins/_ml/models/_register?deploy=true"),
        ("GET", "_plugins/_ml/tasks/task_1"),
        ("GET", "_plugins/_ml/tasks/task_1"),
        ("GET", "_plugins/_ml/models/m1"),
    ]


def test_model_create_rejected_never_polls(connection, fast_poller, monkeypatch):
    def fail_wait(*args, **kwargs):
        raise AssertionError("the poller must not be used")

    monkeypatch.setattr(fast_poller, "wait", fail_wait)
    reconciler = Reconciler(connection, MODEL_REGISTER, poller=fast_poller)
    connection.queue(make_response(500, {"error": "internal"}))

    with pytest.raises(RemoteRejected) as excinfo:
        reconciler.create(ModelRegisterDeclaration(body=TEST_MODEL_REGISTER_BODY))

    assert excinfo.value.status_code == 500
    assert len(connection.calls) == 1


def test_model_create_keeps_the_task_failure(model_reconciler, connection):
    connection.queue(
        make_response(200, {"task_id": "task_1"}),
        make_response(200, {"task_id": "task_1", "state": "FAILED", "error": "bad"}),
    )

    with pytest.raises(TaskFailed) as excinfo:
        model_reconciler.create(ModelRegisterDeclaration(body=TEST_MODEL_REGISTER_BODY))

    assert "bad" in excinfo.value.detail


def test_model_create_completed_without_model_id(model_reconciler, connection):
    connection.queue(
        make_response(200, {"task_id": "task_1"}),
        task_response(TaskState.COMPLETED),
    )

    with pytest.raises(TaskFailed) as excinfo:
        model_reconciler.create(ModelRegisterDeclaration(body=TEST_MODEL_REGISTER_BODY))

    assert excinfo.value.task_id == "task_1"
    assert "without producing an identifier" in excinfo.value.detail


def test_model_create_keeps_the_timeout(connection, clock):
    poller = TaskPoller(connection, poll_interval=2, timeout=5, clock=clock)
    reconciler = Reconciler(connection, MODEL_REGISTER, poller=poller)
    connection.queue(
        make_response(200, {"task_id": "task_1"}),
        task_response(TaskState.RUNNING),
        task_response(TaskState.RUNNING),
    )

    with pytest.raises(TaskTimedOut) as excinfo:
        reconciler.create(
            ModelRegisterDeclaration(body=TEST_MODEL_REGISTER_BODY),
            FakeCancelEvent(clock),
        )

    assert excinfo.value.task_id == "task_1"
    assert excinfo.value.elapsed == 5
    assert len(connection.calls) == 3


def test_model_create_keeps_the_cancellation(connection, clock, poller):
    reconciler = Reconciler(connection, MODEL_REGISTER, poller=poller)
    connection.queue(
        make_response(200, {"task_id": "task_1"}),
        task_response(TaskState.RUNNING),
    )
    cancel_event = FakeCancelEvent(clock, set_after_waits=2)

    with pytest.raises(TaskCancelled) as excinfo:
        reconciler.create(
            ModelRegisterDeclaration(body=TEST_MODEL_REGISTER_BODY), cancel_event
        )

    assert excinfo.value.task_id == "task_1"
    assert not isinstance(excinfo.value, TaskTimedOut)
    assert connection.routes() == [
        ("POST", "_plugins/_ml/models/_register?deploy=true"),
        ("GET", "_plugins/_ml/tasks/task_1"),
    ]


def test_model_create_without_task_id(model_reconciler, connection):
    connection.queue(make_response(200, {"status": "CREATED"}))

    with pytest.raises(MalformedResponse):
        model_reconciler.create(ModelRegisterDeclaration(body=TEST_MODEL_REGISTER_BODY))

    assert len(connection.calls) == 1


def test_create_rejected(connector_reconciler, connection):
    connection.queue(make_response(400, {"error": "invalid connector"}))

    with pytest.raises(RemoteRejected) as excinfo:
        connector_reconciler.create(ConnectorDeclaration(body=TEST_CONNECTOR_BODY))

    assert excinfo.value.status_code == 400
    assert excinfo.value.route == "_plugins/_ml/connectors/_create"
    assert "invalid connector" in excinfo.value.body


def test_create_is_not_idempotent(model_group_reconciler, connection):
    connection.queue(
        make_response(200, {"model_group_id": "mg_1"}),
        make_response(200, {"model_group_id": "mg_2"}),
    )
    declaration = ModelGroupDeclaration(name="g")

    first = model_group_reconciler.create(declaration)
    second = model_group_reconciler.create(declaration)

    assert first != second
    assert len(connection.calls) == 2


def test_create_without_identifier(model_group_reconciler, connection):
    connection.queue(make_response(200, {"status": "CREATED"}))

    with pytest.raises(MalformedResponse):
        model_group_reconciler.create(ModelGroupDeclaration(name="g"))


def test_update_is_a_no_op(connector_reconciler, connection):
    declaration = ConnectorDeclaration(body=TEST_CONNECTOR_BODY)

    assert connector_reconciler.update("c_1", declaration) == "c_1"
    assert connection.calls == []


def test_async_adapter_needs_a_poller(connection):
    with pytest.raises(ValueError):
        Reconciler(connection, MODEL_REGISTER)
