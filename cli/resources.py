import click
from rich.console import Console
from rich.table import Column, Table

from cli.client import init_client
from cli.errors import fail_on_remote_errors
from opensearch_ml import (
    ConnectorDeclaration,
    ModelGroupDeclaration,
    ModelRegisterDeclaration,
    Reconciler,
    TaskPoller,
)


def add_lifecycle_commands(group: click.Group, kind: str, label: str):
    """Adds the `get` and `delete` commands every resource kind shares."""

    @group.command("get")
    @click.argument("resource_id")
    @fail_on_remote_errors
    def get(resource_id):
        """Show whether a resource still exists"""
        console = Console()
        with console.status(f"Looking up {label} {resource_id}", spinner="dots4"):
            artifact = init_client().reconciler(kind).read(resource_id)
        if not artifact.exists:
            click.echo(f"{label} {resource_id} does not exist")
            raise click.exceptions.Exit(1)
        table = Table(
            Column("id", overflow="fold", min_width=20),
            Column("body", overflow="fold"),
            title=f":robot: {label}",
            title_justify="left",
        )
        table.add_row(artifact.resource_id, artifact.body)
        console.print(table)

    @group.command("delete")
    @click.argument("resource_id")
    @fail_on_remote_errors
    def delete(resource_id):
        """Delete a resource; succeeds if it is already gone"""
        init_client().reconciler(kind).delete(resource_id)
        click.echo(f"Deleted {label} {resource_id}")

    return group


@click.group("model-groups")
def model_groups():
    """Model groups control access to the models registered in them"""


@model_groups.command("create")
@click.option("--name", required=True, help="Name of the model group")
@click.option("--description", default="", help="Description of the model group")
@fail_on_remote_errors
def create_model_group(name, description):
    """Register a new model group"""
    declaration = ModelGroupDeclaration(name=name, description=description)
    group_id = init_client().model_groups.create(declaration)
    click.echo(group_id)


@click.group("connectors")
def connectors():
    """Connectors point ML Commons at externally hosted models"""


@connectors.command("create")
@click.option(
    "--body-file",
    type=click.File("r"),
    required=True,
    help="JSON file with the connector definition",
)
@fail_on_remote_errors
def create_connector(body_file):
    """Create a connector from a JSON definition"""
    declaration = ConnectorDeclaration(body=body_file.read())
    connector_id = init_client().connectors.create(declaration)
    click.echo(connector_id)


@click.group("models")
def models():
    """Registered models, deployed as soon as registration completes"""


@models.command("register")
@click.option(
    "--body-file",
    type=click.File("r"),
    required=True,
    help="JSON file with the registration payload",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds to wait for the register task (default: OPENSEARCH_ML_POLL_TIMEOUT or 900)",
)
@fail_on_remote_errors
def register_model(body_file, timeout):
    """Register and deploy a model, waiting for the register task"""
    declaration = ModelRegisterDeclaration(body=body_file.read())
    client = init_client()
    reconciler = client.models
    if timeout is not None:
        poller = TaskPoller(
            client.connection,
            poll_interval=client.config.poll_interval,
            timeout=timeout,
        )
        reconciler = Reconciler(client.connection, reconciler.adapter, poller)
    console = Console(stderr=True)
    with console.status("Waiting for the model to register", spinner="dots4"):
        model_id = reconciler.create(declaration)
    click.echo(model_id)


add_lifecycle_commands(model_groups, "model_group", "Model group")
add_lifecycle_commands(connectors, "connector", "Connector")
add_lifecycle_commands(models, "model_register", "Model")
