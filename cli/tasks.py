import click
from rich.console import Console
from rich.table import Table

from cli.client import init_client
from cli.errors import fail_on_remote_errors


@click.group("tasks")
def tasks():
    """ML tasks track asynchronous work such as model registration"""


@tasks.command("get")
@click.argument("task_id")
@fail_on_remote_errors
def get_task(task_id):
    """Show the current state of a task"""
    task = init_client().poller.get_task(task_id)
    table = Table(
        "task id", "state", "model id", title=":hourglass: Task", title_justify="left"
    )
    table.add_row(task_id, task.state, task.model_id or "")
    Console().print(table)


@tasks.command("wait")
@click.argument("task_id")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds to wait before giving up",
)
@fail_on_remote_errors
def wait_task(task_id, timeout):
    """Wait for a task to finish and print the model id it produced"""
    client = init_client()
    console = Console(stderr=True)
    with console.status(f"Waiting for task {task_id}", spinner="dots4"):
        model_id = client.wait_for_task(task_id, timeout=timeout)
    click.echo(model_id)
