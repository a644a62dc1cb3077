import functools

import click

from opensearch_ml import OpenSearchMLError, TaskOutcomeUnknown


def fail_on_remote_errors(command):
    """Turns client errors into a clean CLI error instead of a traceback."""

    @functools.wraps(command)
    def wrapper(*args, **kwargs):
        try:
            return command(*args, **kwargs)
        except TaskOutcomeUnknown as err:
            raise click.ClickException(
                f"{err.message}\nThe task may still complete on the cluster; check it with `osml tasks get {err.task_id}`."
            ) from err
        except OpenSearchMLError as err:
            raise click.ClickException(err.message) from err
        except ValueError as err:
            # Invalid declarations, e.g. a body that is not a JSON object.
            raise click.UsageError(str(err)) from err

    return wrapper
