import functools

import click
from rich.console import Console


@functools.lru_cache()
def init_client():
    console = Console()
    with console.status("Initializing client"):
        import opensearch_ml

        try:
            return opensearch_ml.OpenSearchMLClient()
        except opensearch_ml.MissingAddress as err:
            raise click.ClickException(
                "Set OPENSEARCH_ADDRESS (and OPENSEARCH_USERNAME / OPENSEARCH_PASSWORD if needed)"
            ) from err
