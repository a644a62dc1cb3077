import click

from cli.resources import connectors, model_groups, models
from cli.tasks import tasks


@click.group("osml")
@click.version_option(package_name="opensearch-ml")
def osml():
    """OpenSearch ML CLI

    Create, inspect and delete ML Commons model groups, connectors and models.
    Configure with OPENSEARCH_ADDRESS, OPENSEARCH_USERNAME, OPENSEARCH_PASSWORD.
    """


osml.add_command(model_groups)
osml.add_command(connectors)
osml.add_command(models)
osml.add_command(tasks)


if __name__ == "__main__":
    osml()
