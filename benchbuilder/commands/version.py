import click
import importlib.metadata
from ..cli_logger import logger

@click.command()
def version():
    """Print the version of benchbuilder."""
    try:
        ver = importlib.metadata.version("benchbuilder")
        logger.info(f"benchbuilder version {ver}")
    except importlib.metadata.PackageNotFoundError:
        logger.error("Error: Could not determine the version of benchbuilder. Is it installed correctly?")
