import click
from ..cli_logger import logger
from ..template_renderer import TEMPLATES_DIR, list_templates as get_templates

@click.command(name="list-templates")
@click.pass_context
def list_templates(ctx):
    """List available project templates."""
    templates = get_templates()
    if not templates:
        logger.error(f"Error: No templates found in {TEMPLATES_DIR}. This might indicate a corrupted installation.")
        return
    logger.info("Available templates:")
    for item in templates:
        logger.info(item)
