import click
import sys
import xml.etree.ElementTree as ET
from .. import config as config_module
from ..cli_logger import logger
from ..settings_merger import SettingsMerger

@click.command()
@click.pass_context
@click.argument("project_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--moniker", "-m", default=None, help="Target framework moniker used to resolve the SDK.")
@click.option("--runtime-framework-version", default=None, help="Explicit RuntimeFrameworkVersion override.")
def inspect(ctx, project_file, moniker, runtime_framework_version):
    """Show the settings a generated project would copy from PROJECT_FILE."""
    conf = config_module.load_config(path=ctx.obj["path"])
    moniker = moniker or config_module.get_setting(conf, "toolchain", "target_framework_moniker", "net8.0")

    merger = SettingsMerger(moniker, runtime_framework_version)
    try:
        custom_properties, sdk_name = merger.merge(project_file)
    except ET.ParseError as e:
        logger.error(f"Error parsing {project_file}: {e}")
        sys.exit(1)
    except FileNotFoundError as e:
        logger.error(f"Error: {e}")
        logger.exception(*sys.exc_info())
        sys.exit(1)

    click.echo(f"SDK: {sdk_name}")
    if custom_properties:
        click.echo(custom_properties)
    else:
        click.echo("No settings to copy.")
