import click
import os
import sys
import json
from .. import config as config_module
from ..cli_logger import logger


def _load_or_report(ctx):
    conf = config_module.load_config(path=ctx.obj["path"])
    if not conf:
        logger.error("Error: No benchbuilder.toml found. Please run 'benchbuilder init' first.")
    return conf


def _lookup(conf, key):
    value = conf
    for k in key.split('.'):
        value = value[k]
    return value


@click.group()
@click.pass_context
def config(ctx):
    """View or change the settings in benchbuilder.toml."""
    pass

@config.command()
@click.pass_context
def view(ctx):
    """Print benchbuilder.toml as written on disk."""
    if not _load_or_report(ctx):
        return
    config_file_path = os.path.join(ctx.obj["path"], config_module.CONFIG_FILE)
    try:
        with open(config_file_path, 'r') as f:
            click.echo(f.read())
    except IOError as e:
        logger.error(f"Error reading benchbuilder.toml at {config_file_path}: {e}")

@config.command(name="list")
@click.pass_context
def list_config(ctx):
    """List every section with its effective values, defaults included."""
    conf = _load_or_report(ctx)
    if not conf:
        return
    merged = config_module.get_default_config()
    for section, values in conf.items():
        merged.setdefault(section, {}).update(values)
    click.echo(json.dumps(merged, indent=4))

@config.command()
@click.argument('key')
@click.pass_context
def get(ctx, key):
    """Get a value, e.g. 'toolchain.target_framework_moniker'."""
    conf = _load_or_report(ctx)
    if not conf:
        return
    try:
        click.echo(_lookup(conf, key))
    except (KeyError, TypeError):
        logger.error(f"Error: Key '{key}' not found in benchbuilder.toml")

@config.command(name="set")
@click.argument('key')
@click.argument('value')
@click.pass_context
def set_value(ctx, key, value):
    """Set a value. 'gc.*' keys take booleans, 'build.platform' a known platform."""
    conf = _load_or_report(ctx)
    if not conf:
        return

    try:
        value = config_module.coerce_setting(key, value)
    except ValueError as e:
        logger.error(f"Error: {e}")
        sys.exit(1)

    section, name = key.split('.')
    conf.setdefault(section, {})[name] = value

    if config_module.save_config(conf, path=ctx.obj["path"]):
        logger.info(f"Set '{key}' to {value!r}")
    else:
        sys.exit(1)

@config.command()
@click.argument('key')
@click.pass_context
def unset(ctx, key):
    """Remove a key so that its default applies again."""
    conf = _load_or_report(ctx)
    if not conf:
        return

    section, _, name = key.partition('.')
    try:
        del conf[section][name]
    except (KeyError, TypeError):
        logger.error(f"Error: Key '{key}' not found in benchbuilder.toml")
        return

    if config_module.save_config(conf, path=ctx.obj["path"]):
        logger.info(f"Unset '{key}'")
    else:
        sys.exit(1)
