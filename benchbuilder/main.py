import click
from .commands import *


@click.group()
@click.option("--path", "-p", default=".", help="Path to the directory holding benchbuilder.toml.")
@click.pass_context
def cli(ctx, path):
    """Generate standalone project files for .NET benchmark programs."""
    ctx.obj = {"path": path}

cli.add_command(init)
cli.add_command(generate)
cli.add_command(inspect)
cli.add_command(config)
cli.add_command(list_templates)
cli.add_command(log)
cli.add_command(version)

if __name__ == '__main__':
    cli()
