import click
import os
import sys
from .. import config as config_module
from ..characteristics import Platform
from ..cli_logger import logger


def _prompt_for_input(prompt, default, validation_func=None, **kwargs):
    while True:
        value = click.prompt(prompt, default=default, **kwargs)
        if validation_func is None or validation_func(value):
            return value
        else:
            logger.warning(f"Invalid input for {prompt}. Please try again.")


def _is_platform(value):
    try:
        Platform.parse(value)
        return True
    except ValueError:
        return False


@click.command()
@click.option('--non-interactive', is_flag=True, help='Run in non-interactive mode using default values.')
@click.pass_context
def init(ctx, non_interactive):
    """Create a benchbuilder.toml for a benchmark project."""
    logger.info("Initializing a new benchbuilder configuration.")

    conf = config_module.get_default_config()
    if non_interactive:
        logger.info("Running in non-interactive mode with default values.")
    else:
        logger.info("Please provide the following details:")
        try:
            conf["toolchain"]["target_framework_moniker"] = _prompt_for_input(
                "Target Framework Moniker (e.g., net8.0)", conf["toolchain"]["target_framework_moniker"])
            conf["build"]["configuration"] = _prompt_for_input(
                "Build Configuration", conf["build"]["configuration"])
            conf["build"]["platform"] = _prompt_for_input(
                "Platform (e.g., AnyCpu, x64, Arm64)", conf["build"]["platform"], validation_func=_is_platform)
            conf["benchmark"]["assembly_location"] = _prompt_for_input(
                "Path to the benchmark assembly (leave empty if unknown)", "")
            conf["benchmark"]["project_file"] = _prompt_for_input(
                "Path to the benchmark project file (leave empty to search next to the assembly)", "")
        except click.Abort:
            logger.warning("\nInitialization aborted by user.")
            return

    if config_module.save_config(conf, path=ctx.obj["path"]):
        logger.success(f"Configuration saved to {os.path.join(ctx.obj['path'], config_module.CONFIG_FILE)}")
        logger.info("Next steps: Run 'benchbuilder generate' to create the benchmark project file.")
    else:
        sys.exit(1)
