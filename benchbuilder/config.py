import toml
import os
from .characteristics import Platform
from .cli_logger import logger

CONFIG_FILE = "benchbuilder.toml"


def get_default_config():
    return {
        "toolchain": {
            "target_framework_moniker": "net8.0",
            "runtime_framework_version": "",
            "cli_path": "",
            "packages_path": "",
        },
        "build": {
            "configuration": "Release",
            "platform": "AnyCpu",
            "program_name": "BenchmarkDotNet.Autogenerated",
            "code_extension": ".notcs",
        },
        "benchmark": {
            "assembly_name": "",
            "assembly_location": "",
            "project_file": "",
        },
        "gc": {},
    }


def load_config(path="."):
    config_path = os.path.join(path, CONFIG_FILE)
    logger.info(f"Loading configuration from {config_path}")
    if os.path.exists(config_path):
        try:
            with open(config_path, "r") as f:
                return toml.load(f)
        except toml.TomlDecodeError as e:
            logger.error(f"Error decoding TOML file at {config_path}: {e}")
            logger.info("Please check the file's format for syntax errors.")
        except IOError as e:
            logger.error(f"Error reading configuration file at {config_path}: {e}")
            logger.info("Please check file permissions.")
    return {}


def save_config(config, path="."):
    config_path = os.path.join(path, CONFIG_FILE)
    logger.info(f"Saving configuration to {config_path}")
    try:
        with open(config_path, "w") as f:
            toml.dump(config, f)
        return True
    except IOError as e:
        logger.error(f"Error saving configuration to {config_path}: {e}")
        logger.info("Please check file permissions and ensure the directory is writable.")
        return False


def get_setting(config, section, key, default=None):
    """Return ``config[section][key]``, treating empty strings as unset."""
    value = config.get(section, {}).get(key)
    if value is None or value == "":
        return default
    return value


GC_KEYS = ("server", "concurrent", "retain_vm")

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


def parse_bool(value, key):
    if value is None or isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Expected a boolean for '{key}', got '{value}'.")


def coerce_setting(key, value):
    """Validate a dotted ``section.name`` key and convert ``value`` to the type stored for it.

    Only keys known to ``get_default_config()`` are accepted. ``gc.*`` values
    become booleans and ``build.platform`` must name a known platform.
    Raises ``ValueError`` otherwise.
    """
    parts = key.split(".")
    if len(parts) != 2:
        raise ValueError(f"Expected a key of the form 'section.name', got '{key}'.")
    section, name = parts

    defaults = get_default_config()
    if section not in defaults:
        raise ValueError(f"Unknown section '{section}'. Expected one of: {', '.join(defaults)}")

    if section == "gc":
        if name not in GC_KEYS:
            raise ValueError(f"Unknown key '{key}'. Expected one of: {', '.join('gc.' + k for k in GC_KEYS)}")
        return parse_bool(value, key)

    if name not in defaults[section]:
        raise ValueError(f"Unknown key '{key}'.")
    if key == "build.platform":
        Platform.parse(value)
    return value
