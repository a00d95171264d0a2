"""Constants used in the project."""

import logging
import os
from enum import Enum

logger = logging.getLogger(__name__)


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    RESOLUTION_ERROR = 2
    EXIT_FAILURES = 3


class OutputFormats(Enum):
    """Output formats supported by the command line.

    Args:
        Enum (string): Output formats supported by the command line.
    """

    TEXT = "text"
    JSON = "json"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PROG_NAME = "moddeps"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "MODDEPS_LOG_LEVEL"
    ENV_CONFIG = "MODDEPS_CONFIG"
    CONFIG_FILE = "moddeps.yml"
    CONFIG_LOCATIONS = [
        CONFIG_FILE,
        os.path.join("~", ".config", "moddeps", CONFIG_FILE),
    ]
    MOD_SET_EXTENSIONS_YAML = (".yml", ".yaml")
    MOD_SET_EXTENSIONS_JSON = (".json",)
    SUPPORTED_FORMATS = [OutputFormats.TEXT.value, OutputFormats.JSON.value]

    # Resolution defaults (overridable from the "resolution" config section)
    DEFAULT_RESOLVE_LAYOUT = "ResolveRecursive"
    DEFAULT_MOD_TYPE = "default"


def _config_candidates():
    """Return config file paths in lookup order."""
    explicit = os.environ.get(Constants.ENV_CONFIG)
    if explicit and explicit.strip():
        return [explicit.strip()]
    return [os.path.expanduser(p) for p in Constants.CONFIG_LOCATIONS]


def load_config(path=None):
    """Load the YAML configuration file.

    Args:
        path (str, optional): Explicit config path. When omitted, the
            MODDEPS_CONFIG environment variable and the default locations are
            tried in order.

    Returns:
        dict: Parsed configuration, empty when no file was found.
    """
    import yaml  # pylint: disable=import-outside-toplevel

    if path and not os.path.isfile(path):
        logger.warning("Config file not found: %s", path)
        return {}
    candidates = [path] if path else _config_candidates()
    for candidate in candidates:
        if not os.path.isfile(candidate):
            continue
        with open(candidate, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config file %s: top level is not a mapping", candidate)
            return {}
        logger.debug("Loaded config from %s", candidate)
        return data
    return {}
