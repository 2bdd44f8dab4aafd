import copy
import os

import toml

DEFAULT_CONFIG_PATH = os.path.join("~", ".events", "config.toml")
ENV_CONFIG_DIR_VAR = "EVENTLOG_CONFIG_DIR"

DEFAULT_CONFIG = {
    "storage": {
        "directory": ".events",
        "filename": "events.csv",
    },
    "logging": {
        "level": "WARNING",
        "log_dir": "",
    },
}


def merge_defaults(config_data):
    """
    Fill in missing sections and keys from DEFAULT_CONFIG.

    Args:
        config_data (dict): Settings read from a configuration file.

    Returns:
        dict: A new dictionary with every default section present.
    """
    merged = copy.deepcopy(DEFAULT_CONFIG)
    for section, values in config_data.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section].update(values)
        else:
            merged[section] = values
    return merged


def load_config(cli_config_path=None):
    """
    Load configuration from a TOML file.

    Precedence:
      1. cli_config_path if provided.
      2. Environment variable EVENTLOG_CONFIG_DIR (looking for config.toml).
      3. ~/.events/config.toml, if it exists.
      4. Built-in defaults.

    Returns:
        dict: The configuration settings.
    """
    if cli_config_path:
        config_path = cli_config_path
    elif os.environ.get(ENV_CONFIG_DIR_VAR):
        config_path = os.path.join(os.environ[ENV_CONFIG_DIR_VAR], "config.toml")
    else:
        config_path = os.path.expanduser(DEFAULT_CONFIG_PATH)
        if not os.path.exists(config_path):
            return merge_defaults({})

    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r") as f:
        config_data = toml.load(f)

    return merge_defaults(config_data)
