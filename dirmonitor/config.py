import copy
import os

import toml
import yaml

DEFAULT_CONFIG_PATH = "./config.toml"
ENV_CONFIG_DIR_VAR = "DIRMONITOR_CONFIG_DIR"
ENV_DIRECTORY_VAR = "DIRMONITOR_DIRECTORY"

DEFAULT_CONFIG = {
    "monitor": {
        "directory": None,
        "interval": 1.0,
        "isolate_listeners": False,
    },
    "logging": {
        "level": "INFO",
        "log_dir": None,
    },
}


def merge_config(base, overrides):
    """
    Recursively merge overrides into a copy of base.

    Returns:
        dict: The merged configuration.
    """
    merged = copy.deepcopy(base)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def read_config_file(config_path):
    """
    Read a TOML or YAML configuration file.

    Files ending in .yaml or .yml are parsed with PyYAML, anything else as TOML.
    """
    with open(config_path, "r") as f:
        if config_path.endswith((".yaml", ".yml")):
            return yaml.safe_load(f) or {}
        return toml.load(f)


def load_config(cli_config_path=None):
    """
    Load configuration merged over DEFAULT_CONFIG.

    Precedence:
      1. cli_config_path if provided.
      2. Environment variable DIRMONITOR_CONFIG_DIR (looking for config.toml).
      3. Default to ./config.toml, which may be absent.

    Returns:
        dict: The configuration settings.
    """
    if cli_config_path:
        config_path = cli_config_path
    elif os.environ.get(ENV_CONFIG_DIR_VAR):
        config_path = os.path.join(os.environ[ENV_CONFIG_DIR_VAR], "config.toml")
    else:
        if not os.path.exists(DEFAULT_CONFIG_PATH):
            return copy.deepcopy(DEFAULT_CONFIG)
        config_path = DEFAULT_CONFIG_PATH

    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    config_data = read_config_file(config_path)
    if not isinstance(config_data, dict):
        raise ValueError(f"Configuration file must contain a table: {config_path}")

    return merge_config(DEFAULT_CONFIG, config_data)


def resolve_directory(cli_directory, cfg):
    """
    Pick the directory to monitor.

    Precedence: the CLI argument, DIRMONITOR_DIRECTORY, then monitor.directory
    from the configuration. Returns None if none is set.
    """
    if cli_directory:
        return cli_directory
    if os.environ.get(ENV_DIRECTORY_VAR):
        return os.environ[ENV_DIRECTORY_VAR]
    return cfg.get("monitor", {}).get("directory")
