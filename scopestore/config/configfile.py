##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
This module provides functionality for locating and loading the application
configuration file and filling in default settings.

It houses the `CONFIG` object that's used throughout Scopestore's codebase.
"""
import logging
import os
from typing import Dict, Optional

from scopestore.config import Config
from scopestore.config.config_filepaths import APP_FILENAME, CONFIG_PATH_FILE, DEFAULT_DB_PATH, SCOPESTORE_HOME
from scopestore.utils import dict_deep_merge, load_yaml


LOG: logging.Logger = logging.getLogger(__name__)

CONFIG: Optional[Config] = None
DEFAULT_TABLE_NAME: str = "scopestore_records"


def load_config(filepath: str) -> Optional[Dict]:
    """
    Reads a Scopestore YAML configuration file and returns its contents as a dictionary.

    Args:
        filepath: The path to the YAML configuration file.

    Returns:
        A dictionary containing the contents of the YAML file or None if file doesn't exist.
    """
    if not os.path.isfile(filepath):
        LOG.info(f"No app config file at {filepath}")
        return None
    LOG.info(f"Reading app config from file {filepath}")
    return load_yaml(filepath) or {}


def find_config_file(path: str = None) -> Optional[str]:
    """
    Locate the Scopestore application configuration file (`app.yaml`).

    If no directory is provided, this uses a fallback sequence:
      1. Check for `app.yaml` in the current working directory.
      2. Check if `CONFIG_PATH_FILE` exists and points to a valid config file.
      3. Check for `app.yaml` in the `SCOPESTORE_HOME` directory.

    If a `path` is explicitly provided, only that directory is checked.

    Args:
        path: A specific directory to look for `app.yaml`.

    Returns:
        The full path to the `app.yaml` file if found, otherwise `None`.
    """
    if path is None:
        local_app = os.path.join(os.getcwd(), APP_FILENAME)
        if os.path.isfile(local_app):
            return local_app

        if os.path.isfile(CONFIG_PATH_FILE):
            with open(CONFIG_PATH_FILE, "r") as f:
                config_path = f.read().strip()
            if os.path.isfile(config_path):
                return config_path

        path_app = os.path.join(SCOPESTORE_HOME, APP_FILENAME)
        if os.path.isfile(path_app):
            return path_app

        return None

    app_path = os.path.join(path, APP_FILENAME)
    if os.path.exists(app_path):
        return app_path

    return None


def get_default_config() -> Dict:
    """
    Creates the default configuration used when no `app.yaml` can be found.

    Returns:
        A configuration dictionary with every setting Scopestore reads.
    """
    return {
        "database": {
            "path": DEFAULT_DB_PATH,
            "table": DEFAULT_TABLE_NAME,
        },
        "logging": {
            "level": "INFO",
            "colors": True,
        },
    }


def load_defaults(config: Dict):
    """
    Fill in any setting missing from `config` with its default value.

    Args:
        config: The configuration dictionary to be updated with default values.
    """
    dict_deep_merge(config, get_default_config())


def get_config(path: Optional[str] = None) -> Dict:
    """
    Loads a Scopestore configuration file and returns a dictionary containing the configuration data.

    Args:
        path: The directory path to search for the configuration file.
            If `None`, default search paths are used.

    Returns:
        A dictionary containing all the configuration data. When no configuration
            file exists, the default configuration is returned.

    Raises:
        ValueError: If the configuration file does not hold a mapping.
    """
    filepath = find_config_file(path)
    if filepath is None:
        LOG.debug("No app.yaml found. Using the default configuration.")
        return get_default_config()

    config = load_config(filepath)
    if not isinstance(config, dict):
        raise ValueError(f"The configuration file '{filepath}' must contain a mapping at the top level.")
    load_defaults(config)
    return config


def default_config_info() -> Dict:
    """
    Returns information about Scopestore's configuration files.

    Returns:
        A dictionary containing the following keys:\n
            - `config_file` (str): Path to the Scopestore configuration file, None if there is none.
            - `scopestore_home` (str): Path to the Scopestore home directory.
            - `scopestore_home_exists` (bool): True if the Scopestore home directory exists.
    """
    return {
        "config_file": find_config_file(),
        "scopestore_home": SCOPESTORE_HOME,
        "scopestore_home_exists": os.path.exists(SCOPESTORE_HOME),
    }


def initialize_config(path: Optional[str] = None) -> Config:
    """
    Initializes and returns the Scopestore configuration.

    Args:
        path: Directory to look for the configuration file in.

    Returns:
        The initialized configuration object.
    """
    global CONFIG  # pylint: disable=global-statement

    try:
        CONFIG = Config(get_config(path))
    except ValueError as e:
        LOG.warning(f"Error loading configuration: {e}. Falling back to default configuration.")
        CONFIG = Config(get_default_config())

    return CONFIG


initialize_config()
