##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Resolves the database settings from the application configuration.

The SQLite "connection string" is simply the expanded path to the database
file. Both it and the name of the records table can be overridden at runtime,
which is how the CLI's `--database` flag is implemented.
"""
import logging
import os

from scopestore.config import configfile
from scopestore.config.config_filepaths import DEFAULT_DB_PATH


LOG = logging.getLogger(__name__)


def get_connection_string() -> str:
    """
    Get the path to the SQLite database file described by the configuration.

    Returns:
        The absolute, user- and variable-expanded path to the database file.
    """
    database = getattr(configfile.CONFIG, "database", None)
    db_path = getattr(database, "path", None) or DEFAULT_DB_PATH
    return os.path.abspath(os.path.expandvars(os.path.expanduser(db_path)))


def get_table_name() -> str:
    """
    Get the name of the table that holds scopes and records.

    Returns:
        The configured table name, or the default table name if none is configured.
    """
    database = getattr(configfile.CONFIG, "database", None)
    return getattr(database, "table", None) or configfile.DEFAULT_TABLE_NAME


def set_database_path(db_path: str):
    """
    Override the database path stored in the loaded configuration.

    Args:
        db_path: The new path to the SQLite database file.
    """
    if configfile.CONFIG is None:
        configfile.initialize_config()
    if configfile.CONFIG.database is None:
        configfile.CONFIG.load_app_into_namespaces({"database": {"path": db_path}})
    else:
        configfile.CONFIG.database.path = db_path
    LOG.debug(f"Database path set to '{db_path}'.")
