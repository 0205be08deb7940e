##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Manages formatting for displaying information to the console.
"""
import json
import logging
import os
from argparse import Namespace
from typing import Any, Dict

from tabulate import tabulate

from scopestore.store.scope import ScopeCollection
from scopestore.utils import get_package_versions


LOG = logging.getLogger("scopestore")


def display_config_info():
    """
    Prints useful configuration information for Scopestore to the console.

    This includes where the configuration was loaded from, the database file and
    table in use, and the version of SQLite. A database that can't be opened is
    reported in the output instead of aborting the display.
    """
    from scopestore.backends.sqlite.sqlite_transactor import SQLiteTransactor  # pylint: disable=C0415
    from scopestore.config.configfile import default_config_info  # pylint: disable=C0415
    from scopestore.config.database import get_connection_string, get_table_name  # pylint: disable=C0415

    print("Scopestore Configuration")
    print("-" * 25)
    print("")

    conf = default_config_info()
    conf["database"] = get_connection_string()
    conf["table"] = get_table_name()
    excpts = {}
    try:
        conf["sqlite version"] = SQLiteTransactor().get_version()
    except Exception as e:  # pylint: disable=C0103,W0703
        conf["sqlite version"] = "Database error."
        excpts["database"] = e

    print(tabulate(conf.items(), tablefmt="presto"))

    if excpts:
        print("\nExceptions:")
        for key, val in excpts.items():
            print(f"{key}: {val}")


# Might use args here in the future so we'll disable the pylint warning for now
def print_info(args: Namespace):  # pylint: disable=W0613
    """
    Provide version and location information about python and packages to
    facilitate user troubleshooting. Also provides info about the configuration
    and the database.

    Args:
        args: parsed CLI arguments (currently unused).
    """
    display_config_info()

    print("")
    print("Python Configuration")
    print("-" * 25)
    print("")
    package_list = ["pip", "scopestore", "pyyaml", "coloredlogs", "tabulate"]
    package_versions = get_package_versions(package_list)
    print(package_versions)
    pythonpath = os.environ.get("PYTHONPATH")
    print(f"$PYTHONPATH: {pythonpath}")


def display_scopes(scopes: ScopeCollection):
    """
    Print a table of scopes.

    Args:
        scopes: The scopes to display, in order.
    """
    if not scopes:
        print("No scopes found.")
        return
    print(tabulate([[scope.id, scope.name] for scope in scopes], headers=["ID", "Name"], tablefmt="simple"))


def _format_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str)
    return str(value)


def display_records(records: Dict[str, Any]):
    """
    Print a table of records.

    Args:
        records: A dictionary of record key to decoded value.
    """
    if not records:
        print("No records found.")
        return
    rows = [[key, type(value).__name__, _format_value(value)] for key, value in records.items()]
    print(tabulate(rows, headers=["Key", "Type", "Value"], tablefmt="simple"))
