##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Used to store the application configuration.

The `config` package loads the `app.yaml` file (or a default configuration when
none exists) and exposes it through the `Config` class.

Modules:
    config_filepaths.py: Constants for the file paths Scopestore's configuration relies on.
    configfile.py: Handles locating, loading, and defaulting the application configuration file.
    database.py: Resolves the SQLite database path and table name from the configuration.
"""
from copy import copy
from types import SimpleNamespace
from typing import Dict, List, Optional

from scopestore.utils import nested_dict_to_namespaces


class Config:  # pylint: disable=R0903
    """
    The Config class, meant to store all Scopestore config settings in one place.

    Attributes:
        database (Optional[SimpleNamespace]): A namespace containing database settings
            (`path` and `table`).
        logging (Optional[SimpleNamespace]): A namespace containing logging settings
            (`level` and `colors`).

    Methods:
        __copy__: Creates a shallow copy of the Config instance.
        __str__: Returns a formatted string representation of the Config instance.
        load_app_into_namespaces: Converts the provided configuration dictionary into namespaces
            and assigns them to the Config instance's attributes.
    """

    FIELDS: List[str] = ["database", "logging"]

    def __init__(self, app_dict: Dict):
        """
        Initializes the Config instance with configuration data from a dictionary.

        Args:
            app_dict: A dictionary containing configuration data for the application.
                The keys "database" and "logging" are each converted into a `SimpleNamespace`
                and assigned to the corresponding attribute of the Config instance.
        """
        self.database: Optional[SimpleNamespace] = None
        self.logging: Optional[SimpleNamespace] = None
        self.load_app_into_namespaces(app_dict)

    def __copy__(self) -> "Config":
        """
        Creates a shallow copy of the Config instance.

        Returns:
            A new Config instance with copied `database` and `logging` attributes.
        """
        cls = self.__class__
        result = cls.__new__(cls)
        result.__dict__.update({field: copy(self.__dict__[field]) for field in self.FIELDS})
        return result

    def __str__(self) -> str:
        """
        Returns a formatted string representation of the Config instance.

        Returns:
            A string containing the values of the `database` and `logging` attributes.
        """
        formatted_str = "config:"
        for name in self.FIELDS:
            attr = getattr(self, name)
            if attr is not None:
                items = (f"    {k}: {v!r}" for k, v in attr.__dict__.items())
                joined_items = "\n".join(items)
                formatted_str += f"\n  {name}:\n{joined_items}"
            else:
                formatted_str += f"\n  {name}:\n    None"
        return formatted_str

    def load_app_into_namespaces(self, app_dict: Dict):
        """
        Converts the provided application dictionary into namespaces and assigns them
        to the Config instance's attributes.

        Args:
            app_dict: A dictionary containing configuration data for the application.
        """
        for field in self.FIELDS:
            try:
                setattr(self, field, nested_dict_to_namespaces(app_dict[field]))
            except KeyError:
                # The keywords are optional
                pass
