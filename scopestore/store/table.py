##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Definition of the table that holds scopes and records.

Every scope and every record lives in the same table. Identity rows and
record rows are told apart by the `type` and `key` columns (see
`scopestore.store.constants`).
"""

import logging
import re
import sqlite3
from dataclasses import dataclass

from scopestore.config.database import get_table_name


LOG = logging.getLogger(__name__)

TABLE_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class StoreTable:
    """
    The table holding scopes and records, along with the names of its columns.

    Attributes:
        name: The name of the table.
        id_column: Synthetic row id. For identity rows it is also the scope id.
        scope_column: Id of the scope that owns the row (the parent, for identity rows).
        type_column: The value type of a record, or the scope type for identity rows.
        key_column: The record key, or the reserved scope key for identity rows.
        value_column: The encoded record value, or the scope name for identity rows.
        created_at_column: ISO 8601 timestamp of row creation.
        updated_at_column: ISO 8601 timestamp of the last update.

    Methods:
        from_config: Build the table using the configured table name.
        create_table_if_not_exists: Create the table and its indexes.
    """

    name: str
    id_column: str = "id"
    scope_column: str = "scope"
    type_column: str = "type"
    key_column: str = "key"
    value_column: str = "value"
    created_at_column: str = "created_at"
    updated_at_column: str = "updated_at"

    def __post_init__(self):
        if not TABLE_NAME_PATTERN.match(self.name):
            raise ValueError(f"Invalid table name '{self.name}'.")

    @classmethod
    def from_config(cls) -> "StoreTable":
        """
        Build the table using the table name from the application configuration.

        Returns:
            A `StoreTable` instance.
        """
        return cls(get_table_name())

    def create_table_if_not_exists(self, db: sqlite3.Connection):
        """
        Create the table and its indexes if they don't already exist.

        Args:
            db: The connection to create the table with.
        """
        LOG.debug(f"Ensuring table '{self.name}' exists.")
        db.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {self.name} (
                {self.id_column} INTEGER PRIMARY KEY AUTOINCREMENT,
                {self.scope_column} INTEGER,
                {self.type_column} TEXT NOT NULL,
                {self.key_column} TEXT NOT NULL,
                {self.value_column} TEXT,
                {self.created_at_column} TEXT NOT NULL,
                {self.updated_at_column} TEXT NOT NULL
            )
            """
        )
        db.execute(
            f"CREATE INDEX IF NOT EXISTS {self.name}_scope_type_key "
            f"ON {self.name} ({self.scope_column}, {self.type_column}, {self.key_column})"
        )
        db.execute(
            f"CREATE INDEX IF NOT EXISTS {self.name}_scope_key ON {self.name} ({self.scope_column}, {self.key_column})"
        )
