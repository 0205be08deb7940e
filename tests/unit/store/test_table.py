##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Tests for the `table.py` module.
"""

import pytest
from pytest_mock import MockerFixture

from scopestore.store.table import StoreTable
from tests.fixture_types import FixtureTransactor


@pytest.mark.parametrize("name", ["", "1table", "records; DROP TABLE x", "my-table"])
def test_invalid_table_names_are_rejected(name: str):
    """
    Test that only identifier-like table names are accepted.

    Args:
        name: The invalid table name.
    """
    with pytest.raises(ValueError):
        StoreTable(name)


def test_from_config(mocker: MockerFixture):
    """
    Test that the table name comes from the configuration.

    Args:
        mocker: PyTest mocker fixture.
    """
    mocker.patch("scopestore.store.table.get_table_name", return_value="configured_records")
    assert StoreTable.from_config().name == "configured_records"


def test_create_table_if_not_exists(sqlite_transactor: FixtureTransactor):
    """
    Test that the table and its indexes are created, and that creating them again is harmless.

    Args:
        sqlite_transactor: A `SQLiteTransactor` on a temporary database file.
    """
    table = StoreTable("records")
    sqlite_transactor.execute_as_transaction(table.create_table_if_not_exists)
    sqlite_transactor.execute_as_transaction(table.create_table_if_not_exists)

    def _schema(db):
        columns = [row["name"] for row in db.execute("PRAGMA table_info(records)").fetchall()]
        indexes = {row["name"] for row in db.execute("PRAGMA index_list(records)").fetchall()}
        return columns, indexes

    columns, indexes = sqlite_transactor.query_as_transaction(_schema)
    assert columns == ["id", "scope", "type", "key", "value", "created_at", "updated_at"]
    assert {"records_scope_type_key", "records_scope_key"} <= indexes
