##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Tests for the database.py module.
"""

import os

from pytest_mock import MockerFixture

from scopestore.config import configfile
from scopestore.config.config_filepaths import DEFAULT_DB_PATH
from scopestore.config.database import get_connection_string, get_table_name, set_database_path
from tests.fixture_types import FixtureModification


def test_get_connection_string(config: FixtureModification):
    """
    Test that the connection string is the configured database path.

    Args:
        config: A fixture pointing the CONFIG object at a temporary database file.
    """
    assert get_connection_string() == os.path.abspath(config)


def test_get_connection_string_expands_user(config: FixtureModification, mocker: MockerFixture):
    """
    Test that `~` and environment variables in the path are expanded.

    Args:
        config: A fixture pointing the CONFIG object at a temporary database file.
        mocker: Pytest mocker fixture for mocking functionality.
    """
    mocker.patch.dict(os.environ, {"SCOPESTORE_TEST_DIR": "somewhere"})
    configfile.CONFIG.database.path = "~/$SCOPESTORE_TEST_DIR/store.db"

    assert get_connection_string() == os.path.join(os.path.expanduser("~"), "somewhere", "store.db")


def test_get_connection_string_without_database_section(config: FixtureModification):
    """
    Test that the default database path is used when nothing is configured.

    Args:
        config: A fixture pointing the CONFIG object at a temporary database file.
    """
    configfile.CONFIG.database = None
    assert get_connection_string() == os.path.abspath(DEFAULT_DB_PATH)


def test_get_table_name(config: FixtureModification):
    """
    Test the configured and default table names.

    Args:
        config: A fixture pointing the CONFIG object at a temporary database file.
    """
    configfile.CONFIG.database.table = "custom_records"
    assert get_table_name() == "custom_records"

    configfile.CONFIG.database = None
    assert get_table_name() == configfile.DEFAULT_TABLE_NAME


def test_set_database_path(config: FixtureModification, tmp_path):
    """
    Test that `set_database_path` overrides the configured path.

    Args:
        config: A fixture pointing the CONFIG object at a temporary database file.
        tmp_path: A built in pytest fixture providing a temporary directory unique to the test.
    """
    new_path = os.path.join(str(tmp_path), "other.db")
    set_database_path(new_path)
    assert get_connection_string() == new_path

    configfile.CONFIG.database = None
    set_database_path(new_path)
    assert configfile.CONFIG.database.path == new_path
