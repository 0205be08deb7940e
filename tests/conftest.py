##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
This module contains pytest fixtures to be used throughout the entire test suite.
"""
import os
import sys
from copy import copy
from glob import glob

import pytest
from _pytest.tmpdir import TempPathFactory

from scopestore.config import configfile
from tests.fixture_types import FixtureCallable, FixtureModification, FixtureStr


# pylint: disable=redefined-outer-name


#######################################
# Loading in Module Specific Fixtures #
#######################################

TESTS_DIR = os.path.dirname(os.path.abspath(__file__))
fixture_glob = os.path.join(TESTS_DIR, "fixtures", "**", "*.py")
pytest_plugins = [
    "tests." + os.path.relpath(fixture_file, TESTS_DIR).replace(os.sep, ".")[: -len(".py")]
    for fixture_file in glob(fixture_glob, recursive=True)
    if not fixture_file.endswith("__init__.py")
]


#######################################
######### Fixture Definitions #########
#######################################


@pytest.fixture(scope="session")
def create_testing_dir() -> FixtureCallable:
    """
    Fixture to create a temporary testing directory.

    Returns:
        A function that creates the testing directory.
    """

    def _create_testing_dir(base_dir: str, sub_dir: str) -> str:
        """
        Helper function to create a temporary testing directory.

        Args:
            base_dir: The base directory where the testing directory will be created.
            sub_dir: The name of the subdirectory to create.

        Returns:
            The path to the created testing directory.
        """
        testing_dir = os.path.join(base_dir, sub_dir)
        if not os.path.exists(testing_dir):
            os.makedirs(testing_dir)  # Use makedirs to create intermediate directories if needed
        return testing_dir

    return _create_testing_dir


@pytest.fixture(scope="session")
def temp_output_dir(tmp_path_factory: TempPathFactory) -> FixtureStr:
    """
    This fixture will create a temporary directory to store output files of the test suite.

    Args:
        tmp_path_factory: A built in factory with pytest to help create temp paths for testing.

    Returns:
        The path to the temp output directory we'll use for this test run.
    """
    return str(
        tmp_path_factory.mktemp(f"python_{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}_")
    )


#######################################
########### CONFIG Fixtures ###########
#######################################


@pytest.fixture(scope="function")
def config(tmp_path) -> FixtureModification:
    """
    Point the global CONFIG object at a fresh database file for the duration of a test,
    then restore the original database settings.

    Args:
        tmp_path: A built in pytest fixture providing a temporary directory unique to the test.

    Yields:
        The path to the database file the CONFIG object now points at.
    """
    orig_config = copy(configfile.CONFIG)
    db_path = os.path.join(str(tmp_path), "scopestore.db")
    configfile.CONFIG.load_app_into_namespaces(
        {
            "database": {"path": db_path, "table": configfile.DEFAULT_TABLE_NAME},
            "logging": {"level": "INFO", "colors": False},
        }
    )

    yield db_path

    configfile.CONFIG.database = orig_config.database
    configfile.CONFIG.logging = orig_config.logging
