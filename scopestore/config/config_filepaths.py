##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
This module stores constants representing file paths that will be needed for
Scopestore's configuration.
"""

import os


APP_FILENAME: str = "app.yaml"
USER_HOME: str = os.path.expanduser("~")
SCOPESTORE_HOME: str = os.path.join(USER_HOME, ".scopestore")
CONFIG_PATH_FILE: str = os.path.join(SCOPESTORE_HOME, "config_path.txt")
DEFAULT_DB_PATH: str = os.path.join(SCOPESTORE_HOME, "scopestore.db")
