##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
SQLite-based backend infrastructure for Scopestore.

Modules:
    sqlite_connection: Provides a context-managed SQLite connection with safe configuration.
    sqlite_transactor: Implements the `Transactor` interface on top of SQLite.
"""
