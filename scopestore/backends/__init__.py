##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Backend infrastructure for Scopestore.

The `backends` package provides the transactional row store that the scope
engine runs on. It defines the abstract `Transactor` interface, which runs a
closure against a single connection inside one transaction, along with a
concrete SQLite implementation.

Subpackages:
    sqlite: SQLite-based backend, with a context-managed connection and a `Transactor` implementation.

Modules:
    transactor: Defines the abstract `Transactor` base class.
"""
