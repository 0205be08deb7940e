##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Scopestore: a hierarchical, scoped key-value store on top of SQLite.

Scopes form a tree and every scope carries an arbitrary set of key/value
records. The `store` package holds the query and deletion engine, `queries`
holds the SQL predicate builders it relies on and `backends` provides the
transactional SQLite row store underneath.
"""

import os


__version__ = "0.4.0"
VERSION = __version__
PATH_TO_PROJ = os.path.join(os.path.dirname(__file__), "")
