##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
The scope engine: a tree of named scopes, each holding typed key/value
records, stored in a single table.

Modules:
    constants: Reserved identity markers and the `ValueType` enum.
    table: The `StoreTable` definition and its schema.
    scope: Scope values, scope collections, and scope references.
    values: Encoding and decoding of record values.
    requests: Immutable query and deletion requests.
    scope_store: The `ScopeStore` entry point.
"""
