##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Executors bind a request to a scope reference and a transactor.

Each executor resolves its scope and does all of its work inside a single
transaction when `fetch` or `execute` is called.

Modules:
    base_executor: Scope path resolution and the `BaseExecutor` class.
    scope_query_executor: The three-stage scope query pipeline.
    scope_deletion_executor: The gated scope deletion.
    scope_creation_executor: Creation of scopes and scope chains.
    record_executors: Writing, reading, and deleting records.
"""
