##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Scopestore CLI Commands Package.

Each module holds one top-level command built around the `CommandEntryPoint`
interface.

Modules:
    command_entry_point: Defines the abstract base class `CommandEntryPoint` for all CLI commands.
    info: Implements the `info` command for displaying configuration and environment diagnostics.
    record: Implements the `record` command for writing and reading the records of a scope.
    scope: Implements the `scope` command for listing, creating, and deleting scopes.
"""

from scopestore.cli.commands.info import InfoCommand
from scopestore.cli.commands.record import RecordCommand
from scopestore.cli.commands.scope import ScopeCommand


# Keep these in alphabetical order
ALL_COMMANDS = [
    InfoCommand(),
    RecordCommand(),
    ScopeCommand(),
]
