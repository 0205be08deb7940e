##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
This module defines the `ScopeCommand` class, which provides CLI subcommands
for listing, creating, and deleting scopes.

Scope paths are given as slash-separated names, e.g. `experiments/run1`.
An omitted path stands for the root.
"""

import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from scopestore.cli.commands.command_entry_point import CommandEntryPoint
from scopestore.cli.utils import (
    NAME_OPERATORS,
    VALUE_TYPES,
    parse_name_constraint,
    parse_record_constraint,
    parse_where_args,
)
from scopestore.display import display_scopes
from scopestore.queries import QueryOrder, in_
from scopestore.store.scope_store import ScopeStore


LOG = logging.getLogger("scopestore")


class ScopeCommand(CommandEntryPoint):
    """
    Handles `scope` CLI commands for managing scopes.

    Methods:
        add_parser: Adds the `scope` command and its subcommands to the CLI parser.
        process_command: Processes the CLI input and dispatches the appropriate action.
        process_list: Lists the scopes directly under a scope.
        process_create: Creates a chain of scopes.
        process_delete: Deletes scopes directly under a scope.
    """

    def _add_list_subcommand(self, scope_commands: ArgumentParser):
        """
        Add the `list` subcommand and its options.

        Parameters:
            scope_commands (ArgumentParser): The parent parser for scope subcommands.
        """
        scope_list: ArgumentParser = scope_commands.add_parser(
            "list",
            help="List the scopes directly under a scope.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        scope_list.add_argument("path", type=str, nargs="?", default=None, help="The parent scope. Omit for the root.")
        scope_list.add_argument(
            "--name",
            nargs=2,
            action="append",
            metavar=("OP", "VALUE"),
            help=f"Constrain scope names. OP is one of: {', '.join(NAME_OPERATORS)}. May be repeated.",
        )
        scope_list.add_argument(
            "--where",
            action="append",
            metavar="KEY=VALUE",
            help="Only list scopes having a record KEY equal to VALUE. May be repeated.",
        )
        scope_list.add_argument(
            "-t",
            "--type",
            type=str,
            choices=VALUE_TYPES,
            default="auto",
            help="How to interpret the --where values, as in `record set`.",
        )
        scope_list.add_argument(
            "--order",
            type=str,
            choices=["asc", "desc"],
            default=None,
            help="Order the scopes by name.",
        )
        scope_list.add_argument("--limit", type=int, default=None, help="The maximum number of scopes to list.")
        scope_list.add_argument("--offset", type=int, default=0, help="The number of scopes to skip.")

    def _add_create_subcommand(self, scope_commands: ArgumentParser):
        """
        Add the `create` subcommand and its options.

        Parameters:
            scope_commands (ArgumentParser): The parent parser for scope subcommands.
        """
        scope_create: ArgumentParser = scope_commands.add_parser(
            "create",
            help="Create a scope, along with any missing parent scopes.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        scope_create.add_argument("path", type=str, help="The path of the scope to create.")

    def _add_delete_subcommand(self, scope_commands: ArgumentParser):
        """
        Add the `delete` subcommand and its options.

        Parameters:
            scope_commands (ArgumentParser): The parent parser for scope subcommands.
        """
        scope_delete: ArgumentParser = scope_commands.add_parser(
            "delete",
            help="Delete scopes directly under a scope.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        scope_delete.add_argument(
            "path", type=str, nargs="?", default=None, help="The parent scope. Omit for the root."
        )
        scope_delete.add_argument("--name", type=str, action="append", help="Delete the scope with this name.")
        scope_delete.add_argument(
            "--where",
            action="append",
            metavar="KEY=VALUE",
            help="Only delete scopes having a record KEY equal to VALUE. May be repeated.",
        )
        scope_delete.add_argument(
            "-t",
            "--type",
            type=str,
            choices=VALUE_TYPES,
            default="auto",
            help="How to interpret the --where values, as in `record set`.",
        )
        scope_delete.add_argument(
            "--bulk",
            action="store_true",
            help="Allow deleting every scope under the parent when no --name or --where is given.",
        )
        scope_delete.add_argument(
            "-r",
            "--recursive",
            action="store_true",
            help="Also delete every descendant of the deleted scopes.",
        )

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `scope` command parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to which the `scope` command parser will be added.
        """
        scope: ArgumentParser = subparsers.add_parser(
            "scope",
            help="List, create, and delete scopes.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        scope.set_defaults(func=self.process_command)
        scope_commands: ArgumentParser = scope.add_subparsers(dest="scope_command", required=True)

        self._add_list_subcommand(scope_commands)
        self._add_create_subcommand(scope_commands)
        self._add_delete_subcommand(scope_commands)

    def process_list(self, store: ScopeStore, args: Namespace):
        """
        List the scopes directly under `args.path`.

        Args:
            store: The scope store to query.
            args: Parsed CLI arguments.
        """
        query = store.within(args.path).query_scope()
        for operator, value in args.name or []:
            query = query.where_scope_name(parse_name_constraint(operator, value))
        for key, value in parse_where_args(args.where):
            query = query.where_record(key, parse_record_constraint(value, args.type))
        if args.order is not None:
            query = query.order_by_scope_name(QueryOrder(args.order.upper()))
        if args.limit is not None:
            query = query.limit(args.offset, args.limit)
        elif args.offset:
            LOG.warning("--offset is ignored without --limit.")

        display_scopes(query.fetch())

    def process_create(self, store: ScopeStore, args: Namespace):
        """
        Create the scope at `args.path`, along with any missing parent.

        Args:
            store: The scope store to write to.
            args: Parsed CLI arguments.
        """
        scope = store.within_root().create_scopes(args.path)
        print(f"Scope '{args.path}' is available with id {scope.id}.")

    def process_delete(self, store: ScopeStore, args: Namespace):
        """
        Delete scopes directly under `args.path`.

        Args:
            store: The scope store to delete from.
            args: Parsed CLI arguments.
        """
        deletion = store.within(args.path).delete_scope()
        if args.name:
            deletion = deletion.where_scope_name(in_(args.name))
        for key, value in parse_where_args(args.where):
            deletion = deletion.where_record(key, parse_record_constraint(value, args.type))
        deletion = deletion.allow_bulk(args.bulk).allow_recursion(args.recursive)

        if deletion.execute():
            LOG.info("Deletion complete.")

    def process_command(self, args: Namespace):
        """
        CLI command for managing scopes.

        Args:
            args: Parsed CLI arguments.
        """
        store = ScopeStore()
        if args.scope_command == "list":
            self.process_list(store, args)
        elif args.scope_command == "create":
            self.process_create(store, args)
        elif args.scope_command == "delete":
            self.process_delete(store, args)
