##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
This module defines the `RecordCommand` class, which provides CLI subcommands
for writing, reading, and deleting the records of a scope.
"""

import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from scopestore.cli.commands.command_entry_point import CommandEntryPoint
from scopestore.cli.utils import VALUE_TYPES, parse_record_value
from scopestore.display import display_records
from scopestore.store.scope_store import ScopeStore


LOG = logging.getLogger("scopestore")


class RecordCommand(CommandEntryPoint):
    """
    Handles `record` CLI commands for managing the records of a scope.

    Methods:
        add_parser: Adds the `record` command and its subcommands to the CLI parser.
        process_command: Processes the CLI input and dispatches the appropriate action.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `record` command parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to which the `record` command parser will be added.
        """
        record: ArgumentParser = subparsers.add_parser(
            "record",
            help="Write, read, and delete the records of a scope.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        record.set_defaults(func=self.process_command)
        record_commands: ArgumentParser = record.add_subparsers(dest="record_command", required=True)

        record_set: ArgumentParser = record_commands.add_parser(
            "set",
            help="Write a record, replacing any previous value.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        record_set.add_argument("path", type=str, help="The scope owning the record.")
        record_set.add_argument("key", type=str, help="The record key.")
        record_set.add_argument("value", type=str, nargs="+", help="The value. Several values make a list.")
        record_set.add_argument(
            "-t",
            "--type",
            type=str,
            choices=VALUE_TYPES,
            default="auto",
            help="How to interpret the value.",
        )

        record_get: ArgumentParser = record_commands.add_parser(
            "get",
            help="Read records of a scope.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        record_get.add_argument("path", type=str, help="The scope owning the records.")
        record_get.add_argument("keys", type=str, nargs="*", help="The keys to read. Omit to read every record.")

        record_delete: ArgumentParser = record_commands.add_parser(
            "delete",
            help="Delete records of a scope.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        record_delete.add_argument("path", type=str, help="The scope owning the records.")
        record_delete.add_argument("keys", type=str, nargs="*", help="The keys to delete.")
        record_delete.add_argument(
            "--bulk",
            action="store_true",
            help="Allow deleting every record of the scope when no key is given.",
        )

    def process_command(self, args: Namespace):
        """
        CLI command for managing records.

        Args:
            args: Parsed CLI arguments.
        """
        context = ScopeStore().within(args.path)

        if args.record_command == "set":
            values = [parse_record_value(value, args.type) for value in args.value]
            context.set_record(args.key, values[0] if len(values) == 1 else values)
            LOG.info(f"Stored record '{args.key}' in scope '{args.path}'.")
        elif args.record_command == "get":
            display_records(context.get_records(*args.keys))
        elif args.record_command == "delete":
            context.delete_records(*args.keys).allow_bulk(args.bulk).execute()
