##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
The `info` command: a troubleshooting summary of the store a scopestore
invocation would use.

It prints the configuration file that was loaded, the SQLite database path
and table name records are kept in, the SQLite library version (or the error
raised when the database can't be opened), and the versions of the Python
packages scopestore runs on.
"""

import logging
from argparse import ArgumentParser, Namespace

from scopestore.cli.commands.command_entry_point import CommandEntryPoint


LOG = logging.getLogger("scopestore")


class InfoCommand(CommandEntryPoint):
    """
    Handles the `info` CLI command, which reports the database path, table name,
    SQLite version, and package versions in use.

    Methods:
        add_parser: Adds the `info` command to the CLI parser.
        process_command: Prints the report.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `info` command parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to which the `info` command parser will be added.
        """
        info: ArgumentParser = subparsers.add_parser(
            "info",
            help="Show the config file, database path, table name, and SQLite version in use, "
            "then the versions of the python packages. Honors --database.",
        )
        info.set_defaults(func=self.process_command)

    def process_command(self, args: Namespace):
        """
        Print the store configuration and package versions.

        Args:
            args: Parsed CLI arguments.
        """
        from scopestore import display  # pylint: disable=import-outside-toplevel

        display.print_info(args)
