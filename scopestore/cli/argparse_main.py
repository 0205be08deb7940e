##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Main CLI parser setup for the Scopestore command-line interface.

This module defines the primary argument parser for the `scopestore` CLI tool,
including custom error handling and integration of all available subcommands.
"""

import sys
from argparse import ArgumentParser, RawDescriptionHelpFormatter

from scopestore import VERSION
from scopestore.cli.commands import ALL_COMMANDS


DEFAULT_LOG_LEVEL = "INFO"
DESCRIPTION = "Scopestore: hierarchical scopes of typed records, stored in SQLite."


class HelpParser(ArgumentParser):
    """
    This class overrides the error message of the argument parser to
    print the help message when an error happens.

    Methods:
        error: Override the error message of the `ArgumentParser` class.
    """

    def error(self, message: str):
        """
        Override the error message of the `ArgumentParser` class.

        Args:
            message: The error message to log.
        """
        sys.stderr.write(f"error: {message}\n")
        self.print_help()
        sys.exit(2)


def build_main_parser() -> ArgumentParser:
    """
    Set up the command-line argument parser for the Scopestore package.

    Returns:
        An `ArgumentParser` object with every command defined in Scopestore's codebase.
    """
    parser = HelpParser(
        prog="scopestore",
        description=DESCRIPTION,
        formatter_class=RawDescriptionHelpFormatter,
        epilog="See scopestore <command> --help for more info",
    )
    parser.add_argument("-v", "--version", action="version", version=VERSION)
    parser.add_argument(
        "-lvl",
        "--level",
        type=str,
        default=None,
        help=f"Set log level: DEBUG, INFO, WARNING, ERROR [Default: the configured level, or {DEFAULT_LOG_LEVEL}]",
    )
    parser.add_argument(
        "-d",
        "--database",
        type=str,
        default=None,
        help="Path to the SQLite database file, overriding the configured one.",
    )
    subparsers = parser.add_subparsers(dest="subparsers", required=True)

    for command in ALL_COMMANDS:
        command.add_parser(subparsers)

    return parser
