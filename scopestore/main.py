##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Main entry point into Scopestore's codebase.
"""

import logging
import sys
import traceback

from scopestore.cli.argparse_main import DEFAULT_LOG_LEVEL, build_main_parser
from scopestore.config import configfile
from scopestore.config.database import set_database_path
from scopestore.log_formatter import setup_logging


LOG = logging.getLogger("scopestore")


def main():
    """
    Entry point for the Scopestore command-line interface (CLI) operations.

    This function sets up the argument parser, handles command-line arguments,
    initializes logging, and executes the appropriate function based on the
    provided command. Any exception raised by a command is logged and turned
    into a non-zero exit code.
    """
    parser = build_main_parser()
    if len(sys.argv) == 1:
        parser.print_help(sys.stdout)
        return 1
    args = parser.parse_args()

    log_config = getattr(configfile.CONFIG, "logging", None)
    log_level = args.level or getattr(log_config, "level", None) or DEFAULT_LOG_LEVEL
    setup_logging(logger=LOG, log_level=str(log_level).upper(), colors=getattr(log_config, "colors", True))

    try:
        if args.database:
            set_database_path(args.database)
        args.func(args)
        # pylint complains that this exception is too broad - being at the literal top of the program stack, it's ok.
    except Exception as excpt:  # pylint: disable=broad-except
        LOG.debug(traceback.format_exc())
        LOG.error(str(excpt))
        sys.exit(1)

    sys.exit()


if __name__ == "__main__":
    main()
