##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
The Scopestore command-line interface.

Modules:
    argparse_main: Builds the main argument parser and wires in every command.
    utils: Helpers for parsing command-line values into record values and constraints.

Subpackages:
    commands: One module per top-level command.
"""
