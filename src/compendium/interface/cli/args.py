from __future__ import annotations

"""
CLI Argument Definition.

Defines the command line schema: the <source> <target> [<options file>]
positionals of a compilation run plus the diagnostic flags.
"""

import argparse
import textwrap

from compendium.domain.constants import PROGRAM_NAME, PROGRAM_SHORT_NAME, PROGRAM_VERSION

OUTPUT_NUM_COLUMNS = 80
PROGRAM_USAGE = f"> {PROGRAM_SHORT_NAME.lower()} <source> <target> [<options file>]"

_DESCRIPTION = (
    "Static documentation compiler. Converts a tree of CommonMark authored text "
    "files into a navigable, standalone HTML compilation. The navigation tree is "
    "built out of the files' location and numbering scheme, e.g. \"1.1. My File.txt\" "
    "is a child of \"1. My Other File.txt\"; numbering can also be applied to the "
    "first line of each file."
)

_EPILOG = (
    "To leave a file out of the compilation, type \"$$nocompile\" as the first thing "
    "in that file. The <options file> accepts C-style comments."
)

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser of the compendium CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog=PROGRAM_SHORT_NAME.lower(),
        description=textwrap.fill(_DESCRIPTION, OUTPUT_NUM_COLUMNS),
        epilog=textwrap.fill(_EPILOG, OUTPUT_NUM_COLUMNS),
    )

    # --- Compilation ---
    p.add_argument(
        "source",
        help="Local file or folder holding the text to convert (absolute, or relative to the working directory).",
    )
    p.add_argument(
        "target",
        help="Non-existing file, or empty folder, to deposit the generated document(s) in. "
             "Must be a folder when <source> is a folder.",
    )
    p.add_argument(
        "options_file",
        nargs="?",
        default=None,
        help="Optional JSON file (comments allowed) with additional configuration.",
    )

    # --- Diagnostics and output ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the compilation result as JSON.",
    )
    p.add_argument(
        "--dump-options",
        action="store_true",
        help="Validate the arguments, print the effective options as JSON and exit.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write the log to this (rotated) file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose logging.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"{PROGRAM_NAME} {PROGRAM_VERSION}",
    )

    return p


def program_banner() -> str:
    """Program name and version, wrapped to the terminal width used by the CLI."""
    return textwrap.fill(f"{PROGRAM_NAME} {PROGRAM_VERSION}", OUTPUT_NUM_COLUMNS)


def format_usage_error(reason: str) -> str:
    """Error line printed when the arguments are rejected."""
    return f"Error: {reason.rstrip('.')}.\nUsage: {PROGRAM_USAGE}"
