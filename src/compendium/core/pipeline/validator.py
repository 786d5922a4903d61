from __future__ import annotations

"""
Arguments Validator.

Acts as a gatekeeper for the <source> <target> [<options file>] arguments.
Resolves them to absolute paths, checks they describe a supported
compilation (file to file, file to folder or folder to folder) and loads
the options file, so that the engine only ever receives sound input.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from compendium.domain.config import CompilerOptions, load_options
from compendium.domain.errors import ArgumentsError
from compendium.infra.fs import is_directory_empty, normalize_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidatedArguments:
    """
    Sound, normalized program arguments.

    Attributes:
        source_path: Absolute path of the <source> file or folder.
        target_path: Absolute path of the <target> file or folder.
        source_is_directory: Whether <source> is a folder (batch mode).
        target_is_directory: Whether <target> is an existing folder.
        options: Loaded options, or defaults if no options file was given.
        options_path: Absolute path of the <options file>, if any.
    """
    source_path: str
    target_path: str
    source_is_directory: bool
    target_is_directory: bool
    options: CompilerOptions = field(default_factory=CompilerOptions)
    options_path: Optional[str] = None

    @property
    def batch_mode(self) -> bool:
        return self.source_is_directory and self.target_is_directory


def validate_arguments(
        source: str,
        target: str,
        options_file: Optional[str] = None,
) -> ValidatedArguments:
    """
    Validate the program arguments.

    Args:
        source: The <source> argument (file or folder).
        target: The <target> argument (non-existing file, or empty folder).
        options_file: The optional <options file> argument.

    Returns:
        ValidatedArguments: The normalized arguments.

    Raises:
        ArgumentsError: On the first rule the arguments break.
    """
    cwd = os.getcwd()

    # 1. <source>
    source_path = _require_path(source, "<source>", cwd)
    if not os.path.exists(source_path):
        raise ArgumentsError(f"<source> path not found: {source_path}")
    if not os.access(source_path, os.R_OK):
        raise ArgumentsError(f"<source> path unreadable: {source_path}")

    source_is_directory = os.path.isdir(source_path)
    if source_is_directory and is_directory_empty(source_path):
        raise ArgumentsError(f"<source> folder is empty: {source_path}")

    # 2. <target>
    target_path = _require_path(target, "<target>", cwd)
    if target_path == source_path:
        raise ArgumentsError(f"<source> and <target> paths cannot be identical: {source_path}")

    target_is_directory = False
    if os.path.exists(target_path):
        if not os.path.isdir(target_path):
            if source_is_directory:
                raise ArgumentsError(f"<target> must also be a folder, when <source> is a folder: {target_path}")
            raise ArgumentsError(f"<target> file must not exist: {target_path}")
        if not os.access(target_path, os.W_OK):
            raise ArgumentsError(f"<target> folder unwriteable: {target_path}")
        if not is_directory_empty(target_path):
            raise ArgumentsError(f"<target> folder not empty: {target_path}")
        target_is_directory = True
    else:
        if source_is_directory:
            raise ArgumentsError(f"<target> must be an existing folder, when <source> is a folder: {target_path}")
        parent = os.path.dirname(target_path)
        if not os.path.isdir(parent):
            raise ArgumentsError(f"parent folder of <target> file must exist: {parent}")
        if not os.access(parent, os.W_OK):
            raise ArgumentsError(f"parent folder of <target> file unwriteable: {target_path}")

    # 3. <options file>
    options = CompilerOptions()
    options_path = None
    if options_file:
        options_path = _require_path(options_file, "<options file>", cwd)
        if not os.path.isfile(options_path):
            raise ArgumentsError(f"<options file> given but not found on disk: {options_path}")
        if not os.access(options_path, os.R_OK):
            raise ArgumentsError(f"<options file> path unreadable: {options_path}")
        options = load_options(options_path)

    logger.debug(
        f"Arguments validated: source={source_path} (dir={source_is_directory}), "
        f"target={target_path} (dir={target_is_directory}), options={options_path}"
    )
    return ValidatedArguments(
        source_path=source_path,
        target_path=target_path,
        source_is_directory=source_is_directory,
        target_is_directory=target_is_directory,
        options=options,
        options_path=options_path,
    )

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _require_path(value: Optional[str], label: str, cwd: str) -> str:
    if not (value or "").strip():
        raise ArgumentsError(f"Invalid {label} URI: {value!r}")
    return normalize_path(value, cwd)
