from __future__ import annotations

"""
Configuration Domain Management.

Defines the typed compilation options and loads them from the optional
<options file>, a JSON document that may carry C-style comments. Untrusted
values are coerced field by field; invalid entries fall back to defaults and
are reported as warnings.
"""

import json
import logging
import os
import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from compendium.domain.constants import (
    DEFAULT_FILE_CONTENT_PLACEHOLDER,
    DEFAULT_OUTPUT_EXTENSION,
    DEFAULT_SRC_FILE_TYPES,
    SUPPORTED_OUTPUT_TYPES,
)
from compendium.domain.errors import OptionsError

logger = logging.getLogger(__name__)

# Strings are captured so that comment markers inside them survive stripping
_JSON_COMMENT_RX = re.compile(r'("(?:\\.|[^"\\])*")|//[^\n]*|/\*.*?\*/', re.DOTALL)

# -----------------------------------------------------------------------------
# CONFIGURATION MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class TitleSettings:
    """
    Settings that drive how unit titles are built by the document index.

    Attributes:
        hide_numbering_in_titles: Omit the "1.1.2. " prefix from titles.
        custom_acronyms: Extra words to always render upper-cased.
    """
    hide_numbering_in_titles: bool = False
    custom_acronyms: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CompilerOptions:
    """
    Immutable set of options a compilation run is started with.

    Attributes:
        output_type: Target format identifier; only "html" is produced.
        source_file_types: Extensions (without dot) of documents to compile.
        custom_acronyms: Extra words to always render upper-cased in titles.
        file_content_placeholder: Body used for empty documents.
        output_batch_log: Write a JSON log of the batch into the target folder.
        template_file: Absolute path of a custom HTML template, if any.
        hide_navigation_numbering: Omit numbering from generated titles.
        pass_through_assets: Copy non-document files into the target folder.
    """
    output_type: str = DEFAULT_OUTPUT_EXTENSION
    source_file_types: Tuple[str, ...] = tuple(DEFAULT_SRC_FILE_TYPES)
    custom_acronyms: Tuple[str, ...] = ()
    file_content_placeholder: str = DEFAULT_FILE_CONTENT_PLACEHOLDER
    output_batch_log: bool = False
    template_file: Optional[str] = None
    hide_navigation_numbering: bool = False
    pass_through_assets: bool = False
    warnings: Tuple[str, ...] = field(default=(), compare=False, repr=False)

    def title_settings(self) -> TitleSettings:
        """Project the options consumed by the document index."""
        return TitleSettings(
            hide_numbering_in_titles=self.hide_navigation_numbering,
            custom_acronyms=self.custom_acronyms,
        )

# -----------------------------------------------------------------------------
# PARSING
# -----------------------------------------------------------------------------

def strip_json_comments(text: str) -> str:
    """
    Remove '//' line comments and '/* */' block comments outside of strings.

    Args:
        text: Raw JSON-with-comments content.

    Returns:
        str: Plain JSON content.
    """
    return _JSON_COMMENT_RX.sub(lambda m: m.group(1) or "", text)


def parse_options(data: Any) -> CompilerOptions:
    """
    Build a CompilerOptions instance from decoded options data.

    Unknown keys are ignored. Values of the wrong type are replaced by
    their defaults and recorded in the returned options' warnings.

    Args:
        data: Decoded JSON object (camelCase keys, 'htmlSettings' sub-object).

    Returns:
        CompilerOptions: The normalized options.
    """
    if not isinstance(data, dict):
        raise OptionsError(f"options must be a JSON object, received {type(data).__name__}")

    defaults = CompilerOptions()
    warnings: List[str] = []

    html_settings = data.get("htmlSettings") or {}
    if not isinstance(html_settings, dict):
        warnings.append("Invalid field 'htmlSettings': expected object. Ignoring.")
        html_settings = {}

    output_type = _as_str(data.get("outputType"), defaults.output_type, "outputType", warnings).lower()
    if output_type not in SUPPORTED_OUTPUT_TYPES:
        warnings.append(f"Output type '{output_type}' is not supported. Falling back to '{DEFAULT_OUTPUT_EXTENSION}'.")
        output_type = DEFAULT_OUTPUT_EXTENSION

    file_types = _as_list_str(
        data.get("sourceFileTypes"), list(defaults.source_file_types), "sourceFileTypes", warnings
    )
    file_types = [t.lstrip(".") for t in file_types if t.lstrip(".")] or list(defaults.source_file_types)

    template_file = _as_str(html_settings.get("templateFile"), "", "htmlSettings.templateFile", warnings)

    options = CompilerOptions(
        output_type=output_type,
        source_file_types=tuple(file_types),
        custom_acronyms=tuple(_as_list_str(data.get("customAcronyms"), [], "customAcronyms", warnings)),
        file_content_placeholder=_as_str(
            data.get("fileContentPlaceholder"), defaults.file_content_placeholder,
            "fileContentPlaceholder", warnings
        ),
        output_batch_log=_as_bool(data.get("outputBatchLog"), False, "outputBatchLog", warnings),
        template_file=os.path.abspath(os.path.expanduser(template_file)) if template_file else None,
        hide_navigation_numbering=_as_bool(
            html_settings.get("hideNavigationNumbering"), False,
            "htmlSettings.hideNavigationNumbering", warnings
        ),
        pass_through_assets=_as_bool(
            html_settings.get("passThroughAssets"), False, "htmlSettings.passThroughAssets", warnings
        ),
    )

    for w in warnings:
        logger.warning(f"Options Constraint: {w}")

    return replace(options, warnings=tuple(warnings))


def load_options(options_path: str) -> CompilerOptions:
    """
    Read, decode and normalize an options file.

    Args:
        options_path: Absolute path to the options file.

    Returns:
        CompilerOptions: The loaded options.

    Raises:
        OptionsError: If the file is unreadable, empty or not a JSON object.
    """
    try:
        with open(options_path, "r", encoding="utf-8") as f:
            content = f.read().strip()
    except OSError as e:
        raise OptionsError(f"<options file> path unreadable: {options_path}") from e

    if not content:
        raise OptionsError(f"<options file> has no content: {options_path}")

    try:
        data = json.loads(strip_json_comments(content))
    except json.JSONDecodeError as e:
        raise OptionsError(f"<options file> is not valid JSON. Path: {options_path}\nError: {e}") from e

    logger.debug(f"Options loaded from {options_path}")
    return parse_options(data)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, name: str, warnings: List[str]) -> str:
    """Validate string inputs, keeping the fallback for missing or blank values."""
    if value is None:
        return fallback
    if isinstance(value, str):
        return value if value.strip() else fallback
    warnings.append(f"Invalid field '{name}': expected str, received {type(value).__name__}. Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, name: str, warnings: List[str]) -> bool:
    """Validate boolean inputs."""
    if value is None:
        return fallback
    if isinstance(value, bool):
        return value
    warnings.append(f"Invalid field '{name}': expected bool, received {type(value).__name__}. Using fallback.")
    return fallback


def _as_list_str(value: Any, fallback: List[str], name: str, warnings: List[str]) -> List[str]:
    """Validate list-of-strings inputs, dropping blank entries."""
    if value is None:
        return list(fallback)
    if isinstance(value, list) and all(isinstance(x, str) for x in value):
        return [x.strip() for x in value if x.strip()]
    warnings.append(f"Invalid field '{name}': expected list of str. Using fallback.")
    return list(fallback)


# -----------------------------------------------------------------------------
# SERIALIZATION
# -----------------------------------------------------------------------------

def options_to_dict(options: CompilerOptions) -> Dict[str, Any]:
    """Serialize options back to their JSON representation (for diagnostics)."""
    return {
        "outputType": options.output_type,
        "sourceFileTypes": list(options.source_file_types),
        "customAcronyms": list(options.custom_acronyms),
        "fileContentPlaceholder": options.file_content_placeholder,
        "outputBatchLog": options.output_batch_log,
        "htmlSettings": {
            "templateFile": options.template_file,
            "hideNavigationNumbering": options.hide_navigation_numbering,
            "passThroughAssets": options.pass_through_assets,
        },
    }
