from __future__ import annotations

"""
Compilation Engine.

This module coordinates a complete compilation run:
1. Resolves the HTML template.
2. Compiles a single document (file to file, file to folder), or
3. scans the <source> folder, builds and seals the document index, copies
   assets over if requested, and compiles every document into the mirrored
   location under <target>.
4. Writes the optional JSON batch log and assembles the result.
"""

import json
import logging
import os
import shutil
from datetime import datetime, timezone
from typing import List, Optional

from compendium.core.indexing.document_index import DocumentIndex
from compendium.core.pipeline.converter import convert_to_html, load_document_source
from compendium.core.pipeline.validator import ValidatedArguments
from compendium.core.rendering.template import apply_template, load_template
from compendium.core.services.scanner import populate_index, scan_source_tree
from compendium.domain.config import CompilerOptions
from compendium.domain.constants import BATCH_LOG_FILE_NAME, NO_COMPILE_TAG
from compendium.domain.errors import TemplateError
from compendium.domain.pipeline_models import (
    CompilationResult,
    DocumentOperation,
    create_error_result,
    create_success_result,
)
from compendium.infra.fs import (
    ensure_parent_dirs,
    infer_target_path,
    read_document_header,
    sanitize_file_name,
)

logger = logging.getLogger(__name__)

_UTC_STAMP_FORMAT = "%a, %d %b %Y %H:%M:%S GMT"


def run_compilation(arguments: ValidatedArguments) -> CompilationResult:
    """
    Execute a full compilation run.

    Args:
        arguments: Validated program arguments.

    Returns:
        CompilationResult: Status, per-document outcomes and summary.
    """
    logger.info("Compilation started.")
    options = arguments.options
    source, target = arguments.source_path, arguments.target_path

    # -------------------------------------------------------------------------
    # 1) Template
    # -------------------------------------------------------------------------
    try:
        template = load_template(options.template_file)
    except TemplateError as e:
        logger.error(str(e))
        return create_error_result(str(e), source, target)

    index = DocumentIndex(options.title_settings())

    # -------------------------------------------------------------------------
    # 2) Single document
    # -------------------------------------------------------------------------
    if not arguments.source_is_directory:
        if arguments.target_is_directory:
            target_file = infer_target_path(source, target, options.output_type)
        else:
            target_file = target

        index.finalize()
        logger.info(f"Processing file '{source}'...")
        operation = _compile_document(source, target_file, template, index, options)
        if operation.included:
            logger.info(f"File saved as '{target_file}'.")
        return create_success_result(source, target, [operation])

    # -------------------------------------------------------------------------
    # 3) Batch: preflight scan and index
    # -------------------------------------------------------------------------
    ignored = [options.template_file] if options.template_file else []
    scan = scan_source_tree(source, options.source_file_types, ignored)

    populate_index(index, scan, _header_reader)
    index.finalize(scan.skipped)

    copied_assets: List[str] = []
    if options.pass_through_assets and scan.skipped:
        copied_assets = _copy_assets(scan.skipped, source, target)

    # -------------------------------------------------------------------------
    # 4) Batch: compile documents
    # -------------------------------------------------------------------------
    operations: List[DocumentOperation] = []
    for entry in scan.documents:
        target_file = infer_target_path(entry.path, target, options.output_type, source)
        operations.append(_compile_document(entry.path, target_file, template, index, options))

    # -------------------------------------------------------------------------
    # 5) Report
    # -------------------------------------------------------------------------
    timestamp = datetime.now(timezone.utc).strftime(_UTC_STAMP_FORMAT)
    processed = sum(1 for op in operations if op.included)
    summary = (
        f"Finished batch processing {len(operations)} file(s) on {timestamp}. "
        f"Successfully converted: {processed}, skipped: {len(operations) - processed}."
    )
    logger.info(summary)

    batch_log_path = ""
    if options.output_batch_log:
        batch_log_path = _write_batch_log(target, timestamp, operations, summary)

    return create_success_result(
        source, target, operations,
        batch_mode=True,
        copied_assets=copied_assets,
        summary=summary,
        batch_log_path=batch_log_path,
    )

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _header_reader(path: str) -> Optional[str]:
    """First meaningful line of a document; None if it is empty or tagged "$$nocompile"."""
    try:
        header = read_document_header(path, ())
    except OSError as e:
        logger.warning(f"Could not read header of '{path}': {e}")
        return None

    if header is None or header.lstrip().startswith(NO_COMPILE_TAG):
        return None
    return header


def _compile_document(
        source_file: str,
        target_file: str,
        template: str,
        index: DocumentIndex,
        options: CompilerOptions,
) -> DocumentOperation:
    """Convert one document and save it. Failures are logged and reported as not included."""
    try:
        content = load_document_source(source_file, options.file_content_placeholder)
        if content is None:
            logger.info(f"File is marked for exclusion: {source_file}")
            return DocumentOperation(source_file, target_file, included=False)

        page = apply_template(template, index, source_file, convert_to_html(content))

        ensure_parent_dirs(target_file)
        with open(target_file, "w", encoding="utf-8") as f:
            f.write(page)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to compile '{source_file}': {e}")
        return DocumentOperation(source_file, target_file, included=False)

    logger.debug(f"Compiled '{source_file}' -> '{target_file}'")
    return DocumentOperation(source_file, target_file, included=True)


def _copy_assets(asset_paths: List[str], source_root: str, target_root: str) -> List[str]:
    """Copy non-document files to their mirrored location under the target folder."""
    copied: List[str] = []
    for asset_path in asset_paths:
        destination = infer_target_path(asset_path, target_root, None, source_root)
        try:
            ensure_parent_dirs(destination)
            shutil.copyfile(asset_path, destination)
        except OSError as e:
            logger.error(f"Failed to copy asset '{asset_path}': {e}")
            continue
        copied.append(destination)

    logger.info(f"Passed through {len(copied)} of {len(asset_paths)} asset file(s).")
    return copied


def _write_batch_log(target_root: str, timestamp: str, operations: List[DocumentOperation], summary: str) -> str:
    """Persist the batch log as JSON into the target folder. Returns its path, or "" on failure."""
    file_name = sanitize_file_name(BATCH_LOG_FILE_NAME.format(timestamp=timestamp))
    log_path = os.path.join(target_root, file_name)
    payload = {
        "operations": [
            {
                "source file": op.source_file,
                "destination file": op.destination_file,
                "file was included": op.included,
            }
            for op in operations
        ],
        "summary": summary,
    }

    try:
        with open(log_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent="\t", ensure_ascii=False)
    except OSError as e:
        logger.error(f"Failed to write batch log '{log_path}': {e}")
        return ""

    logger.info(f"Batch log saved: {log_path}")
    return log_path
