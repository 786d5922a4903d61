from __future__ import annotations

"""
Compilation Domain Data Models.

Defines the data structures and factory functions used to communicate
execution results between the compilation engine and the interface layer.
"""

from dataclasses import dataclass, field
from typing import List, Optional

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DocumentOperation:
    """
    Outcome of compiling one source document.

    Attributes:
        source_file: Absolute path of the source document.
        destination_file: Absolute path of the generated output.
        included: Whether the document was converted and written.
    """
    source_file: str
    destination_file: str
    included: bool


@dataclass(frozen=True)
class CompilationResult:
    """
    Unified result object of a complete compilation run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        source_path: Normalized <source> path.
        target_path: Normalized <target> path.
        batch_mode: Whether a whole folder was compiled.
        processed: Number of documents converted.
        skipped: Number of documents left out (tagged or failed).
        total: Number of documents visited.
        operations: Per-document outcomes.
        copied_assets: Asset files passed through to the target folder.
        summary: Human readable summary line.
        batch_log_path: Path of the persisted JSON batch log, if any.
    """
    ok: bool
    error: str

    source_path: str
    target_path: str
    batch_mode: bool = False

    processed: int = 0
    skipped: int = 0
    total: int = 0

    operations: List[DocumentOperation] = field(default_factory=list)
    copied_assets: List[str] = field(default_factory=list)

    summary: str = ""
    batch_log_path: str = ""

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        source_path: str,
        target_path: str,
        operations: Optional[List[DocumentOperation]] = None,
) -> CompilationResult:
    """
    Create a failed compilation result instance.

    Args:
        error: Detailed error description.
        source_path: The <source> argument.
        target_path: The <target> argument.
        operations: Document outcomes gathered before the failure.

    Returns:
        CompilationResult: An immutable error result object.
    """
    ops = operations or []
    return CompilationResult(
        ok=False,
        error=error,
        source_path=source_path,
        target_path=target_path,
        processed=sum(1 for op in ops if op.included),
        skipped=sum(1 for op in ops if not op.included),
        total=len(ops),
        operations=ops,
    )


def create_success_result(
        source_path: str,
        target_path: str,
        operations: List[DocumentOperation],
        batch_mode: bool = False,
        copied_assets: Optional[List[str]] = None,
        summary: str = "",
        batch_log_path: str = "",
) -> CompilationResult:
    """
    Create a compilation result from the gathered document outcomes.

    The run is deemed successful when at least one document was converted.

    Args:
        source_path: Normalized <source> path.
        target_path: Normalized <target> path.
        operations: Per-document outcomes.
        batch_mode: Whether a whole folder was compiled.
        copied_assets: Asset files copied to the target.
        summary: Human readable summary line.
        batch_log_path: Path of the persisted batch log.

    Returns:
        CompilationResult: An immutable result object.
    """
    processed = sum(1 for op in operations if op.included)
    return CompilationResult(
        ok=processed > 0,
        error="" if processed > 0 else "No document was converted.",
        source_path=source_path,
        target_path=target_path,
        batch_mode=batch_mode,
        processed=processed,
        skipped=len(operations) - processed,
        total=len(operations),
        operations=operations,
        copied_assets=copied_assets or [],
        summary=summary,
        batch_log_path=batch_log_path,
    )
