from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, argument validation,
compilation and result rendering. Exit codes: 0 on success, 1 when the
compilation fails, 2 when the arguments are rejected, 130 on interrupt.
"""

import json
import sys
from dataclasses import asdict
from typing import List, Optional

from compendium.core.pipeline.engine import run_compilation
from compendium.core.pipeline.validator import validate_arguments
from compendium.domain.config import options_to_dict
from compendium.domain.errors import ArgumentsError
from compendium.domain.pipeline_models import CompilationResult
from compendium.infra.logging import LoggingConfig, configure_logging, get_logger
from compendium.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    machine_output = args.json_output or args.dump_options
    if not machine_output:
        print("\n" + cli_args.program_banner() + "\n")

    # 2. Logging bootstrap (console on stderr, optional file)
    configure_logging(LoggingConfig.for_cli(debug=args.debug, log_file=args.log_file))
    logger.debug(f"CLI execution initiated with: {args}")

    # 3. Argument validation
    try:
        arguments = validate_arguments(args.source, args.target, args.options_file)
    except ArgumentsError as e:
        logger.debug(f"Arguments rejected: {e}")
        print(cli_args.format_usage_error(str(e)), file=sys.stderr)
        return 2

    if args.dump_options:
        print(json.dumps(options_to_dict(arguments.options), ensure_ascii=False, indent=2))
        return 0

    # 4. Compilation phase
    try:
        result = run_compilation(arguments)
    except KeyboardInterrupt:
        logger.warning("Compilation interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        logger.critical(f"Compilation failed unexpectedly: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    # 5. Output rendering phase
    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    return 0 if result.ok else 1

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: CompilationResult) -> None:
    """
    Print the compilation result on the standard output.

    Args:
        result: The compilation result to render.
    """
    if result.batch_mode:
        print(result.summary)
        if result.copied_assets:
            print(f"Assets passed through: {len(result.copied_assets)}")
        if result.batch_log_path:
            print(f"Batch log: {result.batch_log_path}")
    else:
        for op in result.operations:
            state = "saved as" if op.included else "skipped, would have been saved as"
            print(f"File \"{op.source_file}\" {state} \"{op.destination_file}\".")

    if result.ok:
        print("Process completed normally.")
    else:
        print(f"ERROR: {result.error}", file=sys.stderr)
        print(f"Process failed. For help, run: {cli_args.build_parser().prog} -h", file=sys.stderr)

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
