"""
Command line entry point.
Single responsibility: collect a run, execute it and decide the exit code.
"""

import argparse
import dataclasses
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config.manager import ConfigManager, RunConfig, create_sample_config, size_from_mb
from .errors import SessionCancelled, SheetCompareError, SourceError
from .pipeline.runner import ReconciliationPipeline
from .ui.progress import get_progress_monitor
from .ui.prompts import InteractiveSession
from .ui.report import ReportPrinter, export_findings
from .utils.logger import configure_logger, get_logger


logger = get_logger()


EXIT_OK = 0
EXIT_ERROR = 1
EXIT_MISMATCH = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sheet-compare",
        description="Reconcile two spreadsheets keyed by an identifier column"
    )

    parser.add_argument(
        "--config", "-c",
        help="YAML run file (prompts interactively when omitted)"
    )
    parser.add_argument(
        "--output", "-o",
        help="Write every finding to this CSV file"
    )
    parser.add_argument(
        "--save-config",
        help="Save the run (including interactive answers) to this YAML file"
    )
    parser.add_argument(
        "--max-file-size-mb",
        type=float,
        default=None,
        help="Largest accepted spreadsheet in MiB (default: 10)"
    )
    parser.add_argument(
        "--log-file",
        help="Append JSON log entries to this file"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--no-rich",
        action="store_true",
        help="Disable Rich progress spinners"
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print a summary table after the report"
    )
    parser.add_argument(
        "--fail-on-mismatch",
        action="store_true",
        help="Exit with code 2 unless all information matches"
    )
    parser.add_argument(
        "--create-sample",
        action="store_true",
        help="Create sample configuration file reconcile_sample.yaml"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"sheet-compare v{__version__}"
    )

    return parser.parse_args(argv)


def build_run(args: argparse.Namespace) -> RunConfig:
    """
    Load the run from --config or from interactive answers, then apply
    command line overrides.
    """
    max_file_size = None
    if args.max_file_size_mb is not None:
        max_file_size = size_from_mb(args.max_file_size_mb)

    if args.config:
        run = ConfigManager(Path(args.config)).load()
        overrides = {}
        if max_file_size is not None:
            overrides["max_file_size"] = max_file_size
        if args.output:
            overrides["output"] = args.output
        if overrides:
            run = dataclasses.replace(run, **overrides)
    else:
        session = InteractiveSession()
        kwargs = {"output": args.output}
        if max_file_size is not None:
            kwargs["max_file_size"] = max_file_size
        run = session.collect(**kwargs)

    if args.save_config:
        ConfigManager().save(run, Path(args.save_config))

    return run


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    configure_logger(log_file=args.log_file, verbose=args.verbose)

    if args.create_sample:
        path = create_sample_config(Path("reconcile_sample.yaml"))
        print(f"Sample configuration created: {path}")
        return EXIT_OK

    try:
        run = build_run(args)
        pipeline = ReconciliationPipeline(
            run,
            progress=get_progress_monitor(use_rich=not args.no_rich,
                                          verbose=args.verbose)
        )
        outcome = pipeline.run()
    except SessionCancelled:
        return EXIT_ERROR
    except SourceError as e:
        logger.error("run.source_failed", source=e.source, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except SheetCompareError as e:
        logger.error("run.failed", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    printer = ReportPrinter()
    printer.print_warnings(outcome.first)
    printer.print_warnings(outcome.second)
    printer.print_result(outcome.result, summary=args.summary)

    if run.output:
        try:
            export_findings(outcome.result, run.output)
        except OSError as e:
            logger.error("run.export_failed", file=run.output, error=str(e))
            print(f"Error: could not write {run.output}: {e}", file=sys.stderr)
            return EXIT_ERROR

    if args.fail_on_mismatch and not outcome.result.all_match:
        return EXIT_MISMATCH
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
