# zipparts.py
import logging, os, sys
from typing import List, Optional
import structlog

from config import RunConfig, build_parser, parse_args
from errors import ConfigError, ZipPartsError
from memory import MemoryProbe, available_memory
from packager import create_zip_parts
from progress import ProgressReporter
from scan import list_files
from utils import clean_stale_tmp, ensure_dir


def _stderr_logger(*args):
    # looked up per logger so a swapped-out sys.stderr is never held on to
    return structlog.PrintLogger(sys.stderr)


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=_stderr_logger,
    )


def run(cfg: RunConfig, probe: MemoryProbe = available_memory) -> int:
    if not os.path.isdir(cfg.input_dir):
        print(f"Error: The input directory '{cfg.input_dir}' does not exist.")
        return 1

    if not os.path.isdir(cfg.output_dir):
        print(f"Creating output directory '{cfg.output_dir}'.")
    ensure_dir(cfg.output_dir)

    clean_stale_tmp()  # orphans from killed runs

    budget = cfg.budget
    files = list_files(cfg.input_dir)
    reporter = ProgressReporter(quiet=cfg.quiet)
    create_zip_parts(
        files, cfg.output_dir,
        budget.max_part_size_bytes, budget.memory_threshold_bytes,
        probe=probe, on_part=reporter.on_part,
    )
    reporter.summary()
    return 0


def main(argv: Optional[List[str]] = None, probe: MemoryProbe = available_memory) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        build_parser().print_help()
        return 1
    try:
        cfg = parse_args(argv)
    except ConfigError as e:
        print(f"Error: {e}")
        build_parser().print_usage()
        return 1

    setup_logging(cfg.verbose)
    try:
        return run(cfg, probe)
    except (ZipPartsError, OSError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
