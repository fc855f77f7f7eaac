"""CLI entry point for buildaudit commands."""

import argparse
import logging
import sys
from pathlib import Path

from buildaudit.errors import AuditError

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO", log_file: str | None = None) -> None:
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=getattr(logging, level),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            force=True,
        )
    else:
        logging.basicConfig(
            stream=sys.stdout,
            level=getattr(logging, level),
            format="%(message)s",
            force=True,
        )


def load(args):
    """Load the descriptor and apply command-line overrides."""
    from buildaudit.config import load_config, normalize_includes

    config = load_config(Path(args.config) if args.config else None)
    if getattr(args, "skip", False):
        config.skip = True
    if getattr(args, "use_base_version", False):
        config.use_base_version = True
    if getattr(args, "lib_dir", None):
        config.lib_directory = Path(args.lib_dir).absolute()
    if getattr(args, "includes", None):
        config.includes = normalize_includes(args.includes)
    return config


def cmd_dup(args):
    """Report duplicate dependencies and duplicate classes."""
    from buildaudit.audit import run_dup_check

    run_dup_check(load(args))


def cmd_stats(args):
    """Count real/fake lines over the source and resource roots."""
    from buildaudit.audit import run_census

    run_census(load(args))


def cmd_all(args):
    """Run the duplicate check, then the line census."""
    from buildaudit.audit import run_census, run_dup_check

    config = load(args)
    run_dup_check(config)
    run_census(config)


def add_skip_argument(parser):
    parser.add_argument("--skip", action="store_true", help="Skip every check")


def add_dup_arguments(parser):
    parser.add_argument(
        "--use-base-version",
        action="store_true",
        help="Report base versions instead of resolved versions",
    )
    parser.add_argument(
        "--lib-dir",
        help="Directory holding the packaged archives, relative to the working directory"
        " (descriptor paths are relative to basedir)",
    )


def add_stats_arguments(parser):
    parser.add_argument(
        "--includes",
        help="Comma-separated file suffixes to count (default: java,xml,sql,properties)",
    )


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="buildaudit",
        description="Find duplicate dependencies and classes, and count lines of code",
    )
    parser.add_argument(
        "--config",
        help="Project descriptor (default: $BUILDAUDIT_CONFIG or ./buildaudit.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )
    parser.add_argument("--log-file", help="Write the report to this file instead of stdout")
    sub = parser.add_subparsers(dest="command")

    # dup
    p_dup = sub.add_parser("dup", help="Duplicate dependency and class check")
    add_skip_argument(p_dup)
    add_dup_arguments(p_dup)
    p_dup.set_defaults(func=cmd_dup)

    # stats
    p_stats = sub.add_parser("stats", help="Real/fake line census")
    add_skip_argument(p_stats)
    add_stats_arguments(p_stats)
    p_stats.set_defaults(func=cmd_stats)

    # all
    p_all = sub.add_parser("all", help="Run dup, then stats")
    add_skip_argument(p_all)
    add_dup_arguments(p_all)
    add_stats_arguments(p_all)
    p_all.set_defaults(func=cmd_all)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(args.log_level, args.log_file)
    try:
        args.func(args)
    except AuditError as e:
        cause = f": {e.__cause__}" if e.__cause__ else ""
        logger.error(f"{e}{cause}")
        sys.exit(1)
