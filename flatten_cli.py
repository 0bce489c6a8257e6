#!/usr/bin/env python3
# flatten_cli.py

import argparse
import sys

from app_settings import load_settings
from flatten_directory import FlattenError, Options, __version__, flatten
from logger import setup_logger


def build_parser():
    parser = argparse.ArgumentParser(
        prog="flatten-directory",
        description="Flattens a folder structure: every file below TARGET is moved or copied into TARGET itself.",
    )
    parser.add_argument("target", nargs="?", default=None,
                        help="Directory to flatten (default: current directory)")
    parser.add_argument("-d", "--delete", action="store_true",
                        help="Move files and delete the emptied subfolders instead of copying")
    parser.add_argument("-r", "--rename", action="store_true",
                        help="Rename colliding files (name_1.ext, name_2.ext, ...) instead of skipping them")
    parser.add_argument("-n", "--dry-run", action="store_true",
                        help="Only report what would be done")
    parser.add_argument("--log-level", default=None, type=str.upper,
                        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
                        help="Minimum severity of messages to log (default: INFO)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log every file moved or copied (same as --log-level DEBUG)")
    parser.add_argument("--log-dir", default=None,
                        help="Also write a log file into this directory")
    parser.add_argument("--log-retention", type=int, default=None,
                        help="Maximum number of log files to keep in --log-dir (default: 10)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    settings = load_settings({
        "target": args.target,
        "delete": args.delete,
        "rename": args.rename,
        "dryRun": args.dry_run,
        "loggingLevel": "DEBUG" if args.verbose else args.log_level,
        "logFileDirectory": args.log_dir,
        "logRetention": args.log_retention,
    })
    try:
        logger = setup_logger(settings)
    except OSError as e:
        print(f"Error: Could not set up logging in {args.log_dir}: {e}", file=sys.stderr)
        return 1

    try:
        options = Options.from_settings(settings)
        result = flatten(options)
    except FlattenError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    verb = "Would flatten" if options.dry_run else "Flattened"
    summary = f"Done! {verb} {len(result.relocated)} file(s) into '{options.target}'"
    if result.renamed:
        summary += f", {result.renamed} renamed"
    if result.skipped:
        summary += f", {len(result.skipped)} skipped"
    if options.delete:
        summary += f", {len(result.removed_dirs)} folder(s) removed"
    logger.info(summary)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
