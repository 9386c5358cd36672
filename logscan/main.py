#!/usr/bin/env python3
"""logscan — count access-log requests by path substring and date."""

import sys
import argparse
import logging

from logscan.config import ConfigError, OUTPUT_FORMATS, load_config, load_yaml_config
from logscan.formatter import get_formatter
from logscan.orchestrator import ScanError, run_scan

logger = logging.getLogger(__name__)


def build_cli_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="logscan",
        description="Count successful requests in access logs whose path contains a search term.",
    )
    parser.add_argument(
        "--root-folder", "--root_folder", dest="root_folder",
        help="The root folder to search for logs",
    )
    parser.add_argument(
        "--log-type", "--log_type", dest="log_type",
        help="Only read files whose name contains this (default: access)",
    )
    parser.add_argument(
        "--search-for", "--search_for", dest="search_for",
        help="Comma-separated path substrings to count",
    )
    parser.add_argument(
        "--forwarded-from", "--forwarded_from", dest="forwarded_from",
        help="Only count requests whose forwarded-for column contains this",
    )
    parser.add_argument(
        "--status", action="append",
        help="HTTP status to count; repeatable (default: 200)",
    )
    parser.add_argument(
        "--no-dates", action="store_true",
        help="Count per term only, without date buckets",
    )
    parser.add_argument(
        "--strict-dates", action="store_true",
        help="Abort the run on a line with an unparseable timestamp",
    )
    parser.add_argument(
        "--max-workers", type=int, default=None,
        help="Cap the number of files scanned at once (default: one thread per file)",
    )
    parser.add_argument(
        "--encoding", default=None,
        help="Text encoding of the log files (default: utf-8)",
    )
    parser.add_argument(
        "--output", choices=OUTPUT_FORMATS, default=None,
        help="Report format (default: text)",
    )
    parser.add_argument(
        "--config", default=None,
        help="Path to YAML config file",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    return parser


def configure_logging(args) -> None:
    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [logscan] %(levelname)s %(message)s",
        stream=sys.stderr,
    )


def main(argv=None) -> int:
    parser = build_cli_parser()
    args = parser.parse_args(argv)
    configure_logging(args)

    try:
        config = load_config(args, load_yaml_config(args.config))
        logger.info("Root folder: %s", config.root_folder)
        logger.info("Log type: %s", config.log_type)
        report = run_scan(config)
        print(get_formatter(config.output_format)(report))
    except (ConfigError, ScanError) as e:
        logger.error("%s", e)
        return 1
    except (KeyboardInterrupt, BrokenPipeError):
        return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())
