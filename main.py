#!/usr/bin/env python3
"""Command line entry point for reading a foreign process environment variable"""
import argparse
import sys
from typing import List, Optional
from pydantic import ValidationError
from config import Config
from environment.context import HostContext
from errors import ProcessEnvError
from logging_config import setup_structured_logging, get_logger, log_error
from readers.dispatcher import get_environment_variable


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="process-env-reader",
        description="Print the value of an environment variable of a running process"
    )
    parser.add_argument("pid", type=int, help="Process id to inspect")
    parser.add_argument("variable", help="Environment variable name")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point"""
    args = build_parser().parse_args(argv)

    try:
        config = Config()
    except ValidationError as e:
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        return 2
    if args.verbose:
        config.log_level = "DEBUG"
    setup_structured_logging(config)
    logger = get_logger(__name__)

    try:
        value = get_environment_variable(args.pid, HostContext(config), args.variable)
    except ProcessEnvError as e:
        log_error(logger, e, {"component": "main", "pid": args.pid, "variable": args.variable})
        print(f"error: {e.message}", file=sys.stderr)
        return 2

    if value is None:
        return 1
    print(value)
    return 0


if __name__ == '__main__':
    sys.exit(main())
