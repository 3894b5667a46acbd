"""
Main CLI module for the student identity service.

Runs RUT operations over a batch of identifiers given as arguments
or read one per line from stdin.
Example: python -m services.identity validate 12.345.678-5 7.654.321-6
"""

import argparse
import logging
import sys
from datetime import datetime
from typing import Iterable, List, Optional, TextIO, Tuple

from pydantic import ValidationError

from . import __version__
from .helpers.rut import RUT_PATTERN, compute_check_digit, format_rut, normalize_rut, validate_rut
from .log_config import configure_logging, get_logger, log_identifier_batch
from .settings import settings

logger = get_logger(__name__)

COMMANDS = ("normalize", "validate", "format", "check-digit")


def read_values(values: List[str], stream: TextIO) -> List[str]:
    """
    Collect the identifiers to process.

    Args:
        values: Identifiers given on the command line
        stream: Fallback input, one identifier per line

    Returns:
        Identifiers with surrounding whitespace removed; blank lines skipped
    """
    if values:
        return [value.strip() for value in values]
    return [line.strip() for line in stream if line.strip()]


def process_value(command: str, value: str) -> Tuple[str, bool]:
    """
    Apply a command to a single identifier.

    Args:
        command: One of COMMANDS
        value: Raw identifier (or RUT body for check-digit)

    Returns:
        Tuple of (output line, success flag)
    """
    if command == "normalize":
        normalized = normalize_rut(value)
        return normalized, bool(normalized)

    if command == "format":
        # Bad-shaped input passes through unformatted
        return format_rut(value), bool(RUT_PATTERN.match(normalize_rut(value)))

    if command == "validate":
        valid = validate_rut(value)
        status = "valid" if valid else "invalid"
        return f"{value}\t{normalize_rut(value)}\t{status}", valid

    if command == "check-digit":
        try:
            return compute_check_digit(value), True
        except ValueError as e:
            logger.error(
                "Check digit computation failed",
                value=value,
                error=str(e),
                error_type=type(e).__name__
            )
            return "", False

    raise ValueError(f"Unknown command '{command}'")


def run_command(command: str, values: Iterable[str], out: TextIO) -> Tuple[int, int]:
    """
    Process a batch of identifiers, writing one result line per value.

    Returns:
        Tuple of (accepted_count, rejected_count)
    """
    accepted = 0
    rejected = 0
    start_time = datetime.now()

    for value in values:
        line, ok = process_value(command, value)
        out.write(f"{line}\n")

        if ok:
            accepted += 1
        else:
            logger.warning("Identifier rejected", command=command, value=value)
            rejected += 1

    log_identifier_batch(
        logger,
        command=command,
        accepted=accepted,
        rejected=rejected,
        duration_ms=(datetime.now() - start_time).total_seconds() * 1000,
        batch_id=f"{command}_{int(start_time.timestamp())}"
    )

    return accepted, rejected


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        description="Student identity service: RUT normalization, validation and formatting",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m services.identity validate 12.345.678-5
  python -m services.identity format 123456785 1000005k
  cat ruts.txt | python -m services.identity normalize --log-level DEBUG
  python -m services.identity check-digit 12345678
        """
    )

    parser.add_argument(
        "command",
        choices=COMMANDS,
        help="Operation to apply to each identifier"
    )

    parser.add_argument(
        "values",
        nargs="*",
        help="Identifiers to process (read from stdin when omitted)"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override log level from configuration"
    )

    parser.add_argument(
        "--log-format",
        choices=["json", "text"],
        help="Override log format from configuration"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Student Identity Service {__version__}"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI application.

    Returns:
        Exit code (0 when every identifier succeeded, 1 otherwise)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(args.log_level, args.log_format)
        config = settings()
    except ValidationError as e:
        # structlog is not configured yet
        logging.getLogger(__name__).error(
            "Invalid identity service configuration: %s", e
        )
        return 1

    logger.info(
        "Service starting",
        service_name=config.service_name,
        version=__version__,
        environment=config.environment,
        command=args.command
    )

    try:
        values = read_values(args.values, sys.stdin)
        if not values:
            logger.warning("No identifiers to process", command=args.command)
            return 1

        _, rejected = run_command(args.command, values, sys.stdout)
        return 0 if rejected == 0 else 1

    except KeyboardInterrupt:
        logger.warning("Service interrupted by user")
        return 1
    except Exception as e:
        logger.error(
            "Service failed with unexpected error",
            command=args.command,
            error=str(e),
            error_type=type(e).__name__
        )
        return 1


def cli_main():
    """Synchronous entry point for setuptools console scripts."""
    return main()


if __name__ == "__main__":
    sys.exit(main())
