"""
CLI interface for volume info.

Scans the mount point and prints the JSON report to stdout.
"""
import argparse
import logging
import sys
from typing import List, Optional

from volume_info.config import MOUNT_POINT, ReportConfig
from volume_info.reporter import write_report
from volume_info.scanner import Scanner, WalkError

logger = logging.getLogger(__name__)


def configure_logging(level: str = "WARNING") -> None:
    """
    Configure logging to stderr.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr,
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            f"Report whether {MOUNT_POINT} is empty and when it was last touched. "
            "Set OUTPUT_FILE_INFOS=true to list every entry, "
            "ALL_TIMES=true to add change and birth times."
        )
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point. Returns the process exit status."""
    args = parse_args(argv)
    configure_logging(args.log_level)

    config = ReportConfig.from_env()
    scanner = Scanner(MOUNT_POINT, collect_file_infos=config.output_file_infos)

    try:
        report = scanner.scan()
    except WalkError as exc:
        if exc.report is not None:
            write_report(exc.report, config)
        logger.error("%s", exc)
        return 1

    write_report(report, config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
