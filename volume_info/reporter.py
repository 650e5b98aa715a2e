"""
Reporter module - Select report fields and render them as JSON.
"""
import json
import sys
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, TextIO

from volume_info.config import ReportConfig
from volume_info.models import TimeRecord, VolumeReport

Extractor = Callable[[VolumeReport, datetime], Any]

BASE_KEYS = ["mountPoint", "isEmpty"]
DEFAULT_TIME_KEYS = ["lastAccess", "lastModify"]
ALL_TIME_KEYS = ["lastChange", "lastBirth"]
FILE_INFOS_KEY = "fileInfos"


def _record(record: TimeRecord, now: datetime) -> Dict[str, Any]:
    return record.since(now).model_dump(mode="json", by_alias=True)


# Output key -> extractor. Only keys listed here can be emitted.
OUTPUT_FIELDS: Dict[str, Extractor] = {
    "mountPoint": lambda report, now: report.mount_point,
    "isEmpty": lambda report, now: report.is_empty,
    "lastAccess": lambda report, now: _record(report.last_access, now),
    "lastModify": lambda report, now: _record(report.last_modify, now),
    "lastChange": lambda report, now: _record(report.last_change, now),
    "lastBirth": lambda report, now: _record(report.last_birth, now),
    FILE_INFOS_KEY: lambda report, now: [
        info.model_dump(mode="json", by_alias=True) for info in report.file_infos
    ],
}


def output_keys(report: VolumeReport, config: ReportConfig) -> List[str]:
    """
    Decide which top-level keys the report contains.

    Args:
        report: Scanned volume report
        config: Report configuration

    Returns:
        Ordered list of output keys
    """
    keys = list(BASE_KEYS)
    if report.is_empty:
        return keys

    keys.extend(DEFAULT_TIME_KEYS)
    if config.all_times:
        keys.extend(ALL_TIME_KEYS)
    if config.output_file_infos:
        keys.append(FILE_INFOS_KEY)
    return keys


def select_fields(report: VolumeReport, keys: List[str], now: datetime) -> Dict[str, Any]:
    """
    Build the output mapping for the selected keys.

    Raises:
        ValueError: If a key is not in OUTPUT_FIELDS
    """
    unknown = [key for key in keys if key not in OUTPUT_FIELDS]
    if unknown:
        raise ValueError(f"Unknown output fields: {', '.join(unknown)}")
    return {key: OUTPUT_FIELDS[key](report, now) for key in keys}


def render_report(
    report: VolumeReport,
    config: ReportConfig,
    now: Optional[datetime] = None,
) -> str:
    """
    Render the report as indented JSON followed by a newline.

    Args:
        report: Scanned volume report
        config: Report configuration
        now: Reference time for secondsSince, defaults to the current UTC time

    Returns:
        JSON text
    """
    if now is None:
        now = datetime.now(timezone.utc)
    selected = select_fields(report, output_keys(report, config), now)
    return json.dumps(selected, indent=2, ensure_ascii=False) + "\n"


def write_report(
    report: VolumeReport,
    config: ReportConfig,
    stream: Optional[TextIO] = None,
    now: Optional[datetime] = None,
) -> None:
    """Write the rendered report to stream (stdout by default)."""
    stream = stream or sys.stdout
    stream.write(render_report(report, config, now=now))
    stream.flush()
