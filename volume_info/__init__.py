"""Package initialization."""
__version__ = "0.1.0"

from volume_info.config import MOUNT_POINT, ReportConfig
from volume_info.models import FileInfo, FileTimes, TimeRecord, VolumeReport
from volume_info.reporter import render_report, write_report
from volume_info.scanner import Scanner, VolumeInfoError, WalkError, is_empty, scan_volume

__all__ = [
    "MOUNT_POINT",
    "FileInfo",
    "FileTimes",
    "ReportConfig",
    "Scanner",
    "TimeRecord",
    "VolumeInfoError",
    "VolumeReport",
    "WalkError",
    "is_empty",
    "render_report",
    "scan_volume",
    "write_report",
]
