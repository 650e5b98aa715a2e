"""
Core data models for the volume info report.

All models use Pydantic for validation and JSON serialization.
"""
import os
import stat
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def datetime_from_ns(timestamp_ns: int) -> datetime:
    """Convert nanoseconds since the epoch to an aware UTC datetime."""
    seconds, remainder = divmod(timestamp_ns, 1_000_000_000)
    return datetime.fromtimestamp(seconds, tz=timezone.utc) + timedelta(
        microseconds=remainder // 1000
    )


class ReportModel(BaseModel):
    """Base model emitting camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FileTimes(ReportModel):
    """Timestamps of a single filesystem entry, in nanoseconds since the epoch."""
    access_ns: int = Field(..., description="Last access time")
    modify_ns: int = Field(..., description="Last content modification time")
    change_ns: int = Field(..., description="Last inode change time")
    birth_ns: Optional[int] = Field(
        None, description="Creation time, absent when the platform does not report it"
    )

    @classmethod
    def from_stat(cls, stat_result: os.stat_result) -> "FileTimes":
        """
        Build timestamps from a stat result.

        Args:
            stat_result: Result of os.stat / os.lstat

        Returns:
            FileTimes with full nanosecond precision
        """
        birth_ns = getattr(stat_result, "st_birthtime_ns", None)
        if birth_ns is None:
            birth = getattr(stat_result, "st_birthtime", None)
            if birth is not None:
                birth_ns = int(birth * 1_000_000_000)

        return cls(
            access_ns=stat_result.st_atime_ns,
            modify_ns=stat_result.st_mtime_ns,
            change_ns=stat_result.st_ctime_ns,
            birth_ns=birth_ns,
        )


class TimeRecord(ReportModel):
    """The entry holding the most recent timestamp of one category."""
    path: str = Field("", description="Full path of the entry")
    file_name: str = Field("", description="Base name of the entry")
    time: Optional[datetime] = Field(None, description="Timestamp, None for the zero record")
    seconds_since: Optional[int] = Field(
        None, description="Whole seconds between the timestamp and report time"
    )
    time_ns: Optional[int] = Field(
        None, exclude=True, description="Exact timestamp in nanoseconds, used for comparison"
    )

    @classmethod
    def at(cls, path: str, time_ns: int) -> "TimeRecord":
        """Build a record for path holding the given nanosecond timestamp."""
        return cls(
            path=path,
            file_name=os.path.basename(path),
            time=datetime_from_ns(time_ns),
            time_ns=time_ns,
        )

    @property
    def is_set(self) -> bool:
        return self.time is not None

    def is_older_than(self, candidate_ns: int) -> bool:
        """Whether candidate_ns is strictly later than the held timestamp."""
        return self.time_ns is None or candidate_ns > self.time_ns

    def since(self, now: datetime) -> "TimeRecord":
        """
        Return a copy with seconds_since computed against now.

        The difference is truncated toward zero. The zero record is returned unchanged.
        """
        if self.time is None:
            return self
        return self.model_copy(
            update={"seconds_since": int((now - self.time).total_seconds())}
        )


class FileInfo(ReportModel):
    """Metadata for one traversed entry."""
    path: str = Field(..., description="Full path of the entry")
    name: str = Field(..., description="Base name of the entry")
    size: int = Field(..., description="Size in bytes")
    mode: str = Field(..., description="Permission string, e.g. -rw-r--r--")
    is_dir: bool = Field(False, description="Whether the entry is a directory")
    access_time: datetime = Field(..., description="Last access time")
    modify_time: datetime = Field(..., description="Last modification time")
    change_time: datetime = Field(..., description="Last change time")
    birth_time: Optional[datetime] = Field(None, description="Creation time if known")

    @classmethod
    def from_stat(cls, path: str, stat_result: os.stat_result, times: FileTimes) -> "FileInfo":
        return cls(
            path=path,
            name=os.path.basename(path),
            size=stat_result.st_size,
            mode=stat.filemode(stat_result.st_mode),
            is_dir=stat.S_ISDIR(stat_result.st_mode),
            access_time=datetime_from_ns(times.access_ns),
            modify_time=datetime_from_ns(times.modify_ns),
            change_time=datetime_from_ns(times.change_ns),
            birth_time=None if times.birth_ns is None else datetime_from_ns(times.birth_ns),
        )


class VolumeReport(ReportModel):
    """Summary of the most recent activity on a mounted volume."""
    mount_point: str = Field(..., description="Inspected directory")
    is_empty: bool = Field(False, description="Whether the directory has no entries")
    last_access: TimeRecord = Field(default_factory=TimeRecord)
    last_modify: TimeRecord = Field(default_factory=TimeRecord)
    last_change: TimeRecord = Field(default_factory=TimeRecord)
    last_birth: TimeRecord = Field(default_factory=TimeRecord)
    file_infos: List[FileInfo] = Field(
        default_factory=list, description="Per-entry metadata, in traversal order"
    )
