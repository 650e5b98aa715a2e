"""
Scanner module - Read-only volume scanner.

Checks whether the mount point is empty, then walks every descendant and keeps
the most recent access, modify, change and birth timestamp seen, together with
the entry that produced it.
"""
import logging
import os
import stat
from typing import Iterable, List, Optional, Tuple

from volume_info.config import MOUNT_POINT
from volume_info.models import FileInfo, FileTimes, TimeRecord, VolumeReport

logger = logging.getLogger(__name__)


class VolumeInfoError(Exception):
    """Base error for volume info."""


class WalkError(VolumeInfoError):
    """
    The walk could not be carried out.

    Carries the partial report built before the failure, if any.
    """

    def __init__(self, message: str, report: Optional[VolumeReport] = None):
        super().__init__(message)
        self.report = report


def is_empty(path: str) -> bool:
    """
    Check whether a directory has no entries.

    Only one entry is read. A directory that cannot be opened is reported as
    not empty, leaving the walk to surface the error.

    Args:
        path: Directory to check

    Returns:
        True if the directory exists and has no entries
    """
    try:
        with os.scandir(path) as iterator:
            return next(iterator, None) is None
    except OSError as exc:
        logger.debug("Cannot open %s for emptiness check: %s", path, exc)
        return False


class Scanner:
    """
    Read-only volume scanner.

    Entries are lstat'ed, so a symlink contributes the timestamps of the link
    itself rather than of the file it points to.
    """

    def __init__(self, mount_point: str = MOUNT_POINT, collect_file_infos: bool = False):
        """
        Initialize scanner.

        Args:
            mount_point: Directory to inspect
            collect_file_infos: If True, keep a FileInfo for every entry
        """
        self.mount_point = mount_point
        self.collect_file_infos = collect_file_infos

    def _list_directory(self, directory: str) -> List[os.DirEntry]:
        with os.scandir(directory) as iterator:
            return sorted(iterator, key=lambda entry: entry.name)

    def _iter_entries(self) -> Iterable[Tuple[str, os.stat_result]]:
        """
        Yield (path, stat) for every descendant of the mount point.

        Pre-order depth-first, entries of each directory in name order.
        Symlinks are not followed: a link reports its own timestamps, not
        those of its target, and linked directories are not descended into.
        A directory is yielded only once it has been listed successfully.

        Raises:
            WalkError: If the mount point itself cannot be stat'ed or listed
        """
        try:
            root_stat = os.lstat(self.mount_point)
        except OSError as exc:
            raise WalkError(f"Cannot access mount point {self.mount_point}: {exc}") from exc

        if not stat.S_ISDIR(root_stat.st_mode):
            raise WalkError(f"Mount point is not a directory: {self.mount_point}")

        try:
            entries = self._list_directory(self.mount_point)
        except OSError as exc:
            raise WalkError(f"Cannot list mount point {self.mount_point}: {exc}") from exc

        yield from self._walk_entries(entries)

    def _walk_entries(self, entries: List[os.DirEntry]) -> Iterable[Tuple[str, os.stat_result]]:
        for entry in entries:
            try:
                entry_stat = entry.stat(follow_symlinks=False)
            except OSError as exc:
                logger.error("Failed to stat %s: %s", entry.path, exc)
                continue

            if not stat.S_ISDIR(entry_stat.st_mode):
                yield entry.path, entry_stat
                continue

            # An unreadable directory contributes nothing, not even its own times.
            try:
                children = self._list_directory(entry.path)
            except OSError as exc:
                logger.error("Failed to list directory %s: %s", entry.path, exc)
                continue

            yield entry.path, entry_stat
            yield from self._walk_entries(children)

    def _update(self, report: VolumeReport, path: str, times: FileTimes) -> None:
        candidates = (
            ("last_access", times.access_ns),
            ("last_modify", times.modify_ns),
            ("last_change", times.change_ns),
            ("last_birth", times.birth_ns),
        )
        for attribute, candidate in candidates:
            if candidate is None:
                continue
            if getattr(report, attribute).is_older_than(candidate):
                setattr(report, attribute, TimeRecord.at(path, candidate))

    def scan(self) -> VolumeReport:
        """
        Scan the mount point.

        Returns:
            VolumeReport with the latest timestamps per category

        Raises:
            WalkError: If the walk itself fails; the partial report is attached
        """
        report = VolumeReport(mount_point=self.mount_point, is_empty=is_empty(self.mount_point))
        if report.is_empty:
            logger.info("Volume %s is empty", self.mount_point)
            return report

        logger.info("Scanning volume: %s", self.mount_point)
        count = 0
        try:
            for path, entry_stat in self._iter_entries():
                times = FileTimes.from_stat(entry_stat)
                self._update(report, path, times)
                if self.collect_file_infos:
                    report.file_infos.append(FileInfo.from_stat(path, entry_stat, times))
                count += 1
        except WalkError as exc:
            exc.report = report
            raise

        logger.info("Scanned %s entries from %s", count, self.mount_point)
        return report


def scan_volume(mount_point: str = MOUNT_POINT, collect_file_infos: bool = False) -> VolumeReport:
    """
    Scan a volume and return its report.

    Raises:
        WalkError: If the walk itself fails
    """
    return Scanner(mount_point, collect_file_infos=collect_file_infos).scan()
