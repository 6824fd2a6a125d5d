"""
Timestamp resolution for files.

This module resolves the timestamp that drives the date directories. Each
time attribute has an ordered list of sources:
- Creation: Linux statx birth time, then ``st_birthtime`` (macOS, BSD),
  then Windows ctime
- Modification: last write time
- Access: last access time

When no source yields a value the resolver degrades instead of failing:
creation falls back to modification time, and modification or access fall
back to the current time.
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import arrow

from .statx import STATX_BTIME, read_statx
from .types import TimeAttribute, TimeSource

logger = logging.getLogger(__name__)

TimeSourceFn = Callable[[Path], Optional[arrow.Arrow]]


@dataclass
class TimestampInfo:
    """A resolved timestamp and where it came from."""

    timestamp: arrow.Arrow
    source: TimeSource
    warnings: List[str] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        """True if the requested attribute could not be read."""
        return bool(self.warnings)


def statx_birth_time(path: Path) -> Optional[arrow.Arrow]:
    """
    Read the file birth time with Linux ``statx``.

    Returns None when statx is unavailable or the filesystem does not
    report ``STATX_BTIME``.
    """
    if not sys.platform.startswith("linux"):
        return None
    result = read_statx(path, STATX_BTIME)
    if result is None or not result.has_birth_time:
        return None
    return arrow.get(result.stx_btime.to_seconds()).to("local")


def birth_time(path: Path) -> Optional[arrow.Arrow]:
    """
    Read the file birth time.

    Only available where ``os.stat`` reports ``st_birthtime`` (macOS, BSD,
    Windows on recent Python versions).
    """
    value = getattr(os.stat(path), "st_birthtime", None)
    if not value:
        return None
    return arrow.get(value).to("local")


def windows_creation_time(path: Path) -> Optional[arrow.Arrow]:
    """On Windows ``st_ctime`` is the creation time."""
    if sys.platform != "win32":
        return None
    return arrow.get(os.stat(path).st_ctime).to("local")


def modification_time(path: Path) -> Optional[arrow.Arrow]:
    return arrow.get(Path(path).stat().st_mtime).to("local")


def access_time(path: Path) -> Optional[arrow.Arrow]:
    # Nanosecond field keeps sub-second precision
    atime_ns = os.stat(path).st_atime_ns
    return arrow.get(atime_ns / 1_000_000_000).to("local")


class TimestampResolver:
    """Resolve a file timestamp, degrading gracefully."""

    def __init__(
        self,
        creation_sources: Optional[List[TimeSourceFn]] = None,
        modification_sources: Optional[List[TimeSourceFn]] = None,
        access_sources: Optional[List[TimeSourceFn]] = None,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            creation_sources: Ordered attempts for the creation time
            modification_sources: Ordered attempts for the modification time
            access_sources: Ordered attempts for the access time
        """
        self.creation_sources = (
            creation_sources
            if creation_sources is not None
            else [statx_birth_time, birth_time, windows_creation_time]
        )
        self.modification_sources = (
            modification_sources
            if modification_sources is not None
            else [modification_time]
        )
        self.access_sources = (
            access_sources if access_sources is not None else [access_time]
        )

    @staticmethod
    def _try_sources(
        path: Path, sources: List[TimeSourceFn]
    ) -> Tuple[Optional[arrow.Arrow], Optional[str]]:
        """
        Try sources in order until one returns a timestamp.

        Returns:
            (timestamp, None) on success, (None, last error message) otherwise
        """
        last_error: Optional[str] = None
        for source in sources:
            try:
                timestamp = source(path)
            except (OSError, ValueError, OverflowError) as e:
                logger.debug(f"{source.__name__} failed for {path}: {e}")
                last_error = str(e)
                continue
            if timestamp is not None:
                return timestamp, None
        return None, last_error

    def resolve(
        self, path: Path, attribute: Optional[TimeAttribute]
    ) -> TimestampInfo:
        """
        Resolve the timestamp of a file for the requested attribute.

        Never raises; falls back as described in the module docstring.

        Args:
            path: File to inspect
            attribute: Requested time attribute (None means modification)

        Returns:
            TimestampInfo with the value, its source and any warnings
        """
        path = Path(path)

        if attribute == TimeAttribute.CREATION:
            timestamp, _ = self._try_sources(path, self.creation_sources)
            if timestamp is not None:
                return TimestampInfo(timestamp=timestamp, source=TimeSource.BIRTH_TIME)

            warning = (
                f"Creation time not available for {path}, "
                "falling back to last modification time"
            )
            logger.warning(warning)
            info = self._resolve_modification(path)
            info.warnings.insert(0, warning)
            return info

        if attribute == TimeAttribute.ACCESS:
            timestamp, error = self._try_sources(path, self.access_sources)
            if timestamp is not None:
                return TimestampInfo(timestamp=timestamp, source=TimeSource.ACCESS_TIME)
            return self._current_time(path, "access", error)

        return self._resolve_modification(path)

    def _resolve_modification(self, path: Path) -> TimestampInfo:
        timestamp, error = self._try_sources(path, self.modification_sources)
        if timestamp is not None:
            return TimestampInfo(
                timestamp=timestamp, source=TimeSource.MODIFICATION_TIME
            )
        return self._current_time(path, "modification", error)

    @staticmethod
    def _current_time(path: Path, label: str, error: Optional[str]) -> TimestampInfo:
        warning = f"Unable to get {label} time for {path}: {error or 'unavailable'}"
        logger.error(f"{warning}; using current time")
        return TimestampInfo(
            timestamp=arrow.now(), source=TimeSource.CURRENT_TIME, warnings=[warning]
        )
