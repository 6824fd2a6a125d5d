"""Tests for timestamp resolution."""

import logging
import os
import sys
from pathlib import Path
from types import SimpleNamespace

import arrow
import pytest

from meta_organizer.core import timestamps
from meta_organizer.core.statx import STATX_BTIME, Statx, read_statx
from meta_organizer.core.timestamps import (
    TimestampInfo,
    TimestampResolver,
    access_time,
    birth_time,
    modification_time,
    statx_birth_time,
    windows_creation_time,
)
from meta_organizer.core.types import TimeAttribute, TimeSource

FAKE_PATH = Path("/no/such/dir/file.txt")


def _unavailable(path):
    return None


def _denied(path):
    raise PermissionError(13, "Permission denied", str(path))


class TestTimeSources:
    """Test the individual timestamp sources."""

    def test_modification_time(self, tmp_path, make_file, june_15):
        """Test reading the modification time."""
        path = make_file(tmp_path / "file.txt", "content")

        result = modification_time(path)

        assert result == june_15
        assert result.format("YYYY/MM/DD") == "2023/06/15"

    def test_access_time_keeps_sub_second_precision(self, tmp_path, make_file):
        """Test access time is read with sub-second precision."""
        path = make_file(tmp_path / "file.txt", "content")
        atime = 1686830400.25
        os.utime(path, (atime, atime))

        result = access_time(path)

        assert result.timestamp() == pytest.approx(atime, abs=1e-3)

    def test_birth_time_present(self, monkeypatch, june_15):
        """Test birth time is used when the platform reports it."""
        monkeypatch.setattr(
            timestamps.os,
            "stat",
            lambda path: SimpleNamespace(st_birthtime=june_15.timestamp()),
        )

        assert birth_time(FAKE_PATH) == june_15

    def test_birth_time_missing(self, monkeypatch):
        """Test birth time returns None when the field is absent."""
        monkeypatch.setattr(timestamps.os, "stat", lambda path: SimpleNamespace())

        assert birth_time(FAKE_PATH) is None

    def test_statx_birth_time_present(self, monkeypatch, june_15):
        """Test statx birth time is used when the filesystem reports it."""
        result = Statx(stx_mask=STATX_BTIME)
        result.stx_btime.tv_sec = int(june_15.timestamp())
        monkeypatch.setattr(timestamps.sys, "platform", "linux")
        monkeypatch.setattr(timestamps, "read_statx", lambda path, mask: result)

        assert statx_birth_time(FAKE_PATH) == june_15

    def test_statx_birth_time_not_reported(self, monkeypatch):
        """Test statx without the birth time bit yields no value."""
        result = Statx(stx_mask=0)
        result.stx_btime.tv_sec = 1
        monkeypatch.setattr(timestamps.sys, "platform", "linux")
        monkeypatch.setattr(timestamps, "read_statx", lambda path, mask: result)

        assert statx_birth_time(FAKE_PATH) is None

    def test_statx_birth_time_unsupported_libc(self, monkeypatch):
        """Test a libc without statx yields no value."""
        monkeypatch.setattr(timestamps.sys, "platform", "linux")
        monkeypatch.setattr(timestamps, "read_statx", lambda path, mask: None)

        assert statx_birth_time(FAKE_PATH) is None

    def test_statx_birth_time_other_platform(self, monkeypatch):
        """Test statx is only used on Linux."""

        def fail(path, mask):
            raise AssertionError("statx called outside Linux")

        monkeypatch.setattr(timestamps.sys, "platform", "darwin")
        monkeypatch.setattr(timestamps, "read_statx", fail)

        assert statx_birth_time(FAKE_PATH) is None

    def test_windows_creation_time_other_platform(self, monkeypatch):
        """Test ctime is not used as creation time outside Windows."""
        monkeypatch.setattr(timestamps.sys, "platform", "linux")

        assert windows_creation_time(FAKE_PATH) is None

    def test_windows_creation_time_on_windows(self, monkeypatch, june_15):
        """Test ctime is used as creation time on Windows."""
        monkeypatch.setattr(timestamps.sys, "platform", "win32")
        monkeypatch.setattr(
            timestamps.os,
            "stat",
            lambda path: SimpleNamespace(st_ctime=june_15.timestamp()),
        )

        assert windows_creation_time(FAKE_PATH) == june_15


class TestTimestampResolver:
    """Test the resolver fallback chains."""

    def test_modification(self, tmp_path, make_file, june_15):
        """Test resolving the modification time."""
        path = make_file(tmp_path / "file.txt", "content")

        info = TimestampResolver().resolve(path, TimeAttribute.MODIFICATION)

        assert isinstance(info, TimestampInfo)
        assert info.timestamp == june_15
        assert info.source == TimeSource.MODIFICATION_TIME
        assert info.warnings == []
        assert not info.degraded

    def test_unspecified_attribute_uses_modification(self, tmp_path, make_file):
        """Test None defaults to the modification time."""
        path = make_file(tmp_path / "file.txt", "content")

        info = TimestampResolver().resolve(path, None)

        assert info.source == TimeSource.MODIFICATION_TIME

    def test_access(self, tmp_path, make_file, local_time):
        """Test resolving the access time."""
        path = make_file(tmp_path / "file.txt", "content")
        atime = local_time(2022, 1, 2).timestamp()
        os.utime(path, (atime, path.stat().st_mtime))

        info = TimestampResolver().resolve(path, TimeAttribute.ACCESS)

        assert info.source == TimeSource.ACCESS_TIME
        assert info.timestamp.format("YYYY-MM-DD") == "2022-01-02"

    @pytest.mark.skipif(
        not sys.platform.startswith("linux"), reason="statx is Linux only"
    )
    def test_creation_reads_birth_time_on_linux(self, tmp_path, make_file):
        """Test default creation sources read the kernel birth time."""
        path = make_file(tmp_path / "file.txt", "content")
        stx = read_statx(path)
        if stx is None or not stx.has_birth_time:
            pytest.skip("filesystem does not report birth time")

        info = TimestampResolver().resolve(path, TimeAttribute.CREATION)

        assert info.source == TimeSource.BIRTH_TIME
        assert not info.degraded
        assert info.timestamp.timestamp() == pytest.approx(
            stx.stx_btime.to_seconds(), abs=1e-3
        )
        # Birth time is now, not the backdated modification time
        assert info.timestamp.year != 2023

    def test_creation_available(self, tmp_path, make_file, local_time):
        """Test the first creation source that succeeds wins."""
        path = make_file(tmp_path / "file.txt", "content")
        created = local_time(2020, 3, 4)
        resolver = TimestampResolver(
            creation_sources=[_unavailable, lambda p: created, _denied]
        )

        info = resolver.resolve(path, TimeAttribute.CREATION)

        assert info.source == TimeSource.BIRTH_TIME
        assert info.timestamp == created
        assert not info.degraded

    def test_creation_falls_back_to_modification(
        self, tmp_path, make_file, june_15, caplog
    ):
        """Test creation falls back to modification time with a warning."""
        path = make_file(tmp_path / "file.txt", "content")
        resolver = TimestampResolver(creation_sources=[_unavailable, _denied])

        with caplog.at_level(logging.WARNING):
            info = resolver.resolve(path, TimeAttribute.CREATION)

        assert info.source == TimeSource.MODIFICATION_TIME
        assert info.timestamp == june_15
        assert info.degraded
        assert "Creation time not available" in info.warnings[0]
        assert str(path) in info.warnings[0]
        assert "Creation time not available" in caplog.text

    def test_creation_without_any_source(self, tmp_path, make_file, june_15):
        """Test an empty creation source list still resolves."""
        path = make_file(tmp_path / "file.txt", "content")

        info = TimestampResolver(creation_sources=[]).resolve(
            path, TimeAttribute.CREATION
        )

        assert info.source == TimeSource.MODIFICATION_TIME
        assert info.timestamp == june_15

    def test_missing_file_modification_uses_current_time(self, tmp_path, caplog):
        """Test an unreadable file degrades to the current time."""
        path = tmp_path / "missing.txt"
        before = arrow.now()

        with caplog.at_level(logging.ERROR):
            info = TimestampResolver().resolve(path, TimeAttribute.MODIFICATION)

        assert info.source == TimeSource.CURRENT_TIME
        assert info.timestamp >= before
        assert "Unable to get modification time" in info.warnings[0]
        assert "missing.txt" in caplog.text

    def test_access_failure_does_not_use_modification(
        self, tmp_path, make_file
    ):
        """Test access time failures fall back to now, not modification time."""
        path = make_file(tmp_path / "file.txt", "content")
        resolver = TimestampResolver(access_sources=[_denied])

        info = resolver.resolve(path, TimeAttribute.ACCESS)

        assert info.source == TimeSource.CURRENT_TIME
        assert "Permission denied" in info.warnings[0]

    def test_creation_on_missing_file(self, tmp_path):
        """Test creation on a missing file degrades twice but never raises."""
        path = tmp_path / "missing.txt"

        info = TimestampResolver().resolve(path, TimeAttribute.CREATION)

        assert info.source == TimeSource.CURRENT_TIME
        assert len(info.warnings) == 2
