"""
Pytest configuration and fixtures for meta_organizer tests.
"""

import os
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union

import arrow
import pytest

# 2023-06-15 12:00 local time; noon keeps the date stable in any timezone
JUNE_15_2023 = datetime(2023, 6, 15, 12, 0, 0).timestamp()


def local_arrow(year: int, month: int, day: int, hour: int = 12) -> arrow.Arrow:
    """Arrow for a local wall-clock time."""
    return arrow.get(datetime(year, month, day, hour).timestamp()).to("local")


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Empty source directory to organize."""
    directory = tmp_path / "source"
    directory.mkdir()
    return directory


@pytest.fixture
def make_file() -> Callable[..., Path]:
    """Factory creating a file with given content and modification time."""

    def _make_file(
        path: Path,
        content: Union[bytes, str] = b"",
        mtime: Optional[float] = JUNE_15_2023,
        size: Optional[int] = None,
    ) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        if size is not None:
            with open(path, "wb") as f:
                f.truncate(size)
        elif isinstance(content, str):
            path.write_text(content)
        else:
            path.write_bytes(content)
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path

    return _make_file


@pytest.fixture
def june_15() -> arrow.Arrow:
    """Local noon on 2023-06-15."""
    return local_arrow(2023, 6, 15)


@pytest.fixture
def local_time() -> Callable[..., arrow.Arrow]:
    """Factory for local wall-clock Arrow values."""
    return local_arrow
