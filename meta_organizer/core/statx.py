"""
Linux ``statx(2)`` access through libc.

``os.stat`` does not report the birth time on Linux, but the kernel exposes
it through ``statx`` (Linux 4.11+, glibc 2.28+) when the filesystem records
it. Only the leading fields up to ``stx_mtime`` are declared; the rest of
the 256 byte structure is padding.
"""

import ctypes
import ctypes.util
import os
import sys
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

AT_FDCWD = -100
AT_STATX_SYNC_AS_STAT = 0x0000
AT_SYMLINK_NOFOLLOW = 0x0100
STATX_SIZE = 0x0200
STATX_BTIME = 0x0800

STATX_STRUCT_SIZE = 256


class StatxTimestamp(ctypes.Structure):
    _fields_ = [
        ("tv_sec", ctypes.c_int64),
        ("tv_nsec", ctypes.c_uint32),
        ("_reserved", ctypes.c_int32),
    ]

    def to_seconds(self) -> float:
        return self.tv_sec + self.tv_nsec / 1_000_000_000


class Statx(ctypes.Structure):
    _fields_ = [
        ("stx_mask", ctypes.c_uint32),
        ("stx_blksize", ctypes.c_uint32),
        ("stx_attributes", ctypes.c_uint64),
        ("stx_nlink", ctypes.c_uint32),
        ("stx_uid", ctypes.c_uint32),
        ("stx_gid", ctypes.c_uint32),
        ("stx_mode", ctypes.c_uint16),
        ("_spare0", ctypes.c_uint16),
        ("stx_ino", ctypes.c_uint64),
        ("stx_size", ctypes.c_uint64),
        ("stx_blocks", ctypes.c_uint64),
        ("stx_attributes_mask", ctypes.c_uint64),
        ("stx_atime", StatxTimestamp),
        ("stx_btime", StatxTimestamp),
        ("stx_ctime", StatxTimestamp),
        ("stx_mtime", StatxTimestamp),
        ("_spare", ctypes.c_uint8 * (STATX_STRUCT_SIZE - 128)),
    ]

    @property
    def has_birth_time(self) -> bool:
        return bool(self.stx_mask & STATX_BTIME)


@lru_cache(maxsize=None)
def _libc_statx() -> Optional[Any]:
    """Return libc's ``statx`` function, or None if libc has none."""
    if not sys.platform.startswith("linux"):
        return None

    libc = ctypes.CDLL(ctypes.util.find_library("c"), use_errno=True)
    func = getattr(libc, "statx", None)
    if func is None:
        return None

    func.argtypes = [
        ctypes.c_int,
        ctypes.c_char_p,
        ctypes.c_int,
        ctypes.c_uint,
        ctypes.POINTER(Statx),
    ]
    func.restype = ctypes.c_int
    return func


def read_statx(path: Path, mask: int = STATX_BTIME) -> Optional[Statx]:
    """
    Call ``statx`` on a path.

    Args:
        path: File to inspect (symlinks are not followed)
        mask: Requested ``STATX_*`` fields

    Returns:
        Filled structure, or None when statx is not available

    Raises:
        OSError: If the call fails (missing file, permissions, ENOSYS)
    """
    func = _libc_statx()
    if func is None:
        return None

    result = Statx()
    ret = func(
        AT_FDCWD,
        os.fsencode(path),
        AT_STATX_SYNC_AS_STAT | AT_SYMLINK_NOFOLLOW,
        mask,
        ctypes.byref(result),
    )
    if ret != 0:
        errno = ctypes.get_errno()
        raise OSError(errno, os.strerror(errno), str(path))
    return result
