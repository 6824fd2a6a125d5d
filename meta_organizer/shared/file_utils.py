"""
File utilities for the organizer.

Directory enumeration, byte-exact file comparison, formatting and logging
setup shared by the organization engine and the CLI.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from ..core.errors import EnumerationError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def collect_files(directory: Path) -> List[Path]:
    """
    Collect all regular files under a directory, recursively.

    Directory and file names are visited in sorted order so the result is
    deterministic. Symbolic links are neither followed nor returned.
    Subdirectories that cannot be read are logged and skipped.

    Args:
        directory: Directory to scan

    Returns:
        List of Path objects, fully materialized

    Raises:
        EnumerationError: If the directory itself cannot be scanned
    """
    directory = Path(directory)

    if not directory.exists():
        raise EnumerationError(f"Directory does not exist: {directory}")

    if not directory.is_dir():
        raise EnumerationError(f"Path is not a directory: {directory}")

    try:
        # Fail fast on an unreadable root instead of returning nothing
        with os.scandir(directory):
            pass
    except OSError as e:
        raise EnumerationError(f"Cannot read directory {directory}: {e}") from e

    def on_error(error: OSError) -> None:
        logger.warning(f"Skipping unreadable directory {error.filename}: {error}")

    files: List[Path] = []
    for root, dirs, names in os.walk(directory, onerror=on_error):
        dirs.sort()
        root_path = Path(root)
        for name in sorted(names):
            file_path = root_path / name
            if os.path.islink(file_path):
                logger.debug(f"Skipping symbolic link {file_path}")
                continue
            if not os.path.isfile(file_path):
                continue
            files.append(file_path)

    logger.info(f"Collected {len(files)} files in {directory}")
    return files


def files_identical(path_a: Path, path_b: Path, chunk_size: int = CHUNK_SIZE) -> bool:
    """
    Check whether two files have byte-identical contents.

    Any I/O error counts as "not identical".

    Args:
        path_a: First file
        path_b: Second file
        chunk_size: Read size in bytes

    Returns:
        True if both files could be read and their bytes match
    """
    try:
        if Path(path_a).stat().st_size != Path(path_b).stat().st_size:
            return False

        with open(path_a, "rb") as fa, open(path_b, "rb") as fb:
            while True:
                chunk_a = fa.read(chunk_size)
                chunk_b = fb.read(chunk_size)
                if chunk_a != chunk_b:
                    return False
                if not chunk_a:
                    return True
    except OSError as e:
        logger.warning(f"Error comparing {path_a} with {path_b}: {e}")
        return False


def format_bytes(size_bytes: int) -> str:
    """
    Format bytes in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted string (e.g., "2.50 MB")
    """
    if size_bytes == 0:
        return "0 B"

    units = ["B", "KB", "MB", "GB", "TB", "PB"]
    unit_index = 0
    size = float(size_bytes)

    while size >= 1024.0 and unit_index < len(units) - 1:
        size /= 1024.0
        unit_index += 1

    return f"{size:.2f} {units[unit_index]}"


def setup_logging(
    verbose: bool = False, quiet: bool = False, console: Optional[Console] = None
) -> None:
    """
    Configure logging for the application.

    Diagnostics go to stderr through a rich handler.

    Args:
        verbose: If True, set logging level to DEBUG
        quiet: If True, set logging level to WARNING
        console: Console to log to (stderr console if None)
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=console or Console(stderr=True),
                rich_tracebacks=True,
                show_path=False,
            )
        ],
    )
