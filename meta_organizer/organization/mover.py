"""
Collision-safe file relocation.

Decides between skipping, renaming and moving when the planned destination
is already occupied, then performs (or previews) an atomic rename.
"""

import logging
import os
from pathlib import Path

from ..core.types import ErrorKind, MoveOutcome
from ..shared.file_utils import files_identical

logger = logging.getLogger(__name__)


def resolve_naming_conflict(target_path: Path) -> Path:
    """
    Find the first free name of the form <stem>_N<suffix>.

    Args:
        target_path: Occupied target path

    Returns:
        First path with N = 1, 2, ... that does not exist
    """
    stem = target_path.stem
    suffix = target_path.suffix
    parent = target_path.parent

    counter = 1
    while True:
        new_path = parent / f"{stem}_{counter}{suffix}"
        if not new_path.exists():
            return new_path
        counter += 1


def _same_path(a: Path, b: Path) -> bool:
    return os.path.abspath(a) == os.path.abspath(b)


class SafeMover:
    """Move files without ever overwriting different content."""

    def __init__(self, dry_run: bool = False):
        """
        Initialize the mover.

        Args:
            dry_run: If True, report intended actions without touching files
        """
        self.dry_run = dry_run

    def move(self, source: Path, destination: Path) -> MoveOutcome:
        """
        Move a file to its planned destination.

        Args:
            source: File to move
            destination: Planned destination path

        Returns:
            Outcome describing what happened (or would happen in dry run)
        """
        source = Path(source)
        destination = Path(destination)

        if _same_path(source, destination):
            logger.debug(f"Skipping {source}: already in the correct location")
            return MoveOutcome.skipped_same_path(source, dry_run=self.dry_run)

        target_path = destination
        renamed = False

        if destination.exists():
            if files_identical(source, destination):
                logger.debug(f"Skipping {source}: matches existing {destination}")
                return MoveOutcome.skipped_identical(
                    source, destination, dry_run=self.dry_run
                )
            target_path = resolve_naming_conflict(destination)
            renamed = True
            logger.debug(f"Name conflict at {destination}, using {target_path}")

        if self.dry_run:
            if not target_path.parent.exists():
                logger.debug(f"[DRY RUN] Would create directory {target_path.parent}")
            action = "rename" if renamed else "move"
            logger.debug(f"[DRY RUN] Would {action} {source} → {target_path}")
            return self._relocated(source, target_path, renamed)

        try:
            target_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Unable to create directory {target_path.parent}: {e}")
            return MoveOutcome.failed(
                source,
                f"unable to create directory {target_path.parent}: {e}",
                error=ErrorKind.DIRECTORY_CREATION_FAILED,
                target=target_path,
            )

        try:
            source.rename(target_path)
        except OSError as e:
            logger.error(f"Unable to move {source} → {target_path}: {e}")
            return MoveOutcome.failed(
                source,
                f"unable to move to {target_path}: {e}",
                error=ErrorKind.RENAME_FAILED,
                target=target_path,
            )

        logger.debug(f"{'Renamed' if renamed else 'Moved'} {source} → {target_path}")
        return self._relocated(source, target_path, renamed)

    def _relocated(self, source: Path, target: Path, renamed: bool) -> MoveOutcome:
        if renamed:
            return MoveOutcome.renamed(source, target, dry_run=self.dry_run)
        return MoveOutcome.moved(source, target, dry_run=self.dry_run)
