"""
File organizer for reorganizing a directory tree in place.

Collects every regular file under the source directory and feeds each one
through timestamp resolution, size classification, path planning and the
collision-safe mover.
"""

import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeRemainingColumn,
)

from ..core.timestamps import TimestampResolver
from ..core.types import (
    ErrorKind,
    FileRecord,
    MoveOutcome,
    OrganizationResult,
    OrganizerConfig,
    SizeThresholds,
    TimeAttribute,
)
from ..shared.file_utils import collect_files
from .mover import SafeMover
from .strategy import PathPlanner

logger = logging.getLogger(__name__)


class FileOrganizer:
    """Organize files under a source directory by extension, date and size."""

    def __init__(
        self,
        source_directory: Path,
        time_attribute: TimeAttribute = TimeAttribute.CREATION,
        thresholds: Optional[SizeThresholds] = None,
        dry_run: bool = False,
        resolver: Optional[TimestampResolver] = None,
        console: Optional[Console] = None,
    ):
        """
        Initialize file organizer.

        Args:
            source_directory: Directory to reorganize in place
            time_attribute: Timestamp used for the date directories
            thresholds: Size category boundaries
            dry_run: If True, preview changes without executing
            resolver: Timestamp resolver (default sources if None)
            console: Console for the progress bar
        """
        self.source_directory = Path(source_directory).absolute()
        self.time_attribute = time_attribute
        self.planner = PathPlanner(thresholds=thresholds or SizeThresholds())
        self.dry_run = dry_run
        self.resolver = resolver or TimestampResolver()
        self.mover = SafeMover(dry_run=dry_run)
        self.console = console

    @classmethod
    def from_config(cls, config: OrganizerConfig, **kwargs) -> "FileOrganizer":
        """Create an organizer from a resolved run configuration."""
        return cls(
            source_directory=config.source_directory,
            time_attribute=config.time_attribute,
            thresholds=config.thresholds,
            dry_run=config.dry_run,
            **kwargs,
        )

    def collect(self) -> List[Path]:
        """
        Collect candidate files.

        Raises:
            EnumerationError: If the source directory cannot be scanned
        """
        return collect_files(self.source_directory)

    def organize(self, show_progress: bool = False) -> OrganizationResult:
        """
        Organize all files under the source directory.

        The file list is collected completely before anything is moved.

        Args:
            show_progress: Display a progress bar

        Returns:
            Organization result with one outcome per file

        Raises:
            EnumerationError: If the source directory cannot be scanned
        """
        logger.info(
            f"Starting organization of {self.source_directory} "
            f"({'DRY RUN' if self.dry_run else 'LIVE'})"
        )

        files = self.collect()
        result = OrganizationResult(total_files=len(files), dry_run=self.dry_run)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            TimeRemainingColumn(),
            console=self.console,
            disable=not show_progress,
            transient=True,
        ) as progress:
            task = progress.add_task("Organizing files...", total=len(files))

            for file_path in files:
                result.add(self.process_file(file_path))
                progress.advance(task)

        logger.info(
            f"Processed {result.total_files} files: {result.moved} moved, "
            f"{result.renamed} renamed, {result.skipped} skipped, "
            f"{result.failed} failed"
        )
        return result

    def process_file(self, file_path: Path) -> MoveOutcome:
        """
        Process a single file.

        Never raises; every error becomes a failed outcome.

        Args:
            file_path: File to organize

        Returns:
            Outcome for this file
        """
        file_path = Path(file_path)
        try:
            # Guards against files removed by something else mid-run
            if not file_path.exists():
                logger.warning(f"Skipping {file_path}: file no longer exists")
                return MoveOutcome.failed(
                    file_path,
                    "file no longer exists",
                    error=ErrorKind.SOURCE_MISSING,
                    dry_run=self.dry_run,
                )

            record = self.plan_file(file_path)
            return self.mover.move(record.source_path, record.destination)
        except Exception as e:
            logger.error(f"Error processing {file_path}: {e}")
            return MoveOutcome.failed(
                file_path,
                str(e),
                error=ErrorKind.UNEXPECTED,
                dry_run=self.dry_run,
            )

    def plan_file(self, file_path: Path) -> FileRecord:
        """Resolve timestamp and size of a file and plan its destination."""
        timestamp_info = self.resolver.resolve(file_path, self.time_attribute)

        try:
            size_bytes = file_path.stat().st_size
        except OSError as e:
            logger.error(f"Unable to get file size for {file_path}: {e}")
            size_bytes = 0

        return self.planner.build_record(
            self.source_directory, file_path, timestamp_info, size_bytes
        )


def organize_directory(
    source_directory: Path,
    time_attribute: TimeAttribute = TimeAttribute.CREATION,
    thresholds: Optional[SizeThresholds] = None,
    dry_run: bool = False,
) -> OrganizationResult:
    """
    Organize a directory in place.

    Args:
        source_directory: Directory to reorganize
        time_attribute: Timestamp used for the date directories
        thresholds: Size category boundaries
        dry_run: If True, preview changes without executing

    Returns:
        Organization result
    """
    organizer = FileOrganizer(
        source_directory=source_directory,
        time_attribute=time_attribute,
        thresholds=thresholds,
        dry_run=dry_run,
    )
    return organizer.organize()
