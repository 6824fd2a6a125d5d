"""
Type definitions for the organizer.
"""

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

MEGABYTE = 1024 * 1024


class TimeAttribute(str, Enum):
    """Which file timestamp drives the date directories."""

    CREATION = "creation"
    MODIFICATION = "modification"
    ACCESS = "access"


class TimeSource(str, Enum):
    """Where a resolved timestamp actually came from."""

    BIRTH_TIME = "birth_time"
    MODIFICATION_TIME = "modification_time"
    ACCESS_TIME = "access_time"
    CURRENT_TIME = "current_time"


class SizeCategory(str, Enum):
    """Size bucket of a file."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class OutcomeKind(str, Enum):
    """What happened to a single file."""

    MOVED = "moved"
    RENAMED = "renamed"
    SKIPPED_IDENTICAL = "skipped_identical"
    SKIPPED_SAME_PATH = "skipped_same_path"
    FAILED = "failed"


class ErrorKind(str, Enum):
    """Why a file could not be relocated."""

    DIRECTORY_CREATION_FAILED = "directory_creation_failed"
    RENAME_FAILED = "rename_failed"
    SOURCE_MISSING = "source_missing"
    UNEXPECTED = "unexpected"


class SizeThresholds(BaseModel):
    """Byte boundaries between the size categories."""

    small_max: int = Field(
        default=1 * MEGABYTE, ge=0, description="Files below this are small"
    )
    medium_max: int = Field(
        default=10 * MEGABYTE, ge=0, description="Files below this are medium"
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_megabytes(cls, small_mb: int, medium_mb: int) -> "SizeThresholds":
        """Build thresholds from whole megabyte values."""
        return cls(small_max=small_mb * MEGABYTE, medium_max=medium_mb * MEGABYTE)


class OrganizerConfig(BaseModel):
    """Resolved configuration for a single run."""

    source_directory: Path
    time_attribute: TimeAttribute = TimeAttribute.CREATION
    thresholds: SizeThresholds = Field(default_factory=SizeThresholds)
    dry_run: bool = False
    verbose: bool = False

    model_config = ConfigDict(frozen=True)


class FileRecord(BaseModel):
    """Everything computed for one file before the move decision."""

    source_path: Path
    timestamp: datetime
    time_source: TimeSource
    size_bytes: int = 0
    size_category: SizeCategory
    destination: Path
    warnings: List[str] = Field(default_factory=list)


class MoveOutcome(BaseModel):
    """Result of handling one file."""

    kind: OutcomeKind
    source_path: Path
    target_path: Optional[Path] = None
    reason: Optional[str] = None
    error: Optional[ErrorKind] = None
    dry_run: bool = False

    @classmethod
    def moved(cls, source: Path, target: Path, dry_run: bool = False) -> "MoveOutcome":
        return cls(
            kind=OutcomeKind.MOVED,
            source_path=source,
            target_path=target,
            dry_run=dry_run,
        )

    @classmethod
    def renamed(
        cls, source: Path, target: Path, dry_run: bool = False
    ) -> "MoveOutcome":
        return cls(
            kind=OutcomeKind.RENAMED,
            source_path=source,
            target_path=target,
            dry_run=dry_run,
        )

    @classmethod
    def skipped_identical(
        cls, source: Path, existing: Path, dry_run: bool = False
    ) -> "MoveOutcome":
        return cls(
            kind=OutcomeKind.SKIPPED_IDENTICAL,
            source_path=source,
            target_path=existing,
            reason="identical file already exists at destination",
            dry_run=dry_run,
        )

    @classmethod
    def skipped_same_path(cls, source: Path, dry_run: bool = False) -> "MoveOutcome":
        return cls(
            kind=OutcomeKind.SKIPPED_SAME_PATH,
            source_path=source,
            target_path=source,
            reason="already in the correct location",
            dry_run=dry_run,
        )

    @classmethod
    def failed(
        cls,
        source: Path,
        reason: str,
        error: ErrorKind = ErrorKind.UNEXPECTED,
        target: Optional[Path] = None,
        dry_run: bool = False,
    ) -> "MoveOutcome":
        return cls(
            kind=OutcomeKind.FAILED,
            source_path=source,
            target_path=target,
            reason=reason,
            error=error,
            dry_run=dry_run,
        )

    @property
    def relocated(self) -> bool:
        """True if the file was (or would be) relocated."""
        return self.kind in (OutcomeKind.MOVED, OutcomeKind.RENAMED)

    @property
    def skipped(self) -> bool:
        return self.kind in (
            OutcomeKind.SKIPPED_IDENTICAL,
            OutcomeKind.SKIPPED_SAME_PATH,
        )


class OrganizationResult(BaseModel):
    """Result of an organization run."""

    total_files: int = 0
    dry_run: bool = False
    outcomes: List[MoveOutcome] = Field(default_factory=list)

    def add(self, outcome: MoveOutcome) -> None:
        self.outcomes.append(outcome)

    def count(self, kind: OutcomeKind) -> int:
        return sum(1 for outcome in self.outcomes if outcome.kind == kind)

    @property
    def moved(self) -> int:
        return self.count(OutcomeKind.MOVED)

    @property
    def renamed(self) -> int:
        return self.count(OutcomeKind.RENAMED)

    @property
    def skipped(self) -> int:
        return self.count(OutcomeKind.SKIPPED_IDENTICAL) + self.count(
            OutcomeKind.SKIPPED_SAME_PATH
        )

    @property
    def failed(self) -> int:
        return self.count(OutcomeKind.FAILED)

    @property
    def errors(self) -> List[str]:
        """Human readable failure lines."""
        return [
            f"{outcome.source_path}: {outcome.reason}"
            for outcome in self.outcomes
            if outcome.kind == OutcomeKind.FAILED
        ]
