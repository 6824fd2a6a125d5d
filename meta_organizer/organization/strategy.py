"""
Organization strategy for file placement.

Defines size classification and the destination directory layout:
<extension>/<YYYY>/<MM>/<DD>/<size category>/<filename>
"""

from pathlib import Path
from typing import Optional

import arrow
from pydantic import BaseModel, ConfigDict, Field

from ..core.timestamps import TimestampInfo
from ..core.types import FileRecord, SizeCategory, SizeThresholds

NO_EXTENSION = "no_extension"


def classify_size(byte_count: int, thresholds: SizeThresholds) -> SizeCategory:
    """
    Classify a byte count into a size category.

    Args:
        byte_count: File size in bytes
        thresholds: Category boundaries

    Returns:
        SMALL below small_max, MEDIUM below medium_max, LARGE otherwise
    """
    if byte_count < thresholds.small_max:
        return SizeCategory.SMALL
    elif byte_count < thresholds.medium_max:
        return SizeCategory.MEDIUM
    else:
        return SizeCategory.LARGE


class PathPlanner(BaseModel):
    """Plan where a file belongs in the organized tree."""

    thresholds: SizeThresholds = Field(
        default_factory=SizeThresholds,
        description="Size category boundaries",
    )

    no_extension_bucket: str = Field(
        default=NO_EXTENSION,
        description="Directory name for files without an extension",
    )

    model_config = ConfigDict(frozen=True)

    def extension_bucket(self, path: Path) -> str:
        """Extension without the leading dot, or the no-extension bucket."""
        suffix = Path(path).suffix
        return suffix[1:] if suffix else self.no_extension_bucket

    def date_directory(self, timestamp: arrow.Arrow) -> Path:
        """YYYY/MM/DD of the timestamp in the local timezone."""
        local = arrow.get(timestamp).to("local")
        return Path(local.format("YYYY"), local.format("MM"), local.format("DD"))

    def classify(self, byte_count: int) -> SizeCategory:
        return classify_size(byte_count, self.thresholds)

    def plan(
        self, path: Path, timestamp: arrow.Arrow, size_category: SizeCategory
    ) -> Path:
        """
        Get the destination of a file relative to the source directory.

        Args:
            path: File being organized
            timestamp: Resolved timestamp of the file
            size_category: Size category of the file

        Returns:
            Relative path <extension>/<YYYY>/<MM>/<DD>/<category>/<filename>
        """
        path = Path(path)
        return (
            Path(self.extension_bucket(path))
            / self.date_directory(timestamp)
            / SizeCategory(size_category).value
            / path.name
        )

    def get_target_path(
        self,
        base_path: Path,
        path: Path,
        timestamp: arrow.Arrow,
        size_category: SizeCategory,
    ) -> Path:
        """Destination of a file rooted under base_path."""
        return Path(base_path) / self.plan(path, timestamp, size_category)

    def build_record(
        self,
        base_path: Path,
        path: Path,
        timestamp_info: TimestampInfo,
        size_bytes: Optional[int],
    ) -> FileRecord:
        """
        Build the file record for one file.

        Args:
            base_path: Source directory the tree is rooted under
            path: File being organized
            timestamp_info: Resolved timestamp
            size_bytes: File size (None is treated as 0)

        Returns:
            FileRecord with size category and destination filled in
        """
        size_bytes = size_bytes or 0
        size_category = self.classify(size_bytes)
        destination = self.get_target_path(
            base_path, path, timestamp_info.timestamp, size_category
        )
        return FileRecord(
            source_path=Path(path),
            timestamp=timestamp_info.timestamp.datetime,
            time_source=timestamp_info.source,
            size_bytes=size_bytes,
            size_category=size_category,
            destination=destination,
            warnings=list(timestamp_info.warnings),
        )
