"""Organizer configuration."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .types import SizeThresholds, TimeAttribute


class Settings(BaseSettings):
    """Default run settings loaded from environment variables."""

    # Timestamp used for the date directories
    time_attribute: TimeAttribute = TimeAttribute.CREATION

    # Size thresholds in megabytes
    small_mb: int = 1
    medium_mb: int = 10

    model_config = SettingsConfigDict(
        env_prefix="META_ORGANIZER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra fields from .env
    )

    def size_thresholds(
        self, small_mb: Optional[int] = None, medium_mb: Optional[int] = None
    ) -> SizeThresholds:
        """
        Thresholds in bytes.

        Args:
            small_mb: Override for the small threshold in MB
            medium_mb: Override for the medium threshold in MB
        """
        return SizeThresholds.from_megabytes(
            small_mb if small_mb is not None else self.small_mb,
            medium_mb if medium_mb is not None else self.medium_mb,
        )


def get_settings() -> Settings:
    """Load settings from the current environment."""
    return Settings()
