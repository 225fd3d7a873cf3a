"""
Palette Rule Configuration
Manages environment variables and defaults for the analysis service.
"""
import os


class Config:
    """Configuration class for Palette Rule services."""

    # Logging and observability
    LOG_LEVEL: str = os.environ.get("PALETTE_RULE_LOG_LEVEL", "INFO")
    METRICS_ENABLED: bool = bool(int(os.environ.get("PALETTE_RULE_METRICS_ENABLED", "1")))
    METRICS_HISTORY: int = int(os.environ.get("PALETTE_RULE_METRICS_HISTORY", "1000"))

    # Source admission limits, enforced by the upload collaborator
    MAX_FILE_MB: int = int(os.environ.get("PALETTE_RULE_MAX_FILE_MB", "5"))

    # Supported image formats
    SUPPORTED_MIME_TYPES = ["image/jpeg", "image/png"]
    SUPPORTED_EXTENSIONS = {".jpg", ".jpeg", ".png"}

    @classmethod
    def validate_mime_type(cls, mime_type: str) -> bool:
        """Validate source image MIME type."""
        return mime_type in cls.SUPPORTED_MIME_TYPES

    @classmethod
    def validate_file_size(cls, size_bytes: int) -> bool:
        """Validate source image size against MAX_FILE_MB."""
        return 0 <= size_bytes <= cls.MAX_FILE_MB * 1024 * 1024


# Global config instance
config = Config()
