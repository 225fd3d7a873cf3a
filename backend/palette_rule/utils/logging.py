"""
Palette Rule Structured Logging
Centralized loguru configuration plus structured records for analysis runs.
"""
import sys
from typing import Dict, Any, Optional

from loguru import logger

from palette_rule.config import config


LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name} | {message} | {extra}"


class StructuredLogger:
    """Structured logger for palette analysis runs."""

    def __init__(self, level: Optional[str] = None):
        self.level = level or config.LOG_LEVEL
        self._sink_id = self._configure_logger()

    def _configure_logger(self) -> int:
        """Replace loguru's default handler with a single stdout sink."""
        logger.remove()
        return logger.add(sys.stdout, format=LOG_FORMAT, level=self.level, serialize=False)

    def _emit(self, level: str, message: str, extra: Optional[Dict[str, Any]]):
        bound = logger.bind(**extra) if extra else logger
        bound.opt(depth=2).log(level, message)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("INFO", message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("WARNING", message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("ERROR", message, extra)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("DEBUG", message, extra)

    def analysis_summary(self, result, follows_rule: Optional[bool] = None):
        """Log one structured record describing a finished analysis."""
        extra = {
            "total_pixels": result.total_pixels,
            "stride": result.stride,
            "opaque_samples": result.opaque_samples,
            "total_colors": result.total_colors,
            "cluster_count": result.cluster_count,
            "palette": [f"{c.color}={c.percentage:.1f}%" for c in result.colors],
        }
        if follows_rule is not None:
            extra["follows_rule"] = follows_rule
        self._emit("INFO", "Palette analysis complete", extra)


# Global logger instance
_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Get or create global logger instance."""
    global _logger
    if _logger is None:
        _logger = StructuredLogger()
    return _logger
