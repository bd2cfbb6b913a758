"""
Error taxonomy and API error mapping for the scraper stack.

Extraction failures, upstream failures and bad input each get their own
exception type; shape mismatches inside the JSON tree are never errors.
"""
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple


class ScraperError(Exception):
    """Base class for every error raised by the scraper services."""
    pass


class EmbeddedDataNotFound(ScraperError):
    """The document did not contain a parseable embedded JSON payload."""

    def __init__(self, payload_name: str, message: Optional[str] = None):
        self.payload_name = payload_name
        super().__init__(message or f"unable to parse {payload_name}")


class UpstreamError(ScraperError):
    """Transport failure or non-200 response from YouTube."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class InvalidRequestError(ScraperError, ValueError):
    """Caller supplied an unusable argument (empty query, missing id...)."""
    pass


class ErrorHandler:
    """Centralized API error handling with per-endpoint counters"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.error_counts: Dict[str, int] = {}
        self.last_errors: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def handle_api_error(self, endpoint: str, error: Exception) -> Tuple[Dict[str, Any], int]:
        """Log an API error and return the JSON payload and HTTP status for it"""
        error_key = f"api_{endpoint}"
        with self._lock:
            self.error_counts[error_key] = self.error_counts.get(error_key, 0) + 1
            self.last_errors[error_key] = {
                "error": str(error),
                "error_type": type(error).__name__,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
            count = self.error_counts[error_key]

        status = 400 if isinstance(error, InvalidRequestError) else 502
        log = self.logger.warning if status == 400 else self.logger.error
        log(
            f"api_error endpoint={endpoint}",
            extra={
                "event": "api_error",
                "outcome": "error",
                "error_type": type(error).__name__,
                "status_code": status,
                "error_count": count,
                "detail": str(error),
            },
        )

        return {"error": str(error) or "upstream error"}, status

    def get_error_stats(self) -> Dict[str, Any]:
        """Get error statistics for monitoring"""
        with self._lock:
            return {
                "error_counts": dict(self.error_counts),
                "last_errors": dict(self.last_errors),
                "total_errors": sum(self.error_counts.values()),
            }


# Global error handler instance
error_handler = ErrorHandler()


def handle_api_error(endpoint: str, error: Exception) -> Tuple[Dict[str, Any], int]:
    return error_handler.handle_api_error(endpoint, error)
