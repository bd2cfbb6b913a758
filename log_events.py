"""
Structured events on top of the JSON log format.

`evt` emits one named event; `StageTimer` wraps a scraping stage
(search, video_details...) with a start event and a timed result event.
"""

import logging
import time
from typing import Optional

logger = logging.getLogger('tubemeta.events')


def evt(event: str, **fields) -> None:
    """
    Log ``event`` at INFO with ``fields`` as top-level JSON keys.

        evt("page_fetch", outcome="success", status_code=200, dur_ms=412)
    """
    logger.info("", extra={"event": event, **fields})


class StageTimer:
    """
    Time a stage and report how it ended.

        with StageTimer("search", kind="video", limit=10):
            ...

    Emits ``stage_start`` on entry and ``stage_result`` on exit with
    ``outcome`` ("success"/"error") and ``dur_ms``. Exceptions are never
    swallowed.
    """

    def __init__(self, stage: str, **context_fields):
        self.stage = stage
        self.context_fields = context_fields
        self.started: Optional[float] = None

    def elapsed_ms(self) -> int:
        if self.started is None:
            return 0
        return int((time.time() - self.started) * 1000)

    def __enter__(self):
        self.started = time.time()
        evt("stage_start", stage=self.stage, **self.context_fields)
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        fields = dict(self.context_fields)
        fields.update(stage=self.stage, dur_ms=self.elapsed_ms())
        if exc_type is None:
            fields["outcome"] = "success"
        else:
            fields["outcome"] = "error"
            fields["detail"] = f"{exc_type.__name__}: {exc_value}"
        evt("stage_result", **fields)
        return False


def time_stage(stage: str, **context_fields) -> StageTimer:
    return StageTimer(stage, **context_fields)


_NETWORK_HINTS = ("connection", "timeout", "network", "dns", "ssl")


def classify_error_type(exception: Exception) -> str:
    """
    Map an exception to the ``error_type`` value used in log events:
    invalid_request, payload_not_found, upstream_error, network_error
    or unknown_error.
    """
    # Lazy import keeps this module free of service imports
    from error_handler import EmbeddedDataNotFound, InvalidRequestError, UpstreamError

    known = (
        (InvalidRequestError, "invalid_request"),
        (EmbeddedDataNotFound, "payload_not_found"),
        (UpstreamError, "upstream_error"),
    )
    for exc_type, label in known:
        if isinstance(exception, exc_type):
            return label

    text = str(exception).lower()
    if any(hint in text for hint in _NETWORK_HINTS):
        return "network_error"
    return "unknown_error"
