"""
Logging setup shared by the API server and the CLI.

One JSON object per line, with the current request/resource ids pulled
from thread-local context, a per-key rate limit, and quieter third-party
loggers.
"""

import json
import logging
import threading
import time
from collections import defaultdict, deque
from datetime import datetime, timezone
from typing import Deque, Dict, Optional, Set, TextIO

# Per-thread correlation ids (one server thread serves one request at a time)
_local = threading.local()

# Rendered right after ts/lvl/context, in this order
_ORDERED_FIELDS = ('stage', 'event', 'outcome', 'dur_ms', 'detail')
# Scraper-specific fields, rendered next
_CONTEXT_FIELDS = ('kind', 'marker', 'status_code', 'attempt')

_LOGRECORD_ATTRS = frozenset(vars(logging.LogRecord('', 0, '', 0, '', (), None))) | {
    'message', 'asctime', 'taskName',
}
_RESERVED = _LOGRECORD_ATTRS | {'ts', 'lvl', 'request_id', 'resource_id'} | set(_ORDERED_FIELDS) | set(_CONTEXT_FIELDS)

_NOISY_LIBRARIES = ('urllib3', 'requests', 'werkzeug')


def _context() -> Dict[str, str]:
    if not hasattr(_local, 'context'):
        _local.context = {}
    return _local.context


def set_request_ctx(request_id: Optional[str] = None, resource_id: Optional[str] = None):
    """
    Attach correlation ids to every log line emitted by this thread.

    Args:
        request_id: Id of the API request (or CLI run) being served
        resource_id: Video, playlist or channel id being scraped
    """
    context = _context()
    if request_id is not None:
        context['request_id'] = request_id
    if resource_id is not None:
        context['resource_id'] = resource_id


def clear_request_ctx():
    _context().clear()


def get_request_ctx() -> Dict[str, str]:
    return dict(_context())


def _timestamp(created: float) -> str:
    dt = datetime.fromtimestamp(created, tz=timezone.utc)
    return dt.strftime('%Y-%m-%dT%H:%M:%S') + f'.{dt.microsecond // 1000:03d}Z'


class JsonFormatter(logging.Formatter):
    """
    Single-line JSON with a stable key order:
    ts, lvl, request_id, resource_id, stage, event, outcome, dur_ms, detail,
    kind, marker, status_code, attempt, then any other ``extra`` fields.
    None values are left out.
    """

    def format(self, record: logging.LogRecord) -> str:
        try:
            line = {'ts': _timestamp(record.created), 'lvl': record.levelname}
            line.update(get_request_ctx())

            for name in _ORDERED_FIELDS + _CONTEXT_FIELDS:
                value = getattr(record, name, None)
                if value is not None:
                    line[name] = value

            for name, value in record.__dict__.items():
                if name in _RESERVED or name.startswith('_'):
                    continue
                if value is not None and not callable(value):
                    line[name] = value

            message = record.getMessage()
            if message and 'detail' not in line:
                line['detail'] = message

            if record.exc_info:
                line['exc'] = self.formatException(record.exc_info)

            return json.dumps(line, separators=(',', ':'), ensure_ascii=False, default=str)

        except Exception:
            return json.dumps({
                'ts': _timestamp(time.time()),
                'lvl': record.levelname,
                'detail': str(record.msg),
            })


class RateLimitFilter(logging.Filter):
    """
    Let through at most ``per_key`` records per key in any ``window_sec``
    window. The first record over the limit passes with a ``[suppressed]``
    marker, the rest are dropped until the window frees up.

    Keys combine level, event name and message, since structured events
    are logged with an empty message.
    """

    def __init__(self, per_key: int = 5, window_sec: int = 60):
        super().__init__()
        self.per_key = per_key
        self.window_sec = window_sec
        self.seen: Dict[str, Deque[float]] = defaultdict(deque)
        self.suppressed: Set[str] = set()
        self._lock = threading.Lock()

    @staticmethod
    def key_for(record: logging.LogRecord) -> str:
        event = getattr(record, 'event', None) or ''
        return f"{record.levelname}:{event}:{record.getMessage()[:100]}"

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            key = self.key_for(record)
            now = time.time()

            with self._lock:
                stamps = self.seen[key]
                while stamps and stamps[0] <= now - self.window_sec:
                    stamps.popleft()

                if len(stamps) < self.per_key:
                    stamps.append(now)
                    self.suppressed.discard(key)
                    return True

                if key in self.suppressed:
                    return False

                self.suppressed.add(key)
                record.msg = f"{record.getMessage()} [suppressed]"
                record.args = ()
                return True

        except Exception:
            # Never lose a record because of the filter itself
            return True


def configure_logging(log_level: str = "INFO", use_json: bool = True,
                      stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Replace the root handlers with one stream handler.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR (unknown names mean INFO)
        use_json: JSON lines with rate limiting, or plain text lines
        stream: Output stream (default: stderr)

    Returns:
        The root logger
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    handler = logging.StreamHandler(stream)
    if use_json:
        handler.setFormatter(JsonFormatter())
        handler.addFilter(RateLimitFilter())
    else:
        handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    root.addHandler(handler)

    _suppress_library_noise()
    return root


def _suppress_library_noise():
    for name in _NOISY_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str = None) -> logging.Logger:
    return logging.getLogger(name)
