"""URL builders for the YouTube pages the scraper reads."""

from typing import Optional
from urllib.parse import urlencode, urljoin, urlparse

from error_handler import InvalidRequestError

YT_BASE_URL = "https://www.youtube.com"
YT_RESULTS_URL = f"{YT_BASE_URL}/results"


# Canonical record URLs (no locale parameters)

def watch_url(video_id: Optional[str]) -> Optional[str]:
    return f"{YT_BASE_URL}/watch?v={video_id}" if video_id else None


def playlist_url(list_id: Optional[str]) -> Optional[str]:
    return f"{YT_BASE_URL}/playlist?list={list_id}" if list_id else None


def channel_url(channel_id: Optional[str]) -> Optional[str]:
    return f"{YT_BASE_URL}/channel/{channel_id}" if channel_id else None


def absolute_url(path: Optional[str]) -> Optional[str]:
    """Resolve a site-relative path ("/@handle") against youtube.com."""
    if not path or not isinstance(path, str):
        return None
    return urljoin(f"{YT_BASE_URL}/", path)


# Page URLs fetched by the services

def build_search_url(query: str, hl: str, gl: str) -> str:
    params = urlencode({"search_query": query, "hl": hl, "gl": gl})
    return f"{YT_RESULTS_URL}?{params}"


def build_watch_url(video_id: str, hl: str, gl: str) -> str:
    params = urlencode({"v": video_id, "hl": hl, "gl": gl})
    return f"{YT_BASE_URL}/watch?{params}"


def build_playlist_url(list_id: str, hl: str, gl: str) -> str:
    params = urlencode({"list": list_id, "hl": hl, "gl": gl})
    return f"{YT_BASE_URL}/playlist?{params}"


def build_channel_url(channel_id_or_handle: str, hl: str, gl: str) -> str:
    """
    Build the ``/videos`` tab URL for a channel given in any common form:
    a full URL, an ``@handle``, a ``UC...`` channel id or a legacy name.
    """
    raw = str(channel_id_or_handle or "").strip()
    if not raw:
        raise InvalidRequestError("channel id/handle is required")

    if raw.startswith("http://") or raw.startswith("https://"):
        base_path = urlparse(raw).path
    elif raw.startswith("@"):
        base_path = f"/{raw}"
    elif raw.startswith("UC"):
        base_path = f"/channel/{raw}"
    else:
        base_path = f"/{raw}"

    if not base_path.endswith("/videos"):
        base_path = f"{base_path.rstrip('/')}/videos"

    params = urlencode({"hl": hl, "gl": gl})
    return f"{YT_BASE_URL}{base_path}?{params}"
