"""
YouTube search by scraping the results page.

The results page embeds its content as ytInitialData; renderers for the
requested kinds are collected from it, mapped to records, deduplicated
and cut to the requested limit.
"""

from typing import Any, Callable, List, Optional, Sequence, Tuple

from embedded_json import require_payload
from error_handler import InvalidRequestError
from field_normalizers import to_int
from log_events import StageTimer, evt
from logging_setup import get_logger
from models import SearchResult
from record_builders import parse_channel, parse_playlist, parse_video
from result_assembler import assemble_results
from scraper_config import SearchOptions
from tree_walker import collect_by_renderer_key
from youtube_http import YouTubePageFetcher
from youtube_urls import build_search_url

logger = get_logger(__name__)

# Renderer keys per record kind, in the order results are emitted for "all".
SEARCH_RENDERERS: Sequence[Tuple[str, Sequence[str], Callable[[Any], Any]]] = (
    ("video", ("videoRenderer", "gridVideoRenderer"), parse_video),
    ("playlist", ("playlistRenderer",), parse_playlist),
    ("channel", ("channelRenderer",), parse_channel),
)


def collect_search_records(initial_data: Any, kind: str) -> List[Any]:
    """Build records for every renderer of the selected kind(s), unfiltered."""
    records = []
    for record_kind, renderer_keys, builder in SEARCH_RENDERERS:
        if kind not in (record_kind, "all"):
            continue
        for renderer_key in renderer_keys:
            records.extend(builder(node) for node in collect_by_renderer_key(initial_data, renderer_key))
    return records


def parse_search_page(html: str, query: str, options: SearchOptions) -> SearchResult:
    """Turn a search results page into a SearchResult."""
    initial_data = require_payload(html, "initial_data")

    candidates = collect_search_records(initial_data, options.kind)
    items = assemble_results(candidates, options.limit)

    estimated = to_int(initial_data.get("estimatedResults"))
    evt("search_parsed", kind=options.kind, candidates=len(candidates), count=len(items))

    return SearchResult(
        query=query,
        estimated_results=estimated if estimated and estimated > 0 else None,
        items=items,
    )


def search_youtube(query: str, limit: Any = None, kind: Optional[str] = None,
                   hl: Optional[str] = None, gl: Optional[str] = None,
                   fetcher: Optional[YouTubePageFetcher] = None) -> SearchResult:
    """
    Search YouTube and return up to ``limit`` records.

    Args:
        query: Search terms
        limit: Max records (default 10; invalid values fall back to it)
        kind: "video", "playlist", "channel" or "all" (default "video")
        hl, gl: Interface language / region sent to YouTube
        fetcher: Page fetcher to use; a new one is created when omitted

    Raises:
        InvalidRequestError: empty query
        UpstreamError: page could not be fetched
        EmbeddedDataNotFound: page had no parseable ytInitialData
    """
    if not query or not isinstance(query, str):
        raise InvalidRequestError("query must be a non-empty string")

    options = SearchOptions.build(limit=limit, kind=kind, hl=hl, gl=gl)
    fetcher = fetcher or YouTubePageFetcher()

    with StageTimer("search", kind=options.kind, limit=options.limit):
        html = fetcher.fetch_html(build_search_url(query, options.hl, options.gl), hl=options.hl)
        return parse_search_page(html, query, options)
