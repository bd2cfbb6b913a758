"""
Detail pages: a single video, a playlist, or a channel's videos tab.

Video pages are read from ytInitialPlayerResponse (required) plus
ytInitialData for the related sidebar (optional). Playlist and channel
pages only need ytInitialData.
"""

from typing import Any, Dict, Optional
from urllib.parse import urlparse

from embedded_json import extract_initial_data, require_payload
from error_handler import InvalidRequestError
from field_normalizers import dig, normalize_thumbnails, parse_count, parse_text, to_int
from log_events import StageTimer, evt
from logging_setup import get_logger, set_request_ctx
from models import ChannelDetails, ChannelRef, PlaylistDetails, VideoDetails
from record_builders import (
    parse_caption_tracks,
    parse_compact_video,
    parse_playlist_item,
    parse_video,
    resolve_owner,
)
from result_assembler import assemble_results
from scraper_config import DEFAULT_CHANNEL_LIMIT, DEFAULT_PLAYLIST_LIMIT, DetailOptions
from tree_walker import collect_by_renderer_key, first_renderer
from youtube_http import YouTubePageFetcher
from youtube_urls import (
    build_channel_url,
    build_playlist_url,
    build_watch_url,
    channel_url,
    playlist_url,
    watch_url,
)

logger = get_logger(__name__)


def _dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _require_id(value: Any, message: str) -> str:
    if not value or not isinstance(value, str):
        raise InvalidRequestError(message)
    return value


# --- Page parsers (pure) ---

def parse_video_page(html: str, video_id: str, options: DetailOptions) -> VideoDetails:
    player_response = require_payload(html, "initial_player_response")
    initial_data = extract_initial_data(html)

    details = _dict(player_response.get("videoDetails"))
    micro = _dict(dig(player_response, "microformat", "playerMicroformatRenderer"))

    related = []
    if initial_data is not None:
        related = assemble_results(
            (parse_compact_video(node) for node in collect_by_renderer_key(initial_data, "compactVideoRenderer")),
            options.related_limit,
        )

    resolved_id = _str(details.get("videoId")) or video_id
    author_channel_id = _str(details.get("channelId"))
    keywords = details.get("keywords")

    evt("video_parsed", related=len(related), has_initial_data=initial_data is not None)

    return VideoDetails(
        id=resolved_id,
        url=watch_url(resolved_id),
        title=_str(details.get("title")),
        description=_str(details.get("shortDescription")),
        channel=ChannelRef(
            name=_str(details.get("author")),
            id=author_channel_id,
            url=channel_url(author_channel_id),
        ),
        duration_seconds=to_int(details.get("lengthSeconds")),
        view_count=to_int(details.get("viewCount")),
        is_live=bool(details.get("isLiveContent")),
        keywords=[k for k in keywords if isinstance(k, str)] if isinstance(keywords, list) else [],
        thumbnails=normalize_thumbnails(details.get("thumbnail")),
        publish_date=_str(micro.get("publishDate")),
        upload_date=_str(micro.get("uploadDate")),
        category=_str(micro.get("category")),
        captions=parse_caption_tracks(player_response),
        related=related,
    )


def parse_playlist_page(html: str, list_id: str, options: DetailOptions) -> PlaylistDetails:
    initial_data = require_payload(html, "initial_data")

    metadata = _dict(dig(initial_data, "metadata", "playlistMetadataRenderer"))
    primary_info = first_renderer(initial_data, "playlistSidebarPrimaryInfoRenderer")
    secondary_info = first_renderer(initial_data, "playlistSidebarSecondaryInfoRenderer")
    owner_title = dig(secondary_info, "videoOwner", "videoOwnerRenderer", "title")

    videos = assemble_results(
        (parse_playlist_item(node) for node in collect_by_renderer_key(initial_data, "playlistVideoRenderer")),
        options.listing_limit(DEFAULT_PLAYLIST_LIMIT),
    )

    continuation = first_renderer(initial_data, "continuationItemRenderer")
    token = _str(dig(continuation, "continuationEndpoint", "continuationCommand", "token"))

    stats = primary_info.get("stats")
    stats = [text for text in (parse_text(s) for s in stats) if text] if isinstance(stats, list) else []

    evt("playlist_parsed", count=len(videos), has_continuation=token is not None)

    return PlaylistDetails(
        id=list_id,
        url=playlist_url(list_id),
        title=_str(metadata.get("title")),
        description=_str(metadata.get("description")),
        channel=resolve_owner(owner_title),
        stats=stats,
        video_count=len(videos),
        videos=videos,
        continuation_token=token,
    )


def parse_channel_page(html: str, options: DetailOptions) -> ChannelDetails:
    initial_data = require_payload(html, "initial_data")

    metadata = _dict(dig(initial_data, "metadata", "channelMetadataRenderer"))
    header = first_renderer(initial_data, "c4TabbedHeaderRenderer")

    videos = assemble_results(
        (parse_video(node) for node in collect_by_renderer_key(initial_data, "videoRenderer")),
        options.listing_limit(DEFAULT_CHANNEL_LIMIT),
    )

    vanity = _str(metadata.get("vanityChannelUrl"))
    evt("channel_parsed", count=len(videos))

    return ChannelDetails(
        id=_str(metadata.get("externalId")),
        title=_str(metadata.get("title")) or parse_text(header.get("title")) or None,
        handle=(urlparse(vanity).path.strip("/") or None) if vanity else None,
        url=_str(metadata.get("channelUrl")),
        description=_str(metadata.get("description")),
        avatars=normalize_thumbnails(metadata.get("avatar")),
        subscribers=parse_text(header.get("subscriberCountText")),
        videos_count=parse_count(header.get("videosCountText")),
        videos=videos,
    )


# --- Fetching entry points ---

def get_video_details(video_id: str, hl: Optional[str] = None, gl: Optional[str] = None,
                      related_limit: Any = None,
                      fetcher: Optional[YouTubePageFetcher] = None) -> VideoDetails:
    video_id = _require_id(video_id, "video id is required")
    options = DetailOptions.build(hl=hl, gl=gl, related_limit=related_limit)
    fetcher = fetcher or YouTubePageFetcher()
    set_request_ctx(resource_id=video_id)

    with StageTimer("video_details", related_limit=options.related_limit):
        html = fetcher.fetch_html(build_watch_url(video_id, options.hl, options.gl), hl=options.hl)
        return parse_video_page(html, video_id, options)


def get_playlist_details(list_id: str, hl: Optional[str] = None, gl: Optional[str] = None,
                         limit: Any = None,
                         fetcher: Optional[YouTubePageFetcher] = None) -> PlaylistDetails:
    list_id = _require_id(list_id, "playlist id is required")
    options = DetailOptions.build(hl=hl, gl=gl, limit=limit)
    fetcher = fetcher or YouTubePageFetcher()
    set_request_ctx(resource_id=list_id)

    with StageTimer("playlist_details", limit=options.listing_limit(DEFAULT_PLAYLIST_LIMIT)):
        html = fetcher.fetch_html(build_playlist_url(list_id, options.hl, options.gl), hl=options.hl)
        return parse_playlist_page(html, list_id, options)


def get_channel_details(channel_id_or_handle: str, hl: Optional[str] = None, gl: Optional[str] = None,
                        limit: Any = None,
                        fetcher: Optional[YouTubePageFetcher] = None) -> ChannelDetails:
    channel_id_or_handle = _require_id(channel_id_or_handle, "channel id/handle is required")
    options = DetailOptions.build(hl=hl, gl=gl, limit=limit)
    url = build_channel_url(channel_id_or_handle, options.hl, options.gl)
    fetcher = fetcher or YouTubePageFetcher()
    set_request_ctx(resource_id=channel_id_or_handle)

    with StageTimer("channel_details", limit=options.listing_limit(DEFAULT_CHANNEL_LIMIT)):
        html = fetcher.fetch_html(url, hl=options.hl)
        return parse_channel_page(html, options)
