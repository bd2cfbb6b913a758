"""
Builders mapping raw renderer nodes to canonical records.

Each builder is a pure function of one renderer dict. Any missing or
mistyped field degrades to its default so a single odd renderer never
aborts the rest of a page.
"""

from typing import Any, Dict, List, Optional

from field_normalizers import dig, first_run, normalize_thumbnails, parse_count, parse_text
from models import (
    CaptionTrack,
    ChannelRecord,
    ChannelRef,
    CompactVideo,
    PlaylistItem,
    PlaylistRecord,
    VideoRecord,
)
from youtube_urls import absolute_url, channel_url, playlist_url, watch_url


def _node(renderer: Any) -> Dict[str, Any]:
    return renderer if isinstance(renderer, dict) else {}


def _str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def resolve_owner(text_field: Any) -> Optional[ChannelRef]:
    """
    Channel reference from the first run of an owner/byline text field.

    The run's navigation endpoint gives the channel id and URL; either may
    be missing. No run at all means no channel reference.
    """
    run = first_run(text_field)
    if run is None:
        return None

    endpoint = run.get("navigationEndpoint")
    owner_path = (
        _str(dig(endpoint, "browseEndpoint", "canonicalBaseUrl"))
        or _str(dig(endpoint, "commandMetadata", "webCommandMetadata", "url"))
    )
    return ChannelRef(
        name=_str(run.get("text")),
        id=_str(dig(endpoint, "browseEndpoint", "browseId")),
        url=absolute_url(owner_path),
    )


def is_live(renderer: Dict[str, Any]) -> bool:
    """True if any badge label contains "LIVE", ignoring case."""
    badges = renderer.get("badges")
    if not isinstance(badges, list):
        return False
    for badge in badges:
        label = dig(badge, "metadataBadgeRenderer", "label")
        if isinstance(label, str) and "LIVE" in label.upper():
            return True
    return False


def parse_video(renderer: Any) -> VideoRecord:
    """videoRenderer / gridVideoRenderer -> VideoRecord."""
    renderer = _node(renderer)
    video_id = _str(renderer.get("videoId"))
    owner = (
        resolve_owner(renderer.get("ownerText"))
        or resolve_owner(renderer.get("longBylineText"))
        or resolve_owner(renderer.get("shortBylineText"))
    )
    return VideoRecord(
        id=video_id,
        title=parse_text(renderer.get("title")),
        url=watch_url(video_id),
        channel=owner,
        description=parse_text(renderer.get("descriptionSnippet")),
        duration=parse_text(renderer.get("lengthText")),
        views=parse_count(renderer.get("viewCountText")),
        published_at=parse_text(renderer.get("publishedTimeText")),
        is_live=is_live(renderer),
        thumbnails=normalize_thumbnails(renderer.get("thumbnail")),
    )


def parse_compact_video(renderer: Any) -> CompactVideo:
    """compactVideoRenderer (watch page sidebar) -> CompactVideo."""
    renderer = _node(renderer)
    video_id = _str(renderer.get("videoId"))
    return CompactVideo(
        id=video_id,
        title=parse_text(renderer.get("title")),
        url=watch_url(video_id),
        channel=resolve_owner(renderer.get("shortBylineText")),
        duration=parse_text(renderer.get("lengthText")),
        views=parse_count(renderer.get("viewCountText")),
        published_at=parse_text(renderer.get("publishedTimeText")),
        thumbnails=normalize_thumbnails(renderer.get("thumbnail")),
    )


def parse_playlist_item(renderer: Any) -> PlaylistItem:
    """playlistVideoRenderer -> PlaylistItem."""
    renderer = _node(renderer)
    video_id = _str(renderer.get("videoId"))
    return PlaylistItem(
        id=video_id,
        title=parse_text(renderer.get("title")),
        url=watch_url(video_id),
        index=parse_text(renderer.get("index")),
        duration=parse_text(renderer.get("lengthText")),
        channel=resolve_owner(renderer.get("shortBylineText")),
        thumbnails=normalize_thumbnails(renderer.get("thumbnail")),
    )


def parse_playlist(renderer: Any) -> PlaylistRecord:
    """playlistRenderer (search results) -> PlaylistRecord."""
    renderer = _node(renderer)
    list_id = _str(renderer.get("playlistId"))
    return PlaylistRecord(
        id=list_id,
        title=parse_text(renderer.get("title")),
        url=playlist_url(list_id),
        channel=resolve_owner(renderer.get("shortBylineText")),
        video_count=parse_count(renderer.get("videoCountText") or renderer.get("videoCount")),
        thumbnails=normalize_thumbnails(dig(renderer, "thumbnails", 0)),
    )


def parse_channel(renderer: Any) -> ChannelRecord:
    """channelRenderer (search results) -> ChannelRecord."""
    renderer = _node(renderer)
    channel_id = _str(renderer.get("channelId"))
    return ChannelRecord(
        id=channel_id,
        title=parse_text(renderer.get("title")),
        url=channel_url(channel_id),
        description=parse_text(renderer.get("descriptionSnippet")),
        subscribers=parse_text(renderer.get("subscriberCountText")),
        video_count=parse_count(renderer.get("videoCountText")),
        thumbnails=normalize_thumbnails(renderer.get("thumbnail")),
    )


def parse_caption_track(track: Any) -> CaptionTrack:
    track = _node(track)
    kind = _str(track.get("kind"))
    name = track.get("name")
    return CaptionTrack(
        language_code=_str(track.get("languageCode")),
        name=parse_text(name) if name else None,
        kind=kind,
        is_auto_generated=kind == "asr",
        url=_str(track.get("baseUrl")),
    )


def parse_caption_tracks(player_response: Any) -> List[CaptionTrack]:
    """Caption tracks listed in ytInitialPlayerResponse, in source order."""
    tracks = dig(player_response, "captions", "playerCaptionsTracklistRenderer", "captionTracks")
    if not isinstance(tracks, list):
        return []
    return [parse_caption_track(track) for track in tracks]
