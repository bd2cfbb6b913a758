"""
Typed records produced by the scraper.

Every field is optional in the source data; builders fill missing text
with "" and missing scalars with None. ``to_dict`` gives the JSON shape
served by the API and printed by the CLI.
"""
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


class RecordMixin:
    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Thumbnail(RecordMixin):
    url: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


@dataclass
class ChannelRef(RecordMixin):
    name: Optional[str] = None
    id: Optional[str] = None
    url: Optional[str] = None


@dataclass
class VideoRecord(RecordMixin):
    """A video from search results or a channel's video tab."""
    id: Optional[str] = None
    title: str = ""
    url: Optional[str] = None
    channel: Optional[ChannelRef] = None
    description: str = ""
    duration: str = ""
    views: Optional[int] = None
    published_at: str = ""
    is_live: bool = False
    thumbnails: List[Thumbnail] = field(default_factory=list)
    type: str = "video"


@dataclass
class CompactVideo(RecordMixin):
    """A related-video card from the watch page sidebar."""
    id: Optional[str] = None
    title: str = ""
    url: Optional[str] = None
    channel: Optional[ChannelRef] = None
    duration: str = ""
    views: Optional[int] = None
    published_at: str = ""
    thumbnails: List[Thumbnail] = field(default_factory=list)
    type: str = "video"


@dataclass
class PlaylistItem(RecordMixin):
    id: Optional[str] = None
    title: str = ""
    url: Optional[str] = None
    index: str = ""
    duration: str = ""
    channel: Optional[ChannelRef] = None
    thumbnails: List[Thumbnail] = field(default_factory=list)
    type: str = "video"


@dataclass
class PlaylistRecord(RecordMixin):
    id: Optional[str] = None
    title: str = ""
    url: Optional[str] = None
    channel: Optional[ChannelRef] = None
    video_count: Optional[int] = None
    thumbnails: List[Thumbnail] = field(default_factory=list)
    type: str = "playlist"


@dataclass
class ChannelRecord(RecordMixin):
    id: Optional[str] = None
    title: str = ""
    url: Optional[str] = None
    description: str = ""
    # Display text ("1,2 M d'abonnés"), not a number
    subscribers: str = ""
    video_count: Optional[int] = None
    thumbnails: List[Thumbnail] = field(default_factory=list)
    type: str = "channel"


@dataclass
class CaptionTrack(RecordMixin):
    language_code: Optional[str] = None
    name: Optional[str] = None
    kind: Optional[str] = None
    is_auto_generated: bool = False
    url: Optional[str] = None


@dataclass
class SearchResult(RecordMixin):
    query: str
    estimated_results: Optional[int] = None
    items: List[Any] = field(default_factory=list)


@dataclass
class VideoDetails(RecordMixin):
    id: str
    url: str
    title: Optional[str] = None
    description: Optional[str] = None
    channel: Optional[ChannelRef] = None
    duration_seconds: Optional[int] = None
    view_count: Optional[int] = None
    is_live: bool = False
    keywords: List[str] = field(default_factory=list)
    thumbnails: List[Thumbnail] = field(default_factory=list)
    publish_date: Optional[str] = None
    upload_date: Optional[str] = None
    category: Optional[str] = None
    captions: List[CaptionTrack] = field(default_factory=list)
    related: List[CompactVideo] = field(default_factory=list)
    type: str = "video"


@dataclass
class PlaylistDetails(RecordMixin):
    id: str
    url: str
    title: Optional[str] = None
    description: Optional[str] = None
    channel: Optional[ChannelRef] = None
    stats: List[str] = field(default_factory=list)
    video_count: int = 0
    videos: List[PlaylistItem] = field(default_factory=list)
    continuation_token: Optional[str] = None
    type: str = "playlist"


@dataclass
class ChannelDetails(RecordMixin):
    id: Optional[str] = None
    title: Optional[str] = None
    handle: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    avatars: List[Thumbnail] = field(default_factory=list)
    subscribers: str = ""
    videos_count: Optional[int] = None
    videos: List[VideoRecord] = field(default_factory=list)
    type: str = "channel"
