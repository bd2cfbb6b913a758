#!/usr/bin/env python3
"""
Configuration management for the YouTube page scraper.

`ScraperConfig` holds the service-wide settings loaded from environment
variables with validation and sensible defaults. Per-call options
(`SearchOptions`, `DetailOptions`) are immutable structs built once per
request from caller input, falling back to the service defaults.
"""

import math
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from logging_setup import get_logger

logger = get_logger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/132.0.0.0 Safari/537.36"
)

VALID_KINDS = ("video", "playlist", "channel", "all")

DEFAULT_SEARCH_LIMIT = 10
DEFAULT_RELATED_LIMIT = 10
DEFAULT_PLAYLIST_LIMIT = 100
DEFAULT_CHANNEL_LIMIT = 30


@dataclass(frozen=True)
class ScraperConfig:
    """Service-wide scraper settings."""

    # Locale sent to YouTube when the caller gives none
    default_hl: str = "fr"
    default_gl: str = "FR"

    # HTTP fetch settings
    request_timeout: int = 15
    fetch_retries: int = 2
    user_agent: str = DEFAULT_USER_AGENT
    consent_cookie: str = "SOCS=CAI"

    # API server settings
    host: str = "0.0.0.0"
    port: int = 3053
    max_body_bytes: int = 1_000_000

    @classmethod
    def from_env(cls) -> 'ScraperConfig':
        """Load configuration from environment variables with validation."""
        return cls(
            default_hl=os.getenv("YT_DEFAULT_HL", "fr").strip() or "fr",
            default_gl=os.getenv("YT_DEFAULT_GL", "FR").strip() or "FR",
            request_timeout=cls._parse_int_env("YT_REQUEST_TIMEOUT", 15, min_val=5, max_val=120),
            fetch_retries=cls._parse_int_env("YT_FETCH_RETRIES", 2, min_val=0, max_val=5),
            user_agent=os.getenv("YT_USER_AGENT", DEFAULT_USER_AGENT),
            consent_cookie=os.getenv("YT_CONSENT_COOKIE", "SOCS=CAI"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=cls._parse_int_env("PORT", 3053, min_val=1, max_val=65535),
            max_body_bytes=cls._parse_int_env("MAX_BODY_BYTES", 1_000_000, min_val=1024),
        )

    @staticmethod
    def _parse_int_env(env_var: str, default: int, min_val: Optional[int] = None, max_val: Optional[int] = None) -> int:
        """Parse integer environment variable, clamping to the allowed range."""
        raw = os.getenv(env_var)
        if raw is None or raw.strip() == "":
            return default
        try:
            value = int(raw)
        except (ValueError, TypeError):
            logger.error(f"Invalid value for {env_var}: {raw}, using default {default}")
            return default

        if min_val is not None and value < min_val:
            logger.warning(f"{env_var}={value} is below minimum {min_val}, using {min_val}")
            return min_val

        if max_val is not None and value > max_val:
            logger.warning(f"{env_var}={value} is above maximum {max_val}, using {max_val}")
            return max_val

        return value

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for health output."""
        return {
            "locale": {"hl": self.default_hl, "gl": self.default_gl},
            "fetch": {
                "request_timeout": self.request_timeout,
                "fetch_retries": self.fetch_retries,
            },
            "server": {
                "host": self.host,
                "port": self.port,
                "max_body_bytes": self.max_body_bytes,
            },
        }


# Global configuration instance
_scraper_config: Optional[ScraperConfig] = None


def get_scraper_config() -> ScraperConfig:
    """Get the global scraper configuration instance."""
    global _scraper_config
    if _scraper_config is None:
        _scraper_config = ScraperConfig.from_env()
    return _scraper_config


def reload_scraper_config() -> ScraperConfig:
    """Reload configuration from environment variables."""
    global _scraper_config
    _scraper_config = ScraperConfig.from_env()
    return _scraper_config


def positive_int(value: Any, default: int) -> int:
    """
    Coerce a caller-supplied limit to a positive int.

    Anything that is not a finite number >= 1 (None, "", "abc", 0, -3,
    NaN, booleans) yields `default`. Fractions are truncated.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number) or int(number) < 1:
        return default
    return int(number)


def _locale(value: Optional[str], fallback: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return fallback


@dataclass(frozen=True)
class SearchOptions:
    """Options for one search call.

    limit: max records returned (default 10)
    kind:  "video" | "playlist" | "channel" | "all" (default "video")
    hl/gl: interface language / region (default from ScraperConfig)
    """

    limit: int = DEFAULT_SEARCH_LIMIT
    kind: str = "video"
    hl: str = "fr"
    gl: str = "FR"

    @classmethod
    def build(cls, limit: Any = None, kind: Optional[str] = None, hl: Optional[str] = None,
              gl: Optional[str] = None, config: Optional[ScraperConfig] = None) -> 'SearchOptions':
        config = config or get_scraper_config()
        return cls(
            limit=positive_int(limit, DEFAULT_SEARCH_LIMIT),
            kind=kind if kind in VALID_KINDS else "video",
            hl=_locale(hl, config.default_hl),
            gl=_locale(gl, config.default_gl),
        )


@dataclass(frozen=True)
class DetailOptions:
    """Options for one video/playlist/channel detail call.

    limit is left as None when the caller gave no usable value so each
    listing can apply its own default (playlist 100, channel 30).
    """

    hl: str = "fr"
    gl: str = "FR"
    limit: Optional[int] = None
    related_limit: int = DEFAULT_RELATED_LIMIT

    @classmethod
    def build(cls, hl: Optional[str] = None, gl: Optional[str] = None, limit: Any = None,
              related_limit: Any = None, config: Optional[ScraperConfig] = None) -> 'DetailOptions':
        config = config or get_scraper_config()
        normalized_limit = positive_int(limit, 0)
        return cls(
            hl=_locale(hl, config.default_hl),
            gl=_locale(gl, config.default_gl),
            limit=normalized_limit or None,
            related_limit=positive_int(related_limit, DEFAULT_RELATED_LIMIT),
        )

    def listing_limit(self, default: int) -> int:
        return self.limit if self.limit is not None else default
