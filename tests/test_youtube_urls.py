#!/usr/bin/env python3
"""
Tests for YouTube URL builders
"""

import os
import sys
import unittest
from urllib.parse import parse_qs, urlparse

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from error_handler import InvalidRequestError
from youtube_urls import (
    absolute_url,
    build_channel_url,
    build_playlist_url,
    build_search_url,
    build_watch_url,
    channel_url,
    playlist_url,
    watch_url,
)


class TestRecordUrls(unittest.TestCase):

    def test_canonical_urls(self):
        self.assertEqual(watch_url("abc"), "https://www.youtube.com/watch?v=abc")
        self.assertEqual(playlist_url("PL1"), "https://www.youtube.com/playlist?list=PL1")
        self.assertEqual(channel_url("UC1"), "https://www.youtube.com/channel/UC1")

    def test_missing_ids(self):
        self.assertIsNone(watch_url(None))
        self.assertIsNone(playlist_url(""))
        self.assertIsNone(channel_url(None))

    def test_absolute_url(self):
        self.assertEqual(absolute_url("/@chan"), "https://www.youtube.com/@chan")
        self.assertEqual(absolute_url("https://example.com/x"), "https://example.com/x")
        self.assertIsNone(absolute_url(""))


class TestPageUrls(unittest.TestCase):

    def test_search_url_encodes_query(self):
        url = build_search_url("daft punk & co", "fr", "FR")
        parsed = urlparse(url)
        self.assertEqual(parsed.path, "/results")
        self.assertEqual(parse_qs(parsed.query), {
            "search_query": ["daft punk & co"], "hl": ["fr"], "gl": ["FR"],
        })

    def test_watch_and_playlist_urls(self):
        self.assertEqual(build_watch_url("abc", "en", "US"), "https://www.youtube.com/watch?v=abc&hl=en&gl=US")
        self.assertEqual(build_playlist_url("PL1", "fr", "FR"), "https://www.youtube.com/playlist?list=PL1&hl=fr&gl=FR")


class TestBuildChannelUrl(unittest.TestCase):

    def test_handle(self):
        self.assertEqual(build_channel_url("@chan", "fr", "FR"), "https://www.youtube.com/@chan/videos?hl=fr&gl=FR")

    def test_channel_id(self):
        self.assertEqual(
            build_channel_url("UCabc", "fr", "FR"),
            "https://www.youtube.com/channel/UCabc/videos?hl=fr&gl=FR",
        )

    def test_legacy_name(self):
        self.assertEqual(build_channel_url("someuser", "fr", "FR"), "https://www.youtube.com/someuser/videos?hl=fr&gl=FR")

    def test_full_url(self):
        self.assertEqual(
            build_channel_url("https://www.youtube.com/@chan/", "en", "US"),
            "https://www.youtube.com/@chan/videos?hl=en&gl=US",
        )
        self.assertEqual(
            build_channel_url("https://www.youtube.com/@chan/videos", "en", "US"),
            "https://www.youtube.com/@chan/videos?hl=en&gl=US",
        )

    def test_empty_is_rejected(self):
        for value in ("", "   ", None):
            with self.subTest(value=value):
                with self.assertRaises(InvalidRequestError):
                    build_channel_url(value, "fr", "FR")


if __name__ == '__main__':
    unittest.main()
