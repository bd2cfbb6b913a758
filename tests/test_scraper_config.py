#!/usr/bin/env python3
"""
Tests for scraper configuration and per-call options
"""

import os
import sys
import unittest
from unittest.mock import patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from scraper_config import (
    DEFAULT_USER_AGENT,
    DetailOptions,
    ScraperConfig,
    SearchOptions,
    get_scraper_config,
    positive_int,
    reload_scraper_config,
)


class TestScraperConfig(unittest.TestCase):
    """Test ScraperConfig.from_env"""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = ScraperConfig.from_env()
        self.assertEqual(config.default_hl, "fr")
        self.assertEqual(config.default_gl, "FR")
        self.assertEqual(config.request_timeout, 15)
        self.assertEqual(config.fetch_retries, 2)
        self.assertEqual(config.user_agent, DEFAULT_USER_AGENT)
        self.assertEqual(config.consent_cookie, "SOCS=CAI")
        self.assertEqual(config.port, 3053)

    def test_environment_overrides(self):
        env = {
            "YT_DEFAULT_HL": "en",
            "YT_DEFAULT_GL": "US",
            "YT_REQUEST_TIMEOUT": "30",
            "YT_FETCH_RETRIES": "0",
            "PORT": "8080",
        }
        with patch.dict(os.environ, env, clear=True):
            config = ScraperConfig.from_env()
        self.assertEqual((config.default_hl, config.default_gl), ("en", "US"))
        self.assertEqual(config.request_timeout, 30)
        self.assertEqual(config.fetch_retries, 0)
        self.assertEqual(config.port, 8080)

    def test_out_of_range_values_are_clamped(self):
        with patch.dict(os.environ, {"YT_REQUEST_TIMEOUT": "1", "YT_FETCH_RETRIES": "99"}, clear=True):
            config = ScraperConfig.from_env()
        self.assertEqual(config.request_timeout, 5)
        self.assertEqual(config.fetch_retries, 5)

    def test_invalid_values_use_defaults(self):
        with patch.dict(os.environ, {"YT_REQUEST_TIMEOUT": "soon", "PORT": ""}, clear=True):
            config = ScraperConfig.from_env()
        self.assertEqual(config.request_timeout, 15)
        self.assertEqual(config.port, 3053)

    def test_reload_replaces_global(self):
        with patch.dict(os.environ, {"YT_DEFAULT_HL": "de"}, clear=True):
            reloaded = reload_scraper_config()
            self.assertIs(get_scraper_config(), reloaded)
            self.assertEqual(reloaded.default_hl, "de")
        reload_scraper_config()

    def test_to_dict(self):
        data = ScraperConfig().to_dict()
        self.assertEqual(data["locale"], {"hl": "fr", "gl": "FR"})
        self.assertNotIn("user_agent", data["fetch"])


class TestPositiveInt(unittest.TestCase):

    def test_valid(self):
        self.assertEqual(positive_int(5, 10), 5)
        self.assertEqual(positive_int("7", 10), 7)
        self.assertEqual(positive_int(3.9, 10), 3)

    def test_invalid_falls_back(self):
        for value in (None, "", "abc", 0, -3, 0.5, float("nan"), float("inf"), True, False):
            with self.subTest(value=value):
                self.assertEqual(positive_int(value, 10), 10)


class TestSearchOptions(unittest.TestCase):

    def setUp(self):
        self.config = ScraperConfig(default_hl="fr", default_gl="FR")

    def test_defaults(self):
        options = SearchOptions.build(config=self.config)
        self.assertEqual(options, SearchOptions(limit=10, kind="video", hl="fr", gl="FR"))

    def test_invalid_kind_becomes_video(self):
        self.assertEqual(SearchOptions.build(kind="shorts", config=self.config).kind, "video")
        self.assertEqual(SearchOptions.build(kind="all", config=self.config).kind, "all")

    def test_invalid_limit_becomes_default(self):
        self.assertEqual(SearchOptions.build(limit="abc", config=self.config).limit, 10)
        self.assertEqual(SearchOptions.build(limit=-1, config=self.config).limit, 10)
        self.assertEqual(SearchOptions.build(limit=3, config=self.config).limit, 3)

    def test_locale_overrides(self):
        options = SearchOptions.build(hl=" en ", gl="US", config=self.config)
        self.assertEqual((options.hl, options.gl), ("en", "US"))


class TestDetailOptions(unittest.TestCase):

    def test_listing_limit_defaults_per_listing(self):
        options = DetailOptions.build(config=ScraperConfig())
        self.assertIsNone(options.limit)
        self.assertEqual(options.listing_limit(100), 100)
        self.assertEqual(options.listing_limit(30), 30)
        self.assertEqual(options.related_limit, 10)

    def test_explicit_limits(self):
        options = DetailOptions.build(limit="25", related_limit=4, config=ScraperConfig())
        self.assertEqual(options.listing_limit(100), 25)
        self.assertEqual(options.related_limit, 4)


if __name__ == '__main__':
    unittest.main()
