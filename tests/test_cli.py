#!/usr/bin/env python3
"""
Tests for the command line search
"""

import io
import json
import logging
import os
import sys
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cli import USAGE, main
from error_handler import UpstreamError
from models import SearchResult, VideoRecord


class TestCli(unittest.TestCase):

    def setUp(self):
        root = logging.getLogger()
        self._saved = (root.handlers[:], root.level)

    def tearDown(self):
        root = logging.getLogger()
        root.handlers[:] = self._saved[0]
        root.setLevel(self._saved[1])

    def run_cli(self, argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(argv)
        return code, out.getvalue(), err.getvalue()

    @patch("youtube_search.search_youtube")
    def test_prints_json(self, mock_search):
        mock_search.return_value = SearchResult(query="daft punk", items=[
            VideoRecord(id="abc123", title="Café", url="https://www.youtube.com/watch?v=abc123"),
        ])

        code, out, _ = self.run_cli(["daft", "punk", "--type=all", "--limit=5", "--hl=en", "--gl=US"])

        self.assertEqual(code, 0)
        data = json.loads(out)
        self.assertEqual(data["query"], "daft punk")
        self.assertEqual(data["items"][0]["title"], "Café")
        self.assertIn("Café", out)
        mock_search.assert_called_once_with("daft punk", limit="5", kind="all", hl="en", gl="US")

    def test_missing_query_prints_usage(self):
        code, out, err = self.run_cli([])
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn(USAGE, err)

    @patch("youtube_search.search_youtube")
    def test_failure_exit_code(self, mock_search):
        mock_search.side_effect = UpstreamError("youtube returned status 503", status_code=503)

        code, out, err = self.run_cli(["booba"])

        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("error: youtube returned status 503", err)


if __name__ == '__main__':
    unittest.main()
