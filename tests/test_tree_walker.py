#!/usr/bin/env python3
"""
Tests for JSON tree traversal
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tree_walker import collect_by_renderer_key, first_renderer, iter_objects, walk


class TestCollectByRendererKey(unittest.TestCase):

    def test_matches_at_every_depth_in_pre_order(self):
        root = {
            "videoRenderer": {
                "videoId": "d0",
                "a": {"b": [{"c": {"videoRenderer": {"videoId": "d5"}}}]},
            },
            "section": {"videoRenderer": {"videoId": "d1"}},
        }
        found = collect_by_renderer_key(root, "videoRenderer")
        self.assertEqual([node["videoId"] for node in found], ["d0", "d5", "d1"])

    def test_list_items_in_source_order(self):
        root = {"items": [{"videoRenderer": {"videoId": str(i)}} for i in range(5)]}
        found = collect_by_renderer_key(root, "videoRenderer")
        self.assertEqual([node["videoId"] for node in found], ["0", "1", "2", "3", "4"])

    def test_non_dict_values_are_returned_as_is(self):
        root = {"a": {"videoRenderer": "odd"}, "b": {"videoRenderer": None}}
        self.assertEqual(collect_by_renderer_key(root, "videoRenderer"), ["odd", None])

    def test_no_match(self):
        self.assertEqual(collect_by_renderer_key({"a": [1, "x", {"b": {}}]}, "videoRenderer"), [])

    def test_scalar_and_list_roots(self):
        self.assertEqual(collect_by_renderer_key("text", "videoRenderer"), [])
        self.assertEqual(collect_by_renderer_key(None, "videoRenderer"), [])
        self.assertEqual(
            collect_by_renderer_key([{"videoRenderer": 1}, [{"videoRenderer": 2}]], "videoRenderer"),
            [1, 2],
        )

    def test_very_deep_tree(self):
        root = {"leaf": {"videoRenderer": {"videoId": "bottom"}}}
        for _ in range(5000):
            root = {"child": [root]}
        found = collect_by_renderer_key(root, "videoRenderer")
        self.assertEqual(found, [{"videoId": "bottom"}])


class TestIterObjects(unittest.TestCase):

    def test_parents_before_children(self):
        child = {"name": "child"}
        parent = {"name": "parent", "child": child}
        self.assertEqual(list(iter_objects(parent)), [parent, child])

    def test_walk_visits_every_dict(self):
        seen = []
        walk({"a": [{"b": {}}, 3, {"c": "x"}]}, lambda node: seen.append(sorted(node)))
        self.assertEqual(seen, [["a"], ["b"], [], ["c"]])


class TestFirstRenderer(unittest.TestCase):

    def test_first_dict_value(self):
        root = {"x": {"headerRenderer": "not a dict"}, "y": [{"headerRenderer": {"n": 1}}, {"headerRenderer": {"n": 2}}]}
        self.assertEqual(first_renderer(root, "headerRenderer"), {"n": 1})

    def test_scalar_match_does_not_hide_later_renderer(self):
        root = [{"headerRenderer": None}, {"headerRenderer": "x"}, {"headerRenderer": {"n": 3}}]
        self.assertEqual(first_renderer(root, "headerRenderer"), {"n": 3})

    def test_missing_gives_empty_dict(self):
        self.assertEqual(first_renderer({"a": 1}, "headerRenderer"), {})


if __name__ == '__main__':
    unittest.main()
