"""
Generic traversal of decoded JSON trees.

Renderer objects (``videoRenderer``, ``playlistRenderer``...) can sit at any
depth of ytInitialData, so they are collected by key rather than by path.
"""

from typing import Any, Callable, Dict, Iterator, List


def iter_objects(root: Any) -> Iterator[Dict[str, Any]]:
    """
    Yield every dict in ``root`` in depth-first pre-order.

    Parents come before their children; list items and dict values are
    visited in source order. Uses an explicit stack, so arbitrarily deep
    trees cannot hit the recursion limit.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, dict):
            yield node
            children = node.values()
        elif isinstance(node, list):
            children = node
        else:
            continue
        # Reversed so the first child is popped first
        stack.extend(reversed(list(children)))


def walk(root: Any, visitor: Callable[[Dict[str, Any]], None]) -> None:
    """Call ``visitor`` on every dict of the tree, in pre-order."""
    for node in iter_objects(root):
        visitor(node)


def collect_by_renderer_key(root: Any, renderer_key: str) -> List[Any]:
    """
    Return every value stored under ``renderer_key`` anywhere in the tree.

    Matches are not pruned: a renderer nested inside another match is
    returned too, after its ancestor.
    """
    return [node[renderer_key] for node in iter_objects(root) if renderer_key in node]


def first_renderer(root: Any, renderer_key: str) -> Dict[str, Any]:
    """
    First dict found under ``renderer_key``, or an empty dict.

    Matches whose value is not a dict are skipped, so a stray scalar under
    the key does not hide a real renderer later in the tree.
    """
    for node in iter_objects(root):
        value = node.get(renderer_key)
        if isinstance(value, dict):
            return value
    return {}
