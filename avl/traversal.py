"""Key generators over a tree of nodes with ``key``, ``left`` and ``right``.

All traversals are lazy: they walk the tree as they are consumed and cannot be
restarted. Mutating the tree while one is running gives undefined output.
"""

from typing import Any, Iterable, Iterator, Optional

from avl.circular_queue import CircularQueue


def nodes_breadth_first(root: Optional[Any]) -> Iterator[Any]:
    if root is None:
        return
    queue: CircularQueue[Any] = CircularQueue()
    queue.enqueue(root)
    while queue:
        node = queue.dequeue()
        yield node
        if node.left is not None:
            queue.enqueue(node.left)
        if node.right is not None:
            queue.enqueue(node.right)


def breadth_first(root: Optional[Any]) -> Iterator[Any]:
    """Yield keys level by level, left to right within a level."""
    for node in nodes_breadth_first(root):
        yield node.key


def in_order(root: Optional[Any]) -> Iterator[Any]:
    if root is not None:
        yield from in_order(root.left)
        yield root.key
        yield from in_order(root.right)


def pre_order(root: Optional[Any]) -> Iterator[Any]:
    if root is not None:
        yield root.key
        yield from pre_order(root.left)
        yield from pre_order(root.right)


def post_order(root: Optional[Any]) -> Iterator[Any]:
    if root is not None:
        yield from post_order(root.left)
        yield from post_order(root.right)
        yield root.key


def format_keys(keys: Iterable[Any], separator: str = " ") -> str:
    """Render keys as ``(k)`` tokens, e.g. ``format_keys([1, 2], "->")`` is ``"(1)->(2)"``."""
    return separator.join(f"({key})" for key in keys)
