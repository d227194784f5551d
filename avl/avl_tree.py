"""Height-balanced binary search tree.

The module-level functions work on bare subtrees: each takes the root of a
subtree and returns the root that should replace it, so callers thread
structural changes back up by reassigning their own child slot. ``AVLTree``
wraps them with a root, a size counter and the usual container protocol.
"""

import logging
from typing import TypeVar, Generic, List, Iterator, Optional

from avl import traversal

T = TypeVar('T')

logger = logging.getLogger(__name__)


class Node(Generic[T]):
    def __init__(self, key: T) -> None:
        self.key: T = key
        self.height: int = 1
        self.left: Optional['Node[T]'] = None
        self.right: Optional['Node[T]'] = None

    def __repr__(self) -> str:
        return f"Node(key={self.key!r}, height={self.height})"


def height(node: Optional[Node]) -> int:
    if node is None:
        return 0
    return node.height


def balance_factor(node: Optional[Node]) -> int:
    if node is None:
        return 0
    return height(node.left) - height(node.right)


def update_height(node: Node) -> None:
    node.height = 1 + max(height(node.left), height(node.right))


def rotate_right(node: Node[T]) -> Node[T]:
    """Fix a left-left imbalance by promoting ``node.left``."""
    logger.debug("Right rotation on node (%s)", node.key)
    pivot = node.left
    assert pivot is not None, f"right rotation on {node!r} without a left child"
    inner = pivot.right

    pivot.right = node
    node.left = inner

    # node is now below pivot, so it must be recomputed first
    update_height(node)
    update_height(pivot)

    return pivot


def rotate_left(node: Node[T]) -> Node[T]:
    """Fix a right-right imbalance by promoting ``node.right``."""
    logger.debug("Left rotation on node (%s)", node.key)
    pivot = node.right
    assert pivot is not None, f"left rotation on {node!r} without a right child"
    inner = pivot.left

    pivot.left = node
    node.right = inner

    update_height(node)
    update_height(pivot)

    return pivot


def rotate_left_right(node: Node[T]) -> Node[T]:
    assert node.left is not None
    node.left = rotate_left(node.left)
    return rotate_right(node)


def rotate_right_left(node: Node[T]) -> Node[T]:
    assert node.right is not None
    node.right = rotate_right(node.right)
    return rotate_left(node)


def insert(node: Optional[Node[T]], key: T) -> Node[T]:
    """Insert ``key`` below ``node`` and return the new subtree root.

    Keys already present are ignored. Rebalancing picks the rotation from
    where the new key landed relative to the heavy child.
    """
    if node is None:
        return Node(key)

    if key < node.key:
        node.left = insert(node.left, key)
    elif key > node.key:
        node.right = insert(node.right, key)
    else:
        return node

    update_height(node)
    balance = balance_factor(node)

    if balance > 1 and key < node.left.key:
        return rotate_right(node)
    if balance < -1 and key > node.right.key:
        return rotate_left(node)
    if balance > 1 and key > node.left.key:
        return rotate_left_right(node)
    if balance < -1 and key < node.right.key:
        return rotate_right_left(node)

    return node


def get_minimum(node: Node[T]) -> Node[T]:
    while node.left is not None:
        node = node.left
    return node


def delete(node: Optional[Node[T]], key: T) -> Optional[Node[T]]:
    """Remove ``key`` from below ``node`` and return the new subtree root.

    Absent keys leave the subtree untouched. A node with two children takes
    over its in-order successor's key and the successor is removed from the
    right subtree instead. Rebalancing looks at the heavy child's own balance
    factor, since a deletion can tip either side.
    """
    if node is None:
        return None

    if key < node.key:
        node.left = delete(node.left, key)
    elif key > node.key:
        node.right = delete(node.right, key)
    else:
        if node.left is None:
            return node.right
        if node.right is None:
            return node.left

        successor = get_minimum(node.right)
        node.key = successor.key
        node.right = delete(node.right, successor.key)

    update_height(node)
    balance = balance_factor(node)

    if balance > 1 and balance_factor(node.left) >= 0:
        return rotate_right(node)
    if balance < -1 and balance_factor(node.right) <= 0:
        return rotate_left(node)
    if balance > 1 and balance_factor(node.left) < 0:
        return rotate_left_right(node)
    if balance < -1 and balance_factor(node.right) > 0:
        return rotate_right_left(node)

    return node


def _check(node: Optional[Node[T]], low: Optional[T], high: Optional[T]) -> int:
    if node is None:
        return 0
    if low is not None and not low < node.key:
        raise AssertionError(f"order violated at {node!r}: not greater than {low!r}")
    if high is not None and not node.key < high:
        raise AssertionError(f"order violated at {node!r}: not less than {high!r}")

    left_height = _check(node.left, low, node.key)
    right_height = _check(node.right, node.key, high)

    expected = 1 + max(left_height, right_height)
    if node.height != expected:
        raise AssertionError(f"stale height at {node!r}: expected {expected}")
    if abs(left_height - right_height) > 1:
        raise AssertionError(
            f"unbalanced at {node!r}: left={left_height}, right={right_height}"
        )
    return expected


class AVLTree(Generic[T]):
    def __init__(self) -> None:
        self._root: Optional[Node[T]] = None
        self._size: int = 0

    @property
    def root(self) -> Optional[Node[T]]:
        return self._root

    def insert(self, key: T) -> None:
        if self.contains(key):
            return
        self._root = insert(self._root, key)
        self._size += 1

    def delete(self, key: T) -> None:
        if not self.contains(key):
            return
        self._root = delete(self._root, key)
        self._size -= 1

    remove = delete

    def contains(self, key: T) -> bool:
        node = self._root
        while node is not None:
            if key < node.key:
                node = node.left
            elif key > node.key:
                node = node.right
            else:
                return True
        return False

    def min(self) -> T:
        if self._root is None:
            raise ValueError("min from empty tree")
        return get_minimum(self._root).key

    def max(self) -> T:
        if self._root is None:
            raise ValueError("max from empty tree")
        node = self._root
        while node.right is not None:
            node = node.right
        return node.key

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def clear(self) -> None:
        self._root = None
        self._size = 0

    def height(self) -> int:
        return height(self._root)

    def balance_factor(self) -> int:
        return balance_factor(self._root)

    def breadth_first(self) -> List[T]:
        return list(traversal.breadth_first(self._root))

    def in_order(self) -> List[T]:
        return list(traversal.in_order(self._root))

    def pre_order(self) -> List[T]:
        return list(traversal.pre_order(self._root))

    def post_order(self) -> List[T]:
        return list(traversal.post_order(self._root))

    def is_balanced(self) -> bool:
        return all(
            abs(balance_factor(node)) <= 1
            for node in traversal.nodes_breadth_first(self._root)
        )

    def check_invariants(self) -> None:
        """Raise AssertionError if ordering, stored heights or balance are off."""
        _check(self._root, None, None)

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: T) -> bool:
        return self.contains(key)

    def __iter__(self) -> Iterator[T]:
        return traversal.in_order(self._root)

    def __repr__(self) -> str:
        return f"AVLTree({self.in_order()})"

    def __str__(self) -> str:
        return f"AVLTree(size={self._size}, height={self.height()})"
