"""This module represents a single node of the prefix trie together with
the node-level algorithms the trie is built on: walking a key down the
tree, inserting, depth-first enumeration and pruning dead branches.
"""

from collections.abc import Iterator
from typing import Any, Optional

# Marks a node that holds no value, so that None stays a storable value
_EMPTY: Any = object()

# One step of a walk: the parent node and the symbol leading to its child
Step = tuple["TrieNode", str]


class TrieNode:
    """Represent a node in the trie structure."""

    def __init__(self, value: Any = _EMPTY) -> None:
        """Initialize a new Trie node.

        Attributes:
            children (dict): A dictionary mapping characters to
            their corresponding child TrieNode instances.
            value (Any): The payload stored on this node, or the
            private empty marker when the node ends no stored key.

        """
        self.children: dict[str, TrieNode] = {}
        self.value = value

    def has_value(self) -> bool:
        """Check whether the path to this node spells a stored key."""
        return self.value is not _EMPTY

    def is_dead(self) -> bool:
        """Check whether the node has neither a value nor children."""
        return self.value is _EMPTY and not self.children

    def walk(self, key: str) -> Optional["TrieNode"]:
        """Follow `key` down from this node.

        Args:
            key (str): The symbol sequence to follow.

        Returns:
            Optional[TrieNode]: The node reached after consuming the
            whole key, or None if some symbol has no matching child.

        """
        node = self
        for char in key:
            node = node.children.get(char)
            if node is None:
                return None
        return node

    def trace(self, key: str) -> Optional[tuple["TrieNode", list[Step]]]:
        """Follow `key` down from this node, remembering every step taken.

        Args:
            key (str): The symbol sequence to follow.

        Returns:
            Optional[tuple[TrieNode, list[Step]]]: The terminal node and
            the (parent, symbol) pairs leading to it in root-first order,
            or None if the walk fails.

        """
        node = self
        path: list[Step] = []
        for char in key:
            child = node.children.get(char)
            if child is None:
                return None
            path.append((node, char))
            node = child
        return node, path

    def insert(self, key: str, value: Any) -> Any:
        """Store `value` at the end of `key`, creating missing nodes.

        The missing tail of the path is built detached from the tree and
        linked in with a single assignment, so the tree is left unchanged
        if building it fails.

        Args:
            key (str): The symbol sequence to store the value under.
            value (Any): The payload to store.

        Returns:
            Any: The value previously stored under `key`, or the empty
            marker if there was none.

        """
        node = self
        depth = 0
        # Descend along the part of the key that already exists
        for char in key:
            child = node.children.get(char)
            if child is None:
                break
            node = child
            depth += 1

        if depth == len(key):
            previous = node.value
            node.value = value
            return previous

        tail = TrieNode(value)
        for char in reversed(key[depth + 1 :]):
            parent = TrieNode()
            parent.children[char] = tail
            tail = parent
        node.children[key[depth]] = tail
        return _EMPTY

    def iter_values(self, prefix: str) -> Iterator[tuple[str, Any]]:
        """Yield every stored (key, value) pair of this subtree.

        The traversal is depth-first and driven by an explicit stack, so
        the depth of the tree is not bounded by the recursion limit.

        Args:
            prefix (str): The key this node represents; it is prepended
            to every yielded key.

        Yields:
            tuple[str, Any]: The full key and its value, in no
            particular order.

        """
        stack: list[tuple[str, TrieNode]] = [(prefix, self)]
        while stack:
            key, node = stack.pop()
            if node.value is not _EMPTY:
                yield key, node.value
            for char, child in node.children.items():
                stack.append((key + char, child))

    def count_nodes(self) -> int:
        """Count the nodes of this subtree, this node included."""
        count = 0
        stack = [self]
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(node.children.values())
        return count

    def count_values(self) -> int:
        """Count the stored keys of this subtree."""
        return sum(1 for _ in self.iter_values(""))


def prune(path: list[Step]) -> int:
    """Detach dead nodes walking back up a recorded path.

    Starting at the deepest step, every child that holds no value and
    has no children is removed from its parent. The walk stops at the
    first child that is still needed; the root is never detached since
    it is never anybody's child.

    Args:
        path (list[Step]): The (parent, symbol) pairs of a walk, in
        root-first order.

    Returns:
        int: The number of nodes detached.

    """
    detached = 0
    for parent, char in reversed(path):
        if not parent.children[char].is_dead():
            break
        del parent.children[char]
        detached += 1
    return detached
