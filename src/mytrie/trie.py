"""This module represents the implementation of a prefix trie that maps
string keys to values and iterates over every key sharing a prefix.

Common prefixes are stored only once, so enumerating all the keys below
a prefix only visits the subtree of that prefix.

Example:
    >>> trie = Trie.from_keys(["Hallo", "Hallöchen", "Tschüs"])
    >>> sorted(trie.iter_keys("Hall"))
    ['Hallo', 'Hallöchen']

"""

import logging
from collections.abc import Iterable, Iterator
from typing import Generic, Optional, TypeVar, Union

from mytrie.node import _EMPTY, TrieNode, prune

logger = logging.getLogger(__name__)

V = TypeVar("V")
T = TypeVar("T")
D = TypeVar("D")


class TrieMutatedDuringIterationError(RuntimeError):
    """Raised when the keys of a trie change while one of its
    iterators is still being consumed.
    """


class Trie(Generic[V]):
    """Represents the prefix trie data structure.

    The trie owns a single root node, which stands for the empty key.
    Lookups and removals of absent keys report absence by returning
    None (or a caller-provided default) and never raise.

    Changing the set of stored keys while an iterator returned by
    `iter_content`, `iter_keys` or `iter_suffixes` is alive makes the
    next step of that iterator raise TrieMutatedDuringIterationError.
    The trie provides no locking of its own.
    """

    def __init__(self) -> None:
        """Initialize the root node of the Trie."""
        self.root = TrieNode()
        self._size = 0
        # Bumped whenever the set of stored keys changes
        self._version = 0

    @classmethod
    def empty(cls) -> "Trie[V]":
        """Create a trie holding no keys."""
        return cls()

    @classmethod
    def from_keys(cls, keys: Iterable[str]) -> "Trie[bool]":
        """Create a trie holding each of the given keys.

        Every key is stored with the presence marker True; duplicate keys
        collapse into one.

        Args:
            keys (Iterable[str]): The keys to store.

        Returns:
            Trie[bool]: The populated trie.

        """
        trie: Trie[bool] = Trie()
        for key in keys:
            trie.add(key)
        return trie

    @classmethod
    def from_items(cls, items: Iterable[tuple[str, V]]) -> "Trie[V]":
        """Create a trie from (key, value) pairs.

        Later pairs overwrite earlier ones with the same key.

        Args:
            items (Iterable[tuple[str, V]]): The pairs to store.

        Returns:
            Trie[V]: The populated trie.

        """
        trie = cls()
        for key, value in items:
            trie.insert(key, value)
        return trie

    @classmethod
    def _from_root(cls, root: TrieNode) -> "Trie[V]":
        trie = cls()
        trie.root = root
        trie._size = root.count_values()
        return trie

    def insert(self, key: str, value: V) -> Optional[V]:
        """Insert a key into the trie, overwriting any value it had.

        Args:
            key (str): The key to store. The empty string is a valid key
            and is stored on the root.
            value (V): The value to associate with the key.

        Returns:
            Optional[V]: The previous value of the key, or None if the key
            was not present.

        """
        previous = self.root.insert(key, value)
        if previous is _EMPTY:
            self._size += 1
            self._version += 1
            return None
        return previous

    def add(self, key: str) -> None:
        """Insert a key without a payload of its own.

        Args:
            key (str): The key to store.

        """
        self.insert(key, True)  # type: ignore[arg-type]

    def get(
        self,
        key: str,
        default: Optional[D] = None,
    ) -> Union[V, D, None]:
        """Look up the value stored under an exact key.

        Args:
            key (str): The key to look up.
            default (Optional[D]): What to return when the key is absent.

        Returns:
            Union[V, D, None]: The stored value, or `default` when the key
            is not stored, including when it is only a prefix of stored
            keys.

        """
        node = self.root.walk(key)
        if node is None or not node.has_value():
            return default
        return node.value

    def contains(self, key: str) -> bool:
        """Check for the existence of a key in the trie.

        Args:
            key (str): The key to search for.

        Returns:
            bool: True if `key` was stored as a complete key, False
            otherwise.

        """
        node = self.root.walk(key)
        return node is not None and node.has_value()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def contains_prefix(self, prefix: str) -> bool:
        """Check whether any stored key starts with `prefix`.

        The empty prefix is always contained.

        Args:
            prefix (str): The prefix to search for.

        Returns:
            bool: True if `prefix` is a path in the trie, False otherwise.

        """
        return self.root.walk(prefix) is not None

    def is_empty(self) -> bool:
        """Return True if the trie stores no keys."""
        return self._size == 0

    def __len__(self) -> int:
        return self._size

    def node_count(self) -> int:
        """Return the number of nodes in the trie, the root included."""
        return self.root.count_nodes()

    def iter_content(self, prefix: str = "") -> Iterator[tuple[str, V]]:
        """Iterate over every (key, value) pair whose key starts with
        `prefix`.

        The prefix itself is yielded too if it is a stored key. The order
        of iteration is arbitrary; sort the results if order matters.
        Results are produced lazily, so the consumer may stop early.

        Args:
            prefix (str): The prefix selecting the keys. The empty prefix
            selects every key.

        Returns:
            Iterator[tuple[str, V]]: The matching pairs. Empty if no
            stored key starts with `prefix`.

        """
        node = self.root.walk(prefix)
        if node is None:
            return iter(())
        return self._guarded(node.iter_values(prefix), self._version)

    def iter_keys(self, prefix: str = "") -> Iterator[str]:
        """Iterate over every stored key starting with `prefix`, in
        arbitrary order.
        """
        return (key for key, _ in self.iter_content(prefix))

    def iter_suffixes(self, prefix: str = "") -> Iterator[str]:
        """Iterate over the stored keys starting with `prefix`, with the
        prefix cut off.

        Example:
            >>> trie = Trie.from_keys(["Hallo", "Hallöchen"])
            >>> sorted(trie.iter_suffixes("Hall"))
            ['o', 'öchen']

        """
        node = self.root.walk(prefix)
        if node is None:
            return iter(())
        content = self._guarded(node.iter_values(""), self._version)
        return (suffix for suffix, _ in content)

    def __iter__(self) -> Iterator[str]:
        return self.iter_keys()

    def _guarded(self, content: Iterator[T], version: int) -> Iterator[T]:
        # The version is checked before every step into the tree
        while True:
            if self._version != version:
                raise TrieMutatedDuringIterationError(
                    "Trie changed during iteration.",
                )
            try:
                item = next(content)
            except StopIteration:
                return
            yield item

    def remove(self, key: str) -> Optional[V]:
        """Remove a key from the trie.

        Nodes left without a value and without children are detached on
        the way back up to the root.

        Args:
            key (str): The key to remove.

        Returns:
            Optional[V]: The value the key held, or None if the key was
            not present.

        """
        found = self.root.trace(key)
        if found is None:
            return None

        node, path = found
        if not node.has_value():
            return None

        value = node.value
        node.value = _EMPTY
        prune(path)

        self._size -= 1
        self._version += 1
        return value

    def remove_subtree(self, prefix: str) -> Optional["Trie[V]"]:
        """Remove every key that starts with `prefix`.

        Example:
            >>> trie = Trie.from_keys(["Hallo", "Hallöchen", "Tschüs"])
            >>> removed = trie.remove_subtree("Hal")
            >>> sorted(removed.iter_keys())
            ['lo', 'löchen']
            >>> list(trie.iter_keys())
            ['Tschüs']

        Args:
            prefix (str): The prefix whose keys are removed. The prefix
            itself is removed too if it is a stored key.

        Returns:
            Optional[Trie[V]]: A new trie holding the removed keys with
            `prefix` cut off, or None if no path spells `prefix`.

        """
        found = self.root.trace(prefix)
        if found is None:
            return None

        node, path = found
        if path:
            parent, char = path[-1]
            del parent.children[char]
            prune(path[:-1])
        else:
            self.root = TrieNode()

        removed: Trie[V] = self._from_root(node)
        self._size -= len(removed)
        if len(removed):
            self._version += 1

        logger.debug(
            "Removed %d keys below prefix '%s'",
            len(removed),
            prefix,
        )
        return removed

    def clear(self) -> None:
        """Remove every key from the trie."""
        if self._size:
            self._version += 1
        self.root = TrieNode()
        self._size = 0

    def __repr__(self) -> str:
        """Return a string representation of the trie.

        Returns:
            str: The class name and the number of stored keys.

        """
        return f"{type(self).__name__}(keys={self._size})"
