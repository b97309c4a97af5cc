import random

import pytest

from mytrie.trie import Trie, TrieMutatedDuringIterationError

# Test data
GREETINGS = ["Hallo", "Hallöchen", "Tschüs"]

WORDS = [
    "deck",
    "did",
    "dog",
    "dogs",
    "doggie",
    "doe",
    "do",
    "acute",
    "answer",
    "bottle",
]


# Create a fixture for a trie holding the greetings
@pytest.fixture
def greetings():
    return Trie.from_keys(GREETINGS)


def test_empty_trie():
    """Test that a new trie holds nothing but its root."""
    trie = Trie.empty()
    assert trie.is_empty()
    assert len(trie) == 0
    assert trie.node_count() == 1
    assert list(trie.iter_content("")) == []


@pytest.mark.parametrize(
    "prefix, expected",
    [
        ("Hall", ["Hallo", "Hallöchen"]),
        ("Tsch", ["Tschüs"]),
        ("", ["Hallo", "Hallöchen", "Tschüs"]),
        ("Hallo", ["Hallo"]),
        ("xyz", []),
        ("Hallox", []),
    ],
)
def test_iter_keys_with_prefix(greetings, prefix, expected):
    """Test that prefix enumeration yields exactly the matching keys."""
    assert sorted(greetings.iter_keys(prefix)) == expected


def test_iter_content_pairs_values():
    """Test that enumeration pairs every key with its own value."""
    trie = Trie.from_items([("cat", 1), ("car", 2), ("cart", 3), ("dog", 4)])
    assert sorted(trie.iter_content("ca")) == [
        ("car", 2),
        ("cart", 3),
        ("cat", 1),
    ]


def test_iter_suffixes(greetings):
    """Test that suffixes come back without the prefix."""
    assert sorted(greetings.iter_suffixes("Hall")) == ["o", "öchen"]
    assert list(greetings.iter_suffixes("Tschüs")) == [""]
    assert list(greetings.iter_suffixes("nope")) == []


def test_iteration_is_lazy(greetings):
    """Test that consumers can stop early without touching the trie."""
    content = greetings.iter_content("")
    first = next(content)
    assert first[0] in GREETINGS
    del content
    assert len(greetings) == 3
    greetings.add("more")
    assert "more" in greetings


def test_iter_over_trie_yields_keys(greetings):
    """Test that iterating the trie itself yields every key."""
    assert sorted(greetings) == sorted(GREETINGS)


def test_insert_overwrites_value():
    """Test overwriting and the returned previous values."""
    trie = Trie()
    assert trie.insert("cat", 1) is None
    assert trie.insert("car", 2) is None
    assert trie.insert("cat", 3) == 1

    assert trie.get("cat") == 3
    assert len(trie) == 2

    assert trie.remove("car") == 2
    assert trie.contains("car") is False
    assert trie.contains("cat") is True


def test_duplicate_insert_creates_no_nodes():
    """Test that inserting a key twice reuses the same path."""
    trie = Trie()
    trie.insert("abc", 1)
    nodes = trie.node_count()
    trie.insert("abc", 2)
    assert trie.node_count() == nodes == 4


def test_empty_key():
    """Test that the empty key is stored on the root."""
    trie = Trie()
    trie.insert("a", 1)
    assert trie.insert("", 99) is None

    assert trie.get("") == 99
    assert "" in trie
    assert ("", 99) in list(trie.iter_content(""))
    assert trie.node_count() == 2

    assert trie.remove("") == 99
    assert "" not in trie
    assert trie.get("a") == 1


def test_none_is_a_storable_value():
    """Test that None as a value still marks the key as present."""
    trie = Trie()
    trie.insert("key", None)
    assert trie.contains("key")
    assert trie.get("key", "absent") is None
    assert trie.get("other", "absent") == "absent"
    assert list(trie.iter_content("")) == [("key", None)]


@pytest.mark.parametrize("query", ["Hal", "Hallo!", "", "T", "xyz"])
def test_absent_keys(greetings, query):
    """Test that prefixes and unknown keys are reported as absent."""
    assert greetings.contains(query) is False
    assert greetings.get(query) is None
    assert query not in greetings


def test_contains_rejects_non_strings(greetings):
    """Test the membership operator with keys that are not strings."""
    assert 42 not in greetings
    assert None not in greetings


def test_contains_prefix():
    """Test prefix membership."""
    trie = Trie.from_keys(["Hallo", "Hallöchen", "Tschüs", "Hallo Welt"])
    assert trie.contains_prefix("Hall")
    assert trie.contains_prefix("Hallo")
    assert trie.contains_prefix("Hallo Welt")
    assert trie.contains_prefix("")
    assert not trie.contains_prefix("ABC")
    assert not trie.contains_prefix("Hallo Welt!")


def test_remove_absent_key_returns_none(greetings):
    """Test that removing an absent key changes nothing."""
    nodes = greetings.node_count()
    assert greetings.remove("Hal") is None
    assert greetings.remove("Bye") is None
    assert greetings.node_count() == nodes
    assert len(greetings) == 3


def test_remove_is_idempotent(greetings):
    """Test removing the same key twice."""
    assert greetings.remove("Hallo") is True
    assert greetings.contains("Hallo") is False
    assert greetings.remove("Hallo") is None
    assert greetings.contains("Hallo") is False


def test_remove_prunes_dead_branch(greetings):
    """Test that removal detaches only the nodes no other key needs."""
    greetings.remove("Hallöchen")
    assert sorted(greetings.iter_keys("")) == ["Hallo", "Tschüs"]
    assert not greetings.contains_prefix("Hallö")
    assert greetings.contains_prefix("Hallo")
    # root + "Hallo" + "Tschüs"
    assert greetings.node_count() == 1 + 5 + 6


def test_remove_inner_key_keeps_longer_keys():
    """Test that removing a key that prefixes another keeps the path."""
    trie = Trie.from_keys(["do", "dog"])
    nodes = trie.node_count()
    trie.remove("do")
    assert trie.node_count() == nodes
    assert list(trie.iter_keys("")) == ["dog"]


def test_remove_all_leaves_only_root():
    """Test that removing every key prunes the trie back to its root."""
    trie = Trie.from_keys(WORDS + [""])
    for word in reversed(WORDS):
        trie.remove(word)
    trie.remove("")
    assert trie.is_empty()
    assert trie.node_count() == 1


def test_random_keys_round_trip():
    """Test membership, enumeration and pruning over random keys."""
    rng = random.Random(1234)
    alphabet = "abcdé"
    keys = {
        "".join(rng.choice(alphabet) for _ in range(rng.randrange(0, 8)))
        for _ in range(300)
    }
    trie = Trie()
    for key in keys:
        trie.insert(key, len(key))

    assert len(trie) == len(keys)
    for key in keys:
        assert trie.get(key) == len(key)
    for prefix in ["", "a", "ab", "éé", "dca"]:
        expected = sorted(k for k in keys if k.startswith(prefix))
        assert sorted(trie.iter_keys(prefix)) == expected

    order = sorted(keys)
    rng.shuffle(order)
    for key in order:
        assert trie.remove(key) == len(key)
        assert key not in trie
    assert trie.node_count() == 1


def test_long_key_does_not_hit_recursion_limit():
    """Test that very deep paths are handled iteratively."""
    key = "x" * 5_000
    trie = Trie()
    trie.insert(key, "deep")
    assert trie.get(key) == "deep"
    assert list(trie.iter_keys("xxx")) == [key]
    assert trie.remove(key) == "deep"
    assert trie.node_count() == 1


def test_remove_subtree():
    """Test detaching everything below a prefix."""
    trie = Trie.from_keys(GREETINGS)
    removed = trie.remove_subtree("Hal")

    assert removed is not None
    assert sorted(removed.iter_keys("")) == ["lo", "löchen"]
    assert len(removed) == 2
    assert list(trie.iter_keys("")) == ["Tschüs"]
    assert len(trie) == 1
    assert trie.node_count() == 1 + 6


def test_remove_subtree_includes_prefix_key():
    """Test that a stored prefix becomes the empty key of the result."""
    trie = Trie.from_items([("do", 1), ("dog", 2), ("cat", 3)])
    removed = trie.remove_subtree("do")

    assert removed is not None
    assert sorted(removed.iter_content("")) == [("", 1), ("g", 2)]
    assert list(trie.iter_keys("")) == ["cat"]


def test_remove_subtree_missing_prefix(greetings):
    """Test that an unknown prefix removes nothing."""
    assert greetings.remove_subtree("xyz") is None
    assert len(greetings) == 3


def test_remove_subtree_everything(greetings):
    """Test that the empty prefix empties the trie."""
    removed = greetings.remove_subtree("")
    assert removed is not None
    assert sorted(removed) == sorted(GREETINGS)
    assert greetings.is_empty()
    assert greetings.node_count() == 1


def test_clear(greetings):
    """Test that clear drops every key."""
    greetings.clear()
    assert greetings.is_empty()
    assert greetings.node_count() == 1
    assert "Hallo" not in greetings


@pytest.mark.parametrize(
    "mutate",
    [
        lambda trie: trie.add("new"),
        lambda trie: trie.insert("Hal", 1),
        lambda trie: trie.remove("Tschüs"),
        lambda trie: trie.remove_subtree("Hall"),
        lambda trie: trie.clear(),
    ],
)
def test_mutation_during_iteration_raises(greetings, mutate):
    """Test that changing the keys invalidates live iterators."""
    content = greetings.iter_content("")
    next(content)
    mutate(greetings)
    with pytest.raises(TrieMutatedDuringIterationError) as excinfo:
        next(content)
    assert "changed during iteration" in str(excinfo.value)


def test_mutation_before_first_step_raises(greetings):
    """Test that the guard covers iterators not yet started."""
    keys = greetings.iter_keys("Hall")
    greetings.remove("Hallo")
    with pytest.raises(RuntimeError):
        next(keys)


def test_overwrite_during_iteration_is_allowed(greetings):
    """Test that overwriting an existing value is not a structural change."""
    content = greetings.iter_content("")
    next(content)
    greetings.insert("Hallo", "updated")
    assert len(list(content)) == 2


def test_failed_removal_does_not_invalidate_iterators(greetings):
    """Test that removing an absent key keeps iterators valid."""
    keys = greetings.iter_keys("")
    greetings.remove("absent")
    assert sorted(keys) == sorted(GREETINGS)


def test_repr(greetings):
    """Test the string representation of the trie."""
    assert repr(greetings) == "Trie(keys=3)"
