"""Build tries from data files holding one key per line."""

import logging
import time
from pathlib import Path

from mytrie.trie import Trie

logger = logging.getLogger(__name__)


class TrieLoadError(Exception):
    """Raised when a data file exists but its keys cannot be read."""


def load_keys(data_path: Path) -> list[str]:
    """Read the keys stored in a data file.

    Each line is stripped of surrounding whitespace; blank lines are
    skipped.

    Args:
        data_path (Path): The path of the data file to read.

    Raises:
        FileNotFoundError: If the file specified by `data_path` does not exist.
        TrieLoadError: If the file cannot be decoded or read.

    Returns:
        list[str]: The keys in file order, duplicates included.

    """
    try:
        # Open the file for reading with UTF-8 encoding
        with data_path.open("r", encoding="utf-8") as file:
            return [line.strip() for line in file if line.strip()]

    except FileNotFoundError as e:
        # Raise an error if the file does not exist
        raise FileNotFoundError(f"File not found: {data_path}") from e

    except (UnicodeDecodeError, OSError) as e:
        raise TrieLoadError(
            f"Could not read keys from {data_path}: {e!s}",
        ) from e


def load_trie(data_path: Path) -> Trie[bool]:
    """Insert all the lines of the data file into a trie structure.

    Args:
        data_path (Path): The path of the data file to read.

    Raises:
        FileNotFoundError: If the file specified by `data_path` does not exist.
        TrieLoadError: If the file cannot be decoded or read.

    Returns:
        Trie[bool]: A trie holding every non-blank line of the file.

    """
    start = time.perf_counter()
    trie = Trie.from_keys(load_keys(data_path))
    elapsed_ms = (time.perf_counter() - start) * 1000

    logger.info(
        "Loaded %d keys from %s in %.2f ms",
        len(trie),
        data_path,
        elapsed_ms,
    )
    return trie
