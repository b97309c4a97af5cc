import logging

import pytest

from tests.key_constants import KEYS


# Create a fixture for temporary key file
@pytest.fixture
def key_file(tmp_path):
    file_path = tmp_path / "keys.txt"
    with file_path.open("w", encoding="utf-8") as f:
        for item in KEYS:
            f.write(f"{item}\n")
    return file_path


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way it was after a test touches it."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)
