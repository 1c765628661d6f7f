"""
Pytest configuration and fixtures for anchoring tests
"""
import logging

import pytest

from anchoring.logging_config import GlobalIndent


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by CLI runs and reset tree indentation"""
    yield
    base_logger = logging.getLogger("anchoring")
    base_logger.handlers = []
    base_logger.setLevel(logging.NOTSET)
    GlobalIndent.reset()


@pytest.fixture
def fox_text():
    """The classic pangram"""
    return "The quick brown fox jumps over the lazy dog"


@pytest.fixture
def document_file(tmp_path, fox_text):
    """Document text written to a temporary file"""
    path = tmp_path / "entry.txt"
    path.write_text(fox_text, encoding="utf-8")
    return path
