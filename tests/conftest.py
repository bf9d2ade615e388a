"""Test configuration and fixtures for linemark."""

import pytest


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


@pytest.fixture
def make_text_file(tmp_path):
    """Return a factory that writes lines to a file and returns its path.

    Lines are joined with ``newline`` and, unless ``trailing_newline`` is False, the file
    ends with one more terminator.
    """

    def _make(lines, name="lines.txt", encoding="utf-8", newline="\n", trailing_newline=True):
        text = newline.join(lines)
        if lines and trailing_newline:
            text += newline
        path = tmp_path / name
        path.write_bytes(text.encode(encoding))
        return path

    return _make
