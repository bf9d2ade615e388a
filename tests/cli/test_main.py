"""Unit tests for the CLI main module."""

import contextlib
import io
from unittest.mock import MagicMock, patch

import pytest

from linemark.bookmarked_reader import BookmarkedReader
from linemark.cli.main import main, stream_lines


@pytest.fixture
def no_signal_setup():
    """Keep main() from replacing the process signal handlers."""
    with patch("linemark.cli.main.setup_signal_handling"):
        yield


@pytest.fixture
def numbers_file(make_text_file):
    return make_text_file([f"line {i}" for i in range(1, 6)])


def run_main(argv):
    """Run main() with ``argv`` and return (stderr, exit mock)."""
    stderr = io.StringIO()
    with patch("sys.argv", ["linemark", *argv]), patch("sys.exit") as mock_exit:
        with contextlib.redirect_stderr(stderr):
            main()
    return stderr.getvalue(), mock_exit


def test_stream_lines_with_skip_and_limit(numbers_file):
    """stream_lines skips, limits and numbers by position in the file."""
    writer = MagicMock()

    with BookmarkedReader(numbers_file) as reader:
        count = stream_lines(reader, writer, skip=1, max_lines=2)

    assert count == 2
    writer.write_line.assert_any_call("line 2", 2)
    writer.write_line.assert_any_call("line 3", 3)
    assert writer.write_line.call_count == 2


def test_stream_lines_zero_limit(numbers_file):
    writer = MagicMock()

    with BookmarkedReader(numbers_file) as reader:
        assert stream_lines(reader, writer, max_lines=0) == 0
    writer.write_line.assert_not_called()


def test_main_writes_file(no_signal_setup, numbers_file, tmp_path):
    """The whole file is copied to the output."""
    output = tmp_path / "out.txt"

    stderr, mock_exit = run_main([str(numbers_file), "-o", str(output)])

    assert output.read_text() == "".join(f"line {i}\n" for i in range(1, 6))
    assert stderr == ""
    mock_exit.assert_not_called()


def test_main_numbered_skip_and_summary(no_signal_setup, numbers_file, tmp_path):
    """Numbers reflect skipped lines and the summary goes to stderr."""
    output = tmp_path / "out.txt"

    stderr, _ = run_main([str(numbers_file), "-s", "3", "-n", "--summary", "stderr", "-o", str(output)])

    assert output.read_text() == "4\tline 4\n5\tline 5\n"
    assert "Lines read: 2" in stderr


def test_main_summary_stdout(no_signal_setup, numbers_file, tmp_path):
    """A stdout summary is written after the lines."""
    output = tmp_path / "out.txt"

    run_main([str(numbers_file), "-m", "1", "--summary", "stdout", "-o", str(output)])

    assert output.read_text() == "line 1\nLines read: 1\n"


def test_main_encoding(no_signal_setup, make_text_file, tmp_path):
    """The file is decoded with the requested encoding and written as UTF-8."""
    source = make_text_file(["Строка1"], encoding="cp1251")
    output = tmp_path / "out.txt"

    run_main([str(source), "-E", "cp1251", "-o", str(output)])

    assert output.read_text(encoding="utf-8") == "Строка1\n"


def test_main_missing_file(no_signal_setup, tmp_path):
    """An unreadable file is reported and exits with status 1."""
    stderr, mock_exit = run_main([str(tmp_path / "missing.txt")])

    assert "Error: Cannot open" in stderr
    mock_exit.assert_called_once_with(1)


def test_main_negative_skip(no_signal_setup, numbers_file):
    """Invalid counts are reported and exit with status 1."""
    stderr, mock_exit = run_main([str(numbers_file), "-s", "-1"])

    assert "Error: --skip must not be negative" in stderr
    mock_exit.assert_called_once_with(1)


def test_main_exit_code_after_sigpipe(no_signal_setup, numbers_file, tmp_path):
    """A received SIGPIPE turns into exit status 141."""
    output = tmp_path / "out.txt"

    with patch("linemark.cli.main.signal_handler") as mock_handler:
        mock_handler.exit_code.return_value = 141
        _, mock_exit = run_main([str(numbers_file), "-o", str(output)])

    mock_exit.assert_called_once_with(141)
