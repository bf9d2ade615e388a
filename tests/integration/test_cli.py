"""Integration tests for the command-line interface.

These run the installed package in a subprocess and cover:
- Plain output and line numbering
- Skipping and limiting
- Encodings and decode error handling
- Error exit codes
- Broken pipes
"""

import subprocess
import sys

import pytest

# Slow subprocess tests only run with --run-cli-tests
pytestmark = pytest.mark.skipif(
    "not config.getoption('--run-cli-tests')", reason="Only run when --run-cli-tests is given"
)


def run_cli(*args, timeout=30):
    return subprocess.run(
        [sys.executable, "-m", "linemark.cli.main", *map(str, args)],
        capture_output=True,
        timeout=timeout,
    )


@pytest.fixture
def sample_file(make_text_file):
    return make_text_file(["alpha", "beta", "gamma", "delta"])


def test_prints_file(sample_file):
    result = run_cli(sample_file)

    assert result.returncode == 0
    assert result.stdout.decode() == "alpha\nbeta\ngamma\ndelta\n"


def test_skip_limit_and_numbers(sample_file):
    result = run_cli("-s", "1", "-m", "2", "-n", sample_file)

    assert result.returncode == 0
    assert result.stdout.decode() == "2\tbeta\n3\tgamma\n"


def test_summary_to_stderr(sample_file):
    result = run_cli("--summary", "stderr", sample_file)

    assert result.returncode == 0
    assert "Lines read: 4" in result.stderr.decode()


def test_output_file(sample_file, tmp_path):
    output = tmp_path / "copy.txt"
    result = run_cli("-o", output, sample_file)

    assert result.returncode == 0
    assert result.stdout == b""
    assert output.read_text() == "alpha\nbeta\ngamma\ndelta\n"


def test_cp1251(make_text_file):
    path = make_text_file(["Строка1", "Строка2"], encoding="cp1251")
    result = run_cli("-E", "cp1251", path)

    assert result.returncode == 0
    assert result.stdout.decode("utf-8") == "Строка1\nСтрока2\n"


def test_wrong_encoding_fails(make_text_file):
    path = make_text_file(["Строка1"], encoding="cp1251")
    result = run_cli(path)

    assert result.returncode == 1
    assert "Error: Cannot open" in result.stderr.decode()


def test_errors_replace(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_bytes(b"ok\xff\n")
    result = run_cli("--errors", "replace", path)

    assert result.returncode == 0
    assert result.stdout.decode("utf-8") == "ok\ufffd\n"


def test_missing_file(tmp_path):
    result = run_cli(tmp_path / "missing.txt")

    assert result.returncode == 1
    assert "Error: Cannot open" in result.stderr.decode()


def test_usage_error():
    result = run_cli("--summary", "nowhere", "x.txt")

    assert result.returncode == 2


def test_verbose_logs_to_stderr(sample_file):
    result = run_cli("-v", "-s", "1", sample_file)

    assert result.returncode == 0
    assert "Skipped 1 of 1 requested lines" in result.stderr.decode()


@pytest.mark.skipif(sys.platform == "win32", reason="SIGPIPE is not available on Windows")
def test_broken_pipe(make_text_file):
    """Closing the read end early exits quietly with the SIGPIPE status."""
    path = make_text_file([f"line {i}" for i in range(200000)])

    producer = subprocess.Popen(
        [sys.executable, "-m", "linemark.cli.main", str(path)],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )
    assert producer.stdout is not None
    producer.stdout.readline()
    producer.stdout.close()
    _, stderr = producer.communicate(timeout=30)

    assert producer.returncode in (0, 141)
    assert b"Traceback" not in stderr
