"""Tests for downloads and shell commands."""

import pytest
import requests

import tabstat.utils
from tabstat.utils import download_if_needed, system


class BrokenResponse:
    """Streams one chunk, then loses the connection."""

    def raise_for_status(self):
        pass

    def iter_content(self, chunk_size=1):
        yield b"name,age\n"
        raise requests.exceptions.ConnectionError("connection reset")


class WholeResponse:
    def raise_for_status(self):
        pass

    def iter_content(self, chunk_size=1):
        yield b"name,age\nann,30\n"


def test_system_returns_exit_status() -> None:
    assert system("true") == 0
    assert system("false") != 0
    assert system("exit %d", 3) == 3


def test_system_passes_arguments_to_the_shell(tmp_path) -> None:
    dest = tmp_path / "out.txt"
    assert system("printf '%%s' %s > %s", "hello", dest) == 0
    assert dest.read_text() == "hello"


def test_interrupted_download_leaves_nothing_behind(tmp_path, monkeypatch) -> None:
    dest = tmp_path / "cache" / "survey.csv"
    monkeypatch.setattr(tabstat.utils.requests, "get", lambda url, stream=False, timeout=None: BrokenResponse())
    with pytest.raises(requests.exceptions.ConnectionError):
        download_if_needed("https://example.org/survey.csv", str(dest))
    assert not dest.exists()
    assert list(dest.parent.iterdir()) == []

    monkeypatch.setattr(tabstat.utils.requests, "get", lambda url, stream=False, timeout=None: WholeResponse())
    assert download_if_needed("https://example.org/survey.csv", str(dest)) == dest
    assert dest.read_text() == "name,age\nann,30\n"
