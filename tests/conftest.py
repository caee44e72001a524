"""
Shared test fixtures and utilities for pygrep tests.
"""

import os
from pathlib import Path

import pytest

from pygrep import SearchConfig, WalkConfig

# Test data constants
POEM = "Rust:\nsafe, fast, productive.\nPick three.\nDuct tape"

LITERAL = SearchConfig(regex_enabled=False)


def write(path: Path, content: str | bytes) -> Path:
    """Create a file (and its parents) with the given content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """
    layout:
        root/
          a.txt            "hello world" / "goodbye"
          sub/b.txt        "Hello there" / "hello again"
          sub/deep/c.md    "no greeting here"
          .hidden/h.txt    "hello hidden"
          image.bin        NUL byte + "hello"
          big.txt          oversized for small_walk_config
          ignored.log      "hello log" (listed in .gitignore)
          .gitignore       "*.log"
    """
    root = tmp_path / "root"
    write(root / "a.txt", "hello world\ngoodbye\n")
    write(root / "sub" / "b.txt", "Hello there\nhello again\n")
    write(root / "sub" / "deep" / "c.md", "no greeting here\n")
    write(root / ".hidden" / "h.txt", "hello hidden\n")
    write(root / "image.bin", b"\x00\x01hello\n")
    write(root / "big.txt", "hello\n" * 100)
    write(root / "ignored.log", "hello log\n")
    write(root / ".gitignore", "*.log\n")
    return root


@pytest.fixture
def small_walk_config() -> WalkConfig:
    """WalkConfig whose size ceiling excludes big.txt from sample_tree."""
    return WalkConfig(max_file_bytes=200, workers=4)


@pytest.fixture
def deny_listing(monkeypatch):
    """Make os.scandir fail for the given directory with the given OSError."""
    real_scandir = os.scandir

    def deny(directory: Path, error: OSError | None = None) -> None:
        denied = Path(directory)
        exc = error or PermissionError(13, "Permission denied", str(denied))

        def fake_scandir(path=".", *args, **kwargs):
            if Path(path) == denied:
                raise exc
            return real_scandir(path, *args, **kwargs)

        monkeypatch.setattr(os, "scandir", fake_scandir)

    return deny


@pytest.fixture
def literal_config() -> SearchConfig:
    return LITERAL


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "cli: CLI-related tests")
