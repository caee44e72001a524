"""
Per-file search for pygrep.

Scans the lines of one file's contents in order, applies the line matcher,
post-processes with inversion and line numbering, and produces the formatted
output lines for that file. A failure to build the matcher aborts the whole
search (no partial results): an unusable query is unusable for every line.

Functions:
    search: Search text contents and return formatted matching lines
    search_lines: Same as search, with an already built matcher
    split_lines: Split contents into lines on newline characters only
    iter_selected_lines: Yield the selected lines as MatchLine values
    format_output: Render one MatchLine
    read_file: Read a whole file as text
    search_in_file: Read a file and search it (single-file path)

Example:
    >>> from pygrep.core.config import SearchConfig
    >>> from pygrep.search.engine import search
    >>> contents = "Rust:\\nsafe, fast, productive.\\nPick three."
    >>> search("fast", contents, SearchConfig(line_number=True, regex_enabled=False))
    ['2:safe, fast, productive.']
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from ..core.config import SearchConfig
from ..core.types import MatchLine
from ..utils.error_handling import (
    BuiltinPermissionError,
    EncodingError,
    FileAccessError,
    PermissionError,
)
from .matchers import LineMatcher, compile_matcher


def split_lines(contents: str) -> list[str]:
    """
    Split on ``\\n`` only, dropping one ``\\r`` before each ``\\n``.

    Form feeds, vertical tabs and Unicode separators stay inside their line, so
    line numbers always count newline characters. A trailing newline does not
    start an extra empty line.
    """
    lines = contents.split("\n")
    last = lines.pop()
    lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    if last:
        lines.append(last)
    return lines


def iter_selected_lines(
    matcher: LineMatcher, contents: str, config: SearchConfig
) -> Iterator[MatchLine]:
    for line_number, line in enumerate(split_lines(contents), start=1):
        if matcher.matches(line) ^ config.invert_match:
            yield MatchLine(line_number=line_number, text=line)


def format_output(match: MatchLine, config: SearchConfig) -> str:
    if config.line_number:
        return f"{match.line_number}:{match.text}"
    return match.text


def search_lines(matcher: LineMatcher, contents: str, config: SearchConfig) -> list[str]:
    return [format_output(m, config) for m in iter_selected_lines(matcher, contents, config)]


def search(query: str, contents: str, config: SearchConfig) -> list[str]:
    """
    Return the formatted lines of ``contents`` selected by ``query``.

    Lines come back in ascending line order. Empty contents yield an empty list
    without touching the query.

    Raises:
        InvalidPatternError: regex mode is on and ``query`` does not compile
    """
    if not contents:
        return []
    return search_lines(compile_matcher(query, config), contents, config)


def read_file(path: Path, encoding: str = "utf-8") -> str:
    """
    Read a whole file into memory.

    Raises:
        PermissionError: the file cannot be opened for lack of permission
        FileAccessError: the file cannot be opened or read
        EncodingError: the bytes are not valid in ``encoding``
    """
    try:
        raw = path.read_bytes()
    except BuiltinPermissionError as e:
        raise PermissionError(f"Permission denied reading {path}: {e}", path) from e
    except OSError as e:
        raise FileAccessError(f"Cannot read file {path}: {e}", path) from e
    try:
        return raw.decode(encoding)
    except UnicodeDecodeError as e:
        raise EncodingError(f"Cannot decode {path} as {encoding}: {e}", path, encoding) from e


def search_in_file(
    path: Path, query: str, config: SearchConfig, *, encoding: str = "utf-8"
) -> list[str]:
    """
    Read ``path`` and search it. Used directly when the root is a regular file.

    Raises:
        InvalidPatternError: regex mode is on and ``query`` does not compile
        FileAccessError: the file cannot be opened or read
        EncodingError: the contents cannot be decoded
    """
    return search(query, read_file(Path(path), encoding), config)
