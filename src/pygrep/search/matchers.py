"""
Line matching strategies for pygrep.

A line either satisfies the query under the active SearchConfig or it does not.
The decision is made by one of a small, closed set of strategies, selected and
built once per search so that a regular expression is compiled exactly once:

    LiteralMatcher: plain substring containment
    WordMatcher: literal query occupying a whole word (punctuation-aware)
    RegexMatcher: regular expression search, optionally wrapped in word boundaries

Inversion is not handled here; callers XOR the result with ``invert_match``.

Functions:
    compile_matcher: Select and build the strategy for a (query, config) pair
    matches: One-shot convenience wrapper deciding a single line

Example:
    >>> from pygrep.core.config import SearchConfig
    >>> from pygrep.search.matchers import compile_matcher
    >>> matcher = compile_matcher("test", SearchConfig(whole_word=True))
    >>> matcher.matches("(test)"), matcher.matches("testing123")
    (True, False)
"""

from __future__ import annotations

from functools import lru_cache

import regex as regex_mod  # better regex engine

from ..core.config import SearchConfig
from ..utils.error_handling import InvalidPatternError


class LineMatcher:
    """Base class for line matching strategies."""

    __slots__ = ("query", "ignore_case")

    def __init__(self, query: str, ignore_case: bool = False) -> None:
        self.query = query
        self.ignore_case = ignore_case

    def matches(self, line: str) -> bool:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(query={self.query!r}, ignore_case={self.ignore_case})"


class LiteralMatcher(LineMatcher):
    __slots__ = ("_needle",)

    def __init__(self, query: str, ignore_case: bool = False) -> None:
        super().__init__(query, ignore_case)
        self._needle = query.lower() if ignore_case else query

    def matches(self, line: str) -> bool:
        if self.ignore_case:
            line = line.lower()
        return self._needle in line


class WordMatcher(LineMatcher):
    """
    Literal query that must not be glued to word characters on either side.

    ``test`` matches ``This is a test.``, ``(test)`` and ``test,case`` but not
    ``testing123``. Unlike a plain ``\\b`` wrap, a query that itself starts or
    ends with punctuation still matches next to whitespace.
    """

    __slots__ = ("_rx",)

    def __init__(self, query: str, ignore_case: bool = False) -> None:
        super().__init__(query, ignore_case)
        needle = query.lower() if ignore_case else query
        self._rx = _compile(rf"(?<!\w){regex_mod.escape(needle)}(?!\w)", 0)

    def matches(self, line: str) -> bool:
        if self.ignore_case:
            line = line.lower()
        return self._rx.search(line) is not None


class RegexMatcher(LineMatcher):
    __slots__ = ("whole_word", "_rx")

    def __init__(self, query: str, ignore_case: bool = False, whole_word: bool = False) -> None:
        super().__init__(query, ignore_case)
        self.whole_word = whole_word
        pattern = rf"\b(?:{query})\b" if whole_word else query
        # Case folding goes through the flag: lower-casing the pattern text would
        # turn escapes such as \S or \W into their opposites.
        flags = regex_mod.IGNORECASE if ignore_case else 0
        try:
            self._rx = _compile(pattern, flags)
        except regex_mod.error as e:
            raise InvalidPatternError(f"Invalid regular expression {query!r}: {e}", query) from e

    def matches(self, line: str) -> bool:
        return self._rx.search(line) is not None


@lru_cache(maxsize=64)
def _compile(pattern: str, flags: int) -> regex_mod.Pattern:
    return regex_mod.compile(pattern, flags=flags)


@lru_cache(maxsize=64)
def compile_matcher(query: str, config: SearchConfig) -> LineMatcher:
    """
    Select the matching strategy for ``config`` and build it for ``query``.

    Priority: regex (optionally word-bounded), then literal whole-word, then
    literal substring.

    Raises:
        InvalidPatternError: regex mode is on and ``query`` does not compile
    """
    if config.regex_enabled:
        return RegexMatcher(query, ignore_case=config.ignore_case, whole_word=config.whole_word)
    if config.whole_word:
        return WordMatcher(query, ignore_case=config.ignore_case)
    return LiteralMatcher(query, ignore_case=config.ignore_case)


def matches(line: str, query: str, config: SearchConfig) -> bool:
    """Decide whether a single line satisfies ``query``, ignoring ``invert_match``."""
    return compile_matcher(query, config).matches(line)
