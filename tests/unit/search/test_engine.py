"""Tests for pygrep.search.engine module."""

from __future__ import annotations

import itertools
from pathlib import Path

import pytest

from pygrep.core.config import SearchConfig
from pygrep.core.types import MatchLine
from pygrep.search.engine import (
    format_output,
    read_file,
    search,
    search_in_file,
    split_lines,
)
from pygrep.utils.error_handling import EncodingError, FileAccessError, InvalidPatternError


def cfg(**kwargs) -> SearchConfig:
    kwargs.setdefault("regex_enabled", False)
    return SearchConfig(**kwargs)


class TestSearch:
    def test_case_sensitive(self):
        contents = "Rust:\nsafe, fast, productive.\nPick three.\nDuct tape"
        assert search("duct", contents, cfg()) == ["safe, fast, productive."]

    def test_case_insensitive_preserves_original_text(self):
        contents = "Rust:\nsafe, fast, productive.\nTrust me."
        assert search("rUsT", contents, cfg(ignore_case=True)) == ["Rust:", "Trust me."]

    def test_line_number(self):
        contents = "Rust:\nsafe, fast, productive.\nPick three."
        assert search("fast", contents, cfg(line_number=True)) == ["2:safe, fast, productive."]

    def test_case_insensitive_with_line_number(self):
        contents = "Rust:\nsafe, fast, productive.\nTrust me."
        result = search("rust", contents, cfg(ignore_case=True, line_number=True))
        assert result == ["1:Rust:", "3:Trust me."]

    def test_invert_match(self):
        contents = "Rust:\nsafe, fast, productive.\nPick three.\nTrust me."
        result = search("fast", contents, SearchConfig(invert_match=True))
        assert result == ["Rust:", "Pick three.", "Trust me."]

    def test_invert_match_keeps_original_line_numbers(self):
        contents = "Rust:\nsafe, fast, productive.\nPick three.\nTrust me."
        result = search("fast", contents, SearchConfig(invert_match=True, line_number=True))
        assert result == ["1:Rust:", "3:Pick three.", "4:Trust me."]

    def test_whole_word_regex(self):
        contents = "Rust language\nTrust me with rust\nrust is great\nrusty old car"
        result = search("rust", contents, SearchConfig(ignore_case=True, whole_word=True))
        assert result == ["Rust language", "Trust me with rust", "rust is great"]

    def test_whole_word_no_partial(self):
        contents = "I care about cars\nCareful with the car\nscar on my arm"
        assert search("car", contents, SearchConfig(whole_word=True)) == ["Careful with the car"]

    def test_whole_word_with_line_number(self):
        contents = "Trust me\nSome text here\nMeet me at home\nWelcome to the party"
        result = search("me", contents, SearchConfig(whole_word=True, line_number=True))
        assert result == ["1:Trust me", "3:Meet me at home"]

    def test_invert_and_whole_word(self):
        contents = "Rust language\nTrust me with rust\nrust is great\nrusty old car\nPython programming"
        config = SearchConfig(ignore_case=True, invert_match=True, whole_word=True)
        assert search("rust", contents, config) == ["rusty old car", "Python programming"]

    def test_whole_word_with_punctuation(self):
        contents = "This is a test.\nTesting phase\ntest,case\n(test)\ntest!\ntesting123"
        result = search("test", contents, SearchConfig(whole_word=True))
        assert result == ["This is a test.", "test,case", "(test)", "test!"]

    def test_literal_whole_word_with_punctuation(self):
        contents = "This is a test.\ntesting123\n(test)\ntest,case"
        result = search("test", contents, cfg(whole_word=True))
        assert result == ["This is a test.", "(test)", "test,case"]

    def test_regex(self):
        contents = "Rust programming\nPython code\nTrust me\nrest well"
        assert search(r"r.st", contents, SearchConfig()) == ["Trust me", "rest well"]

    def test_regex_case_insensitive(self):
        contents = "Rust programming\nPython code\nTrust with rust"
        result = search("RUST", contents, SearchConfig(ignore_case=True))
        assert result == ["Rust programming", "Trust with rust"]

    def test_invalid_regex_raises(self):
        with pytest.raises(InvalidPatternError):
            search("*", "some text\nto search through", SearchConfig())

    def test_empty_query_matches_every_line(self):
        assert search("", "a\nb\n\nc", cfg()) == ["a", "b", "", "c"]

    def test_crlf_lines(self):
        assert search("b", "a\r\nb\r\nc\r\n", cfg(line_number=True)) == ["2:b"]

    @pytest.mark.parametrize("sep", ["\x0c", "\x0b", "\x1c", "\x85", "\u2028", "\u2029"])
    def test_only_newline_splits_lines(self, sep):
        contents = f"int a;{sep} page\nneedle\n"
        assert search("needle", contents, cfg(line_number=True)) == ["2:needle"]

    def test_form_feed_stays_in_line(self):
        assert search("needle", "abc\x0cneedle\n", cfg()) == ["abc\x0cneedle"]


class TestSplitLines:
    def test_trailing_newline_adds_no_line(self):
        assert split_lines("a\nb\n") == ["a", "b"]

    def test_blank_lines_are_kept(self):
        assert split_lines("a\n\n\nb") == ["a", "", "", "b"]

    def test_crlf(self):
        assert split_lines("a\r\nb\r\n") == ["a", "b"]

    def test_lone_carriage_return_is_text(self):
        assert split_lines("a\rb\nc") == ["a\rb", "c"]

    def test_single_newline(self):
        assert split_lines("\n") == [""]


class TestEmptyContents:
    @pytest.mark.parametrize(
        "flags", list(itertools.product([False, True], repeat=5))
    )
    def test_empty_contents_for_all_configs(self, flags):
        config = SearchConfig(*flags)
        assert search("a", "", config) == []

    def test_empty_contents_do_not_compile_query(self):
        assert search("*", "", SearchConfig(regex_enabled=True)) == []


class TestInversionLaw:
    @pytest.mark.parametrize(
        "query,regex,whole_word,ignore_case",
        [
            ("fast", False, False, False),
            ("RUST", True, False, True),
            ("me", True, True, False),
            ("test", False, True, False),
        ],
    )
    def test_partition(self, query, regex, whole_word, ignore_case):
        contents = "Rust:\nsafe, fast, productive.\nTrust me.\n(test)\ntesting\n\nMeet me"
        base = dict(
            line_number=True,
            regex_enabled=regex,
            whole_word=whole_word,
            ignore_case=ignore_case,
        )
        selected = set(search(query, contents, SearchConfig(invert_match=False, **base)))
        rejected = set(search(query, contents, SearchConfig(invert_match=True, **base)))
        everything = set(search("", contents, cfg(line_number=True)))
        assert selected | rejected == everything
        assert selected & rejected == set()


class TestFormatOutput:
    def test_plain(self):
        assert format_output(MatchLine(3, "x"), SearchConfig()) == "x"

    def test_numbered(self):
        assert format_output(MatchLine(12, "x:y"), SearchConfig(line_number=True)) == "12:x:y"


class TestFiles:
    def test_search_in_file(self, tmp_path: Path):
        p = tmp_path / "poem.txt"
        p.write_text("Rust:\nsafe, fast, productive.\nPick three.\n", encoding="utf-8")
        assert search_in_file(p, "fast", SearchConfig(line_number=True)) == [
            "2:safe, fast, productive."
        ]

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileAccessError):
            search_in_file(tmp_path / "missing.txt", "x", SearchConfig())

    def test_undecodable_file(self, tmp_path: Path):
        p = tmp_path / "latin.txt"
        p.write_bytes(b"caf\xe9\n")
        with pytest.raises(EncodingError):
            read_file(p)
        assert read_file(p, encoding="latin-1") == "café\n"
