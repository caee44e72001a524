from __future__ import annotations

import sys
from typing import TextIO

import orjson
from rich.console import Console
from rich.text import Text

from ..core.types import FileResult, OutputFormat, SearchResult, SearchStats

HEADER_PREFIX = "In file: "


def format_header(file_result: FileResult) -> str:
    return f"{HEADER_PREFIX}{file_result.path}"


def format_stats(stats: SearchStats) -> str:
    return (
        f"# files_scanned={stats.files_scanned} files_matched={stats.files_matched} "
        f"lines_matched={stats.lines_matched} files_skipped={stats.files_skipped} "
        f"elapsed_ms={stats.elapsed_ms:.2f}"
    )


def format_text(result: SearchResult) -> str:
    out: list[str] = []
    for fr in result.files:
        out.append("")
        out.append(format_header(fr))
        out.extend(fr.lines)
    return "\n".join(out)


def to_json_bytes(result: SearchResult) -> bytes:
    payload = {
        "files": [{"path": str(fr.path), "lines": fr.lines} for fr in result.files],
        "stats": {
            "files_scanned": result.stats.files_scanned,
            "files_matched": result.stats.files_matched,
            "lines_matched": result.stats.lines_matched,
            "files_skipped": result.stats.files_skipped,
            "elapsed_ms": result.stats.elapsed_ms,
        },
    }
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2)


def report(
    result: SearchResult,
    out: TextIO | None = None,
    header_out: TextIO | None = None,
) -> None:
    """
    Write each file's block: a blank line and header, then its matched lines.

    Headers go to ``header_out`` when given, so that ``out`` carries only the
    matched lines.
    """
    out = out or sys.stdout
    header_out = header_out or out
    for fr in result.files:
        header_out.write(f"\n{format_header(fr)}\n")
        header_out.flush()
        for line in fr.lines:
            out.write(f"{line}\n")
        out.flush()


def render_highlight_console(
    result: SearchResult, console: Console | None = None, line_numbers: bool = False
) -> None:
    console = console or Console()
    for fr in result.files:
        console.print(Text(format_header(fr), style="bold magenta"))
        for line in fr.lines:
            text = Text(line)
            if line_numbers:
                # "<n>:" prefix produced by the search engine
                prefix_len = line.find(":") + 1
                text.stylize("green", 0, prefix_len)
            console.print(text)
        console.print()


def format_result(result: SearchResult, fmt: OutputFormat) -> str:
    if fmt == OutputFormat.JSON:
        return to_json_bytes(result).decode("utf-8")
    return format_text(result)
