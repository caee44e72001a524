"""
Command-line interface for pygrep.

Turns process arguments into a (query, root, SearchConfig) triple, runs the
search and prints the results. Fatal errors (an invalid regular expression, an
unreadable root) are reported on stderr with exit status 1. Finding nothing is
not an error.

Example Usage:
    Recursive search with line numbers:
        $ pygrep find -n "fn main" src

    Case-insensitive whole-word literal search in one file:
        $ pygrep find -i -w -F "todo" notes.txt

    JSON output with statistics:
        $ pygrep find --format json --stats "import \\w+" .
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from ..core.api import PyGrep
from ..core.config import MAX_FILE_BYTES, SearchConfig, WalkConfig
from ..core.types import OutputFormat
from ..utils.error_handling import SearchError, create_error_report
from ..utils.formatter import format_result, format_stats, render_highlight_console, report
from ..utils.logging_config import LogFormat, LogLevel, configure_logging


@click.group()
@click.version_option(package_name="pygrep")
def cli() -> None:
    """pygrep - line-oriented text search over files and directory trees"""
    pass


@cli.command("find")
@click.argument("query")
@click.argument("path", default=".")
@click.option("-i", "--ignore-case", is_flag=True, default=False, help="Match case-insensitively")
@click.option("-n", "--line-number", is_flag=True, default=False, help="Prefix lines with numbers")
@click.option("-v", "--invert-match", is_flag=True, default=False, help="Select non-matching lines")
@click.option("-w", "--whole-word", is_flag=True, default=False, help="Match whole words only")
@click.option(
    "-F", "--fixed-strings", is_flag=True, default=False, help="Treat QUERY as literal text"
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice([e.value for e in OutputFormat]),
    default=OutputFormat.TEXT.value,
    help="Output format",
)
@click.option("--stats", is_flag=True, default=False, help="Print search statistics to stderr")
@click.option("--workers", type=int, default=0, help="Worker threads (0 = CPU count)")
@click.option(
    "--max-filesize", type=int, default=MAX_FILE_BYTES, help="Skip files larger than this (bytes)"
)
@click.option("--no-ignore", is_flag=True, default=False, help="Do not honour .gitignore files")
@click.option("--hidden", is_flag=True, default=False, help="Search hidden directories too")
@click.option("--exclude", multiple=True, help="Exclude glob pattern (gitwildmatch), repeatable")
@click.option("--follow", is_flag=True, default=False, help="Follow symbolic links")
@click.option("--debug", is_flag=True, default=False, help="Enable debug logging")
@click.option(
    "--log-level",
    type=click.Choice([lvl.value for lvl in LogLevel]),
    default=LogLevel.WARNING.value,
    help="Log level",
)
@click.option("--log-file", help="Also write logs to this file")
@click.option(
    "--log-format",
    type=click.Choice([f.value for f in LogFormat]),
    default=LogFormat.SIMPLE.value,
    help="Log format",
)
@click.option("--show-errors", is_flag=True, default=False, help="Report skipped files on stderr")
def find_cmd(
    query: str,
    path: str,
    ignore_case: bool,
    line_number: bool,
    invert_match: bool,
    whole_word: bool,
    fixed_strings: bool,
    fmt: str,
    stats: bool,
    workers: int,
    max_filesize: int,
    no_ignore: bool,
    hidden: bool,
    exclude: tuple[str, ...],
    follow: bool,
    debug: bool,
    log_level: str,
    log_file: str | None,
    log_format: str,
    show_errors: bool,
) -> None:
    if debug:
        log_level = LogLevel.DEBUG.value
    configure_logging(
        level=LogLevel(log_level),
        format_type=LogFormat(log_format),
        log_file=Path(log_file) if log_file else None,
        enable_file=bool(log_file),
        enable_console=True,
    )

    cfg = SearchConfig.from_flags(
        ignore_case=ignore_case,
        line_number=line_number,
        invert_match=invert_match,
        whole_word=whole_word,
        fixed_strings=fixed_strings,
    )
    walk_cfg = WalkConfig(
        max_file_bytes=max_filesize,
        skip_hidden=not hidden,
        git_ignore=not no_ignore,
        exclude=list(exclude),
        follow_symlinks=follow,
        workers=workers,
    )
    engine = PyGrep(cfg, walk_cfg)
    root = Path(path)
    output = OutputFormat(fmt)

    try:
        result = engine.run(query, root)
    except SearchError as e:
        click.echo(f"Application error: {e}", err=True)
        sys.exit(1)

    if output == OutputFormat.JSON:
        sys.stdout.write(format_result(result, output))
        sys.stdout.write("\n")
    elif not root.is_dir():
        # single file: matched lines only, no header
        for fr in result.files:
            for line in fr.lines:
                sys.stdout.write(f"{line}\n")
    elif output == OutputFormat.HIGHLIGHT and sys.stdout.isatty():
        render_highlight_console(result, line_numbers=line_number)
    else:
        report(result, out=sys.stdout, header_out=sys.stderr)

    if stats:
        sys.stderr.write(format_stats(result.stats) + "\n")
    if show_errors:
        sys.stderr.write(create_error_report(engine.error_collector) + "\n")


def main() -> None:
    cli(prog_name="pygrep")


if __name__ == "__main__":
    main()
