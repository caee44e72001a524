"""
Eligibility checks for files found during a directory walk.

A file is eligible for searching when it is a regular file, is not larger than
the size ceiling, does not look binary, and is not excluded by the path rules
(hidden directories below the root, ``.gitignore`` files, extra exclude
patterns). Any filesystem error raised while probing makes the file ineligible;
such errors are recorded and logged, never raised.

Binary detection only looks for a NUL byte in the first ``sniff_bytes`` bytes.
Binary files without an early NUL byte slip through; that is accepted.
"""

from __future__ import annotations

import stat
from pathlib import Path

import pathspec

from ..core.config import SNIFF_BYTES, WalkConfig
from ..core.types import EntryKind
from ..utils.error_handling import ErrorCollector, FilterProbeError
from ..utils.logging_config import SearchLogger, get_logger

GITIGNORE_FILE = ".gitignore"


def is_binary(path: Path, sniff_bytes: int = SNIFF_BYTES) -> bool:
    """Return True if the first ``sniff_bytes`` bytes of ``path`` contain a NUL byte."""
    with path.open("rb") as f:
        return b"\x00" in f.read(sniff_bytes)


def is_hidden_name(name: str) -> bool:
    return name.startswith(".") and name not in (".", "..")


def classify_entry(path: Path, follow_symlinks: bool = False) -> EntryKind:
    st = path.stat() if follow_symlinks else path.lstat()
    if stat.S_ISREG(st.st_mode):
        return EntryKind.FILE
    if stat.S_ISDIR(st.st_mode):
        return EntryKind.DIRECTORY
    if stat.S_ISLNK(st.st_mode):
        return EntryKind.SYMLINK
    return EntryKind.OTHER


class FileFilter:
    """Decides which entries under ``root`` are searched."""

    def __init__(
        self,
        root: Path | str,
        config: WalkConfig | None = None,
        error_collector: ErrorCollector | None = None,
        logger: SearchLogger | None = None,
    ) -> None:
        self.root = Path(root)
        self.config = config or WalkConfig()
        self.error_collector = error_collector
        self.logger = logger or get_logger()
        self._exclude_spec = (
            pathspec.PathSpec.from_lines("gitwildmatch", self.config.exclude)
            if self.config.exclude
            else None
        )
        self._ignore_specs: dict[Path, pathspec.PathSpec | None] = {}

    def eligible(self, path: Path | str) -> bool:
        path = Path(path)
        try:
            if classify_entry(path, self.config.follow_symlinks) is not EntryKind.FILE:
                return False
            if self.is_excluded(path, is_dir=False):
                return False
            if path.stat().st_size > self.config.max_file_bytes:
                self.logger.debug(f"Skipping oversized file: {path}", file_path=str(path))
                return False
            if is_binary(path, self.config.sniff_bytes):
                self.logger.debug(f"Skipping binary file: {path}", file_path=str(path))
                return False
        except OSError as e:
            self._record_probe_error(path, e)
            return False
        return True

    def is_excluded(self, path: Path, is_dir: bool) -> bool:
        """Apply the path rules. The root itself is never excluded."""
        try:
            rel = path.relative_to(self.root)
        except ValueError:
            return False
        parts = rel.parts
        if not parts:
            return False

        if self.config.skip_hidden:
            dir_parts = parts if is_dir else parts[:-1]
            if any(is_hidden_name(p) for p in dir_parts):
                return True

        suffix = "/" if is_dir else ""
        if self._exclude_spec is not None and self._exclude_spec.match_file(
            rel.as_posix() + suffix
        ):
            return True

        if self.config.git_ignore:
            return self._gitignored(parts, suffix)
        return False

    def _gitignored(self, parts: tuple[str, ...], suffix: str) -> bool:
        # the deepest .gitignore with a matching pattern decides, so "!keep.log"
        # in a subdirectory re-includes what a parent directory ignored
        bases = [self.root]
        for part in parts[:-1]:
            bases.append(bases[-1] / part)
        for depth in range(len(parts) - 1, -1, -1):
            spec = self._gitignore_spec(bases[depth])
            if spec is None:
                continue
            include = spec.check_file("/".join(parts[depth:]) + suffix).include
            if include is not None:
                return include
        return False

    def _gitignore_spec(self, directory: Path) -> pathspec.PathSpec | None:
        if directory in self._ignore_specs:
            return self._ignore_specs[directory]
        spec = None
        ignore_file = directory / GITIGNORE_FILE
        try:
            if ignore_file.is_file():
                lines = ignore_file.read_text(encoding="utf-8", errors="replace").splitlines()
                spec = pathspec.PathSpec.from_lines("gitwildmatch", lines)
        except OSError as e:
            self._record_probe_error(ignore_file, e)
        self._ignore_specs[directory] = spec
        return spec

    def _record_probe_error(self, path: Path, exc: OSError) -> None:
        error = FilterProbeError(f"Cannot probe {path}: {exc}", path)
        if self.error_collector is not None:
            self.error_collector.add_error(error)
        self.logger.log_file_error(str(path), str(error), operation="probe")
