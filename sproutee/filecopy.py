"""Copying configured files from a repository into a new worktree."""

from __future__ import annotations

import os
import shutil
import sys
from contextlib import suppress
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from sproutee.config import Config, ConfigError, load_config_from_current_dir

PathLike = str | os.PathLike


class CopyError(Exception):
    """Raised when a file cannot be copied."""


@dataclass
class CopyResult:
    """Outcome of copying one configured file."""

    source_path: PathLike
    target_path: PathLike
    success: bool
    error: Exception | None = None


@dataclass
class CopyReport:
    """Collected outcomes of a copy run."""

    results: list[CopyResult] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return len(self.results)

    @property
    def success_count(self) -> int:
        return sum(1 for result in self.results if result.success)

    @property
    def failure_count(self) -> int:
        return sum(1 for result in self.results if not result.success)

    def add_result(self, result: CopyResult) -> None:
        """Record the outcome of one copy."""
        self.results.append(result)

    def summary_lines(self) -> list[str]:
        """Return the human-readable summary as a list of lines."""
        if self.total_files == 0:
            return ["📁 No files configured for copying."]

        lines = [
            "📁 File Copy Summary:",
            f"   Total files: {self.total_files}",
            f"   ✅ Successful: {self.success_count}",
        ]

        if self.failure_count > 0:
            lines += [f"   ❌ Failed: {self.failure_count}", "", "📋 Failed copies:"]
            for result in self.results:
                if not result.success:
                    lines.append(
                        f"   • {os.fspath(result.source_path)} → {os.fspath(result.target_path)}"
                    )
                    lines.append(f"     Error: {result.error}")

        if self.success_count > 0:
            lines += ["", "📋 Successfully copied files:"]
            for result in self.results:
                if result.success:
                    name = os.fspath(result.target_path).rsplit("/", 1)[-1]
                    lines.append(f"   • {name}")

        return lines

    def print_summary(self, file: TextIO | None = None) -> None:
        """Print the summary to ``file`` (standard output by default)."""
        out = sys.stdout if file is None else file
        for line in self.summary_lines():
            print(line, file=out)


def file_exists(file_path: PathLike) -> bool:
    """Return True if anything exists at ``file_path``."""
    return Path(file_path).exists()


def copy_file(src: PathLike, dst: PathLike) -> None:
    """Copy ``src`` to ``dst``, creating parent directories and keeping the mode."""
    try:
        source = open(src, "rb")
    except OSError as exc:
        raise CopyError(f"failed to open source file: {exc}") from exc

    with source:
        try:
            Path(dst).parent.mkdir(mode=0o755, parents=True, exist_ok=True)
        except OSError as exc:
            raise CopyError(f"failed to create target directory: {exc}") from exc

        try:
            target = open(dst, "wb")
        except OSError as exc:
            raise CopyError(f"failed to create target file: {exc}") from exc

        with target:
            try:
                shutil.copyfileobj(source, target)
            except OSError as exc:
                raise CopyError(f"failed to copy file content: {exc}") from exc

    with suppress(OSError):
        shutil.copymode(src, dst)


def copy_file_with_structure(
    src_root: PathLike, target_root: PathLike, relative_path: PathLike
) -> None:
    """Copy ``relative_path`` from ``src_root`` to the same place under ``target_root``."""
    src_path = Path(src_root) / relative_path
    dst_path = Path(target_root) / relative_path
    if not file_exists(src_path):
        raise CopyError(f"source file does not exist: {src_path}")
    copy_file(src_path, dst_path)


def copy_files_from_config(
    src_root: PathLike, target_root: PathLike, cfg: Config
) -> CopyReport:
    """Copy every file listed in ``cfg`` and report what happened to each."""
    report = CopyReport()
    for relative in cfg.copy_files or []:
        source_path = Path(src_root) / relative
        target_path = Path(target_root) / relative
        try:
            copy_file_with_structure(src_root, target_root, relative)
        except CopyError as exc:
            report.add_result(CopyResult(source_path, target_path, False, exc))
        else:
            report.add_result(CopyResult(source_path, target_path, True))
    return report


def copy_files_to_worktree(source_repo_root: PathLike, worktree_path: PathLike) -> CopyReport:
    """Load the configuration from the working directory and copy its files."""
    try:
        cfg = load_config_from_current_dir()
    except ConfigError as exc:
        raise CopyError(f"failed to load configuration: {exc}") from exc
    return copy_files_from_config(source_repo_root, worktree_path, cfg)