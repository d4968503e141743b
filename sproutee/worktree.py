"""Creating, listing, inspecting and removing Git worktrees."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

WORKTREE_DIR = ".git/sproutee-worktrees"

PathLike = str | os.PathLike


class WorktreeError(Exception):
    """Raised when a Git repository or worktree operation fails."""


@dataclass
class WorktreeInfo:
    """One entry of ``git worktree list --porcelain``."""

    path: str = ""
    branch: str = ""
    commit: str = ""


@dataclass
class WorktreeStatus:
    """Summary of uncommitted changes in a worktree."""

    has_unstaged_changes: bool = False
    has_staged_changes: bool = False
    has_untracked_files: bool = False
    changed_files: list[str] = field(default_factory=list)
    untracked_files: list[str] = field(default_factory=list)

    def is_clean(self) -> bool:
        """Return True when there are no staged, unstaged or untracked changes."""
        return not (
            self.has_unstaged_changes
            or self.has_staged_changes
            or self.has_untracked_files
        )

    def status_summary(self) -> str:
        """Return a one-line human-readable description of the status."""
        if self.is_clean():
            return "✅ Clean (no uncommitted changes)"

        issues = []
        if self.has_staged_changes:
            issues.append("staged changes")
        if self.has_unstaged_changes:
            issues.append("unstaged changes")
        if self.has_untracked_files:
            issues.append(f"{len(self.untracked_files)} untracked files")
        return "⚠️  " + ", ".join(issues)


def find_git_repository(start_dir: PathLike | None = None) -> Path:
    """Return the nearest directory at or above ``start_dir`` holding a ``.git`` entry.

    A ``.git`` directory counts, as does a ``.git`` file starting with ``gitdir: ``.
    ``start_dir`` defaults to the working directory.
    """
    current = Path(os.path.abspath(Path.cwd() if start_dir is None else start_dir))
    while True:
        git_path = current / ".git"
        if git_path.is_dir():
            return current
        if git_path.is_file():
            try:
                if git_path.read_bytes().startswith(b"gitdir: "):
                    return current
            except OSError:
                pass
        parent = current.parent
        if parent == current:
            break
        current = parent
    raise WorktreeError("not inside a Git repository")


def generate_timestamp() -> str:
    """Return the current local time as ``YYYYMMDD_HHMMSS``."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def parse_worktree_list(output: str) -> list[WorktreeInfo]:
    """Parse the output of ``git worktree list --porcelain``."""
    worktrees: list[WorktreeInfo] = []
    current = WorktreeInfo()

    for line in output.strip().split("\n"):
        if not line:
            if current.path:
                worktrees.append(current)
                current = WorktreeInfo()
            continue

        key, sep, value = line.partition(" ")
        if not sep:
            continue
        if key == "worktree":
            current.path = value
        elif key == "branch":
            current.branch = value.removeprefix("refs/heads/")
        elif key == "HEAD":
            current.commit = value

    if current.path:
        worktrees.append(current)
    return worktrees


def parse_status(output: str) -> WorktreeStatus:
    """Parse the output of ``git status --porcelain``."""
    status = WorktreeStatus()
    for line in output.strip().split("\n"):
        if len(line) < 2:
            continue

        index_status, tree_status = line[0], line[1]
        file_name = line[2:].strip()

        if index_status not in (" ", "?"):
            status.has_staged_changes = True
            status.changed_files.append(file_name)

        if tree_status not in (" ", "?"):
            status.has_unstaged_changes = True
            if file_name not in status.changed_files:
                status.changed_files.append(file_name)

        if index_status == "?" and tree_status == "?":
            status.has_untracked_files = True
            status.untracked_files.append(file_name)
    return status


def _git(cwd: PathLike, *args: str) -> subprocess.CompletedProcess[str]:
    """Run git in ``cwd`` with stdout and stderr combined; raise OSError if it cannot start."""
    return subprocess.run(
        ["git", *args],
        cwd=cwd,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        check=False,
    )


def _failure(message: str, result: subprocess.CompletedProcess[str]) -> WorktreeError:
    return WorktreeError(
        f"{message}: exit status {result.returncode}\nOutput: {result.stdout}"
    )


@dataclass
class Manager:
    """Worktree operations for the repository rooted at ``repo_root``."""

    repo_root: Path

    def __post_init__(self) -> None:
        self.repo_root = Path(self.repo_root)

    @classmethod
    def discover(cls) -> Manager:
        """Create a manager for the repository containing the working directory."""
        return cls(find_git_repository(Path.cwd()))

    def generate_worktree_dir_name(self, name: str) -> str:
        """Return ``name`` suffixed with the current timestamp."""
        return f"{name}_{generate_timestamp()}"

    def worktree_base_path(self) -> Path:
        """Return the directory under which new worktrees are created."""
        return self.repo_root / WORKTREE_DIR

    def _run(self, message: str, *args: str, cwd: PathLike | None = None) -> None:
        try:
            result = _git(self.repo_root if cwd is None else cwd, *args)
        except OSError as exc:
            raise WorktreeError(f"{message}: {exc}") from exc
        if result.returncode != 0:
            raise _failure(message, result)

    def _succeeds(self, *args: str) -> bool:
        try:
            return _git(self.repo_root, *args).returncode == 0
        except OSError:
            return False

    def _ensure_branch_exists(self, branch: str) -> None:
        if self._succeeds("rev-parse", "--verify", branch):
            return
        if self._succeeds("rev-parse", "--verify", f"origin/{branch}"):
            self._run(
                "failed to fetch remote branch", "fetch", "origin", f"{branch}:{branch}"
            )
            return
        self._run("failed to create new branch", "checkout", "-b", branch)
        self._succeeds("checkout", "-")

    def create_worktree(self, name: str, branch: str) -> Path:
        """Create a worktree for ``branch`` and return its path.

        The branch is fetched from ``origin`` or created if it does not exist.
        """
        try:
            self._ensure_branch_exists(branch)
        except WorktreeError as exc:
            raise WorktreeError(f"failed to ensure branch exists: {exc}") from exc

        dir_name = self.generate_worktree_dir_name(name)
        base_path = self.worktree_base_path()
        try:
            base_path.mkdir(mode=0o755, parents=True, exist_ok=True)
        except OSError as exc:
            raise WorktreeError(
                f"failed to create worktree base directory: {exc}"
            ) from exc

        worktree_path = base_path / dir_name
        self._run(
            "failed to create worktree", "worktree", "add", str(worktree_path), branch
        )
        return worktree_path

    def list_worktrees(self) -> list[WorktreeInfo]:
        """Return every worktree registered in the repository."""
        try:
            result = _git(self.repo_root, "worktree", "list", "--porcelain")
        except OSError as exc:
            raise WorktreeError(f"failed to list worktrees: {exc}") from exc
        if result.returncode != 0:
            raise WorktreeError(
                f"failed to list worktrees: exit status {result.returncode}"
            )
        return parse_worktree_list(result.stdout)

    def check_worktree_status(self, worktree_path: PathLike) -> WorktreeStatus:
        """Return the uncommitted-change status of the worktree at ``worktree_path``."""
        try:
            result = _git(worktree_path, "status", "--porcelain")
        except OSError as exc:
            raise WorktreeError(f"failed to check git status: {exc}") from exc
        if result.returncode != 0:
            raise WorktreeError(
                f"failed to check git status: exit status {result.returncode}"
            )
        return parse_status(result.stdout)

    def remove_worktree(self, worktree_path: PathLike) -> None:
        """Remove a clean worktree."""
        self._run(
            "failed to remove worktree", "worktree", "remove", os.fspath(worktree_path)
        )

    def force_remove_worktree(self, worktree_path: PathLike) -> None:
        """Remove a worktree even if it has uncommitted changes."""
        self._run(
            "failed to force remove worktree",
            "worktree",
            "remove",
            "--force",
            os.fspath(worktree_path),
        )