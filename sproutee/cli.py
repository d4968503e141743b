"""Command-line interface for managing Git worktrees."""

from __future__ import annotations

import argparse
import os
import re
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from sproutee.config import (
    CONFIG_FILE_NAME,
    ConfigError,
    create_default_config_file,
    load_config_from_current_dir,
)
from sproutee.filecopy import CopyError, copy_files_to_worktree
from sproutee.worktree import Manager, WorktreeError, WorktreeInfo, WorktreeStatus

_DESCRIPTION = """Sproutee is a CLI tool that automates worktree creation and
copies specified files to new worktrees based on configuration.

It helps manage multiple branches efficiently by creating worktrees
in .git/sproutee-worktrees/ directory and automatically copying configured files."""

_EDITORS = (
    ("cursor", "Cursor"),
    ("vscode", "VS Code"),
    ("xcode", "Xcode"),
    ("android-studio", "Android Studio"),
)

_NUMBER = re.compile(r"[+-]?\d+")


@dataclass
class _Analysis:
    info: WorktreeInfo
    status: WorktreeStatus
    index: int


def _current_system() -> str:
    if sys.platform == "darwin":
        return "darwin"
    if sys.platform.startswith("win"):
        return "windows"
    if sys.platform.startswith("linux"):
        return "linux"
    return sys.platform


def editor_command(path: str, editor: str, system: str | None = None) -> list[str]:
    """Return the command line that opens ``path`` in ``editor`` on ``system``.

    ``system`` is one of ``darwin``, ``windows`` or ``linux`` and defaults to
    the running platform. Raises ValueError for unsupported combinations.
    """
    system = _current_system() if system is None else system
    path = os.fspath(path)
    desktop = ("darwin", "windows", "linux")

    if editor == "cursor":
        if system in desktop:
            return ["cursor", path]
        raise ValueError(f"unsupported operating system: {system}")
    if editor == "vscode":
        if system in desktop:
            return ["code", path]
        raise ValueError(f"unsupported operating system: {system}")
    if editor == "xcode":
        if system == "darwin":
            return ["xed", path]
        raise ValueError("Xcode is only available on macOS")
    if editor == "android-studio":
        if system == "darwin":
            return ["open", "-a", "Android Studio", path]
        if system == "windows":
            return ["studio", path]
        if system == "linux":
            return ["studio.sh", path]
        raise ValueError(f"unsupported operating system: {system}")
    raise ValueError(f"unsupported editor: {editor}")


def open_in_editor(path: str, editor: str) -> None:
    """Start ``editor`` on ``path`` without waiting for it to exit."""
    subprocess.Popen(editor_command(path, editor))


def parse_selection(choice: str, analyses: Sequence) -> list | None:
    """Turn the user's answer into the selected analyses.

    Returns None when the user cancels. ``all`` selects everything, ``clean``
    selects entries whose status is clean, and otherwise comma-separated
    numbers (1-based) pick entries; numbers out of range are ignored.
    """
    choice = choice.strip()
    if choice == "cancel":
        return None
    if choice == "all":
        return list(analyses)
    if choice == "clean":
        return [analysis for analysis in analyses if analysis.status.is_clean()]

    selected = []
    for part in choice.split(","):
        part = part.strip()
        if not _NUMBER.fullmatch(part):
            continue
        idx = int(part)
        if 1 <= idx <= len(analyses):
            selected.append(analyses[idx - 1])
    return selected


def _error(message: object) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1


def _run_root(args: argparse.Namespace) -> int:
    print("Sproutee - Git Worktree Management Tool")
    print("Use 'sproutee --help' for more information.")
    return 0


def _resolve_target(worktree_path: Path, custom_dir: str) -> Path:
    if not custom_dir:
        return worktree_path
    target = Path(custom_dir) if os.path.isabs(custom_dir) else worktree_path / custom_dir
    if not target.exists():
        print(
            f"Warning: Directory '{target}' does not exist, using worktree root instead"
        )
        return worktree_path
    return target


def _run_create(args: argparse.Namespace) -> int:
    try:
        manager = Manager.discover()
    except WorktreeError as exc:
        return _error(exc)

    print(f"Creating worktree '{args.name}' from branch '{args.branch}'...")
    try:
        worktree_path = manager.create_worktree(args.name, args.branch)
    except WorktreeError as exc:
        return _error(exc)

    print(f"✅ Worktree created successfully at: {worktree_path}")
    print("\n📁 Copying configured files...")
    try:
        report = copy_files_to_worktree(manager.repo_root, worktree_path)
    except CopyError as exc:
        print(f"Warning: Failed to copy files: {exc}", file=sys.stderr)
    else:
        report.print_summary()

    custom_dir = args.dir or ""
    target = _resolve_target(worktree_path, custom_dir)

    for editor, label in _EDITORS:
        if not getattr(args, editor.replace("-", "_")):
            continue
        print(f"\n🚀 Opening {label}...")
        if custom_dir:
            print(f"📁 Target directory: {target}")
        try:
            open_in_editor(str(target), editor)
        except (ValueError, OSError) as exc:
            print(f"Warning: Failed to open {label}: {exc}", file=sys.stderr)
        else:
            print(f"✅ {label} opened successfully")
        break
    return 0


def _run_config_init(args: argparse.Namespace) -> int:
    try:
        config_path = Path.cwd() / CONFIG_FILE_NAME
    except OSError as exc:
        return _error(f"Failed to get current directory: {exc}")
    try:
        create_default_config_file(config_path)
    except ConfigError as exc:
        return _error(exc)
    print(f"Configuration file created: {config_path}")
    print(
        "You can now customize the file to specify which files to copy to new worktrees."
    )
    return 0


def _run_config_list(args: argparse.Namespace) -> int:
    try:
        cfg = load_config_from_current_dir()
    except ConfigError as exc:
        return _error(exc)
    files = cfg.copy_files or []
    print("Current configuration:")
    print(f"Files to copy: {len(files)}")
    for number, name in enumerate(files, start=1):
        print(f"  {number}. {name}")
    return 0


def _run_list(args: argparse.Namespace) -> int:
    try:
        manager = Manager.discover()
        worktrees = manager.list_worktrees()
    except WorktreeError as exc:
        return _error(exc)

    if not worktrees:
        print("No worktrees found.")
        return 0

    print(f"Found {len(worktrees)} worktree(s):")
    for number, wt in enumerate(worktrees, start=1):
        line = f"  {number}. {wt.path}"
        if wt.branch:
            line += f" (branch: {wt.branch})"
        if wt.commit:
            line += f" [{wt.commit[:8]}]"
        print(line)
    return 0


def _analyse(manager: Manager, worktrees: list[WorktreeInfo], force: bool) -> list[_Analysis]:
    analyses = []
    for number, wt in enumerate(worktrees, start=1):
        print(f"Checking {number}. {os.path.basename(wt.path)}...")
        try:
            status = manager.check_worktree_status(wt.path)
        except WorktreeError as exc:
            print(f"   ❌ Error checking status: {exc}")
            continue

        analyses.append(_Analysis(wt, status, number))
        print(f"   {status.status_summary()}")
        if not status.is_clean() and not force:
            if status.has_staged_changes or status.has_unstaged_changes:
                print(f"   📝 Changed files: {', '.join(status.changed_files)}")
            if status.has_untracked_files:
                print(f"   📄 Untracked files: {', '.join(status.untracked_files)}")
        print()
    return analyses


def _remove_selected(manager: Manager, selected: list[_Analysis], force: bool) -> None:
    print(f"\n🗑️  Removing {len(selected)} worktree(s):")
    for analysis in selected:
        name = os.path.basename(analysis.info.path)
        print(f"\n🔄 Processing: {name}")
        clean = analysis.status.is_clean()

        if not clean and not force:
            print("⚠️  This worktree has uncommitted changes!")
            print(f"   {analysis.status.status_summary()}")
            print("   Continue with deletion? (y/N): ", end="", flush=True)
            if sys.stdin.readline().strip().lower() != "y":
                print("   ⏭️  Skipped.")
                continue

        try:
            if force or not clean:
                manager.force_remove_worktree(analysis.info.path)
            else:
                manager.remove_worktree(analysis.info.path)
        except WorktreeError as exc:
            print(f"   ❌ Failed: {exc}")
        else:
            print(f"   ✅ Deleted: {name}")


def _run_clean(args: argparse.Namespace) -> int:
    try:
        manager = Manager.discover()
        worktrees = manager.list_worktrees()
    except WorktreeError as exc:
        return _error(exc)

    root = os.fspath(manager.repo_root)
    cleanable = [wt for wt in worktrees if wt.path != root]
    if not cleanable:
        print("📁 No additional worktrees found to clean.")
        return 0

    print(f"🔍 Found {len(cleanable)} worktree(s) to analyze:\n")
    analyses = _analyse(manager, cleanable, args.force)
    if not analyses:
        print("❌ No worktrees could be analyzed.")
        return 0

    if args.dry_run:
        print("🔍 Dry run - no worktrees will be deleted:")
        for analysis in analyses:
            outcome = "would delete"
            if not analysis.status.is_clean() and not args.force:
                outcome = "would require confirmation"
            print(
                f"   {analysis.index}. {os.path.basename(analysis.info.path)} - {outcome}"
            )
        return 0

    print("💡 Select worktrees to delete:")
    print("   - Enter numbers separated by commas (e.g., 1,3,5)")
    print("   - Enter 'clean' to delete only clean worktrees")
    print("   - Enter 'all' to delete all worktrees")
    print("   - Enter 'cancel' to abort")
    if not args.force:
        print("   ⚠️  Worktrees with uncommitted changes will require confirmation")
    print("\nYour choice: ", end="", flush=True)

    choice = sys.stdin.readline().strip()
    selected = parse_selection(choice, analyses)
    if selected is None:
        print("❌ Operation cancelled.")
        return 0
    if choice == "clean" and not selected:
        print("📁 No clean worktrees found.")
        return 0
    if not selected:
        print("❌ No valid worktrees selected.")
        return 0

    _remove_selected(manager, selected, args.force)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``sproutee`` command."""
    parser = argparse.ArgumentParser(
        prog="sproutee",
        description=_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.set_defaults(func=_run_root)
    commands = parser.add_subparsers(title="commands", metavar="<command>")

    create = commands.add_parser(
        "create",
        help="Create a new worktree with file copying",
        description="Create a new Git worktree with the specified name and optionally "
        "from a specific branch. Files specified in the configuration will be "
        "automatically copied to the new worktree.",
    )
    create.add_argument("name")
    create.add_argument("branch", nargs="?", default="HEAD")
    create.add_argument(
        "--cursor",
        action="store_true",
        help="Automatically open the created worktree in Cursor",
    )
    create.add_argument(
        "--vscode",
        action="store_true",
        help="Automatically open the created worktree in VS Code",
    )
    create.add_argument(
        "--xcode",
        action="store_true",
        help="Automatically open the created worktree in Xcode (macOS only)",
    )
    create.add_argument(
        "--android-studio",
        action="store_true",
        help="Automatically open the created worktree in Android Studio",
    )
    create.add_argument(
        "--dir",
        default="",
        help="Specify directory to open in editor (absolute or relative path)",
    )
    create.set_defaults(func=_run_create)

    config = commands.add_parser(
        "config",
        help="Configuration management commands",
        description="Manage Sproutee configuration files and settings.",
    )
    config.set_defaults(func=lambda args: (config.print_help(), 0)[1])
    config_commands = config.add_subparsers(title="commands", metavar="<command>")
    config_init = config_commands.add_parser(
        "init",
        help="Initialize configuration file",
        description="Create a default sproutee.json configuration file in the current directory.",
    )
    config_init.set_defaults(func=_run_config_init)
    config_list = config_commands.add_parser(
        "list",
        help="Show configuration",
        description="Display the current configuration settings.",
    )
    config_list.set_defaults(func=_run_config_list)

    list_cmd = commands.add_parser(
        "list",
        help="List existing worktrees",
        description="Display all existing worktrees created by Sproutee.",
    )
    list_cmd.set_defaults(func=_run_list)

    clean = commands.add_parser(
        "clean",
        help="Clean up worktrees",
        description="Remove unused or orphaned worktrees. Interactive selection with "
        "safety checks for uncommitted changes.",
    )
    clean.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be deleted without actually deleting",
    )
    clean.add_argument(
        "--force",
        action="store_true",
        help="Force deletion without confirmation for worktrees with uncommitted changes",
    )
    clean.set_defaults(func=_run_clean)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return its exit status."""
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())