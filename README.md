# sproutee

A command-line tool for working with several Git branches side by side. It
creates Git worktrees under `.git/sproutee-worktrees/` in your repository and
copies the files you list into each new worktree. These are files such as
`.env` or local settings that Git does not track.

## Installation

```
pip install .
```

This installs the `sproutee` command. Git must be on your `PATH`.

## Configuration

To create an empty `sproutee.json` in the current directory, run:

```
sproutee config init
```

The command fails if the file already exists. In the file, list the files to
copy as paths relative to the repository root:

```json
{
  "copy_files": [
    ".env",
    "config/local.yml"
  ]
}
```

Sproutee looks for `sproutee.json` in the current directory first. If it is
not there, it looks in each parent directory in turn. The `copy_files` field
is required. A file where it is missing or `null` is rejected. To show the
current settings:

```
sproutee config list
```

## Creating a worktree

```
sproutee create <name> [branch]
```

The branch defaults to `HEAD`. If the branch does not exist locally, sproutee
checks `origin`:

- If the branch exists on `origin`, sproutee fetches it.
- Otherwise it creates a new local branch with `git checkout -b` and then
  switches back to the branch you were on.

The worktree goes in
`.git/sproutee-worktrees/<name>_<YYYYMMDD_HHMMSS>`. Sproutee then copies the
configured files into it, keeping their relative paths and file modes, and
prints a report of the files that were copied and of any that failed. If no
configuration file is found, sproutee prints a warning and the worktree is
kept.

These options open the new worktree in an editor:

| Option             | Editor             | Command started                                   |
|--------------------|--------------------|---------------------------------------------------|
| `--cursor`         | Cursor             | `cursor`                                          |
| `--vscode`         | VS Code            | `code`                                            |
| `--xcode`          | Xcode (macOS only) | `xed`                                             |
| `--android-studio` | Android Studio     | `open -a "Android Studio"` on macOS, `studio` on Windows, `studio.sh` on Linux |

If you give more than one of these options, only the first one in the table
is used.

`--dir PATH` opens a different directory in the editor instead of the worktree
root. A relative path is resolved from the worktree root. If the directory
does not exist, the editor opens the worktree root instead.

## Listing worktrees

```
sproutee list
```

This lists every worktree of the repository, including the main one. Each
entry shows the path, the branch and the first eight characters of the commit.

## Cleaning up

```
sproutee clean
```

Sproutee checks every worktree except the main one for staged, unstaged and
untracked changes. It then asks which worktrees to remove. You can answer with:

- numbers separated by commas, such as `1,3`. Numbers that are out of range
  are ignored.
- `clean`, to remove only the worktrees that have no changes
- `all`, to remove every worktree listed
- `cancel`, to stop without removing anything

Sproutee asks you to confirm each worktree that has uncommitted changes before
it removes it. It removes such a worktree with `git worktree remove --force`.

| Option      | Effect                                                              |
|-------------|---------------------------------------------------------------------|
| `--dry-run` | Show what would be removed, without removing anything.              |
| `--force`   | Remove worktrees that have changes without asking for confirmation. |

`clean` removes the worktree directories only. It does not delete any
branches.

## Using it from Python

The modules can also be used directly:

- `sproutee.config`
  - Handles `Config`.
  - Provides `load_config`, `load_config_from_current_dir`, `save_config`,
    `create_default_config_file` and `find_config_file`.
  - Raises `ConfigError`.
- `sproutee.filecopy`
  - Provides `copy_file`, `copy_file_with_structure`, `copy_files_from_config`
    and `copy_files_to_worktree`.
  - Returns a `CopyReport`, whose `summary_lines()` and `print_summary()`
    give the report text.
  - Raises `CopyError`.
- `sproutee.worktree`
  - `Manager` has `create_worktree`, `list_worktrees`,
    `check_worktree_status`, `remove_worktree` and `force_remove_worktree`.
  - `Manager.discover()` finds the repository from the working directory.
  - `parse_worktree_list` and `parse_status` read the porcelain output of
    `git worktree list` and `git status`.
  - Raises `WorktreeError`.
- `sproutee.cli`
  - `main(argv=None)` runs the command line and returns its exit status.
  - `editor_command(path, editor, system)` returns the command that would
    open an editor.

## Running the tests

```
pip install ".[test]"
pytest
```