import io

import pytest

from sproutee.config import CONFIG_FILE_NAME, Config
from sproutee.filecopy import (
    CopyError,
    CopyReport,
    CopyResult,
    copy_file,
    copy_file_with_structure,
    copy_files_from_config,
    copy_files_to_worktree,
    file_exists,
)


def test_file_exists(tmp_path):
    existing = tmp_path / "existing.txt"
    existing.write_text("test")
    assert file_exists(existing) is True
    assert file_exists(tmp_path / "nonexistent.txt") is False


def test_copy_file(tmp_path):
    src = tmp_path / "source.txt"
    src.write_text("test file content")
    dst = tmp_path / "subdir" / "destination.txt"

    copy_file(src, dst)

    assert file_exists(dst)
    assert dst.read_text() == "test file content"


def test_copy_file_missing_source(tmp_path):
    with pytest.raises(CopyError, match="failed to open source file"):
        copy_file(tmp_path / "missing.txt", tmp_path / "out.txt")
    assert not (tmp_path / "out.txt").exists()


def test_copy_file_with_structure(tmp_path):
    src_root = tmp_path / "src"
    target_root = tmp_path / "target"
    (src_root / "subdir").mkdir(parents=True)
    relative = "subdir/test.txt"
    (src_root / relative).write_text("structured file content")

    copy_file_with_structure(src_root, target_root, relative)

    target = target_root / relative
    assert target.read_text() == "structured file content"

    with pytest.raises(CopyError, match="source file does not exist"):
        copy_file_with_structure(src_root, target_root, "nonexistent/file.txt")


def test_copy_files_from_config(tmp_path):
    src_root = tmp_path / "src"
    target_root = tmp_path / "target"
    src_root.mkdir()
    (src_root / ".env").write_text("TEST=value")

    report = copy_files_from_config(
        src_root, target_root, Config(copy_files=[".env", ".nonexistent"])
    )

    assert report.total_files == 2
    assert report.success_count == 1
    assert report.failure_count == 1
    assert (target_root / ".env").read_text() == "TEST=value"
    assert not file_exists(target_root / ".nonexistent")
    assert [r.success for r in report.results] == [True, False]
    assert isinstance(report.results[1].error, CopyError)


def test_copy_report_add_result():
    report = CopyReport()
    report.add_result(CopyResult("/src/file1.txt", "/target/file1.txt", True))
    report.add_result(
        CopyResult("/src/file2.txt", "/target/file2.txt", False, FileNotFoundError())
    )

    assert report.total_files == 2
    assert report.success_count == 1
    assert report.failure_count == 1
    assert len(report.results) == 2


def test_summary_lines_empty():
    assert CopyReport().summary_lines() == ["📁 No files configured for copying."]


def test_summary_lines_mixed():
    report = CopyReport()
    report.add_result(CopyResult("/src/a/file1.txt", "/target/a/file1.txt", True))
    report.add_result(
        CopyResult("/src/file2.txt", "/target/file2.txt", False, CopyError("boom"))
    )

    assert report.summary_lines() == [
        "📁 File Copy Summary:",
        "   Total files: 2",
        "   ✅ Successful: 1",
        "   ❌ Failed: 1",
        "",
        "📋 Failed copies:",
        "   • /src/file2.txt → /target/file2.txt",
        "     Error: boom",
        "",
        "📋 Successfully copied files:",
        "   • file1.txt",
    ]


def test_print_summary_writes_lines():
    report = CopyReport()
    report.add_result(CopyResult("/src/x.txt", "/target/x.txt", True))
    out = io.StringIO()
    report.print_summary(out)
    assert out.getvalue() == "\n".join(report.summary_lines()) + "\n"


def test_copy_files_to_worktree(tmp_path, monkeypatch):
    repo = tmp_path / "repo"
    worktree = tmp_path / "wt"
    repo.mkdir()
    (repo / CONFIG_FILE_NAME).write_text('{"copy_files": ["conf/app.ini"]}')
    (repo / "conf").mkdir()
    (repo / "conf" / "app.ini").write_text("[app]")
    monkeypatch.chdir(repo)

    report = copy_files_to_worktree(repo, worktree)

    assert report.success_count == 1
    assert (worktree / "conf" / "app.ini").read_text() == "[app]"


def test_copy_files_to_worktree_invalid_config(tmp_path, monkeypatch):
    (tmp_path / CONFIG_FILE_NAME).write_text('{"copy_files": null}')
    monkeypatch.chdir(tmp_path)
    with pytest.raises(CopyError, match="failed to load configuration"):
        copy_files_to_worktree(tmp_path, tmp_path / "wt")