"""Tests for writing pages to the output directory."""

import dataclasses
import os
from pathlib import Path

import pytest

from govanity_lib.errors import FilesystemError
from govanity_lib.resolver import ResolvedEntry
from govanity_lib.writer import CREATED, UNCHANGED, UPDATED, output_path, write_page

ENTRY = ResolvedEntry(
    key="cmd/foo",
    import_path="example.com/cmd/foo",
    repo="https://github.com/example/foo",
    vcs="git",
    redirect="https://godoc.org/example.com/cmd/foo",
    recurse=True,
)


@pytest.mark.unit
def test_output_path_strips_domain(tmp_path: Path) -> None:
    assert output_path("example.com/cmd/foo", str(tmp_path)) == str(tmp_path / "cmd" / "foo" / "index.html")
    assert output_path("foo", str(tmp_path)) == str(tmp_path / "foo" / "index.html")
    assert output_path("example.com/cmd/foo") == os.path.join("cmd", "foo", "index.html")


@pytest.mark.unit
def test_creates_then_skips_unchanged(tmp_path: Path) -> None:
    assert write_page(ENTRY, str(tmp_path)) == CREATED
    target = tmp_path / "cmd" / "foo" / "index.html"
    assert 'content="example.com/cmd/foo git https://github.com/example/foo"' in target.read_text()

    os.utime(target, (1_000_000, 1_000_000))
    assert write_page(ENTRY, str(tmp_path)) == UNCHANGED
    assert target.stat().st_mtime == 1_000_000


@pytest.mark.unit
def test_updates_changed_content(tmp_path: Path) -> None:
    write_page(ENTRY, str(tmp_path))
    changed = dataclasses.replace(ENTRY, vcs="hg")

    assert write_page(changed, str(tmp_path)) == UPDATED
    assert "example.com/cmd/foo hg " in (tmp_path / "cmd" / "foo" / "index.html").read_text()


@pytest.mark.unit
def test_verbose_lines(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    target = str(tmp_path / "cmd" / "foo" / "index.html")

    write_page(ENTRY, str(tmp_path), verbose=True)
    write_page(ENTRY, str(tmp_path), verbose=True)
    write_page(dataclasses.replace(ENTRY, redirect=""), str(tmp_path), verbose=True)

    assert capsys.readouterr().out.splitlines() == [f"creating {target}", f"updating {target}"]


@pytest.mark.unit
def test_quiet_by_default(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write_page(ENTRY, str(tmp_path))
    assert capsys.readouterr().out == ""


@pytest.mark.unit
def test_unreadable_existing_file_is_fatal(tmp_path: Path) -> None:
    # A directory where index.html should be cannot be read as a file.
    (tmp_path / "cmd" / "foo" / "index.html").mkdir(parents=True)
    with pytest.raises(FilesystemError):
        write_page(ENTRY, str(tmp_path))


@pytest.mark.unit
def test_output_dir_blocked_by_file(tmp_path: Path) -> None:
    (tmp_path / "cmd").write_text("not a directory")
    with pytest.raises(FilesystemError):
        write_page(ENTRY, str(tmp_path))
