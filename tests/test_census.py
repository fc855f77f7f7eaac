"""Tests for the line census."""

import logging
import os

import pytest

from buildaudit.census.line_classifier import LineCount, classify_lines, count_file, is_fake_line
from buildaudit.census import walker
from buildaudit.census.walker import (
    DEFAULT_INCLUDES,
    census_roots,
    collect_files,
    count_directory,
    file_suffix,
    is_included,
    relative_to_basedir,
)


@pytest.mark.parametrize(
    "line",
    ["", "   ", "\t\n", "import java.util.List;", "  // note", "/* block", " * javadoc", "*/", "}", "  });"],
)
def test_fake_lines(line):
    assert is_fake_line(line)


@pytest.mark.parametrize("line", ["int x = 1;", "{", "public class A {", "return;"])
def test_real_lines(line):
    assert not is_fake_line(line)


def test_classify_lines_sums_to_total():
    lines = ["package a;", "", "import b;", "class A {", "  int x;", "}", "// end"]
    count = classify_lines(lines)
    assert count == LineCount(real=3, fake=4)
    assert count.total == len(lines)


def test_count_file(tmp_path):
    f = tmp_path / "A.java"
    f.write_text("\nimport foo;\nint x=1;\n}\n")
    assert count_file(f) == LineCount(real=1, fake=3)


def test_file_suffix():
    assert file_suffix("A.JAVA") == "java"
    assert file_suffix("archive.tar.gz") == "gz"
    assert file_suffix("Makefile") is None
    assert file_suffix(".gitignore") is None


def test_is_included():
    assert is_included("A.JAVA", DEFAULT_INCLUDES)
    assert is_included("db.properties", DEFAULT_INCLUDES)
    assert not is_included("Makefile", DEFAULT_INCLUDES)
    assert not is_included(".gitignore", {"gitignore"})
    assert not is_included("notes.md", DEFAULT_INCLUDES)


def test_collect_files_recurses(tmp_path):
    (tmp_path / "A.java").write_text("class A {}")
    deep = tmp_path / "com" / "example"
    deep.mkdir(parents=True)
    (deep / "B.java").write_text("class B {}")
    (deep / "readme.md").write_text("# B")
    # directories are walked whatever their name looks like
    odd = tmp_path / "res.xml"
    odd.mkdir()
    (odd / "c.sql").write_text("select 1;")

    names = sorted(p.name for p in collect_files(tmp_path, DEFAULT_INCLUDES))
    assert names == ["A.java", "B.java", "c.sql"]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
def test_collect_files_survives_symlink_loop(tmp_path):
    (tmp_path / "A.java").write_text("class A {}")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "B.java").write_text("class B {}")
    os.symlink(tmp_path, sub / "loop")

    names = sorted(p.name for p in collect_files(tmp_path, DEFAULT_INCLUDES))
    assert names == ["A.java", "B.java"]


def test_count_directory(tmp_path, caplog):
    root = tmp_path / "src" / "main" / "java"
    root.mkdir(parents=True)
    (root / "A.java").write_text("\nimport foo;\nint x=1;\n}\n")

    with caplog.at_level(logging.INFO):
        census = count_directory(root, tmp_path)

    assert census.lines == LineCount(real=1, fake=3)
    assert census.file_count == 1
    assert census.relative_path == os.sep + os.path.join("src", "main", "java")
    assert f"{census.relative_path} : 3 (1) lines of code in 1 files" in caplog.text


def test_count_directory_missing_root(tmp_path):
    assert count_directory(tmp_path / "nonexistent", tmp_path) is None


def test_census_roots_totals(tmp_path):
    main = tmp_path / "main"
    test = tmp_path / "test"
    main.mkdir()
    test.mkdir()
    (main / "A.java").write_text("int a;\nint b;\n")
    (test / "ATest.java").write_text("import x;\nint c;\n")
    (test / "data.xml").write_text("<a/>\n")

    report = census_roots([main, tmp_path / "missing", test], tmp_path)
    assert [d.relative_path for d in report.directories] == [os.sep + "main", os.sep + "test"]
    assert [d.file_count for d in report.directories] == [1, 2]
    assert report.total == LineCount(real=4, fake=1)


def test_census_respects_includes(tmp_path):
    (tmp_path / "A.java").write_text("int a;\n")
    (tmp_path / "b.py").write_text("x = 1\ny = 2\n")

    report = census_roots([tmp_path], tmp_path, frozenset({"py"}))
    assert report.total == LineCount(real=2, fake=0)
    assert report.directories[0].relative_path == ""


def test_only_ascii_control_and_space_are_trimmed():
    assert is_fake_line("\t \x0b}\r\n")
    # NBSP is not trimmed, so the line does not start with "}"
    assert not is_fake_line("\u00a0}")


def test_file_root_is_counted(tmp_path):
    f = tmp_path / "Single.java"
    f.write_text("int a;\n// b\n")
    assert collect_files(f, DEFAULT_INCLUDES) == [f]
    assert collect_files(f, frozenset({"xml"})) == []

    census = count_directory(f, tmp_path)
    assert census.file_count == 1
    assert census.lines == LineCount(real=1, fake=1)


def test_relative_path_needs_whole_components(tmp_path):
    basedir = tmp_path / "app"
    sibling = tmp_path / "app-extra" / "src"
    assert relative_to_basedir(sibling, basedir) == str(sibling.absolute())
    assert relative_to_basedir(basedir / "src", basedir) == os.sep + "src"
    assert relative_to_basedir(basedir, basedir) == ""


def test_unreadable_file_counts_as_zero(tmp_path, monkeypatch, caplog):
    (tmp_path / "A.java").write_text("int a;\n")
    (tmp_path / "B.java").write_text("int b;\nint c;\n")
    real_count_file = walker.count_file

    def flaky(path):
        if path.name == "A.java":
            raise OSError("permission denied")
        return real_count_file(path)

    monkeypatch.setattr(walker, "count_file", flaky)
    with caplog.at_level(logging.ERROR):
        census = count_directory(tmp_path, tmp_path)

    assert census.lines == LineCount(real=2, fake=0)
    assert census.file_count == 2
    assert "A.java" in caplog.text
