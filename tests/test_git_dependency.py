import hashlib
import os
import subprocess
import sys
from pathlib import Path
from unittest import mock

import pytest

from zyn import git_dependency as gd


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _completed(code=0, stdout=""):
    return subprocess.CompletedProcess([], code, stdout=stdout)


def test_exec_command_strips_trailing_whitespace():
    assert gd.exec_command([sys.executable, "-c", "print('hello  ')"]) == "hello"


def test_hash_directory_of_empty_tree_is_empty_digest(tmp_path):
    assert gd.hash_directory(tmp_path) == hashlib.sha256(b"").hexdigest()


def test_hash_directory_single_file(tmp_path):
    (tmp_path / "a.cpp").write_bytes(b"int x;")
    assert gd.hash_directory(tmp_path) == hashlib.sha256(b"int x;").hexdigest()


def test_hash_directory_ignores_other_files(tmp_path):
    (tmp_path / "a.h").write_text("header")
    before = gd.hash_directory(tmp_path)
    (tmp_path / "notes.txt").write_text("ignored")
    assert gd.hash_directory(tmp_path) == before


def test_hash_directory_includes_cmakelists(tmp_path):
    before = gd.hash_directory(tmp_path)
    (tmp_path / "CMakeLists.txt").write_text("project(x)")
    assert gd.hash_directory(tmp_path) != before


def test_hash_directory_depends_on_file_order(tmp_path):
    first, second = tmp_path / "one", tmp_path / "two"
    first.mkdir()
    second.mkdir()
    (first / "a.h").write_text("1")
    (first / "b.h").write_text("2")
    (second / "a.h").write_text("2")
    (second / "b.h").write_text("1")
    assert gd.hash_directory(first) != gd.hash_directory(second)


def test_write_lock_format_and_check_lock(workdir):
    gd.write_lock(Path(".zyn/lock/foo.lock"), "abc", "def")
    assert Path(".zyn/lock/foo.lock").read_text() == "rev=abc\nsha256=def\n"
    assert gd.check_lock("foo", "abc", "def") is True
    assert gd.check_lock("foo", "other", "def") is False


def test_check_lock_missing_file(workdir):
    assert gd.check_lock("nothing", "abc", "def") is False


def test_check_lock_strict_accepts_matching_lock(workdir):
    gd.write_lock(Path(".zyn/lock/foo.lock"), "abc", "def")
    assert gd.check_lock_strict("foo", "abc", "def") is True


def test_check_lock_strict_missing(workdir, capsys):
    assert gd.check_lock_strict("foo", "abc", "def") is False
    assert "Missing lock file for: foo" in capsys.readouterr().err


def test_check_lock_strict_rejects_unknown_line(workdir, capsys):
    lock = Path(".zyn/lock/foo.lock")
    lock.parent.mkdir(parents=True)
    lock.write_text("rev=abc\nsha256=def\nextra\n")
    assert gd.check_lock_strict("foo", "abc", "def") is False
    assert "Invalid line in lock file: extra" in capsys.readouterr().err


def test_check_lock_strict_needs_two_lines(workdir, capsys):
    lock = Path(".zyn/lock/foo.lock")
    lock.parent.mkdir(parents=True)
    lock.write_text("rev=abc\n")
    assert gd.check_lock_strict("foo", "abc", "def") is False
    assert "exactly two valid lines" in capsys.readouterr().err


def test_check_lock_strict_hash_mismatch(workdir, capsys):
    gd.write_lock(Path(".zyn/lock/foo.lock"), "abc", "def")
    assert gd.check_lock_strict("foo", "abc", "xyz") is False
    assert "hash mismatch" in capsys.readouterr().err


def test_find_include_dirs(tmp_path):
    (tmp_path / "a" / "include").mkdir(parents=True)
    (tmp_path / "b" / "Include").mkdir(parents=True)
    (tmp_path / "c" / "inc").mkdir(parents=True)
    found = gd.find_include_dirs(tmp_path)
    assert sorted(found) == sorted(
        [os.path.join(str(tmp_path), "a", "include"), os.path.join(str(tmp_path), "b", "Include")]
    )


def test_find_include_dirs_missing_base(tmp_path):
    assert gd.find_include_dirs(tmp_path / "absent") == []


def test_get_commit_hash_from_remote_head():
    with mock.patch("zyn.git_dependency.subprocess.run", return_value=_completed(stdout="abc123\tHEAD\n")):
        assert gd.get_commit_hash("repo") == "abc123"


def test_get_commit_hash_unknown_tag():
    with mock.patch("zyn.git_dependency.subprocess.run", return_value=_completed(stdout="")):
        with pytest.raises(RuntimeError, match="Tag 'v9' not found"):
            gd.get_commit_hash("repo", "v9")


def test_clone_if_missing_skips_existing_repo(tmp_path):
    (tmp_path / "dep" / ".git").mkdir(parents=True)
    with mock.patch("zyn.git_dependency.subprocess.run") as run:
        result = gd.clone_if_missing(tmp_path / "dep", "https://example.com/dep.git")
    assert result is None
    assert run.call_count == 0
    assert sorted(p.name for p in (tmp_path / "dep").iterdir()) == [".git"]


def test_checkout_commit_failure_raises():
    with mock.patch("zyn.git_dependency.subprocess.run", return_value=_completed(1)):
        with pytest.raises(RuntimeError, match="Git checkout failed"):
            gd.checkout_commit("repo", "abc")


def test_ensure_git_dep_reports_clone_failure(workdir, capsys):
    with mock.patch("zyn.git_dependency.subprocess.run", return_value=_completed(1)):
        gd.ensure_git_dep("foo", "https://example.com/foo.git")
    err = capsys.readouterr().err
    assert "[Zyn] Error installing foo: Git clone failed: https://example.com/foo.git" in err


def test_install_from_url_skips_existing(workdir, capsys):
    Path("zyn.toml").write_text(
        '[dependencies]\nfoo = { git = "https://github.com/someone/foo.git", tag = "v1" }\n'
    )
    with mock.patch("zyn.git_dependency.subprocess.run") as run:
        gd.install_from_url("https://github.com/someone/foo.git@v1")
    assert run.call_count == 0
    assert 'Dependency "foo" already exists' in capsys.readouterr().out


def test_install_from_url_non_github_name(workdir, capsys):
    Path("zyn.toml").write_text('[dependencies]\nlibrary = { path = "x" }\n')
    with mock.patch("zyn.git_dependency.subprocess.run") as run:
        gd.install_from_url("https://example.com/x/y.git")
    assert run.call_count == 0
    assert 'Dependency "library" already exists' in capsys.readouterr().out


def test_install_all_from_config_skips_non_git(workdir, capsys):
    Path("zyn.toml").write_text('[dependencies]\nlocal = { path = "libs/local" }\nempty = {}\n')
    with mock.patch("zyn.git_dependency.subprocess.run") as run:
        gd.install_all_from_config()
    out = capsys.readouterr().out
    assert run.call_count == 0
    assert 'Skipping local/path dependency "local"' in out
    assert 'Dependency "empty" has no git or path. Skipping.' in out


def test_update_all_dependencies_ignores_path_deps(workdir, capsys):
    Path("zyn.toml").write_text('[dependencies]\nlocal = { path = "libs/local" }\n')
    with mock.patch("zyn.git_dependency.subprocess.run") as run:
        result = gd.update_all_dependencies()
    assert result is None
    assert run.call_count == 0
    assert capsys.readouterr().out == ""
    assert not Path(".zyn").exists()