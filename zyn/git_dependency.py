"""Fetching, locking and building dependencies hosted in git repositories."""

from __future__ import annotations

import hashlib
import os
import re
import shutil
import subprocess
import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from zyn.config import Dependency, parse, save

CONFIG_FILE = "zyn.toml"
BASE_DIR = Path(".zyn")
DEPS_DIR = BASE_DIR / "deps"
BUILD_DIR = BASE_DIR / "build"
LOCK_DIR = BASE_DIR / "lock"

_HASHED_SUFFIXES = {".cpp", ".h"}
_INCLUDE_NAMES = {"include", "Include"}
_GITHUB_REPO = re.compile(r"github\.com/[^/]+/([^/@]+)")

_output_lock = threading.Lock()


def _say(message: str, *, error: bool = False) -> None:
    with _output_lock:
        print(message, file=sys.stderr if error else sys.stdout)


def exec_command(cmd) -> str:
    """Run ``cmd`` and return its standard output without trailing whitespace.

    A string is run through the shell; a sequence is run directly.
    """
    try:
        result = subprocess.run(
            cmd, shell=isinstance(cmd, str), stdout=subprocess.PIPE, text=True
        )
    except OSError as exc:
        raise RuntimeError(f"Failed to run command: {cmd}") from exc
    return (result.stdout or "").rstrip(" \n\r\t")


def _check_call(args: list[str], failure: str) -> None:
    if subprocess.run(args).returncode != 0:
        raise RuntimeError(failure)


def get_commit_hash(repo, tag: str = "") -> str:
    """Return the commit a tag points to, or the remote HEAD when no tag is given."""
    repo = str(repo)
    if tag:
        exec_command(["git", "-C", repo, "fetch", "--tags"])
        commit = exec_command(["git", "-C", repo, "rev-list", "-n", "1", f"refs/tags/{tag}"])
        if not commit:
            raise RuntimeError(f"Tag '{tag}' not found in repo: {repo}")
        return commit
    output = exec_command(["git", "-C", repo, "ls-remote", "origin", "HEAD"])
    return "\n".join(line.split("\t", 1)[0] for line in output.splitlines())


def _is_hashed(path: Path) -> bool:
    return path.suffix in _HASHED_SUFFIXES or path.name == "CMakeLists.txt"


def hash_directory(directory) -> str:
    """SHA-256 over the sources, headers and CMake files of a tree, in path order."""
    files = sorted(p for p in Path(directory).rglob("*") if p.is_file() and _is_hashed(p))
    digest = hashlib.sha256()
    for path in files:
        digest.update(path.read_bytes())
    return digest.hexdigest()


def _lock_path(name: str) -> Path:
    return LOCK_DIR / f"{name}.lock"


def _lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def write_lock(path, rev: str, digest: str) -> None:
    """Write a lock file recording a revision and its tree hash."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"rev={rev}\nsha256={digest}\n")


def check_lock(name: str, rev: str, digest: str) -> bool:
    """Tell whether the lock file of ``name`` records exactly ``rev`` and ``digest``."""
    path = _lock_path(name)
    if not path.exists():
        return False
    file_rev = file_hash = ""
    for line in _lines(path.read_text()):
        if len(line) > 4 and line.startswith("rev="):
            file_rev = line[4:]
        elif len(line) > 7 and line.startswith("sha256="):
            file_hash = line[7:]
    return file_rev == rev and file_hash == digest


def clone_if_missing(path, url: str) -> None:
    """Clone ``url`` into ``path`` unless a repository is already there."""
    path = Path(path)
    if not (path / ".git").exists():
        _check_call(["git", "clone", url, str(path)], f"Git clone failed: {url}")


def checkout_commit(repo, commit: str) -> None:
    """Fetch ``commit`` from origin and reset the working tree to it."""
    repo = str(repo)
    _check_call(["git", "-C", repo, "fetch", "origin", commit], "Git checkout failed")
    _check_call(["git", "-C", repo, "reset", "--hard", commit], "Git checkout failed")


def build_cmake(source, build) -> None:
    """Configure and build a CMake project."""
    build = Path(build)
    build.mkdir(parents=True, exist_ok=True)
    _check_call(
        [
            "cmake", "-S", str(source), "-B", str(build),
            "-DCMAKE_POSITION_INDEPENDENT_CODE=ON",
        ],
        "Build failed",
    )
    _check_call(["cmake", "--build", str(build)], "Build failed")


def check_lock_strict(name: str, expected_rev: str, expected_hash: str) -> bool:
    """Validate the lock file of ``name`` strictly, reporting every problem."""
    path = _lock_path(name)
    if not path.exists():
        _say(f"[Zyn] Missing lock file for: {name}", error=True)
        return False
    try:
        text = path.read_text()
    except OSError:
        _say(f"[Zyn] Cannot open lock file: {path}", error=True)
        return False

    rev = digest = ""
    valid_lines = 0
    for line in _lines(text):
        if line.startswith("rev="):
            rev = line[4:]
            valid_lines += 1
        elif line.startswith("sha256="):
            digest = line[7:]
            valid_lines += 1
        else:
            _say(f"[Zyn] Invalid line in lock file: {line}", error=True)
            return False

    if valid_lines != 2:
        _say("[Zyn] Lock file must have exactly two valid lines.", error=True)
        return False
    if not rev or not digest:
        _say("[Zyn] Lock file is missing required fields.", error=True)
        return False
    if rev != expected_rev:
        _say(
            f"[Zyn] Lock file rev mismatch:\n  expected: {expected_rev}\n  found:    {rev}",
            error=True,
        )
        return False
    if digest != expected_hash:
        _say(
            f"[Zyn] Lock file hash mismatch:\n  expected: {expected_hash}\n  found:    {digest}",
            error=True,
        )
        return False
    return True


def ensure_git_dep(name: str, url: str, tag: str = "") -> None:
    """Install a git dependency, honouring an existing lock file.

    Errors are reported rather than raised; a lock mismatch ends the process.
    """
    try:
        dep_dir = DEPS_DIR / name
        build_dir = BUILD_DIR / name
        lock_path = _lock_path(name)

        clone_if_missing(dep_dir, url)
        commit = get_commit_hash(dep_dir, tag)

        if lock_path.exists():
            checkout_commit(dep_dir, commit)
            if check_lock_strict(name, commit, hash_directory(dep_dir)):
                _say(f"[Zyn] {name} is up-to-date and locked.")
                return
            with _output_lock:
                print(f"[Zyn] Lock mismatch for {name}.", file=sys.stderr)
                print("[Zyn] Aborting install. Use `zyn update` to refresh.", file=sys.stderr)
            raise SystemExit(1)

        _say(f"[Zyn] Installing {name}...")
        checkout_commit(dep_dir, commit)
        write_lock(lock_path, commit, hash_directory(dep_dir))
        build_cmake(dep_dir, build_dir)
        _say(f"[Zyn] {name} ready.")
    except Exception as exc:
        _say(f"[Zyn] Error installing {name}: {exc}", error=True)


def find_include_dirs(base_path) -> list[str]:
    """Return every directory named ``include`` or ``Include`` below ``base_path``."""
    base = str(base_path)
    if not os.path.isdir(base):
        return []
    found = []
    for dirpath, dirnames, _ in os.walk(base):
        dirnames.sort()
        found.extend(os.path.join(dirpath, d) for d in dirnames if d in _INCLUDE_NAMES)
    return found


def _repo_name(url: str) -> str:
    match = _GITHUB_REPO.search(url)
    if not match:
        return "library"
    return match.group(1).removesuffix(".git")


def _bare_clone(url: str, target: Path) -> None:
    _check_call(["git", "clone", "--bare", url, str(target)], "Clone failed")


def install_from_url(spec: str) -> None:
    """Add a dependency given as ``url[@tag]`` to ``zyn.toml`` and install it."""
    url, _, tag = spec.partition("@")
    name = _repo_name(url)

    config = parse(CONFIG_FILE)
    if name in config.dependencies:
        print(f'[Zyn] Dependency "{name}" already exists. Skipping add.')
        return

    scratch = BASE_DIR / f"tmp_{name}"
    git_dir = f"--git-dir={scratch}"
    if not tag:
        _bare_clone(url, scratch)
        tag = exec_command(["git", git_dir, "describe", "--tags", "--abbrev=0"])
        shutil.rmtree(scratch, ignore_errors=True)
        print(f"[Zyn] Latest tag resolved: {tag}")
    else:
        candidate = tag if tag.startswith("v") else f"v{tag}"
        _bare_clone(url, scratch)
        verified = exec_command(
            ["git", git_dir, "rev-parse", "--verify", "--quiet", f"refs/tags/{candidate}"]
        )
        shutil.rmtree(scratch, ignore_errors=True)
        if verified:
            tag = candidate

    config.dependencies[name] = Dependency(git=url, tag=tag)
    save(CONFIG_FILE, config)

    ensure_git_dep(name, url, tag)
    for directory in [*find_include_dirs(DEPS_DIR), *find_include_dirs(BUILD_DIR)]:
        print(directory)


def install_all_from_config() -> None:
    """Install every git dependency of ``zyn.toml`` concurrently."""
    config = parse(CONFIG_FILE)
    with ThreadPoolExecutor() as pool:
        futures = []
        for name, dep in config.dependencies.items():
            if dep.git:
                futures.append(pool.submit(ensure_git_dep, name, dep.git, dep.tag))
            elif dep.path:
                _say(f'[Zyn] Skipping local/path dependency "{name}"')
            else:
                _say(f'[Zyn] Dependency "{name}" has no git or path. Skipping.')
        for future in futures:
            future.result()


def update_git_dependency(name: str, url: str, tag: str) -> None:
    """Move a git dependency to its newest matching commit and rebuild if it changed."""
    dep_dir = DEPS_DIR / name
    build_dir = BUILD_DIR / name

    clone_if_missing(dep_dir, url)
    latest = get_commit_hash(dep_dir, tag)
    checkout_commit(dep_dir, latest)
    new_hash = hash_directory(dep_dir)

    if check_lock(name, latest, new_hash):
        print(f"[Zyn] {name} is already up-to-date.")
        return
    print(f"[Zyn] Updating {name}...")
    write_lock(_lock_path(name), latest, new_hash)
    build_cmake(dep_dir, build_dir)
    print(f"[Zyn] {name} updated.")


def update_all_dependencies() -> None:
    """Update every git dependency listed in ``zyn.toml``."""
    config = parse(CONFIG_FILE)
    for name, dep in config.dependencies.items():
        if dep.git:
            update_git_dependency(name, dep.git, dep.tag)