"""Detecting whether the project must be rebuilt."""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from pathlib import Path

from zyn.config import Config

CACHE_DIR = Path(".zyn/cache")
HASH_FILE = CACHE_DIR / "source_hashes.txt"
BUILD_DIR = Path(".zyn/build")

_DEPENDENCY_SUFFIXES = {".h", ".cpp"}


def hash_file_contents(file_path) -> str:
    """Return the SHA-256 hex digest of a file's bytes."""
    try:
        with open(file_path, "rb") as fh:
            return hashlib.file_digest(fh, "sha256").hexdigest()
    except OSError as exc:
        raise OSError(f"Could not open file: {file_path}") from exc


def _files_under(root, keep: Callable[[Path], bool]) -> list[Path]:
    base = Path(root)
    if not base.is_dir():
        raise FileNotFoundError(f"Directory not found: {base}")
    return sorted(p for p in base.rglob("*") if p.is_file() and keep(p))


def hash_source_files(config: Config) -> str:
    """Hash every source file of the project's language and every header."""
    digest = hashlib.sha256()
    sources = _files_under(config.sources, lambda p: p.suffix == f".{config.language}")
    headers = _files_under(config.include, lambda p: p.suffix == ".h")
    for path in [*sources, *headers]:
        digest.update(hash_file_contents(path).encode("ascii"))
    return digest.hexdigest()


def _is_dependency_file(path: Path) -> bool:
    return path.suffix in _DEPENDENCY_SUFFIXES or path.name == "CMakeLists.txt"


def needs_rebuild(config: Config) -> bool:
    """Tell whether the executable is missing or older than its inputs."""
    executable = BUILD_DIR / config.name
    if not executable.exists() or not HASH_FILE.exists():
        return True

    stored = HASH_FILE.read_text().split("\n", 1)[0]
    if stored != hash_source_files(config):
        return True

    built_at = executable.stat().st_mtime_ns
    for dep in config.dependencies.values():
        if not dep.path or not Path(dep.path).is_dir():
            continue
        for path in Path(dep.path).rglob("*"):
            if path.is_file() and _is_dependency_file(path):
                if path.stat().st_mtime_ns > built_at:
                    return True
    return False


def update_cache(config: Config) -> None:
    """Record the current source hash."""
    CACHE_DIR.mkdir(parents=True, exist_ok=True)
    HASH_FILE.write_text(hash_source_files(config))