"""Building the compiler command line for the project."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator

from zyn.config import parse
from zyn.git_dependency import BUILD_DIR, DEPS_DIR, find_include_dirs

CONFIG_FILE = "zyn.toml"
EXE_SUFFIX = ".exe" if sys.platform == "win32" else ""


def _source_files(root: str, suffix: str) -> Iterator[str]:
    if not os.path.isdir(root):
        raise FileNotFoundError(f"Directory not found: {root}")
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for filename in sorted(filenames):
            if os.path.splitext(filename)[1] == suffix:
                yield os.path.join(dirpath, filename)


def generate_compile_cmd() -> str:
    """Return the shell command that compiles the project described by ``zyn.toml``."""
    config = parse(CONFIG_FILE)
    parts = [config.compiler, f"-std={config.standard}"]
    parts.extend(_source_files(config.sources, f".{config.language}"))
    parts += ["-o", f".zyn/build/{config.name}{EXE_SUFFIX}", f"-I{config.include}"]

    include_dirs: list[str] = []
    for dep in config.dependencies.values():
        if dep.path:
            include_dirs += find_include_dirs(dep.path)
    include_dirs += find_include_dirs(DEPS_DIR)
    include_dirs += find_include_dirs(BUILD_DIR)

    parts += [f"-I{directory}" for directory in include_dirs]
    parts += [f"-L{directory}" for directory in config.lib_dirs]
    parts += [f"-l{library}" for library in config.libraries]
    return " ".join(parts)