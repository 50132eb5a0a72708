"""Reading and writing the ``zyn.toml`` project configuration."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class Dependency:
    """A project dependency, fetched from git or taken from a local path."""

    git: str = ""
    tag: str = ""
    path: str = ""


@dataclass
class Config:
    """Project settings as read from ``zyn.toml``."""

    version: str = "0.0.0"
    name: str = "default_name"
    language: str = "C++"
    standard: str = "C++17"
    compiler: str = "g++"
    sources: str = "src"
    include: str = "include"
    build: str = "build"
    dependencies: dict[str, Dependency] = field(default_factory=dict)
    libraries: list[str] = field(default_factory=list)
    lib_dirs: list[str] = field(default_factory=list)
    profiles: dict[str, list[str]] = field(default_factory=dict)


def _table(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _string(data: dict[str, Any], key: str, default: str = "") -> str:
    value = data.get(key)
    return value if isinstance(value, str) else default


def _strings(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def parse(config_file) -> Config:
    """Load a configuration file; missing or mistyped keys fall back to defaults."""
    with open(config_file, "rb") as fh:
        data = tomllib.load(fh)

    project = _table(data, "project")
    directories = _table(data, "directories")
    defaults = Config()

    config = Config(
        version=_string(project, "version", defaults.version),
        name=_string(project, "name", defaults.name),
        language=_string(project, "language", defaults.language),
        standard=_string(project, "standard", defaults.standard),
        compiler=_string(project, "compiler", defaults.compiler),
        sources=_string(directories, "sources", defaults.sources),
        include=_string(directories, "include", defaults.include),
        build=_string(directories, "build", defaults.build),
    )

    for name, entry in _table(data, "dependencies").items():
        if isinstance(entry, dict):
            config.dependencies[name] = Dependency(
                git=_string(entry, "git"),
                tag=_string(entry, "tag"),
                path=_string(entry, "path"),
            )

    libraries = _table(data, "libraries")
    config.lib_dirs = _strings(libraries.get("lib_dirs"))
    config.libraries = _strings(libraries.get("libraries"))

    profiles = _table(_table(data, "settings"), "profiles")
    for profile_name, profile in profiles.items():
        if isinstance(profile, dict) and isinstance(profile.get("flags"), list):
            config.profiles[profile_name] = _strings(profile["flags"])

    return config


def _format_dependency(name: str, dep: Dependency) -> str:
    fields = [
        f'{key} = "{value}"'
        for key, value in (("git", dep.git), ("tag", dep.tag), ("path", dep.path))
        if value
    ]
    return f"{name} = {{ {', '.join(fields)} }}"


def save(path, config: Config) -> None:
    """Rewrite the ``[dependencies]`` section of ``path`` from ``config``.

    Everything outside that section is kept line for line. If the file has no
    such section, one is appended.
    """
    target = Path(path)
    try:
        text = target.read_text()
    except FileNotFoundError:
        text = ""

    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()

    entries = [_format_dependency(name, dep) for name, dep in config.dependencies.items()]
    output: list[str] = []
    section_written = False

    remaining = iter(lines)
    for line in remaining:
        if line != "[dependencies]":
            output.append(line)
            continue
        output.append(line)
        output.extend(entries)
        section_written = True
        for old in remaining:
            if not old or old.startswith("["):
                output.append(old)
                break

    if not section_written:
        output.append("")
        output.append("[dependencies]")
        output.extend(entries)

    target.write_text("".join(f"{line}\n" for line in output))