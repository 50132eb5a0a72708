"""Scaffolding of new projects."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from zyn.prompts import input_with_prompt

_RELEASE_FLAGS = (
    "-w -O3 -ffast-math -finline-functions -funroll-loops"
    " -fomit-frame-pointer -march=native -flto -DNDEBUG "
    "-fstrict-aliasing -fmerge-all-constants"
)
_DEBUG_FLAGS = (
    "-g -O0 -DDEBUG -fno-inline -fno-omit-frame-pointer "
    "-fsanitize=address -fsanitize=undefined"
)

_MAIN_C = (
    "#include <stdio.h>\n\n"
    "int main() {\n"
    '    printf("Hello World");\n'
    "    return 0;\n"
    "}\n"
)
_MAIN_CPP = (
    "#include <iostream>\n\n"
    "int main() {\n"
    '    std::cout << "Hello World" << std::endl;\n'
    "    return 0;\n"
    "}\n"
)


@dataclass
class ProjectConfig:
    """Answers gathered for a new project."""

    name: str = ""
    language: str = ""
    standard: str = ""
    compiler: str = ""
    folder: str = ""


def prompt_user_input(folder) -> ProjectConfig:
    """Ask the user for the settings of a project to be created in ``folder``."""
    return ProjectConfig(
        folder=str(folder),
        name=input_with_prompt("Enter project name: "),
        language=input_with_prompt("Choose language (c/cpp): "),
        standard=input_with_prompt("Enter standard (e.g., c11, c++17): "),
        compiler=input_with_prompt("Choose compiler (gcc, g++, clang, clang++): "),
    )


def _config_text(config: ProjectConfig) -> str:
    return (
        "[project]\n"
        'version = "1.0.0"\n'
        f'name = "{config.name}"\n'
        f'language = "{config.language}"\n'
        f'standard = "{config.standard}"\n'
        f'compiler = "{config.compiler}"\n\n'
        "[settings.profiles.--release]\n"
        f'flags = ["{_RELEASE_FLAGS}"]\n'
        "[settings.profiles.--debug]\n"
        f'flags = ["{_DEBUG_FLAGS}"]\n\n'
        "[directories]\n"
        'sources = "src"\n'
        'include = "include"\n'
        'build = "build"\n\n'
        "[dependencies]\n\n"
        "[libraries]\n"
        "lib_dirs = []\n"
        "libraries = []\n"
    )


def create(config: ProjectConfig) -> None:
    """Create the project folder, its ``zyn.toml`` and a hello-world main file."""
    root = Path(config.folder)
    (root / "src").mkdir(parents=True, exist_ok=True)
    (root / "include").mkdir(parents=True, exist_ok=True)
    (root / "zyn.toml").write_text(_config_text(config))

    language = config.language.lower()
    if language == "c":
        (root / "src" / "main.c").write_text(_MAIN_C)
    elif language == "cpp":
        (root / "src" / "main.cpp").write_text(_MAIN_CPP)
    else:
        print("Unknown language.")