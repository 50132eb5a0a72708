"""Generation of editor and IDE project files."""

import json
from pathlib import Path

from zyn.config import parse

CONFIG_FILE = "zyn.toml"


def _write_json(path: Path, data) -> None:
    path.write_text(json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False))


def generate_vscode_files() -> None:
    """Write ``.vscode`` IntelliSense, task and launch settings."""
    config = parse(CONFIG_FILE)
    folder = Path(".vscode")
    folder.mkdir(parents=True, exist_ok=True)

    properties = {
        "configurations": [
            {
                "name": "Zyn",
                "intelliSenseMode": "gcc-x64",
                "compilerPath": config.compiler,
                "cStandard": config.standard if config.language == "c" else "c11",
                "cppStandard": config.standard if config.language == "cpp" else "c++17",
                "includePath": [config.include, ".zyn/build", ".zyn/deps"],
                "defines": [],
            }
        ],
        "version": 4,
    }
    _write_json(folder / "c_cpp_properties.json", properties)

    task = {
        "label": "build",
        "type": "shell",
        "command": "zyn run --release",
        "group": {"kind": "build", "isDefault": True},
        "problemMatcher": ["$gcc"],
    }
    _write_json(folder / "tasks.json", {"version": "2.0.0", "tasks": [task]})

    launch = {
        "version": "0.2.0",
        "configurations": [
            {
                "name": "Launch Zyn",
                "type": "cppdbg",
                "request": "launch",
                "program": f"./zyn_build/{config.name}",
                "args": [],
                "stopAtEntry": False,
                "cwd": "${workspaceFolder}",
                "environment": [],
                "externalConsole": False,
                "MIMode": "gdb",
                "setupCommands": [
                    {
                        "description": "Enable pretty-printing for gdb",
                        "text": "-enable-pretty-printing",
                        "ignoreFailures": True,
                    }
                ],
            }
        ],
    }
    _write_json(folder / "launch.json", launch)


def generate_clion_config() -> None:
    """Write a ``.clion/CMakeLists.txt`` for the project."""
    config = parse(CONFIG_FILE)
    folder = Path(".clion")
    folder.mkdir(parents=True, exist_ok=True)
    content = (
        "\n"
        "  cmake_minimum_required(VERSION 3.15)\n"
        "  project(ZynProject)\n"
        "  \n"
        "  set(CMAKE_CXX_STANDARD 17)\n"
        "  include_directories(\n"
        f"    {config.include}\n"
        "    .zyn/build\n"
        "    .zyn/deps\n"
        "  )\n"
        "  \n"
        "  add_executable(zyn_build src/main.cpp)\n"
        "  "
    )
    (folder / "CMakeLists.txt").write_text(content)


def generate_qtcreator_config() -> None:
    """Write a ``.qtcreator/ZynProject.pro`` for the project."""
    config = parse(CONFIG_FILE)
    folder = Path(".qtcreator")
    folder.mkdir(parents=True, exist_ok=True)
    content = (
        "\n"
        "  TEMPLATE = app\n"
        "  CONFIG += console c++17\n"
        f"  INCLUDEPATH += {config.include} .zyn/build .zyn/deps\n"
        "  \n"
        "  SOURCES += src/main.cpp\n"
        "  "
    )
    (folder / "ZynProject.pro").write_text(content)