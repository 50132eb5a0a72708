"""Command-line entry point."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

from zyn.clean import clean_project
from zyn.compile_command import generate_compile_cmd
from zyn.git_dependency import install_all_from_config, install_from_url, update_all_dependencies
from zyn.ide import generate_clion_config, generate_qtcreator_config, generate_vscode_files
from zyn.local_dependency import add_local_dependency
from zyn.project_creator import create, prompt_user_input
from zyn.runner import run

PROG = "zyn"
DEFAULT_PROFILE = "--test"


def _usage(arguments: str) -> int:
    print(f"Usage: {PROG} {arguments}", file=sys.stderr)
    return 1


def _new(args: list[str]) -> int:
    if not args:
        return _usage("new <folder>")
    config = prompt_user_input(args[0])
    create(config)
    print(f'Project "{config.name}" created.')
    return 0


def _install(args: list[str]) -> int:
    if len(args) == 1:
        install_from_url(args[0])
    else:
        install_all_from_config()
    return 0


def _add(args: list[str]) -> int:
    if not args:
        return _usage("add <local_lib_path>")
    add_local_dependency(args[0])
    return 0


def _run(args: list[str]) -> int:
    command = generate_compile_cmd()
    run(command, args[0] if len(args) == 1 else DEFAULT_PROFILE)
    return 0


def _clean(args: list[str]) -> int:
    clean_project(Path.cwd() / ".zyn")
    return 0


def _update(args: list[str]) -> int:
    update_all_dependencies()
    return 0


_IDES: dict[str, tuple[Callable[[], None], str]] = {
    "--vscode": (generate_vscode_files, "VSCode config generated in .vscode/"),
    "--clion": (generate_clion_config, "CLion config generated in .clion/"),
    "--qtcreator": (generate_qtcreator_config, "Qtcreator config generated in .qtcreator/"),
}


def _ide(args: list[str]) -> int:
    if not args or args[0] not in _IDES:
        return _usage("ide --vscode|--clion|--qtcreator")
    generate, message = _IDES[args[0]]
    generate()
    print(message)
    return 0


_COMMANDS: dict[str, Callable[[list[str]], int]] = {
    "new": _new,
    "install": _install,
    "add": _add,
    "run": _run,
    "clean": _clean,
    "update": _update,
    "ide": _ide,
}


def main(argv=None) -> int:
    """Dispatch a zyn command and return the process exit code."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        return _usage("<command> [arguments]")

    command, rest = args[0], args[1:]
    handler = _COMMANDS.get(command)
    if handler is None:
        print(f"Unknown command: {command}", file=sys.stderr)
        return 1
    try:
        return handler(rest)
    except Exception as exc:
        print(f"[Zyn] Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())