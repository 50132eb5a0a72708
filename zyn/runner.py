"""Compiling and running the project."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

from zyn.build_cache import needs_rebuild, update_cache
from zyn.config import parse

CONFIG_FILE = "zyn.toml"


def run_command(cmd: str) -> int:
    """Run ``cmd`` through the shell, echoing it, and return its exit code."""
    print(f"Running: {cmd}", flush=True)
    code = subprocess.run(cmd, shell=True).returncode
    if code != 0:
        print(f"Command failed with code {code}", file=sys.stderr)
    return code


def run(compile_cmd: str, profile: str) -> int:
    """Install dependencies, rebuild if needed with ``profile`` flags, then run.

    Returns the exit code of the last command that was run.
    """
    Path(".zyn/build").mkdir(parents=True, exist_ok=True)
    run_command("zyn install")

    config = parse(CONFIG_FILE)
    if not needs_rebuild(config):
        print("No changes detected. Using cached build.")
    else:
        if profile in config.profiles:
            compile_cmd = " ".join([compile_cmd, *config.profiles[profile]])
        else:
            print(
                f"Error: Profile '{profile}' not found in zyn.toml. No compile flags applied.",
                file=sys.stderr,
            )
        code = run_command(compile_cmd)
        if code != 0:
            print("Compilation failed, aborting run.", file=sys.stderr)
            return code
        update_cache(config)

    code = run_command(f"./.zyn/build/{config.name}")
    if code != 0:
        print(f"Run failed with code {code}", file=sys.stderr)
    return code