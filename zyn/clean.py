"""Removal of build artefacts."""

import shutil
import sys
from pathlib import Path


def clean_project(folder) -> bool:
    """Remove ``folder`` entirely; return whether anything was removed."""
    path = Path(folder)
    try:
        if path.is_symlink() or path.is_file():
            path.unlink()
            removed = True
        elif path.is_dir():
            shutil.rmtree(path)
            removed = True
        else:
            removed = False
    except OSError:
        print("Error while cleaning the project.", file=sys.stderr)
        return False

    if removed:
        print("The project has been cleared.")
    else:
        print("The project has already been cleared.")
    return removed