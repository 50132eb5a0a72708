"""Registration of dependencies that live on the local filesystem."""

from collections.abc import MutableMapping
from pathlib import Path

import tomlkit
from tomlkit.exceptions import ParseError

CONFIG_FILE = Path("zyn.toml")


def add_local_dependency(lib_path) -> None:
    """Add ``lib_path`` to the ``[dependencies]`` table of ``zyn.toml``."""
    if not CONFIG_FILE.exists():
        raise FileNotFoundError("zyn.toml not found in current directory.")

    lib_path = str(lib_path)
    lib_name = Path(lib_path).name

    try:
        document = tomlkit.parse(CONFIG_FILE.read_text())
    except ParseError as exc:
        raise ValueError(f"Failed to parse zyn.toml: {exc}") from exc

    if not isinstance(document.get("dependencies"), MutableMapping):
        document["dependencies"] = tomlkit.table()

    entry = tomlkit.inline_table()
    entry["path"] = lib_path
    document["dependencies"][lib_name] = entry

    CONFIG_FILE.write_text(tomlkit.dumps(document))
    print(f'Added local dependency "{lib_name}" to zyn.toml.')