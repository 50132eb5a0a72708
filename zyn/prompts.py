"""Interactive input helpers."""

import sys


def input_with_prompt(prompt: str) -> str:
    """Show ``prompt`` and return one line of standard input without its newline."""
    sys.stdout.write(prompt)
    sys.stdout.flush()
    return sys.stdin.readline().removesuffix("\n")