"""Apple Calendar tools exposed over the Model Context Protocol."""

from __future__ import annotations

__version__ = "2.0.0"


def main() -> None:
    from .cli import main as cli_main

    cli_main()
