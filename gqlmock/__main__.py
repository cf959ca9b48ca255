# File: gqlmock/__main__.py
"""
gqlmock — Module entry point.

Allows running the generator directly via::

    python -m gqlmock --schema schema.graphql --output mocks.py

This module simply delegates to the CLI entry point defined in ``gqlmock.cli``.
"""

from __future__ import annotations


def main() -> None:
    """Delegate to the CLI main function."""
    from gqlmock.cli import cli_main
    cli_main()


if __name__ == "__main__":
    main()
