"""Entry point for running manify as a module (python -m manify)."""

from __future__ import annotations


def main() -> None:
    """Main entry point for module execution."""
    from manify.cli import main as cli_main

    cli_main()


if __name__ == "__main__":
    main()
