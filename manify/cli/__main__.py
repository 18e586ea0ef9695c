#!/usr/bin/env python3
"""Entry point for the manify CLI when run as python -m manify.cli."""

if __name__ == "__main__":
    from manify.cli.main import main

    main()
