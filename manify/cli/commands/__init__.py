"""Subcommands of the manify CLI."""
