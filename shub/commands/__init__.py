"""Subcommands of the shub CLI."""
