"""shub: a command-line client for GitHub repositories and their builds."""

__version__ = "0.4.0"
