"""Utilities package for shub."""

from .async_bridge import run_async

__all__ = [
    'run_async',
]
