"""Command registry for auto-discovery of subcommands."""

from .base import Command
from ..core.registry import Registry

registry: Registry[Command] = Registry(
    base_class=Command,
    package='shub.commands',
    exclude=['base', 'registry']
)
