"""Generic registry that discovers classes in a package."""

import pkgutil
import importlib
import inspect
import logging
from typing import Dict, Type, TypeVar, Generic, List, Optional

logger = logging.getLogger('shub')

T = TypeVar('T')


class Registry(Generic[T]):
    """Discovers subclasses of a base class across the modules of a package.

    Each discovered class is keyed by its `name` attribute. Classes that keep
    the base class's name are treated as abstract and skipped.

    Example usage:
        command_registry = Registry(
            base_class=Command,
            package='shub.commands',
            exclude=['base', 'registry']
        )
    """

    def __init__(
        self,
        base_class: Type[T],
        package: str,
        exclude: Optional[List[str]] = None,
        name_attr: str = 'name',
        base_name: str = 'base'
    ):
        """Initialize the registry.

        Args:
            base_class: The base class that registered items must inherit from
            package: The package path to scan for classes
            exclude: Module names to exclude from scanning
            name_attr: Attribute name used to identify items (default: 'name')
            base_name: Value of name_attr that indicates the base class (default: 'base')
        """
        self._base_class = base_class
        self._package = package
        self._exclude = set(exclude or [])
        self._name_attr = name_attr
        self._base_name = base_name
        self._items: Dict[str, Type[T]] = {}
        self._discover()

    def _discover(self) -> None:
        """Import every module of the package and scan it."""
        package_module = importlib.import_module(self._package)
        for _, module_name, _ in pkgutil.iter_modules(package_module.__path__):
            if module_name in self._exclude:
                continue
            module = importlib.import_module(f'{self._package}.{module_name}')
            self._scan_module(module)

    def _scan_module(self, module) -> None:
        """Register the concrete subclasses defined in a module."""
        for _, obj in inspect.getmembers(module, inspect.isclass):
            if obj is self._base_class or not issubclass(obj, self._base_class):
                continue
            item_name = getattr(obj, self._name_attr, self._base_name)
            if item_name == self._base_name:
                continue
            self._items[item_name] = obj
            logger.debug(f"Registered {self._base_class.__name__}: {item_name}")

    def get(self, name: str) -> Optional[Type[T]]:
        """Get an item by name.

        Args:
            name: Item name

        Returns:
            Item class or None if not found
        """
        return self._items.get(name)

    def list_names(self) -> List[str]:
        """Get list of available item names.

        Returns:
            Sorted list of item names
        """
        return sorted(self._items.keys())

    def get_all(self) -> Dict[str, Type[T]]:
        """Get all registered items, sorted by name."""
        return {name: self._items[name] for name in self.list_names()}
