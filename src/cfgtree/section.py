"""Abstract section and configuration interfaces.

Every tree implementation exposes the same path-addressed primitives. Code that
walks foreign trees (such as a defaults tree supplied by a caller) only relies on
the methods declared here.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from cfgtree.options import ConfigurationOptions

# Passed as `default` to `get` means "no explicit fallback": the defaults tree is consulted.
MISSING: Any = object()


class ConfigurationSection(ABC):
    """A node of a configuration tree holding an ordered key to value mapping."""

    @abstractmethod
    def get_keys(self, deep: bool) -> List[str]:
        ...

    @abstractmethod
    def get_values(self, deep: bool) -> Dict[str, Any]:
        ...

    @abstractmethod
    def contains(self, path: str) -> bool:
        ...

    @abstractmethod
    def is_set(self, path: str) -> bool:
        ...

    @abstractmethod
    def get_current_path(self) -> str:
        ...

    @abstractmethod
    def get_name(self) -> str:
        ...

    @abstractmethod
    def get_root(self) -> Optional[Configuration]:
        ...

    @abstractmethod
    def get_parent(self) -> Optional[ConfigurationSection]:
        ...

    @abstractmethod
    def get(self, path: str, default: Any = MISSING) -> Any:
        ...

    @abstractmethod
    def set(self, path: str, value: Any) -> None:
        ...

    @abstractmethod
    def create_section(self, path: str, seed: Optional[Mapping[Any, Any]] = None) -> ConfigurationSection:
        ...

    @abstractmethod
    def get_configuration_section(self, path: str) -> Optional[ConfigurationSection]:
        ...

    @abstractmethod
    def is_configuration_section(self, path: str) -> bool:
        ...

    @abstractmethod
    def get_default_section(self) -> Optional[ConfigurationSection]:
        ...

    @abstractmethod
    def add_default(self, path: str, value: Any) -> None:
        ...

    def walk_entries(self, deep: bool) -> Iterator[Tuple[str, Any]]:
        """Yield `(relative path, value)` pairs of this section's own entries.

        Implementations with direct access to their storage override this; the
        fallback goes through `get_values`.
        """
        yield from self.get_values(deep).items()


class Configuration(ConfigurationSection):
    """The root section of a tree, owning its options and defaults tree."""

    @property
    @abstractmethod
    def options(self) -> ConfigurationOptions:
        ...

    @abstractmethod
    def add_defaults(self, defaults: Union[Mapping[str, Any], Configuration]) -> None:
        ...

    @abstractmethod
    def set_defaults(self, defaults: Configuration) -> None:
        ...

    @abstractmethod
    def get_defaults(self) -> Optional[Configuration]:
        ...
