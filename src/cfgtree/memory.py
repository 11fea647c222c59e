"""In-memory configuration sections.

"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Type, Union

from cfgtree.conversions import (
    INT_BITS,
    LONG_BITS,
    coerce_list,
    fits_bits,
    is_number,
    is_scalar,
    is_sequence,
    to_double,
    to_int,
    to_long,
    to_text,
)
from cfgtree.options import ConfigurationOptions
from cfgtree.paths import create_path, split_path
from cfgtree.section import MISSING, Configuration, ConfigurationSection

LOGGER = logging.getLogger("cfgtree.memory")


def _require_path(path: Optional[str]) -> str:
    if path is None:
        raise TypeError("Path cannot be None")
    return path


class MemorySection(ConfigurationSection):
    """A configuration section stored in memory.

    Args:
        parent (Optional[ConfigurationSection]): Section containing this one. Only a
            `Configuration` may be constructed without a parent; it becomes the root.
        name (str): Key this section occupies in `parent`.

    Raises:
        TypeError: If constructed without a parent while not being a `Configuration`,
            or if `name` is None.
        ValueError: If `parent` has no root.

    Preconditions / Invariants:
        - `get_current_path()` is computed once here and never changes; do not move a
          section to another slot after creating it.
        - Sections are normally created through `create_section`, which also stores
          them in the parent.

    """

    def __init__(self, parent: Optional[ConfigurationSection] = None, name: str = "") -> None:
        self._map: Dict[str, Any] = {}
        if parent is None:
            if not isinstance(self, Configuration):
                raise TypeError("Cannot construct a root MemorySection when not a Configuration")
            self._name = ""
            self._full_path = ""
            self._parent: Optional[ConfigurationSection] = None
            self._root: Configuration = self
            return

        name = _require_path(name)
        root = parent.get_root()
        if root is None:
            raise ValueError("Parent cannot be orphaned")
        self._name = name
        self._parent = parent
        self._root = root
        self._full_path = create_path(parent, name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}[path='{self.get_current_path()}', root='{type(self.get_root()).__name__}']"

    # Tree bookkeeping

    def get_current_path(self) -> str:
        return self._full_path

    def get_name(self) -> str:
        return self._name

    def get_root(self) -> Configuration:
        return self._root

    def get_parent(self) -> Optional[ConfigurationSection]:
        return self._parent

    def _separator(self) -> str:
        return self.get_root().options.path_separator

    # Path resolution

    def _resolve_for_write(self, nodes: List[str]) -> ConfigurationSection:
        section: ConfigurationSection = self
        for node in nodes:
            existing = section.get(node, None)
            if isinstance(existing, ConfigurationSection):
                section = existing
                continue
            if existing is not None:
                LOGGER.debug(
                    "Replacing %s value at '%s' with a section",
                    type(existing).__name__,
                    create_path(section, node),
                )
            section = section.create_section(node)
        return section

    def get(self, path: str, default: Any = MISSING) -> Any:
        """Get the value at `path`.

        Args:
            path (str): Separator-delimited path relative to this section. The empty
                path returns this section.
            default (Any): Explicit fallback. When given, only this tree is consulted;
                when omitted, the fallback is the value at the same path in the
                defaults tree.

        Returns:
            Any: The stored value, else the fallback, else None.

        Raises:
            TypeError: If `path` is None.

        Preconditions / Invariants:
            - Reading never creates sections; a missing intermediate section resolves
              to the fallback.

        Examples:
            >>> from cfgtree import MemoryConfiguration
            >>> config = MemoryConfiguration()
            >>> config.set("server.port", 8080)
            >>> config.get("server.port")
            8080
            >>> config.get("server.host", "localhost")
            'localhost'

        """
        _require_path(path)
        if not path:
            return self
        if default is MISSING:
            default = self._get_default(path)

        nodes, key = split_path(path, self._separator())
        section: ConfigurationSection = self
        for node in nodes:
            child = section.get(node, None)
            if not isinstance(child, ConfigurationSection):
                return default
            section = child

        if section is self:
            result = self._map.get(key)
            return default if result is None else result
        return section.get(key, default)

    def set(self, path: str, value: Any) -> None:
        """Store `value` at `path`, creating missing sections; None removes the key.

        Raises:
            TypeError: If `path` is None.
            ValueError: If `path` is empty.

        Side Effects / I/O:
            - Non-section values standing where a section is needed are replaced.

        """
        _require_path(path)
        if not path:
            raise ValueError("Cannot set to an empty path")

        nodes, key = split_path(path, self._separator())
        section = self._resolve_for_write(nodes)
        if section is not self:
            section.set(key, value)
        elif value is None:
            self._map.pop(key, None)
        else:
            self._map[key] = value

    def create_section(self, path: str, seed: Optional[Mapping[Any, Any]] = None) -> ConfigurationSection:
        """Create an empty section at `path`, optionally filled from `seed`.

        Args:
            path (str): Where to create the section. Missing intermediate sections are
                created too.
            seed (Optional[Mapping[Any, Any]]): Values imported into the new section.
                Mapping values become nested sections, everything else is `set` as is.

        Returns:
            ConfigurationSection: The new, live section.

        Raises:
            TypeError: If `path` is None.
            ValueError: If `path` is empty.

        Side Effects / I/O:
            - Whatever was stored at `path` is replaced, including an existing section
              and all of its values.

        Examples:
            >>> from cfgtree import MemoryConfiguration
            >>> config = MemoryConfiguration()
            >>> config.create_section("a.b", {"c": 1, "d": {"e": 2}}).get_values(True)
            {'c': 1, 'd': MemorySection[path='a.b.d', root='MemoryConfiguration'], 'd.e': 2}

        """
        _require_path(path)
        if not path:
            raise ValueError("Cannot create section at empty path")

        nodes, key = split_path(path, self._separator())
        section = self._resolve_for_write(nodes)
        if section is self:
            result: ConfigurationSection = MemorySection(self, key)
            self._map[key] = result
        else:
            result = section.create_section(key)

        if seed is not None:
            for entry_key, value in seed.items():
                if isinstance(value, Mapping):
                    result.create_section(str(entry_key), value)
                else:
                    result.set(str(entry_key), value)
        return result

    # Defaults

    def _get_default(self, path: str) -> Any:
        _require_path(path)
        defaults = self.get_root().get_defaults()
        return None if defaults is None else defaults.get(create_path(self, path))

    def get_default_section(self) -> Optional[ConfigurationSection]:
        defaults = self.get_root().get_defaults()
        if defaults is not None and defaults.is_configuration_section(self.get_current_path()):
            return defaults.get_configuration_section(self.get_current_path())
        return None

    def add_default(self, path: str, value: Any) -> None:
        _require_path(path)
        root = self.get_root()
        if root is self:
            raise NotImplementedError("Unsupported add_default(path, value) implementation")
        root.add_default(create_path(self, path), value)

    def contains(self, path: str) -> bool:
        return self.get(path) is not None

    def is_set(self, path: str) -> bool:
        if self.get_root().options.copy_defaults:
            return self.contains(path)
        return self.get(path, None) is not None

    def get_configuration_section(self, path: str) -> Optional[ConfigurationSection]:
        """Get the section at `path`, promoting a defaults-only section into this tree.

        Returns:
            Optional[ConfigurationSection]: The local section; or, when only the
            defaults tree has a section there, a new empty local section; else None.

        Side Effects / I/O:
            - May create a section in this tree (never in the defaults tree).

        """
        value = self.get(path, None)
        if value is not None:
            return value if isinstance(value, ConfigurationSection) else None

        value = self.get(path, self._get_default(path))
        if not isinstance(value, ConfigurationSection):
            return None
        LOGGER.debug("Materializing section '%s' from defaults", create_path(self, path))
        return self.create_section(path)

    def is_configuration_section(self, path: str) -> bool:
        return isinstance(self.get(path), ConfigurationSection)

    # Flattening

    def walk_entries(self, deep: bool) -> Iterator[Tuple[str, Any]]:
        separator = self._separator()
        for key, value in self._map.items():
            yield key, value
            if deep and isinstance(value, ConfigurationSection):
                for child_key, child_value in value.walk_entries(deep):
                    yield f"{key}{separator}{child_key}", child_value

    def get_keys(self, deep: bool) -> List[str]:
        """List keys of this section, as paths relative to it when `deep` is set.

        Keys that only exist in the defaults tree come first when `copy_defaults` is
        enabled. Each key appears once.
        """
        keys: Dict[str, None] = {}
        if self.get_root().options.copy_defaults:
            defaults = self.get_default_section()
            if defaults is not None:
                keys.update(dict.fromkeys(defaults.get_keys(deep)))
        for key, _ in self.walk_entries(deep):
            keys[key] = None
        return list(keys)

    def get_values(self, deep: bool) -> Dict[str, Any]:
        """Map keys of this section to their values; local values win over defaults."""
        values: Dict[str, Any] = {}
        if self.get_root().options.copy_defaults:
            defaults = self.get_default_section()
            if defaults is not None:
                values.update(defaults.get_values(deep))
        for key, value in self.walk_entries(deep):
            values[key] = value
        return values

    # Typed scalars

    def _get_typed_number(
        self,
        path: str,
        default: Any,
        convert: Callable[[Any], Any],
        zero: Any,
    ) -> Any:
        if default is MISSING:
            raw = self._get_default(path)
            default = convert(raw) if is_number(raw) else zero
        value = self.get(path, default)
        return convert(value) if is_number(value) else default

    def get_string(self, path: str, default: Any = MISSING) -> Optional[str]:
        """Get a string; scalars are converted to text, other values give `default`."""
        if default is MISSING:
            raw = self._get_default(path)
            default = to_text(raw) if is_scalar(raw) else None
        value = self.get(path, default)
        return to_text(value) if is_scalar(value) else default

    def is_string(self, path: str) -> bool:
        return isinstance(self.get(path), str)

    def get_int(self, path: str, default: Any = MISSING) -> int:
        """Get a number narrowed to a signed 32-bit integer."""
        return self._get_typed_number(path, default, to_int, 0)

    def is_int(self, path: str) -> bool:
        value = self.get(path)
        return isinstance(value, int) and not isinstance(value, bool) and fits_bits(value, INT_BITS)

    def get_long(self, path: str, default: Any = MISSING) -> int:
        """Get a number narrowed to a signed 64-bit integer."""
        return self._get_typed_number(path, default, to_long, 0)

    def is_long(self, path: str) -> bool:
        value = self.get(path)
        return isinstance(value, int) and not isinstance(value, bool) and fits_bits(value, LONG_BITS)

    def get_double(self, path: str, default: Any = MISSING) -> float:
        return self._get_typed_number(path, default, to_double, 0.0)

    def is_double(self, path: str) -> bool:
        return isinstance(self.get(path), float)

    def get_boolean(self, path: str, default: Any = MISSING) -> bool:
        if default is MISSING:
            raw = self._get_default(path)
            default = raw if isinstance(raw, bool) else False
        value = self.get(path, default)
        return value if isinstance(value, bool) else default

    def is_boolean(self, path: str) -> bool:
        return isinstance(self.get(path), bool)

    def get_object(self, path: str, cls: Type[Any], default: Any = MISSING) -> Any:
        """Get the value at `path` if it is an instance of `cls`, without conversion.

        Args:
            path (str): Path relative to this section.
            cls (Type[Any]): Expected type; domain types stored by a value codec work too.
            default (Any): Returned when the local value is missing or of another type.
                When omitted, the defaults tree value is used if it is a `cls`.

        Raises:
            TypeError: If `cls` or `path` is None.

        """
        if cls is None:
            raise TypeError("Class cannot be None")
        if default is MISSING:
            raw = self._get_default(path)
            default = raw if isinstance(raw, cls) else None
        value = self.get(path, None)
        return value if isinstance(value, cls) else default

    def is_instance(self, path: str, cls: Type[Any]) -> bool:
        if cls is None:
            raise TypeError("Class cannot be None")
        return isinstance(self.get(path), cls)

    # Lists

    def get_list(self, path: str, default: Any = MISSING) -> Optional[Sequence[Any]]:
        """Get the raw list at `path`; any non-string sequence, such as a tuple, counts."""
        if default is MISSING:
            raw = self._get_default(path)
            default = raw if is_sequence(raw) else None
        value = self.get(path, None)
        return value if is_sequence(value) else default

    def is_list(self, path: str) -> bool:
        return is_sequence(self.get(path))

    def _get_typed_list(self, path: str, kind: str) -> List[Any]:
        return coerce_list(self.get_list(path), kind)

    def get_string_list(self, path: str) -> List[str]:
        return self._get_typed_list(path, "string")

    def get_integer_list(self, path: str) -> List[int]:
        """Get a list of signed 32-bit integers.

        Numbers are narrowed, numeral strings parsed, and anything else dropped.
        """
        return self._get_typed_list(path, "integer")

    def get_boolean_list(self, path: str) -> List[bool]:
        return self._get_typed_list(path, "boolean")

    def get_double_list(self, path: str) -> List[float]:
        return self._get_typed_list(path, "double")

    def get_float_list(self, path: str) -> List[float]:
        return self._get_typed_list(path, "float")

    def get_long_list(self, path: str) -> List[int]:
        return self._get_typed_list(path, "long")

    def get_byte_list(self, path: str) -> List[int]:
        return self._get_typed_list(path, "byte")

    def get_character_list(self, path: str) -> List[str]:
        return self._get_typed_list(path, "character")

    def get_short_list(self, path: str) -> List[int]:
        return self._get_typed_list(path, "short")

    def get_map_list(self, path: str) -> List[Mapping[Any, Any]]:
        return self._get_typed_list(path, "map")


class MemoryConfiguration(MemorySection, Configuration):
    """A root section kept in memory, with optional defaults.

    Args:
        defaults (Optional[Configuration]): Tree consulted when a path is missing.
        options (Optional[ConfigurationOptions]): Separator and copy-defaults switch.

    Examples:
        >>> from cfgtree import MemoryConfiguration
        >>> config = MemoryConfiguration()
        >>> config.add_default("db.pool", 5)
        >>> config.get_int("db.pool")
        5

    """

    def __init__(
        self,
        defaults: Optional[Configuration] = None,
        options: Optional[ConfigurationOptions] = None,
    ) -> None:
        super().__init__()
        self._defaults = defaults
        self._options = options if options is not None else ConfigurationOptions()

    @property
    def options(self) -> ConfigurationOptions:
        return self._options

    def add_default(self, path: str, value: Any) -> None:
        """Set `value` at `path` in the defaults tree, creating the tree when needed."""
        _require_path(path)
        if self._defaults is None:
            LOGGER.debug("Creating defaults tree for %r", self)
            self._defaults = MemoryConfiguration(
                options=ConfigurationOptions(path_separator=self._options.path_separator),
            )
        self._defaults.set(path, value)

    def add_defaults(self, defaults: Union[Mapping[str, Any], Configuration]) -> None:
        """Add every entry of a mapping, or every non-section value of a configuration.

        Mapping keys are used as paths; mapping values are stored as is.

        Raises:
            TypeError: If `defaults` is None.

        """
        if defaults is None:
            raise TypeError("Defaults may not be None")
        if isinstance(defaults, Configuration):
            for path, value in defaults.get_values(True).items():
                if not isinstance(value, ConfigurationSection):
                    self.add_default(path, value)
            return
        for path, value in defaults.items():
            self.add_default(path, value)

    def set_defaults(self, defaults: Configuration) -> None:
        if defaults is None:
            raise TypeError("Defaults may not be None")
        self._defaults = defaults

    def get_defaults(self) -> Optional[Configuration]:
        return self._defaults
