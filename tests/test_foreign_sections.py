"""Tests for trees mixing native sections with other section implementations."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union

from cfgtree import MISSING, Configuration, ConfigurationOptions, ConfigurationSection, MemoryConfiguration


class FrozenConfiguration(Configuration):
    """Read-only configuration over a flat `{path: value}` mapping."""

    def __init__(self, values: Mapping[str, Any]) -> None:
        self._values = dict(values)
        self._options = ConfigurationOptions()

    @property
    def options(self) -> ConfigurationOptions:
        return self._options

    def get_keys(self, deep: bool) -> List[str]:
        return [key for key in self._values if deep or "." not in key]

    def get_values(self, deep: bool) -> Dict[str, Any]:
        return {key: self._values[key] for key in self.get_keys(deep)}

    def contains(self, path: str) -> bool:
        return self.get(path) is not None

    def is_set(self, path: str) -> bool:
        return self.contains(path)

    def get_current_path(self) -> str:
        return ""

    def get_name(self) -> str:
        return ""

    def get_root(self) -> Configuration:
        return self

    def get_parent(self) -> Optional[ConfigurationSection]:
        return None

    def get(self, path: str, default: Any = MISSING) -> Any:
        if path == "":
            return self
        if default is MISSING:
            default = None
        return self._values.get(path, default)

    def set(self, path: str, value: Any) -> None:
        raise NotImplementedError("read-only")

    def create_section(self, path: str, seed: Optional[Mapping[Any, Any]] = None) -> ConfigurationSection:
        raise NotImplementedError("read-only")

    def get_configuration_section(self, path: str) -> Optional[ConfigurationSection]:
        return self if path == "" else None

    def is_configuration_section(self, path: str) -> bool:
        return path == ""

    def get_default_section(self) -> Optional[ConfigurationSection]:
        return None

    def add_default(self, path: str, value: Any) -> None:
        raise NotImplementedError("read-only")

    def add_defaults(self, defaults: Union[Mapping[str, Any], Configuration]) -> None:
        raise NotImplementedError("read-only")

    def set_defaults(self, defaults: Configuration) -> None:
        raise NotImplementedError("read-only")

    def get_defaults(self) -> Optional[Configuration]:
        return None


def test_foreign_configuration_serves_as_defaults_tree() -> None:
    defaults = FrozenConfiguration({"a": 1, "b.c": "two", "ports": ["80", 443]})
    config = MemoryConfiguration(defaults=defaults, options=ConfigurationOptions(copy_defaults=True))

    assert config.get("b.c") == "two"
    assert config.get_int("a") == 1
    assert config.get_integer_list("ports") == [80, 443]
    assert config.get_keys(False) == ["a", "ports"]
    assert config.get_keys(True) == ["a", "b.c", "ports"]


def test_foreign_section_nested_in_native_tree_is_flattened_through_its_interface() -> None:
    config = MemoryConfiguration()
    foreign = FrozenConfiguration({"x": 1, "y.z": 2})
    config.set("local", 0)
    config.set("ext", foreign)

    assert config.is_configuration_section("ext")
    assert config.get("ext.x") == 1
    assert config.get_keys(True) == ["local", "ext", "ext.x", "ext.y.z"]
    assert config.get_values(True)["ext.y.z"] == 2
    assert config.get_keys(False) == ["local", "ext"]


def test_add_defaults_copies_values_from_foreign_configuration() -> None:
    config = MemoryConfiguration()
    config.add_defaults(FrozenConfiguration({"a": 1, "b.c": 2}))

    assert config.get_defaults().get_values(True) == {
        "a": 1,
        "b": config.get_defaults().get("b"),
        "b.c": 2,
    }
