"""Path splitting and construction helpers.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Tuple

if TYPE_CHECKING:
    from cfgtree.section import ConfigurationSection

def split_path(path: str, separator: str) -> Tuple[List[str], str]:
    """Split `path` into the section names leading to a key, and the key itself.

    A path without any separator has no section names; its key is the whole path.
    """
    parts = path.split(separator)
    return parts[:-1], parts[-1]

def create_path(
    section: Optional[ConfigurationSection],
    key: Optional[str],
    relative_to: Optional[ConfigurationSection] = None,
) -> str:
    """Create path.

    Args:
        section (Optional[ConfigurationSection]): Section the path starts from.
        key (Optional[str]): Key appended below `section`; skipped when empty.
        relative_to (Optional[ConfigurationSection]): Ancestor the path is relative to.
            Defaults to the root of `section`.

    Returns:
        str: Section names from `relative_to` (exclusive) down to `section`, followed
        by `key`, joined with the root's path separator.

    Examples:
        >>> from cfgtree import MemoryConfiguration
        >>> from cfgtree.paths import create_path
        >>> config = MemoryConfiguration()
        >>> create_path(config.create_section("a.b"), "c")
        'a.b.c'

    """
    if section is None:
        return key or ""

    root = section.get_root()
    if relative_to is None:
        relative_to = root
    separator = root.options.path_separator

    names: List[str] = []
    node: Optional[ConfigurationSection] = section
    while node is not None and node is not relative_to:
        names.append(node.get_name())
        node = node.get_parent()
    names.reverse()

    if key:
        names.append(key)
    return separator.join(names)
