"""Public package entrypoints for cfgtree.

An in-memory tree of configuration sections addressed by separator-delimited
paths, with typed accessors and an optional defaults tree.
"""

from __future__ import annotations

from cfgtree.memory import MemoryConfiguration, MemorySection
from cfgtree.options import ConfigurationOptions
from cfgtree.paths import create_path
from cfgtree.section import MISSING, Configuration, ConfigurationSection

__all__ = [
    "Configuration",
    "ConfigurationOptions",
    "ConfigurationSection",
    "MemoryConfiguration",
    "MISSING",
    "MemorySection",
    "create_path",
]
__version__ = "0.1.0"
