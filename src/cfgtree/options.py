"""Options owned by a configuration root.

"""

from __future__ import annotations

from dataclasses import dataclass

from cfgtree.utils.env import env_flag, env_str


@dataclass(frozen=True)
class ConfigurationOptions:
    """Behavior switches shared by every section of one tree.

    Args:
        path_separator (str): Single character splitting paths into section names.
        copy_defaults (bool): Whether key/value listings and `is_set` include entries
            that only exist in the defaults tree.

    Raises:
        ValueError: If `path_separator` is not exactly one character.

    Preconditions / Invariants:
        - Options are immutable; section paths are computed once at construction with
          the separator of the root they belong to.

    Examples:
        >>> from cfgtree.options import ConfigurationOptions
        >>> ConfigurationOptions(path_separator="/", copy_defaults=True)
        ConfigurationOptions(path_separator='/', copy_defaults=True)

    """
    path_separator: str = "."
    copy_defaults: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.path_separator, str) or len(self.path_separator) != 1:
            raise ValueError(f"Path separator must be a single character, got {self.path_separator!r}")

    @classmethod
    def from_env(cls, prefix: str = "CFGTREE") -> ConfigurationOptions:
        """Build options from `<prefix>_PATH_SEPARATOR` and `<prefix>_COPY_DEFAULTS`.

        Args:
            prefix (str): Environment variable prefix.

        Returns:
            ConfigurationOptions: Options with unset variables left at their defaults.

        Raises:
            ValueError: If the separator variable holds more than one character.

        Side Effects / I/O:
            - Reads process environment variables.

        """
        return cls(
            path_separator=env_str(f"{prefix}_PATH_SEPARATOR", "."),
            copy_defaults=env_flag(f"{prefix}_COPY_DEFAULTS", False),
        )
