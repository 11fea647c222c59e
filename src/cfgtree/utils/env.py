"""Environment variable parsing helpers.

"""

from __future__ import annotations

import os

def env_flag(name: str, default: bool = False) -> bool:
    """Env flag.

    Args:
        name (str): Environment variable to read.
        default (bool): Value used when the variable is not set.

    Returns:
        bool: `False` for `0`, `false`, `no` or `off` (any case), `True` for any other value.

    Side Effects / I/O:
        - Reads process environment variables.

    Examples:
        >>> from cfgtree.utils.env import env_flag
        >>> env_flag("CFGTREE_COPY_DEFAULTS")
        False

    """
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in {"0", "false", "no", "off"}

def env_str(name: str, default: str) -> str:
    """Env str.

    Args:
        name (str): Environment variable to read.
        default (str): Value used when the variable is unset or empty.

    Returns:
        str: The raw variable value, not stripped, so whitespace separators survive.

    Side Effects / I/O:
        - Reads process environment variables.

    """
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return raw
