from cfgtree.utils.env import env_flag, env_str
from cfgtree.utils.logging import setup_logging

__all__ = [
    "env_flag",
    "env_str",
    "setup_logging",
]
