from __future__ import annotations

import logging
from contextlib import suppress
from pathlib import Path
from typing import Optional

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level: int = logging.INFO, logs_dir: Optional[Path] = None) -> None:
    root = logging.getLogger("cfgtree")
    configured_dir = getattr(root, "_cfgtree_logs_dir", None)
    configured_level = getattr(root, "_cfgtree_logs_level", None)
    target_dir = str(logs_dir) if logs_dir is not None else None
    if getattr(root, "_cfgtree_configured", False) and configured_dir == target_dir and configured_level == level:
        return

    _close_handlers(root)
    root.setLevel(level)
    root.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(console_handler)

    if logs_dir is not None:
        logs_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(logs_dir / "cfgtree.log", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(file_handler)

    root._cfgtree_configured = True  # type: ignore[attr-defined]
    root._cfgtree_logs_dir = target_dir  # type: ignore[attr-defined]
    root._cfgtree_logs_level = level  # type: ignore[attr-defined]


def _close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        with suppress(Exception):
            handler.close()
