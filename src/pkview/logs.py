"""
Logging setup for applications embedding pkview.

The library only emits records through ``logging.getLogger(__name__)``;
nothing is configured on import. Call ``configure_logging`` once from the
application entry point.

Environment flags
-----------------
PKVIEW_LOG_LEVEL=DEBUG : default level when ``verbose`` is not set
                         (INFO when unset or not a level name).
"""

import logging
import os
import sys
import typing

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def level_from_env() -> int:
    name = os.getenv("PKVIEW_LOG_LEVEL", "").strip().upper()
    level = logging.getLevelName(name) if name else logging.INFO
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
        verbose: bool = False, log_file_path: typing.Optional[str] = None
) -> list[logging.Handler]:
    """
    - log_file_path: append timestamped records to this file (UTF-8)
    - verbose: also emit debug records to stderr
    Returns the installed handlers; with neither option nothing is installed.
    """
    handlers: list[logging.Handler] = []
    if log_file_path:
        handlers.append(logging.FileHandler(log_file_path, mode="a", encoding="utf-8"))
    if verbose:
        handlers.append(logging.StreamHandler(sys.stderr))
    if handlers:
        logging.basicConfig(
            level=logging.DEBUG if verbose else level_from_env(),
            format=LOG_FORMAT,
            datefmt=DATE_FORMAT,
            handlers=handlers,
            force=True,
        )
    return handlers
