import logging
import os
from typing import Optional, Union

DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_log_level(level: Optional[Union[int, str]] = None) -> int:
    """Map an explicit level, then LOG_LEVEL, to a logging level; INFO when unknown."""
    if isinstance(level, int):
        return level
    name = level or os.getenv("LOG_LEVEL") or "INFO"
    return logging.getLevelNamesMapping().get(str(name).upper(), logging.INFO)


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    logging.basicConfig(level=resolve_log_level(level), format=DEFAULT_LOG_FORMAT)
