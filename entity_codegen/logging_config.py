"""
Logging configuration for entity code generation.

Usage in modules:
    from entity_codegen.logging_config import get_logger
    logger = get_logger(__name__)

All loggers live under the "entity_codegen" hierarchy.
"""

import logging
import sys

_LOGGER_NAME = "entity_codegen"


def get_logger(name: str = None) -> logging.Logger:
    """
    Return a logger under the entity_codegen hierarchy.

    Args:
        name: Module __name__, or None for the root entity_codegen logger.

    Returns:
        logging.Logger instance
    """
    if name is None or name == _LOGGER_NAME:
        return logging.getLogger(_LOGGER_NAME)
    if name.startswith(_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name.rsplit('.', 1)[-1]}")


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Configure the entity_codegen logger hierarchy.

    Levels:
        verbose -> DEBUG   (per-item detail)
        default -> INFO    (compile summaries)
        quiet   -> WARNING (warnings and errors only)
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    root_logger = logging.getLogger(_LOGGER_NAME)
    root_logger.setLevel(level)

    # Avoid duplicate handlers when called multiple times
    if root_logger.handlers:
        for handler in root_logger.handlers:
            handler.setLevel(level)
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    )
    root_logger.addHandler(handler)
    root_logger.propagate = False
