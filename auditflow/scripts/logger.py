"""Logging configuration for the AuditFlow sampling engine.

The configuration is a ``logging.config.dictConfig`` mapping stored as TOML.
It is looked up, in order, from the ``path`` argument, the AUDITFLOW_LOG_CFG
environment variable and the ``logging_config.toml`` sample shipped at the
repository root. Without a configuration file the ``auditflow`` logger is
silenced with a NullHandler.
"""

import logging
import logging.config
import os
from pathlib import Path
from typing import Optional, Union

import tomli

LOG_ENV_VAR = "AUDITFLOW_LOG_CFG"
DEFAULT_LOG_CFG = Path(__file__).parent.parent.parent / "logging_config.toml"


def load_logging_config(cfg_path: Union[str, Path]) -> dict:
    """Read a TOML logging configuration into a dictConfig mapping."""
    cfg_path = Path(cfg_path)
    if not cfg_path.is_file():
        raise FileNotFoundError(f"Logging config not found at {cfg_path}")

    with cfg_path.open("rb") as f:
        return tomli.load(f)


def setup_logging(path: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Configure the ``auditflow`` loggers.

    Args:
        path: Explicit configuration file; overrides the environment variable

    Returns:
        The configuration file applied, or None when logging was silenced
    """
    cfg_path = Path(path or os.getenv(LOG_ENV_VAR) or DEFAULT_LOG_CFG)

    if not cfg_path.exists():
        auditflow_logger = logging.getLogger("auditflow")
        for handler in auditflow_logger.handlers[:]:
            auditflow_logger.removeHandler(handler)
        auditflow_logger.addHandler(logging.NullHandler())
        return None

    logging.config.dictConfig(load_logging_config(cfg_path))
    logging.getLogger("auditflow").debug(f"Logging configured from {cfg_path}")
    return cfg_path
