"""
keno_analyzer/utils/logger.py
Named loggers under one "keno" root: Rich console + optional rotating file.
"""
import logging
import os
from logging.handlers import RotatingFileHandler

from rich.logging import RichHandler

ROOT_LOGGER = "keno"

_loggers: dict[str, logging.Logger] = {}


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    root.setLevel(getattr(logging, level, logging.INFO))

    if not root.handlers:
        console = RichHandler(rich_tracebacks=True, show_path=False)
        console.setLevel(logging.DEBUG)
        root.addHandler(console)

        # LOG_TO_FILE=0 keeps test runs and one-off scripts from writing logs/
        if os.getenv("LOG_TO_FILE", "1") != "0":
            log_dir = os.getenv("LOG_DIR", "logs")
            os.makedirs(log_dir, exist_ok=True)
            file_handler = RotatingFileHandler(
                os.path.join(log_dir, f"{ROOT_LOGGER}.log"),
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
            )
            root.addHandler(file_handler)
    return root


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Return a cached logger; "extractor" becomes "keno.extractor"."""
    if name in _loggers:
        return _loggers[name]

    root = _configure_root()
    if name == ROOT_LOGGER:
        logger = root
    else:
        logger = logging.getLogger(f"{ROOT_LOGGER}.{name}")

    _loggers[name] = logger
    return logger
