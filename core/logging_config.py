"""
Logging setup for the print shop tracker.

- Rotating file log (INFO and above) under the data directory
- Console output for warnings and errors
"""
from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

APP_LOGGER = "print_shop"


def setup_logging(log_dir: str | Path, app_name: str = APP_LOGGER) -> logging.Logger:
    """
    Attach file + console handlers to the application logger.

    Module loggers live under ``core.*`` so the handlers are also attached to
    the ``core`` logger. Calling this more than once is a no-op (Streamlit
    re-runs page scripts on every interaction).
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(app_name)
    if logger.handlers:
        return logger

    file_handler = logging.handlers.RotatingFileHandler(
        log_path / f"{app_name}.log",
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))

    for name in (app_name, "core"):
        lg = logging.getLogger(name)
        lg.setLevel(logging.INFO)
        lg.addHandler(file_handler)
        lg.addHandler(console_handler)

    return logger
