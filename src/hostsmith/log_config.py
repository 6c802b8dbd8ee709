from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

DEFAULT_LOG_FILE = Path(".hostsmith") / "hostsmith.log"


def setup_logging(verbose: bool = False, log_file: Optional[Path] = DEFAULT_LOG_FILE) -> None:
    """Configure logging for the entire application.

    Pass ``log_file=None`` to log to the console only.
    """
    root_logger = logging.getLogger()

    # Remove any existing handlers to avoid duplication
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    log_level = logging.DEBUG if verbose else logging.INFO
    root_logger.setLevel(log_level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(log_level if verbose else logging.WARNING)
    root_logger.addHandler(stream_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logger = logging.getLogger("hostsmith")
    logger.setLevel(log_level)

    if verbose:
        logger.debug("🔍 Verbose logging enabled")
