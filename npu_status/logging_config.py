"""Logging setup shared by the server entry point and ad-hoc scripts."""

import logging
import sys


def setup_logging(component_name="npu_status", level=logging.INFO, format_string=None):
    """Configure the root logger with a stdout handler.

    Args:
        component_name: tag printed in every record, e.g. ``npu_status``
        level: logging level, as int or name (``"DEBUG"``)
        format_string: custom format string (default provided)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    if format_string is None:
        format_string = f"[%(asctime)s] [{component_name.upper()}] %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    logger = logging.getLogger(component_name)
    logger.info("logging initialized (level=%s)", logging.getLevelName(level))
    return logger
