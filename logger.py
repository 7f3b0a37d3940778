"""Logging configuration for the budget report.

Sets up logging to both file (with date-based naming) and console. The
application logger and the module-level loggers of the importers share the
same handlers, so skipped CSV rows land in the same log file as report
diagnostics.
"""

import logging
from datetime import date
from typing import List
from config import Config

LOGGER_NAME = "budget_report"

# Packages that log through logging.getLogger(__name__)
MODULE_LOGGER_PREFIXES = ["ingestion"]


def _build_handlers(config: Config) -> List[logging.Handler]:
    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_formatter = logging.Formatter("%(message)s")

    log_filename = f"budget-report-{date.today().isoformat()}.log"
    file_handler = logging.FileHandler(config.log_dir / log_filename)
    file_handler.setLevel(config.log_level)
    file_handler.setFormatter(detailed_formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.log_level)
    console_handler.setFormatter(console_formatter)

    return [file_handler, console_handler]


def setup_logging(config: Config) -> logging.Logger:
    """Set up application logging with file and console handlers.

    Args:
        config: Application configuration containing log settings.

    Returns:
        The configured budget_report logger.
    """
    config.log_dir.mkdir(parents=True, exist_ok=True)
    handlers = _build_handlers(config)

    for name in [LOGGER_NAME] + MODULE_LOGGER_PREFIXES:
        logger = logging.getLogger(name)
        logger.setLevel(config.log_level)
        # Safe to call more than once
        logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)

    return logging.getLogger(LOGGER_NAME)


def get_logger() -> logging.Logger:
    """Get the application logger.

    Returns:
        The budget_report logger instance.
    """
    return logging.getLogger(LOGGER_NAME)
