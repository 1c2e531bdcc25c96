"""Command-line interface entry point for Couchtube.

Builds the settings, configures logging and hands over to the default
mode. This is the only place that turns errors into a process exit code.
"""

import logging

from pydantic import ValidationError

from ..config import AppSettings
from ..exceptions import CouchtubeError
from ..logging_config import setup_logging
from .default import default


async def main_cli() -> int:
    """Initialize and run Couchtube.

    Returns:
        Process exit code: 0 on success, 1 if startup failed.
    """
    try:
        settings = AppSettings()  # type: ignore
    except ValidationError as e:
        setup_logging(
            log_format_type="human", app_log_level_name="INFO", include_stacktrace=False
        )
        logging.getLogger(__name__).error("Invalid configuration.", exc_info=e)
        return 1

    setup_logging(
        log_format_type=settings.log_format,
        app_log_level_name=settings.log_level,
        include_stacktrace=settings.log_include_stacktrace,
    )

    logger = logging.getLogger(__name__)
    logger.debug(
        "Application settings loaded.",
        extra={
            "database_file_path": str(settings.database_file_path),
            "json_file_path": str(settings.json_file_path),
            "full_scan": settings.full_scan,
            "readonly_mode": settings.readonly_mode,
            "populate_only": settings.populate_only,
        },
    )

    try:
        await default(settings)
    except CouchtubeError as e:
        logger.error("Couchtube failed to start.", exc_info=e)
        return 1

    logger.debug("main_cli execution finished.")
    return 0
