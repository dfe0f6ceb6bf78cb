"""Application initialization and setup.

This module handles the initialization tasks required before the gate is used,
including environment variable loading, logging configuration, and i18n setup.
"""

from dotenv import load_dotenv

from blueprint.core.config.settings import settings
from blueprint.core.logging import configure_logging
from blueprint.utils.i18n import setup_i18n


def initialize_application() -> None:
    """Initialize the application with all necessary setup tasks.

    This function performs the following initialization tasks:
    1. Load environment variables from ``.env``
    2. Configure structured logging
    3. Load the message catalogues
    """
    load_dotenv(override=True)

    configure_logging(log_level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON)

    setup_i18n()
