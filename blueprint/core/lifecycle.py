"""Application lifecycle management.

This module handles startup and shutdown of the gate's background work,
ensuring the cleanup task never outlives the application.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from blueprint.core.application import ApplicationContext
from blueprint.core.logging import logger


@asynccontextmanager
async def application_lifespan(context: ApplicationContext) -> AsyncIterator[ApplicationContext]:
    """Run the rate-limit cleanup task for the duration of the block.

    Args:
        context: Wired application components.

    Yields:
        ApplicationContext: The same context, for convenience.
    """
    context.cleanup_task.start()
    logger.info(
        "application_startup",
        env=context.settings.APP_ENV,
        version=context.settings.VERSION,
    )
    try:
        yield context
    finally:
        await context.cleanup_task.stop()
        context.rate_limiter.clear_all()
        logger.info("application_shutdown", env=context.settings.APP_ENV)
