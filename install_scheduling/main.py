"""
Main application entry point.
"""

from install_scheduling.api.app import create_app
from install_scheduling.config.logging import get_logger
from install_scheduling.config.settings import settings

logger = get_logger(__name__)

app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info("Starting Install Scheduling server")

    uvicorn.run(
        "install_scheduling.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=False,
        log_level=settings.LOG_LEVEL.lower(),
    )
