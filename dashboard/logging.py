import sys
from loguru import logger
from dashboard.config import get_config

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

class AppLogger:
    """Global logger configuration for the dashboard.

    Installs a single stderr sink at get_config().log_level. Re-creating the
    logger picks up a changed config (tests call set_config_for_test first).
    """
    _configured_level: str = None

    def __init__(self) -> None:
        log_level = get_config().log_level.upper()
        if AppLogger._configured_level != log_level:
            logger.remove()
            logger.configure(extra={"name": "dashboard"})
            logger.add(sink=sys.stderr, level=log_level, format=LOG_FORMAT)
            AppLogger._configured_level = log_level
        self.logger = logger

    def get_logger(self, name: str = None):
        """Get the configured logger, bound to a module name when given."""
        if name:
            return self.logger.bind(name=name)
        return self.logger

def get_logger(name: str = None):
    """Get an application logger using the latest config."""
    return AppLogger().get_logger(name)
