"""
Helpers for the logging system.
"""

from loguru import logger


def get_logger(name=None):
    """
    Return a configured logger bound to the given module name.

    Args:
        name: Module name, usually __name__

    Returns:
        logger: Loguru logger
    """
    if name:
        return logger.bind(module=name)
    return logger


def log_error_with_context(logger, error, context=None, message="Error details"):
    """
    Log an error with extra context in a consistent format.

    The traceback is only attached at DEBUG level since per-record
    failures are expected during normal operation.

    Args:
        logger: Logger instance
        error: Exception object
        context: Dict with additional information
        message: Prefix of the warning line
    """
    error_info = {
        "error_type": type(error).__name__,
        "error_message": str(error),
        "context": context or {},
    }

    logger.warning(f"{message}: {error_info}")
    logger.opt(exception=error).debug("Traceback")
