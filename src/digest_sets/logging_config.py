"""Centralized logging configuration for the digest-sets project."""

import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV = "DIGEST_SETS_LOG_LEVEL"


def setup_logging(
    level: Optional[int] = None,
    format_string: Optional[str] = None,
    handler_type: str = "stream"
) -> logging.Logger:
    """
    Set up centralized logging configuration for the project.
    
    Args:
        level: Logging level (default: read from DIGEST_SETS_LOG_LEVEL, else WARNING)
        format_string: Custom format string (optional)
        handler_type: Type of handler - "stream" or "none"
        
    Returns:
        Configured logger instance
    """
    if level is None:
        level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
        level = getattr(logging, level_name, logging.WARNING)

    if format_string is None:
        format_string = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    
    logger = logging.getLogger("digest_sets")
    
    # Avoid duplicate configuration
    if logger.hasHandlers():
        return logger
    
    formatter = logging.Formatter(format_string)
    
    if handler_type == "stream":
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)
    else:
        logger.addHandler(logging.NullHandler())
    
    logger.setLevel(level)
    logger.propagate = False
    
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.
    
    Args:
        name: Module name (usually __name__)
        
    Returns:
        Logger instance
    """
    if not logging.getLogger("digest_sets").hasHandlers():
        setup_logging()

    if name.startswith("digest_sets."):
        return logging.getLogger(name)
    return logging.getLogger(f"digest_sets.{name}")


def get_test_logger(name: str) -> logging.Logger:
    """
    Get a logger for tests with appropriate configuration.
    
    Args:
        name: Test module name
        
    Returns:
        Logger instance for tests
    """
    logger = logging.getLogger(f"Tests.{name}")
    
    if not logger.hasHandlers():
        handler = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    
    return logger
