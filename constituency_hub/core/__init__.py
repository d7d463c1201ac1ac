"""
Core utilities shared by the Constituency Hub server and client.

This package provides the Bengali and calendar helpers, phone handling,
logging configuration, monitoring and the database layer.
"""

from constituency_hub.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
