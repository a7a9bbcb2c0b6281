"""
Core utilities and configuration for Seerr.

This package provides core functionality including logging configuration,
database setup, permissions and the application settings file.
"""

from seerr.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
