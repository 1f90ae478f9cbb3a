"""Logging module for the Wild Card score tracker."""

from .logger import get_api_logger, get_app_logger, get_logger, setup_app_logging

__all__ = ["get_api_logger", "get_app_logger", "get_logger", "setup_app_logging"]
