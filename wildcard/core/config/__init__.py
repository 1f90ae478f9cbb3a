"""Configuration module for the Wild Card score tracker."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
