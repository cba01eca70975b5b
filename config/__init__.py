"""Configuration module."""

from config.settings import (
    ExtractionSettings,
    ReportingSettings,
    Settings,
    settings,
)

__all__ = [
    "ExtractionSettings",
    "ReportingSettings",
    "Settings",
    "settings",
]
