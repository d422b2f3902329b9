"""Scorer utilities: logging, settings, base models."""

from scorer_utils.base import ConfigModel, StrictModel
from scorer_utils.logging import get_logger
from scorer_utils.settings import Settings, get_settings

__all__ = ["ConfigModel", "Settings", "StrictModel", "get_logger", "get_settings"]
