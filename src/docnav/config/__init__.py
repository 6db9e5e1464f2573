"""Configuration loading and resolution."""

from docnav.config.load import load_config
from docnav.config.model import Config, ExtraEntry

__all__ = ["Config", "ExtraEntry", "load_config"]
