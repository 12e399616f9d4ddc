"""
Configuration loading for the working time act checker.
"""

from working_time_act.config.manager import ConfigManager

__all__ = ["ConfigManager"]
