"""
Configuration for zigup.
"""

from .parser import ZigupConfig, parse_config, load_config

__all__ = ["ZigupConfig", "parse_config", "load_config"]
