"""
Config package for tandem_analyzer.

Responsible for:
- the GlobalConfig model
- loading it from a config directory (load_global_config)
"""

from .model import GlobalConfig
from .io import load_global_config

__all__ = ["GlobalConfig", "load_global_config"]
