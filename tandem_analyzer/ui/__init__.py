"""
UI adapters for the analyzer.

Currently provides a Dash-based web UI via create_dash_app().
"""

from .dash_app import build_app_config, create_dash_app

__all__ = ["build_app_config", "create_dash_app"]
