"""
Top-level package for the Tandem pump analyzer demo.

This package exposes the state layer (dataset + settings stores), the mock
analysis engine and the Dash UI adapters.
Most code should import from submodules such as:
    tandem_analyzer.core
    tandem_analyzer.services
    tandem_analyzer.analysis
    tandem_analyzer.ui
"""

__version__ = "0.1.0"

__all__: list[str] = ["__version__"]
