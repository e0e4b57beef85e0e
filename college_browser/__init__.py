"""
Top-level package for the college browser.

This package exposes the core architecture (data-view engine, config, UI adapters).
Most code should import from submodules such as:
    college_browser.core
    college_browser.config
    college_browser.ui
"""

__all__: list[str] = []
