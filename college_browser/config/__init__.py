"""
Config package for college_browser.

Responsible for:
- config models (GlobalConfig, EngineConfig)
- config I/O helpers (college_browser.config.loader.load_global_config)
"""

from .model import EngineConfig, GlobalConfig

__all__ = ["EngineConfig", "GlobalConfig"]
