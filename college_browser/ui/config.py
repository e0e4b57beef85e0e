from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from college_browser.config.model import EngineConfig, GlobalConfig
from college_browser.core.dataset import Dataset


@dataclass
class AppConfig:
    """
    Shared state for the Dash app: config root, the loaded dataset and the
    engine settings. Passed into layout + callback registration functions
    instead of using module-level globals.
    """
    config_root: Path
    global_config: GlobalConfig
    dataset: Optional[Dataset] = None

    @property
    def settings(self) -> EngineConfig:
        return self.global_config.engine

    def validate(self) -> None:
        """Ensure the dataset is attached before the app starts."""
        if self.dataset is None:
            raise RuntimeError("AppConfig.dataset must be initialized.")
