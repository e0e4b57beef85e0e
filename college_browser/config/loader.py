from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from college_browser.config.model import EngineConfig, GlobalConfig
from college_browser.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DATA_FILE_ENV = "COLLEGE_BROWSER_DATA_FILE"


def _resolve_data_file(root: Path, raw_value: Optional[str]) -> Optional[Path]:
    """
    Env override wins over global.json. Relative paths are resolved relative to
    the config root directory; absolute paths are used as-is.
    """
    env_value = os.environ.get(DATA_FILE_ENV)
    if env_value:
        logger.info("Using data file from environment", extra={"env": DATA_FILE_ENV, "path": env_value})
        raw_value = env_value

    if raw_value is None:
        return None
    if not isinstance(raw_value, str) or not raw_value.strip():
        raise ConfigError(f"'data_file' must be a non-empty string, got {raw_value!r}")

    path = Path(raw_value)
    if path.is_absolute():
        return path
    return (root / path).resolve()


def load_global_config(root: Path | str) -> GlobalConfig:
    """
    Load configuration from a config directory.

    Expected structure:

        root/
            global.json
            data/
                colleges.json

    global.json keys:

    - ui_title: title for UI, defaults to 'College Browser'
    - subtitle: navbar subtitle
    - data_file: dataset JSON file, relative to root unless absolute
                 (overridden by COLLEGE_BROWSER_DATA_FILE)
    - engine: EngineConfig settings (base_window, increment, settling_delay_ms, ...)

    :param root: Directory containing 'global.json'.
    :return: A GlobalConfig instance.
    :raises FileNotFoundError: if global.json does not exist.
    :raises ConfigError: if global.json is not valid JSON or holds invalid values.
    """
    root = Path(root)
    logger.info(
        "Loading global config",
        extra={"config_root": str(root)},
    )

    global_path = root / "global.json"
    if not global_path.is_file():
        raise FileNotFoundError(f"File not found at {global_path}")

    try:
        with global_path.open(encoding="utf-8") as f:
            raw_global = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {global_path}: {e}") from e

    if not isinstance(raw_global, dict):
        raise ConfigError(f"{global_path} must contain a JSON object")

    engine = EngineConfig.from_raw(raw_global.get("engine"))
    data_file = _resolve_data_file(root, raw_global.get("data_file"))

    global_config = GlobalConfig(
        config_root=root,
        ui_title=raw_global.get("ui_title", "College Browser"),
        subtitle=raw_global.get("subtitle", "College Information Table"),
        data_file=data_file,
        engine=engine,
    )

    logger.info(
        "Global config loaded",
        extra={
            "config_root": str(root),
            "data_file": str(data_file) if data_file else None,
            "settling_delay_ms": engine.settling_delay_ms,
        },
    )
    return global_config
