from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

from college_browser.core.exceptions import ConfigError

# What a reveal that settles after a query/sort change does to the new window
STALE_REVEAL_APPLY = "apply"
STALE_REVEAL_DISCARD = "discard"
STALE_REVEAL_POLICIES = (STALE_REVEAL_APPLY, STALE_REVEAL_DISCARD)


@dataclass(frozen=True)
class EngineConfig:
    """
    Tunables for the data-view engine.

    - base_window: number of records revealed after start or any query/sort change
    - increment: records added to the window per settled reveal
    - settling_delay_ms: delay between a near-end signal and the window growing
    - stale_reveal: "apply" grows the window even if the query/sort changed while
      the reveal was in flight; "discard" settles without growing
    - cancel_loading_on_change: if True a query/sort change cancels the in-flight
      reveal and returns to idle immediately
    - near_end_threshold_px: slack (in pixels) for the scroll near-end predicate
    """
    base_window: int = 10
    increment: int = 10
    settling_delay_ms: int = 1000
    stale_reveal: str = STALE_REVEAL_APPLY
    cancel_loading_on_change: bool = False
    near_end_threshold_px: int = 50

    def __post_init__(self) -> None:
        for name in ("base_window", "increment", "settling_delay_ms", "near_end_threshold_px"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigError(f"engine.{name} must be a non-negative integer, got {value!r}")
        if self.increment == 0:
            raise ConfigError("engine.increment must be > 0")
        if self.stale_reveal not in STALE_REVEAL_POLICIES:
            raise ConfigError(
                f"engine.stale_reveal must be one of {STALE_REVEAL_POLICIES}, got {self.stale_reveal!r}"
            )
        if not isinstance(self.cancel_loading_on_change, bool):
            raise ConfigError("engine.cancel_loading_on_change must be a boolean")

    @classmethod
    def from_raw(cls, raw: Optional[Dict[str, Any]]) -> EngineConfig:
        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            raise ConfigError(f"'engine' must be an object, got {type(raw).__name__}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise ConfigError(f"Unknown engine settings: {unknown}")
        return cls(**raw)


@dataclass(frozen=True)
class GlobalConfig:
    config_root: Path
    ui_title: str = "College Browser"
    subtitle: str = "College Information Table"
    data_file: Optional[Path] = None
    engine: EngineConfig = field(default_factory=EngineConfig)
