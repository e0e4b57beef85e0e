from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from college_browser.config.model import STALE_REVEAL_DISCARD, EngineConfig
from college_browser.core.view_state import SortConfig


@dataclass(frozen=True)
class ViewConfig:
    """
    The committed, user-driven inputs of a listing view plus the reveal state
    machine. Serialisable so the Dash layer can keep it in a dcc.Store.

    Fields:

    - query: active search term ("" matches everything)
    - sort: active SortConfig
    - reveal_window: number of leading records exposed
    - loading: True while a reveal expansion is in flight (Loading state)
    - generation: bumped on every query/sort change
    - pending_generation: generation at which the in-flight reveal was requested
    """
    query: str = ""
    sort: SortConfig = field(default_factory=SortConfig)
    reveal_window: int = 10
    loading: bool = False
    generation: int = 0
    pending_generation: Optional[int] = None

    @classmethod
    def initial(cls, settings: EngineConfig) -> ViewConfig:
        return cls(reveal_window=settings.base_window)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "sort": self.sort.to_dict(),
            "reveal_window": self.reveal_window,
            "loading": self.loading,
            "generation": self.generation,
            "pending_generation": self.pending_generation,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ViewConfig:
        pending = data.get("pending_generation")
        return cls(
            query=str(data.get("query") or ""),
            sort=SortConfig.from_dict(data.get("sort")),
            reveal_window=int(data.get("reveal_window", 10)),
            loading=bool(data.get("loading", False)),
            generation=int(data.get("generation", 0)),
            pending_generation=int(pending) if pending is not None else None,
        )


# -----------------------------------------------------------------------------
# Transitions
# -----------------------------------------------------------------------------
def _after_config_change(cfg: ViewConfig, settings: EngineConfig, **changes: Any) -> ViewConfig:
    updated = replace(
        cfg,
        reveal_window=settings.base_window,
        generation=cfg.generation + 1,
        **changes,
    )
    if settings.cancel_loading_on_change and updated.loading:
        updated = replace(updated, loading=False, pending_generation=None)
    return updated


def with_query(cfg: ViewConfig, query: str, settings: EngineConfig) -> ViewConfig:
    return _after_config_change(cfg, settings, query=query or "")


def with_sort(cfg: ViewConfig, sort: SortConfig, settings: EngineConfig) -> ViewConfig:
    return _after_config_change(cfg, settings, sort=sort)


def toggle_sort(cfg: ViewConfig, key: str, settings: EngineConfig) -> ViewConfig:
    return with_sort(cfg, cfg.sort.toggled(key), settings)


def request_reveal(cfg: ViewConfig) -> Tuple[ViewConfig, bool]:
    """
    Idle -> Loading on a near-end signal.

    Returns (new config, accepted). A signal received while Loading is
    ignored and leaves the config untouched.
    """
    if cfg.loading:
        return cfg, False
    return replace(cfg, loading=True, pending_generation=cfg.generation), True


def settle_reveal(cfg: ViewConfig, settings: EngineConfig) -> ViewConfig:
    """
    Loading -> Idle once the settling delay elapses; grows the window by one
    increment unless the reveal went stale and the policy discards it.
    """
    if not cfg.loading:
        return cfg

    stale = cfg.pending_generation != cfg.generation
    grow = not (stale and settings.stale_reveal == STALE_REVEAL_DISCARD)
    return replace(
        cfg,
        loading=False,
        pending_generation=None,
        reveal_window=cfg.reveal_window + settings.increment if grow else cfg.reveal_window,
    )
