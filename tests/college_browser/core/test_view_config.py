from __future__ import annotations

from college_browser.config.model import EngineConfig
from college_browser.core.view_config import (
    ViewConfig,
    request_reveal,
    settle_reveal,
    toggle_sort,
    with_query,
)
from college_browser.core.view_state import SortConfig


def test_to_from_dict_roundtrip():
    cfg = ViewConfig(
        query="iit",
        sort=SortConfig("fees", "desc"),
        reveal_window=30,
        loading=True,
        generation=4,
        pending_generation=3,
    )
    assert ViewConfig.from_dict(cfg.to_dict()) == cfg


def test_config_change_resets_window_and_bumps_generation():
    settings = EngineConfig()
    cfg = ViewConfig(reveal_window=50, generation=2)

    cfg = with_query(cfg, "delhi", settings)
    assert cfg.reveal_window == 10
    assert cfg.generation == 3

    cfg = toggle_sort(ViewConfig(reveal_window=40), "rating", settings)
    assert cfg.reveal_window == 10
    assert cfg.sort == SortConfig("rating", "asc")


def test_request_is_guarded_while_loading():
    cfg, accepted = request_reveal(ViewConfig())
    assert accepted is True
    assert cfg.loading is True

    again, accepted = request_reveal(cfg)
    assert accepted is False
    assert again is cfg


def test_settle_grows_window_and_returns_to_idle():
    settings = EngineConfig(increment=10)
    cfg, _ = request_reveal(ViewConfig(reveal_window=10))
    cfg = settle_reveal(cfg, settings)
    assert cfg.loading is False
    assert cfg.reveal_window == 20


def test_settle_when_idle_is_noop():
    cfg = ViewConfig(reveal_window=10)
    assert settle_reveal(cfg, EngineConfig()) is cfg


def test_stale_reveal_applied_by_default():
    settings = EngineConfig()
    cfg, _ = request_reveal(ViewConfig(reveal_window=30))
    cfg = with_query(cfg, "new", settings)
    assert cfg.loading is True

    cfg = settle_reveal(cfg, settings)
    assert cfg.reveal_window == 20


def test_stale_reveal_discarded_when_configured():
    settings = EngineConfig(stale_reveal="discard")
    cfg, _ = request_reveal(ViewConfig(reveal_window=30))
    cfg = with_query(cfg, "new", settings)

    cfg = settle_reveal(cfg, settings)
    assert cfg.loading is False
    assert cfg.reveal_window == 10


def test_cancel_loading_on_change_returns_to_idle():
    settings = EngineConfig(cancel_loading_on_change=True)
    cfg, _ = request_reveal(ViewConfig())
    cfg = with_query(cfg, "x", settings)
    assert cfg.loading is False
    assert cfg.pending_generation is None
