from __future__ import annotations

import pytest
from dash import no_update

from college_browser.config.model import EngineConfig
from college_browser.core.view_config import ViewConfig
from college_browser.core.view_state import SortConfig
from college_browser.ui.callbacks.callbacks_view import (
    EVENT_NEAR_END,
    EVENT_QUERY,
    EVENT_SETTLED,
    EVENT_SORT,
    handle_view_event,
    settle_timer_props,
)


def test_near_end_arms_timer_and_settle_disarms_it():
    settings = EngineConfig()
    cfg = ViewConfig.initial(settings)

    cfg, timer_enabled = handle_view_event(cfg, EVENT_NEAR_END, settings)
    assert timer_enabled is True
    assert cfg.loading is True

    cfg, timer_enabled = handle_view_event(cfg, EVENT_SETTLED, settings)
    assert timer_enabled is False
    assert cfg.reveal_window == 20


def test_second_near_end_while_loading_changes_nothing():
    settings = EngineConfig()
    cfg, _ = handle_view_event(ViewConfig.initial(settings), EVENT_NEAR_END, settings)
    again, timer_enabled = handle_view_event(cfg, EVENT_NEAR_END, settings)
    assert again == cfg
    assert timer_enabled is True


def test_query_and_sort_events_reset_window():
    settings = EngineConfig()
    cfg = ViewConfig(reveal_window=40)

    cfg, _ = handle_view_event(cfg, EVENT_QUERY, settings, "iit")
    assert cfg.query == "iit"
    assert cfg.reveal_window == 10

    cfg = ViewConfig(reveal_window=40, sort=SortConfig("fees", "asc"))
    cfg, _ = handle_view_event(cfg, EVENT_SORT, settings, "fees")
    assert cfg.sort == SortConfig("fees", "desc")
    assert cfg.reveal_window == 10


def test_query_event_keeps_timer_armed_while_reveal_in_flight():
    settings = EngineConfig()
    cfg, _ = handle_view_event(ViewConfig.initial(settings), EVENT_NEAR_END, settings)
    cfg, timer_enabled = handle_view_event(cfg, EVENT_QUERY, settings, "x")
    assert timer_enabled is True


def test_query_event_disarms_timer_when_changes_cancel_loading():
    settings = EngineConfig(cancel_loading_on_change=True)
    cfg, _ = handle_view_event(ViewConfig.initial(settings), EVENT_NEAR_END, settings)
    cfg, timer_enabled = handle_view_event(cfg, EVENT_QUERY, settings, "x")
    assert timer_enabled is False
    assert cfg.loading is False


def test_unknown_event():
    with pytest.raises(ValueError):
        handle_view_event(ViewConfig(), "explode", EngineConfig())


def test_accepted_reveal_allows_exactly_one_more_tick():
    settings = EngineConfig(settling_delay_ms=0)
    idle = ViewConfig.initial(settings)

    loading, _ = handle_view_event(idle, EVENT_NEAR_END, settings)
    assert settle_timer_props(idle, loading, 3) == (False, 4)
    assert settle_timer_props(idle, loading, None) == (False, 1)


def test_settle_disables_timer_without_raising_the_tick_cap():
    settings = EngineConfig()
    loading, _ = handle_view_event(ViewConfig.initial(settings), EVENT_NEAR_END, settings)
    settled, _ = handle_view_event(loading, EVENT_SETTLED, settings)

    disabled, max_intervals = settle_timer_props(loading, settled, 4)
    assert disabled is True
    assert max_intervals is no_update


def test_config_change_while_loading_keeps_existing_tick_cap():
    settings = EngineConfig()
    loading, _ = handle_view_event(ViewConfig.initial(settings), EVENT_NEAR_END, settings)
    changed, _ = handle_view_event(loading, EVENT_QUERY, settings, "iit")

    disabled, max_intervals = settle_timer_props(loading, changed, 4)
    assert disabled is False
    assert max_intervals is no_update
