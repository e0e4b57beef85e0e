from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional, Tuple

from college_browser.config.model import EngineConfig
from college_browser.core.dataset import Dataset
from college_browser.core.dataset_loader import DatasetProvider
from college_browser.core.exceptions import EngineClosedError
from college_browser.core.records import Record
from college_browser.core.scheduler import ScheduledTask, Scheduler
from college_browser.core.view_config import (
    ViewConfig,
    request_reveal,
    settle_reveal,
    toggle_sort,
    with_query,
    with_sort,
)
from college_browser.core.view_state import SortConfig, ViewState, recompute
from college_browser.core.viewport import ViewportSignal

logger = logging.getLogger(__name__)

ViewListener = Callable[[ViewState], None]


class DataViewEngine:
    """
    Stateful data-view engine for one listing session.

    Holds the immutable dataset plus the committed ViewConfig and keeps a
    ViewState derived from them. Every mutator commits a new ViewConfig,
    recomputes the ViewState synchronously and notifies listeners.

    Lifecycle:
    - start(): subscribe to the viewport near-end signal (once)
    - near-end signal while idle: schedule the settling task, enter Loading
    - settling task fires: grow the reveal window, back to idle
    - close(): cancel the pending task, unsubscribe; late callbacks are no-ops

    The engine can be used as a context manager (start on enter, close on exit).
    """

    def __init__(
        self,
        provider: DatasetProvider,
        viewport: ViewportSignal,
        scheduler: Scheduler,
        settings: Optional[EngineConfig] = None,
    ) -> None:
        self.settings = settings or EngineConfig()
        self._viewport = viewport
        self._scheduler = scheduler

        loaded = provider.load_all()
        self._dataset = loaded if isinstance(loaded, Dataset) else Dataset("dataset", loaded)

        self._lock = threading.RLock()
        self._config = ViewConfig.initial(self.settings)
        self._view = recompute(self._dataset, "", self._config.sort, self._config.reveal_window)
        self._pending: Optional[ScheduledTask] = None
        self._listeners: List[ViewListener] = []
        self._started = False
        self._closed = False

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------
    def start(self) -> DataViewEngine:
        with self._lock:
            if self._closed:
                raise EngineClosedError("Cannot start a closed DataViewEngine")
            if self._started:
                return self
            self._viewport.on_near_end(self.request_reveal)
            self._started = True

        logger.info(
            "Data view engine started",
            extra={"dataset": self._dataset.name, "n_records": len(self._dataset)},
        )
        return self

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None
            if self._started:
                self._viewport.off_near_end(self.request_reveal)
            self._listeners.clear()

        logger.info("Data view engine closed", extra={"dataset": self._dataset.name})

    def __enter__(self) -> DataViewEngine:
        return self.start()

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    # -------------------------------------------------------------------------
    # Read-only presentation surface
    # -------------------------------------------------------------------------
    @property
    def dataset(self) -> Dataset:
        return self._dataset

    @property
    def config(self) -> ViewConfig:
        return self._config

    @property
    def view_state(self) -> ViewState:
        return self._view

    @property
    def visible(self) -> Tuple[Record, ...]:
        return self._view.visible

    @property
    def loading(self) -> bool:
        return self._config.loading

    @property
    def query(self) -> str:
        return self._config.query

    @property
    def sort_config(self) -> SortConfig:
        return self._config.sort

    @property
    def reveal_window(self) -> int:
        return self._config.reveal_window

    def add_listener(self, listener: ViewListener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def remove_listener(self, listener: ViewListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    # -------------------------------------------------------------------------
    # Mutators
    # -------------------------------------------------------------------------
    def set_query(self, query: str) -> ViewState:
        return self._commit_change(lambda cfg: with_query(cfg, query, self.settings), "query")

    def set_sort(self, sort: SortConfig) -> ViewState:
        return self._commit_change(lambda cfg: with_sort(cfg, sort, self.settings), "sort")

    def toggle_sort(self, key: str) -> ViewState:
        return self._commit_change(lambda cfg: toggle_sort(cfg, key, self.settings), "sort")

    def clear_sort(self) -> ViewState:
        return self.set_sort(SortConfig())

    def request_reveal(self) -> bool:
        """
        Near-end signal handler. Returns True if a reveal was scheduled,
        False if ignored (already loading, not started, or closed).
        """
        with self._lock:
            if self._closed or not self._started:
                return False
            new_config, accepted = request_reveal(self._config)
            if not accepted:
                logger.debug("Reveal already in flight; near-end signal ignored")
                return False

            self._config = new_config
            # The timer may fire before call_later() returns; _settle reads the
            # handle under the lock, after it has been stored here.
            task_box: List[ScheduledTask] = []
            self._pending = self._scheduler.call_later(
                self.settings.settling_delay_ms, lambda: self._settle(task_box)
            )
            task_box.append(self._pending)
            listeners, view = self._snapshot()

        logger.info(
            "Reveal scheduled",
            extra={
                "reveal_window": new_config.reveal_window,
                "settling_delay_ms": self.settings.settling_delay_ms,
            },
        )
        self._notify(listeners, view)
        return True

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------
    def _settle(self, task_box: List[ScheduledTask]) -> None:
        with self._lock:
            task = task_box[0] if task_box else None
            if self._closed or task is None or task is not self._pending or task.cancelled:
                return
            self._pending = None
            before = self._config.reveal_window
            self._config = settle_reveal(self._config, self.settings)
            self._recompute()
            listeners, view = self._snapshot()

        logger.info(
            "Reveal settled",
            extra={"reveal_window_before": before, "reveal_window": self._config.reveal_window},
        )
        self._notify(listeners, view)

    def _commit_change(self, transition: Callable[[ViewConfig], ViewConfig], what: str) -> ViewState:
        with self._lock:
            if self._closed:
                raise EngineClosedError(f"Cannot change {what} on a closed DataViewEngine")
            self._config = transition(self._config)
            if not self._config.loading and self._pending is not None:
                # cancel_loading_on_change returned the machine to idle
                self._pending.cancel()
                self._pending = None
            self._recompute()
            listeners, view = self._snapshot()

        logger.debug(
            "View config changed",
            extra={"changed": what, "query": self._config.query, "sort": self._config.sort.to_dict()},
        )
        self._notify(listeners, view)
        return view

    def _recompute(self) -> None:
        cfg = self._config
        self._view = recompute(self._dataset, cfg.query, cfg.sort, cfg.reveal_window)

    def _snapshot(self) -> Tuple[List[ViewListener], ViewState]:
        return list(self._listeners), self._view

    @staticmethod
    def _notify(listeners: List[ViewListener], view: ViewState) -> None:
        for listener in listeners:
            listener(view)
