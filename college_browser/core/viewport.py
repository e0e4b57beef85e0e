from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, List

logger = logging.getLogger(__name__)

NearEndCallback = Callable[[], None]

DEFAULT_NEAR_END_THRESHOLD_PX = 50


def is_near_end(
    viewport_height: float,
    scroll_top: float,
    content_height: float,
    threshold_px: float = DEFAULT_NEAR_END_THRESHOLD_PX,
) -> bool:
    """True when the bottom of the viewport is within threshold_px of the content end."""
    return viewport_height + scroll_top + threshold_px >= content_height


class ViewportSignal(ABC):
    """
    Source of "near end of rendered content" notifications.

    Engines subscribe on start and unsubscribe on close, so one signal source
    can be shared by several engines without leaking handlers.
    """

    @abstractmethod
    def on_near_end(self, callback: NearEndCallback) -> None:
        pass

    @abstractmethod
    def off_near_end(self, callback: NearEndCallback) -> None:
        pass


class ManualViewportSignal(ViewportSignal):
    """
    Viewport signal fired explicitly via emit().

    Registering the same callback twice keeps a single subscription.
    """

    def __init__(self) -> None:
        self._callbacks: List[NearEndCallback] = []

    def on_near_end(self, callback: NearEndCallback) -> None:
        if callback not in self._callbacks:
            self._callbacks.append(callback)

    def off_near_end(self, callback: NearEndCallback) -> None:
        try:
            self._callbacks.remove(callback)
        except ValueError:
            logger.debug("off_near_end called for an unregistered callback")

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks)

    def emit(self) -> None:
        # Copy: callbacks may unsubscribe while being notified
        for callback in list(self._callbacks):
            callback()


class ScrollViewportSignal(ManualViewportSignal):
    """
    Evaluates the near-end predicate on every scroll report and emits when it holds.
    """

    def __init__(self, threshold_px: float = DEFAULT_NEAR_END_THRESHOLD_PX) -> None:
        super().__init__()
        self.threshold_px = threshold_px

    def on_scroll(self, viewport_height: float, scroll_top: float, content_height: float) -> bool:
        near = is_near_end(viewport_height, scroll_top, content_height, self.threshold_px)
        if near:
            self.emit()
        return near
