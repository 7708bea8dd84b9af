"""In-process publication of engine notifications."""

from __future__ import annotations

from collections.abc import Callable

import structlog

from amm_engine.models.events import EngineEvent

logger = structlog.get_logger()

Subscriber = Callable[[EngineEvent], None]


class EventBus:
    """Fan-out of engine events to subscribers.

    Events are published only after a call has fully committed, so a failing
    subscriber cannot undo the call: its exception is logged and the remaining
    subscribers still run.
    """

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback``; returns a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, event: EngineEvent) -> None:
        logger.info("event_emitted", **event.to_dict())
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                logger.exception("event_subscriber_failed", name=event.name)


__all__ = ["EventBus", "Subscriber"]
