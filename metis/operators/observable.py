"""Push-notification sink for streaming cycle state to subscribers."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from metis.operators.registry import OperatorRegistry

if TYPE_CHECKING:
    from metis.simulation.state import SimulationState

logger = logging.getLogger(__name__)

Subscriber = Callable[[Any], None]


class EventSink:
    """Fan-out of published values to every subscriber.

    Delivery is synchronous and in subscription order; there is no
    acknowledgement or backpressure.
    """

    def __init__(self):
        self._subscribers: list[Subscriber] = []

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register a subscriber. Returns a callable that unsubscribes it."""
        self._subscribers.append(subscriber)
        logger.debug(f"Subscriber added. Total subscribers: {len(self._subscribers)}")

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)
                logger.debug(f"Subscriber removed. Total subscribers: {len(self._subscribers)}")

        return unsubscribe

    def publish(self, value: Any) -> None:
        for subscriber in list(self._subscribers):
            subscriber(value)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)


@OperatorRegistry.register("observable")
class ObservableOperator:
    """Publishes global_parameters to its subscribers every cycle."""

    def __init__(self, sink: EventSink | None = None):
        self._sink = sink or EventSink()

    def change(self, state: SimulationState) -> None:
        self._sink.publish(state.global_parameters)

    @property
    def sink(self) -> EventSink:
        return self._sink

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        return self._sink.subscribe(subscriber)
