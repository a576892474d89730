"""Hand recorded domain events to the configured sink.

Called only after the aggregate has been saved.  Events are best-effort
notifications: a failing sink is logged and the remaining events are
still offered, but nothing is raised back into the use case.
"""

from __future__ import annotations

import structlog

from ordercore.domain.event_sink import EventSink
from ordercore.domain.events import DomainEvent, EventRecorder

logger = structlog.get_logger(__name__)


def publish_pending(sink: EventSink, *aggregates: EventRecorder) -> list[DomainEvent]:
    """Drain each aggregate's outbox into *sink*, in order.

    Returns the drained events.
    """
    events: list[DomainEvent] = []
    for aggregate in aggregates:
        events.extend(aggregate.pull_events())

    for event in events:
        try:
            sink.publish(event)
        except Exception:
            logger.exception("event_publish_failed", event_type=event.name)
    return events
