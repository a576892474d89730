"""Event sinks provided by the infrastructure layer."""

from __future__ import annotations

import structlog

from ordercore.domain.event_sink import EventSink
from ordercore.domain.events import DomainEvent


class LoggingEventSink(EventSink):
    """Writes every event as one structured log line."""

    def __init__(self, logger_name: str = "ordercore.events") -> None:
        self._logger = structlog.get_logger(logger_name)

    def publish(self, event: DomainEvent) -> None:
        payload = event.to_dict()
        name = payload.pop("event")
        self._logger.info("domain_event", event_type=name, **payload)
