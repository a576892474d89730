"""Abstract destination for domain events (message bus, log, outbox table...)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ordercore.domain.events import DomainEvent


class EventSink(ABC):

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        """Deliver one event.  Delivery guarantees belong to the sink."""
