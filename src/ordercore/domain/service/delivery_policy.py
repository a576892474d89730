"""Domain service: delivery pricing and transport policy.

Stateless apart from its immutable ``TransportPolicy`` configuration, so
the same inputs always give the same transport method and totals.
Weight thresholds and delivery durations are configuration; the defaults
below are what ``Settings`` falls back to when nothing is set.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from types import MappingProxyType

from ordercore.domain.exceptions import (
    InvalidTransportMethod,
    NegativeDeliveryCost,
    ValidationError,
)
from ordercore.domain.model.line_item import LineItem
from ordercore.domain.model.transport import TransportMethod
from ordercore.domain.model.value_objects import Money, Weight

DEFAULT_BIKE_MAX_WEIGHT = Decimal("5")
DEFAULT_CAR_MAX_WEIGHT = Decimal("50")
DEFAULT_DELIVERY_DURATIONS: Mapping[TransportMethod, timedelta] = MappingProxyType(
    {
        TransportMethod.BIKE: timedelta(hours=24),
        TransportMethod.CAR: timedelta(hours=48),
        TransportMethod.TRUCK: timedelta(hours=120),
    }
)


@dataclass(frozen=True)
class TransportPolicy:
    """Weight thresholds (kg, inclusive) and delivery duration per method."""

    bike_max_weight: Decimal = DEFAULT_BIKE_MAX_WEIGHT
    car_max_weight: Decimal = DEFAULT_CAR_MAX_WEIGHT
    delivery_durations: Mapping[TransportMethod, timedelta] = field(
        default_factory=lambda: DEFAULT_DELIVERY_DURATIONS
    )

    def __post_init__(self) -> None:
        if self.bike_max_weight <= 0:
            raise ValidationError("Bike weight limit must be greater than zero")
        if self.car_max_weight <= self.bike_max_weight:
            raise ValidationError(
                f"Car weight limit ({self.car_max_weight}) must exceed "
                f"bike weight limit ({self.bike_max_weight})"
            )
        for method in TransportMethod:
            duration = self.delivery_durations.get(method)
            if duration is None or duration <= timedelta(0):
                raise ValidationError(
                    f"A positive delivery duration is required for {method.value}"
                )
        # Freeze a private copy so callers cannot mutate the policy later.
        object.__setattr__(
            self, "delivery_durations", MappingProxyType(dict(self.delivery_durations))
        )


class DeliveryPolicyService:

    def __init__(self, policy: TransportPolicy | None = None) -> None:
        self._policy = policy or TransportPolicy()

    @property
    def policy(self) -> TransportPolicy:
        return self._policy

    def determine_transport_method(self, total_weight: Weight) -> TransportMethod:
        if total_weight.kilograms <= self._policy.bike_max_weight:
            return TransportMethod.BIKE
        if total_weight.kilograms <= self._policy.car_max_weight:
            return TransportMethod.CAR
        return TransportMethod.TRUCK

    def estimate_delivery_time(
        self,
        transport_method: TransportMethod,
        now: datetime | None = None,
    ) -> datetime:
        """Return the expected delivery moment for *transport_method*.

        ``now`` defaults to the current UTC time.
        """
        if not isinstance(transport_method, TransportMethod):
            raise InvalidTransportMethod(
                f"Unknown transport method: {transport_method!r}"
            )
        start = now or datetime.now(timezone.utc)
        return start + self._policy.delivery_durations[transport_method]

    def calculate_total(self, items: Iterable[LineItem], delivery_cost: Money) -> Money:
        """Sum of line subtotals plus the delivery cost."""
        if delivery_cost.is_negative:
            raise NegativeDeliveryCost(
                f"Delivery cost cannot be negative, got {delivery_cost.amount}"
            )
        total = Money.zero(delivery_cost.currency)
        for item in items:
            total = total + item.subtotal
        return total + delivery_cost
