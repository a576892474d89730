"""Runtime configuration read from environment variables.

Every setting has a documented default, so an empty environment gives a
working setup:

=================================  =========  ================================
Variable                           Default    Meaning
=================================  =========  ================================
``ORDERCORE_DATA_DIR``             ``data/``  JSON storage directory
``ORDERCORE_CURRENCY``             ``USD``    currency of new carts
``ORDERCORE_BIKE_MAX_WEIGHT``      ``5``      heaviest BIKE order, kg
``ORDERCORE_CAR_MAX_WEIGHT``       ``50``     heaviest CAR order, kg
``ORDERCORE_BIKE_DELIVERY_HOURS``  ``24``
``ORDERCORE_CAR_DELIVERY_HOURS``   ``48``
``ORDERCORE_TRUCK_DELIVERY_HOURS`` ``120``
``ORDERCORE_STOCK_CHECK``          ``1``      consult ``stock.json`` at checkout
``LOG_LEVEL``                      WARNING
``ORDERCORE_LOG_JSON``             ``0``      render logs as JSON
=================================  =========  ================================
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from pathlib import Path

from ordercore.domain.exceptions import ValidationError
from ordercore.domain.model.value_objects import DEFAULT_CURRENCY, Money
from ordercore.domain.service.delivery_policy import (
    DEFAULT_BIKE_MAX_WEIGHT,
    DEFAULT_CAR_MAX_WEIGHT,
    DEFAULT_DELIVERY_DURATIONS,
    TransportPolicy,
)

# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_TRUE = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:

    data_dir: Path = DEFAULT_DATA_DIR
    currency: str = DEFAULT_CURRENCY
    transport_policy: TransportPolicy = field(default_factory=TransportPolicy)
    stock_check: bool = True
    log_level: str = "WARNING"
    log_json: bool = False

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        policy = TransportPolicy(
            bike_max_weight=_decimal(env, "ORDERCORE_BIKE_MAX_WEIGHT", DEFAULT_BIKE_MAX_WEIGHT),
            car_max_weight=_decimal(env, "ORDERCORE_CAR_MAX_WEIGHT", DEFAULT_CAR_MAX_WEIGHT),
            delivery_durations={
                method: _hours(env, f"ORDERCORE_{method.value}_DELIVERY_HOURS", duration)
                for method, duration in DEFAULT_DELIVERY_DURATIONS.items()
            },
        )
        currency = (env.get("ORDERCORE_CURRENCY") or DEFAULT_CURRENCY).strip().upper()
        try:
            Money.zero(currency)
        except ValidationError as exc:
            raise ValidationError(f"ORDERCORE_CURRENCY: {exc}") from exc

        return Settings(
            data_dir=Path(env.get("ORDERCORE_DATA_DIR") or DEFAULT_DATA_DIR),
            currency=currency,
            transport_policy=policy,
            stock_check=env.get("ORDERCORE_STOCK_CHECK", "1").strip().lower() in _TRUE,
            log_level=(env.get("LOG_LEVEL") or "WARNING").upper(),
            log_json=env.get("ORDERCORE_LOG_JSON", "0").strip().lower() in _TRUE,
        )


def _decimal(env: Mapping[str, str], name: str, default: Decimal) -> Decimal:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = Decimal(raw.strip())
    except InvalidOperation as exc:
        raise ValidationError(f"{name} must be a number, got {raw!r}") from exc
    if not value.is_finite():
        raise ValidationError(f"{name} must be a finite number, got {raw!r}")
    return value


def _hours(env: Mapping[str, str], name: str, default: timedelta) -> timedelta:
    if not (env.get(name) or "").strip():
        return default
    try:
        return timedelta(hours=float(_decimal(env, name, Decimal(0))))
    except OverflowError as exc:
        raise ValidationError(f"{name} is out of range, got {env[name]!r}") from exc
