from __future__ import annotations

from enum import Enum

from ordercore.domain.exceptions import InvalidTransportMethod


class TransportMethod(Enum):
    BIKE = "BIKE"
    CAR = "CAR"
    TRUCK = "TRUCK"

    @classmethod
    def parse(cls, value: TransportMethod | str) -> TransportMethod:
        """Accept an enum member or its (case-insensitive) name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError as exc:
            raise InvalidTransportMethod(f"Unknown transport method: {value!r}") from exc
