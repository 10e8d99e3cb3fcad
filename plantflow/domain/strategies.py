"""Strategy pattern for coercing raw editor values into wire values."""
from __future__ import annotations

import math
from typing import Any, Protocol

from plantflow.domain.entities import ValueKind


class CoercionFailed(ValueError):
    """Raised by a strategy when a raw value cannot be coerced."""


class ValueCoercionStrategy(Protocol):
    """Protocol for value coercion strategies."""

    def coerce(self, raw: Any) -> Any:
        """Coerce a non-empty raw value, raising CoercionFailed if impossible."""
        ...

    def get_value_kind(self) -> ValueKind:
        """Return the value kind this strategy handles."""
        ...


class NumberCoercionStrategy:
    """Floating point parse; integral results are emitted as ints."""

    def coerce(self, raw: Any) -> Any:
        if isinstance(raw, bool):
            raise CoercionFailed(f"Not a number: {raw!r}")
        if isinstance(raw, str) and "_" in raw:
            raise CoercionFailed(f"Not a number: {raw!r}")
        try:
            number = float(raw.strip() if isinstance(raw, str) else raw)
        except (TypeError, ValueError):
            raise CoercionFailed(f"Not a number: {raw!r}") from None
        if not math.isfinite(number):
            raise CoercionFailed(f"Not a finite number: {raw!r}")
        return int(number) if number.is_integer() else number

    def get_value_kind(self) -> ValueKind:
        return ValueKind.NUMBER


class CheckboxCoercionStrategy:
    """Boolean truthiness of the raw value; any non-empty text is True."""

    def coerce(self, raw: Any) -> bool:
        return bool(raw)

    def get_value_kind(self) -> ValueKind:
        return ValueKind.CHECKBOX


class PassThroughCoercionStrategy:
    """Text and dropdown values go out unchanged."""

    def __init__(self, value_kind: ValueKind = ValueKind.TEXT) -> None:
        self._value_kind = value_kind

    def coerce(self, raw: Any) -> Any:
        return raw

    def get_value_kind(self) -> ValueKind:
        return self._value_kind


class CoercionStrategyFactory:
    """Factory to select a coercion strategy based on a property's value kind."""

    _strategies = {
        ValueKind.NUMBER: NumberCoercionStrategy,
        ValueKind.CHECKBOX: CheckboxCoercionStrategy,
        ValueKind.TEXT: lambda: PassThroughCoercionStrategy(ValueKind.TEXT),
        ValueKind.DROPDOWN: lambda: PassThroughCoercionStrategy(ValueKind.DROPDOWN),
    }

    @classmethod
    def get_strategy(cls, value_kind: ValueKind) -> ValueCoercionStrategy:
        """Get the coercion strategy for a value kind."""
        return cls._strategies[ValueKind(value_kind)]()
