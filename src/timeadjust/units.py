from __future__ import annotations

from enum import Enum


class AdjustmentType(str, Enum):
    INCREMENT = "+"
    DECREMENT = "-"
    SET = "@"


class DeltaTimeUnit(str, Enum):
    SECOND = "seconds"
    MINUTE = "minutes"
    HOUR = "hours"
    DAY = "days"
    WEEK = "weeks"
    MONTH = "months"
    YEAR = "years"


class AbsoluteTimeUnit(str, Enum):
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    # day of month, not a duration
    DAY = "day"
    MONTH = "month"
    YEAR = "year"


TimeUnit = DeltaTimeUnit | AbsoluteTimeUnit

# Slots are listed smallest unit first; a token must name its units in this order.
_DELTA_SLOTS: tuple[tuple[str, DeltaTimeUnit], ...] = (
    ("s", DeltaTimeUnit.SECOND),
    ("m", DeltaTimeUnit.MINUTE),
    ("h", DeltaTimeUnit.HOUR),
    ("d", DeltaTimeUnit.DAY),
    ("w", DeltaTimeUnit.WEEK),
    ("M", DeltaTimeUnit.MONTH),
    ("y", DeltaTimeUnit.YEAR),
)

_ABSOLUTE_SLOTS: tuple[tuple[str, AbsoluteTimeUnit], ...] = (
    ("s", AbsoluteTimeUnit.SECOND),
    ("m", AbsoluteTimeUnit.MINUTE),
    ("h", AbsoluteTimeUnit.HOUR),
    ("d", AbsoluteTimeUnit.DAY),
    ("M", AbsoluteTimeUnit.MONTH),
    ("y", AbsoluteTimeUnit.YEAR),
)

UNIT_SLOTS: dict[AdjustmentType, tuple[tuple[str, TimeUnit], ...]] = {
    AdjustmentType.INCREMENT: _DELTA_SLOTS,
    AdjustmentType.DECREMENT: _DELTA_SLOTS,
    AdjustmentType.SET: _ABSOLUTE_SLOTS,
}

# Order in which the parser tries each kind against a token.
PARSE_ORDER: tuple[AdjustmentType, ...] = (
    AdjustmentType.INCREMENT,
    AdjustmentType.DECREMENT,
    AdjustmentType.SET,
)

_SYMBOLS: dict[TimeUnit, str] = {
    unit: symbol for slots in UNIT_SLOTS.values() for symbol, unit in slots
}


def unit_type_for(kind: AdjustmentType) -> type[DeltaTimeUnit] | type[AbsoluteTimeUnit]:
    if kind is AdjustmentType.SET:
        return AbsoluteTimeUnit
    return DeltaTimeUnit


def symbols_for(kind: AdjustmentType) -> tuple[str, ...]:
    return tuple(symbol for symbol, _ in UNIT_SLOTS[kind])


def unit_for(kind: AdjustmentType, symbol: str) -> TimeUnit:
    for candidate, unit in UNIT_SLOTS[kind]:
        if candidate == symbol:
            return unit
    raise KeyError(f"Unit symbol '{symbol}' is not valid for '{kind.value}' adjustments")


def symbol_for(unit: TimeUnit) -> str:
    return _SYMBOLS[unit]


def slot_index(kind: AdjustmentType, symbol: str) -> int:
    for index, (candidate, _) in enumerate(UNIT_SLOTS[kind]):
        if candidate == symbol:
            return index
    raise KeyError(symbol)
