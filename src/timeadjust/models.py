from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import ClassVar, Mapping

from .units import AbsoluteTimeUnit, AdjustmentType, DeltaTimeUnit, TimeUnit, UNIT_SLOTS


def _freeze_values(
    values: Mapping[object, int] | None,
    unit_type: type[DeltaTimeUnit] | type[AbsoluteTimeUnit],
    kind: AdjustmentType,
) -> Mapping[TimeUnit, int]:
    frozen: dict[TimeUnit, int] = {}
    for key, amount in (values or {}).items():
        if isinstance(key, (DeltaTimeUnit, AbsoluteTimeUnit)) and not isinstance(key, unit_type):
            raise TypeError(
                f"'{kind.value}' adjustments take {unit_type.__name__} keys, got {key!r}"
            )
        try:
            unit = unit_type(key)
        except ValueError as exc:
            raise TypeError(f"Unknown {unit_type.__name__} '{key}'") from exc
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise ValueError(f"Amount for '{unit.value}' must be an integer, got {amount!r}")
        if amount < 0:
            raise ValueError(f"Amount for '{unit.value}' must not be negative")
        frozen[unit] = amount
    # keep slot order so iteration and rendering are stable
    ordered = {unit: frozen[unit] for _, unit in UNIT_SLOTS[kind] if unit in frozen}
    return MappingProxyType(ordered)


@dataclass(frozen=True, slots=True)
class _Adjustment:
    values: Mapping[TimeUnit, int] = field(default_factory=dict)

    type: ClassVar[AdjustmentType]
    unit_type: ClassVar[type[DeltaTimeUnit] | type[AbsoluteTimeUnit]]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", _freeze_values(self.values, self.unit_type, self.type))

    def __hash__(self) -> int:
        return hash((self.type, tuple(self.values.items())))

    def is_noop(self) -> bool:
        return not self.values

    def as_fields(self) -> dict[str, int]:
        """Canonical field names mapped to amounts, ready for the calendar helpers."""
        return {unit.value: amount for unit, amount in self.values.items()}


class IncrementAdjustment(_Adjustment):
    """Move a moment forward by relative amounts."""

    __slots__ = ()
    type = AdjustmentType.INCREMENT
    unit_type = DeltaTimeUnit


class DecrementAdjustment(_Adjustment):
    """Move a moment backward by relative amounts."""

    __slots__ = ()
    type = AdjustmentType.DECREMENT
    unit_type = DeltaTimeUnit


class SetAdjustment(_Adjustment):
    """Pin calendar fields of a moment to absolute values."""

    __slots__ = ()
    type = AdjustmentType.SET
    unit_type = AbsoluteTimeUnit


TimeAdjustment = IncrementAdjustment | DecrementAdjustment | SetAdjustment

_VARIANTS: dict[AdjustmentType, type[_Adjustment]] = {
    AdjustmentType.INCREMENT: IncrementAdjustment,
    AdjustmentType.DECREMENT: DecrementAdjustment,
    AdjustmentType.SET: SetAdjustment,
}


def make_adjustment(
    kind: AdjustmentType | str, values: Mapping[object, int] | None = None
) -> TimeAdjustment:
    return _VARIANTS[AdjustmentType(kind)](values or {})  # type: ignore[return-value]
