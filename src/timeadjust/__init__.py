"""Compact time adjustment expressions for ``datetime`` values."""

from importlib.metadata import version, PackageNotFoundError

from .applier import adjust, adjust_many
from .models import (
    DecrementAdjustment,
    IncrementAdjustment,
    SetAdjustment,
    TimeAdjustment,
    make_adjustment,
)
from .parser import ExpressionError, explain, format_adjustments, parse, parse_strict, parse_token
from .units import AbsoluteTimeUnit, AdjustmentType, DeltaTimeUnit

try:
    __version__ = version("timeadjust")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "AbsoluteTimeUnit",
    "AdjustmentType",
    "DecrementAdjustment",
    "DeltaTimeUnit",
    "ExpressionError",
    "IncrementAdjustment",
    "SetAdjustment",
    "TimeAdjustment",
    "adjust",
    "adjust_many",
    "explain",
    "format_adjustments",
    "make_adjustment",
    "parse",
    "parse_strict",
    "parse_token",
]
