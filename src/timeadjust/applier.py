from __future__ import annotations

import logging
from datetime import datetime
from collections.abc import Iterable, Iterator, Sequence
from functools import reduce

from .fields import add_fields, set_fields, subtract_fields
from .models import DecrementAdjustment, IncrementAdjustment, SetAdjustment, TimeAdjustment
from .parser import parse

logger = logging.getLogger(__name__)

Adjustments = TimeAdjustment | Sequence[TimeAdjustment] | str


def _apply_one(moment: datetime, adjustment: TimeAdjustment) -> datetime:
    if isinstance(adjustment, IncrementAdjustment):
        return add_fields(moment, adjustment.as_fields())
    if isinstance(adjustment, DecrementAdjustment):
        return subtract_fields(moment, adjustment.as_fields())
    if isinstance(adjustment, SetAdjustment):
        return set_fields(moment, adjustment.as_fields())
    raise TypeError(f"Unsupported adjustment: {adjustment!r}")


def adjust(moment: datetime, adjustments: Adjustments) -> datetime:
    """Apply one adjustment, a sequence of them, or an expression to ``moment``.

    Expressions that fail to parse leave ``moment`` untouched. Use
    :func:`timeadjust.parser.parse` directly when the failure matters.
    """
    if isinstance(adjustments, str):
        parsed = parse(adjustments)
        if parsed is None:
            logger.debug("Ignoring unparseable expression %r", adjustments)
            return moment
        adjustments = parsed
    if isinstance(adjustments, (IncrementAdjustment, DecrementAdjustment, SetAdjustment)):
        return _apply_one(moment, adjustments)
    if isinstance(adjustments, Sequence):
        return reduce(_apply_one, adjustments, moment)
    raise TypeError(f"Cannot adjust with {type(adjustments).__name__}")


def adjust_many(moment: datetime, expressions: Iterable[Adjustments]) -> Iterator[datetime]:
    """Yield ``moment`` adjusted by each entry independently."""
    for expression in expressions:
        yield adjust(moment, expression)
