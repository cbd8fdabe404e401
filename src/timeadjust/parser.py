from __future__ import annotations

import logging
import re
from typing import Iterable, Sequence

from .models import (
    DecrementAdjustment,
    IncrementAdjustment,
    SetAdjustment,
    TimeAdjustment,
    make_adjustment,
)
from .units import PARSE_ORDER, UNIT_SLOTS, AdjustmentType, TimeUnit, slot_index, symbols_for

logger = logging.getLogger(__name__)


class ExpressionError(ValueError):
    """Raised by :func:`parse_strict` when an expression cannot be parsed."""

    def __init__(self, expression: str, issues: Sequence[str]) -> None:
        self.expression = expression
        self.issues = list(issues)
        super().__init__("\n".join(self.issues))


def _token_pattern(kind: AdjustmentType) -> re.Pattern[str]:
    slots = "".join(f"(?:\\d+{re.escape(symbol)})?" for symbol, _ in UNIT_SLOTS[kind])
    return re.compile(f"{re.escape(kind.value)}{slots}", re.ASCII)


def _amount_patterns(kind: AdjustmentType) -> tuple[tuple[re.Pattern[str], TimeUnit], ...]:
    return tuple(
        (re.compile(rf"(\d+){re.escape(symbol)}", re.ASCII), unit) for symbol, unit in UNIT_SLOTS[kind]
    )


_TOKEN_PATTERNS = {kind: _token_pattern(kind) for kind in PARSE_ORDER}
_AMOUNT_PATTERNS = {kind: _amount_patterns(kind) for kind in PARSE_ORDER}
_UNIT_GROUP = re.compile(r"(\d*)(\D)", re.ASCII)


def _parse_as(token: str, kind: AdjustmentType) -> TimeAdjustment | None:
    if not _TOKEN_PATTERNS[kind].fullmatch(token):
        return None
    values = {}
    for pattern, unit in _AMOUNT_PATTERNS[kind]:
        match = pattern.search(token)
        if match:
            values[unit] = int(match.group(1))
    return make_adjustment(kind, values)


def parse_token(token: str) -> TimeAdjustment | None:
    """Parse one space-free token such as ``+1h30m`` or ``@20d``."""
    for kind in PARSE_ORDER:
        adjustment = _parse_as(token, kind)
        if adjustment is not None:
            return adjustment
    return None


def parse(expression: str) -> list[TimeAdjustment] | None:
    """Parse a space separated expression into adjustments.

    Every token has to parse for the call to succeed; otherwise ``None`` is
    returned and nothing is kept from the tokens that did parse.
    """
    adjustments: list[TimeAdjustment] = []
    for token in expression.split(" "):
        adjustment = parse_token(token)
        if adjustment is None:
            logger.debug("Rejected token %r in expression %r", token, expression)
            return None
        adjustments.append(adjustment)
    return adjustments


def parse_strict(expression: str) -> list[TimeAdjustment]:
    adjustments = parse(expression)
    if adjustments is None:
        raise ExpressionError(expression, explain(expression))
    return adjustments


def _explain_token(token: str, position: int) -> str | None:
    label = f"Token {position} '{token}'"
    if not token:
        return f"Token {position}: empty token (check for doubled or trailing spaces)"
    try:
        kind = AdjustmentType(token[0])
    except ValueError:
        return f"{label}: must start with '+', '-' or '@'"
    valid = symbols_for(kind)
    body = token[1:]
    seen: list[str] = []
    consumed = 0
    for match in _UNIT_GROUP.finditer(body):
        if match.start() != consumed:
            break
        digits, symbol = match.groups()
        consumed = match.end()
        if not digits:
            return f"{label}: '{symbol}' is not preceded by an amount"
        if symbol not in valid:
            return f"{label}: unit '{symbol}' is not valid here (expected one of {', '.join(valid)})"
        if symbol in seen:
            return f"{label}: unit '{symbol}' appears more than once"
        if seen and slot_index(kind, symbol) < slot_index(kind, seen[-1]):
            return f"{label}: unit '{symbol}' must come before '{seen[-1]}'"
        seen.append(symbol)
    if consumed != len(body):
        return f"{label}: unexpected text '{body[consumed:]}'"
    return None


def explain(expression: str) -> list[str]:
    """Return readable reasons why ``expression`` does not parse.

    The list is empty when the expression is valid.
    """
    issues: list[str] = []
    for position, token in enumerate(expression.split(" "), start=1):
        if parse_token(token) is not None:
            continue
        issue = _explain_token(token, position)
        issues.append(issue or f"Token {position} '{token}': not a valid adjustment")
    return issues


def format_adjustment(adjustment: TimeAdjustment) -> str:
    parts = [adjustment.type.value]
    for symbol, unit in UNIT_SLOTS[adjustment.type]:
        if unit in adjustment.values:
            parts.append(f"{adjustment.values[unit]}{symbol}")
    return "".join(parts)


def format_adjustments(adjustments: TimeAdjustment | Iterable[TimeAdjustment]) -> str:
    if isinstance(adjustments, (str, bytes)):
        raise TypeError("format_adjustments expects adjustments, not text")
    if isinstance(adjustments, (IncrementAdjustment, DecrementAdjustment, SetAdjustment)):
        return format_adjustment(adjustments)
    return " ".join(format_adjustment(item) for item in adjustments)
