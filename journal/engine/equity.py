"""Equity curve projection from trade outcomes."""

from dataclasses import dataclass
from typing import Iterable

from journal.models.trade import Outcome
from journal.utils.constants import (
    EQUITY_PER_PIP,
    EQUITY_START_LABEL,
    EQUITY_START_TRADE,
    STARTING_EQUITY,
)
from journal.utils.dates import to_utc


@dataclass(frozen=True)
class EquityPoint:
    label: str
    equity: float
    trade: str


def trade_delta(trade, per_pip: float = EQUITY_PER_PIP) -> float:
    """Equity change for one trade: `+pips * per_pip` on a win, `-pips * per_pip` on a loss."""
    pips = trade.pips or 0
    # Loss pips are stored negative, so a losing trade raises equity here.
    # TODO: confirm the intended loss sign with the journal owner (DESIGN.md).
    if trade.outcome == Outcome.WIN:
        return pips * per_pip
    return -pips * per_pip


def equity_curve(
    trades: Iterable,
    starting_equity: float = STARTING_EQUITY,
    per_pip: float = EQUITY_PER_PIP,
) -> list[EquityPoint]:
    """Cumulative equity after each trade, oldest first.

    The first point is a synthetic "Start" at ``starting_equity``. Trades
    sharing a timestamp keep their input order (stable sort).
    """
    ordered = sorted(trades, key=lambda t: to_utc(t.date))

    equity = starting_equity
    points = [EquityPoint(label=EQUITY_START_LABEL, equity=equity, trade=EQUITY_START_TRADE)]
    for trade in ordered:
        equity += trade_delta(trade, per_pip)
        points.append(
            EquityPoint(
                label=to_utc(trade.date).strftime("%Y-%m-%d"),
                equity=equity,
                trade=f"{trade.pair} {_enum_value(trade.side)}",
            )
        )
    return points


def _enum_value(value) -> str:
    return getattr(value, "value", value)
