"""CSV serialization of trades."""

from datetime import date, datetime, timezone
from typing import Iterable

from journal.utils.constants import CSV_HEADERS, EXPORT_FILENAME_PREFIX
from journal.utils.dates import to_utc


def format_number(value: float | None) -> str:
    """Shortest round-trip form; integral floats drop the trailing ``.0``."""
    if value is None:
        return ""
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def _text(value) -> str:
    if value is None:
        return ""
    return str(getattr(value, "value", value))


def trade_row(trade) -> list[str]:
    return [
        to_utc(trade.date).strftime("%Y-%m-%d"),
        _text(trade.pair),
        _text(trade.side),
        format_number(trade.entry),
        format_number(trade.stop_loss),
        format_number(trade.take_profit),
        _text(trade.outcome),
        format_number(trade.pips),
        f"{trade.risk_reward:.2f}",
        _text(trade.notes),
    ]


def _join(fields: list[str]) -> str:
    # Fields are quoted verbatim; embedded quotes are not escaped
    return ",".join(f'"{field}"' for field in fields)


def trades_to_csv(trades: Iterable) -> str:
    """Header plus one row per trade, in input order, without a trailing newline."""
    rows = [CSV_HEADERS] + [trade_row(t) for t in trades]
    return "\n".join(_join(row) for row in rows)


def export_filename(today: date | None = None) -> str:
    if today is None:
        today = datetime.now(timezone.utc).date()
    return f"{EXPORT_FILENAME_PREFIX}-{today.isoformat()}.csv"
