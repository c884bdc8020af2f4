"""Database models."""

from journal.models.trade import Outcome, Side, Trade
from journal.models.user import User

__all__ = [
    "Outcome",
    "Side",
    "Trade",
    "User",
]
