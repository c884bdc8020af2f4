"""Trade model — one journal entry per discretionary trade."""

from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING

from sqlmodel import SQLModel, Field, Relationship

if TYPE_CHECKING:
    from journal.models.user import User


class Side(str, Enum):
    BUY = "Buy"
    SELL = "Sell"


class Outcome(str, Enum):
    WIN = "Win"
    LOSS = "Loss"


class Trade(SQLModel, table=True):
    __tablename__ = "trade"

    id: int | None = Field(default=None, primary_key=True)
    owner_id: int = Field(foreign_key="user.id", index=True)
    date: datetime = Field(index=True)  # UTC
    pair: str = Field(max_length=32)
    side: Side
    entry: float
    stop_loss: float
    take_profit: float
    outcome: Outcome
    pips: float | None = None  # derived, negative for losses
    risk_reward: float = 0.0  # derived
    notes: str | None = None
    screenshot_url: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    owner: "User" = Relationship(back_populates="trades")
