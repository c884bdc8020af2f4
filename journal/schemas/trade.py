"""Pydantic schemas for the Trade API."""

from datetime import date, datetime
from pydantic import BaseModel, Field, field_validator, model_validator

from journal.models.trade import Outcome, Side
from journal.utils.dates import to_utc


class TradeCreate(BaseModel):
    """Validated trade input. Derived fields are never accepted from callers."""

    date: datetime
    pair: str = Field(min_length=1, max_length=32)
    side: Side
    entry: float = Field(gt=0, allow_inf_nan=False)
    stop_loss: float = Field(gt=0, allow_inf_nan=False)
    take_profit: float = Field(gt=0, allow_inf_nan=False)
    outcome: Outcome
    notes: str | None = Field(default=None, max_length=5000)

    model_config = {"extra": "ignore"}

    @field_validator("pair")
    @classmethod
    def _normalize_pair(cls, value: str) -> str:
        text = value.strip().upper().replace("/", "")
        if not text:
            raise ValueError("must not be empty")
        return text

    @field_validator("date")
    @classmethod
    def _normalize_date(cls, value: datetime) -> datetime:
        return to_utc(value)

    @field_validator("notes")
    @classmethod
    def _blank_notes_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        return text or None


class TradeRead(BaseModel):
    id: int
    date: datetime
    pair: str
    side: Side
    entry: float
    stop_loss: float
    take_profit: float
    outcome: Outcome
    pips: float | None
    risk_reward: float
    notes: str | None
    screenshot_url: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("date", "created_at", "updated_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        return to_utc(value)


class AnalyticsRead(BaseModel):
    total_trades: int
    winning_trades: int
    losing_trades: int
    buy_trades: int
    sell_trades: int
    win_rate: float
    avg_risk_reward: float
    profit_factor: float
    total_pips: float

    model_config = {"from_attributes": True}


class EquityPointRead(BaseModel):
    label: str
    equity: float
    trade: str

    model_config = {"from_attributes": True}


class DateRange(BaseModel):
    date_from: date | None = None
    date_to: date | None = None

    @model_validator(mode="after")
    def _validate_order(self):
        if (
            self.date_from is not None
            and self.date_to is not None
            and self.date_from > self.date_to
        ):
            raise ValueError("date_from must not be after date_to")
        return self


class ExportPreviewRange(BaseModel):
    date_from: datetime | date | None = None
    date_to: datetime | date | None = None


class ExportPreview(BaseModel):
    stats: AnalyticsRead
    trade_count: int
    date_range: ExportPreviewRange
    preview: list[TradeRead]
