"""Owner-scoped trade persistence.

Every read and write takes the owner's id; a trade belonging to another user
is indistinguishable from a missing one. Derived fields are recomputed on each
write and never copied from input.
"""

import logging
from datetime import date, datetime, timezone

from sqlalchemy import func, or_
from sqlmodel import Session, select

from journal.engine.metrics import derive_fields
from journal.models.trade import Outcome, Side, Trade
from journal.schemas.trade import TradeCreate
from journal.utils.dates import end_of_day, start_of_day

logger = logging.getLogger(__name__)


def _apply_input(trade: Trade, data: TradeCreate):
    for key, value in data.model_dump().items():
        setattr(trade, key, value)
    derived = derive_fields(
        entry=trade.entry,
        stop_loss=trade.stop_loss,
        take_profit=trade.take_profit,
        side=trade.side,
        outcome=trade.outcome,
        pair=trade.pair,
    )
    trade.risk_reward = derived.risk_reward
    trade.pips = derived.pips


def create_trade(
    session: Session,
    owner_id: int,
    data: TradeCreate,
    screenshot_url: str | None = None,
) -> Trade:
    trade = Trade(owner_id=owner_id, screenshot_url=screenshot_url)
    _apply_input(trade, data)
    session.add(trade)
    session.commit()
    session.refresh(trade)
    logger.info(
        f"Trade {trade.id} created for user {owner_id}: {trade.pair} {trade.side.value} "
        f"{trade.outcome.value} pips={trade.pips:.1f} rr={trade.risk_reward:.2f}"
    )
    return trade


def get_trade(session: Session, owner_id: int, trade_id: int) -> Trade | None:
    return session.exec(
        select(Trade).where(Trade.id == trade_id, Trade.owner_id == owner_id)
    ).first()


def get_trade_by_screenshot(session: Session, owner_id: int, url: str) -> Trade | None:
    return session.exec(
        select(Trade).where(Trade.screenshot_url == url, Trade.owner_id == owner_id)
    ).first()


def list_trades(
    session: Session,
    owner_id: int,
    date_from: date | None = None,
    date_to: date | None = None,
    side: Side | None = None,
    outcome: Outcome | None = None,
    search: str | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> list[Trade]:
    """Owner's trades, newest first. ``date_to`` includes the whole day."""
    stmt = select(Trade).where(Trade.owner_id == owner_id)
    if date_from is not None:
        stmt = stmt.where(Trade.date >= start_of_day(date_from))
    if date_to is not None:
        stmt = stmt.where(Trade.date <= end_of_day(date_to))
    if side is not None:
        stmt = stmt.where(Trade.side == side)
    if outcome is not None:
        stmt = stmt.where(Trade.outcome == outcome)
    if search:
        pattern = f"%{search.strip().lower()}%"
        stmt = stmt.where(
            or_(
                func.lower(Trade.pair).like(pattern),
                func.lower(Trade.notes).like(pattern),
            )
        )
    stmt = stmt.order_by(Trade.date.desc(), Trade.id.desc()).offset(offset)
    if limit is not None:
        stmt = stmt.limit(limit)
    return list(session.exec(stmt).all())


def update_trade(
    session: Session,
    trade: Trade,
    data: TradeCreate,
    screenshot_url: str | None = None,
) -> Trade:
    """Replace all editable fields and re-derive. Ownership never changes."""
    _apply_input(trade, data)
    trade.screenshot_url = screenshot_url
    trade.updated_at = datetime.now(timezone.utc)
    session.add(trade)
    session.commit()
    session.refresh(trade)
    logger.info(f"Trade {trade.id} updated for user {trade.owner_id}")
    return trade


def delete_trade(session: Session, trade: Trade):
    trade_id, owner_id = trade.id, trade.owner_id
    session.delete(trade)
    session.commit()
    logger.info(f"Trade {trade_id} deleted for user {owner_id}")
