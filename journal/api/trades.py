"""CRUD API for journal trades.

Create and update take multipart form data so a screenshot can ride along
with the trade fields.
"""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from pydantic import ValidationError
from sqlmodel import Session

from journal.database import get_session
from journal.models.trade import Outcome, Side
from journal.models.user import User
from journal.schemas.trade import DateRange, TradeCreate, TradeRead
from journal.services import trade_store
from journal.services.screenshots import (
    ScreenshotError,
    delete_screenshot,
    has_content,
    save_screenshot,
)
from journal.api.deps import get_current_user, get_date_range

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/trades", tags=["trades"], dependencies=[Depends(get_current_user)])


def trade_form(
    date: str = Form(...),
    pair: str = Form(...),
    side: str = Form(...),
    entry: str = Form(...),
    stop_loss: str = Form(...),
    take_profit: str = Form(...),
    outcome: str = Form(...),
    notes: str | None = Form(None),
) -> TradeCreate:
    """Parse raw form strings into a validated ``TradeCreate``."""
    try:
        return TradeCreate.model_validate(
            {
                "date": date,
                "pair": pair,
                "side": side,
                "entry": entry,
                "stop_loss": stop_loss,
                "take_profit": take_profit,
                "outcome": outcome,
                "notes": notes,
            }
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=e.errors(include_url=False, include_context=False),
        )


async def _store_upload(screenshot: UploadFile | None) -> str | None:
    """Save an uploaded screenshot; storage failures leave the trade without one."""
    if not has_content(screenshot):
        return None
    try:
        return await save_screenshot(screenshot)
    except ScreenshotError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except OSError as e:
        logger.error(f"Error storing screenshot: {e}")
        return None


def _discard_screenshot(url: str):
    try:
        delete_screenshot(url)
    except OSError as e:
        logger.error(f"Error deleting screenshot {url}: {e}")


def _get_owned_trade(session: Session, user: User, trade_id: int):
    trade = trade_store.get_trade(session, user.id, trade_id)
    if not trade:
        raise HTTPException(status_code=404, detail="Trade not found")
    return trade


@router.get("", response_model=list[TradeRead])
def list_trades(
    dates: DateRange = Depends(get_date_range),
    side: Side | None = None,
    outcome: Outcome | None = None,
    search: str | None = None,
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    return trade_store.list_trades(
        session,
        user.id,
        date_from=dates.date_from,
        date_to=dates.date_to,
        side=side,
        outcome=outcome,
        search=search,
        limit=limit,
        offset=offset,
    )


@router.post("", response_model=TradeRead, status_code=201)
async def create_trade(
    data: TradeCreate = Depends(trade_form),
    screenshot: UploadFile | None = File(None),
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    screenshot_url = await _store_upload(screenshot)
    try:
        return trade_store.create_trade(session, user.id, data, screenshot_url=screenshot_url)
    except Exception:
        if screenshot_url:
            _discard_screenshot(screenshot_url)
        raise


@router.get("/{trade_id}", response_model=TradeRead)
def get_trade(
    trade_id: int,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    return _get_owned_trade(session, user, trade_id)


@router.put("/{trade_id}", response_model=TradeRead)
async def update_trade(
    trade_id: int,
    data: TradeCreate = Depends(trade_form),
    screenshot: UploadFile | None = File(None),
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    trade = _get_owned_trade(session, user, trade_id)

    old_url = trade.screenshot_url
    new_url = await _store_upload(screenshot)
    try:
        trade = trade_store.update_trade(session, trade, data, screenshot_url=new_url or old_url)
    except Exception:
        if new_url:
            _discard_screenshot(new_url)
        raise

    # The old file goes only once the row points at the new one
    if new_url and old_url:
        _discard_screenshot(old_url)
    return trade


@router.delete("/{trade_id}", status_code=204)
def delete_trade(
    trade_id: int,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    trade = _get_owned_trade(session, user, trade_id)
    screenshot_url = trade.screenshot_url
    trade_store.delete_trade(session, trade)
    if screenshot_url:
        _discard_screenshot(screenshot_url)
