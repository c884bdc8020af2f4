"""Dashboard API — summary stats and equity curve."""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from journal.database import get_session
from journal.api.deps import get_current_user, get_date_range
from journal.engine.analytics import aggregate
from journal.engine.equity import equity_curve
from journal.models.user import User
from journal.schemas.trade import AnalyticsRead, DateRange, EquityPointRead
from journal.services import trade_store

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"], dependencies=[Depends(get_current_user)])


@router.get("/summary", response_model=AnalyticsRead)
def dashboard_summary(
    dates: DateRange = Depends(get_date_range),
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Aggregated stats over the user's trades."""
    trades = trade_store.list_trades(
        session, user.id, date_from=dates.date_from, date_to=dates.date_to
    )
    return aggregate(trades)


@router.get("/equity", response_model=list[EquityPointRead])
def dashboard_equity_curve(
    dates: DateRange = Depends(get_date_range),
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Simulated equity after each trade, oldest first."""
    trades = trade_store.list_trades(
        session, user.id, date_from=dates.date_from, date_to=dates.date_to
    )
    # Storage returns newest first; put ties back in entry order before the stable sort
    trades.reverse()
    return equity_curve(trades)
