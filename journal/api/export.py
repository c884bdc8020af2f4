"""Export API — CSV download and preview statistics."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlmodel import Session

from journal.database import get_session
from journal.api.deps import get_current_user, get_date_range
from journal.engine.analytics import aggregate
from journal.engine.export import export_filename, trades_to_csv
from journal.models.user import User
from journal.schemas.trade import (
    AnalyticsRead,
    DateRange,
    ExportPreview,
    ExportPreviewRange,
    TradeRead,
)
from journal.services import trade_store
from journal.utils.constants import EXPORT_PREVIEW_SIZE
from journal.utils.dates import to_utc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/export", tags=["export"], dependencies=[Depends(get_current_user)])


@router.get("")
def export_csv(
    dates: DateRange = Depends(get_date_range),
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Download the user's trades as CSV, newest first."""
    trades = trade_store.list_trades(
        session, user.id, date_from=dates.date_from, date_to=dates.date_to
    )
    if not trades:
        raise HTTPException(status_code=404, detail="No trades found for export")

    filename = export_filename()
    logger.info(f"Exporting {len(trades)} trades for user {user.id} as {filename}")
    return Response(
        content=trades_to_csv(trades),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/preview", response_model=ExportPreview)
def export_preview(
    body: DateRange,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Stats and the first few trades of what an export would contain."""
    trades = trade_store.list_trades(
        session, user.id, date_from=body.date_from, date_to=body.date_to
    )
    return ExportPreview(
        stats=AnalyticsRead.model_validate(aggregate(trades).rounded().to_dict()),
        trade_count=len(trades),
        date_range=ExportPreviewRange(
            date_from=body.date_from or (to_utc(trades[-1].date) if trades else None),
            date_to=body.date_to or (to_utc(trades[0].date) if trades else None),
        ),
        preview=[TradeRead.model_validate(t) for t in trades[:EXPORT_PREVIEW_SIZE]],
    )
