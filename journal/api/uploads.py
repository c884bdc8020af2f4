"""Screenshot downloads, visible only to the owner of the trade that references them."""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse
from sqlmodel import Session

from journal.config import settings
from journal.database import get_session
from journal.api.deps import get_current_user
from journal.models.user import User
from journal.services import trade_store
from journal.services.screenshots import screenshot_path, url_for_key

router = APIRouter(
    prefix=settings.upload_url_prefix.rstrip("/"),
    tags=["uploads"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/{key}")
def get_screenshot(
    key: str,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    url = url_for_key(key)
    path = None
    if trade_store.get_trade_by_screenshot(session, user.id, url):
        path = screenshot_path(url)
    if path is None:
        raise HTTPException(status_code=404, detail="Screenshot not found")
    return FileResponse(path)
