from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from apps.api.db.models import Notice
from apps.api.deps.deps import get_db
from apps.api.schemas.common import SuccessResponse
from apps.api.schemas.notices import (
    NoticeIn,
    NoticeListResponse,
    NoticeOut,
    NoticeResponse,
    NoticeUpdate,
    PopupNoticeResponse,
)
from apps.api.services.content import (
    create_record,
    delete_record,
    list_records,
    popup_seen_key,
    require_object_id,
    select_popup_notice,
    update_record,
)


router = APIRouter(prefix="/notices", tags=["notices"])


@router.get("", response_model=NoticeListResponse)
def list_notices(db: Session = Depends(get_db)) -> NoticeListResponse:
    notices = list_records(db, Notice)
    return NoticeListResponse(notices=[NoticeOut.model_validate(n) for n in notices])


@router.get("/popup", response_model=PopupNoticeResponse)
def popup_notice(day: Optional[date] = None, db: Session = Depends(get_db)) -> PopupNoticeResponse:
    notice = select_popup_notice(db)
    if notice is None:
        return PopupNoticeResponse()
    day = day or datetime.now(timezone.utc).date()
    return PopupNoticeResponse(notice=NoticeOut.model_validate(notice), seen_key=popup_seen_key(notice.id, day))


@router.post("", response_model=NoticeResponse)
def create_notice(body: NoticeIn, db: Session = Depends(get_db)) -> NoticeResponse:
    notice = create_record(db, Notice, body.model_dump(), "notice")
    return NoticeResponse(notice=NoticeOut.model_validate(notice))


@router.put("", response_model=NoticeResponse)
def update_notice(body: NoticeUpdate, db: Session = Depends(get_db)) -> NoticeResponse:
    notice = update_record(db, Notice, body.id, body.model_dump(exclude={"id"}), "notice")
    return NoticeResponse(notice=NoticeOut.model_validate(notice))


@router.delete("", response_model=SuccessResponse)
def delete_notice(
    record_id: Optional[str] = Query(None, alias="id"), db: Session = Depends(get_db)
) -> SuccessResponse:
    delete_record(db, Notice, require_object_id(record_id, "notice"), "notice")
    return SuccessResponse()
