from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Type, TypeVar

from sqlalchemy import case, select
from sqlalchemy.orm import Session

from apps.api.db.base import Base
from apps.api.db.models import Notice
from packages.common.errors import BadRequestError, NotFoundError
from packages.common.ids import is_object_id

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

PRIORITY_RANK = {"high": 0, "medium": 1, "low": 2}


def require_object_id(record_id: Optional[str], entity: str) -> str:
    """Validate an ``id`` query/body value, raising 400 with the entity name."""
    if not record_id:
        raise BadRequestError(f"{entity.capitalize()} ID is required")
    if not is_object_id(record_id):
        raise BadRequestError(f"Invalid {entity} ID format")
    return record_id


def list_records(db: Session, model: Type[ModelT]) -> list[ModelT]:
    rows = list(db.scalars(select(model).order_by(model.created_at)))  # type: ignore[attr-defined]
    logger.debug("records_listed", extra={"table": model.__tablename__, "count": len(rows)})
    return rows


def create_record(db: Session, model: Type[ModelT], data: dict[str, Any], entity: str) -> ModelT:
    record = model(**data)
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info(f"{entity}_created", extra={"id": record.id})  # type: ignore[attr-defined]
    return record


def update_record(db: Session, model: Type[ModelT], record_id: str, data: dict[str, Any], entity: str) -> ModelT:
    record = db.get(model, record_id)
    if record is None:
        raise NotFoundError(f"{entity.capitalize()} not found")
    for field, value in data.items():
        setattr(record, field, value)
    db.commit()
    db.refresh(record)
    logger.info(f"{entity}_updated", extra={"id": record_id})
    return record


def delete_record(db: Session, model: Type[ModelT], record_id: str, entity: str) -> None:
    record = db.get(model, record_id)
    if record is None:
        raise NotFoundError(f"{entity.capitalize()} not found")
    db.delete(record)
    db.commit()
    logger.info(f"{entity}_deleted", extra={"id": record_id})


def select_popup_notice(db: Session) -> Optional[Notice]:
    """Active popup notice with the highest priority; newest wins a tie."""
    rank = case(PRIORITY_RANK, value=Notice.priority, else_=len(PRIORITY_RANK))
    stmt = (
        select(Notice)
        .where(Notice.is_active.is_(True), Notice.show_as_popup.is_(True))
        .order_by(rank, Notice.created_at.desc())
        .limit(1)
    )
    return db.scalars(stmt).first()


def popup_seen_key(notice_id: str, day: date) -> str:
    # clients remember these keys so a popup shows at most once per day
    return f"{notice_id}-{day.isoformat()}"
