from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from packages.common.ids import new_object_id

from .base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )


class Product(TimestampMixin, Base):
    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[str] = mapped_column(String(64), nullable=False)
    category: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    subcategory: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    image: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    in_stock: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    whatsapp_phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)


class Document(TimestampMixin, Base):
    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    file_type: Mapped[str] = mapped_column(String(64), nullable=False)
    category: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    upload_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    file_url: Mapped[str] = mapped_column(String(1024), default="", nullable=False)
    file_size: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    original_name: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)


class Notice(TimestampMixin, Base):
    __tablename__ = "notices"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    category: Mapped[str] = mapped_column(String(128), default="general", nullable=False)
    file_url: Mapped[str] = mapped_column(String(1024), default="", nullable=False)
    file_type: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    file_size: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    original_name: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    show_as_popup: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    priority: Mapped[str] = mapped_column(String(16), default="medium", nullable=False)

    __table_args__ = (
        Index("ix_notices_popup", "is_active", "show_as_popup"),
    )
