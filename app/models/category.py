from __future__ import annotations

import datetime as dt

from sqlalchemy import String, Integer, DateTime, ForeignKey, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.core.db import Base

class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    slug: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Hex string, e.g. "#3b82f6"
    color: Mapped[str | None] = mapped_column(String, nullable=True)

    image_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("files.id"), nullable=True)
    image = relationship("Media")

    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
