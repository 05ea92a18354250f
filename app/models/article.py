from __future__ import annotations

import datetime as dt

from sqlalchemy import String, Integer, DateTime, ForeignKey, func, Text, JSON, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.core.db import Base

def _utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)

class Article(Base):
    __tablename__ = "articles"
    __table_args__ = (
        UniqueConstraint("slug", name="uq_articles_slug"),
        Index("ix_articles_views_published", "views", "published_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    slug: Mapped[str] = mapped_column(String, nullable=False)

    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Dynamic zone: list of component dicts keyed by "__component"
    blocks: Mapped[list | None] = mapped_column(JSON, nullable=True)

    # Only ever incremented by the lookup path. NULL reads as 0.
    views: Mapped[int | None] = mapped_column(Integer, nullable=True, default=0)

    author_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("authors.id"), nullable=True)
    author = relationship("Author")

    category_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("categories.id"), nullable=True)
    category = relationship("Category")

    image_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("files.id"), nullable=True)
    image = relationship("Media")

    # NULL means draft
    published_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=_utc_now, nullable=False
    )
