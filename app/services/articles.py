from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Union

from sqlalchemy import select, update, desc, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.config import settings
from app.models import Article, Author

logger = logging.getLogger(__name__)

LIMIT_RE = re.compile(r"^\s*[+-]?\d+")
ID_RE = re.compile(r"[0-9]+")

class ArticleNotFound(LookupError):
    def __init__(self, key: "ArticleKey"):
        super().__init__(f"Article not found: {key}")
        self.key = key

@dataclass(frozen=True)
class ById:
    id: int

    def where(self):
        return Article.id == self.id

@dataclass(frozen=True)
class BySlug:
    slug: str

    def where(self):
        return Article.slug == self.slug

ArticleKey = Union[ById, BySlug]

def parse_identifier(raw: str) -> ArticleKey:
    """Numeric identifiers address the primary key, everything else is a slug."""
    # ASCII digits only: "1_000", " 7 " and other int()-accepted forms are slugs
    if isinstance(raw, str) and ID_RE.fullmatch(raw):
        return ById(int(raw))
    return BySlug(raw)

def parse_limit(raw: str | None, default: int | None = None, maximum: int | None = None) -> int:
    """Lenient integer parsing: a leading integer wins, anything else yields the default.

    Non-positive values also fall back to the default; values above ``maximum`` are clamped.
    """
    if default is None:
        default = settings.popular_default_limit
    if maximum is None:
        maximum = settings.popular_max_limit
    m = LIMIT_RE.match(raw) if raw else None
    if not m:
        return default
    value = int(m.group(0))
    if value <= 0:
        return default
    return min(value, maximum)

def with_relations(stmt):
    # author -> avatar, image, category
    return stmt.options(
        selectinload(Article.author).selectinload(Author.avatar),
        selectinload(Article.image),
        selectinload(Article.category),
    )

async def get_article(session: AsyncSession, key: ArticleKey) -> Article:
    stmt = with_relations(select(Article).where(key.where()))
    article = (await session.execute(stmt)).scalars().first()
    if article is None:
        raise ArticleNotFound(key)
    return article

async def _increment_read_modify_write(session: AsyncSession, article: Article) -> int:
    # Not atomic: concurrent lookups of the same article may lose updates.
    views = (article.views or 0) + 1
    await session.execute(
        update(Article).where(Article.id == article.id).values(views=views),
        execution_options={"synchronize_session": False},
    )
    await session.commit()
    return views

async def _increment_atomic(session: AsyncSession, article: Article) -> int:
    stmt = (
        update(Article)
        .where(Article.id == article.id)
        .values(views=func.coalesce(Article.views, 0) + 1)
        .returning(Article.views)
    )
    views = (await session.execute(stmt, execution_options={"synchronize_session": False})).scalar_one()
    await session.commit()
    return views

async def record_view(session: AsyncSession, key: ArticleKey, atomic: bool | None = None) -> Article:
    """Look up one article and count the view.

    Exactly one write happens per successful lookup. The returned article carries
    the post-increment count without being re-read from storage. A missing
    article raises :class:`ArticleNotFound` before anything is written.
    """
    if atomic is None:
        atomic = settings.atomic_view_increment

    article = await get_article(session, key)
    if atomic:
        views = await _increment_atomic(session, article)
    else:
        views = await _increment_read_modify_write(session, article)

    # The UPDATE bypasses the identity map; detach and reflect the new count in memory only
    session.expunge(article)
    article.views = views
    logger.debug("article %s viewed, views=%s", article.id, views)
    return article

async def most_popular(session: AsyncSession, limit: int) -> list[Article]:
    """Published articles ranked by views, newest publication first on ties."""
    stmt = with_relations(
        select(Article)
        .where(Article.published_at.is_not(None))
        .order_by(desc(func.coalesce(Article.views, 0)), desc(Article.published_at))
        .limit(limit)
    )
    articles = list((await session.execute(stmt)).scalars().all())
    logger.debug(
        "most popular articles: %s",
        [f"{a.title}: {a.views or 0} views" for a in articles],
    )
    return articles
