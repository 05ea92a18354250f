from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy import select, desc, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.query import filter_ops, pagination, populate_paths
from app.api.serializers import article_entity, article_resource, pagination_meta
from app.core.db import get_db
from app.models import Article, Category
from app.services.articles import (
    ArticleNotFound,
    most_popular,
    parse_identifier,
    parse_limit,
    record_view,
    with_relations,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["articles"])

async def _most_popular_response(session: AsyncSession, raw_limit: Optional[str]) -> dict:
    limit = parse_limit(raw_limit)
    try:
        articles = await most_popular(session, limit)
    except SQLAlchemyError:
        logger.exception("most popular query failed (limit=%s)", limit)
        raise HTTPException(status_code=500, detail="Failed to fetch most popular articles")
    return {"data": [article_entity(a) for a in articles]}

def _listing_conditions(request: Request) -> list:
    params = request.query_params
    ops = filter_ops(params)
    conds = []

    preview = params.get("publicationState") == "preview"
    published_only = ops.get(("publishedAt", "$notNull")) == "true"
    if published_only or not preview:
        conds.append(Article.published_at.is_not(None))

    slug = ops.get(("slug", "$eq"))
    if slug is not None:
        conds.append(Article.slug == slug)

    # Category may be given by name or slug
    category = ops.get(("category", "$eq"))
    if category is not None:
        conds.append(Article.category.has(or_(Category.name == category, Category.slug == category)))
    return conds

@router.get("/articles")
async def list_articles(
    request: Request,
    most_popular_flag: Optional[str] = Query(default=None, alias="mostPopular"),
    limit: Optional[str] = Query(default=None),
    session: AsyncSession = Depends(get_db),
):
    if most_popular_flag == "true":
        return await _most_popular_response(session, limit)

    page, page_size = pagination(request.query_params)
    populate = populate_paths(request.query_params)
    conds = _listing_conditions(request)

    total = (await session.execute(select(func.count(Article.id)).where(*conds))).scalar_one()
    stmt = with_relations(
        select(Article)
        .where(*conds)
        .order_by(desc(Article.published_at), desc(Article.id))
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    rows = (await session.execute(stmt)).scalars().all()

    return {
        "data": [article_resource(a, populate) for a in rows],
        "meta": pagination_meta(page, page_size, total),
    }

@router.get("/articles/most-popular")
async def list_most_popular(
    limit: Optional[str] = Query(default=None),
    session: AsyncSession = Depends(get_db),
):
    return await _most_popular_response(session, limit)

@router.get("/articles/{identifier}")
async def get_article(identifier: str, session: AsyncSession = Depends(get_db)):
    try:
        article = await record_view(session, parse_identifier(identifier))
    except ArticleNotFound:
        raise HTTPException(status_code=404, detail="Not Found")
    return {"data": article_entity(article)}
