from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.api.query import pagination, populate_paths
from app.api.serializers import author_resource, category_resource, pagination_meta
from app.core.db import get_db
from app.models import Author, Category

router = APIRouter(prefix="/api", tags=["collections"])

@router.get("/categories")
async def list_categories(request: Request, session: AsyncSession = Depends(get_db)):
    page, page_size = pagination(request.query_params)
    populate = populate_paths(request.query_params)

    total = (await session.execute(select(func.count(Category.id)))).scalar_one()
    stmt = (
        select(Category)
        .options(selectinload(Category.image))
        .order_by(Category.name.asc(), Category.id.asc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    rows = (await session.execute(stmt)).scalars().all()
    return {
        "data": [category_resource(c, populate)["data"] for c in rows],
        "meta": pagination_meta(page, page_size, total),
    }

@router.get("/authors")
async def list_authors(request: Request, session: AsyncSession = Depends(get_db)):
    page, page_size = pagination(request.query_params)
    populate = populate_paths(request.query_params)

    total = (await session.execute(select(func.count(Author.id)))).scalar_one()
    stmt = (
        select(Author)
        .options(selectinload(Author.avatar))
        .order_by(Author.name.asc(), Author.id.asc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    rows = (await session.execute(stmt)).scalars().all()
    return {
        "data": [author_resource(a, populate)["data"] for a in rows],
        "meta": pagination_meta(page, page_size, total),
    }
