from __future__ import annotations

import datetime as dt
from typing import Any, Optional

from app.models import Article, Author, Category, Media

def _iso(value: Optional[dt.datetime]) -> Optional[str]:
    return value.isoformat() if value else None

def media_entity(m: Optional[Media]) -> Optional[dict]:
    if m is None:
        return None
    return {
        "id": m.id,
        "name": m.name,
        "url": m.url,
        "alternativeText": m.alternative_text,
        "width": m.width,
        "height": m.height,
        "mime": m.mime,
    }

def _author_fields(a: Author) -> dict:
    return {"name": a.name, "email": a.email, "createdAt": _iso(a.created_at)}

def _category_fields(c: Category) -> dict:
    return {
        "name": c.name,
        "slug": c.slug,
        "description": c.description,
        "color": c.color,
        "createdAt": _iso(c.created_at),
    }

def _article_fields(a: Article) -> dict:
    return {
        "title": a.title,
        "description": a.description,
        "content": a.content,
        "slug": a.slug,
        "views": a.views or 0,
        "blocks": a.blocks or [],
        "publishedAt": _iso(a.published_at),
        "createdAt": _iso(a.created_at),
        "updatedAt": _iso(a.updated_at),
    }

# Flat entity shape: relations nested as plain objects (lookup / most popular)

def author_entity(a: Optional[Author]) -> Optional[dict]:
    if a is None:
        return None
    return {"id": a.id, **_author_fields(a), "avatar": media_entity(a.avatar)}

def category_entity(c: Optional[Category]) -> Optional[dict]:
    if c is None:
        return None
    return {"id": c.id, **_category_fields(c), "image": media_entity(c.image)}

def article_entity(a: Article) -> dict:
    return {
        "id": a.id,
        **_article_fields(a),
        "author": author_entity(a.author),
        "image": media_entity(a.image),
        "category": category_entity(a.category),
    }

# REST shape: {"id", "attributes"} with relations wrapped as {"data": ...}

def _wrap(data: Optional[dict]) -> dict:
    return {"data": data}

def media_resource(m: Optional[Media]) -> dict:
    if m is None:
        return _wrap(None)
    entity = media_entity(m)
    entity_id = entity.pop("id")
    return _wrap({"id": entity_id, "attributes": entity})

def author_resource(a: Optional[Author], populate: set[str]) -> dict:
    if a is None:
        return _wrap(None)
    attrs = _author_fields(a)
    if "avatar" in populate:
        attrs["avatar"] = media_resource(a.avatar)
    return _wrap({"id": a.id, "attributes": attrs})

def category_resource(c: Optional[Category], populate: set[str]) -> dict:
    if c is None:
        return _wrap(None)
    attrs = _category_fields(c)
    if "image" in populate:
        attrs["image"] = media_resource(c.image)
    return _wrap({"id": c.id, "attributes": attrs})

def article_resource(a: Article, populate: set[str]) -> dict:
    """``populate`` holds dotted relation paths, e.g. ``{"image", "author", "author.avatar"}``."""
    attrs: dict[str, Any] = _article_fields(a)
    if "image" in populate:
        attrs["image"] = media_resource(a.image)
    if "author" in populate:
        attrs["author"] = author_resource(a.author, {"avatar"} if "author.avatar" in populate else set())
    if "category" in populate:
        attrs["category"] = category_resource(a.category, set())
    return {"id": a.id, "attributes": attrs}

def pagination_meta(page: int, page_size: int, total: int) -> dict:
    page_count = (total + page_size - 1) // page_size if page_size else 0
    return {"pagination": {"page": page, "pageSize": page_size, "pageCount": page_count, "total": total}}
