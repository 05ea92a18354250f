"""Flatten REST resources (``{"id", "attributes"}``) into display models.

Relations arrive as ``{"data": {"id": ..., "attributes": {...}}}``, as
``{"data": None}`` or not at all; every missing piece resolves to a default.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional

DEFAULT_AUTHOR_NAME = "Daniel Alvarez"
DEFAULT_CATEGORY_NAME = "General"
DEFAULT_IMAGE_URL = ""
DEFAULT_AVATAR_URL = "/default-avatar.png"

@dataclass
class DisplayArticle:
    id: Any
    title: Optional[str]
    description: Optional[str]
    content: Optional[str]
    slug: Optional[str]
    author: str
    category: str
    published_at: Optional[str]
    image_url: str
    author_image_url: str

@dataclass
class DisplayCategory:
    id: Any
    name: Optional[str]
    slug: Optional[str]
    description: Optional[str]
    color: Optional[str]
    image_url: str

@dataclass
class DisplayAuthor:
    id: Any
    name: Optional[str]
    email: Optional[str]
    avatar_url: str

def _relation_attributes(attrs: Optional[dict], name: str) -> dict:
    """Attributes of a wrapped relation, or ``{}`` when any level is absent."""
    relation = (attrs or {}).get(name)
    if not isinstance(relation, dict):
        return {}
    data = relation.get("data")
    if not isinstance(data, dict):
        return {}
    return data.get("attributes") or {}

def _media_url(attrs: Optional[dict], name: str, default: str) -> str:
    return _relation_attributes(attrs, name).get("url") or default

def transform_article(raw: dict) -> DisplayArticle:
    attrs = raw.get("attributes") or {}
    author = _relation_attributes(attrs, "author")
    category = _relation_attributes(attrs, "category")
    return DisplayArticle(
        id=raw.get("id"),
        title=attrs.get("title"),
        description=attrs.get("description"),
        content=attrs.get("content"),
        slug=attrs.get("slug"),
        author=author.get("name") or DEFAULT_AUTHOR_NAME,
        category=category.get("name") or DEFAULT_CATEGORY_NAME,
        published_at=attrs.get("publishedAt") or attrs.get("createdAt"),
        image_url=_media_url(attrs, "image", DEFAULT_IMAGE_URL),
        author_image_url=_media_url(author, "avatar", DEFAULT_AVATAR_URL),
    )

def transform_articles(raws: Iterable[dict]) -> list[DisplayArticle]:
    return [transform_article(r) for r in raws]

def transform_category(raw: dict) -> DisplayCategory:
    attrs = raw.get("attributes") or {}
    return DisplayCategory(
        id=raw.get("id"),
        name=attrs.get("name"),
        slug=attrs.get("slug"),
        description=attrs.get("description"),
        color=attrs.get("color"),
        image_url=_media_url(attrs, "image", DEFAULT_IMAGE_URL),
    )

def transform_author(raw: dict) -> DisplayAuthor:
    attrs = raw.get("attributes") or {}
    return DisplayAuthor(
        id=raw.get("id"),
        name=attrs.get("name"),
        email=attrs.get("email"),
        avatar_url=_media_url(attrs, "avatar", DEFAULT_AVATAR_URL),
    )
