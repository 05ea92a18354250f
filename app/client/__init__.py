"""Client helpers for rendering CMS content on a frontend."""

from app.client.blocks import process_code_blocks
from app.client.fetcher import ArticlePage, ArticleQuery, StrapiClient, default_client
from app.client.transform import (
    DisplayArticle,
    DisplayAuthor,
    DisplayCategory,
    transform_article,
    transform_articles,
    transform_author,
    transform_category,
)

__all__ = [
    "ArticlePage",
    "ArticleQuery",
    "DisplayArticle",
    "DisplayAuthor",
    "DisplayCategory",
    "StrapiClient",
    "default_client",
    "process_code_blocks",
    "transform_article",
    "transform_articles",
    "transform_author",
    "transform_category",
]
