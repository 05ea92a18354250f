from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

import httpx

from app.core.config import settings
from app.client.transform import (
    DisplayArticle,
    DisplayAuthor,
    DisplayCategory,
    transform_article,
    transform_articles,
    transform_author,
    transform_category,
)

logger = logging.getLogger(__name__)

ARTICLE_POPULATE = {
    "populate[image]": "*",
    "populate[author][populate][avatar]": "*",
    "populate[category]": "*",
}

@dataclass
class ArticleQuery:
    page: int = 1
    page_size: int = 25
    category: Optional[str] = None
    slug: Optional[str] = None
    published: bool = True

    def params(self) -> list[tuple[str, str]]:
        params = list(ARTICLE_POPULATE.items())
        params.append(("pagination[page]", str(self.page)))
        params.append(("pagination[pageSize]", str(self.page_size)))
        if self.published:
            params.append(("filters[publishedAt][$notNull]", "true"))
        if self.category:
            params.append(("filters[category][$eq]", self.category))
        if self.slug:
            params.append(("filters[slug][$eq]", self.slug))
        return params

@dataclass
class ArticlePage:
    articles: list[DisplayArticle]
    meta: Optional[dict[str, Any]] = None

class StrapiClient:
    """Fetches collections from the CMS and flattens them for rendering.

    Every call is a single request. Transport, status and decoding errors are
    logged and re-raised as-is; defaults are only applied to missing fields of
    a successful response.
    """

    def __init__(
        self,
        base_url: str,
        user_agent: str = "ArticleClient/1.0",
        timeout_s: int = 20,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._headers = {"User-Agent": user_agent, "Accept": "application/json"}
        self._timeout = httpx.Timeout(timeout_s)
        self._transport = transport

    async def _get_json(self, path: str, params: Any = None) -> dict:
        async with httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._headers,
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
        ) as client:
            resp = await client.get(path, params=params)
            resp.raise_for_status()
            return resp.json()

    async def fetch_articles(self, query: ArticleQuery | None = None) -> Union[ArticlePage, DisplayArticle, None]:
        """List articles, or look one up when ``query.slug`` is set.

        With a slug the result is a single :class:`DisplayArticle` or ``None``,
        never a list.
        """
        query = query or ArticleQuery()
        try:
            payload = await self._get_json("/api/articles", params=query.params())
            data = payload["data"]
            if query.slug:
                return transform_article(data[0]) if data else None
            return ArticlePage(articles=transform_articles(data), meta=payload.get("meta"))
        except Exception:
            logger.exception("Error fetching articles")
            raise

    async def fetch_categories(self) -> list[DisplayCategory]:
        try:
            payload = await self._get_json("/api/categories", params={"populate[image]": "*"})
            return [transform_category(c) for c in payload["data"]]
        except Exception:
            logger.exception("Error fetching categories")
            raise

    async def fetch_authors(self) -> list[DisplayAuthor]:
        try:
            payload = await self._get_json("/api/authors", params={"populate[avatar]": "*"})
            return [transform_author(a) for a in payload["data"]]
        except Exception:
            logger.exception("Error fetching authors")
            raise

def default_client() -> StrapiClient:
    return StrapiClient(
        settings.cms_base_url,
        user_agent=settings.user_agent,
        timeout_s=settings.request_timeout_seconds,
    )
