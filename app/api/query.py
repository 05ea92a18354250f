"""Helpers for the bracketed query-string syntax used by the collection endpoints.

``populate[author][populate][avatar]=*`` becomes the relation paths
``{"author", "author.avatar"}``; ``filters[slug][$eq]=x`` becomes
``{("slug", "$eq"): "x"}``.
"""
from __future__ import annotations

import re
from typing import Mapping

from app.core.config import settings

_BRACKETS_RE = re.compile(r"\[([^\]]*)\]")

def split_key(key: str) -> list[str]:
    head, sep, _ = key.partition("[")
    if not sep:
        return [key]
    return [head, *_BRACKETS_RE.findall(key)]

def populate_paths(params: Mapping[str, str]) -> set[str]:
    paths: set[str] = set()
    for key, value in params.items():
        parts = split_key(key)
        if parts[0] != "populate":
            continue
        if len(parts) == 1:
            # populate=* or populate=author,image
            if value == "*":
                paths.update({"author", "image", "category", "avatar"})
            else:
                paths.update(p.strip() for p in value.split(",") if p.strip())
            continue
        # Drop the nested "populate" keywords: author/populate/avatar -> author.avatar
        names = [p for i, p in enumerate(parts[1:]) if i % 2 == 0]
        for depth in range(1, len(names) + 1):
            paths.add(".".join(names[:depth]))
    return paths

def filter_ops(params: Mapping[str, str]) -> dict[tuple[str, str], str]:
    ops: dict[tuple[str, str], str] = {}
    for key, value in params.items():
        parts = split_key(key)
        if parts[0] == "filters" and len(parts) == 3:
            ops[(parts[1], parts[2])] = value
    return ops

def _positive_int(raw: str | None, default: int) -> int:
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    return value if value > 0 else default

def pagination(params: Mapping[str, str]) -> tuple[int, int]:
    """Return ``(page, page_size)``; malformed values fall back to defaults."""
    page = _positive_int(params.get("pagination[page]"), 1)
    page_size = _positive_int(params.get("pagination[pageSize]"), settings.default_page_size)
    return page, min(page_size, settings.max_page_size)
