import datetime as dt
import os
import tempfile

import pytest

# Point the app at a throwaway database before anything from app/ is imported
_TMP_DIR = tempfile.mkdtemp(prefix="article-cms-tests-")
DB_PATH = os.path.join(_TMP_DIR, "test.db")
os.environ["DB_PATH"] = DB_PATH

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, select  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from app.core.db import Base  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Article, Author, Category, Media  # noqa: E402

UTC = dt.timezone.utc


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def db():
    """Sync session on a freshly created schema, used to seed and inspect rows."""
    engine = create_engine(f"sqlite:///{DB_PATH}")
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    with Session(engine, expire_on_commit=False) as session:
        yield session
    engine.dispose()


@pytest.fixture
def client(db):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def seed(db):
    """Five articles: four published (two tied on views) and one draft."""
    avatar = Media(name="jane.png", url="/uploads/jane.png", mime="image/png")
    cover = Media(name="cover.png", url="/uploads/cover.png", mime="image/png")
    jane = Author(name="Jane Doe", email="jane@example.com", avatar=avatar)
    frontend = Category(name="Frontend", slug="frontend", color="#3b82f6")
    backend = Category(name="Backend", slug="backend")

    articles = {
        "react": Article(
            slug="intro-to-react",
            title="Intro to React",
            description="Components and props",
            content="React is a library.",
            views=10,
            published_at=dt.datetime(2024, 1, 1, tzinfo=UTC),
            author=jane,
            category=frontend,
            image=cover,
            blocks=[
                {"__component": "shared.code-block", "code": "<App />", "language": "jsx"},
                {"__component": "shared.quote", "title": "Note", "body": "Hooks!"},
            ],
        ),
        "vue": Article(
            slug="vue-basics",
            title="Vue basics",
            views=10,
            published_at=dt.datetime(2024, 2, 1, tzinfo=UTC),
            author=jane,
            category=frontend,
        ),
        "sql": Article(
            slug="sql-joins",
            title="SQL joins",
            views=25,
            published_at=dt.datetime(2023, 6, 1, tzinfo=UTC),
            category=backend,
        ),
        "fresh": Article(
            slug="fresh-post",
            title="Fresh post",
            views=None,
            published_at=dt.datetime(2024, 3, 1, tzinfo=UTC),
        ),
        "draft": Article(
            slug="draft-post",
            title="Draft post",
            views=100,
            published_at=None,
            author=jane,
            category=backend,
        ),
    }
    db.add_all(list(articles.values()))
    db.commit()
    return articles


@pytest.fixture
def views_of(db):
    """Read the persisted view count, bypassing the session's identity map."""
    def _views(article_id):
        value = db.execute(select(Article.views).where(Article.id == article_id)).scalar_one()
        db.rollback()
        return value
    return _views
