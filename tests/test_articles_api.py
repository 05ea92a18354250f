import datetime as dt

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from app.core.config import settings
from app.models import Article
from app.services import articles as article_service


def test_lookup_by_id_increments_views(client, seed, views_of):
    article_id = seed["react"].id

    first = client.get(f"/api/articles/{article_id}")
    assert first.status_code == 200
    assert first.json()["data"]["views"] == 11

    second = client.get(f"/api/articles/{article_id}")
    assert second.json()["data"]["views"] == 12
    assert views_of(article_id) == 12


def test_lookup_by_slug(client, seed, views_of):
    resp = client.get("/api/articles/vue-basics")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["id"] == seed["vue"].id
    assert data["title"] == "Vue basics"
    assert data["views"] == 11
    assert views_of(seed["vue"].id) == 11


def test_lookup_treats_null_views_as_zero(client, seed, views_of):
    resp = client.get("/api/articles/fresh-post")
    assert resp.json()["data"]["views"] == 1
    assert views_of(seed["fresh"].id) == 1


def test_lookup_finds_drafts(client, seed):
    resp = client.get("/api/articles/draft-post")
    assert resp.status_code == 200
    assert resp.json()["data"]["publishedAt"] is None
    assert resp.json()["data"]["views"] == 101


def test_lookup_populates_relations(client, seed):
    data = client.get("/api/articles/intro-to-react").json()["data"]
    assert data["author"]["name"] == "Jane Doe"
    assert data["author"]["avatar"]["url"] == "/uploads/jane.png"
    assert data["category"]["name"] == "Frontend"
    assert data["category"]["color"] == "#3b82f6"
    assert data["image"]["url"] == "/uploads/cover.png"
    assert data["blocks"][0]["__component"] == "shared.code-block"
    assert data["publishedAt"].startswith("2024-01-01")


def test_lookup_without_relations_returns_nulls(client, seed):
    data = client.get("/api/articles/fresh-post").json()["data"]
    assert data["author"] is None
    assert data["category"] is None
    assert data["image"] is None


@pytest.mark.parametrize("identifier", ["999", "no-such-slug"])
def test_lookup_missing_is_404_without_writes(client, seed, views_of, identifier):
    before = {key: views_of(a.id) for key, a in seed.items()}

    resp = client.get(f"/api/articles/{identifier}")

    assert resp.status_code == 404
    assert {key: views_of(a.id) for key, a in seed.items()} == before


def test_numeric_identifier_never_matches_slug(client, db, seed):
    # A slug that looks like a number is only reachable through its id
    from app.models import Article

    numeric = Article(slug="2024", title="Year in review", views=0)
    db.add(numeric)
    db.commit()

    resp = client.get("/api/articles/2024")
    assert resp.status_code == 404


def test_atomic_increment_mode(client, seed, views_of, monkeypatch):
    monkeypatch.setattr(settings, "atomic_view_increment", True)
    article_id = seed["sql"].id

    assert client.get(f"/api/articles/{article_id}").json()["data"]["views"] == 26
    assert client.get("/api/articles/sql-joins").json()["data"]["views"] == 27
    assert views_of(article_id) == 27

    fresh = client.get("/api/articles/fresh-post").json()["data"]
    assert fresh["views"] == 1


@pytest.mark.parametrize("path", ["/api/articles?mostPopular=true", "/api/articles/most-popular"])
def test_most_popular_ranking(client, seed, path):
    resp = client.get(path)
    assert resp.status_code == 200
    slugs = [a["slug"] for a in resp.json()["data"]]
    # draft excluded; vue and react tie on views, newer publication first
    assert slugs == ["sql-joins", "vue-basics", "intro-to-react", "fresh-post"]


@pytest.mark.parametrize("path", ["/api/articles?mostPopular=true&limit=2", "/api/articles/most-popular?limit=2"])
def test_most_popular_respects_limit(client, seed, path):
    data = client.get(path).json()["data"]
    assert [a["slug"] for a in data] == ["sql-joins", "vue-basics"]


@pytest.mark.parametrize("limit", ["abc", "0", "-4", ""])
def test_most_popular_bad_limit_falls_back_to_default(client, seed, limit):
    resp = client.get(f"/api/articles/most-popular?limit={limit}")
    assert resp.status_code == 200
    assert len(resp.json()["data"]) == 4


def test_most_popular_populates_relations(client, seed):
    top = client.get("/api/articles/most-popular?limit=3").json()["data"]
    vue = top[1]
    assert vue["author"]["avatar"]["url"] == "/uploads/jane.png"
    assert vue["category"]["slug"] == "frontend"


def test_most_popular_does_not_count_views(client, seed, views_of):
    client.get("/api/articles/most-popular")
    assert views_of(seed["sql"].id) == 25


def test_most_popular_storage_failure_is_500(client, seed, monkeypatch):
    async def broken(session, limit):
        raise SQLAlchemyError("disk I/O error")

    monkeypatch.setattr("app.api.articles.most_popular", broken)

    for path in ("/api/articles/most-popular", "/api/articles?mostPopular=true"):
        resp = client.get(path)
        assert resp.status_code == 500
        assert resp.json()["detail"] == "Failed to fetch most popular articles"


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_most_popular_ranks_null_views_as_zero(client, db):
    db.add(Article(slug="old-zero", title="Old zero", views=0,
                   published_at=dt.datetime(2024, 1, 1, tzinfo=dt.timezone.utc)))
    db.commit()
    # Bypass the ORM default so the column really holds NULL
    db.execute(text(
        "INSERT INTO articles (slug, title, views, published_at) "
        "VALUES ('new-null', 'New null', NULL, '2024-03-01 00:00:00.000000')"
    ))
    db.commit()

    data = client.get("/api/articles/most-popular").json()["data"]

    assert [a["slug"] for a in data] == ["new-null", "old-zero"]
    assert data[0]["views"] == 0


@pytest.mark.parametrize("increment", ["_increment_read_modify_write", "_increment_atomic"])
def test_increment_failure_propagates_without_retry(client, seed, views_of, monkeypatch, increment):
    reads = []
    original_get = article_service.get_article

    async def counting_get(session, key):
        reads.append(key)
        return await original_get(session, key)

    async def failing_increment(session, article):
        raise OperationalError("UPDATE articles", {}, Exception("disk I/O error"))

    monkeypatch.setattr(article_service, "get_article", counting_get)
    monkeypatch.setattr(article_service, increment, failing_increment)
    monkeypatch.setattr(settings, "atomic_view_increment", increment == "_increment_atomic")

    with pytest.raises(OperationalError):
        client.get("/api/articles/sql-joins")

    assert len(reads) == 1
    assert views_of(seed["sql"].id) == 25
