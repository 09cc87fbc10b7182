"""
API tests for static page endpoints.
"""

from tests.data.factories import StaticPageFactory
from tests.helpers.client import with_session


def test_create_and_fetch_page(client, session, seeded_db):
    data = StaticPageFactory(name="about", body="About this site.")
    response = client.post("/static", json=with_session(session, data))

    assert response.status_code == 200, response.text
    assert response.json()["name"] == "about"
    assert seeded_db.count("static_pages") == 1

    page = client.get("/static/about")
    assert page.status_code == 200
    assert page.json()["body"] == "About this site."
    assert page.json()["created"] == response.json()["created"]


def test_missing_page_is_not_found(client):
    assert client.get("/static/nowhere").status_code == 404


def test_duplicate_name_leaves_no_orphan_content(client, session, seeded_db):
    data = StaticPageFactory(name="about")
    assert client.post("/static", json=with_session(session, data)).status_code == 200

    assert client.post("/static", json=with_session(session, data)).status_code == 500
    assert seeded_db.count("page_content") == 1


def test_create_without_session_is_unauthorized(client, seeded_db):
    fake = {"username": "alice", "secret": "f" * 64}
    response = client.post("/static", json=with_session(fake, StaticPageFactory()))

    assert response.status_code == 401
    assert seeded_db.count("page_content") == 0
