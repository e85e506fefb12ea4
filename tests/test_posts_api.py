"""
Post creation, the public feed and per-user endpoints.
"""

from postboard.db_handlers import PostDBHandler
from postboard.exceptions import StoreError


def _create_post(client, token, content):
    response = client.post(
        "/api/posts", json={"content": content}, headers={"x-auth-token": token}
    )
    assert response.status_code == 200, response.text
    return response.json()


def test_create_post_example_flow(client, register_user):
    registered = register_user("Ann", "ann@x.com", "pw1")
    token = registered["token"]

    response = client.post(
        "/api/posts", json={"content": "hi"}, headers={"x-auth-token": token}
    )

    assert response.status_code == 200
    post = response.json()
    assert post["content"] == "hi"
    assert post["authorId"] == registered["user"]["id"]
    assert post["author"] == {"id": registered["user"]["id"], "name": "Ann"}
    assert {"id", "createdAt", "updatedAt"} <= post.keys()

    feed = client.get("/api/posts").json()
    assert feed[0]["id"] == post["id"]
    assert feed[0]["author"]["name"] == "Ann"


def test_author_comes_from_token_not_body(client, register_user):
    ann = register_user("Ann", "ann@x.com", "pw1")
    bob = register_user("Bob", "bob@x.com", "pw2")

    response = client.post(
        "/api/posts",
        json={"content": "spoof", "authorId": bob["user"]["id"]},
        headers={"x-auth-token": ann["token"]},
    )

    assert response.status_code == 200
    assert response.json()["authorId"] == ann["user"]["id"]


def test_create_post_requires_token(client):
    response = client.post("/api/posts", json={"content": "hi"})

    assert response.status_code == 401
    assert response.json() == {"msg": "No token, authorization denied"}


def test_create_post_with_bad_token_does_not_write(client):
    response = client.post(
        "/api/posts", json={"content": "hi"}, headers={"x-auth-token": "bad"}
    )

    assert response.status_code == 401
    assert response.json() == {"msg": "Token is not valid"}
    assert client.get("/api/posts").json() == []


def test_create_post_rejects_empty_content(client, register_user):
    token = register_user("Ann", "ann@x.com", "pw1")["token"]

    response = client.post(
        "/api/posts", json={"content": ""}, headers={"x-auth-token": token}
    )

    assert response.status_code == 400


def test_feed_is_newest_first(client, register_user):
    ann = register_user("Ann", "ann@x.com", "pw1")
    bob = register_user("Bob", "bob@x.com", "pw2")

    first = _create_post(client, ann["token"], "first")
    second = _create_post(client, bob["token"], "second")
    third = _create_post(client, ann["token"], "third")

    feed = client.get("/api/posts").json()

    assert [p["id"] for p in feed] == [third["id"], second["id"], first["id"]]
    created = [p["createdAt"] for p in feed]
    assert created == sorted(created, reverse=True)


def test_feed_is_public_and_empty_initially(client):
    response = client.get("/api/posts")

    assert response.status_code == 200
    assert response.json() == []


def test_user_posts_is_filtered_feed(client, register_user):
    ann = register_user("Ann", "ann@x.com", "pw1")
    bob = register_user("Bob", "bob@x.com", "pw2")
    for i, author in enumerate([ann, bob, ann, bob, ann]):
        _create_post(client, author["token"], f"post {i}")

    feed = client.get("/api/posts").json()
    ann_posts = client.get(f"/api/users/{ann['user']['id']}/posts").json()

    assert ann_posts == [p for p in feed if p["authorId"] == ann["user"]["id"]]
    assert len(ann_posts) == 3
    assert all(p["author"] == {"id": ann["user"]["id"], "name": "Ann"} for p in ann_posts)


def test_user_posts_for_unknown_user_is_empty(client):
    response = client.get("/api/users/999999/posts")

    assert response.status_code == 200
    assert response.json() == []


def test_user_posts_invalid_id(client):
    response = client.get("/api/users/abc/posts")

    assert response.status_code == 400
    assert response.json() == {"msg": "Invalid or missing user ID for posts."}


def test_user_profile(client, register_user):
    ann = register_user("Ann", "ann@x.com", "pw1")

    response = client.get(f"/api/users/{ann['user']['id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Ann"
    assert body["bio"] == "No bio yet."
    assert "password" not in body


def test_user_profile_invalid_id_vs_not_found(client):
    invalid = client.get("/api/users/abc")
    missing = client.get("/api/users/999999")

    assert invalid.status_code == 400
    assert invalid.json() == {"msg": "Invalid or missing user ID."}
    assert missing.status_code == 404
    assert missing.json() == {"msg": "User not found"}


def test_user_profile_rejects_partial_numbers(client):
    for raw in ["12abc", "-1", "0", "1.5", "99999999999"]:
        response = client.get(f"/api/users/{raw}")
        assert response.status_code == 400, raw


def test_user_posts_rejects_partial_numbers(client):
    for raw in ["12abc", "-1", "0"]:
        response = client.get(f"/api/users/{raw}/posts")
        assert response.status_code == 400, raw
        assert response.json() == {"msg": "Invalid or missing user ID for posts."}


def test_feed_store_failure_is_opaque(client, monkeypatch):
    async def failing_feed(self, *, db):
        raise StoreError()

    monkeypatch.setattr(PostDBHandler, "get_feed", failing_feed)

    response = client.get("/api/posts")

    assert response.status_code == 500
    assert response.json() == {"msg": "Server Error"}
