"""Tests for comment ownership, validation and paging."""

from __future__ import annotations

from tests.helpers import auth_header, new_video, register


async def comment(client, video, token, text):
    return await client.post(
        f"/api/videos/{video}/comments",
        json={"text": text},
        headers=auth_header(token),
    )


async def test_add_comment_snapshots_author(client, mongo_db):
    video = await new_video(mongo_db)
    token, user_id = await register(client, name="Ana")

    r = await comment(client, video, token, "  nice shot  ")
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "Comment added"
    assert body["totalComments"] == 1
    assert body["comment"]["text"] == "nice shot"
    assert body["comment"]["userId"] == user_id
    assert body["comment"]["userName"] == "Ana"
    assert body["comment"]["id"]

    r = await client.put(f"/api/users/{user_id}", json={"name": "Renamed"},
                         headers=auth_header(token))
    assert r.status_code == 200

    r = await client.get(f"/api/videos/{video}/comments")
    assert [c["userName"] for c in r.json()["comments"]] == ["Ana"]


async def test_max_length_boundary(client, mongo_db):
    video = await new_video(mongo_db)
    token, _ = await register(client)

    r = await comment(client, video, token, "x" * 500)
    assert r.status_code == 201

    r = await comment(client, video, token, "x" * 501)
    assert r.status_code == 400
    assert r.json() == {
        "error": "Comment cannot be longer than 500 characters"}

    doc = await mongo_db["videos"].find_one({})
    assert len(doc["comments"]) == 1


async def test_whitespace_only_comment_is_rejected(client, mongo_db):
    video = await new_video(mongo_db)
    token, _ = await register(client)

    r = await comment(client, video, token, " \n\t ")
    assert r.status_code == 400
    assert r.json() == {"error": "Comment text is required"}


async def test_comment_unknown_video_is_404(client):
    token, _ = await register(client)

    r = await comment(client, "0123456789abcdef01234567", token, "hi")
    assert r.status_code == 404


async def test_author_edits_and_created_at_is_kept(client, mongo_db):
    video = await new_video(mongo_db)
    token, _ = await register(client)
    cid = (await comment(client, video, token, "first")).json()[
        "comment"]["id"]
    before = (await mongo_db["videos"].find_one({}))["comments"][0]

    r = await client.put(f"/api/videos/{video}/comments/{cid}",
                         json={"text": "second"},
                         headers=auth_header(token))
    assert r.status_code == 200
    assert r.json()["message"] == "Comment updated"
    assert r.json()["comment"]["text"] == "second"

    after = (await mongo_db["videos"].find_one({}))["comments"][0]
    assert after["text"] == "second"
    assert after["created_at"] == before["created_at"]


async def test_non_author_cannot_edit_or_delete(client, mongo_db):
    video = await new_video(mongo_db)
    author, _ = await register(client)
    other, _ = await register(client, name="Bo")
    cid = (await comment(client, video, author, "mine")).json()[
        "comment"]["id"]

    r = await client.put(f"/api/videos/{video}/comments/{cid}",
                         json={"text": "hijacked"},
                         headers=auth_header(other))
    assert r.status_code == 403
    assert r.json() == {"error": "You can only edit your own comments"}

    r = await client.delete(f"/api/videos/{video}/comments/{cid}",
                            headers=auth_header(other))
    assert r.status_code == 403

    doc = await mongo_db["videos"].find_one({})
    assert [c["text"] for c in doc["comments"]] == ["mine"]


async def test_author_deletes_comment(client, mongo_db):
    video = await new_video(mongo_db)
    token, _ = await register(client)
    cid = (await comment(client, video, token, "bye")).json()[
        "comment"]["id"]
    await comment(client, video, token, "stay")

    r = await client.delete(f"/api/videos/{video}/comments/{cid}",
                            headers=auth_header(token))
    assert r.status_code == 200
    assert r.json() == {"message": "Comment deleted", "totalComments": 1}

    r = await client.delete(f"/api/videos/{video}/comments/{cid}",
                            headers=auth_header(token))
    assert r.status_code == 404
    assert r.json() == {"error": "Comment not found"}


async def test_list_is_newest_first_and_paged(client, mongo_db):
    video = await new_video(mongo_db)
    token, _ = await register(client)
    for i in range(25):
        await comment(client, video, token, f"c{i}")

    r = await client.get(f"/api/videos/{video}/comments",
                         params={"page": 2, "limit": 10})
    assert r.status_code == 200
    body = r.json()
    assert [c["text"] for c in body["comments"]] == [
        f"c{i}" for i in range(14, 4, -1)]
    assert body["currentPage"] == 2
    assert body["totalPages"] == 3
    assert body["totalComments"] == 25


async def test_list_falls_back_to_defaults(client, mongo_db):
    video = await new_video(mongo_db)
    token, _ = await register(client)
    for i in range(3):
        await comment(client, video, token, f"c{i}")

    r = await client.get(f"/api/videos/{video}/comments",
                         params={"page": 0, "limit": -1})
    body = r.json()
    assert body["currentPage"] == 1
    assert body["totalPages"] == 1
    assert [c["text"] for c in body["comments"]] == ["c2", "c1", "c0"]


async def test_list_empty_video(client, mongo_db):
    video = await new_video(mongo_db)

    r = await client.get(f"/api/videos/{video}/comments")
    assert r.json() == {"comments": [], "currentPage": 1,
                        "totalPages": 0, "totalComments": 0}
