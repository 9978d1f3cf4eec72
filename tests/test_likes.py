"""Tests for like toggling and the membership-derived like count."""

from __future__ import annotations

from tests.helpers import auth_header, new_video, register


async def toggle(client, video, token):
    return await client.post(f"/api/videos/{video}/like",
                             headers=auth_header(token))


async def test_first_toggle_likes_video(client, mongo_db):
    video = await new_video(mongo_db)
    token, user_id = await register(client)

    r = await toggle(client, video, token)
    assert r.status_code == 200
    assert r.json() == {"message": "Like added", "liked": True,
                        "likesCount": 1}

    user = await mongo_db["users"].find_one({})
    assert user["liked_videos"] == [video]


async def test_second_toggle_restores_state(client, mongo_db):
    video = await new_video(mongo_db)
    token, _ = await register(client)

    await toggle(client, video, token)
    r = await toggle(client, video, token)

    assert r.json() == {"message": "Like removed", "liked": False,
                        "likesCount": 0}
    doc = await mongo_db["videos"].find_one({})
    assert doc["likes_count"] == 0
    user = await mongo_db["users"].find_one({})
    assert user["liked_videos"] == []


async def test_count_matches_number_of_likers(client, mongo_db):
    video = await new_video(mongo_db)
    tokens = [(await register(client, name=f"u{i}"))[0] for i in range(3)]

    for token in tokens:
        r = await toggle(client, video, token)
    assert r.json()["likesCount"] == 3

    r = await toggle(client, video, tokens[1])
    assert r.json()["likesCount"] == 2

    doc = await mongo_db["videos"].find_one({})
    assert doc["likes_count"] == await mongo_db["users"].count_documents(
        {"liked_videos": video})


async def test_stale_counter_is_corrected_on_next_toggle(client, mongo_db):
    video = await new_video(mongo_db)
    token, _ = await register(client)
    await mongo_db["videos"].update_one({}, {"$set": {"likes_count": 42}})

    r = await toggle(client, video, token)
    assert r.json()["likesCount"] == 1


async def test_like_unknown_video_is_404(client):
    token, _ = await register(client)

    r = await toggle(client, "0123456789abcdef01234567", token)
    assert r.status_code == 404

    r = await toggle(client, "not-an-id", token)
    assert r.status_code == 404


async def test_like_without_token_is_401(client, mongo_db):
    video = await new_video(mongo_db)

    r = await client.post(f"/api/videos/{video}/like")
    assert r.status_code == 401
    assert r.json() == {"error": "Access denied. No token provided."}


async def test_liked_videos_listing(client, mongo_db):
    v1 = await new_video(mongo_db)
    v2 = await new_video(mongo_db)
    token, _ = await register(client)
    await toggle(client, v2, token)
    await toggle(client, v1, token)

    r = await client.get("/api/videos/liked", headers=auth_header(token))
    assert r.status_code == 200
    assert [v["id"] for v in r.json()["videos"]] == [v2, v1]
    assert r.json()["total"] == 2
