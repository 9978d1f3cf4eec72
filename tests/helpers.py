import uuid
from typing import Any, Dict, Optional, Tuple

from httpx import AsyncClient

from video_api.services.catalog_client import catalog_item
from video_api.services.repositories.videos_repo import VideosRepo

_pexels_ids = iter(range(1000, 10_000_000))


def pexels_video(pexels_id: Optional[int] = None) -> Dict[str, Any]:
    """A Pexels API video payload."""
    pid = pexels_id if pexels_id is not None else next(_pexels_ids)
    return {
        "id": pid,
        "width": 1920,
        "height": 1080,
        "url": f"https://www.pexels.com/video/{pid}/",
        "image": f"https://images.pexels.com/videos/{pid}/preview.jpg",
        "duration": 12,
        "user": {"id": 7, "name": "Author", "url": "https://www.pexels.com/@a"},
        "video_files": [
            {"id": pid * 10, "quality": "hd", "file_type": "video/mp4",
             "width": 1920, "height": 1080,
             "link": f"https://videos.pexels.com/{pid}.mp4"},
        ],
        "video_pictures": [
            {"id": pid * 100, "picture": "https://images.pexels.com/p.jpg",
             "nr": 0},
        ],
    }


async def new_video(db, pexels_id: Optional[int] = None) -> str:
    doc, _ = await VideosRepo(db).upsert_from_catalog(
        catalog_item(pexels_video(pexels_id)))
    return str(doc["_id"])


def auth_header(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def register(
    client: AsyncClient,
    name: str = "Ana",
    email: Optional[str] = None,
    password: str = "secret123",
    age: int = 30,
) -> Tuple[str, str]:
    """Register a user through the API, return (token, user_id)."""
    email = email or f"{uuid.uuid4().hex[:10]}@example.com"
    r = await client.post("/api/auth/register", json={
        "name": name, "email": email, "password": password, "age": age,
    })
    assert r.status_code == 201, r.text
    body = r.json()
    return body["token"], body["user"]["id"]
