"""HTTP client for the Pexels video catalog."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict, Optional

import httpx

from video_api.core.errors import ServiceError


class CatalogError(ServiceError):
    """Provider answered with a non-2xx status or could not be reached."""


class PexelsClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.pexels.com",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    async def fetch_videos(
        self,
        query: Optional[str],
        page: int,
        per_page: int,
    ) -> Dict[str, Any]:
        """Search when `query` is given, otherwise the popular feed."""
        if not self.api_key:
            raise ServiceError("Pexels API key is not configured")

        path = "/videos/search" if query else "/videos/popular"
        params: Dict[str, Any] = {"page": page, "per_page": per_page}
        if query:
            params["query"] = query

        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            try:
                resp = await client.get(
                    path,
                    params=params,
                    headers={"Authorization": self.api_key},
                )
            except httpx.HTTPError as error:
                raise CatalogError(
                    "Could not reach the video catalog",
                    status=HTTPStatus.BAD_GATEWAY,
                ) from error

        if resp.status_code != HTTPStatus.OK:
            raise CatalogError(
                "Error fetching videos from Pexels",
                status=resp.status_code,
            )
        return resp.json()


def catalog_item(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Map a Pexels video payload to the stored catalog fields."""
    return {
        "pexels_id": raw["id"],
        "width": raw.get("width") or 0,
        "height": raw.get("height") or 0,
        "url": raw.get("url", ""),
        "image": raw.get("image", ""),
        "duration": raw.get("duration") or 0,
        "user": {
            "id": raw.get("user", {}).get("id", 0),
            "name": raw.get("user", {}).get("name", ""),
            "url": raw.get("user", {}).get("url", ""),
        },
        "video_files": [
            {
                "id": f["id"],
                "quality": f.get("quality"),
                "file_type": f.get("file_type", ""),
                "width": f.get("width"),
                "height": f.get("height"),
                "link": f.get("link", ""),
            }
            for f in raw.get("video_files", [])
        ],
        "video_pictures": [
            {"id": p["id"], "picture": p.get("picture", ""),
             "nr": p.get("nr", 0)}
            for p in raw.get("video_pictures", [])
        ],
    }
