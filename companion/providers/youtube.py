"""YouTube Data API v3 video search for career, skill and exam resources."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from companion.config import settings
from companion.errors import SearchError
from companion.models.chat import Video
from companion.providers.base import VideoSearchProvider

log = logging.getLogger("companion.providers.youtube")

SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"


def career_query(career: str) -> str:
    return f"how to become a {career} career guide roadmap"


def skill_query(skill: str) -> str:
    return f"{skill} tutorial for beginners"


class YouTubeSearch(VideoSearchProvider):
    def __init__(
        self,
        api_key: Optional[str] = None,
        max_results: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else settings.youtube_api_key
        self._max_results = max_results or settings.youtube_max_results
        self._transport = transport

    async def search(self, query: str) -> list[Video]:
        if not self._api_key:
            raise SearchError("Video search is not configured (YOUTUBE_API_KEY missing).")

        params = {
            "part": "snippet",
            "q": query,
            "type": "video",
            "maxResults": str(self._max_results),
            "key": self._api_key,
        }
        try:
            async with httpx.AsyncClient(
                timeout=settings.http_timeout, transport=self._transport,
            ) as client:
                resp = await client.get(SEARCH_URL, params=params)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as exc:
            raise SearchError("Video search failed. Please try again.") from exc

        videos = self._parse_items(data.get("items", []) if isinstance(data, dict) else [])
        log.info("Video search '%s': %d results", query, len(videos))
        return videos

    @staticmethod
    def _parse_items(items: list) -> list[Video]:
        videos: list[Video] = []
        for item in items:
            if not isinstance(item, dict):
                continue
            video_id = (item.get("id") or {}).get("videoId")
            if not video_id:
                continue
            snippet = item.get("snippet") or {}
            thumbs = snippet.get("thumbnails") or {}
            thumb = (thumbs.get("medium") or thumbs.get("default") or {}).get("url", "")
            videos.append(Video(
                id=video_id,
                title=snippet.get("title", ""),
                channel=snippet.get("channelTitle", ""),
                thumbnail=thumb,
                url=f"https://www.youtube.com/watch?v={video_id}",
            ))
        return videos
