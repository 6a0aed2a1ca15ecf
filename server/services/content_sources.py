"""
Content sources.

Concrete suppliers of candidate items for the feed: public cat-photo APIs
over HTTP and a JSON catalogue file for local runs. HTTP calls use requests
on a worker thread so the event loop keeps serving other work.
"""

import asyncio
import json
import random
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import requests

from feed_engine.models.item import ContentItem

DEFAULT_TIMEOUT = 8.0


def ext_to_mime(url: str) -> str:
    """Guess the media type from the URL extension."""
    lowered = url.lower().split("?")[0]
    if lowered.endswith(".gif"):
        return "image/gif"
    if lowered.endswith(".png"):
        return "image/png"
    return "image/jpeg"


class HttpContentSource:
    """
    Base for JSON-over-HTTP sources.

    Subclasses set name/url and implement parse(); request_params() may vary
    the query per call.
    """

    name = "http"
    url = ""

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = DEFAULT_TIMEOUT):
        self.session = session or requests.Session()
        self.timeout = timeout

    def request_params(self) -> Dict[str, Any]:
        return {}

    def _get_json(self) -> Any:
        response = self.session.get(self.url, params=self.request_params(), timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def parse(self, payload: Any) -> List[ContentItem]:
        raise NotImplementedError

    async def fetch(self) -> List[ContentItem]:
        payload = await asyncio.to_thread(self._get_json)
        return self.parse(payload)


class TheCatApiSource(HttpContentSource):
    """api.thecatapi.com image search. No tags; real dimensions when reported."""

    name = "TheCatAPI"
    url = "https://api.thecatapi.com/v1/images/search"

    def __init__(self, limit: int = 12, **kwargs):
        super().__init__(**kwargs)
        self.limit = limit

    def request_params(self) -> Dict[str, Any]:
        return {"limit": self.limit}

    def parse(self, payload: Any) -> List[ContentItem]:
        items = []
        for entry in payload or []:
            if not entry.get("id"):
                continue
            url = entry.get("url") or ""
            items.append(ContentItem(
                identity=f"catapi:{entry['id']}",
                source=self.name,
                url=url,
                width=entry.get("width") or 800,
                height=entry.get("height") or 800,
                tags=[],
                mime=ext_to_mime(url),
            ))
        return items


class CataasSource(HttpContentSource):
    """cataas.com catalogue, read from a random offset each call. Tagged, portrait-sized."""

    name = "CATAAS"
    url = "https://cataas.com/api/cats"

    def __init__(self, limit: int = 18, max_skip: int = 5000, rng: Optional[random.Random] = None, **kwargs):
        super().__init__(**kwargs)
        self.limit = limit
        self.max_skip = max_skip
        self.rng = rng or random.Random()

    def request_params(self) -> Dict[str, Any]:
        return {"limit": self.limit, "skip": self.rng.randrange(self.max_skip)}

    def parse(self, payload: Any) -> List[ContentItem]:
        items = []
        for entry in payload or []:
            cat_id = entry.get("id") or entry.get("_id")
            if not cat_id:
                continue
            tags = entry.get("tags")
            items.append(ContentItem(
                identity=f"cataas:{cat_id}",
                source=self.name,
                url=f"https://cataas.com/cat/{cat_id}",
                width=800,
                height=1000,
                tags=tags if isinstance(tags, list) else [],
                mime=entry.get("mimetype") or "image/jpeg",
            ))
        return items


class ShibeSource(HttpContentSource):
    """shibe.online cat endpoint; returns bare URLs."""

    name = "Shibe"
    url = "https://shibe.online/api/cats"

    def __init__(self, count: int = 28, **kwargs):
        super().__init__(**kwargs)
        self.count = count

    def request_params(self) -> Dict[str, Any]:
        return {"count": self.count, "urls": "true", "httpsUrls": "true"}

    def parse(self, payload: Any) -> List[ContentItem]:
        if not isinstance(payload, list):
            return []
        items = []
        for url in payload:
            if not isinstance(url, str) or not url:
                continue
            image_id = url.rstrip("/").split("/")[-1].split("?")[0] or uuid.uuid4().hex
            items.append(ContentItem(
                identity=f"shibe:{image_id}",
                source=self.name,
                url=url,
                width=900,
                height=900,
                tags=[],
                mime=ext_to_mime(url),
            ))
        return items


class JsonFileSource:
    """
    Content source backed by a JSON file (list of item dicts).
    Used when CONTENT_SOURCES includes json; path comes from CONTENT_JSON_PATH.
    Each fetch returns the next page, wrapping around at the end.
    """

    def __init__(self, path: Union[Path, str], page_size: int = 18, name: str = "json"):
        self._path = Path(path)
        if not self._path.exists():
            raise FileNotFoundError(f"Content JSON not found: {self._path}")
        with open(self._path) as f:
            data = json.load(f)
        entries = data.get("items", []) if isinstance(data, dict) else data
        self.name = name
        self.page_size = page_size
        self._items = [
            ContentItem.model_validate({"source": name, **entry}) for entry in entries if entry.get("identity")
        ]
        self._offset = 0

    def __len__(self) -> int:
        return len(self._items)

    async def fetch(self) -> List[ContentItem]:
        if not self._items:
            return []
        page = [
            self._items[(self._offset + i) % len(self._items)]
            for i in range(min(self.page_size, len(self._items)))
        ]
        self._offset = (self._offset + len(page)) % len(self._items)
        return page


def build_sources(
    names: List[str],
    json_path: Optional[Path] = None,
    rng: Optional[random.Random] = None,
) -> list:
    """Instantiate the named sources (see ServerConfig.content_sources)."""
    sources = []
    for name in names:
        if name == "thecatapi":
            sources.append(TheCatApiSource())
        elif name == "cataas":
            sources.append(CataasSource(rng=rng))
        elif name == "shibe":
            sources.append(ShibeSource())
        elif name == "json":
            if json_path is None:
                raise ValueError("json content source requires a path")
            sources.append(JsonFileSource(json_path))
        else:
            raise ValueError(f"Unknown content source: {name}")
    return sources
