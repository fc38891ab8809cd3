"""TrendItem dataclass + TrendSource ABC."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

import requests

from ..log import get_logger
from ..retry import with_retry

USER_AGENT = "trendpost/1.0"
REQUEST_TIMEOUT = 10


class Source(str, Enum):
    GITHUB = "github"
    HACKERNEWS = "hackernews"
    DEVTO = "devto"
    REDDIT = "reddit"


@dataclass(frozen=True)
class TrendItem:
    """A normalized trending signal from one source."""
    source: Source
    title: str
    description: str = ""
    url: str = ""
    metric: float | None = None  # stars, points, reactions or upvotes
    language: str = ""
    tags: tuple = ()

    def searchable_fields(self) -> list[str]:
        return [self.title, self.description, self.language, *self.tags]

    def to_dict(self) -> dict:
        data = {"title": self.title, "url": self.url}
        if self.description:
            data["description"] = self.description
        if self.metric is not None:
            data["metric"] = self.metric
        if self.language:
            data["language"] = self.language
        if self.tags:
            data["tags"] = list(self.tags)
        return data


@with_retry(max_retries=1, base_delay=1.0, exceptions=(requests.RequestException,))
def get_json(url: str, params: dict | None = None):
    """GET a public JSON endpoint."""
    r = requests.get(
        url,
        params=params,
        headers={"User-Agent": USER_AGENT},
        timeout=REQUEST_TIMEOUT,
    )
    r.raise_for_status()
    return r.json()


class TrendSource(ABC):
    """Base class for trend sources.

    Subclasses implement _fetch(); callers use fetch(), which never raises.
    """

    source: Source

    @property
    def name(self) -> str:
        return self.source.value

    def fetch(self) -> list[TrendItem]:
        """Fetch trending items; any failure degrades to an empty list."""
        try:
            return list(self._fetch())
        except Exception as e:
            get_logger().warning("%s: fetch failed (%s), using no items", self.name, e)
            return []

    @abstractmethod
    def _fetch(self) -> list[TrendItem]:
        ...
