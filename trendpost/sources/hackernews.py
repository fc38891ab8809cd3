"""Hacker News top stories: id list first, then one request per story."""

from ..log import get_logger
from .base import Source, TrendItem, TrendSource, get_json

API_BASE = "https://hacker-news.firebaseio.com/v0"
MAX_STORIES = 5


class HackerNewsSource(TrendSource):
    source = Source.HACKERNEWS

    def __init__(self, limit: int = MAX_STORIES):
        # Each story costs a request; never fetch more than MAX_STORIES.
        self.limit = max(0, min(limit, MAX_STORIES))

    def _fetch(self) -> list[TrendItem]:
        story_ids = get_json(f"{API_BASE}/topstories.json")
        if not isinstance(story_ids, list):
            raise ValueError("topstories did not return a list")

        items = []
        for story_id in story_ids[:self.limit]:
            item = self._fetch_story(story_id)
            if item is not None:
                items.append(item)
        return items

    def _fetch_story(self, story_id) -> TrendItem | None:
        try:
            story = get_json(f"{API_BASE}/item/{story_id}.json")
            return TrendItem(
                source=self.source,
                title=story["title"],
                url=story.get("url") or f"https://news.ycombinator.com/item?id={story_id}",
                metric=story.get("score"),
            )
        except Exception as e:
            get_logger().debug("hackernews: skipping story %s: %s", story_id, e)
            return None
