"""Reddit .json API — hot posts from one subreddit."""

from .base import Source, TrendItem, TrendSource, get_json


class RedditSource(TrendSource):
    source = Source.REDDIT

    def __init__(self, subreddit: str = "programming", limit: int = 5):
        self.subreddit = subreddit
        self.limit = limit

    def _fetch(self) -> list[TrendItem]:
        data = get_json(
            f"https://www.reddit.com/r/{self.subreddit}/hot.json",
            params={"limit": 10},
        )

        items = []
        for post in data["data"]["children"]:
            d = post.get("data", {})
            if d.get("stickied"):
                continue
            items.append(TrendItem(
                source=self.source,
                title=d["title"],
                description=(d.get("selftext") or "")[:200],
                url=f"https://reddit.com{d.get('permalink', '')}",
                metric=d.get("ups", d.get("score")),
            ))
            if len(items) >= self.limit:
                break
        return items
