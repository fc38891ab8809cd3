"""Dev.to top articles, optionally filtered by tag."""

from .base import Source, TrendItem, TrendSource, get_json

ARTICLES_URL = "https://dev.to/api/articles"


class DevToSource(TrendSource):
    source = Source.DEVTO

    def __init__(self, tag: str | None = None, limit: int = 5):
        self.tag = tag
        self.limit = limit

    def _fetch(self) -> list[TrendItem]:
        params = {"top": 7, "per_page": 10}
        if self.tag:
            params["tag"] = self.tag
        articles = get_json(ARTICLES_URL, params=params)

        items = []
        for article in articles[:self.limit]:
            items.append(TrendItem(
                source=self.source,
                title=article["title"],
                description=(article.get("description") or "")[:200],
                url=article.get("url", ""),
                metric=article.get("public_reactions_count"),
                tags=tuple(article.get("tag_list") or ()),
            ))
        return items
