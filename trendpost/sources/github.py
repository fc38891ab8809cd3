"""GitHub repository search — popular repos with recent pushes."""

from datetime import date, timedelta

from .base import Source, TrendItem, TrendSource, get_json

SEARCH_URL = "https://api.github.com/search/repositories"


class GitHubSource(TrendSource):
    source = Source.GITHUB

    def __init__(self, topics: tuple = (), limit: int = 5, since_days: int = 7):
        self.topics = tuple(topics)
        self.limit = limit
        self.since_days = since_days

    def query(self, today: date | None = None) -> str:
        since = (today or date.today()) - timedelta(days=self.since_days)
        if self.topics:
            terms = " ".join(f"topic:{t}" for t in self.topics)
        else:
            terms = "stars:>1000"
        return f"{terms} pushed:>{since.isoformat()}"

    def _fetch(self) -> list[TrendItem]:
        data = get_json(SEARCH_URL, params={
            "q": self.query(),
            "sort": "stars",
            "order": "desc",
            "per_page": 10 if self.topics else self.limit,
        })

        items = []
        for repo in data.get("items", [])[:self.limit]:
            items.append(TrendItem(
                source=self.source,
                title=repo["full_name"],
                description=(repo.get("description") or "")[:200],
                url=repo.get("html_url", ""),
                metric=repo.get("stargazers_count"),
                language=repo.get("language") or "",
                tags=tuple((repo.get("topics") or [])[:5]),
            ))
        return items
