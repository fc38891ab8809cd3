"""TrendAggregator — fans out to every source and merges the results."""

import concurrent.futures
from dataclasses import dataclass
from datetime import datetime, timezone

from ..catalog import CategoryProfile
from ..log import log
from .base import Source, TrendItem, TrendSource
from .devto import DevToSource
from .github import GitHubSource
from .hackernews import HackerNewsSource
from .reddit import RedditSource


@dataclass(frozen=True)
class AggregateResult:
    items: tuple
    fetched_at: datetime

    def by_source(self, source: Source) -> list[TrendItem]:
        return [item for item in self.items if item.source == source]

    def to_dict(self) -> dict:
        """Items grouped by source, ready for json.dumps."""
        grouped = {source.value: [] for source in Source}
        for item in self.items:
            grouped[item.source.value].append(item.to_dict())
        grouped["timestamp"] = self.fetched_at.isoformat()
        return grouped


class TrendAggregator:
    """Runs all sources concurrently; output keeps registration order."""

    def __init__(self, sources: list[TrendSource]):
        self.sources = list(sources)

    def aggregate(self) -> AggregateResult:
        results = {}
        with concurrent.futures.ThreadPoolExecutor(max_workers=max(1, len(self.sources))) as pool:
            futures = {pool.submit(src.fetch): i for i, src in enumerate(self.sources)}
            for future in concurrent.futures.as_completed(futures):
                i = futures[future]
                results[i] = future.result()
                log(f"{self.sources[i].name}: {len(results[i])} items")

        items = tuple(item for i in range(len(self.sources)) for item in results.get(i, []))
        return AggregateResult(items=items, fetched_at=datetime.now(timezone.utc))


def general_sources(subreddit: str = "programming") -> list[TrendSource]:
    return [
        GitHubSource(),
        HackerNewsSource(),
        DevToSource(),
        RedditSource(subreddit=subreddit),
    ]


def category_sources(profile: CategoryProfile) -> list[TrendSource]:
    sources = []
    if profile.github_topics:
        sources.append(GitHubSource(topics=profile.github_topics))
    if profile.devto_tags:
        sources.append(DevToSource(tag=profile.devto_tags[0]))
    if profile.subreddit:
        sources.append(RedditSource(subreddit=profile.subreddit))
    return sources
