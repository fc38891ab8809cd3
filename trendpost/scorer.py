"""Topic scoring against trend data.

Two modes:
  * general — rank every catalog topic by priority-keyword overlap with the
    aggregated trends, then pick at random among the top few;
  * category — summarize one category's own trends into ranked keywords and
    suggestion strings that bias the generation prompt.
"""

import random
from collections import Counter
from dataclasses import dataclass

from .catalog import CategoryProfile, TopicCandidate, TopicCatalog
from .sources import AggregateResult, Source

PRIORITY_KEYWORDS = (
    "ai", "artificial intelligence", "machine learning", "ml", "llm",
    "devops", "kubernetes", "docker", "cicd", "cloud",
    "node", "nodejs", "javascript", "typescript", "react",
    "rust", "performance", "security", "linux",
)
KEYWORD_HIT = 10
SOURCE_BONUS = 5
TOP_K = 5


@dataclass(frozen=True)
class ScoredTopic:
    candidate: TopicCandidate
    score: int


@dataclass(frozen=True)
class CategoryInsight:
    category: str
    name: str
    trending_keywords: tuple
    suggestions: tuple
    recommended_topics: tuple

    def to_dict(self) -> dict:
        return {
            "topic": self.name,
            "trendingKeywords": list(self.trending_keywords),
            "suggestions": list(self.suggestions),
            "recommendedTopics": list(self.recommended_topics),
        }


def _sources_mentioning(keyword: str, trends: AggregateResult) -> int:
    hits = set()
    for item in trends.items:
        if item.source in hits:
            continue
        if any(keyword in (text or "").lower() for text in item.searchable_fields()):
            hits.add(item.source)
    return len(hits)


def score_topic(topic: str, trends: AggregateResult, keywords=PRIORITY_KEYWORDS) -> int:
    score = 0
    lowered = topic.lower()
    for keyword in keywords:
        if keyword in lowered:
            score += KEYWORD_HIT + SOURCE_BONUS * _sources_mentioning(keyword, trends)
    return score


def score_topics(candidates: list[TopicCandidate], trends: AggregateResult) -> list[ScoredTopic]:
    """Highest score first; equal scores keep catalog order."""
    scored = [ScoredTopic(c, score_topic(c.topic, trends)) for c in candidates]
    return sorted(scored, key=lambda s: s.score, reverse=True)


def select_topic(
    catalog: TopicCatalog,
    trends: AggregateResult,
    rng: random.Random,
    category: str | None = None,
    exclude=(),
    top_k: int = TOP_K,
) -> TopicCandidate | None:
    """Pick a topic: uniform among the top_k scorers, or among all if none score.

    Topics in `exclude` are skipped unless they are the only ones left.
    """
    candidates = catalog.candidates(category)
    fresh = [c for c in candidates if c.topic not in exclude]
    pool = fresh or candidates
    if not pool:
        return None

    scored = score_topics(pool, trends)
    if scored[0].score > 0:
        return rng.choice(scored[:top_k]).candidate
    return rng.choice(pool)


def _rank_keywords(profile: CategoryProfile, trends: AggregateResult) -> tuple:
    text = " ".join(f"{item.title} {item.description}" for item in trends.items).lower()
    counts = [(kw, text.count(kw.lower())) for kw in profile.keywords]
    ranked = sorted((c for c in counts if c[1] > 0), key=lambda c: c[1], reverse=True)
    return tuple(kw for kw, _ in ranked)


def _most_common(values, n: int) -> list[str]:
    return [value for value, _ in Counter(values).most_common(n)]


def analyze_category(category: str, profile: CategoryProfile, trends: AggregateResult) -> CategoryInsight:
    suggestions = []

    repo_topics = _most_common(
        (tag for item in trends.by_source(Source.GITHUB) for tag in item.tags), 3
    )
    if repo_topics:
        suggestions.append(f"Trending {profile.name} topics: {', '.join(repo_topics)}")

    devto_tags = _most_common(
        (tag for item in trends.by_source(Source.DEVTO) for tag in item.tags), 5
    )
    if devto_tags:
        suggestions.append(f"Popular Dev.to tags: {', '.join(devto_tags)}")

    reddit = sorted(
        trends.by_source(Source.REDDIT), key=lambda item: item.metric or 0, reverse=True
    )
    if reddit:
        titles = "; ".join(item.title[:50] for item in reddit[:2])
        suggestions.append(f"Hot Reddit discussions: {titles}")

    return CategoryInsight(
        category=category,
        name=profile.name,
        trending_keywords=_rank_keywords(profile, trends),
        suggestions=tuple(suggestions),
        recommended_topics=profile.keywords,
    )
