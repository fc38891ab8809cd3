"""Shared test fixtures."""

import os
import tempfile
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

# Keep log files out of the real home directory.
os.environ.setdefault("TRENDPOST_HOME", tempfile.mkdtemp(prefix="trendpost-test-"))

from trendpost.catalog import TopicCatalog  # noqa: E402
from trendpost.config import GenerationSettings, Settings  # noqa: E402
from trendpost.document import GeneratedDocument  # noqa: E402
from trendpost.sources import AggregateResult, Source, TrendItem  # noqa: E402
from trendpost.store import DocumentStore  # noqa: E402

TODAY = date(2026, 10, 18)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def empty_trends():
    return AggregateResult(items=(), fetched_at=datetime(2026, 10, 18, tzinfo=timezone.utc))


@pytest.fixture
def sample_trends():
    """A small aggregate touching every source."""
    return AggregateResult(
        items=(
            TrendItem(Source.GITHUB, "rust-lang/rust", "Empowering everyone to build reliable software",
                      "https://github.com/rust-lang/rust", 99000, language="Rust",
                      tags=("rust", "compiler")),
            TrendItem(Source.GITHUB, "ollama/ollama", "Run LLMs locally",
                      "https://github.com/ollama/ollama", 120000, language="Go",
                      tags=("llm", "ai")),
            TrendItem(Source.HACKERNEWS, "Show HN: A Docker alternative in Rust",
                      url="https://example.com/hn", metric=420),
            TrendItem(Source.DEVTO, "Kubernetes tips for beginners", "Pods and stuff",
                      "https://dev.to/k8s", 55, tags=("kubernetes", "devops")),
            TrendItem(Source.REDDIT, "Is Rust worth learning in 2026?", "",
                      "https://reddit.com/r/programming/x", 800),
        ),
        fetched_at=datetime(2026, 10, 18, 8, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def catalog():
    return TopicCatalog.from_mapping({
        "rust": ["Async Rust with Tokio", "Rust for JavaScript developers"],
        "devops": ["Docker image size diet", "Kubernetes for people who hate YAML"],
        "writing": ["Keeping a work journal"],
    })


@pytest.fixture
def posts_dir(tmp_path):
    return tmp_path / "content" / "posts"


@pytest.fixture
def store(posts_dir):
    return DocumentStore(posts_dir)


@pytest.fixture
def settings(catalog, posts_dir):
    return Settings(
        catalog=catalog,
        generation=GenerationSettings(pause_seconds=0),
        posts_dir=posts_dir,
    )


@pytest.fixture
def write_post(posts_dir):
    """Write a post file directly, bypassing the store."""
    def _write(title: str, on: date = TODAY, name: str | None = None) -> Path:
        posts_dir.mkdir(parents=True, exist_ok=True)
        path = posts_dir / (name or f"{on.isoformat()}-{title.lower().replace(' ', '-')}.md")
        path.write_text(
            f'---\ntitle: "{title}"\ndate: "{on.isoformat()}"\nexcerpt: "x"\n'
            f'tags: ["a"]\nfeatured: true\n---\n\nBody of {title}\n',
            encoding="utf-8",
        )
        return path
    return _write


@pytest.fixture
def make_doc():
    def _make(title: str, on: date = TODAY) -> GeneratedDocument:
        return GeneratedDocument(
            title=title, date=on, excerpt="An excerpt.", tags=("tag",), body=f"# {title}\n\nText.",
        )
    return _make
