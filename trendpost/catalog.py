"""Topic catalog + per-category search profiles."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TopicCandidate:
    """One topic the pipeline is allowed to write about."""
    category: str
    topic: str


@dataclass(frozen=True)
class CategoryProfile:
    """Where to look for trends when writing about a single category."""
    name: str
    github_topics: tuple = ()
    devto_tags: tuple = ()
    subreddit: str = ""
    keywords: tuple = ()


DEFAULT_PROFILES = {
    "security": CategoryProfile(
        name="Cybersecurity",
        github_topics=("security", "cybersecurity", "vulnerability", "pentest", "infosec"),
        devto_tags=("security", "cybersecurity", "hacking", "infosec"),
        subreddit="netsec",
        keywords=("OWASP", "CVE", "vulnerability", "exploit", "authentication", "encryption"),
    ),
    "laravel": CategoryProfile(
        name="Laravel/PHP",
        github_topics=("laravel", "php", "eloquent"),
        devto_tags=("laravel", "php"),
        subreddit="laravel",
        keywords=("Laravel 11", "Eloquent", "Livewire", "Filament", "API", "testing"),
    ),
    "rust": CategoryProfile(
        name="Rust",
        github_topics=("rust", "rustlang", "cargo"),
        devto_tags=("rust", "rustlang"),
        subreddit="rust",
        keywords=("async", "ownership", "borrowing", "WebAssembly", "Tokio", "Actix"),
    ),
    "opensource": CategoryProfile(
        name="Open Source",
        github_topics=("opensource", "hacktoberfest", "good-first-issue"),
        devto_tags=("opensource", "github", "contributing"),
        subreddit="opensource",
        keywords=("contributing", "maintainer", "community", "license", "fork"),
    ),
    "aws": CategoryProfile(
        name="AWS/Cloud",
        github_topics=("aws", "serverless", "lambda", "terraform"),
        devto_tags=("aws", "serverless", "cloud"),
        subreddit="aws",
        keywords=("Lambda", "S3", "EC2", "CloudFormation", "serverless", "cost"),
    ),
    "nodejs": CategoryProfile(
        name="Node.js",
        github_topics=("nodejs", "express", "nestjs", "fastify"),
        devto_tags=("node", "javascript", "express"),
        subreddit="node",
        keywords=("Express", "NestJS", "async", "npm", "API", "performance"),
    ),
    "architecture": CategoryProfile(
        name="Architecture",
        github_topics=("microservices", "system-design", "architecture"),
        devto_tags=("architecture", "microservices", "systemdesign"),
        subreddit="softwarearchitecture",
        keywords=("microservices", "monolith", "scaling", "caching", "event-driven", "DDD"),
    ),
    "devops": CategoryProfile(
        name="DevOps",
        github_topics=("devops", "docker", "kubernetes", "cicd"),
        devto_tags=("devops", "docker", "kubernetes", "cicd"),
        subreddit="devops",
        keywords=("Docker", "Kubernetes", "CI/CD", "GitOps", "monitoring", "Terraform"),
    ),
    "rf-sdr": CategoryProfile(
        name="RF/SDR",
        github_topics=("sdr", "rtl-sdr", "gnuradio", "radio"),
        devto_tags=("radio", "hardware", "iot"),
        subreddit="RTLSDR",
        keywords=("RTL-SDR", "GNU Radio", "spectrum", "antenna", "signal", "wireless"),
    ),
}


class TopicCatalog:
    """Read-only, ordered mapping of category -> topics.

    Build it with from_mapping(); the constructor does no validation.
    """

    def __init__(self, entries: tuple):
        self._entries = entries

    @classmethod
    def from_mapping(cls, mapping: dict) -> "TopicCatalog":
        if not isinstance(mapping, dict) or not mapping:
            raise ValueError("Topic catalog must map at least one category to topics")

        entries = []
        for category, topics in mapping.items():
            if not isinstance(category, str) or not category.strip():
                raise ValueError("Topic catalog has an empty category name")
            if isinstance(topics, str) or not isinstance(topics, (list, tuple)) or not topics:
                raise ValueError(f"Category {category!r} must list at least one topic")
            cleaned = []
            for topic in topics:
                if not isinstance(topic, str) or not topic.strip():
                    raise ValueError(f"Category {category!r} contains an empty topic")
                cleaned.append(topic.strip())
            entries.append((category, tuple(cleaned)))
        return cls(tuple(entries))

    def __contains__(self, category) -> bool:
        return any(name == category for name, _ in self._entries)

    def __len__(self) -> int:
        return sum(len(topics) for _, topics in self._entries)

    @property
    def categories(self) -> list[str]:
        return [name for name, _ in self._entries]

    def topics(self, category: str) -> tuple:
        for name, topics in self._entries:
            if name == category:
                return topics
        raise KeyError(category)

    def candidates(self, category: str | None = None) -> list[TopicCandidate]:
        """All candidates in catalog order, optionally limited to one category."""
        return [
            TopicCandidate(category=name, topic=topic)
            for name, topics in self._entries
            if category is None or name == category
            for topic in topics
        ]
