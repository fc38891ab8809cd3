"""CLI entry point — python -m trendpost."""

import argparse
import os
import sys

from .config import ConfigError, load_settings, require_anthropic_key
from .log import set_verbose


def _print_report(report):
    print(f"\n  Posts generated: {len(report.generated)}/{report.requested}")
    for i, entry in enumerate(report.generated, 1):
        print(f"  {i}. {entry.title}")
        print(f"     {entry.filename}")
    if not report.complete:
        print(f"  Stopped after {report.attempts} attempt(s) without reaching {report.requested}.")


def cmd_generate(args, settings):
    from .batch import BatchOrchestrator

    require_anthropic_key(settings.generation)
    topic = args.topic or os.environ.get("BLOG_TOPIC") or None
    report = BatchOrchestrator(settings).run(count=1, topic=topic)
    _print_report(report)


def cmd_batch(args, settings):
    from .batch import BatchOrchestrator

    require_anthropic_key(settings.generation)
    count = args.count if args.count is not None else settings.generation.posts_per_run
    if count < 1:
        raise ConfigError("count must be at least 1")
    report = BatchOrchestrator(settings).run(count=count, category=args.category)
    _print_report(report)


def cmd_trends(args, settings):
    from .batch import fetch_general_trends

    result = fetch_general_trends(settings)
    print(f"\n  Trending items ({len(result.items)} found):\n")
    for i, item in enumerate(result.items, 1):
        metric = f" [{item.metric:g}]" if item.metric is not None else ""
        print(f"  {i:2d}. [{item.source.value}] {item.title}{metric}")
        if item.description:
            print(f"      {item.description[:100]}")


def cmd_topic_trends(args, settings):
    from .batch import fetch_category_trends
    from .scorer import analyze_category

    profile = settings.profile(args.category)
    if profile is None:
        raise ConfigError(
            f"Unknown category {args.category!r}. Available: {', '.join(sorted(settings.profiles))}"
        )

    result = fetch_category_trends(profile)
    insight = analyze_category(args.category, profile, result)

    print(f"\n  Trends for {profile.name} ({len(result.items)} items)\n")
    for item in result.items:
        print(f"  [{item.source.value}] {item.title}")
    if insight.trending_keywords:
        print(f"\n  Trending keywords: {', '.join(insight.trending_keywords)}")
    for suggestion in insight.suggestions:
        print(f"  * {suggestion}")
    print("\n  Recommended topics:")
    for i, kw in enumerate(insight.recommended_topics[:5], 1):
        print(f"  {i}. {kw}")


def cmd_posts(args, settings):
    from .store import DocumentStore

    docs = DocumentStore(settings.posts_dir).list_documents()
    if not docs:
        print(f"  No posts in {settings.posts_dir}")
        return
    for record, doc in docs[:args.limit]:
        print(f"  {record.date}  {doc.title}  ({doc.reading_time})")
        print(f"              {record.file_path.name}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="trendpost — trend-driven blog post generator",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", default=None, help="Path to blog-config.json")
    sub = parser.add_subparsers(dest="cmd")

    p_gen = sub.add_parser("generate", help="Generate one post (topic via --topic or BLOG_TOPIC)")
    p_gen.add_argument("--topic", default=None, help="Force the topic")

    p_batch = sub.add_parser("batch", help="Generate several posts")
    p_batch.add_argument("count", nargs="?", type=int, default=None, help="Posts to generate")
    p_batch.add_argument("category", nargs="?", default=None, help="Only use this category")

    sub.add_parser("trends", help="Show general trending items")

    p_tt = sub.add_parser("topic-trends", help="Show trends + suggestions for one category")
    p_tt.add_argument("category")

    p_posts = sub.add_parser("posts", help="List existing posts, newest first")
    p_posts.add_argument("--limit", type=int, default=20)

    args = parser.parse_args(argv)

    if args.verbose:
        set_verbose(True)

    if not args.cmd:
        parser.print_help()
        return 0

    commands = {
        "generate": cmd_generate,
        "batch": cmd_batch,
        "trends": cmd_trends,
        "topic-trends": cmd_topic_trends,
        "posts": cmd_posts,
    }
    try:
        settings = load_settings(args.config)
        commands[args.cmd](args, settings)
    except ConfigError as e:
        print(f"  Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
