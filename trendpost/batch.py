"""BatchOrchestrator — select, dedup, generate, persist; retry on anything else."""

import random
import time
from datetime import date

from .catalog import CategoryProfile
from .config import ConfigError, Settings
from .dedup import DuplicateDetector, Scope
from .generate import generate_document
from .log import get_logger, log
from .scorer import analyze_category, select_topic
from .sources import AggregateResult, TrendAggregator, category_sources, general_sources
from .state import BatchReport, BatchState, Stage
from .store import DocumentStore


def fetch_general_trends(settings: Settings) -> AggregateResult:
    log("Fetching general tech trends...")
    return TrendAggregator(general_sources(settings.subreddit)).aggregate()


def fetch_category_trends(profile: CategoryProfile) -> AggregateResult:
    log(f"Fetching trends for {profile.name}...")
    return TrendAggregator(category_sources(profile)).aggregate()


class BatchOrchestrator:
    """Produces up to N documents within a bounded number of attempts.

    Collaborators are injectable so the loop can run without network access.
    Trend data is fetched lazily and reused for the rest of the run.
    """

    def __init__(
        self,
        settings: Settings,
        store: DocumentStore | None = None,
        detector: DuplicateDetector | None = None,
        generate=generate_document,
        fetch_general=None,
        fetch_category=fetch_category_trends,
        sleep=time.sleep,
        rng: random.Random | None = None,
    ):
        self.settings = settings
        self.store = store or DocumentStore(settings.posts_dir)
        self.detector = detector or DuplicateDetector(self.store)
        self.generate = generate
        self.fetch_general = fetch_general or (lambda: fetch_general_trends(settings))
        self.fetch_category = fetch_category
        self.sleep = sleep
        self.rng = rng or random.Random()

        self._general = None
        self._by_category = {}
        self._generation_calls = 0

    def run(
        self,
        count: int | None = None,
        category: str | None = None,
        topic: str | None = None,
        max_attempts: int | None = None,
        today: date | None = None,
    ) -> BatchReport:
        """Generate `count` posts; a short report is a normal outcome.

        `topic` forces the first attempt's topic; retries pick new ones.
        Raises ConfigError for an unknown category.
        """
        catalog = self.settings.catalog
        if category is not None and category not in catalog:
            raise ConfigError(
                f"Unknown category {category!r}. Available: {', '.join(catalog.categories)}"
            )
        count = self.settings.generation.posts_per_run if count is None else count
        if max_attempts is None:
            max_attempts = count * self.settings.generation.attempt_multiplier
        today = today or date.today()

        state = BatchState(requested=count, max_attempts=max_attempts)
        log(f"Generating {count} post(s), at most {max_attempts} attempts")
        if category:
            log(f"Category filter: {category}")

        while state.can_continue:
            attempt = state.begin_attempt()
            forced = topic if attempt.number == 1 else None
            try:
                self._run_attempt(state, category, forced, today)
            except Exception as e:
                get_logger().warning("Attempt %d failed: %s", attempt.number, e)
                if not attempt.finished:
                    state.retry(f"{type(e).__name__}: {e}")

        report = state.report()
        log(f"Posts generated: {len(report.generated)}/{report.requested} "
            f"in {report.attempts} attempt(s)")
        get_logger().debug("Attempts:\n%s", state.summary())
        return report

    # ─────────────────────────────────────────────────────
    # One attempt
    # ─────────────────────────────────────────────────────
    def _run_attempt(self, state: BatchState, category: str | None, forced: str | None, today: date):
        attempt = state.current

        choice = self._choose_topic(state, category, forced)
        if choice is None:
            state.retry("no topic available")
            return
        attempt.category, attempt.topic = choice
        log(f"Attempt {attempt.number}: [{attempt.category or '-'}] {attempt.topic}")

        state.advance(Stage.CHECKING_DUPLICATE)
        existing = self.detector.find_duplicate(attempt.topic, Scope.TODAY, today)
        if existing is not None:
            log(f"Topic already covered today ({existing.file_path.name}), trying another")
            state.retry(f"topic duplicates {existing.file_path.name}")
            return

        state.advance(Stage.GENERATING)
        trends, insight = self._trends_for(attempt.category)
        doc = self._generate(trends, attempt.topic, insight, today)
        attempt.title = doc.title

        existing = self.detector.find_duplicate(doc.title, Scope.ALL)
        if existing is not None:
            log(f"Title \"{doc.title}\" too similar to \"{existing.title}\", trying another topic")
            state.retry(f"title duplicates {existing.file_path.name}")
            return

        state.advance(Stage.PERSISTING)
        path = self.store.save(doc)
        state.count(path.name, doc.title)
        log(f"Saved: {path.name}")

    def _choose_topic(self, state: BatchState, category: str | None, forced: str | None):
        catalog = self.settings.catalog
        if forced:
            owner = next((c.category for c in catalog.candidates() if c.topic == forced), category or "")
            return owner, forced

        tried = state.tried_topics
        if category is not None:
            topics = catalog.topics(category)
            return category, self.rng.choice([t for t in topics if t not in tried] or topics)

        candidate = select_topic(catalog, self._general_trends(), self.rng, exclude=tried)
        if candidate is None:
            return None
        return candidate.category, candidate.topic

    def _general_trends(self) -> AggregateResult:
        if self._general is None:
            self._general = self.fetch_general()
        return self._general

    def _trends_for(self, category: str):
        profile = self.settings.profile(category) if category else None
        if profile is None:
            return self._general_trends(), None
        if category not in self._by_category:
            trends = self.fetch_category(profile)
            self._by_category[category] = (trends, analyze_category(category, profile, trends))
        return self._by_category[category]

    def _generate(self, trends, topic, insight, today):
        if self._generation_calls:
            self.sleep(self.settings.generation.pause_seconds)
        self._generation_calls += 1
        return self.generate(
            trends,
            topic,
            self.settings.generation,
            insight=insight,
            author=dict(self.settings.author),
            today=today,
        )
