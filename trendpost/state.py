"""Attempt state machine for batch generation."""

from dataclasses import dataclass, field
from enum import Enum


class Stage(Enum):
    SELECTING_TOPIC = "selecting_topic"
    CHECKING_DUPLICATE = "checking_duplicate"
    GENERATING = "generating"
    PERSISTING = "persisting"
    COUNTED = "counted"
    RETRYING = "retrying"


TERMINAL = (Stage.COUNTED, Stage.RETRYING)

TRANSITIONS = {
    Stage.SELECTING_TOPIC: {Stage.CHECKING_DUPLICATE, Stage.RETRYING},
    Stage.CHECKING_DUPLICATE: {Stage.GENERATING, Stage.RETRYING},
    Stage.GENERATING: {Stage.PERSISTING, Stage.RETRYING},
    Stage.PERSISTING: {Stage.COUNTED, Stage.RETRYING},
}


@dataclass
class Attempt:
    number: int
    stage: Stage = Stage.SELECTING_TOPIC
    category: str = ""
    topic: str = ""
    title: str = ""
    filename: str = ""
    reason: str = ""

    @property
    def finished(self) -> bool:
        return self.stage in TERMINAL


@dataclass(frozen=True)
class GeneratedEntry:
    filename: str
    title: str


@dataclass(frozen=True)
class BatchReport:
    requested: int
    generated: tuple
    attempts: int

    @property
    def complete(self) -> bool:
        return len(self.generated) == self.requested


@dataclass
class BatchState:
    """Tracks every attempt of one batch run.

    The attempt ceiling is plain data; can_continue is the only loop guard.
    """
    requested: int
    max_attempts: int
    attempts: list = field(default_factory=list)

    def __post_init__(self):
        if self.requested < 0 or self.max_attempts < 0:
            raise ValueError("requested and max_attempts must be non-negative")

    @property
    def generated(self) -> list[GeneratedEntry]:
        return [
            GeneratedEntry(a.filename, a.title)
            for a in self.attempts if a.stage is Stage.COUNTED
        ]

    @property
    def current(self) -> Attempt | None:
        return self.attempts[-1] if self.attempts else None

    @property
    def can_continue(self) -> bool:
        return len(self.generated) < self.requested and len(self.attempts) < self.max_attempts

    @property
    def tried_topics(self) -> set:
        return {a.topic for a in self.attempts if a.topic}

    def begin_attempt(self) -> Attempt:
        if not self.can_continue:
            raise RuntimeError("No attempts left in this batch")
        if self.current is not None and not self.current.finished:
            raise RuntimeError(f"Attempt {self.current.number} is still {self.current.stage.value}")
        attempt = Attempt(number=len(self.attempts) + 1)
        self.attempts.append(attempt)
        return attempt

    def advance(self, stage: Stage):
        attempt = self.current
        if attempt is None or stage not in TRANSITIONS.get(attempt.stage, ()):
            current = attempt.stage.value if attempt else "none"
            raise ValueError(f"Illegal transition {current} -> {stage.value}")
        attempt.stage = stage

    def count(self, filename: str, title: str):
        self.advance(Stage.COUNTED)
        self.current.filename = filename
        self.current.title = title

    def retry(self, reason: str):
        self.advance(Stage.RETRYING)
        self.current.reason = reason

    def report(self) -> BatchReport:
        return BatchReport(
            requested=self.requested,
            generated=tuple(self.generated),
            attempts=len(self.attempts),
        )

    def summary(self) -> str:
        """Human-readable line per attempt."""
        lines = []
        for a in self.attempts:
            marker = {Stage.COUNTED: "+", Stage.RETRYING: "!"}.get(a.stage, " ")
            detail = a.filename if a.stage is Stage.COUNTED else a.reason
            lines.append(f"  [{marker}] #{a.number} {a.topic or '-'}: {detail}".rstrip())
        return "\n".join(lines)
