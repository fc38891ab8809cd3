"""Heuristic near-duplicate detection against already published posts.

The rules deliberately over-match: skipping a topic is cheap, publishing a
near-repeat is not.
"""

import re
from datetime import date
from enum import Enum

from .store import DocumentStore, ExistingDocumentRecord


class Scope(Enum):
    TODAY = "today"
    ALL = "all"


def normalize(text: str) -> str:
    text = re.sub(r"[^\w\s]", "", text.lower())
    return re.sub(r"\s+", " ", text).strip()


def matches(a: str, b: str, match_first_token: bool = True) -> bool:
    """Compare two already-normalized strings."""
    if not a or not b:
        return False
    if a == b or a in b or b in a:
        return True
    if match_first_token:
        return a.split(" ")[0] in b or b.split(" ")[0] in a
    return False


class DuplicateDetector:
    """Checks text against a fresh scan of the store on every call.

    match_first_token toggles the noisiest rule (shared leading word), which
    flags short generic titles like "API ..." against each other.
    """

    def __init__(self, store: DocumentStore, match_first_token: bool = True):
        self.store = store
        self.match_first_token = match_first_token

    def find_duplicate(
        self, text: str, scope: Scope, today: date | None = None
    ) -> ExistingDocumentRecord | None:
        candidate = normalize(text)
        if not candidate:
            return None
        on_date = (today or date.today()) if scope is Scope.TODAY else None
        for record in self.store.records(on_date):
            if matches(candidate, normalize(record.title), self.match_first_token):
                return record
        return None

    def is_duplicate(self, text: str, scope: Scope, today: date | None = None) -> bool:
        return self.find_duplicate(text, scope, today) is not None
