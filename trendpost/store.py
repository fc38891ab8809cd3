"""Append-only document store: one Markdown file per post."""

import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from .document import DocumentFormatError, GeneratedDocument, parse_document, render_document
from .log import get_logger

EXTENSIONS = (".md", ".mdx")
SLUG_MAX = 60
_DATE_PREFIX_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})-(.*)$")


@dataclass(frozen=True)
class ExistingDocumentRecord:
    date: date
    slug: str
    title: str
    file_path: Path


def slugify(title: str) -> str:
    slug = re.sub(r"[^\w\s-]", "", title.lower())
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug[:SLUG_MAX]


class DocumentStore:
    def __init__(self, posts_dir: Path, extension: str = ".md"):
        self.posts_dir = Path(posts_dir)
        self.extension = extension

    def filename_for(self, doc: GeneratedDocument) -> str:
        slug = slugify(doc.title).strip("-") or "post"
        return f"{doc.date.isoformat()}-{slug}{self.extension}"

    def save(self, doc: GeneratedDocument) -> Path:
        """Write a new document. Existing files are never overwritten."""
        self.posts_dir.mkdir(parents=True, exist_ok=True)
        path = self.posts_dir / self.filename_for(doc)
        with open(path, "x", encoding="utf-8") as f:
            f.write(render_document(doc))
        return path

    def load(self, path: Path) -> GeneratedDocument:
        return parse_document(Path(path).read_text(encoding="utf-8"))

    def _files(self, on_date: date | None = None) -> list[Path]:
        if not self.posts_dir.is_dir():
            return []
        prefix = on_date.isoformat() if on_date else ""
        return sorted(
            p for p in self.posts_dir.iterdir()
            if p.is_file() and p.suffix in EXTENSIONS and p.name.startswith(prefix)
        )

    def _scan(self, on_date: date | None = None):
        """Parse each matching file once; unreadable or malformed ones are skipped."""
        for path in self._files(on_date):
            try:
                doc = self.load(path)
            except (OSError, UnicodeDecodeError, DocumentFormatError) as e:
                get_logger().debug("Skipping unreadable post %s: %s", path.name, e)
                continue
            match = _DATE_PREFIX_RE.match(path.stem)
            slug = match.group(2) if match else path.stem
            record = ExistingDocumentRecord(date=doc.date, slug=slug, title=doc.title, file_path=path)
            yield record, doc

    def records(self, on_date: date | None = None) -> list[ExistingDocumentRecord]:
        """Fresh snapshot of existing documents, optionally one day's only."""
        return [record for record, _ in self._scan(on_date)]

    def list_documents(self) -> list[tuple[ExistingDocumentRecord, GeneratedDocument]]:
        """All readable documents, newest first."""
        return sorted(self._scan(), key=lambda pair: pair[0].date, reverse=True)
