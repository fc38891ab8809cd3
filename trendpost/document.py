"""Markdown documents with a YAML front-matter header."""

import math
import re
from dataclasses import dataclass
from datetime import date, datetime

import yaml

_HEADER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)(.*)\Z", re.DOTALL)
_FENCE_RE = re.compile(r"\A```[\w-]*\r?\n(.*?)\r?\n```\s*\Z", re.DOTALL)
WORDS_PER_MINUTE = 200


class DocumentFormatError(ValueError):
    """Text does not follow the front-matter grammar."""


@dataclass(frozen=True)
class GeneratedDocument:
    title: str
    date: date
    excerpt: str = ""
    tags: tuple = ()
    body: str = ""
    featured: bool = True

    @property
    def reading_time(self) -> str:
        minutes = max(1, math.ceil(len(self.body.split()) / WORDS_PER_MINUTE))
        return f"{minutes} min read"

    def header(self) -> dict:
        return {
            "title": self.title,
            "date": self.date.isoformat(),
            "excerpt": self.excerpt,
            "tags": list(self.tags),
            "featured": self.featured,
        }


def _coerce_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            pass
    raise DocumentFormatError(f"Invalid or missing date: {value!r}")


def split_front_matter(text: str) -> tuple[dict, str]:
    """Return (header mapping, body). Raises DocumentFormatError."""
    text = text.strip()
    fenced = _FENCE_RE.match(text)
    if fenced:
        text = fenced.group(1).strip()

    match = _HEADER_RE.match(text)
    if not match:
        raise DocumentFormatError("No front-matter header found")
    try:
        header = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        raise DocumentFormatError(f"Header is not valid YAML: {e}") from e
    if not isinstance(header, dict):
        raise DocumentFormatError("Header must be a key: value mapping")
    return header, match.group(2).lstrip("\r\n")


def parse_document(text: str) -> GeneratedDocument:
    """Parse front matter + body; title and date are required."""
    header, body = split_front_matter(text)

    title = header.get("title")
    if not isinstance(title, str) or not title.strip():
        raise DocumentFormatError("Header has no title")

    tags = header.get("tags") or []
    if isinstance(tags, str):
        tags = [t.strip() for t in tags.split(",") if t.strip()]
    elif not isinstance(tags, list):
        raise DocumentFormatError("tags must be a list")

    featured = header.get("featured", False)
    if not isinstance(featured, bool):
        raise DocumentFormatError("featured must be true or false")

    return GeneratedDocument(
        title=title.strip(),
        date=_coerce_date(header.get("date")),
        excerpt=str(header.get("excerpt") or "").strip(),
        tags=tuple(str(t) for t in tags),
        body=body,
        featured=featured,
    )


def render_document(doc: GeneratedDocument) -> str:
    header = yaml.safe_dump(
        doc.header(),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=None,
        width=1000,
    )
    return f"---\n{header}---\n\n{doc.body.rstrip()}\n"
