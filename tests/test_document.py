"""Tests for trendpost/document.py — front-matter grammar."""

from datetime import date

import pytest

from trendpost.document import (
    DocumentFormatError, GeneratedDocument, parse_document, render_document,
)

GOOD = """---
title: "Rust Ownership, Explained 🦀"
date: "2026-10-18"
excerpt: "Borrow checker got you down?"
tags: ["rust", "ownership"]
featured: true
---

# Rust Ownership, Explained 🦀

Real talk: it's fine.
"""


class TestParseDocument:
    def test_parses_header_and_body(self):
        doc = parse_document(GOOD)
        assert doc.title == "Rust Ownership, Explained 🦀"
        assert doc.date == date(2026, 10, 18)
        assert doc.tags == ("rust", "ownership")
        assert doc.featured is True
        assert doc.body.startswith("# Rust Ownership")

    def test_featured_false(self):
        assert parse_document(GOOD.replace("featured: true", "featured: false")).featured is False

    def test_strips_code_fence(self):
        doc = parse_document(f"```markdown\n{GOOD}```")
        assert doc.title.startswith("Rust Ownership")

    def test_unquoted_date(self):
        doc = parse_document(GOOD.replace('"2026-10-18"', "2026-10-18"))
        assert doc.date == date(2026, 10, 18)

    def test_comma_separated_tags(self):
        doc = parse_document(GOOD.replace('["rust", "ownership"]', '"rust, ownership"'))
        assert doc.tags == ("rust", "ownership")

    def test_leading_chatter_is_rejected(self):
        with pytest.raises(DocumentFormatError, match="No front-matter"):
            parse_document("Sure! Here's your post:\n\n" + GOOD)

    @pytest.mark.parametrize("text,message", [
        (GOOD.replace('title: "Rust Ownership, Explained 🦀"\n', ""), "title"),
        (GOOD.replace('"Rust Ownership, Explained 🦀"', '""'), "title"),
        (GOOD.replace('date: "2026-10-18"\n', ""), "date"),
        (GOOD.replace('"2026-10-18"', '"yesterday"'), "date"),
        (GOOD.replace('featured: true', 'featured: [unclosed'), "YAML"),
        ("---\n- just\n- a list\n---\nbody", "mapping"),
        (GOOD.replace("featured: true", "featured: \"false\""), "featured"),
        (GOOD.replace("featured: true", "featured: yes please"), "featured"),
    ])
    def test_strict_grammar(self, text, message):
        with pytest.raises(DocumentFormatError, match=message):
            parse_document(text)


class TestRenderDocument:
    def test_render_then_parse(self):
        doc = GeneratedDocument(
            title='Kubernetes: "the good parts" 🚀',
            date=date(2026, 10, 18),
            excerpt="Short: and sweet.",
            tags=("k8s", "devops"),
            body="# Heading\n\nText.",
        )
        text = render_document(doc)
        assert text.startswith("---\ntitle:")
        assert "\n---\n\n# Heading" in text
        assert parse_document(text) == doc

    def test_reading_time(self):
        doc = GeneratedDocument(title="T", date=date(2026, 1, 1), body="word " * 450)
        assert doc.reading_time == "3 min read"
        assert GeneratedDocument(title="T", date=date(2026, 1, 1)).reading_time == "1 min read"
