"""Tests for trendpost/generate.py — prompt building + generation with mocked Claude."""

from unittest.mock import MagicMock, patch

import pytest

from trendpost.config import GenerationSettings
from trendpost.document import DocumentFormatError
from trendpost.generate import build_prompt, generate_document
from trendpost.scorer import CategoryInsight

REPLY = """---
title: "Docker Images on a Diet 🐳"
date: "2026-10-18"
excerpt: "Your images are too big."
tags: ["docker", "devops"]
featured: true
---

# Docker Images on a Diet 🐳

Real talk.
"""


class TestBuildPrompt:
    def test_contains_topic_trends_and_contract(self, sample_trends, today):
        prompt = build_prompt(sample_trends, "Docker image size diet", today)
        assert "TOPIC FOCUS: Docker image size diet" in prompt
        assert "rust-lang/rust" in prompt
        assert 'date: "2026-10-18"' in prompt
        assert "featured: true" in prompt
        assert "800-1200 words" in prompt

    def test_includes_category_insight(self, empty_trends, today):
        insight = CategoryInsight(
            category="security", name="Cybersecurity", trending_keywords=("CVE",),
            suggestions=("Popular Dev.to tags: security",), recommended_topics=("CVE", "OWASP"),
        )
        prompt = build_prompt(empty_trends, "CVE", today, insight=insight)
        assert '"trendingKeywords"' in prompt
        assert "Popular Dev.to tags: security" in prompt

    def test_author_links(self, empty_trends, today):
        prompt = build_prompt(empty_trends, "T", today, author={"github": "https://github.com/me"})
        assert "https://github.com/me" in prompt
        assert "LinkedIn" not in prompt


class TestGenerateDocument:
    @patch("trendpost.generate._call_claude")
    def test_parses_reply(self, mock_claude, sample_trends, today):
        mock_claude.return_value = REPLY
        settings = GenerationSettings(model="claude-test", max_tokens=123)

        doc = generate_document(sample_trends, "Docker image size diet", settings, today=today)

        assert doc.title == "Docker Images on a Diet 🐳"
        assert doc.tags == ("docker", "devops")
        args = mock_claude.call_args[0]
        assert args[1:] == ("claude-test", 123)
        assert "Docker image size diet" in args[0]

    @patch("trendpost.generate._call_claude")
    def test_called_exactly_once(self, mock_claude, empty_trends, today):
        mock_claude.return_value = "I'd rather not."
        with pytest.raises(DocumentFormatError):
            generate_document(empty_trends, "T", GenerationSettings(), today=today)
        assert mock_claude.call_count == 1

    @patch("trendpost.generate._call_claude")
    def test_api_errors_propagate(self, mock_claude, empty_trends, today):
        mock_claude.side_effect = RuntimeError("529 overloaded")
        with pytest.raises(RuntimeError, match="overloaded"):
            generate_document(empty_trends, "T", GenerationSettings(), today=today)

    @patch("trendpost.generate.get_anthropic_client")
    def test_call_claude_uses_messages_api(self, mock_client_factory, empty_trends, today):
        client = MagicMock()
        client.messages.create.return_value.content = [MagicMock(text=f"\n{REPLY}\n")]
        mock_client_factory.return_value = client

        doc = generate_document(empty_trends, "T", GenerationSettings(model="m", max_tokens=9), today=today)

        assert doc.date.isoformat() == "2026-10-18"
        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["model"] == "m"
        assert kwargs["max_tokens"] == 9
        assert kwargs["messages"][0]["role"] == "user"

    @patch("trendpost.generate._call_claude")
    def test_reply_date_replaced_by_run_date(self, mock_claude, empty_trends, today):
        mock_claude.return_value = REPLY.replace('"2026-10-18"', '"2024-03-01"')
        doc = generate_document(empty_trends, "T", GenerationSettings(), today=today)
        assert doc.date == today

    @patch("trendpost.generate._call_claude")
    def test_passes_configured_key(self, mock_claude, empty_trends, today):
        mock_claude.return_value = REPLY
        generate_document(empty_trends, "T", GenerationSettings(api_key="sk-file"), today=today)
        assert mock_claude.call_args.kwargs["api_key"] == "sk-file"
