"""Tests for the reader-service response parser."""

from conftest import SAMPLE_READER_RESPONSE

from reader_core.config import UNTITLED
from reader_core.content_parser import extract_markdown, parse_content_response


class TestParseContentResponse:

    def test_full_envelope(self):
        raw = "Title: Foo\nPublished Time: 2024-01-01\nURL Source: http://x\nMarkdown Content:\n\n  Hello  "
        doc = parse_content_response(raw, "/t/topic/1")
        assert doc.to_dict() == {"title": "Foo", "date": "2024-01-01", "url": "http://x", "markdown": "Hello"}

    def test_sample_response(self):
        doc = parse_content_response(SAMPLE_READER_RESPONSE, "/t/topic/5")
        assert doc.title == "Hello World"
        assert doc.url == "https://linux.do/t/topic/5"
        assert doc.date == "2024-05-01T08:00:00Z"
        assert doc.markdown == "# Hello\n\nSome text."

    def test_missing_markdown_anchor_returns_raw_text(self):
        raw = "  Title: Foo\nsome body  \n"
        doc = parse_content_response(raw, "https://example.com")
        assert doc.markdown == raw

    def test_headers_found_without_markdown_anchor(self):
        raw = "Title: Only Title\nURL Source: https://example.com/a\nbody"
        doc = parse_content_response(raw, "ignored")
        assert doc.title == "Only Title"
        assert doc.url == "https://example.com/a"
        assert doc.markdown == raw

    def test_fallbacks(self):
        doc = parse_content_response("just text", "https://example.com/req")
        assert doc.title == UNTITLED
        assert doc.date == ""
        assert doc.url == "https://example.com/req"
        assert doc.markdown == "just text"

    def test_empty_input(self):
        doc = parse_content_response("", "/t/topic/1")
        assert doc.to_dict() == {"title": UNTITLED, "date": "", "url": "/t/topic/1", "markdown": ""}
        assert parse_content_response(None).url == ""

    def test_header_values_stop_at_line_end(self):
        doc = parse_content_response("Title: A\r\nPublished Time: B\r\n", "")
        assert doc.title == "A"
        assert doc.date == "B"

    def test_first_title_line_wins(self):
        raw = "Title: Real\nMarkdown Content:\nTitle: In body"
        assert parse_content_response(raw).title == "Real"

    def test_accepts_bytes(self):
        doc = parse_content_response("Title: 你好\nMarkdown Content: 正文".encode("utf-8"), "")
        assert doc.title == "你好"
        assert doc.markdown == "正文"


class TestExtractMarkdown:

    def test_anchor_at_end(self):
        assert extract_markdown("Title: x\nMarkdown Content:") == ""

    def test_anchor_text_after_phrase_on_same_line(self):
        assert extract_markdown("Markdown Content: inline\nmore") == "inline\nmore"
