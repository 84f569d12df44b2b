"""Tests for the command-line entry point."""

import json
from unittest.mock import AsyncMock, patch

import pytest

from reader_core.cli import build_parser, main
from reader_core.fetcher import TransportError
from reader_core.model import ExtractedDocument, FeedItem


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("reader_core.cli.setup_logging"):
        yield


class TestCli:

    def test_parser_defaults(self):
        args = build_parser().parse_args(["feed"])
        assert args.category == "latest"
        args = build_parser().parse_args(["serve"])
        assert args.port == 8000

    @patch("reader_core.cli.fetch_feed", new_callable=AsyncMock)
    def test_feed_prints_items(self, mock_fetch, capsys):
        mock_fetch.return_value = [FeedItem("t", "https://linux.do/t/topic/1", "1", "", "", "Linux Do")]

        assert main(["feed", "top"]) == 0

        out = json.loads(capsys.readouterr().out)
        assert out[0]["topicId"] == "1"
        assert mock_fetch.call_args.args[0] == "top"

    @patch("reader_core.cli.fetch_document", new_callable=AsyncMock)
    def test_read_prints_document(self, mock_fetch, capsys):
        mock_fetch.return_value = ExtractedDocument("标题", "", "https://a.com", "body")

        assert main(["read", "https://a.com"]) == 0

        out = json.loads(capsys.readouterr().out)
        assert out == {"title": "标题", "date": "", "url": "https://a.com", "markdown": "body"}

    @patch("reader_core.cli.fetch_document", new_callable=AsyncMock)
    def test_read_reports_transport_error(self, mock_fetch, capsys):
        mock_fetch.side_effect = TransportError("HTTP 500: Internal Server Error", status_code=500)

        assert main(["read", "/t/topic/1"]) == 1
        assert json.loads(capsys.readouterr().out) == {"error": "HTTP 500: Internal Server Error"}

    @patch("uvicorn.run")
    def test_serve(self, mock_run):
        assert main(["serve", "--port", "9000"]) == 0
        mock_run.assert_called_once_with("reader_core.server:app", host="127.0.0.1", port=9000)
