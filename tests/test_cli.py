"""
Tests for the command-line interface.
"""

import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from readme_crawler.cli import _resolve_concurrency, main, parse_args
from readme_crawler.config import DEFAULT_OUTPUT
from readme_crawler.errors import NotFoundError
from readme_crawler.models import CrawlResult, RepoRef


class TestParseArgs(unittest.TestCase):
    def test_defaults(self):
        args = parse_args(["o/r"])
        self.assertEqual(args.seed, RepoRef("o", "r"))
        self.assertEqual(args.output, DEFAULT_OUTPUT)
        self.assertIsNone(args.branches)
        self.assertEqual(args.depth, 0)

    def test_seed_from_url(self):
        args = parse_args(["https://github.com/sindresorhus/awesome"])
        self.assertEqual(args.seed, RepoRef("sindresorhus", "awesome"))

    def test_repeated_branch(self):
        args = parse_args(["o/r", "--branch", "main", "--branch", "master"])
        self.assertEqual(args.branches, ["main", "master"])

    def test_invalid_seed_exits(self):
        with self.assertRaises(SystemExit):
            parse_args(["not-a-repo"])


class TestResolveConcurrency(unittest.TestCase):
    def test_explicit(self):
        self.assertEqual(_resolve_concurrency("5"), 5)

    @patch("readme_crawler.cli.auto_concurrency", return_value=7)
    def test_auto(self, _mock):
        self.assertEqual(_resolve_concurrency("auto"), 7)

    @patch("readme_crawler.cli.auto_concurrency", return_value=7)
    def test_invalid_falls_back_to_auto(self, _mock):
        self.assertEqual(_resolve_concurrency("lots"), 7)


@patch("readme_crawler.cli.setup_logging")
@patch("readme_crawler.cli.Crawler")
class TestMain(unittest.TestCase):
    def test_success(self, mock_crawler_cls, _mock_logging):
        mock_crawler_cls.return_value.run.return_value = CrawlResult(seed=RepoRef("o", "r"))
        self.assertEqual(main(["o/r", "--concurrency", "2", "--no-progress"]), 0)
        kwargs = mock_crawler_cls.call_args.kwargs
        self.assertEqual(kwargs["seed"], RepoRef("o", "r"))
        self.assertEqual(kwargs["concurrency"], 2)
        self.assertEqual(kwargs["fetcher"].branches, ("main",))

    def test_seed_failure_exit_code(self, mock_crawler_cls, _mock_logging):
        mock_crawler_cls.return_value.run.side_effect = NotFoundError("missing")
        self.assertEqual(main(["o/r", "--concurrency", "1"]), 1)

    def test_unexpected_seed_error_exit_code(self, mock_crawler_cls, _mock_logging):
        mock_crawler_cls.return_value.run.side_effect = RuntimeError("bug")
        with patch("readme_crawler.cli.log") as mock_log:
            self.assertEqual(main(["o/r", "--concurrency", "1"]), 1)
        mock_log.exception.assert_called_once()

    def test_cancelled_exit_code(self, mock_crawler_cls, _mock_logging):
        mock_crawler_cls.return_value.run.return_value = CrawlResult(
            seed=RepoRef("o", "r"), cancelled=True
        )
        self.assertEqual(main(["o/r", "--concurrency", "1"]), 130)

    def test_summary_json(self, mock_crawler_cls, _mock_logging):
        mock_crawler_cls.return_value.run.return_value = CrawlResult(
            seed=RepoRef("o", "r"), visited=3
        )
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "summary.json"
            main(["o/r", "--concurrency", "1", "--summary-json", str(path)])
            data = json.loads(path.read_text(encoding="utf-8"))
        self.assertEqual(data["seed"], "o/r")
        self.assertEqual(data["visited"], 3)


if __name__ == "__main__":
    unittest.main()
