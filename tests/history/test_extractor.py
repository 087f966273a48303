import datetime
import unittest
from contextlib import contextmanager
from unittest.mock import MagicMock

from unified_changelog.history.extractor import HistoryExtractor, parse_log_line
from unified_changelog.vcs.git_client import GitError


TODAY = datetime.date(2024, 3, 31)


class FakeGitClient:
    def __init__(self, tags=None, log_lines=None, fail_on=None):
        self.tags = tags or {}
        self.log_lines = log_lines or []
        self.fail_on = fail_on
        self.calls = []
        self.checked_out_branches = []

    def _maybe_fail(self, name):
        self.calls.append(name)
        if self.fail_on == name:
            raise GitError(f"{name} failed")

    def list_merged_tags(self, branch):
        self._maybe_fail("list_merged_tags")
        return list(self.tags)

    def get_tag_target(self, name):
        self._maybe_fail("get_tag_target")
        return self.tags[name]

    def list_commits_since(self, since, ref=None):
        self._maybe_fail("list_commits_since")
        self.since = since
        self.ref = ref
        return self.log_lines

    @contextmanager
    def checked_out(self, branch):
        self.checked_out_branches.append(branch)
        yield


class TestParseLogLine(unittest.TestCase):
    def test_parses_fields_and_category(self) -> None:
        commit = parse_log_line("abcdef123|abcdef1|2024-03-02|feat(api): add endpoint")
        self.assertEqual(commit.full_id, "abcdef123")
        self.assertEqual(commit.short_id, "abcdef1")
        self.assertEqual(commit.date, datetime.date(2024, 3, 2))
        self.assertEqual(commit.message, "feat(api): add endpoint")
        self.assertEqual(commit.category, "Feat")

    def test_rejoins_separator_inside_message(self) -> None:
        commit = parse_log_line("abc|ab|2024-03-02|fix: a | b || c")
        self.assertEqual(commit.message, "fix: a | b || c")
        self.assertEqual(commit.category, "Fix")

    def test_empty_subject_is_kept(self) -> None:
        commit = parse_log_line("abc|ab|2024-03-02|")
        self.assertEqual(commit.message, "")
        self.assertEqual(commit.category, "Other")

    def test_malformed_lines_are_skipped(self) -> None:
        self.assertIsNone(parse_log_line("abc|ab|2024-03-02"))
        self.assertIsNone(parse_log_line("just text"))
        self.assertIsNone(parse_log_line("abc|ab|yesterday|fix: x"))


class TestHistoryExtractor(unittest.TestCase):
    def test_extracts_tags_and_commits(self) -> None:
        client = FakeGitClient(
            tags={
                "v1.1.0-prod": ("2024-03-20", "c3full"),
                "hotfix": ("2024-03-10", "c2full"),
            },
            log_lines=[
                "c4full|c4|2024-03-25|feat: new thing",
                "c3full|c3|2024-03-20|tidy up",
            ],
        )
        history = HistoryExtractor(client, window_days=30, today=TODAY).extract("prod")

        self.assertEqual(history.branch, "prod")
        self.assertEqual([t.name for t in history.tags], ["v1.1.0-prod", "hotfix"])
        self.assertEqual([t.version for t in history.tags], ["1.1.0", "unknown"])
        self.assertEqual(history.tags[0].date, datetime.date(2024, 3, 20))
        self.assertEqual(history.tags[0].commit, "c3full")
        self.assertEqual([c.short_id for c in history.commits], ["c4", "c3"])
        self.assertEqual([c.category for c in history.commits], ["Feat", "Other"])
        self.assertEqual(client.since, "2024-02-28")
        self.assertEqual(client.ref, "prod")
        self.assertEqual(client.checked_out_branches, [])

    def test_checkout_mode_queries_head_inside_checkout(self) -> None:
        client = FakeGitClient(log_lines=["a|a|2024-03-30|chore: x"])
        extractor = HistoryExtractor(client, window_days=7, today=TODAY, use_checkout=True)
        history = extractor.extract("uat")
        self.assertEqual(client.checked_out_branches, ["uat"])
        self.assertIsNone(client.ref)
        self.assertEqual(client.since, "2024-03-22")
        self.assertEqual(len(history.commits), 1)

    def test_window_starts_at_beginning_of_day(self) -> None:
        client = FakeGitClient(
            log_lines=[
                "c3full|c3|2024-03-02|feat: inside",
                "c2full|c2|2024-03-01|fix: first day of window",
                "c1full|c1|2024-02-29|chore: day before window",
                "c0full|c0|2024-02-28|chore: queried margin",
            ]
        )
        history = HistoryExtractor(client, window_days=30, today=TODAY).extract("prod")
        self.assertEqual([c.short_id for c in history.commits], ["c3", "c2"])
        self.assertLess(client.since, "2024-03-01")

    def test_failures_give_empty_history(self) -> None:
        for step in ["list_merged_tags", "get_tag_target", "list_commits_since"]:
            with self.subTest(step=step):
                client = FakeGitClient(
                    tags={"v1.0.0": ("2024-03-01", "c1")},
                    log_lines=["c1|c1|2024-03-01|feat: x"],
                    fail_on=step,
                )
                history = HistoryExtractor(client, window_days=30, today=TODAY).extract("prod")
                self.assertTrue(history.is_empty)
                self.assertEqual(history.branch, "prod")

    def test_failed_checkout_gives_empty_history(self) -> None:
        client = MagicMock()
        client.checked_out.side_effect = GitError("pathspec 'nope' did not match")
        extractor = HistoryExtractor(client, window_days=30, today=TODAY, use_checkout=True)
        history = extractor.extract("nope")
        self.assertTrue(history.is_empty)
        client.list_merged_tags.assert_not_called()

    def test_malformed_tag_date_gives_empty_history(self) -> None:
        client = FakeGitClient(tags={"v1.0.0": ("", "c1")})
        history = HistoryExtractor(client, window_days=30, today=TODAY).extract("prod")
        self.assertTrue(history.is_empty)


if __name__ == "__main__":
    unittest.main()
