import unittest

from unified_changelog.grouping.change_classifier import classify_commit, parse_version


class TestClassifyCommit(unittest.TestCase):
    def test_conventional_commit_cases(self) -> None:
        cases = [
            ("feat(auth): add login", "Feat"),
            ("fix: handle empty branch list", "Fix"),
            ("docs(readme): describe configuration", "Docs"),
            ("chore: bump click", "Chore"),
            ("refactor(core)!: nothing", "Other"),
            ("tidy up whitespace", "Other"),
            ("Feat: capitalised type", "Other"),
            ("feat:missing space", "Other"),
            ("feat: ", "Other"),
            ("feat-x: hyphenated type", "Other"),
            ("", "Other"),
        ]
        for message, expected in cases:
            with self.subTest(message=message):
                self.assertEqual(classify_commit(message), expected)

    def test_message_with_pipe_is_still_classified(self) -> None:
        self.assertEqual(classify_commit("fix: a | b"), "Fix")


class TestParseVersion(unittest.TestCase):
    def test_parse_version_cases(self) -> None:
        cases = [
            ("v1.2.3", "1.2.3"),
            ("v1.2.3-prod", "1.2.3"),
            ("release-v10.20.30-uat", "10.20.30"),
            ("1.2.3", "unknown"),
            ("v1.2", "unknown"),
            ("nightly", "unknown"),
        ]
        for tag, expected in cases:
            with self.subTest(tag=tag):
                self.assertEqual(parse_version(tag), expected)


if __name__ == "__main__":
    unittest.main()
