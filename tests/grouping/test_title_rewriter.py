"""Tests for title cleaning and plain-language explanations."""

import unittest

from changelog_helper.grouping.rules import (
    GENERIC_TECHNICAL_EXPLANATION,
    SECURITY_PERMISSION_EXPLANATION,
)
from changelog_helper.grouping.title_rewriter import clean_title, get_explanation


class TestCleanTitle(unittest.TestCase):
    def test_clean_title_cases(self) -> None:
        cases = [
            (
                "fix(dedupe): Remove overly broad gh api permission from dedupe command.",
                "Remove overly broad gh api permission from dedupe command",
            ),
            ("feat: add dark mode", "Add dark mode"),
            ("Feat(UI):   spaced out", "Spaced out"),
            ("Fix broken links", "Fix broken links"),
            ("keep iOS casing, and commas.", "Keep iOS casing, and commas"),
            ("Support v1.2..", "Support v1.2."),
            ("docs: ", ""),
            ("", ""),
        ]
        for title, expected in cases:
            with self.subTest(title=title):
                self.assertEqual(clean_title(title), expected)

    def test_only_leading_prefix_is_removed(self) -> None:
        self.assertEqual(clean_title("fix: handle feat: prefix in body"), "Handle feat: prefix in body")

    def test_title_without_prefix_keeps_internal_colons(self) -> None:
        self.assertEqual(clean_title("Show time as 10:30 in status"), "Show time as 10:30 in status")


class TestGetExplanation(unittest.TestCase):
    def test_simple_titles_have_no_explanation(self) -> None:
        titles = [
            "Fix broken links",
            "fix link in footer",
            "Fix typo in webhook docs",
            "Update the README with api examples",
            "Add documentation for token scopes",
            "Improve error messages for bad config",
        ]
        for title in titles:
            with self.subTest(title=title):
                self.assertIsNone(get_explanation(title))

    def test_technical_table_first_match_wins(self) -> None:
        cases = [
            (
                "fix(dedupe): Remove overly broad gh api permission from dedupe command.",
                SECURITY_PERMISSION_EXPLANATION,
            ),
            ("Restrict permission for bash tool", "Tightened security by limiting what actions can be performed."),
            ("Move bash setup to a script", "Simplified the setup process for better reliability."),
            ("Support multiline bash commands", "Complex commands are now handled more reliably."),
            ("Use gh api to read labels", "Relates to GitHub integration."),
            ("Batch api calls on startup", "Affects how the tool communicates with external services."),
            ("Reduce memory usage on large repos", "The tool now uses fewer system resources."),
            ("Improve performance of search", "Operations complete faster now."),
            ("Add caching for session list", "Frequently used data is now stored for faster access."),
            ("Catch exception from hooks", "Error scenarios are now handled more gracefully."),
            ("Prevent crash on resize", "Resolved an issue that could cause the tool to stop unexpectedly."),
            ("Prevent hang when stdin closes", "Resolved an issue that could cause the tool to become unresponsive."),
            ("Smarter dedupe of issues", "Relates to removing duplicate entries."),
            ("Support regex in filters", "Relates to pattern matching functionality."),
            ("Send webhook on completion", "Relates to automated notifications."),
            ("Refresh token silently", "Relates to authentication credentials."),
        ]
        for title, expected in cases:
            with self.subTest(title=title):
                self.assertEqual(get_explanation(title), expected)

    def test_jargon_falls_back_to_generic_sentence(self) -> None:
        for title in ("Tweak stream parsing", "Rework the CLI flags", "Show large file warnings"):
            with self.subTest(title=title):
                self.assertEqual(get_explanation(title), GENERIC_TECHNICAL_EXPLANATION)

    def test_plain_titles_have_no_explanation(self) -> None:
        for title in ("Polish onboarding copy", "Dark mode for the status bar", "", None):
            with self.subTest(title=title):
                self.assertIsNone(get_explanation(title))


if __name__ == "__main__":
    unittest.main()
