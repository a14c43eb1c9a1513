import unittest

from changelog_helper.grouping.group_model import ChangeRequest
from changelog_helper.grouping.relevance import filter_user_facing, is_user_facing


def make_change(number, title, labels=()):
    return ChangeRequest(number=number, title=title, labels=tuple(labels))


class TestIsUserFacing(unittest.TestCase):
    def test_skip_labels_are_case_insensitive(self) -> None:
        for label in ("chore", "CI", "Tests", "dependencies", "Refactoring", "infra"):
            with self.subTest(label=label):
                self.assertFalse(is_user_facing(make_change(1, "Add dark mode", [label])))

    def test_chore_label_wins_over_feature_title(self) -> None:
        change = make_change(1, "feat: add a brand new dashboard", ["enhancement", "chore"])
        self.assertFalse(is_user_facing(change))

    def test_skip_title_patterns(self) -> None:
        titles = [
            "chore: tidy imports",
            "chore(release): 1.2.0",
            "CI: cache pip",
            "test: cover parser",
            "tests(cli): more cases",
            "refactor: split module",
            "internal: rename helper",
            "infra(k8s): bump limits",
            "deps: update click",
            "build: switch to hatch",
            "Update all dependencies",
            "Bump version to 1.4.0",
            "Merge branch 'main' into release",
            "Speed up startup [skip changelog]",
            "[internal] Reword log messages",
        ]
        for title in titles:
            with self.subTest(title=title):
                self.assertFalse(is_user_facing(make_change(1, title)))

    def test_user_facing_by_default(self) -> None:
        titles = [
            "Add dark mode",
            "docs: explain hooks",
            "testing: nothing here is a prefix",
            "Polish onboarding copy",
            "",
        ]
        for title in titles:
            with self.subTest(title=title):
                self.assertTrue(is_user_facing(make_change(1, title)))

    def test_unrelated_labels_do_not_veto(self) -> None:
        self.assertTrue(is_user_facing(make_change(1, "Fix crash", ["bug", "area:tui"])))


class TestFilterUserFacing(unittest.TestCase):
    def test_keeps_input_order(self) -> None:
        changes = [
            make_change(1, "Add dark mode"),
            make_change(2, "chore: tidy"),
            make_change(3, "Fix crash"),
            make_change(4, "Polish copy", ["internal"]),
            make_change(5, "Improve help text"),
        ]
        kept = filter_user_facing(changes)
        self.assertEqual([change.number for change in kept], [1, 3, 5])

    def test_empty_input(self) -> None:
        self.assertEqual(filter_user_facing([]), [])


if __name__ == "__main__":
    unittest.main()
