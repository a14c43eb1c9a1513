import unittest
from datetime import date

from changelog_helper.grouping.group_model import Category, ChangeRequest, ClassifiedChange
from changelog_helper.grouping.grouper import build_digest, group_by_category
from changelog_helper.report.markdown import render_markdown


def make_change(number, title, labels=()):
    return ChangeRequest(
        number=number,
        title=title,
        labels=tuple(labels),
        author="dev",
        url=f"https://github.com/o/r/pull/{number}",
    )


SAMPLE = [
    make_change(1, "Add dark mode"),
    make_change(2, "Fix crash on resize"),
    make_change(3, "chore: tidy imports"),
    make_change(4, "Polish onboarding copy"),
    make_change(5, "feat: export to CSV"),
    make_change(6, "Add telemetry toggle", ["chore"]),
    make_change(7, "Prevent hang when stdin closes"),
    make_change(8, "Speed up startup"),
]


class TestGroupByCategory(unittest.TestCase):
    def test_all_categories_present_when_empty(self) -> None:
        grouped = group_by_category([])
        self.assertEqual(list(grouped), list(Category))
        self.assertTrue(all(items == [] for items in grouped.values()))

    def test_stable_partition(self) -> None:
        items = [
            ClassifiedChange(make_change(n, f"t{n}"), category, f"T{n}")
            for n, category in [
                (1, Category.BUG_FIX),
                (2, Category.NEW_FEATURE),
                (3, Category.BUG_FIX),
                (4, Category.IMPROVEMENT),
                (5, Category.NEW_FEATURE),
            ]
        ]
        grouped = group_by_category(items)
        self.assertEqual([c.number for c in grouped[Category.NEW_FEATURE]], [2, 5])
        self.assertEqual([c.number for c in grouped[Category.IMPROVEMENT]], [4])
        self.assertEqual([c.number for c in grouped[Category.BUG_FIX]], [1, 3])


class TestBuildDigest(unittest.TestCase):
    def test_pipeline_counts_and_order(self) -> None:
        digest = build_digest(SAMPLE)
        self.assertEqual(digest.total, 8)
        self.assertEqual(digest.user_facing, 6)
        self.assertEqual([c.number for c in digest.groups[Category.NEW_FEATURE]], [1, 5])
        self.assertEqual([c.number for c in digest.groups[Category.IMPROVEMENT]], [4, 7, 8])
        self.assertEqual([c.number for c in digest.groups[Category.BUG_FIX]], [2])
        self.assertEqual(digest.groups[Category.NEW_FEATURE][1].title, "Export to CSV")

    def test_hang_fix_without_bug_words_is_an_improvement(self) -> None:
        digest = build_digest([make_change(7, "Prevent hang when stdin closes")])
        (change,) = digest.groups[Category.IMPROVEMENT]
        self.assertEqual(
            change.explanation,
            "Resolved an issue that could cause the tool to become unresponsive.",
        )

    def test_repeated_runs_render_identically(self) -> None:
        def render():
            digest = build_digest(SAMPLE)
            return render_markdown(
                digest.groups, date(2025, 1, 1), date(2025, 1, 8), generated_on=date(2025, 1, 8)
            )

        self.assertEqual(render(), render())

    def test_everything_filtered_out(self) -> None:
        digest = build_digest([make_change(1, "chore: x"), make_change(2, "ci: y")])
        self.assertEqual(digest.total, 2)
        self.assertEqual(digest.user_facing, 0)
        self.assertTrue(digest.is_empty)


if __name__ == "__main__":
    unittest.main()
