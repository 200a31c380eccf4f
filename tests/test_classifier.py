import pytest

from career_tracker.classifier import KeywordClassifier, categorize
from career_tracker.models import Category


@pytest.mark.parametrize(
    "title",
    ["Python tutorial - YouTube", "React docs | Reddit", "leetcode stream on twitch"],
)
def test_learning_wins_over_distraction(title):
    assert categorize(title) is Category.LEARNING


@pytest.mark.parametrize("title", ["Inbox - Outlook", "Slack | general", "Q3 budget.xlsx"])
def test_unmatched_titles_are_productive(title):
    assert categorize(title) is Category.PRODUCTIVE


def test_matching_is_case_insensitive():
    assert categorize("YouTube") is categorize("youtube") is Category.DISTRACTION


@pytest.mark.parametrize("title", [None, ""])
def test_missing_title_is_productive(title):
    assert categorize(title) is Category.PRODUCTIVE


def test_custom_keyword_lists():
    classifier = KeywordClassifier(learning_keywords=["Anki"], distraction_keywords=["chess"])

    assert classifier.categorize("ANKI review") is Category.LEARNING
    assert classifier.categorize("Chess.com") is Category.DISTRACTION
    assert classifier.categorize("Python docs") is Category.PRODUCTIVE
