"""Keyword classification of window titles."""

from __future__ import annotations

from typing import Iterable, Optional

from .models import Category

LEARNING_KEYWORDS: tuple[str, ...] = (
    "code",
    "vscode",
    "python",
    "tutorial",
    "docs",
    "stackoverflow",
    "github",
    "udemy",
    "coursera",
    "documentation",
    "java",
    "javascript",
    "html",
    "css",
    "react",
    "node",
    "programming",
    "leetcode",
    "hackerrank",
)

DISTRACTION_KEYWORDS: tuple[str, ...] = (
    "netflix",
    "youtube",
    "facebook",
    "instagram",
    "reddit",
    "tiktok",
    "gaming",
    "twitch",
    "spotify",
    "twitter",
    "reels",
    "comedy",
    "trailer",
    "movie",
    "series",
    "meme",
    "snapchat",
)


class KeywordClassifier:
    """Map window titles to a category by keyword substring matching.

    Learning keywords are checked before distraction keywords, so a title
    matching both lists is classified as learning. Titles matching neither
    list are productive.
    """

    def __init__(
        self,
        learning_keywords: Iterable[str] = LEARNING_KEYWORDS,
        distraction_keywords: Iterable[str] = DISTRACTION_KEYWORDS,
    ) -> None:
        self.learning_keywords = tuple(k.lower() for k in learning_keywords if k)
        self.distraction_keywords = tuple(k.lower() for k in distraction_keywords if k)

    def categorize(self, title: Optional[str]) -> Category:
        text = (title or "").lower()
        if any(keyword in text for keyword in self.learning_keywords):
            return Category.LEARNING
        if any(keyword in text for keyword in self.distraction_keywords):
            return Category.DISTRACTION
        return Category.PRODUCTIVE


_default_classifier = KeywordClassifier()


def categorize(title: Optional[str]) -> Category:
    """Classify a title with the built-in keyword lists."""
    return _default_classifier.categorize(title)
