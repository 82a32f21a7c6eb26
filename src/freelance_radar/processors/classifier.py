"""Heuristic detection of help-seeking posts."""

from ..core.lexicons import INTERROGATIVE_WORDS, QUESTION_INDICATORS


def is_question(title: str, content: str) -> bool:
    """Return True when a post looks like a question or a request for help.

    Deliberately permissive: any lexicon hit, an interrogative first word in the
    title, or a literal ``?`` is enough. Scoring and the ranker's filters
    compensate for the low precision.
    """
    title = title or ""
    text = f"{title} {content or ''}".lower()

    if any(indicator in text for indicator in QUESTION_INDICATORS):
        return True
    if title.lower().startswith(INTERROGATIVE_WORDS):
        return True
    return "?" in text
