import sys
from datetime import timedelta
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from freelance_radar.core.models import FeedItem  # noqa: E402
from freelance_radar.processors.scorer import keyword_score, recency_multiplier, relevance_score  # noqa: E402


def make_item(now, *, title="Facturation", content="...", days_old=2, is_question=False, region="france"):
    return FeedItem(
        title=title,
        link="https://example.fr/post",
        raw_content=content,
        cleaned_content=content,
        published_at=now - timedelta(days=days_old),
        formatted_age="",
        source_name="Test",
        is_question=is_question,
        region=region,
    )


def test_keyword_terms_count_two_points_each(fixed_now):
    item = make_item(fixed_now, title="Facturation", content="client, client et encore un client")
    # 3 occurrences x 2, fresh item x 2
    assert relevance_score(item, "client", now=fixed_now) == pytest.approx(12.0)


def test_every_term_contributes():
    assert keyword_score("trouver des clients freelance", "clients freelance") == 4
    assert keyword_score("trouver des clients", "clients freelance") == 2
    assert keyword_score("rien à voir", "clients freelance") == 0


def test_title_phrase_bonus(fixed_now):
    with_phrase = make_item(fixed_now, title="Trouver des clients freelance")
    without_phrase = make_item(fixed_now, title="Trouver des freelance clients")
    # terms: 2 + 2, phrase bonus 10, fresh x2
    assert relevance_score(with_phrase, "clients freelance", now=fixed_now) == pytest.approx(28.0)
    assert relevance_score(without_phrase, "clients freelance", now=fixed_now) == pytest.approx(8.0)


def test_question_bonus(fixed_now):
    item = make_item(fixed_now, is_question=True)
    assert relevance_score(item, "introuvable", now=fixed_now) == pytest.approx(30.0)


def test_location_multiplier_only_for_france_when_location_given(fixed_now):
    item = make_item(fixed_now, is_question=True)
    other = make_item(fixed_now, is_question=True, region="belgique")
    assert relevance_score(item, "x", "Paris", now=fixed_now) == pytest.approx(60.0)
    assert relevance_score(item, "x", "", now=fixed_now) == pytest.approx(30.0)
    assert relevance_score(other, "x", "Paris", now=fixed_now) == pytest.approx(30.0)


@pytest.mark.parametrize(
    "days_old,expected",
    [
        (0, 2.0),
        (7, 2.0),
        (15, 0.5),
        (24, 0.2),
        (30, 0.0),
        (31, 0.1),
        (365, 0.1),
    ],
)
def test_recency_multiplier(fixed_now, days_old, expected):
    assert recency_multiplier(fixed_now - timedelta(days=days_old), fixed_now) == pytest.approx(expected)


def test_no_match_and_no_question_scores_zero(fixed_now):
    item = make_item(fixed_now, title="Bilan", content="Tout va bien")
    assert relevance_score(item, "clients", "Lyon", now=fixed_now) == 0.0


def test_score_never_negative(fixed_now):
    for days_old in (-3, 0, 10, 29.9, 30, 45, 400):
        item = make_item(fixed_now, days_old=days_old, is_question=True)
        assert relevance_score(item, "", "", now=fixed_now) >= 0


def test_score_monotone_in_term_occurrences(fixed_now):
    scores = []
    for count in range(6):
        item = make_item(fixed_now, content=" ".join(["devis"] * count) or "vide", is_question=True)
        scores.append(relevance_score(item, "devis", "Paris", now=fixed_now))
    assert scores == sorted(scores)
    assert scores[-1] > scores[0]


def test_blank_keyword_gets_no_title_bonus(fixed_now):
    item = make_item(fixed_now, title="Titre")
    assert relevance_score(item, "   ", now=fixed_now) == 0.0
