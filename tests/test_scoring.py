"""Unit tests for the learning-efficiency score."""

from __future__ import annotations

import pytest

from commute_pack.rule_based.scoring import (
    TAG_FUNDAMENTALS,
    TAG_OFFICIAL_DOCS,
    TAG_WORK_RELEVANCE,
    compute_efficiency_score,
    score_units,
)
from commute_pack.service.pipeline import rank_by_efficiency

from .conftest import make_pack


class TestTimeBonus:
    """Tests for the time-window bonus."""

    @pytest.mark.parametrize(
        ("minutes", "expected"),
        [(4, 1.0), (5, 1.2), (15, 1.2), (16, 1.1), (25, 1.1), (26, 1.0), (40, 1.0)],
    )
    def test_window_boundaries(self, minutes: int, expected: float) -> None:
        score, feats = compute_efficiency_score(make_pack("p", minutes))
        assert score == pytest.approx(expected)
        assert feats["tag"] == 0.0


class TestTagBonus:
    """Tests for the tag bonuses."""

    def test_work_relevance(self) -> None:
        score, feats = compute_efficiency_score(make_pack("p", 30, [TAG_WORK_RELEVANCE]))
        assert feats["tag"] == pytest.approx(0.3)
        assert score == pytest.approx(1.3)

    def test_bonuses_are_additive(self) -> None:
        tags = [TAG_WORK_RELEVANCE, TAG_FUNDAMENTALS, TAG_OFFICIAL_DOCS]
        score, feats = compute_efficiency_score(make_pack("p", 10, tags))
        assert feats["tag"] == pytest.approx(0.7)
        assert score == pytest.approx(1.9)

    def test_unrelated_tags_ignored(self) -> None:
        score, _ = compute_efficiency_score(make_pack("p", 30, ["React", "i18n"]))
        assert score == pytest.approx(1.0)

    @pytest.mark.parametrize("tag", [TAG_WORK_RELEVANCE, TAG_FUNDAMENTALS, TAG_OFFICIAL_DOCS])
    def test_adding_tag_never_lowers_rank(self, tag: str) -> None:
        """A pack with a qualifying tag ranks at least as high as its twin without it."""
        plain = make_pack("plain", 10, ["React"])
        tagged = make_pack("tagged", 10, ["React", tag])
        ranked = rank_by_efficiency([plain, tagged])
        assert [p.id for p in ranked] == ["tagged", "plain"]


class TestRankByEfficiency:
    """Tests for score ordering."""

    def test_ties_keep_input_order(self) -> None:
        packs = [make_pack("first", 10), make_pack("second", 12), make_pack("third", 14)]
        assert [p.id for p in rank_by_efficiency(packs)] == ["first", "second", "third"]

    @pytest.mark.parametrize(
        ("first", "second"),
        [
            (make_pack("P", 10, [TAG_FUNDAMENTALS]), make_pack("Q", 20, [TAG_WORK_RELEVANCE])),
            (make_pack("P", 20, [TAG_WORK_RELEVANCE]), make_pack("Q", 10, [TAG_OFFICIAL_DOCS])),
        ],
    )
    def test_ties_from_different_bonuses_keep_input_order(self, first, second) -> None:
        """Totals reached through different bonus mixes still compare equal."""
        assert compute_efficiency_score(first)[0] == compute_efficiency_score(second)[0]
        assert score_units(first) == score_units(second) == 14
        assert [p.id for p in rank_by_efficiency([first, second])] == ["P", "Q"]

    def test_descending(self) -> None:
        packs = [make_pack("long", 40), make_pack("mid", 20), make_pack("short", 10)]
        assert [p.id for p in rank_by_efficiency(packs)] == ["short", "mid", "long"]
