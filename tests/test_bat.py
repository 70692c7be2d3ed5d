"""
Tests for BAT scoring.

Run with: pytest tests/test_bat.py -v
"""

import random

import pytest

from scoring.bat import (
    CUTOFFS,
    TOTAL_CUTOFF,
    Band,
    BATScorer,
    Catalog,
    Cutoff,
    IncompleteInput,
    Subscale,
    classify,
    compute_mean,
    compute_overall_mean,
    compute_subscale_means,
    cutoff_for,
    missing_items,
    round2,
    score_responses,
    validate_complete,
)


class TestCatalog:
    """Static item catalogs shipped under surveys/."""

    def test_bat23_layout(self, bat23):
        assert bat23.n_items == 23
        assert bat23.subscales == (
            Subscale.EXHAUSTION,
            Subscale.MENTAL_DISTANCE,
            Subscale.COGNITIVE,
            Subscale.EMOTIONAL,
        )
        assert [bat23.count(s) for s in bat23.subscales] == [8, 5, 5, 5]

    def test_bat33_has_secondary_group(self, bat33):
        assert bat33.n_items == 33
        assert bat33.subscales[-1] == Subscale.SECONDARY
        assert bat33.count(Subscale.SECONDARY) == 10

    def test_item_positions_are_one_based(self, bat23):
        assert [it.no for it in bat23.items] == list(range(1, 24))

    def test_slices_cover_vector(self, bat23, bat33):
        for catalog in (bat23, bat33):
            slices = catalog.slices()
            assert slices[0][1].start == 0
            assert slices[-1][1].stop == catalog.n_items
            for (_, a), (_, b) in zip(slices, slices[1:]):
                assert a.stop == b.start
            assert sum(sl.stop - sl.start for _, sl in slices) == catalog.n_items

    def test_choices_are_likert(self, bat23):
        assert [score for _, score in bat23.choices] == [1, 2, 3, 4, 5]
        assert bat23.choices[0][0] == "Never"

    def test_unknown_subscale_rejected(self):
        doc = {"key": "X", "items": [{"domain": "fatigue", "text": "t"}]}
        with pytest.raises(ValueError, match="unknown subscale"):
            Catalog.from_document(doc)

    def test_non_contiguous_subscale_rejected(self):
        doc = {"key": "X", "items": [
            {"domain": "exhaustion", "text": "a"},
            {"domain": "cognitive", "text": "b"},
            {"domain": "exhaustion", "text": "c"},
        ]}
        with pytest.raises(ValueError, match="not contiguous"):
            Catalog.from_document(doc)

    def test_empty_catalog_rejected(self):
        with pytest.raises(ValueError, match="no items"):
            Catalog.from_document({"key": "X", "items": []})


class TestMeans:

    def test_compute_mean(self):
        assert compute_mean([1, 2, 3, 4]) == 2.5

    def test_compute_mean_empty(self):
        with pytest.raises(ValueError):
            compute_mean([])

    def test_round_half_away_from_zero(self):
        assert round2(3.125) == 3.13
        assert round2(2.625) == 2.63
        assert round2(2.675) == 2.68
        assert round2(-1.005) == -1.01
        assert round2(3.0) == 3.0

    def test_subscale_means(self, bat23):
        responses = [1, 2, 3, 4, 5, 1, 2, 3] + [5] * 5 + [1, 1, 1, 1, 2] + [2] * 5
        means = compute_subscale_means(responses, bat23)
        assert means == {
            Subscale.EXHAUSTION: 2.63,
            Subscale.MENTAL_DISTANCE: 5.0,
            Subscale.COGNITIVE: 1.2,
            Subscale.EMOTIONAL: 2.0,
        }

    def test_overall_mean_rounded(self):
        # 70 / 23 = 3.0434...
        responses = [3] * 22 + [4]
        assert compute_overall_mean(responses) == 3.04

    @pytest.mark.parametrize("seed", range(20))
    def test_overall_mean_within_scale(self, bat23, bat33, seed):
        rng = random.Random(seed)
        for catalog in (bat23, bat33):
            responses = [rng.randint(1, 5) for _ in range(catalog.n_items)]
            total = compute_overall_mean(responses)
            assert 1.0 <= total <= 5.0


class TestClassify:

    def test_boundaries_inclusive_on_lower_band(self):
        cut = Cutoff(green_max=2.58, orange_max=3.01)
        assert classify(2.58, cut) == Band.GREEN
        assert classify(2.59, cut) == Band.ORANGE
        assert classify(3.01, cut) == Band.ORANGE
        assert classify(3.02, cut) == Band.RED

    def test_monotonic(self):
        for cut in list(CUTOFFS.values()) + [TOTAL_CUTOFF]:
            bands = [classify(v / 100, cut) for v in range(100, 501)]
            assert bands == sorted(bands)

    def test_band_order(self):
        assert Band.GREEN < Band.ORANGE < Band.RED
        assert Band.ORANGE.label == "Orange"

    def test_secondary_falls_back_to_total(self):
        assert Subscale.SECONDARY not in CUTOFFS
        assert cutoff_for(Subscale.SECONDARY) is TOTAL_CUTOFF
        assert cutoff_for(Subscale.EXHAUSTION) == Cutoff(3.05, 3.30)

    def test_inverted_cutoff_rejected(self):
        with pytest.raises(ValueError):
            Cutoff(green_max=3.0, orange_max=2.0)


class TestValidation:

    def test_complete(self):
        assert validate_complete([1, 2, 3, 4, 5])

    def test_unanswered(self):
        assert not validate_complete([1, 0, 3])
        assert not validate_complete([1, None, 3])

    def test_out_of_range(self):
        assert not validate_complete([1, 6])
        assert not validate_complete([1, -1])

    def test_non_integer(self):
        assert not validate_complete([1, 2.5])
        assert not validate_complete([True, 2])

    def test_missing_items_positions(self):
        assert missing_items([3, 0, 3, 7, 3]) == [2, 4]


class TestScoreResponses:

    def test_all_threes_bat23(self, bat23):
        result = score_responses([3] * 23, bat23)
        assert result.total == 3.0
        assert result.total_band == Band.ORANGE
        assert result.get(Subscale.EXHAUSTION).mean == 3.0
        assert result.get(Subscale.EXHAUSTION).band == Band.GREEN
        assert result.get(Subscale.MENTAL_DISTANCE).band == Band.ORANGE
        assert result.get(Subscale.COGNITIVE).band == Band.ORANGE
        assert result.get(Subscale.EMOTIONAL).band == Band.RED

    def test_subscale_values_kept_in_order(self, bat23):
        responses = list(range(1, 6)) * 4 + [1, 2, 3]
        result = score_responses(responses, bat23)
        assert result.get(Subscale.EXHAUSTION).values == tuple(responses[:8])
        assert result.get(Subscale.EMOTIONAL).values == tuple(responses[18:])
        assert result.responses == tuple(responses)

    def test_secondary_uses_total_cutoff(self, bat33):
        result = score_responses([3] * 23 + [5] * 10, bat33)
        secondary = result.get(Subscale.SECONDARY)
        assert secondary.mean == 5.0
        assert secondary.band == Band.RED
        # 23*3 + 10*5 = 119, 119 / 33 = 3.606...
        assert result.total == 3.61

    def test_unanswered_item_raises(self, bat23):
        responses = [3] * 23
        responses[4] = 0
        with pytest.raises(IncompleteInput) as exc:
            score_responses(responses, bat23)
        assert exc.value.missing == [5]
        assert exc.value.n_items == 23
        assert str(exc.value) == "Please answer all 23 items."

    def test_short_vector_raises(self, bat23):
        with pytest.raises(IncompleteInput) as exc:
            score_responses([3] * 22, bat23)
        assert exc.value.missing == [23]

    def test_idempotent(self, bat23):
        rng = random.Random(7)
        responses = [rng.randint(1, 5) for _ in range(23)]
        assert score_responses(responses, bat23) == score_responses(responses, bat23)

    def test_scorer_class(self, bat23):
        assert BATScorer().score([1] * 23, bat23).total_band == Band.GREEN
