"""Tests for support and resistance extraction."""

import pytest

from market_signals.data.provider import RandomWalkProvider
from market_signals.models import Instrument
from market_signals.technicals.levels import (
    calculate_key_levels,
    fallback_levels,
    find_swing_highs,
    find_swing_lows,
)


class TestSwingPoints:
    """Tests for swing high/low detection."""

    def test_single_peak(self):
        assert find_swing_highs([1.0, 2.0, 5.0, 2.0, 1.0]) == [5.0]

    def test_equal_neighbours_are_not_swings(self):
        assert find_swing_highs([1.0, 2.0, 3.0, 3.0, 2.0, 1.0]) == []
        assert find_swing_lows([3.0, 2.0, 1.0, 1.0, 2.0, 3.0]) == []

    def test_edges_are_ignored(self):
        """The first and last two bars cannot be swings."""
        assert find_swing_highs([9.0, 1.0, 2.0, 1.0, 9.0]) == []

    def test_single_trough(self):
        assert find_swing_lows([5.0, 4.0, 1.0, 4.0, 5.0]) == [1.0]


class TestKeyLevels:
    """Tests for calculate_key_levels."""

    def test_short_series_uses_fallback(self, make_bars):
        bars = make_bars([100.0, 101.0, 99.0, 100.0, 100.5])
        close = bars[-1].close
        levels = calculate_key_levels(bars)

        assert levels.support == [close * 0.98, close * 0.95]
        assert levels.resistance == [close * 1.02, close * 1.05]

    def test_single_bar(self, make_bars):
        assert calculate_key_levels(make_bars([200.0])) == fallback_levels(200.0)

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            calculate_key_levels([])

    def test_swing_levels(self, zigzag_bars):
        levels = calculate_key_levels(zigzag_bars)

        assert levels.resistance == [110.0, 112.0]
        assert levels.support == [92.0, 90.0]

    def test_no_swings_pads_both_sides(self, make_bars):
        bars = make_bars([100.0 + i for i in range(20)])
        close = bars[-1].close
        levels = calculate_key_levels(bars)

        assert levels.resistance == [close * 1.02, close * 1.05]
        assert levels.support == [close * 0.98, close * 0.95]

    def test_single_genuine_level_is_padded_and_sorted(self, zigzag_bars):
        """Only the 112 swing is above a 111 close."""
        bars = zigzag_bars[:-1] + [zigzag_bars[-1].model_copy(update={"close": 111.0})]
        levels = calculate_key_levels(bars)

        assert levels.resistance == [112.0, 111.0 * 1.02, 111.0 * 1.05]
        assert levels.support == [92.0, 90.0]

    def test_to_dict(self, zigzag_bars):
        assert calculate_key_levels(zigzag_bars).to_dict() == {
            "S1": 92.0,
            "S2": 90.0,
            "R1": 110.0,
            "R2": 112.0,
        }

    @pytest.mark.parametrize("seed", [1, 2, 3, 11, 42])
    def test_invariants_on_random_walks(self, seed):
        series = RandomWalkProvider(seed=seed, days=120).get_series(Instrument.XAU_USD)
        price = series.last_close
        levels = calculate_key_levels(series)

        assert 2 <= len(levels.support) <= 3
        assert 2 <= len(levels.resistance) <= 3
        assert all(s < price for s in levels.support)
        assert all(r > price for r in levels.resistance)
        assert levels.support == sorted(levels.support, reverse=True)
        assert levels.resistance == sorted(levels.resistance)
