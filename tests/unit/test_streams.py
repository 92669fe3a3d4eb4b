"""Tests for activity.streams — synthetic arrivals and feeding counters."""

from __future__ import annotations

import logging

import pytest

from activity.counter import Counter
from activity.streams import feed, periodic_arrivals, poisson_arrivals


class TestPeriodicArrivals:
    def test_spacing(self) -> None:
        assert periodic_arrivals(2.0, 3, start=10.0) == [10.0, 10.5, 11.0]

    def test_empty(self) -> None:
        assert periodic_arrivals(1.0, 0) == []

    @pytest.mark.parametrize("rate", [0.0, -1.0])
    def test_non_positive_rate_raises(self, rate: float) -> None:
        with pytest.raises(ValueError, match="rate_hz"):
            periodic_arrivals(rate, 5)

    def test_negative_count_raises(self) -> None:
        with pytest.raises(ValueError, match="count"):
            periodic_arrivals(1.0, -1)


class TestPoissonArrivals:
    def test_length_and_start(self) -> None:
        stamps = poisson_arrivals(3.0, 50, start=100.0, seed=7)
        assert len(stamps) == 50
        assert stamps[0] == 100.0

    def test_sorted(self) -> None:
        stamps = poisson_arrivals(3.0, 500, seed=7)
        assert stamps == sorted(stamps)

    def test_seed_is_deterministic(self) -> None:
        assert poisson_arrivals(1.0, 20, seed=3) == poisson_arrivals(1.0, 20, seed=3)

    def test_empty(self) -> None:
        assert poisson_arrivals(1.0, 0, seed=1) == []

    def test_mean_gap_matches_rate(self) -> None:
        stamps = poisson_arrivals(4.0, 20_001, seed=11)
        mean_gap = (stamps[-1] - stamps[0]) / 20_000
        assert mean_gap == pytest.approx(0.25, rel=0.05)


class TestFeed:
    def test_returns_same_counter(self) -> None:
        c = Counter(tau=60.0)
        assert feed(c, [1.0, 2.0]) is c
        assert c.timestamp == 2.0

    def test_weighted_events(self) -> None:
        c = feed(Counter(tau=60.0), [5.0, 5.0], count=3)
        assert c.value == 6.0

    def test_poisson_stream_estimates_rate(self) -> None:
        c = feed(Counter(tau=60.0), poisson_arrivals(5.0, 20_000, seed=42))
        assert c.hz() == pytest.approx(5.0, rel=0.2)

    def test_logs_out_of_order_count(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="activity.streams"):
            feed(Counter(tau=60.0), [10.0, 20.0, 15.0])
        assert "Fed 3 events (1 out of order)" in caplog.text
