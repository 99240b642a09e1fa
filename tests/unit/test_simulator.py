"""Unit tests for the simulation engine."""

from datetime import date, timedelta

import pytest

from src.core.models import LiquidityTier
from src.sandbox.engine import SimulationEngine
from src.sandbox.models import AllocationEntry, SimulationPosition
from src.sandbox.random_source import NumpyRandomSource


@pytest.fixture
def single_position():
    return {"X": SimulationPosition(amount=1000, apy=12, risk=3)}


class TestSimulationEngine:
    """Tests for SimulationEngine."""

    def test_day_count_and_dates(self, midpoint_random, single_position):
        """Test one record per day, dated consecutively."""
        start = date(2024, 1, 30)
        days = SimulationEngine(midpoint_random).simulate(single_position, days=5, start_date=start)

        assert len(days) == 5
        assert [d.date for d in days] == [start + timedelta(days=i) for i in range(5)]

    def test_defaults_to_today(self, midpoint_random, single_position):
        """Test the first day is today when no start date is given."""
        days = SimulationEngine(midpoint_random).simulate(single_position, days=2)
        assert days[0].date == date.today()

    def test_noise_free_compounding(self, midpoint_random, single_position):
        """Test value = amount * (1 + apy/365/100) ** (i + 1) when the noise term is zero."""
        days = SimulationEngine(midpoint_random).simulate(single_position, days=5)

        daily_return = 12 / 365
        for i, day in enumerate(days):
            expected = 1000 * (1 + daily_return / 100) ** (i + 1)
            assert day.total_value == pytest.approx(expected, abs=0.005)
            assert day.returns["X"].value == pytest.approx(expected, abs=0.005)
            assert day.returns["X"].return_pct == 0.0329

        assert days[0].total_value == 1000.33
        assert days[4].total_value == 1001.64

    def test_recomputes_from_principal(self, scripted_random, single_position):
        """Test each day uses a fresh draw against the original amount, not yesterday's value."""
        # Day 0 draws the top of the band, day 1 the bottom
        source = scripted_random([0.75, 0.25])
        days = SimulationEngine(source).simulate(single_position, days=2)

        up = 12 / 365 + 0.25 * 0.03 * 2
        down = 12 / 365 - 0.25 * 0.03 * 2
        assert days[0].total_value == pytest.approx(1000 * (1 + up / 100), abs=0.005)
        assert days[1].total_value == pytest.approx(1000 * (1 + down / 100) ** 2, abs=0.005)
        assert days[1].returns["X"].return_pct == pytest.approx(round(down, 4))

    def test_volatility_band(self, seeded_random):
        """Test daily returns stay within apy/365 +/- risk * 0.01."""
        allocation = {"Risky": SimulationPosition(amount=5000, apy=18.5, risk=9)}
        days = SimulationEngine(seeded_random).simulate(allocation, days=50)

        centre = 18.5 / 365
        for day in days:
            assert abs(day.returns["Risky"].return_pct - centre) <= 0.09 + 1e-4

    def test_total_is_sum_of_protocols(self, seeded_random):
        """Test total value adds up the per-protocol values."""
        allocation = {
            "A": SimulationPosition(amount=600, apy=6.8, risk=1),
            "B": SimulationPosition(amount=400, apy=12.8, risk=3),
        }
        for day in SimulationEngine(seeded_random).simulate(allocation, days=10):
            assert day.total_value == pytest.approx(sum(r.value for r in day.returns.values()), abs=0.01)
            assert day.total_value > 0

    def test_accepts_allocation_entries(self, midpoint_random):
        """Test allocation entries can be simulated directly."""
        entry = AllocationEntry(
            protocol="CoreDAO Staking", percentage=100.0, amount=2000.0,
            apy=12.8, risk=3, tvl=125_000_000, liquidity=LiquidityTier.HIGH,
        )
        days = SimulationEngine(midpoint_random).simulate({"CoreDAO Staking": entry}, days=3)

        assert len(days) == 3
        assert days[0].total_value > 2000

    def test_draws_per_day_and_protocol(self, scripted_random):
        """Test one draw per protocol per day."""
        source = scripted_random([0.5])
        allocation = {
            "A": SimulationPosition(amount=100, apy=5, risk=1),
            "B": SimulationPosition(amount=100, apy=5, risk=1),
        }
        SimulationEngine(source).simulate(allocation, days=4)

        assert source.calls == 8

    def test_reproducible_with_seed(self, single_position):
        """Test identical seeds give identical paths."""
        first = SimulationEngine(NumpyRandomSource(seed=7)).simulate(single_position, days=30)
        second = SimulationEngine(NumpyRandomSource(seed=7)).simulate(single_position, days=30)

        assert [d.to_dict() for d in first] == [d.to_dict() for d in second]

    def test_to_dict(self, midpoint_random, single_position):
        """Test serialized day layout."""
        day = SimulationEngine(midpoint_random).simulate(
            single_position, days=1, start_date=date(2024, 3, 1)
        )[0]

        assert day.to_dict() == {
            "date": "2024-03-01",
            "total_value": 1000.33,
            "daily_returns": {"X": {"value": 1000.33, "return": 0.0329}},
        }
