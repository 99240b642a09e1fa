"""Unit tests for terminal report renderables."""

from src.ui.report import value_chart


class TestValueChart:
    """Tests for the simulated value chart."""

    def test_empty_series(self):
        """Test an empty series renders a placeholder."""
        assert value_chart([], 1000.0).plain == "Nothing to chart"

    def test_short_series_keeps_every_day(self):
        """Test a short horizon plots one column per day."""
        values = [1000.0 + i for i in range(10)]
        lines = value_chart(values, 1000.0).plain.splitlines()

        assert len(lines) == 11
        assert "1,009.00" in lines[0]

    def test_long_series_is_thinned(self):
        """Test a multi-year horizon stays within terminal width."""
        values = [1000.0 + i * 0.5 for i in range(400)]
        lines = value_chart(values, 1000.0).plain.splitlines()

        assert max(len(line) for line in lines) < 100
        assert "1,199.50" in lines[0]
