"""Tests for progress reporting."""

import pytest

from core.progress import ProgressReporter, completion_percentage


class TestCompletionPercentage:
    """Tests for completion_percentage."""

    def test_three_pages(self) -> None:
        assert [completion_percentage(i, 3) for i in (1, 2, 3)] == [33, 67, 100]

    def test_halves_round_up(self) -> None:
        """Test 12.5% is reported as 13, not banker's-rounded to 12."""
        assert completion_percentage(1, 8) == 13
        assert completion_percentage(1, 200) == 1

    @pytest.mark.parametrize("total", [1, 2, 7, 13, 99, 250])
    def test_sequence_is_monotonic_and_ends_at_100(self, total) -> None:
        sequence = [completion_percentage(i, total) for i in range(1, total + 1)]

        assert len(sequence) == total
        assert sequence == sorted(sequence)
        assert sequence[-1] == 100
        assert all(0 <= value <= 100 for value in sequence)

    def test_zero_total_rejected(self) -> None:
        with pytest.raises(ValueError):
            completion_percentage(0, 0)


class TestProgressReporter:
    """Tests for ProgressReporter."""

    def test_emits_each_step(self) -> None:
        received = []
        reporter = ProgressReporter(received.append, total=4)

        for _ in range(4):
            reporter.advance()

        assert received == [25, 50, 75, 100]
        assert reporter.last_percentage == 100

    def test_observer_failure_is_ignored(self, caplog) -> None:
        """Test that a failing observer does not interrupt reporting."""
        def broken(percentage: int) -> None:
            raise RuntimeError("display gone")

        reporter = ProgressReporter(broken, total=2)

        assert reporter.advance() == 50
        assert reporter.advance() == 100
        assert "display gone" in caplog.text

    def test_without_observer(self) -> None:
        reporter = ProgressReporter(None, total=1)
        assert reporter.advance() == 100
