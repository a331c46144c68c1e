"""
Test cases for stack capture.
"""

from .callers import INSTRUCTION_SIZE, callers


def recurse(depth: int, limit: int):
    if depth <= 0:
        return callers(1, limit)
    return recurse(depth - 1, limit)


class TestCallers:
    """Test cases for callers."""

    def test_skip_zero_starts_at_callers(self):
        """Test that skip 0 records the frame of callers itself."""
        stack = callers(0, 1)

        assert len(stack) == 1
        assert stack[0].code is callers.__code__

    def test_skip_one_starts_at_caller(self):
        """Test that skip 1 records the calling function first."""
        stack = callers(1, 2)

        assert stack[0].code is self.test_skip_one_starts_at_caller.__code__
        assert stack[0].offset > 0
        assert stack[0].offset % INSTRUCTION_SIZE == 0

    def test_order_is_innermost_first(self):
        """Test that captured program counters go from callee to caller."""
        stack = recurse(2, 10)

        assert [pc.code for pc in stack[:3]] == [recurse.__code__] * 3
        assert stack[3].code is self.test_order_is_innermost_first.__code__

    def test_limit_bounds_result(self):
        """Test that deep call chains are truncated at the limit."""
        stack = recurse(30, 5)

        assert len(stack) == 5

    def test_non_positive_limit(self):
        """Test that a non-positive limit captures nothing."""
        assert callers(1, 0) == []
        assert callers(1, -3) == []

    def test_skip_beyond_stack(self):
        """Test that skipping past the outermost frame captures nothing."""
        assert callers(100000, 10) == []

    def test_negative_skip(self):
        """Test that a negative skip captures nothing."""
        assert callers(-1, 10) == []
