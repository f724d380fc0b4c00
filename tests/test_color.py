"""Unit tests for RGB radiance values."""

import pytest


class TestRGB:
    def test_componentwise_product(self):
        from src.spheretracer.core.color import RGB

        assert RGB(1.0, 0.5, 0.25) * RGB(0.5, 0.5, 4.0) == RGB(0.5, 0.25, 1.0)

    def test_scalar_product(self):
        from src.spheretracer.core.color import RGB

        assert RGB(1.0, 0.5, 0.25) * 2.0 == RGB(2.0, 1.0, 0.5)
        assert 2.0 * RGB(1.0, 0.5, 0.25) == RGB(2.0, 1.0, 0.5)

    def test_addition(self):
        from src.spheretracer.core.color import RGB

        assert RGB(1.0, 0.0, 0.5) + RGB(0.5, 2.0, 0.5) == RGB(1.5, 2.0, 1.0)

    def test_channels_are_unbounded(self):
        from src.spheretracer.core.color import RGB

        assert (RGB(3.0, 4.0, 5.0) * 10.0).to_tuple() == (30.0, 40.0, 50.0)

    def test_all_below(self):
        """Every channel must be strictly below the threshold."""
        from src.spheretracer.core.color import RGB

        assert RGB(0.005, 0.009, 0.0).all_below(0.01)
        assert not RGB(0.005, 0.01, 0.0).all_below(0.01)
        assert not RGB(0.5, 0.0, 0.0).all_below(0.01)

    def test_from_sequence_rejects_wrong_length(self):
        from src.spheretracer.core.color import RGB

        with pytest.raises(ValueError):
            RGB.from_sequence([1.0, 2.0, 3.0, 4.0])
