"""Tests for the render_spheres command-line options.

Tests cover:
- --max-depth parsing: integers keep RenderSettings.max_depth meaning,
  "none" removes the cap, negatives and junk are rejected
"""

import argparse

import pytest


class TestMaxDepthOption:
    def test_default_is_sixty_four(self):
        from examples.render_spheres import parse_args

        assert parse_args([]).max_depth == 64

    def test_zero_means_direct_emission_only(self):
        from examples.render_spheres import parse_args
        from src.spheretracer.core.integrator import RenderSettings

        args = parse_args(["--max-depth", "0"])

        assert args.max_depth == 0
        assert RenderSettings(max_depth=args.max_depth).max_depth == 0

    @pytest.mark.parametrize("value", ["none", "None", "NONE"])
    def test_none_disables_the_cap(self, value):
        from examples.render_spheres import parse_args

        assert parse_args(["--max-depth", value]).max_depth is None

    @pytest.mark.parametrize("value", ["-1", "deep", "1.5"])
    def test_rejects_invalid_values(self, value):
        from examples.render_spheres import parse_max_depth

        with pytest.raises(argparse.ArgumentTypeError):
            parse_max_depth(value)

    def test_invalid_value_exits_with_usage_error(self):
        from examples.render_spheres import parse_args

        with pytest.raises(SystemExit):
            parse_args(["--max-depth", "-3"])
