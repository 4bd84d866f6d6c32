"""
Tests for property binding: resolve as range, resolve as curve
"""

import pytest

from models.emitter import EmitterConfig
from particle.property import ParticleProperty, PropertyCurve, RangeProperty
from particle.value_parser import ValueParser


class TestResolveRange:
    """Spawn-time single values."""

    def test_range_draw(self, midpoint_sampler):
        alpha = ParticleProperty.from_string("ParticleAlpha", "[0.7 0.9]")
        assert alpha.resolve_range(midpoint_sampler) == pytest.approx(0.8)
        assert alpha.is_defined
        assert not alpha.is_animated

    def test_keyframes_use_first_value(self, midpoint_sampler):
        prop = ParticleProperty.from_string("ParticleAlpha", "1,95 0")
        assert prop.resolve_range(midpoint_sampler) == 1.0

    def test_hybrid_draws_from_range(self, fixed_sampler):
        spin = ParticleProperty.from_string("ParticleSpinSpeed", "[-720 720] 0,39.999996")
        assert spin.resolve_range(fixed_sampler(0.75)) == pytest.approx(360.0)

    def test_missing_value(self, midpoint_sampler):
        prop = ParticleProperty.from_string("LaunchSpeed", None)
        assert not prop.is_defined
        assert prop.resolve_range(midpoint_sampler) == 0.0


class TestResolveCurve:
    """Per-particle curves evaluated over normalized age."""

    def test_constant_curve(self, midpoint_sampler):
        curve = ParticleProperty.from_string("ParticleScale", "[1 3]").resolve_curve(midpoint_sampler)
        assert curve.is_constant
        assert curve.value_at(0.7) == 2.0

    def test_keyframe_curve(self, midpoint_sampler):
        curve = ParticleProperty.from_string("ParticleAlpha", "1,95 0").resolve_curve(midpoint_sampler)
        assert not curve.is_constant
        assert curve.value_at(0.5) == pytest.approx(1.0)
        assert curve.value_at(0.975) == pytest.approx(0.5)

    def test_hybrid_prepends_sample(self, fixed_sampler):
        spin = ParticleProperty.from_string("ParticleSpinSpeed", "[-720 720] 0,39.999996")
        curve = spin.resolve_curve(fixed_sampler(0.75))

        assert len(curve.keyframes) == 2
        assert curve.value_at(0.0) == pytest.approx(360.0)
        assert curve.value_at(0.2) == pytest.approx(180.0, rel=1e-6)
        assert curve.value_at(0.5) == 0.0

    def test_hybrid_starting_at_zero_not_prepended(self, midpoint_sampler):
        prop = ParticleProperty.from_string("ParticleScale", "[1 2] 5,0 0,1")
        curve = prop.resolve_curve(midpoint_sampler)
        assert [kf.time for kf in curve.keyframes] == [0.0, 1.0]
        assert curve.value_at(0.0) == 5.0

    def test_interpolation_carried(self, midpoint_sampler):
        curve = ParticleProperty.from_string("ParticleScale", "0,0 EaseIn 1,10").resolve_curve(midpoint_sampler)
        assert curve.value_at(0.5) == pytest.approx(2.5)

    def test_custom_parser(self, midpoint_sampler):
        parser = ValueParser(sampler=midpoint_sampler)
        prop = ParticleProperty.from_string("ParticleScale", "[.4 .6] [.8 1.2]", parser)
        assert prop.is_animated
        assert prop.resolve_curve(midpoint_sampler).value_at(1.0) == pytest.approx(0.4)

    def test_empty_curve_constant(self):
        assert PropertyCurve().value_at(0.3) == 0.0


class TestRangeProperty:
    """Emitter boxes with moving min and width."""

    def test_moving_box(self, midpoint_sampler):
        box = RangeProperty.from_string("EmitterBoxX", "[-130 0] [-100 0]")
        assert box.is_animated
        assert box.min_at(0.0) == -130.0
        assert box.min_at(1.0) == -100.0
        assert box.min_at(0.5) == pytest.approx(-115.0)
        assert box.width_at(0.5) == pytest.approx(115.0)
        assert box.max_at(0.0) == 0.0
        assert box.max_at(1.0) == 0.0
        assert box.sample_at(0.5, midpoint_sampler) == pytest.approx(-57.5)

    def test_static_box(self):
        box = RangeProperty.from_string("EmitterBoxY", "[10 20]")
        assert not box.is_animated
        assert box.min_at(0.3) == 10.0
        assert box.width_at(0.3) == 10.0
        assert box.max_at(0.3) == 20.0

    def test_missing_box(self):
        box = RangeProperty.from_string("EmitterBoxY", None)
        assert box.max_at(0.5) == 0.0


class TestEmitterBinding:

    def test_get_property(self, midpoint_sampler):
        emitter = EmitterConfig(name="Ray", properties={"ParticleAlpha": "[0.7 0.9]", "EmitterBoxX": "[0 10] [0 20]"})

        alpha = emitter.get_property("ParticleAlpha")
        box = emitter.get_range_property("EmitterBoxX")
        missing = emitter.get_property("ParticleRed")

        assert alpha.name == "ParticleAlpha"
        assert alpha.resolve_range(midpoint_sampler) == pytest.approx(0.8)
        assert box.width_at(1.0) == 20.0
        assert missing.result.is_zero
