"""
Unit tests for curves module.
"""

import numpy as np
import pytest

from ratesrisk.curves import CurveBump, InterestRateCurve, create_curve
from ratesrisk.exceptions import TenorNotFoundError


class TestInterpolation:
    """Tests for linear spot-rate interpolation."""
    
    def test_exact_point(self, two_point_curve):
        """Discount factor at a stored tenor uses that tenor's rate."""
        df = two_point_curve.get_discount_factor(30)
        assert df == pytest.approx(np.exp(-0.02 * 30 / 360), rel=1e-14)
    
    def test_between_points(self, two_point_curve):
        """Midpoint blends the neighbouring rates linearly."""
        r_mid = (0.02 * 15 + 0.025 * 15) / 30
        assert two_point_curve.get_zero_rate(45) == pytest.approx(r_mid)
        assert two_point_curve.get_discount_factor(45) == pytest.approx(
            np.exp(-r_mid * 45 / 360), rel=1e-14
        )
    
    def test_pinned_to_zero_before_first_tenor(self, two_point_curve):
        """Between 0 and the first tenor the rate runs from 0 to r_1."""
        r_10 = 0.02 * 10 / 30
        assert two_point_curve.get_zero_rate(10) == pytest.approx(r_10)
        assert two_point_curve.get_discount_factor(10) == pytest.approx(
            np.exp(-r_10 * 10 / 360), rel=1e-14
        )
    
    def test_discount_factor_at_zero(self, two_point_curve):
        assert two_point_curve.get_discount_factor(0) == 1.0
    
    def test_flat_extrapolation(self, two_point_curve):
        """Beyond the last tenor the last rate is held flat."""
        assert two_point_curve.get_zero_rate(9999) == pytest.approx(0.025)
        assert two_point_curve.get_discount_factor(9999) == pytest.approx(
            np.exp(-0.025 * 9999 / 360), rel=1e-14
        )
    
    def test_last_point_exact(self, two_point_curve):
        assert two_point_curve.get_zero_rate(60) == pytest.approx(0.025)
    
    def test_single_point_curve(self):
        """One point: ramp from zero, then flat."""
        curve = create_curve({90: 0.04})
        assert curve.get_zero_rate(45) == pytest.approx(0.02)
        assert curve.get_zero_rate(90) == pytest.approx(0.04)
        assert curve.get_zero_rate(400) == pytest.approx(0.04)
    
    def test_zero_tenor_point(self):
        """A point at tenor 0 replaces the implicit zero anchor."""
        curve = create_curve({0: 0.01, 10: 0.02})
        assert curve.get_zero_rate(0) == pytest.approx(0.01)
        assert curve.get_zero_rate(5) == pytest.approx(0.015)
    
    def test_brackets_after_unordered_inserts(self):
        curve = create_curve({360: 0.03, 30: 0.01, 90: 0.02})
        assert curve.get_tenors() == [30, 90, 360]
        assert curve.get_zero_rate(89) == pytest.approx(0.01 + 0.01 * 59 / 60)
        assert curve.get_zero_rate(90) == pytest.approx(0.02)
        assert curve.get_zero_rate(91) == pytest.approx(0.02 + 0.01 / 270)
    
    def test_negative_rates(self):
        curve = create_curve({30: -0.005, 360: -0.001})
        assert curve.get_discount_factor(30) > 1.0
    
    def test_day_count_basis(self):
        curve = create_curve({365: 0.05}, day_count_basis=365)
        assert curve.get_discount_factor(365) == pytest.approx(np.exp(-0.05))
    
    def test_discount_factor_decreasing(self):
        curve = create_curve({30: 0.02, 180: 0.025, 360: 0.03, 1800: 0.035})
        dfs = [curve.get_discount_factor(t) for t in range(0, 2000, 50)]
        assert all(a > b for a, b in zip(dfs, dfs[1:]))
    
    def test_empty_curve_raises(self):
        with pytest.raises(RuntimeError):
            InterestRateCurve().get_discount_factor(10)
    
    def test_negative_tenor_raises(self, two_point_curve):
        with pytest.raises(ValueError):
            two_point_curve.get_discount_factor(-1)


class TestCurvePoints:
    """Tests for rate storage."""
    
    def test_add_rate_overwrites(self):
        curve = InterestRateCurve()
        curve.add_rate(30, 0.02)
        curve.add_rate(30, 0.03)
        assert curve.get_rate(30) == 0.03
        assert curve.get_tenors() == [30]
    
    def test_re_adding_same_rate_is_idempotent(self, two_point_curve):
        before = two_point_curve.get_discount_factor(45)
        two_point_curve.add_rate(30, 0.02)
        assert two_point_curve.get_discount_factor(45) == before
        assert len(two_point_curve) == 2
    
    def test_tenors_sorted_and_fresh(self):
        curve = create_curve({360: 0.03, 30: 0.01, 90: 0.02})
        tenors = curve.get_tenors()
        assert tenors == [30, 90, 360]
        tenors.append(9999)
        assert curve.get_tenors() == [30, 90, 360]
    
    def test_check_tenor(self, two_point_curve):
        assert two_point_curve.check_tenor(30)
        assert not two_point_curve.check_tenor(45)
    
    def test_negative_tenor_rejected(self):
        with pytest.raises(ValueError):
            InterestRateCurve().add_rate(-7, 0.01)
    
    def test_get_rate_missing(self, two_point_curve):
        with pytest.raises(TenorNotFoundError):
            two_point_curve.get_rate(45)


class TestCurveBump:
    """Tests for scoped, reversible bumps."""
    
    PROBES = [0, 10, 30, 45, 60, 100, 9999]
    
    def _dfs(self, curve):
        return [curve.get_discount_factor(t) for t in self.PROBES]
    
    def test_bump_tenor_applies_and_restores(self, two_point_curve):
        with two_point_curve.bump_tenor(30, 1e-4) as bump:
            assert isinstance(bump, CurveBump)
            assert two_point_curve.get_rate(30) == pytest.approx(0.0201)
            assert two_point_curve.get_rate(60) == 0.025
            assert two_point_curve.is_bumped
        assert two_point_curve.get_rate(30) == 0.02
        assert not two_point_curve.is_bumped
    
    def test_bump_curve_shifts_every_point(self, two_point_curve):
        with two_point_curve.bump_curve(-1e-4):
            assert two_point_curve.get_rate(30) == pytest.approx(0.0199)
            assert two_point_curve.get_rate(60) == pytest.approx(0.0249)
    
    def test_bump_tenor_neutral_bit_for_bit(self):
        curve = create_curve({7: 0.0013, 30: 0.0211, 90: 0.0337, 360: 0.0419})
        before = self._dfs(curve)
        for tenor in curve.get_tenors():
            for amount in (1e-4, -1e-4, 0.1):
                with curve.bump_tenor(tenor, amount):
                    pass
        assert self._dfs(curve) == before
    
    def test_bump_curve_neutral_bit_for_bit(self):
        curve = create_curve({7: 0.0013, 30: 0.0211, 90: 0.0337, 360: 0.0419})
        before = self._dfs(curve)
        for amount in (1e-4, -1e-4, 0.3):
            with curve.bump_curve(amount):
                assert self._dfs(curve) != before
        assert self._dfs(curve) == before
    
    def test_released_on_exception(self, two_point_curve):
        before = self._dfs(two_point_curve)
        with pytest.raises(ZeroDivisionError):
            with two_point_curve.bump_curve(0.01):
                1 / 0
        assert self._dfs(two_point_curve) == before
        assert not two_point_curve.is_bumped
    
    def test_explicit_release_once(self, two_point_curve):
        bump = two_point_curve.bump_tenor(60, 0.001)
        assert not bump.released
        bump.release()
        bump.release()
        assert bump.released
        assert two_point_curve.get_rate(60) == 0.025
    
    def test_nested_bumps_lifo(self, two_point_curve):
        with two_point_curve.bump_curve(0.001):
            with two_point_curve.bump_tenor(30, 0.002):
                assert two_point_curve.get_rate(30) == pytest.approx(0.023)
            assert two_point_curve.get_rate(30) == pytest.approx(0.021)
        assert two_point_curve.get_rate(30) == 0.02
    
    def test_out_of_order_release_raises(self, two_point_curve):
        outer = two_point_curve.bump_curve(0.001)
        inner = two_point_curve.bump_tenor(30, 0.002)
        with pytest.raises(RuntimeError):
            outer.release()
        inner.release()
        outer.release()
        assert two_point_curve.get_rate(30) == 0.02
    
    def test_bump_missing_tenor_raises(self, two_point_curve):
        with pytest.raises(TenorNotFoundError):
            two_point_curve.bump_tenor(45, 1e-4)
        assert not two_point_curve.check_tenor(45)
        assert not two_point_curve.is_bumped
    
    def test_add_rate_while_bumped_rejected(self, two_point_curve):
        with two_point_curve.bump_curve(1e-4):
            with pytest.raises(RuntimeError):
                two_point_curve.add_rate(90, 0.03)
