#!/usr/bin/env python3
"""
Validation tests for the numeric kernels, friction factor and output helpers.
"""

import sys
import os
import math

import pytest
from scipy.optimize import brentq

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
from pytwophase.shared_fns import (bisect_solve, fixed_point_solve, newton_solve, fanning,
                                   dukler_ftp_ratio, no_slip_density, velocity_head)
from pytwophase.exceptions import NonConvergence, SingularDerivative, InvalidReynolds, TwoPhaseError

# =============================================================================
# Bisection
# =============================================================================

def _square_less(args, x):
    return x ** 2 - args


def test_bisect_root_within_tolerance():
    """Returned midpoint lies within rtol of the root"""
    root = bisect_solve(2.0, _square_less, 0.0, 2.0, rtol=1e-6)
    assert abs(root - math.sqrt(2.0)) <= 1e-6, f"Bisection root {root} too far from sqrt(2)"


def test_bisect_matches_brentq():
    root = bisect_solve(5.0, _square_less, 1.0, 3.0, rtol=1e-8)
    ref = brentq(lambda x: _square_less(5.0, x), 1.0, 3.0, xtol=1e-12)
    assert abs(root - ref) <= 1e-8, f"Bisection {root} vs brentq {ref}"


def test_bisect_budget():
    with pytest.raises(NonConvergence):
        bisect_solve(2.0, _square_less, 0.0, 2.0, rtol=1e-12, max_iter=5)

# =============================================================================
# Damped fixed point
# =============================================================================

def _cosine(args, x):
    return math.cos(x)


def test_fixed_point_cosine():
    x = fixed_point_solve(None, _cosine, 1.0, rtol=1e-8)
    assert abs(x - 0.7390851332) < 1e-7, f"Fixed point of cos: {x}"


def test_fixed_point_nan_is_nonconvergence():
    with pytest.raises(NonConvergence) as e:
        fixed_point_solve(None, lambda args, x: math.nan, 0.5, max_iter=10)
    assert e.value.iterations == 10


def test_fixed_point_diverging():
    with pytest.raises(NonConvergence):
        fixed_point_solve(None, lambda args, x: x + 1.0, 0.0, max_iter=50)

# =============================================================================
# Damped Newton-Raphson
# =============================================================================

def test_newton_sqrt2():
    x = newton_solve(2.0, _square_less, lambda args, x: 2.0 * x, 1.0, rtol=1e-8)
    assert abs(x - math.sqrt(2.0)) < 1e-7, f"Newton root {x}"


def test_newton_singular_derivative():
    with pytest.raises(SingularDerivative):
        newton_solve(None, lambda args, x: x ** 2 + 1.0, lambda args, x: 2.0 * x, 0.0)


def test_newton_non_finite_residual():
    with pytest.raises(NonConvergence):
        newton_solve(None, lambda args, x: math.nan, lambda args, x: 1.0, 0.5)


def test_kernel_errors_are_value_errors():
    assert issubclass(NonConvergence, TwoPhaseError)
    assert issubclass(SingularDerivative, ValueError)

# =============================================================================
# Friction factor
# =============================================================================

def test_fanning_laminar():
    assert abs(fanning(1000.0, 0.0, 0.1) - 0.016) < 1e-12


def test_fanning_turbulent_smooth():
    """Chen smooth pipe at Re = 1e5 is close to Blasius 0.079 Re^-0.25"""
    f = fanning(1e5, 0.0, 0.1)
    assert 0.004 < f < 0.005, f"Fanning factor {f}"


def test_fanning_increases_with_roughness():
    assert fanning(1e6, 0.0005, 0.1) > fanning(1e6, 0.00001, 0.1)


def test_fanning_invalid_reynolds():
    for re in [0.0, -10.0, math.nan, math.inf]:
        with pytest.raises(InvalidReynolds):
            fanning(re, 0.0, 0.1)

# =============================================================================
# Output helpers
# =============================================================================

def test_dukler_ratio_single_phase():
    assert dukler_ftp_ratio(1.0) == 1.0
    assert dukler_ftp_ratio(0.1) > 1.0


def test_no_slip_density_limits():
    assert abs(no_slip_density(1.0, 1.0, 1000.0, 1000.0) - 1000.0) < 1e-9
    rho = no_slip_density(1000.0, 10.0, 1000.0, 1.0)
    assert 1.0 < rho < 1000.0


def test_velocity_head_and_erosion():
    head, ef = velocity_head(1000.0, 1.0)
    assert abs(head - 1000.0 / (2 * 9.81) / 1e4) < 1e-12
    assert abs(ef - 1000.0 * 0.062428 * 3.28084 ** 2 / 1e4) < 1e-12
