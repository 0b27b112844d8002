#!/usr/bin/env python3
"""
Validation tests for vertical down flow regime classification and models.
"""

import sys
import os
import math

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
from pytwophase.vertical_down import (VerticalDown, vertical_down_ratios, regime_from_ratios, film_velocity,
                                      curve_c_uls, critical_diameter, annular_model, slug_model)
from pytwophase.models import bubble_model, run_model
from pytwophase.classes import regime, orientation, ORIENTATION_REGIMES
from pytwophase.constants import GRAD_UNITS
from pytwophase.exceptions import DegenerateResult, NonConvergence
from pytwophase.state import ProcessState
from pytwophase.line import EXAMPLE_CASES


def _normalized(inputs, reg=None):
    state = ProcessState(**inputs)
    state.normalize()
    if reg is not None:
        state.regime = reg
    return state

# =============================================================================
# Classification
# =============================================================================

def test_annular_scenario_classifies_annular():
    line = VerticalDown(**EXAMPLE_CASES['down_annular'])
    assert line.classify() == regime.VD_ANNULAR
    assert line.ratios['A'] < 1.0, f"Ratio A {line.ratios['A']}"
    assert line.regime_label == "Annular Flow"


def test_ratios_reported():
    ratios = vertical_down_ratios(_normalized(EXAMPLE_CASES['down_annular']))
    assert set(ratios) == {'A', 'B', 'C', 'D', 'Dcrit'}
    assert ratios['Dcrit'] > 0


def test_critical_diameter():
    state = _normalized(EXAMPLE_CASES['down_annular'])
    drho = state.rho_l - state.rho_g
    expected = 4.36 ** 2 * math.sqrt(drho * state.sigma / state.rho_l ** 2 / 9.81)
    assert abs(critical_diameter(state) - expected) < 1e-12


def test_regime_tree():
    base = {'A': 2.0, 'B': 2.0, 'C': 2.0, 'D': 2.0, 'Dcrit': 0.1}
    assert regime_from_ratios(dict(base, A=1.0), 0.2) == regime.VD_ANNULAR
    assert regime_from_ratios(dict(base, D=1.0), 0.05) == regime.VD_SLUG
    assert regime_from_ratios(dict(base, C=0.5), 0.05) == regime.VD_SLUG
    # Curve B only applies above the critical diameter
    assert regime_from_ratios(dict(base, B=0.5), 0.2) == regime.VD_SLUG
    assert regime_from_ratios(dict(base, B=0.5), 0.05) == regime.VD_DISPERSED_BUBBLE
    assert regime_from_ratios(dict(base, C=math.inf), 0.2) == regime.VD_DISPERSED_BUBBLE


def test_film_velocity_failure_leaves_curve_a_unreachable():
    inputs = dict(EXAMPLE_CASES['annular'], wl=10.0, wg=1.0)
    with pytest.raises(NonConvergence):
        film_velocity(_normalized(inputs))
    line = VerticalDown(**inputs)
    reg = line.classify()
    assert reg in ORIENTATION_REGIMES[orientation.VD], f"Classified as {reg}"
    assert reg != regime.VD_ANNULAR
    assert line.ratios['A'] == math.inf


def test_negative_curve_c_velocity_is_slug_side():
    """Curve C mixture velocity below the vapor velocity gives a negative ratio"""
    state = _normalized(dict(EXAMPLE_CASES['down_annular'], wg=20000.0))
    u_gs, u_ls = state.superficial_velocities()
    assert curve_c_uls(state, u_gs) < 0.0
    ratios = vertical_down_ratios(state)
    assert ratios['C'] < 0.0
    assert regime_from_ratios(ratios, state.tid) in (regime.VD_ANNULAR, regime.VD_SLUG)
    assert regime_from_ratios(dict(ratios, A=2.0), state.tid) == regime.VD_SLUG

# =============================================================================
# Models
# =============================================================================

def test_annular_model():
    state = VerticalDown(**EXAMPLE_CASES['down_annular']).solve()
    assert state.regime == regime.VD_ANNULAR
    assert not state.degenerate, state.degenerate_reason
    assert 0 < state.rl < 1, f"Film holdup {state.rl}"
    assert state.pfric > 0
    assert abs(state.pgrav - state.rho_g * GRAD_UNITS) < 1e-12
    assert state.rho_g < state.rho_tp < state.rho_l


def test_annular_model_nonconvergence():
    state = _normalized(EXAMPLE_CASES['down_annular'], regime.VD_ANNULAR)
    annular_model(state, max_iter=1)
    assert state.degenerate and state.rl == 0.0


def test_slug_model():
    state = _normalized(EXAMPLE_CASES['slug'], regime.VD_SLUG)
    slug_model(state)
    u_b = state.u_tp - 0.6 * math.sqrt(9.81 * state.tid * (state.rho_l - state.rho_g) / state.rho_l)
    assert abs(state.rl - (1.0 - state.u_gs / u_b)) < 1e-12
    assert 0 < state.rl <= 0.75
    assert state.pfric > 0 and state.pgrav > 0 and state.head > 0


def test_slug_holdup_capped():
    state = _normalized(dict(EXAMPLE_CASES['slug'], wg=50.0), regime.VD_SLUG)
    slug_model(state)
    assert state.rl == 0.75


def test_slug_without_liquid_is_degenerate():
    inputs = dict(EXAMPLE_CASES['down_annular'], wg=1264.0)
    state = _normalized(inputs, regime.VD_SLUG)
    slug_model(state)
    assert state.degenerate and state.rl == 0.0
    with pytest.raises(DegenerateResult):
        run_model(_normalized(inputs, regime.VD_SLUG), {regime.VD_SLUG: slug_model}, "Vertical down", strict=True)


def test_dispersed_bubble_is_no_slip():
    state = _normalized(EXAMPLE_CASES['bubble'], regime.VD_DISPERSED_BUBBLE)
    bubble_model(state)
    assert abs(state.rl - state.lambda_l) < 1e-9
    assert state.pfric > 0
