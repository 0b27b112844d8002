#!/usr/bin/env python3
"""
Validation tests for vertical up flow regime classification and models.
"""

import sys
import os
import logging

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
from pytwophase.vertical_up import (VerticalUp, vertical_up_ratios, regime_from_ratios,
                                    classify_vertical_up, curve_e_ugs, slug_churn_model)
from pytwophase.models import similarity_analysis, bubble_model, run_model
from pytwophase.classes import regime, orientation, ORIENTATION_REGIMES
from pytwophase.constants import GRAD_UNITS
from pytwophase.exceptions import DegenerateResult, NoMatchingModel
from pytwophase.state import ProcessState
from pytwophase.line import EXAMPLE_CASES


def _normalized(inputs):
    state = ProcessState(**inputs)
    state.normalize()
    return state


class _Records(logging.Handler):
    """Collects log records emitted while attached"""
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)

# =============================================================================
# Classification
# =============================================================================

def test_classify_never_none():
    for name, inputs in EXAMPLE_CASES.items():
        reg = classify_vertical_up(_normalized(inputs))
        assert reg in ORIENTATION_REGIMES[orientation.VU], f"{name} classified as {reg}"


def test_annular_case_classifies_annular():
    line = VerticalUp(**EXAMPLE_CASES['annular'])
    assert line.classify() == regime.VU_ANNULAR
    assert line.ratios['E'] > 1.0
    assert line.regime_label == "Vertical Up Annular Flow"


def test_curve_e_independent_of_liquid_rate():
    a = _normalized(EXAMPLE_CASES['slug'])
    b = _normalized(dict(EXAMPLE_CASES['slug'], wl=10.0))
    assert curve_e_ugs(a) == curve_e_ugs(b)


def test_regime_tree():
    assert regime_from_ratios({'E': 1.5, 'A': 0.5, 'B': 0.5, 'C': 0.5}) == regime.VU_ANNULAR
    assert regime_from_ratios({'E': 1.0, 'A': 1.0, 'B': 1.0, 'C': 2.0}) == regime.VU_BUBBLE
    assert regime_from_ratios({'E': 0.5, 'A': 1.5, 'B': 0.5, 'C': 0.5}) == regime.VU_SLUG_CHURN
    assert regime_from_ratios({'E': 0.5, 'A': 1.5, 'B': 1.5, 'C': 1.5}) == regime.VU_SLUG_CHURN
    assert regime_from_ratios({'E': 0.5, 'A': 1.5, 'B': 1.5, 'C': 1.0}) == regime.VU_FINELY_DISPERSED_BUBBLE
    assert regime_from_ratios({'E': 0.5, 'A': 0.5, 'B': 1.5, 'C': 0.5}) == regime.VU_FINELY_DISPERSED_BUBBLE

# =============================================================================
# Similarity analysis (annular)
# =============================================================================

def test_similarity_converges():
    """Validated annular case converges to a physical holdup"""
    state = VerticalUp(**EXAMPLE_CASES['annular']).solve()
    assert not state.degenerate
    assert 0 < state.rl < 1, f"Holdup {state.rl}"
    assert 0.2 < state.rl < 0.4, f"Holdup {state.rl} far from validated ~0.29"
    assert state.pfric > 0 and state.head > 0 and state.ef > 0
    assert abs(state.pgrav - state.rho_tp * GRAD_UNITS) < 1e-12


def test_similarity_nonconvergence_is_degenerate():
    state = _normalized(EXAMPLE_CASES['annular'])
    state.regime = regime.VU_ANNULAR
    similarity_analysis(state, max_iter=1, rg0=0.99)
    assert state.degenerate
    assert state.rl == 0.0
    assert state.pfric == 0.0
    assert 'gas holdup' in state.degenerate_reason


def test_similarity_holdup_outside_unit_interval_is_degenerate():
    """Very high vapor to liquid ratio drives the gas holdup root out of (0, 1)"""
    line = VerticalUp(**dict(EXAMPLE_CASES['annular'], wl=10.0, wg=316227.766))
    assert line.classify() == regime.VU_ANNULAR
    state = line.solve()
    assert state.degenerate
    assert state.rl == 0.0 and state.pfric == 0.0
    assert 'gas holdup' in state.degenerate_reason
    with pytest.raises(DegenerateResult):
        line.solve(strict=True)


def _one_trial_similarity(state):
    return similarity_analysis(state, max_iter=1, rg0=0.99)


def test_strict_raises_degenerate_result():
    state = _normalized(EXAMPLE_CASES['annular'])
    state.regime = regime.VU_ANNULAR
    with pytest.raises(DegenerateResult):
        run_model(state, {regime.VU_ANNULAR: _one_trial_similarity}, "Vertical up", strict=True)
    state = VerticalUp(**EXAMPLE_CASES['annular']).solve(strict=True)
    assert not state.degenerate


def test_unregistered_regime():
    state = _normalized(EXAMPLE_CASES['annular'])
    state.regime = regime.VU_ANNULAR
    with pytest.raises(NoMatchingModel):
        run_model(state, {}, "Vertical up")

# =============================================================================
# Bubble
# =============================================================================

def test_bubble_scenario():
    line = VerticalUp(**EXAMPLE_CASES['bubble'])
    state = line.solve()
    assert state.regime in (regime.VU_BUBBLE, regime.VU_FINELY_DISPERSED_BUBBLE), f"Regime {state.regime}"
    assert state.head > 0, f"Head {state.head}"
    assert state.pfric > 0, f"Pfric {state.pfric}"
    assert state.lambda_l < state.rl < 1.0, "Bubble slip must raise holdup above the no-slip value"


def test_finely_dispersed_is_no_slip():
    state = _normalized(EXAMPLE_CASES['bubble'])
    state.regime = regime.VU_FINELY_DISPERSED_BUBBLE
    bubble_model(state)
    assert abs(state.rl - state.lambda_l) < 1e-9


def test_bubble_nonconvergence_logged_and_degenerate():
    state = _normalized(EXAMPLE_CASES['bubble'])
    state.regime = regime.VU_BUBBLE
    handler = _Records()
    models_logger = logging.getLogger('pytwophase.models.models')
    models_logger.addHandler(handler)
    try:
        bubble_model(state, rtol=1e-15, max_iter=1)
    finally:
        models_logger.removeHandler(handler)
    assert state.degenerate
    assert state.rl == 0.0 and state.head == 0.0
    assert 'void fraction' in state.degenerate_reason
    errors = [r for r in handler.records if r.levelno == logging.ERROR]
    assert len(errors) == 1, f"Expected one error record, got {handler.records}"

# =============================================================================
# Slug and churn
# =============================================================================

def test_slug_churn_model():
    line = VerticalUp(**EXAMPLE_CASES['slug'])
    assert line.classify() == regime.VU_SLUG_CHURN
    state = line.solve()
    assert not state.degenerate, state.degenerate_reason
    assert 0.5 < state.alfa_tb < 1.0, f"Taylor bubble void {state.alfa_tb}"
    assert abs(state.l_s - 20 * state.tid) < 1e-12
    assert state.l_u > state.l_s and state.l_e > 0
    assert 0 < state.rl < 1
    assert state.rho_ls > state.rho_su > state.rho_g
    assert state.pacc > 0 and state.pfric > state.pacc
    assert abs(state.pgrav - state.rho_su * GRAD_UNITS) < 1e-12


def test_slug_churn_rejects_annular_state():
    state = _normalized(EXAMPLE_CASES['annular'])
    state.regime = regime.VU_ANNULAR
    with pytest.raises(NoMatchingModel):
        slug_churn_model(state)


def test_slug_churn_newton_failure_is_degenerate():
    state = _normalized(EXAMPLE_CASES['slug'])
    state.regime = regime.VU_SLUG_CHURN
    slug_churn_model(state, max_iter=1)
    assert state.degenerate
    assert state.rl == 0.0 and state.alfa_tb == 0.0
    assert 'did not converge' in state.degenerate_reason


def test_slug_churn_low_vapor_is_degenerate():
    """Vapor below the liquid slug share leaves no room for Taylor bubbles"""
    state = _normalized(dict(EXAMPLE_CASES['slug'], wg=200.0))
    state.regime = regime.VU_SLUG_CHURN
    slug_churn_model(state)
    assert state.degenerate
    assert state.rl == 0.0 and state.l_u == 0.0
    assert 'length fraction' in state.degenerate_reason
