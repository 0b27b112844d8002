#!/usr/bin/python3
# -*- coding: utf-8 -*-

"""
    pytwophase - Two-phase flow regime and hydraulics for pipe segments
              Copyright (C) 2024, pytwophase contributors

    This program is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This program is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
    GNU General Public License for more details.

    The GNU General Public License can be found in the LICENSE directory,
    and at  <https://www.gnu.org/licenses/>.
"""

import logging
import math
from collections import namedtuple

from pytwophase.classes import regime, REGIME_LABELS
from pytwophase.constants import (G, GC, CG, CL, N_EXP, M_EXP, GRAD_UNITS, BISECT_TOL, FP_TOL,
                                  MAX_TRIALS, H_MIN, H_MAX, HL_ANNULAR, WAVE_S, LS_HORIZONTAL)
from pytwophase.exceptions import NonConvergence
from pytwophase.models import require_regime, similarity_analysis, run_model
from pytwophase.shared_fns import (bisect_solve, fixed_point_solve, fanning,
                                   no_slip_density, velocity_head)
from pytwophase.state import ProcessState

logger = logging.getLogger(__name__)

# ============================================================================
#  Stratified geometry (Taitel & Dukler, 1976)
#  Areas are relative to D^2, perimeters to D, h = hL / D
# ============================================================================

_Geometry = namedtuple('_Geometry', ['alb', 'agb', 'slb', 'sgb', 'sib', 'ulb', 'ugb', 'dlb', 'dgb'])


def _level_geometry(h):
    c = 2.0 * h - 1.0
    sgb = math.acos(c)  # Gas wetted perimeter
    sib = math.sqrt(1.0 - c ** 2)  # Interface width, also dALB/dh
    slb = math.pi - sgb  # Liquid wetted perimeter
    alb = 0.25 * (math.pi - sgb + c * sib)
    agb = 0.25 * (sgb - c * sib)
    ab = math.pi / 4.0
    ulb = ab / alb
    ugb = ab / agb
    dlb = 4.0 * alb / slb  # Liquid hydraulic diameter
    dgb = 4.0 * agb / (sgb + sib)  # Gas hydraulic diameter
    return _Geometry(alb, agb, slb, sgb, sib, ulb, ugb, dlb, dgb)


def _level_terms(geo):
    # Liquid and gas shear terms of the momentum balance, turbulent Blasius exponents
    term_l = (geo.ulb * geo.dlb) ** (-N_EXP) * geo.ulb ** 2 * geo.slb / geo.alb
    term_g = ((geo.ugb * geo.dgb) ** (-M_EXP) * geo.ugb ** 2 *
              (geo.sgb / geo.agb + geo.sib / geo.alb + geo.sib / geo.agb))
    return term_l, term_g


def _gas_gradient(state, u_gs):
    # Superficial gas pressure gradient, 4 CG/D (Ugs D/nuG)^-m rhoG Ugs^2 / 2
    nu_g = state.mu_g / state.rho_g
    return 4.0 * CG / state.tid * (u_gs * state.tid / nu_g) ** (-M_EXP) * (state.rho_g * u_gs ** 2 / 2.0)


def martinelli_x(state):
    """ Lockhart-Martinelli parameter X for turbulent liquid and turbulent gas """
    return ((state.wl / state.wg) ** 0.9 * math.sqrt(state.rho_g / state.rho_l) *
            (state.mu_l / state.mu_g) ** 0.1)


def inclination_y(state):
    """ Ratio of gravity to gas frictional gradient. 0 for horizontal, sign follows inclination """
    u_gs, u_ls = state.superficial_velocities()
    return (state.rho_l - state.rho_g) * G * math.sin(state.degree) / _gas_gradient(state, u_gs)


def fhll(h, x, y=0.0):
    """ Equilibrium liquid level residual, X^2 term_L - term_G - 4Y, at dimensionless level h = hL/D.
        Zero at the stratified equilibrium level.
    """
    term_l, term_g = _level_terms(_level_geometry(h))
    return x ** 2 * term_l - term_g - 4.0 * y


def _fhll_residual(args, h):
    x, y = args
    return fhll(h, x, y)


def equilibrium_level(state, rtol=BISECT_TOL, max_iter=MAX_TRIALS):
    """ Returns dimensionless equilibrium liquid level h = hL/D by bisection over [0.001, 0.999] """
    state.require_normalized()
    x = martinelli_x(state)
    y = inclination_y(state)
    return bisect_solve((x, y), _fhll_residual, H_MIN, H_MAX, rtol, max_iter)


# ============================================================================
#  Classification
# ============================================================================

def horizontal_ratios(state, rtol=BISECT_TOL, max_iter=MAX_TRIALS):
    """ Returns dictionary of the boundary ratios used for horizontal regime classification.
        h: Equilibrium liquid level (-)
        X, Y: Martinelli and inclination parameters
        A: Stratified / non-stratified (Curve A)
        B: Annular-dispersed / intermittent (Curve B)
        C: Stratified smooth / stratified wavy (Curve C)
        D: Intermittent / dispersed bubble (Curve D)
        EE: Elongated bubble / intermittent slug
    """
    state.require_normalized()
    x = martinelli_x(state)
    y = inclination_y(state)
    h = bisect_solve((x, y), _fhll_residual, H_MIN, H_MAX, rtol, max_iter)
    geo = _level_geometry(h)
    u_gs, u_ls = state.superficial_velocities()
    drho = state.rho_l - state.rho_g
    nu_l = state.mu_l / state.rho_l

    # Curve A, modified Froude number
    froude = (math.sqrt(state.rho_g / drho) * u_gs /
              math.sqrt(state.tid * G * math.cos(state.degree)))
    c2 = 1.0 - h
    ratio_a = math.sqrt(froude ** 2 / c2 ** 2 * geo.ugb ** 2 * geo.sib / geo.agb)

    # Curve B, evaluated at hL/D = 0.5
    term_l, term_g = _level_terms(_level_geometry(HL_ANNULAR))
    denom_b = 4.0 * y + term_g
    # Negative inclination can cancel the gas shear term, leaving the boundary unreachable
    ratio_b = math.sqrt(x ** 2 * term_l / denom_b) if denom_b > 0.0 else math.inf

    # Curve C
    re_ls = state.tid * u_ls / nu_l
    k_wave = froude * math.sqrt(re_ls)
    ratio_c = k_wave * math.sqrt(geo.ulb) * geo.ugb * math.sqrt(WAVE_S) / 2.0

    # Curve D
    liq_gradient = 4.0 * CL / state.tid * (u_ls * state.tid / nu_l) ** (-N_EXP) * state.rho_l * u_ls ** 2 / 2.0
    t2 = liq_gradient / (drho * G * math.cos(state.degree))
    ratio_d = t2 * geo.sib * geo.ulb ** 2 * (geo.ulb * geo.dlb) ** (-N_EXP) / 8.0 / geo.agb

    # Elongated bubble / slug
    u_gs_eb = (u_ls + G * drho * state.sigma / state.rho_l ** 2) ** 0.25 * 1.15 / 3.0
    ratio_ee = u_gs / u_gs_eb

    return {'h': h, 'X': x, 'Y': y, 'A': ratio_a, 'B': ratio_b, 'C': ratio_c, 'D': ratio_d, 'EE': ratio_ee}


def regime_from_ratios(ratios):
    if ratios['A'] <= 1.0:
        if ratios['C'] <= 1.0:
            return regime.H_STRATIFIED_SMOOTH
        return regime.H_STRATIFIED_WAVY
    if ratios['B'] <= 1.0:
        return regime.H_ANNULAR_DISPERSED
    if ratios['D'] <= 1.0:
        if ratios['EE'] <= 1.0:
            return regime.H_ELONGATED_BUBBLE
        return regime.H_INTERMITTENT_SLUG
    return regime.H_DISPERSED_BUBBLE


def classify_horizontal(state):
    """ Returns the horizontal flow regime of a normalized ProcessState. Does not modify the state """
    return regime_from_ratios(horizontal_ratios(state))


# ============================================================================
#  Stratified model
# ============================================================================

_STRATIFIED_REGIMES = (regime.H_STRATIFIED_SMOOTH, regime.H_STRATIFIED_WAVY)


def stratified_model(state, rtol=BISECT_TOL, max_iter=MAX_TRIALS):
    """ Stratified smooth / wavy flow. Equilibrium level by bisection, friction from the gas
        phase with interfacial friction taken equal to the gas wall friction (fi / fG ~ 1).
    """
    require_regime(state, _STRATIFIED_REGIMES, 'Stratified')
    state.reset_outputs()
    try:
        h = equilibrium_level(state, rtol, max_iter)
    except NonConvergence as e:
        state.mark_degenerate(f"equilibrium liquid level did not converge: {e}")
        return state
    geo = _level_geometry(h)
    u_gs, u_ls = state.superficial_velocities()
    state.u_gs, state.u_ls = u_gs, u_ls
    state.u_tp = u_gs + u_ls

    state.rl = geo.alb / (geo.alb + geo.agb)
    state.rho_tp = state.rho_l * state.rl + state.rho_g * (1.0 - state.rl)
    state.depth = h * state.tid
    state.vel_l = geo.ulb * u_ls
    state.vel_g = geo.ugb * u_gs

    fig2 = 0.25 * geo.ugb ** 2 * (geo.ugb * geo.dgb) ** (-M_EXP) / geo.agb * (geo.sgb + geo.sib)
    state.pfric = fig2 * _gas_gradient(state, u_gs) / GC * GRAD_UNITS * state.sf
    state.rho_ns = no_slip_density(state.wl, state.wg, state.rho_l, state.rho_g)
    state.head, state.ef = velocity_head(state.rho_ns, state.u_tp)
    return state


# ============================================================================
#  Slug model (Dukler & Hubbard, 1975; Gregory et al. slug holdup)
# ============================================================================

_SLUG_REGIMES = (regime.H_ELONGATED_BUBBLE, regime.H_INTERMITTENT_SLUG)


def _film_length(l_s, rs, rl, rfe):
    return l_s * (rs - rl) / (rl - rfe)


def _film_end_holdup(args, rfe):
    l_s, rs, rl, u_s, u_ls, u_t = args
    l_f = _film_length(l_s, rs, rl, rfe)
    l_u = l_f + l_s
    return rs - (rs * u_s - u_ls) * l_u / l_f / u_t


def slug_model(state, rtol=FP_TOL, max_iter=MAX_TRIALS):
    """ Elongated bubble and intermittent slug flow. Liquid slug holdup from Gregory et al. (1978),
        slug length 30 D, film end holdup reconciled by fixed point iteration. Frictional loss
        includes the acceleration of the film liquid picked up by the slug.
    """
    require_regime(state, _SLUG_REGIMES, 'Slug')
    state.reset_outputs()
    u_gs, u_ls = state.superficial_velocities()
    u_m = u_gs + u_ls
    u_s = u_m  # Slug liquid velocity, no slip inside the slug
    rs = 1.0 / (1.0 + (u_s / 8.66) ** 1.39)  # Liquid holdup of the liquid slug
    rho_s = state.rho_l * rs + state.rho_g * (1.0 - rs)
    re_s = state.tid * u_s * rho_s / (state.mu_l * rs + state.mu_g * (1.0 - rs))
    c = 0.021 * math.log(re_s) + 0.022
    u_t = (1.0 + c) * u_s  # Slug unit translational velocity
    rl = (u_ls + rs * (u_t - u_m)) / u_t  # Slug unit holdup
    l_s = LS_HORIZONTAL * state.tid
    state.u_gs, state.u_ls, state.u_tp, state.u_s, state.l_s = u_gs, u_ls, u_m, u_s, l_s

    try:
        rfe = fixed_point_solve((l_s, rs, rl, u_s, u_ls, u_t), _film_end_holdup, rl * 0.5, rtol, max_iter)
    except NonConvergence as e:
        state.mark_degenerate(f"film end holdup did not converge: {e}")
        return state

    l_f = _film_length(l_s, rs, rl, rfe)
    if not l_f > 0.0:
        # Slug holdup below the slug unit holdup, no film zone
        state.mark_degenerate(f"film length {l_f:.4g} m is not positive")
        return state
    state.rl, state.rfe, state.l_f = rl, rfe, l_f
    state.l_u = l_f + l_s
    state.rho_su = state.rho_l * rl + state.rho_g * (1.0 - rl)
    state.rho_ls = rho_s
    state.rho_tp = state.rho_su

    u_fe = (u_ls * (l_s + l_f) - rs * u_s * l_s) / (rfe * l_f)  # Liquid velocity at the film end
    l_m = 0.15 * (u_s - u_fe) ** 2 / GC  # Mixing zone length
    f0 = 4.0 * fanning(re_s, state.rough, state.tid)
    pfric = (f0 * rho_s * u_s ** 2 * (l_s - l_m) / state.l_u / (2.0 * GC * state.tid) *
             GRAD_UNITS * state.sf)
    state.pacc = state.rho_l * rfe * (u_t - u_fe) * (u_s - u_fe) / (GC * state.l_u) * GRAD_UNITS
    state.pfric = pfric + state.pacc
    state.rho_ns = no_slip_density(state.wl, state.wg, state.rho_l, state.rho_g)
    state.head, state.ef = velocity_head(state.rho_ns, u_s)
    return state


# ============================================================================
#  Horizontal line
# ============================================================================

_MODEL_DIC = {
    regime.H_STRATIFIED_SMOOTH: stratified_model,
    regime.H_STRATIFIED_WAVY: stratified_model,
    regime.H_ANNULAR_DISPERSED: similarity_analysis,
    regime.H_DISPERSED_BUBBLE: similarity_analysis,
    regime.H_ELONGATED_BUBBLE: slug_model,
    regime.H_INTERMITTENT_SLUG: slug_model,
}


class Horizontal:
    """ Two-phase flow in a horizontal pipe segment (Taitel & Dukler flow map).

        Either pass an existing ProcessState as state, or the ProcessState inputs as keywords
        (wl, wg, rho_l, rho_g, mu_l, mu_g, sigma, rough, sf, tid, degree)
    """
    def __init__(self, state=None, **inputs):
        if state is None:
            state = ProcessState(**inputs)
        elif inputs:
            raise ValueError("Provide either a ProcessState or its inputs, not both")
        self.state = state
        self.ratios = {}

    @property
    def regime(self):
        return self.state.regime

    @property
    def regime_label(self):
        return REGIME_LABELS[self.state.regime]

    def normalize(self):
        self.state.normalize()

    def classify(self):
        self.state.normalize()
        self.ratios = horizontal_ratios(self.state)
        self.state.regime = regime_from_ratios(self.ratios)
        logger.debug("Horizontal ratios %s -> %s", self.ratios, self.state.regime.name)
        return self.state.regime

    def solve(self, strict=False):
        """ Normalizes, classifies and runs the matching regime model, returning the populated state.
            strict: Raise DegenerateResult instead of returning a flagged placeholder result
        """
        self.classify()
        return run_model(self.state, _MODEL_DIC, "Horizontal", strict)
