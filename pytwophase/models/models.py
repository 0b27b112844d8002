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

from pytwophase.classes import regime
from pytwophase.constants import G, HR2S, GRAD_UNITS, FP_TOL, MAX_TRIALS
from pytwophase.exceptions import NonConvergence, NoMatchingModel, DegenerateResult
from pytwophase.shared_fns import (fixed_point_solve, fanning, dukler_ftp_ratio,
                                   no_slip_density, velocity_head)

logger = logging.getLogger(__name__)


def require_regime(state, allowed, model_name):
    state.require_normalized()
    if state.regime not in allowed:
        raise NoMatchingModel(f"{model_name} model does not apply to regime {state.regime.name}")


# ============================================================================
#  Similarity Analysis (Dukler) - annular and dispersed flows
# ============================================================================

_SIMILARITY_REGIMES = (regime.H_ANNULAR_DISPERSED, regime.H_DISPERSED_BUBBLE, regime.VU_ANNULAR)


def _similarity_k(z):
    if z < 10.0:
        return -0.16367 + 0.31037 * z - 0.03525 * z ** 2 + 0.001366 * z ** 3
    return 0.75545 + 0.003585 * z - 0.1436e-4 * z ** 2


def _similarity_rg(args, rg):
    state, gt, u_tp, lamda, x = args
    mu_mix = rg * state.mu_g + (1.0 - rg) * state.mu_l
    if mu_mix <= 0.0:
        return math.nan
    re = state.tid * gt / mu_mix
    fr = u_tp ** 2 / (G * state.tid)
    z = re ** 0.167 * fr ** 0.125 / lamda ** 0.25
    return _similarity_k(z) / ((1.0 / x - 1.0) * (state.rho_g / state.rho_l) + 1.0)


def similarity_analysis(state, rtol=FP_TOL, max_iter=MAX_TRIALS, rg0=0.5):
    """ Dukler similarity analysis for annular-dispersed, dispersed bubble and vertical up annular flow.
        Iterates gas holdup Rg through the empirical K(Z) correlation. If Rg does not converge the
        state is flagged degenerate with zero holdup and the remaining outputs are left at zero.

        state: Normalized, classified ProcessState
        rtol: Allowable Rg tolerance. Defaults to 1e-4
        max_iter: Trial budget. Defaults to 100
        rg0: Initial gas holdup. Defaults to 0.5
    """
    require_regime(state, _SIMILARITY_REGIMES, 'Similarity analysis')
    state.reset_outputs()
    gt = (state.wl + state.wg) / state.area / HR2S  # Total mass flux, kg/m^2-s
    u_gs, u_ls = state.superficial_velocities()
    u_tp = u_gs + u_ls
    lamda = u_ls / u_tp
    x = state.wg / (state.wg + state.wl)  # Vapor quality
    state.u_gs, state.u_ls, state.u_tp, state.lambda_l = u_gs, u_ls, u_tp, lamda

    try:
        rg = fixed_point_solve((state, gt, u_tp, lamda, x), _similarity_rg, rg0, rtol, max_iter)
    except NonConvergence as e:
        state.mark_degenerate(f"gas holdup did not converge: {e}")
        return state
    if not 0.0 < rg < 1.0:
        state.mark_degenerate(f"gas holdup {rg:.4g} outside (0, 1)")
        return state

    state.rl = 1.0 - rg
    rho_slip = state.rho_l * lamda ** 2 / (1.0 - rg) + state.rho_g * (1.0 - lamda) ** 2 / rg
    mu_tp = state.mu_l * lamda + state.mu_g * (1.0 - lamda)
    re_tp = state.tid * u_tp * rho_slip / mu_tp
    f_tp = dukler_ftp_ratio(lamda) * 4.0 * fanning(re_tp, state.rough, state.tid)  # Darcy

    state.rho_tp = state.rho_l * (1.0 - rg) + state.rho_g * rg
    state.pfric = f_tp * rho_slip * u_tp ** 2 / (2.0 * G * state.tid) * GRAD_UNITS * state.sf
    state.pgrav = state.rho_tp * GRAD_UNITS
    state.rho_ns = no_slip_density(state.wl, state.wg, state.rho_l, state.rho_g)
    state.head, state.ef = velocity_head(state.rho_ns, u_tp)
    return state


# ============================================================================
#  Drift-flux bubble model - vertical bubble and dispersed bubble flows
# ============================================================================

# (distribution parameter C0, rise velocity coefficient)
_BUBBLE_DRIFT = {
    regime.VU_BUBBLE: (1.2, 1.53),  # Harmathy swarm rise velocity
    regime.VU_FINELY_DISPERSED_BUBBLE: (1.0, 0.0),  # No slip
    regime.VD_DISPERSED_BUBBLE: (1.0, 0.0),  # No slip
}


def _bubble_void(args, alfa):
    u_gs, c0_um, u0 = args
    return u_gs / (c0_um + u0 * (1.0 - alfa) ** 0.5)


def bubble_model(state, rtol=FP_TOL, max_iter=MAX_TRIALS):
    """ Drift-flux model for vertical bubble flows. Void fraction alfa = Ugs / (C0 Um + U0 (1 - alfa)^0.5)
        is iterated, with C0 = 1.2 and the Harmathy rise velocity for vertical up bubble flow, and
        no slip for finely dispersed (up) and dispersed bubble (down) flow.
        Non-convergence is logged and flags the state degenerate with zero holdup.
    """
    require_regime(state, tuple(_BUBBLE_DRIFT), 'Bubble')
    state.reset_outputs()
    c0, k_drift = _BUBBLE_DRIFT[state.regime]
    u_gs, u_ls = state.superficial_velocities()
    u_m = u_gs + u_ls
    drho = state.rho_l - state.rho_g
    u0 = k_drift * (state.sigma * G * drho / state.rho_l ** 2) ** 0.25
    landa = u_ls / u_m
    state.u_gs, state.u_ls, state.u_tp, state.lambda_l = u_gs, u_ls, u_m, landa

    try:
        alfa = fixed_point_solve((u_gs, c0 * u_m, u0), _bubble_void, 1.0 - landa, rtol, max_iter)
    except NonConvergence as e:
        logger.error("Bubble void fraction failed to converge: %s", e)
        state.mark_degenerate(f"void fraction did not converge: {e}")
        return state

    hl = 1.0 - alfa
    state.rl = hl
    state.rho_tp = state.rho_l * landa ** 2 / hl + state.rho_g * (1.0 - landa) ** 2 / alfa
    mu_tp = state.mu_l * landa + state.mu_g * (1.0 - landa)
    re_tp = state.rho_tp * u_m * state.tid / mu_tp
    f_tp = dukler_ftp_ratio(landa) * 4.0 * fanning(re_tp, state.rough, state.tid)

    state.pfric = f_tp * state.rho_tp * u_m ** 2 / (2.0 * G * state.tid) * GRAD_UNITS * state.sf
    state.pgrav = (hl * state.rho_l + alfa * state.rho_g) * GRAD_UNITS
    state.rho_ns = no_slip_density(state.wl, state.wg, state.rho_l, state.rho_g)
    state.head, state.ef = velocity_head(state.rho_ns, u_m)
    return state


# ============================================================================
#  Model dispatch
# ============================================================================

def run_model(state, model_dic, line_name, strict=False):
    """ Runs the model registered for the state's regime in model_dic and returns the state.
        Raises NoMatchingModel when the regime has no model, and DegenerateResult when strict
        and the model could only produce a flagged placeholder result.
    """
    model = model_dic.get(state.regime)
    if model is None:
        raise NoMatchingModel(f"{line_name}: no model for regime {state.regime.name}")
    logger.debug("%s: running %s for %s", line_name, model.__name__, state.regime.name)
    model(state)
    if strict and state.degenerate:
        raise DegenerateResult(f"{state.regime_label}: {state.degenerate_reason}")
    return state
