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

from pytwophase.classes import regime, REGIME_LABELS
from pytwophase.constants import (G, GC, GRAD_UNITS, NR_TOL, MAX_TRIALS, ALFA_SLUG, LS_VERTICAL)
from pytwophase.exceptions import InvalidInput, NonConvergence, SingularDerivative
from pytwophase.models import require_regime, similarity_analysis, bubble_model, run_model
from pytwophase.shared_fns import newton_solve, fanning, no_slip_density, velocity_head
from pytwophase.state import ProcessState

logger = logging.getLogger(__name__)

# ============================================================================
#  Transition curves (Taitel, Barnea & Dukler, 1980)
#  Superficial velocities are scaled with the average void fraction of 0.25
# ============================================================================


def curve_e_ugs(state):
    """ Churn / annular transition superficial vapor velocity (m/s). Independent of liquid rate and diameter """
    return 3.1 * ((state.rho_l - state.rho_g) * G * state.sigma) ** 0.25 / math.sqrt(state.rho_g)


def curve_a_ugs(state, u_ls):
    """ Bubble / slug transition superficial vapor velocity (m/s) at liquid superficial velocity u_ls """
    term_a = G * (state.rho_l - state.rho_g) * state.sigma / state.rho_l ** 2
    ugs = (u_ls + 0.9938 * term_a ** 0.25) / 3.0
    if not math.isfinite(ugs):
        raise InvalidInput("Vertical up curve A is undefined for these properties")
    return ugs


def curve_b_uls(state, u_gs):
    """ Dispersed bubble transition superficial liquid velocity (m/s) at vapor superficial velocity u_gs """
    term_b = 4.0 * ((G * (state.rho_l - state.rho_g) / state.rho_l) ** 0.446 * state.tid ** 0.429 *
                    (state.sigma / state.rho_l) ** 0.089 / (state.mu_l / state.rho_l) ** 0.072)
    return term_b - u_gs


def vertical_up_ratios(state):
    """ Returns dictionary of the boundary ratios used for vertical up regime classification
        E: Churn / annular, A: Bubble / slug, B: Dispersed bubble, C: Finely dispersed bubble / slug
    """
    state.require_normalized()
    u_g, u_l = state.superficial_velocities()
    u_gs = u_g * ALFA_SLUG
    u_ls = u_l * (1.0 - ALFA_SLUG)
    return {'E': u_gs / curve_e_ugs(state),
            'A': u_gs / curve_a_ugs(state, u_ls),
            'B': u_ls / curve_b_uls(state, u_gs),
            'C': u_gs / (13.0 / 12.0 * u_ls)}


def regime_from_ratios(ratios):
    if ratios['E'] > 1.0:
        return regime.VU_ANNULAR
    if ratios['A'] <= 1.0 and ratios['B'] <= 1.0:
        return regime.VU_BUBBLE
    if ratios['A'] > 1.0 and (ratios['B'] <= 1.0 or ratios['C'] > 1.0):
        return regime.VU_SLUG_CHURN
    return regime.VU_FINELY_DISPERSED_BUBBLE


def classify_vertical_up(state):
    """ Returns the vertical up flow regime of a normalized ProcessState. Does not modify the state """
    return regime_from_ratios(vertical_up_ratios(state))


# ============================================================================
#  Slug and churn model
#  Taylor bubble rise (Nicklin), falling film (Brotz / Fernandes), liquid slug void 0.25
# ============================================================================

_SLUG_CHURN_REGIMES = (regime.VU_SLUG_CHURN,)
_FILM_COEFF = 9.916


def _film_velocity(tid, alfa_tb):
    # Downward velocity of the liquid film around the Taylor bubble
    return _FILM_COEFF * math.sqrt(G * tid * (1.0 - math.sqrt(alfa_tb)))


def _film_balance(args, alfa_tb):
    # Liquid mass balance between liquid slug and film, in the frame of the Taylor bubble
    tid, u_tb, u_lls = args
    if not 0.0 < alfa_tb < 1.0:
        return math.nan
    return ((u_tb + _film_velocity(tid, alfa_tb)) * (1.0 - alfa_tb) -
            (u_tb - u_lls) * (1.0 - ALFA_SLUG))


def _film_balance_prime(args, alfa_tb):
    tid, u_tb, u_lls = args
    if not 0.0 < alfa_tb < 1.0:
        return math.nan
    u_ltb = _film_velocity(tid, alfa_tb)
    if u_ltb <= 0.0:
        return math.nan
    du_ltb = -_FILM_COEFF ** 2 * G * tid / (4.0 * u_ltb * math.sqrt(alfa_tb))
    return du_ltb * (1.0 - alfa_tb) - (u_tb + u_ltb)


def slug_churn_model(state, rtol=NR_TOL, max_iter=MAX_TRIALS):
    """ Vertical up slug and churn flow.
        Taylor bubble void fraction alfa_tb is found by damped Newton-Raphson on the liquid mass balance
        between the liquid slug and the falling film. Liquid slug length is 20 D, slug unit length follows
        from the gas balance, and the entrance length to stable slugging is reported as l_e.
        Frictional loss acts over the liquid slug only, plus the acceleration of the film into the slug.
    """
    require_regime(state, _SLUG_CHURN_REGIMES, 'Slug and churn')
    state.reset_outputs()
    u_gs, u_ls = state.superficial_velocities()
    u_m = u_gs + u_ls
    drho = state.rho_l - state.rho_g
    state.u_gs, state.u_ls, state.u_tp, state.u_s = u_gs, u_ls, u_m, u_m
    state.lambda_l = u_ls / u_m

    # Gas and liquid velocities in the liquid slug (Harmathy swarm rise)
    u_gls = 1.2 * u_m + 1.53 * (G * state.sigma * drho / state.rho_l ** 2) ** 0.25 * math.sqrt(1.0 - ALFA_SLUG)
    u_lls = (u_m - ALFA_SLUG * u_gls) / (1.0 - ALFA_SLUG)
    u_tb = 1.2 * u_m + 0.35 * math.sqrt(G * state.tid * drho / state.rho_l)  # Taylor bubble rise velocity
    state.u_lls = u_lls
    state.l_e = 40.6 * state.tid * (u_m / math.sqrt(G * state.tid) + 0.22)

    x0 = 1.0 - (u_tb - u_lls) * (1.0 - ALFA_SLUG) / u_tb
    try:
        alfa_tb = newton_solve((state.tid, u_tb, u_lls), _film_balance, _film_balance_prime, x0, rtol, max_iter)
    except (NonConvergence, SingularDerivative) as e:
        state.mark_degenerate(f"Taylor bubble void fraction did not converge: {e}")
        return state
    if not 0.0 < alfa_tb < 1.0:
        state.mark_degenerate(f"Taylor bubble void fraction {alfa_tb:.4g} outside (0, 1)")
        return state

    beta = (u_gs - ALFA_SLUG * u_gls) / (alfa_tb * u_tb - ALFA_SLUG * u_gls)  # Taylor bubble share of slug unit
    if not 0.0 < beta < 1.0:
        state.mark_degenerate(f"Taylor bubble length fraction {beta:.4g} outside (0, 1)")
        return state

    u_ltb = _film_velocity(state.tid, alfa_tb)
    state.alfa_tb = alfa_tb
    state.l_s = LS_VERTICAL * state.tid
    state.l_u = state.l_s / (1.0 - beta)
    state.l_f = state.l_u - state.l_s

    hl = (1.0 - beta) * (1.0 - ALFA_SLUG) + beta * (1.0 - alfa_tb)
    state.rl = hl
    state.rho_su = state.rho_l * hl + state.rho_g * (1.0 - hl)
    state.rho_ls = state.rho_l * (1.0 - ALFA_SLUG) + state.rho_g * ALFA_SLUG
    state.rho_tp = state.rho_su

    mu_ls = state.mu_l * (1.0 - ALFA_SLUG) + state.mu_g * ALFA_SLUG
    re_ls = state.rho_ls * u_m * state.tid / mu_ls
    f_ls = 4.0 * fanning(re_ls, state.rough, state.tid)
    pfric = (f_ls * state.rho_ls * u_m ** 2 / (2.0 * G * state.tid) * (state.l_s / state.l_u) *
             GRAD_UNITS * state.sf)
    state.pacc = (state.rho_l * (1.0 - alfa_tb) * (u_tb + u_ltb) * (u_lls + u_ltb) /
                  (GC * state.l_u) * GRAD_UNITS)
    state.pfric = pfric + state.pacc
    state.pgrav = state.rho_su * GRAD_UNITS
    state.rho_ns = no_slip_density(state.wl, state.wg, state.rho_l, state.rho_g)
    state.head, state.ef = velocity_head(state.rho_ns, u_m)
    return state


# ============================================================================
#  Vertical up line
# ============================================================================

_MODEL_DIC = {
    regime.VU_ANNULAR: similarity_analysis,
    regime.VU_BUBBLE: bubble_model,
    regime.VU_FINELY_DISPERSED_BUBBLE: bubble_model,
    regime.VU_SLUG_CHURN: slug_churn_model,
}


class VerticalUp:
    """ Two-phase upward flow in a vertical pipe segment (Taitel, Barnea & Dukler flow map).
        Construct from a ProcessState, or from the ProcessState inputs as keywords.
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
        self.ratios = vertical_up_ratios(self.state)
        self.state.regime = regime_from_ratios(self.ratios)
        logger.debug("Vertical up ratios %s -> %s", self.ratios, self.state.regime.name)
        return self.state.regime

    def solve(self, strict=False):
        self.classify()
        return run_model(self.state, _MODEL_DIC, "Vertical up", strict)
