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
from pytwophase.constants import (G, CG, CL, N_EXP, M_EXP, GRAD_UNITS, NR_TOL, MAX_TRIALS,
                                  ALFA_SLUG, ALFA_BUBBLE_SLUG, DB_FILM, LS_HOLDUP, FILM_TOL, CURVE_C_TOL)
from pytwophase.exceptions import NonConvergence, SingularDerivative
from pytwophase.models import require_regime, bubble_model, run_model
from pytwophase.shared_fns import (newton_solve, fixed_point_solve, fanning, dukler_ftp_ratio,
                                   no_slip_density, velocity_head)
from pytwophase.state import ProcessState

logger = logging.getLogger(__name__)

# ============================================================================
#  Transition curves (Barnea, 1987)
# ============================================================================


def _film_args(state, u_gs):
    # Constant groups of the annular film momentum balance at film thickness DB_FILM
    db = DB_FILM
    nu_l = state.mu_l / state.rho_l
    nu_g = state.mu_g / state.rho_g
    tid = state.tid
    s_l = math.pi * tid  # Wall wetted perimeter
    s_i = math.pi * tid * (1.0 - 2.0 * db)  # Interface perimeter
    a_l = math.pi * tid ** 2 * (db - db ** 2)  # Film area
    a_g = math.pi * tid ** 2 * (0.5 - db) ** 2  # Gas core area
    d_l = 4.0 * tid * (db - db ** 2)
    d_g = (1.0 - 2.0 * db) * tid
    u_g = 4.0 * u_gs / (1.0 - 4.0 * db + 4.0 * db ** 2)  # Gas core velocity
    f_l = CL * (d_l / nu_l) ** (-N_EXP)
    f_i = CG * (d_g / nu_g) ** (-M_EXP) * u_g ** (-M_EXP)
    k1 = s_i * (1.0 / a_l + 1.0 / a_g)
    k2 = f_i * state.rho_g / 2.0
    k3 = k2 * 2.0 * u_g
    k4 = G * (state.rho_l - state.rho_g)
    k5 = f_l * state.rho_l / 2.0 * s_l / a_l
    return u_g, k1, k2, k3, k4, k5


def _film_residual(args, u_l):
    u_g, k1, k2, k3, k4, k5 = args
    if u_l <= 0.0:
        return math.nan
    return (k2 * u_l ** 2 - k3 * u_l + k2 * u_g ** 2) * k1 + k4 - k5 * u_l ** (2.0 - N_EXP)


def _film_residual_prime(args, u_l):
    u_g, k1, k2, k3, k4, k5 = args
    if u_l <= 0.0:
        return math.nan
    return (2.0 * k2 * u_l - k3) * k1 - k5 * (2.0 - N_EXP) * u_l ** (1.0 - N_EXP)


def film_velocity(state, rtol=FILM_TOL, max_iter=MAX_TRIALS):
    """ Returns the annular liquid film velocity (m/s) at the fixed dimensionless film thickness """
    u_gs, u_ls = state.superficial_velocities()
    u0 = u_ls / 4.0 / (DB_FILM - DB_FILM ** 2)
    return newton_solve(_film_args(state, u_gs), _film_residual, _film_residual_prime, u0, rtol, max_iter)


def _curve_c_mixture(args, u_m):
    u_gs, term_b = args
    rt = 0.725 + 4.15 * math.sqrt(u_gs / u_m)
    power = 2.0 * (3.0 - N_EXP) / 5.0
    return (rt / term_b) ** (1.0 / power)


def curve_c_uls(state, u_gs, rtol=CURVE_C_TOL, max_iter=MAX_TRIALS):
    """ Dispersed bubble boundary superficial liquid velocity (m/s) at vapor superficial velocity u_gs.
        Returns 0 when the mixture velocity iteration fails, making the curve unreachable. A mixture
        velocity below u_gs gives a negative value, returned as is so the ratio lands on the slug side.
    """
    u_g, u_l = state.superficial_velocities()
    nu_l = state.mu_l / state.rho_l
    term1 = 2.0 * math.sqrt(0.4 * state.sigma / (state.rho_l - state.rho_g) / G)
    term2 = (state.rho_l / state.sigma) ** 0.6
    term3 = (2.0 / state.tid * CL * (state.tid / nu_l) ** (-N_EXP)) ** 0.4
    try:
        u_m = fixed_point_solve((u_gs, term1 * term2 * term3), _curve_c_mixture, u_l + u_gs, rtol, max_iter)
    except NonConvergence as e:
        logger.warning("Vertical down curve C did not converge, treated as unreachable: %s", e)
        return 0.0
    return u_m - u_gs


def _drift_uls(state, u_gs, alfa):
    # Superficial liquid velocity at void fraction alfa with Harmathy bubble drift
    u0 = 1.53 * (G * (state.rho_l - state.rho_g) * state.sigma / state.rho_l ** 2) ** 0.25
    return u_gs * (1.0 - alfa) / alfa + (1.0 - alfa) * u0


def critical_diameter(state):
    """ Diameter (m) above which the bubble / slug transition is possible (curve B active) """
    return 4.36 ** 2 * math.sqrt((state.rho_l - state.rho_g) * state.sigma / state.rho_l ** 2 / G)


def vertical_down_ratios(state):
    """ Returns dictionary of the boundary ratios used for vertical down regime classification.
        A: Annular, D: Slug at maximum bubble packing, C: Dispersed bubble, B: Bubble / slug,
        Dcrit: Critical diameter (m)
        Curves A and C are taken as unreachable (ratio inf) when their iterations fail.
    """
    state.require_normalized()
    u_gs, u_ls = state.superficial_velocities()
    try:
        u_l = film_velocity(state)
        ratio_a = u_ls / (u_l * 4.0 * (DB_FILM - DB_FILM ** 2))
    except (NonConvergence, SingularDerivative) as e:
        logger.warning("Vertical down film velocity did not converge, curve A treated as unreachable: %s", e)
        ratio_a = math.inf
    uls_c = curve_c_uls(state, u_gs)
    return {'A': ratio_a,
            'D': u_ls / _drift_uls(state, u_gs, ALFA_BUBBLE_SLUG),
            'C': u_ls / uls_c if uls_c != 0.0 else math.inf,
            'B': u_ls / _drift_uls(state, u_gs, ALFA_SLUG),
            'Dcrit': critical_diameter(state)}


def regime_from_ratios(ratios, tid):
    if ratios['A'] <= 1.0:
        return regime.VD_ANNULAR
    if ratios['D'] <= 1.0 or ratios['C'] <= 1.0:
        return regime.VD_SLUG
    if tid > ratios['Dcrit'] and ratios['B'] <= 1.0:
        return regime.VD_SLUG
    return regime.VD_DISPERSED_BUBBLE


def classify_vertical_down(state):
    """ Returns the vertical down flow regime of a normalized ProcessState. Does not modify the state """
    return regime_from_ratios(vertical_down_ratios(state), state.tid)


# ============================================================================
#  Annular model
# ============================================================================

_ANNULAR_REGIMES = (regime.VD_ANNULAR,)


def _holdup_residual(args, a):
    x2, y = args
    if not 0.0 < a < 1.0:
        return math.nan
    return x2 * (1.0 - a) ** 2.5 - a ** 2 - 75.0 * a ** 3 - y * (1.0 - a) ** 2.5 * a ** 3


def _holdup_residual_prime(args, a):
    x2, y = args
    if not 0.0 < a < 1.0:
        return math.nan
    return (-2.5 * x2 * (1.0 - a) ** 1.5 - 2.0 * a - 225.0 * a ** 2 -
            3.0 * y * (1.0 - a) ** 2.5 * a ** 2 + 2.5 * y * (1.0 - a) ** 1.5 * a ** 3)


def annular_model(state, rtol=NR_TOL, max_iter=MAX_TRIALS, a0=0.5):
    """ Vertical down annular flow with the Wallis interfacial friction (1 + 75 alfaL).
        Liquid holdup alfaL solves X^2 (1-a)^2.5 - a^2 - 75 a^3 - Y (1-a)^2.5 a^3 = 0 by damped Newton-Raphson.
        A root outside (0, 1), or one that is not found, flags the state degenerate.
    """
    require_regime(state, _ANNULAR_REGIMES, 'Annular')
    state.reset_outputs()
    u_gs, u_ls = state.superficial_velocities()
    state.u_gs, state.u_ls, state.u_tp = u_gs, u_ls, u_gs + u_ls
    f_sl = fanning(state.rho_l * u_ls * state.tid / state.mu_l, state.rough, state.tid)
    f_sg = fanning(state.rho_g * u_gs * state.tid / state.mu_g, state.rough, state.tid)
    gas_shear = f_sg * state.rho_g * u_gs ** 2
    x2 = f_sl * state.rho_l * u_ls ** 2 / gas_shear
    y = G * (state.rho_l - state.rho_g) / (4.0 * gas_shear / (2.0 * state.tid))

    try:
        a = newton_solve((x2, y), _holdup_residual, _holdup_residual_prime, a0, rtol, max_iter)
    except (NonConvergence, SingularDerivative) as e:
        state.mark_degenerate(f"annular liquid holdup did not converge: {e}")
        return state
    if not 0.0 < a < 1.0:
        state.mark_degenerate(f"annular liquid holdup {a:.4g} outside (0, 1)")
        return state

    state.rl = a
    state.pfric = (2.0 * gas_shear / (G * state.tid) * (1.0 + 75.0 * a) / (1.0 - a) ** 2.5 *
                   GRAD_UNITS * state.sf)
    state.pgrav = state.rho_g * GRAD_UNITS
    state.rho_tp = state.rho_l * a + state.rho_g * (1.0 - a)
    state.rho_ns = no_slip_density(state.wl, state.wg, state.rho_l, state.rho_g)
    state.head, state.ef = velocity_head(state.rho_ns, state.u_tp)
    return state


# ============================================================================
#  Slug model
# ============================================================================

_SLUG_REGIMES = (regime.VD_SLUG,)


def slug_model(state):
    """ Vertical down slug flow. Taylor bubble velocity from drift flux, Ub = Um - 0.6 (g D drho / rhoL)^0.5,
        holdup 1 - Ugs/Ub bounded by the liquid slug holdup, friction from the liquid slug with the Dukler
        correction at the liquid slug holdup.
    """
    require_regime(state, _SLUG_REGIMES, 'Slug')
    state.reset_outputs()
    u_gs, u_ls = state.superficial_velocities()
    u_m = u_gs + u_ls
    state.u_gs, state.u_ls, state.u_tp, state.u_s = u_gs, u_ls, u_m, u_m
    u_b = u_m - 0.6 * math.sqrt(G * state.tid * (state.rho_l - state.rho_g) / state.rho_l)
    hl = min(1.0 - u_gs / u_b, LS_HOLDUP)
    if not hl > 0.0:
        state.mark_degenerate(f"Taylor bubble velocity {u_b:.4g} m/s gives no liquid holdup")
        return state

    state.rl = hl
    state.rho_ls = state.rho_l * LS_HOLDUP + state.rho_g * ALFA_SLUG
    mu_ls = state.mu_l * LS_HOLDUP + state.mu_g * ALFA_SLUG
    re_ls = state.rho_ls * u_m * state.tid / mu_ls
    f_tp = dukler_ftp_ratio(LS_HOLDUP) * 4.0 * fanning(re_ls, state.rough, state.tid)
    state.pfric = f_tp * state.rho_ls * u_m ** 2 / (2.0 * G * state.tid) * hl * GRAD_UNITS * state.sf
    state.rho_tp = state.rho_l * hl + state.rho_g * (1.0 - hl)
    state.pgrav = state.rho_tp * GRAD_UNITS
    state.rho_ns = no_slip_density(state.wl, state.wg, state.rho_l, state.rho_g)
    state.head, state.ef = velocity_head(state.rho_ns, u_m)
    return state


# ============================================================================
#  Vertical down line
# ============================================================================

_MODEL_DIC = {
    regime.VD_ANNULAR: annular_model,
    regime.VD_SLUG: slug_model,
    regime.VD_DISPERSED_BUBBLE: bubble_model,
}


class VerticalDown:
    """ Two-phase downward flow in a vertical pipe segment (Barnea flow map).
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
        self.ratios = vertical_down_ratios(self.state)
        self.state.regime = regime_from_ratios(self.ratios, self.state.tid)
        logger.debug("Vertical down ratios %s -> %s", self.ratios, self.state.regime.name)
        return self.state.regime

    def solve(self, strict=False):
        self.classify()
        return run_model(self.state, _MODEL_DIC, "Vertical down", strict)
