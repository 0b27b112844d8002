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

import numpy as np

from pytwophase.constants import (G, RE_LAMINAR, BISECT_TOL, FP_TOL, NR_TOL, MAX_TRIALS,
                                  SINGULAR_TOL, KGFM2_PER_KGFCM2, KGM3_TO_LBFT3, M_TO_FT)
from pytwophase.exceptions import InvalidReynolds, SingularDerivative, NonConvergence

logger = logging.getLogger(__name__)

# ============================================================================
#  Numeric kernels
#  Residuals are called as f(args, x), args carrying the model data
# ============================================================================

def bisect_solve(args, f, xmin, xmax, rtol=BISECT_TOL, max_iter=MAX_TRIALS):
    """ Returns the midpoint of the final bracket once |xmax - xmin| <= rtol.
        f(args, xmin) and f(args, xmax) must straddle the root; no bracket search is made.
        Raises NonConvergence if max_iter halvings are not enough.
    """
    err_lo = f(args, xmin)
    for iternum in range(1, max_iter + 1):
        mid_val = (xmax + xmin) / 2
        err_mid = f(args, mid_val)
        if err_lo * err_mid < 0:  # Root lies between xmin and mid_val
            xmax = mid_val
        else:
            xmin = mid_val
            err_lo = err_mid
        if abs(xmax - xmin) <= rtol:
            logger.debug("Bisection converged in %d iterations", iternum)
            return mid_val
    raise NonConvergence("Could not solve via bisection", max_iter, mid_val)

def fixed_point_solve(args, g, x0, rtol=FP_TOL, max_iter=MAX_TRIALS):
    """ Damped (50%) fixed point iteration x <- (x + g(x)) / 2.
        Returns x once |g(x) - x| <= rtol, otherwise raises NonConvergence.
    """
    x = x0
    for iternum in range(1, max_iter + 1):
        gx = g(args, x)
        if abs(gx - x) <= rtol:  # False for nan, which then runs out the budget
            logger.debug("Fixed point converged in %d iterations", iternum)
            return x
        x = (x + gx) / 2
    raise NonConvergence(f"Fixed point iteration did not converge in {max_iter} trials", max_iter, x)

def newton_solve(args, f, fprime, x0, rtol=NR_TOL, max_iter=MAX_TRIALS):
    """ Damped Newton-Raphson, x <- x - 0.5 * f(x) / f'(x).
        Converged when the full Newton correction |f/f'| <= rtol; returns the damped iterate.
        Raises SingularDerivative for a vanishing f', NonConvergence when the iterate
        leaves the real domain or max_iter is exhausted.
    """
    x = x0
    for iternum in range(1, max_iter + 1):
        fx = f(args, x)
        dfx = fprime(args, x)
        if not (math.isfinite(fx) and math.isfinite(dfx)):
            raise NonConvergence(f"Newton-Raphson residual is not finite at x = {x}", iternum, x)
        if abs(dfx) < SINGULAR_TOL:
            raise SingularDerivative(f"Newton-Raphson derivative vanished at x = {x} (f' = {dfx})")
        step = fx / dfx
        x = x - step / 2
        if abs(step) <= rtol:
            logger.debug("Newton-Raphson converged in %d iterations", iternum)
            return x
    raise NonConvergence(f"Newton-Raphson did not converge in {max_iter} trials", max_iter, x)

# ============================================================================
#  Chen (1979) Friction Factor
# ============================================================================

def fanning(re, rough, tid):
    """ Returns Fanning friction factor. Laminar 16/Re below Re = 2100, Chen (1979) explicit
        approximation of Colebrook above.
        re: Reynolds number (-)
        rough: Absolute roughness (m)
        tid: Inside diameter (m)
    """
    if not math.isfinite(re) or re <= 0:
        raise InvalidReynolds(f"Reynolds number must be finite and positive, got {re}")
    if re < RE_LAMINAR:
        return 16.0 / re
    eps_d = rough / tid
    a = eps_d ** 1.1098 / 2.8257 + (7.149 / re) ** 0.8961
    b = -4.0 * math.log10(eps_d / 3.7065 - 5.0452 / re * math.log10(a))
    return 1.0 / b ** 2

def dukler_ftp_ratio(lambda_l):
    """ Returns fTP / f0, the Dukler two-phase friction multiplier as a function of the
        no-slip liquid fraction lambda_l
    """
    ln_l = -math.log(lambda_l)
    return 1.0 + ln_l / (1.281 - 0.478 * ln_l + 0.444 * ln_l ** 2 - 0.094 * ln_l ** 3 + 0.00843 * ln_l ** 4)

# ============================================================================
#  Output helpers shared by every regime model
# ============================================================================

def no_slip_density(wl, wg, rho_l, rho_g):
    return (wl + wg) / (wl / rho_l + wg / rho_g)

def velocity_head(rho, u):
    """ Returns (head, ef)
        head: 1.0 velocity head (kgf/cm^2) for density rho (kg/m^3) and velocity u (m/s)
        ef: Erosion factor (-), evaluated in lb/ft^3 and ft/s. <= 1 no erosion, > 1 erosion
    """
    head = rho * u ** 2 / (2.0 * G) / KGFM2_PER_KGFCM2
    ef = (rho * KGM3_TO_LBFT3) * (u * M_TO_FT) ** 2 / KGFM2_PER_KGFCM2
    return head, ef

def convert_to_numpy(input_data):
    # Convert input data to a numpy array ensuring it is always sizeable
    if isinstance(input_data, np.ndarray):
        return input_data
    else:
        return np.atleast_1d(input_data)
