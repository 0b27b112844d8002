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


# Constants
G = 9.81  # Gravity acceleration (m/s^2)
GC = 9.8  # Gravity conversion constant (kg-m/kgf-s^2)

# Engineering units -> SI (applied once by ProcessState.normalize)
CP2SI = 0.001  # cP -> kg/m-s
IN2M = 0.0254  # in -> m
DYNECM2KGF = 1.019716213E-4  # dyne/cm -> kgf/s^2
MM2M = 0.001  # mm -> m
HR2S = 3600.0  # kg/hr -> kg/s divisor

# Output units
KGFM2_PER_KGFCM2 = 10000.0  # kgf/m^2 per kgf/cm^2
PER_100M = 100.0  # Gradients reported per 100 m of pipe
GRAD_UNITS = PER_100M / KGFM2_PER_KGFCM2  # kgf/m^2/m -> kgf/cm^2/100m
KGM3_TO_LBFT3 = 0.062428  # Density to imperial units for the erosion factor
M_TO_FT = 3.28084

# Friction
RE_LAMINAR = 2100.0  # Laminar / turbulent switch for the Fanning factor
CG = 0.046  # Blasius type gas friction coefficient (turbulent)
CL = 0.046  # Blasius type liquid friction coefficient (turbulent)
N_EXP = 0.2  # Liquid friction Reynolds exponent (turbulent)
M_EXP = 0.2  # Gas friction Reynolds exponent (turbulent)

# Solver defaults
BISECT_TOL = 1e-4
FP_TOL = 1e-4
NR_TOL = 1e-4
MAX_TRIALS = 100
SINGULAR_TOL = 1e-14  # |f'| below this is treated as a singular Newton step
H_MIN, H_MAX = 0.001, 0.999  # Dimensionless liquid level bracket (h/D)
FILM_TOL = 1e-3  # Vertical down annular film velocity (m/s)
CURVE_C_TOL = 1e-6  # Vertical down dispersed bubble mixture velocity (m/s)

# Correlation constants
ALFA_SLUG = 0.25  # Average gas void fraction of a liquid slug
LS_HOLDUP = 1.0 - ALFA_SLUG  # Liquid holdup of a liquid slug
ALFA_BUBBLE_SLUG = 0.52  # Maximum bubble packing void fraction (vertical down curve D)
DB_FILM = 0.096887  # Dimensionless annular film thickness, delta/D (vertical down)
WAVE_S = 0.01  # Sheltering coefficient for the smooth/wavy transition
HL_ANNULAR = 0.5  # Liquid level used for the annular/intermittent boundary
LS_HORIZONTAL = 30.0  # Horizontal liquid slug length in diameters
LS_VERTICAL = 20.0  # Vertical liquid slug length in diameters
