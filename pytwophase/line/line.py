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

import numpy.typing as npt
import pandas as pd
from tabulate import tabulate

from pytwophase.classes import orientation, REGIME_LABELS
from pytwophase.horizontal import Horizontal
from pytwophase.shared_fns import convert_to_numpy
from pytwophase.state import TwoPhaseLine
from pytwophase.validate import validate_methods
from pytwophase.vertical_down import VerticalDown
from pytwophase.vertical_up import VerticalUp

logger = logging.getLogger(__name__)

ORIENTATION_DIC = {
    orientation.H: Horizontal,
    orientation.VU: VerticalUp,
    orientation.VD: VerticalDown,
}

# Validated process data sets (kg/hr, kg/m^3, cP, dyne/cm, mm, -, in, degree)
EXAMPLE_CASES = {
    'annular': dict(wl=72036.365, wg=78722.747, rho_l=379.63758, rho_g=75.286778, mu_l=0.054, mu_g=0.011,
                    sigma=40.0, rough=0.04572, sf=1.0, tid=12.0, degree=0.0),
    'bubble': dict(wl=100000.0, wg=50.0, rho_l=500.0, rho_g=2.0, mu_l=1.0, mu_g=0.01,
                   sigma=30.0, rough=0.046, sf=1.0, tid=6.065, degree=0.0),
    'slug': dict(wl=90718.0, wg=1814.36, rho_l=640.73852, rho_g=8.00923, mu_l=0.3, mu_g=0.01,
                 sigma=20.0, rough=0.04572, sf=1.0, tid=6.065, degree=0.0),
    'down_annular': dict(wl=21937.88, wg=376.93329, rho_l=962.0689, rho_g=0.9931447, mu_l=0.511, mu_g=0.01,
                         sigma=30.3, rough=0.04572, sf=1.0, tid=15.25, degree=0.0),
}

# Reported outputs with units, in report order
_REPORT_FIELDS = [
    ('rho_tp', 'Two-Phase Density', 'kg/m^3'),
    ('rho_ns', 'No-Slip Density', 'kg/m^3'),
    ('rho_ls', 'Liquid Slug Density', 'kg/m^3'),
    ('rho_su', 'Slug Unit Density', 'kg/m^3'),
    ('rl', 'Liquid Volume Fraction', '-'),
    ('u_tp', 'Two-Phase Velocity', 'm/s'),
    ('vel_l', 'Liquid Velocity', 'm/s'),
    ('vel_g', 'Vapor Velocity', 'm/s'),
    ('u_lls', 'Liquid Slug Velocity', 'm/s'),
    ('depth', 'Liquid Depth', 'm'),
    ('l_s', 'Liquid Slug Length', 'm'),
    ('l_u', 'Slug Unit Length', 'm'),
    ('l_e', 'Stable Slug Entrance Length', 'm'),
    ('head', '1.0 Velocity Head', 'kgf/cm^2'),
    ('pfric', 'Frictional Pressure Loss', 'kgf/cm^2/100m'),
    ('pacc', 'Acceleration Pressure Loss', 'kgf/cm^2/100m'),
    ('pgrav', 'Elevation Head Loss', 'kgf/cm^2/100m'),
    ('ef', 'Erosion Factor', '-'),
]


def two_phase_line(orient: orientation = orientation.H, strict: bool = False, **inputs) -> TwoPhaseLine:
    """ Builds, normalizes, classifies and solves a single pipe segment, returning the solved line object
        orient: A string or orientation Enum class; H (horizontal), VU (vertical up), VD (vertical down).
                Defaults to 'H'
        strict: Raise DegenerateResult rather than return a flagged placeholder result. Defaults to False
        inputs: ProcessState inputs (wl, wg, rho_l, rho_g, mu_l, mu_g, sigma, rough, sf, tid, degree)
    """
    orient = validate_methods(['orientation'], [orient])
    line = ORIENTATION_DIC[orient](**inputs)
    line.solve(strict=strict)
    return line


def line_table(cases, orient: orientation = orientation.H, strict: bool = False) -> pd.DataFrame:
    """ Solves independent pipe segments, returning one DataFrame row of inputs and results per segment
        cases: Dictionary of {name: inputs dictionary}, or a list of inputs dictionaries
        orient: A string or orientation Enum class applied to every segment. Defaults to 'H'
        strict: Raise DegenerateResult on the first degenerate segment. Defaults to False
    """
    orient = validate_methods(['orientation'], [orient])
    if not isinstance(cases, dict):
        cases = dict(enumerate(cases))
    rows = {}
    for name, inputs in cases.items():
        line = two_phase_line(orient, strict, **inputs)
        row = dict(inputs)
        row.update(line.state.results())
        rows[name] = row
    df = pd.DataFrame.from_dict(rows, orient='index')
    df.index.name = 'case'
    return df


def regime_sweep(wg: npt.ArrayLike, orient: orientation = orientation.H, **inputs) -> pd.DataFrame:
    """ Classifies a segment over a range of vapor flow rates with all other inputs held fixed.
        Returns DataFrame with vapor rate, regime, label and every boundary ratio.
        wg: Vapor mass flow rate(s) (kg/hr). Scalar, list or array
        orient: A string or orientation Enum class. Defaults to 'H'
        inputs: Remaining ProcessState inputs (wl, rho_l, rho_g, mu_l, mu_g, sigma, rough, sf, tid, degree)
    """
    orient = validate_methods(['orientation'], [orient])
    wgs = convert_to_numpy(wg).astype(float)
    rows = []
    for w in wgs:
        line = ORIENTATION_DIC[orient](wg=w, **inputs)
        reg = line.classify()
        row = {'wg': w, 'regime': reg.name, 'label': REGIME_LABELS[reg]}
        row.update(line.ratios)
        rows.append(row)
    logger.debug("Swept %d vapor rates, %d regimes", len(rows), len({r['regime'] for r in rows}))
    return pd.DataFrame(rows)


def report(line: TwoPhaseLine, tablefmt: str = 'simple') -> str:
    """ Returns tabulated text of the regime and populated (non zero) outputs of a solved line """
    state = line.state
    table = [['Flow Regime', state.regime_label, '']]
    for field, desc, unit in _REPORT_FIELDS:
        value = getattr(state, field)
        if value != 0.0:
            table.append([desc, value, unit])
    if state.degenerate:
        table.append(['Degenerate', state.degenerate_reason, ''])
    return tabulate(table, headers=['Property', 'Value', 'Unit'], tablefmt=tablefmt, floatfmt='.4f')
