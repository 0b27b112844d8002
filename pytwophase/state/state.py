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
from typing import Protocol

from pytwophase.classes import regime, REGIME_LABELS
from pytwophase.constants import CP2SI, IN2M, DYNECM2KGF, MM2M, HR2S
from pytwophase.validate import validate_inputs

logger = logging.getLogger(__name__)

_INPUTS = ('wl', 'wg', 'rho_l', 'rho_g', 'mu_l', 'mu_g', 'sigma', 'rough', 'sf', 'tid', 'degree')

_OUTPUTS = (
    'rl',        # Liquid volume fraction (holdup) (-)
    'lambda_l',  # No-slip liquid volume fraction (-)
    'rho_tp',    # Two-phase density (kg/m^3)
    'rho_ns',    # No-slip two-phase density (kg/m^3)
    'rho_su',    # Two-phase slug unit density (kg/m^3)
    'rho_ls',    # Liquid slug density (kg/m^3)
    'u_tp',      # Two-phase velocity (m/s)
    'u_ls',      # Liquid superficial velocity (m/s)
    'u_gs',      # Vapor superficial velocity (m/s)
    'vel_l',     # Actual liquid velocity, stratified (m/s)
    'vel_g',     # Actual vapor velocity, stratified (m/s)
    'u_s',       # Liquid slug mean velocity (m/s)
    'u_lls',     # Liquid velocity in the liquid slug, vertical (m/s)
    'pfric',     # Frictional pressure loss, acceleration included (kgf/cm^2/100m)
    'pacc',      # Acceleration pressure loss (kgf/cm^2/100m)
    'pgrav',     # Elevation head loss (kgf/cm^2/100m)
    'head',      # 1.0 velocity head (kgf/cm^2)
    'ef',        # Erosion factor (-). <= 1 no erosion, > 1 erosion
    'depth',     # Liquid depth above bottom of pipe (m)
    'l_s',       # Liquid slug length (m)
    'l_f',       # Liquid film length (m)
    'l_u',       # Slug unit length (m)
    'l_e',       # Entrance length to stable slug flow (m)
    'rfe',       # Liquid holdup at the film end (-)
    'alfa_tb',   # Taylor bubble void fraction (-)
)


class TwoPhaseLine(Protocol):
    """ Operations offered by each orientation (Horizontal, VerticalUp, VerticalDown) """
    state: 'ProcessState'

    def normalize(self) -> None: ...

    def classify(self) -> regime: ...

    def solve(self, strict: bool = False) -> 'ProcessState': ...


class ProcessState:
    """ Process data and results for a single two-phase pipe segment.

        wl: Liquid mass flow rate (kg/hr)
        wg: Vapor mass flow rate (kg/hr)
        rho_l: Liquid density (kg/m^3)
        rho_g: Vapor density (kg/m^3)
        mu_l: Liquid viscosity (cP). kg/m-s once normalized
        mu_g: Vapor viscosity (cP). kg/m-s once normalized
        sigma: Liquid surface tension (dyne/cm). kgf/s^2 once normalized
        rough: Pipe absolute roughness (mm). m once normalized
        sf: Safety factor applied to frictional loss (-)
        tid: Pipe inside diameter (inches). m once normalized
        degree: Inclination (degrees), 0 = horizontal. Radians once normalized. Defaults to 0
    """
    def __init__(self, wl, wg, rho_l, rho_g, mu_l, mu_g, sigma, rough, sf, tid, degree=0):
        validate_inputs(wl=wl, wg=wg, rho_l=rho_l, rho_g=rho_g, mu_l=mu_l, mu_g=mu_g,
                        sigma=sigma, rough=rough, sf=sf, tid=tid, degree=degree)
        self.wl = float(wl)
        self.wg = float(wg)
        self.rho_l = float(rho_l)
        self.rho_g = float(rho_g)
        self.mu_l = float(mu_l)
        self.mu_g = float(mu_g)
        self.sigma = float(sigma)
        self.rough = float(rough)
        self.sf = float(sf)
        self.tid = float(tid)
        self.degree = float(degree)
        self._normalized = False
        self.regime = regime.NONE
        self.reset_outputs()

    @property
    def is_normalized(self):
        """True once engineering units have been converted to SI."""
        return self._normalized

    @property
    def regime_label(self):
        return REGIME_LABELS[self.regime]

    def normalize(self):
        """ Converts inputs to SI (cP -> kg/m-s, in -> m, dyne/cm -> kgf/s^2, degree -> radian,
            mm -> m). A second call is a no-op.
        """
        if self._normalized:
            return
        self.mu_l = self.mu_l * CP2SI
        self.mu_g = self.mu_g * CP2SI
        self.tid = self.tid * IN2M
        self.sigma = self.sigma * DYNECM2KGF
        self.degree = math.radians(self.degree)
        self.rough = self.rough * MM2M
        self._normalized = True

    def require_normalized(self):
        if not self._normalized:
            raise ValueError("ProcessState must be normalized before classification or solving")

    def reset_outputs(self):
        for name in _OUTPUTS:
            setattr(self, name, 0.0)
        self.degenerate = False
        self.degenerate_reason = ''

    def mark_degenerate(self, reason):
        """ Records a placeholder result: zero holdup, flagged, remaining outputs untouched """
        self.rl = 0.0
        self.degenerate = True
        self.degenerate_reason = reason
        logger.warning("%s: degenerate result, %s", self.regime_label or self.regime.name, reason)

    @property
    def area(self):
        """Pipe cross section area (m^2)."""
        return math.pi * self.tid ** 2 / 4.0

    def superficial_velocities(self):
        """Returns (vapor, liquid) superficial velocities (m/s)."""
        area = self.area
        return self.wg / self.rho_g / area / HR2S, self.wl / self.rho_l / area / HR2S

    def inputs(self):
        return {name: getattr(self, name) for name in _INPUTS}

    def results(self):
        """ Returns dictionary of regime, label, degenerate flag and every output field """
        res = {'regime': self.regime.name, 'label': self.regime_label, 'degenerate': self.degenerate}
        res.update({name: getattr(self, name) for name in _OUTPUTS})
        return res
