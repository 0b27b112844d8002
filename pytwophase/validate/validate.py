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

import math

from pytwophase.classes import class_dic
from pytwophase.exceptions import InvalidInput

def validate_methods(names, variables):
    for m, method in enumerate(names):
        if type(variables[m]) == str:
            try:
                variables[m] = class_dic[method][variables[m].upper()]
            except KeyError:
                choices = [e.name for e in class_dic[method]]
                raise ValueError(f"An incorrect {method} was specified: '{variables[m]}'. Choose from {choices}")
    if len(variables) == 1:
        return variables[0]
    else:
        return variables

def validate_inputs(**kwargs):
    """ Rejects process data that cannot be computed from, raising InvalidInput.
        Every value must be finite. Inclination lies within [-90, 90] degrees. Roughness may be zero,
        everything else must be positive, and the liquid must be denser than the vapor.
    """
    for name, value in kwargs.items():
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise InvalidInput(f"{name} must be a number, got {value!r}")
        if not math.isfinite(value):
            raise InvalidInput(f"{name} must be finite, got {value}")
        if name == 'degree':
            if abs(value) > 90:
                raise InvalidInput(f"degree must lie within [-90, 90], got {value}")
            continue
        if name == 'rough':
            if value < 0:
                raise InvalidInput(f"rough must not be negative, got {value}")
            continue
        if value <= 0:
            raise InvalidInput(f"{name} must be positive, got {value}")
    if 'rho_l' in kwargs and 'rho_g' in kwargs and kwargs['rho_l'] <= kwargs['rho_g']:
        raise InvalidInput(f"Liquid density ({kwargs['rho_l']}) must exceed vapor density ({kwargs['rho_g']})")
