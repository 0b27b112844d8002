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

from enum import Enum

class orientation(Enum):  # Pipe orientation
    H = 0  # Horizontal
    VU = 1  # Vertical upward
    VD = 2  # Vertical downward

class regime(Enum):  # Two-phase flow regime
    NONE = 0  # Not yet classified
    # Horizontal
    H_STRATIFIED_SMOOTH = 1
    H_STRATIFIED_WAVY = 2
    H_ANNULAR_DISPERSED = 3
    H_ELONGATED_BUBBLE = 4
    H_INTERMITTENT_SLUG = 5
    H_DISPERSED_BUBBLE = 6
    # Vertical up
    VU_ANNULAR = 7
    VU_BUBBLE = 8
    VU_SLUG_CHURN = 9
    VU_FINELY_DISPERSED_BUBBLE = 10
    # Vertical down
    VD_ANNULAR = 11
    VD_SLUG = 12
    VD_DISPERSED_BUBBLE = 13

REGIME_LABELS = {
    regime.NONE: "",
    regime.H_STRATIFIED_SMOOTH: "Stratified Smooth Flow",
    regime.H_STRATIFIED_WAVY: "Stratified Wavy Flow",
    regime.H_ANNULAR_DISPERSED: "Annular-Dispersed Flow",
    regime.H_ELONGATED_BUBBLE: "Elongated Bubble Flow",
    regime.H_INTERMITTENT_SLUG: "Intermittent-Slug Flow",
    regime.H_DISPERSED_BUBBLE: "Dispersed Bubble Flow",
    regime.VU_ANNULAR: "Vertical Up Annular Flow",
    regime.VU_BUBBLE: "Vertical Up Bubble Flow",
    regime.VU_SLUG_CHURN: "Vertical Up Slug and Churn Flow",
    regime.VU_FINELY_DISPERSED_BUBBLE: "Vertical Up Finely Dispersed Bubble Flow",
    regime.VD_ANNULAR: "Annular Flow",
    regime.VD_SLUG: "Slug Flow",
    regime.VD_DISPERSED_BUBBLE: "Dispersed-Bubble Flow",
}

ORIENTATION_REGIMES = {
    orientation.H: (regime.H_STRATIFIED_SMOOTH, regime.H_STRATIFIED_WAVY,
                    regime.H_ANNULAR_DISPERSED, regime.H_ELONGATED_BUBBLE,
                    regime.H_INTERMITTENT_SLUG, regime.H_DISPERSED_BUBBLE),
    orientation.VU: (regime.VU_ANNULAR, regime.VU_BUBBLE,
                     regime.VU_SLUG_CHURN, regime.VU_FINELY_DISPERSED_BUBBLE),
    orientation.VD: (regime.VD_ANNULAR, regime.VD_SLUG, regime.VD_DISPERSED_BUBBLE),
}

class_dic = {
    "orientation": orientation,
    "regime": regime,
}
