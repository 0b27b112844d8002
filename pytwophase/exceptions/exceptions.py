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


class TwoPhaseError(ValueError):
    """Base class for all pytwophase calculation errors."""


class InvalidInput(TwoPhaseError):
    """Process data that no calculation can proceed from (non-positive rates, densities, diameter...)."""


class InvalidReynolds(TwoPhaseError):
    """Reynolds number passed to the friction factor is not finite and positive."""


class SingularDerivative(TwoPhaseError):
    """Newton-Raphson step with a vanishing derivative."""


class NonConvergence(TwoPhaseError):
    """ An iterative solve exhausted its trial budget or left the real domain.

        iterations: Number of trials performed
        last_value: Last iterate before the failure (may be nan)
    """
    def __init__(self, message, iterations=0, last_value=float('nan')):
        super().__init__(message)
        self.iterations = iterations
        self.last_value = last_value


class NoMatchingModel(TwoPhaseError):
    """No regime model is registered for the classified regime."""


class DegenerateResult(TwoPhaseError):
    """A model completed with a placeholder result because its defining iteration failed."""
