"""
pytwophase
===================================

---------------------------------------------------------------
Two-phase (vapor / liquid) flow regime and hydraulics for pipes
---------------------------------------------------------------

Classifies the flow pattern of a pipe segment from its process data, and evaluates the
regime specific model for holdup, densities, velocities, pressure gradients, velocity head
and erosion factor.

Pipe orientations supported;

- Horizontal: Taitel & Dukler (1976) flow map. Stratified, slug (Dukler & Hubbard) and
  similarity analysis (Dukler) models
- Vertical up: Taitel, Barnea & Dukler (1980) flow map. Bubble drift flux, slug and churn,
  and similarity analysis models
- Vertical down: Barnea (1987) flow map. Annular film, slug and dispersed bubble models

Each orientation is a class (Horizontal, VerticalUp, VerticalDown) offering normalize(),
classify() and solve(). The line module adds one-call solution, batch DataFrames,
vapor rate sweeps and tabulated reports.

"""

submodules = [
    'classes',
    'constants',
    'exceptions',
    'horizontal',
    'line',
    'models',
    'shared_fns',
    'state',
    'validate',
    'vertical_down',
    'vertical_up'
]

__all__ = submodules

import importlib

def __dir__():
    return __all__


def __getattr__(name):
    if name in submodules:
        return importlib.import_module(f'pytwophase.{name}')
    else:
        try:
            return globals()[name]
        except KeyError:
            raise AttributeError(
                f"Module 'pytwophase' has no attribute '{name}'"
            )
