"""
coralchem Chemistry
===================

Seawater formulas, all taking and returning Quantities:

Carbonate (1):
    - carbonate: K1/K2, DIC speciation, Bjerrum table

Climate (1):
    - saturation: Aragonite Ksp and saturation state

Alkalization (4):
    - electrolysis: Nernst potential, hydroxide requirement, power limit
    - chlorine: Steady-state chlorine for three cell designs
    - exchange: Air-sea CO2 influx neutralization
    - migration: Diffusion models, conductivity, interface losses
"""

from . import carbonate
from . import saturation
from . import electrolysis
from . import chlorine
from . import exchange
from . import migration

__all__ = [
    'carbonate',
    'saturation',
    'electrolysis',
    'chlorine',
    'exchange',
    'migration',
]
