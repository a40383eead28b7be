"""
coralchem - Ocean Chemistry with Dimensional Analysis
=====================================================

Seawater chemistry for planning reef alkalization, with every formula
checked for dimensional consistency.

    QUANTITIES IN → FORMULAS → QUANTITIES OUT
                    (dimensions checked at every step)

Architecture:
    - units/: Unit registry, catalog and the Quantity engine
    - chemistry/: Carbonate system, saturation, electrolysis, chlorine, exchange, migration
    - config/: Scenario config validation
    - entry_points/: Command-line figure generator

Usage:
    from coralchem.units import Terms
    from coralchem.chemistry.saturation import aragonite_saturation

    aragonite_saturation(Terms.celsius(29.5), Terms.salinity(35.4),
                         Terms.molarity(0.002229376), Terms.ph(7.76))

    # Regenerate wiki figures
    python -m coralchem.entry_points.wiki
"""

__version__ = "1.0.0"

from . import units
from . import chemistry

__all__ = ['units', 'chemistry', '__version__']
