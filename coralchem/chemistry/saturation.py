"""
Aragonite Saturation
====================

The saturation state of aragonite is

    Omega = [CO3^{2-}][Ca^{2+}] / Ksp

Omega = 1 is saturated. Below 1, CaCO3 dissolves; above 1, it precipitates.
Concentrations with this Ksp are per kg of seawater, not per liter.
"""

import numpy as np

from coralchem.chemistry.carbonate import carbonate_concentrations
from coralchem.units import Quantity, Terms


# Ca/S ratio, mol/kg-sw per unit salinity.
# Millero, Chemical Oceanography (CRC Press, 2013) p. 296
CALCIUM_PER_SALINITY = 0.0002934


def calcium_concentration(salinity: Quantity) -> Quantity:
    """[Ca^{2+}] estimated from salinity, which it tracks closely."""
    return Terms.moles_per_seawater_kg(salinity.normalize('salinity') * CALCIUM_PER_SALINITY)


def association_ksp_aragonite(temperature: Quantity, salinity: Quantity) -> Quantity:
    """
    Stoichiometric solubility product of aragonite (mol^2/kg-sw^2).

    Alfonso Mucci, The solubility of calcite and aragonite in seawater at
    various salinities, temperatures, and one atmosphere total pressure.
    American Journal of Science (September 1983).

    Uses log10 throughout, as the paper does.
    """
    T = temperature.normalize('kelvin')
    S = salinity.normalize('salinity')

    log_ksp_thermodynamic = -171.945 - 0.077993 * T + 2903.293 / T + 71.595 * np.log10(T)
    A = -0.068393 + 0.0017276 * T + 88.135 / T
    B = -0.10018
    C = 0.0059415
    log_ksp = log_ksp_thermodynamic + A * np.sqrt(S) + B * S + C * S ** 1.5

    return Terms.moles_squared_per_seawater_kg_squared(float(10 ** log_ksp))


def aragonite_saturation(temperature: Quantity, salinity: Quantity,
                         dic: Quantity, ph: Quantity) -> float:
    """
    Aragonite saturation state Omega (dimensionless).

    Args:
        temperature: Water temperature
        salinity: Salinity
        dic: Dissolved inorganic carbon
        ph: Acidity
    """
    co3 = carbonate_concentrations(temperature, salinity, dic, ph).co3
    ca = calcium_concentration(salinity)
    ksp = association_ksp_aragonite(temperature, salinity)
    return co3.mul(ca).div(ksp).number()
