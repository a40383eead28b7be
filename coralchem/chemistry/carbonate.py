"""
Carbonate Equilibrium
=====================

Speciation of dissolved inorganic carbon (DIC) between CO2, HCO3- and CO3^{2-}
as a function of temperature, salinity and pH.

At equilibrium:

    K1 = [H+][HCO3-]/[CO2]
    K2 = [H+][CO3^{2-}]/[HCO3-]

K1 and K2 are from:

    Frank J. Millero, Taylor B. Graham, Fen Huang, Hector Bustos-Serrano, Denis Pierrot
    Dissociation constants of carbonic acid in seawater as a function of salinity and temperature
    Marine Chemistry 100 (2006) 80-94
"""

from dataclasses import dataclass

import numpy as np
import polars as pl

from coralchem.units import SEAWATER_DENSITY_KG_PER_L, Quantity, Terms


@dataclass(frozen=True)
class CarbonateSpecies:
    """Concentrations of the three carbonate species, in the units of DIC."""
    co2: Quantity
    hco3: Quantity
    co3: Quantity

    @property
    def total(self) -> Quantity:
        return self.co2 + self.hco3 + self.co3


def seawater_density(temperature: Quantity, salinity: Quantity) -> Quantity:
    """Density of seawater (kg/l)."""
    # TODO: replace with an equation of state in temperature and salinity
    return Terms.kilograms_per_liter(SEAWATER_DENSITY_KG_PER_L)


def density_h2o(temperature: Quantity, salinity: Quantity) -> Quantity:
    """
    Mass of H2O per liter of seawater (kg/l).

    Subtracts the weight of the salts (S in g/kg of seawater) from the weight
    of a liter of seawater.
    """
    D = seawater_density(temperature, salinity).normalize('kilograms_per_liter')
    S = salinity.normalize('salinity')
    salts = S * D  # g/l
    return Terms.kilograms_per_liter(D - salts / 1000)


def molarity_to_molality(temperature: Quantity, salinity: Quantity, molarity: Quantity) -> Quantity:
    """
    Convert mol/l of seawater to mol/kg of H2O.

    Sources quote one or the other; the values are close but not equal.
    """
    return molarity.div(density_h2o(temperature, salinity))


def _ionization_constant(temperature: Quantity, salinity: Quantity,
                         a0: float, a1: float, a2: float,
                         sa: tuple, sb: tuple, sc: float) -> Quantity:
    T = temperature.normalize('kelvin')
    S = salinity.normalize('salinity')
    pK_0 = a0 + a1 / T + a2 * np.log(T)
    A = sa[0] * np.sqrt(S) + sa[1] * S + sa[2] * S ** 2
    B = sb[0] * np.sqrt(S) + sb[1] * S
    C = sc * np.sqrt(S)
    pK = pK_0 + A + B / T + C * np.log(T)
    return Terms.moles_per_seawater_kg(float(10 ** -pK))


def association_k1(temperature: Quantity, salinity: Quantity) -> Quantity:
    """Stoichiometric constant of the first ionization of carbonic acid (mol/kg-sw)."""
    return _ionization_constant(
        temperature, salinity,
        -126.34048, 6320.813, 19.568224,
        (13.4191, 0.0331, -0.0000533), (-530.123, -6.103), -2.06950,
    )


def association_k2(temperature: Quantity, salinity: Quantity) -> Quantity:
    """Stoichiometric constant of the second ionization of carbonic acid (mol/kg-sw)."""
    return _ionization_constant(
        temperature, salinity,
        -90.18333, 5143.692, 14.613358,
        (21.0894, 0.1248, -0.0003687), (-772.483, -20.051), -3.3336,
    )


def carbonate_concentrations(temperature: Quantity, salinity: Quantity,
                             dic: Quantity, ph: Quantity) -> CarbonateSpecies:
    """
    Split DIC into [CO2], [HCO3-] and [CO3^{2-}].

    Args:
        temperature: Water temperature
        salinity: Salinity
        dic: Dissolved inorganic carbon, [CO2] + [HCO3-] + [CO3^{2-}]
        ph: Acidity

    Returns:
        CarbonateSpecies, in the same dimension as ``dic``
    """
    H = ph.concentration_h()
    K1 = association_k1(temperature, salinity)
    K2 = association_k2(temperature, salinity)

    # DIC = [CO2](1 + K1/[H+] + K1*K2/[H+]^2)
    co2 = dic / (1 + K1 / H + K1 * K2 / (H * H))
    hco3 = K1 * co2 / H
    co3 = K2 * K1 * co2 / (H * H)

    return CarbonateSpecies(co2=co2, hco3=hco3, co3=co3)


def generate_bjerrum_data(temperature: Quantity, salinity: Quantity,
                          start_ph: float, end_ph: float, num_points: int) -> pl.DataFrame:
    """
    Carbonate species fractions against pH, for a Bjerrum plot.

    Returns:
        DataFrame with columns ph, co2, hco3, co3 and ``num_points + 1`` rows
    """
    if num_points < 1:
        raise ValueError(f"num_points must be at least 1, got {num_points}")

    unit_dic = Terms.moles_per_seawater_kg(1)
    rows = []
    for i in range(num_points + 1):
        ph = start_ph + (i / num_points) * (end_ph - start_ph)
        species = carbonate_concentrations(temperature, salinity, unit_dic, Terms.ph(ph))
        rows.append({
            'ph': ph,
            'co2': species.co2.normalize('moles_per_seawater_kg'),
            'hco3': species.hco3.normalize('moles_per_seawater_kg'),
            'co3': species.co3.normalize('moles_per_seawater_kg'),
        })

    return pl.DataFrame(rows)
