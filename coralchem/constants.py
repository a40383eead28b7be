"""
Physical constants and seawater composition.

Single source of truth: import from here rather than redefining in each module.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from coralchem.units import Quantity, Terms


UNIVERSAL_GAS_CONSTANT = Terms.joules_per_kelvin_mole(8.3145)

# The charge on a mole of electrons.
FARADAY = Terms.coulombs_per_mole(96485)

# Reference salinity for the seawater ion table.
REFERENCE_SALINITY = Terms.salinity(35)


def water_disassociation() -> Quantity:
    """Kw for H2O <-> H+ + OH-."""
    # TODO: temperature and ionic-strength dependence; this is the 25C freshwater value
    return Terms.moles_squared_per_liter_squared(1e-14)


@dataclass(frozen=True)
class Species:
    """Transport properties of a dissolved species."""
    name: str
    diffusion: Quantity                      # m^2/s
    conductivity: Optional[Quantity] = None  # limiting equivalent conductivity, S cm^2/mol
    charge: Optional[Quantity] = None        # dimensionless


def _species(name: str, diffusion: float, conductivity: float = None, charge: int = None) -> Species:
    return Species(
        name=name,
        diffusion=Terms.square_meters_per_second(diffusion),
        conductivity=None if conductivity is None else Terms.siemens_square_centimeters_per_mole(conductivity),
        charge=None if charge is None else Terms.number(charge),
    )


# Except where noted, conductivities and diffusion coefficients are from
# http://www.aqion.de/site/194
SPECIES: Dict[str, Species] = {
    s.name: s for s in [
        _species("Na+", 1.33e-9, 50, 1),
        _species("Cl-", 2.03e-9, 76.2, -1),
        _species("Mg^{2+}", 0.705e-9, 53, 2),
        _species("Ca^{2+}", 0.793e-9, 59.6, 2),
        _species("K+", 1.96e-9, 73.6, 1),
        _species("SO4^{2-}", 1.07e-9, 80.4, -2),
        _species("OH-", 5.27e-9, 197.9, -1),
        _species("H+", 9.31e-9, 349.6, 1),
        _species("HCO3-", 1.18e-9, 44.3, -1),
        _species("CO3^{2-}", 0.955e-9, 71.7, -2),

        # Cadogan, Maitland & Trusler, J. Chem. Eng. Data 2014, 59, 519-525.
        # Measured at 14 MPa.
        _species("CO2", 2.233e-9),

        # Estimated from Cl-.
        _species("OCl-", 2.03e-9),
    ]
}


# Major ions in seawater (S=35, T=25C), mol/kg.
# Millero, Chemical Oceanography (CRC Press, 2013) p. 67
SEAWATER_IONS: Dict[str, Quantity] = {
    "Na+": Terms.moles_per_seawater_kg(0.486),
    "Cl-": Terms.moles_per_seawater_kg(0.567),
    "Mg^{2+}": Terms.moles_per_seawater_kg(0.055),
    "Ca^{2+}": Terms.moles_per_seawater_kg(0.011),
    "K+": Terms.moles_per_seawater_kg(0.011),
    "SO4^{2-}": Terms.moles_per_seawater_kg(0.029),
    "B(OH)3": Terms.moles_per_seawater_kg(3.3e-4),
    "B(OH)4-": Terms.moles_per_seawater_kg(1.05e-4),
}


def seawater_concentration(name: str, salinity: Quantity) -> Quantity:
    """Concentration of a major ion, scaled linearly with salinity."""
    return SEAWATER_IONS[name].mul(salinity).div(REFERENCE_SALINITY)
