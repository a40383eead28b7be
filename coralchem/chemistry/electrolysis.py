"""
Seawater Electrolysis
=====================

Potential and charge needed to alkalize seawater by electrolysis.

Half-reactions (standard reduction potentials):

    Oxidation: 2 Cl- -> Cl2 + 2e-           (1.36 V)
    Reduction: 2 H2O + 2e- -> H2 + 2 OH-    (0.83 V)
    Overall:   2 Cl- + 2 H2O -> Cl2 + H2 + 2 OH-   (-2.19 V)

Every electron moved reduces one H2O to OH-, so the charge needed equals the
OH- needed to raise the pH, which in turn is set by the buffering species in
seawater.
"""

import logging
from typing import Dict

from coralchem.chemistry.carbonate import carbonate_concentrations
from coralchem.constants import FARADAY, UNIVERSAL_GAS_CONSTANT, seawater_concentration, water_disassociation
from coralchem.units import Quantity, Terms

logger = logging.getLogger(__name__)


STANDARD_POTENTIAL = Terms.volts(-2.19)

# Electrons per Cl2 / H2 formed.
ELECTRONS_PER_REACTION = 2


def boric_acid_disassociation() -> Quantity:
    """Kb for B(OH)3 + H2O <-> H+ + B(OH)4-, 25C value."""
    # Zumdahl, Zumdahl & DeCoste, Chemistry 10th ed. (Cengage, 2014) p. A24
    return Terms.molarity(5.8e-10)


def bisulfate_disassociation() -> Quantity:
    """Ks for HSO4- <-> H+ + SO4^{2-}, 25C value."""
    # Zumdahl, Zumdahl & DeCoste, Chemistry 10th ed. (Cengage, 2014) p. A24
    return Terms.molarity(1.2e-2)


def electrolysis_potential(temperature: Quantity, salinity: Quantity, ph: Quantity) -> Quantity:
    """
    Potential (V) needed to produce H2 and Cl2 from seawater.

    Nernst equation:

        E = E_SRP - RT/nF ln(Q),   Q = [OH-]^2 / [Cl-]^2
    """
    Cl = seawater_concentration("Cl-", salinity)
    OH = water_disassociation().div(ph.concentration_h())

    log_q = OH.mul(OH).div(Cl.mul(Cl)).natural_logarithm()
    return STANDARD_POTENTIAL.sub(
        log_q.mul(UNIVERSAL_GAS_CONSTANT).mul(temperature).div(FARADAY.cmul(ELECTRONS_PER_REACTION))
    )


def _bound_fraction(K: Quantity, total: Quantity, H: Quantity) -> Quantity:
    # K = [H+][A-]/[HA]  ->  [A-] = K[Total] / ([H+] + K)
    return K.mul(total).div(H.add(K))


def hydroxide_contributors(temperature: Quantity, salinity: Quantity, dic: Quantity,
                           start_ph: Quantity, end_ph: Quantity) -> Dict[str, Quantity]:
    """
    OH- needed (mol/l) to raise a liter of seawater from start_ph to end_ph,
    broken down by the species that consume it.

    Raises:
        ValueError: If end_ph does not exceed start_ph
    """
    if not start_ph < end_ph:
        raise ValueError(f"end pH ({end_ph.normalize('ph')}) must exceed start pH ({start_ph.normalize('ph')})")

    contributors = {}

    # Each H+ removed was neutralized by an OH-.
    start_H = start_ph.concentration_h()
    end_H = end_ph.concentration_h()
    contributors["H+"] = start_H.sub(end_H)

    # [OH-] rises with pH to stay in equilibrium with [H+] through Kw.
    Kw = water_disassociation()
    contributors["OH-"] = Kw.div(end_H).sub(Kw.div(start_H))

    # CO2 (effectively H2CO3) gives up two H+ as it fully dissociates, HCO3-
    # gives up one.
    start_carbonate = carbonate_concentrations(temperature, salinity, dic, start_ph)
    end_carbonate = carbonate_concentrations(temperature, salinity, dic, end_ph)
    contributors["CO2"] = start_carbonate.co2.sub(end_carbonate.co2).cmul(2)
    contributors["HCO3-"] = start_carbonate.hco3.sub(end_carbonate.hco3)

    # Each B(OH)4- formed from B(OH)3 consumes one OH-.
    Kb = boric_acid_disassociation()
    total_boric = seawater_concentration("B(OH)3", salinity).add(seawater_concentration("B(OH)4-", salinity))
    contributors["B(OH)4-"] = _bound_fraction(Kb, total_boric, end_H).sub(_bound_fraction(Kb, total_boric, start_H))

    # Sulfate is ~10x DIC but HSO4- is a strong acid, so its buffering is small.
    Ks = bisulfate_disassociation()
    total_sulfate = seawater_concentration("SO4^{2-}", salinity)
    contributors["SO4^{2-}"] = _bound_fraction(Ks, total_sulfate, end_H).sub(_bound_fraction(Ks, total_sulfate, start_H))

    return contributors


def hydroxide_requirement(temperature: Quantity, salinity: Quantity, dic: Quantity,
                          start_ph: Quantity, end_ph: Quantity) -> Quantity:
    """Total OH- (mol/l) needed across all contributors."""
    contributors = hydroxide_contributors(temperature, salinity, dic, start_ph, end_ph)
    total = Terms.molarity(0)
    for amount in contributors.values():
        total = total.add(amount)
    return total


def electrolysis_requirement(temperature: Quantity, salinity: Quantity, dic: Quantity,
                             volume: Quantity, start_ph: Quantity, end_ph: Quantity) -> Quantity:
    """Charge (A s) needed to raise ``volume`` of seawater from start_ph to end_ph."""
    requirement = hydroxide_requirement(temperature, salinity, dic, start_ph, end_ph)
    return requirement.mul(volume).mul(FARADAY)


def electrolysis_limit(power: Quantity, temperature: Quantity, salinity: Quantity, dic: Quantity,
                       start_ph: Quantity, end_ph: Quantity) -> Quantity:
    """
    Theoretical upper bound on the flow of seawater (l/s) that a power source
    can raise from start_ph to end_ph.

    Real cells need more voltage than the Nernst potential; the excess has to
    be measured.
    """
    potential = electrolysis_potential(temperature, salinity, start_ph).negate()
    amps = power.div(potential)

    volume = Terms.liters(1)
    requirement = electrolysis_requirement(temperature, salinity, dic, volume, start_ph, end_ph)
    limit = volume.mul(amps).div(requirement)

    logger.debug(f"Electrolysis limit: {amps.normalize('amperes'):.3f} A at "
                 f"{potential.normalize('volts'):.3f} V -> {limit.normalize('liters_per_second'):.4f} l/s")
    return limit
