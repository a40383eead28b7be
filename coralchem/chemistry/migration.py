"""
Ion Migration and Diffusion
===========================

Losses across the interface between the anode and cathode compartments of an
electrolysis cell.

Migration: ions carry current across the interface in proportion to their
share of the solution's conductivity (transport numbers).

Diffusion: species move from the compartment where they are concentrated to
the one where they are not. Convection along the interface is modeled as a
periodic refresh of the water at the interface.

Two diffusion models are provided for the amount crossed per unit area:

    diffusion_series       separation of variables on a 1 m domain, numerical
    diffusion_closed_form  Laplace transform on a semi-infinite domain, exact

    Integral_0..inf Ci erfc(x / (2 sqrt(Dt))) dx = Ci 2 sqrt(Dt) / sqrt(pi)

References:
    Stanley J. Farlow, Partial Differential Equations for Scientists and
    Engineers (Dover, 1993) p. 39

    Edward W. Ng and Murray Geller, A Table of Integrals of the Error
    Functions, J. Res. NBS 73B (1969)

    Allen J. Bard, Larry R. Faulkner, Electrochemical Methods, 2nd ed.
    (Wiley, 2001) p. 67
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable

import numpy as np
from scipy.integrate import trapezoid
from scipy.special import erfc

from coralchem.chemistry.carbonate import carbonate_concentrations
from coralchem.chemistry.chlorine import steady_state_amount
from coralchem.chemistry.electrolysis import hydroxide_requirement
from coralchem.constants import FARADAY, SEAWATER_IONS, SPECIES, water_disassociation
from coralchem.units import Quantity, Terms

logger = logging.getLogger(__name__)


CHLORINE_MOLAR_MASS = Terms.grams_per_mole(35.45)


# =============================================================================
# SOLVER
# =============================================================================

def solve_for_parameter(start: Quantity, end: Quantity,
                        fn: Callable[[Quantity], Quantity], iterations: int = 30) -> Quantity:
    """
    Bisect [start, end] for the point where ``fn`` changes sign.

    ``fn`` must be non-negative at ``start`` and negative at ``end``.
    """
    for _ in range(iterations):
        middle = start.add(end).div(2)
        if fn(middle).is_negative():
            end = middle
        else:
            start = middle

    logger.debug(f"Bisection settled at {start} after {iterations} iterations")
    return start


# =============================================================================
# DIFFUSION
# =============================================================================

def diffusion_series(interface_concentration: Quantity, coefficient: Quantity, time: Quantity,
                     num_terms: int = 500, num_points: int = 2001) -> Quantity:
    """
    Amount diffused across an interface (mol/m^2) by separation of variables.

    C(0, t) = Ci and C(1 m, t) = 0, starting from C(x, 0) = 0. Subtracting the
    steady state Ci(1 - x) gives zero boundaries, whose solution is

        C'(x, t) = Sum_n a_n exp(-D t (n pi)^2) sin(n pi x)
        a_n = 2 Integral_0..1 -Ci (1 - x) sin(n pi x) dx

    The integrals are approximated with the trapezoid rule, so accuracy
    depends on ``num_terms`` and ``num_points``.
    """
    Ci = interface_concentration.normalize('moles_per_cubic_meter')
    D = coefficient.normalize('square_meters_per_second')
    t = time.normalize('seconds')

    x = np.linspace(0.0, 1.0, num_points)
    n = np.arange(1, num_terms + 1)[:, np.newaxis]
    sines = np.sin(n * np.pi * x)

    steady = Ci * (1 - x)
    a = 2 * trapezoid(-steady * sines, x, axis=1)
    decay = np.exp(-t * D * (n[:, 0] * np.pi) ** 2)
    transient = (a * decay) @ sines

    total = trapezoid(transient + steady, x)
    return Terms.moles_per_square_meter(float(total))


def diffusion_closed_form(interface_concentration: Quantity, coefficient: Quantity,
                          time: Quantity) -> Quantity:
    """Amount diffused across an interface (mol/m^2) into a semi-infinite domain."""
    return interface_concentration.cmul(2 / math.sqrt(math.pi)).mul(coefficient.mul(time).sqrt())


def diffusion_profile(interface_concentration: Quantity, coefficient: Quantity,
                      time: Quantity, depth: Quantity) -> Quantity:
    """Concentration at ``depth`` past the interface: Ci erfc(x / (2 sqrt(Dt)))."""
    x = depth.normalize('meters')
    spread = 2 * coefficient.mul(time).sqrt().normalize('meters')
    return interface_concentration.cmul(float(erfc(x / spread)))


# =============================================================================
# CONDUCTIVITY
# =============================================================================

def ion_conductivity(name: str, concentration: Quantity) -> Quantity:
    """
    Contribution of an ion to solution conductivity (S/m), from its limiting
    equivalent conductivity.

    Overestimates at seawater concentrations, where ions interact. Boric acid
    species are ignored.
    """
    if "B(OH)" in name:
        return Terms.siemens_per_meter(0)
    species = SPECIES[name]
    return concentration.mul(species.conductivity).mul(species.charge.abs())


def seawater_conductivity() -> Quantity:
    """
    Conductivity of seawater (S/m) at the reference salinity.

    Comes out ~8.2 S/m against a measured ~5.3 S/m.
    """
    total = Terms.siemens_per_meter(0)
    for name, concentration in SEAWATER_IONS.items():
        total = total.add(ion_conductivity(name, concentration))
    return total


# =============================================================================
# CELL INTERFACE
# =============================================================================

@dataclass(frozen=True)
class IonMovement:
    """Losses across the compartment interface."""
    migration_loss: float        # fraction of current undone by migration
    diffusion_loss: float        # fraction of current undone by diffusion
    chlorine_release: Quantity   # steady-state chlorine reaching the cathode side (g)


def electrolysis_ion_movement(*, temperature: Quantity, salinity: Quantity, dic: Quantity,
                              amps: Quantity, half_life: Quantity, volume: Quantity,
                              outflow: Quantity, interface_size: Quantity, current: Quantity,
                              start_ph: Quantity, end_ph: Quantity) -> IonMovement:
    """
    Migration and diffusion between connected anode and cathode compartments.

    Args:
        amps: Current between the compartments
        half_life: Half-life of chlorine compounds
        volume: Anode compartment volume
        outflow: Exchange between the anode compartment and the environment
        interface_size: Area of the interface between the compartments
        current: Convection speed along the interface
        start_ph: Environmental pH
        end_ph: pH the cathode compartment is raised to
    """
    charge_rate = amps.div(FARADAY)  # mol/s
    conductivity = seawater_conductivity()

    # The anode settles where the H+ it produces matches what is needed to
    # lower the inflowing water from start_ph to the anode pH.
    anode_ph = solve_for_parameter(
        Terms.ph(1), start_ph,
        lambda ph: hydroxide_requirement(temperature, salinity, dic, ph, start_ph).mul(outflow).sub(charge_rate),
    )
    logger.debug(f"Anode compartment pH: {anode_ph.normalize('ph'):.3f}")

    Kw = water_disassociation()

    cathode = carbonate_concentrations(temperature, salinity, dic, end_ph)
    cathode_h = end_ph.concentration_h()
    cathode_oh = Kw.div(cathode_h)

    anode = carbonate_concentrations(temperature, salinity, dic, anode_ph)
    anode_h = anode_ph.concentration_h()
    anode_oh = Kw.div(anode_h)

    def migration(name: str, concentration: Quantity) -> Quantity:
        species = SPECIES[name]
        transport = ion_conductivity(name, concentration).div(conductivity)
        return transport.mul(charge_rate).div(species.charge.abs())

    # Cathode -> anode: OH-, HCO3-, CO3^{2-}. Anode -> cathode: H+.
    migration_total = (
        migration("OH-", cathode_oh)
        .add(migration("HCO3-", cathode.hco3))
        .add(migration("CO3^{2-}", cathode.co3).cmul(2))
        .add(migration("H+", anode_h))
    )
    migration_loss = migration_total.div(charge_rate).number()

    # Interface assumed square.
    refresh_time = interface_size.sqrt().div(current)

    def diffusion(name: str, difference: Quantity) -> Quantity:
        if difference.is_negative():
            return Terms.moles_per_second(0)
        crossed = diffusion_closed_form(difference, SPECIES[name].diffusion, refresh_time)
        return crossed.mul(interface_size).div(refresh_time)

    diffusion_total = (
        diffusion("H+", anode_h.sub(cathode_h))
        .add(diffusion("OH-", cathode_oh.sub(anode_oh)))
        .add(diffusion("CO2", anode.co2.sub(cathode.co2)).cmul(2))
        .add(diffusion("HCO3-", cathode.hco3.sub(anode.hco3)))
        .add(diffusion("CO3^{2-}", cathode.co3.sub(anode.co3)).cmul(2))
    )
    diffusion_loss = diffusion_total.div(charge_rate).number()

    # All active chlorine is treated as OCl-, produced at most one atom per
    # electron.
    anode_chlorine = steady_state_amount(charge_rate, half_life).div(volume)
    chlorine_weight = diffusion("OCl-", anode_chlorine).mul(CHLORINE_MOLAR_MASS)
    chlorine_release = steady_state_amount(chlorine_weight, half_life)

    return IonMovement(
        migration_loss=migration_loss,
        diffusion_loss=diffusion_loss,
        chlorine_release=chlorine_release,
    )
