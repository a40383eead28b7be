"""
Chlorine Release
================

Steady-state chlorine in the environment around an electrolysis cell, for
three anode placements:

    design1: anode directly in the environment
    design2: anode in a well-mixed compartment with a fixed outflow
    design3: as design2, followed by a laminar passage before the environment

Diffusion inside the passage of design3 is ignored.
"""

import math

from coralchem.units import Quantity, Terms


def steady_state_amount(release_rate: Quantity, half_life: Quantity) -> Quantity:
    """
    Steady-state amount of a substance emitted at ``release_rate`` (N/s)
    that decays with ``half_life``.

    The mean lifetime of the substance is half_life / ln(2).
    """
    return release_rate.mul(half_life).cmul(1 / math.log(2))


def design1(anode_rate: Quantity, half_life: Quantity) -> Quantity:
    """Chlorine (g) with the anode in the environment."""
    return Terms.grams(steady_state_amount(anode_rate, half_life).normalize('grams'))


def design2(anode_rate: Quantity, half_life: Quantity,
            volume: Quantity, outflow: Quantity) -> Quantity:
    """
    Chlorine (g) released to the environment from a compartment of ``volume``
    exchanging ``outflow`` with it.

    Outflow losses are ignored when computing the compartment's own chlorine,
    which overestimates the release.
    """
    concentration = design1(anode_rate, half_life).div(volume)   # g/l
    release_rate = concentration.mul(outflow)                    # g/s
    return steady_state_amount(release_rate, half_life)


def design3(anode_rate: Quantity, half_life: Quantity, primary_volume: Quantity,
            outflow: Quantity, secondary_volume: Quantity) -> Quantity:
    """Chlorine (g) after a ``secondary_volume`` passage downstream of design2."""
    chlorine = design2(anode_rate, half_life, primary_volume, outflow)

    # Half-lives elapsed while water crosses the passage.
    lifetimes = secondary_volume.div(outflow).div(half_life).number()
    return chlorine.cmul(0.5 ** lifetimes)
