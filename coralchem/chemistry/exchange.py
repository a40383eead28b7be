"""
Air-Sea CO2 Exchange
====================

Raising the pH of surface water lowers its [CO2], and the atmosphere then
pushes CO2 back in. The OH- needed to neutralize that influx is a running
cost of keeping water alkalized.

Transfer velocities are from:

    Peter S. Liss, Liliane Merlivat
    Air-Sea Gas Exchange Rates: Introduction and Synthesis
    The Role of Air-Sea Exchange in Geochemical Cycling 113-127, 1986 (D Reidel, Dordrecht)
"""

from coralchem.chemistry.carbonate import carbonate_concentrations
from coralchem.units import Quantity, Terms


# Schmidt number of CO2 at 20C (reference) and 30C (target).
SCHMIDT_REFERENCE = 600
SCHMIDT_TARGET = 360

SMOOTH_SURFACE_LIMIT = 3.6   # m/s
ROUGH_SURFACE_LIMIT = 13.0   # m/s


def transfer_velocity(wind_speed: Quantity) -> Quantity:
    """
    Water-side transfer velocity kw of CO2 at a given wind speed.

    Piecewise in wind speed: smooth surface, rough surface, breaking waves.
    The air-side term is ignored, which is conservative for CO2.
    """
    u = wind_speed.normalize('meters_per_second')
    ratio = SCHMIDT_TARGET / SCHMIDT_REFERENCE

    if u < SMOOTH_SURFACE_LIMIT:
        kw = 0.17 * u * ratio ** (-2 / 3)
    elif u < ROUGH_SURFACE_LIMIT:
        kw = (2.85 * u - 9.65) * ratio ** -0.5
    else:
        kw = (5.9 * u - 49.3) * ratio ** -0.5

    return Terms.centimeters_per_hour(kw)


def neutralize_requirement(temperature: Quantity, salinity: Quantity, dic: Quantity,
                           start_ph: Quantity, end_ph: Quantity, wind_speed: Quantity) -> Quantity:
    """
    OH- flux (mol m^-2 h^-1) needed to neutralize atmospheric CO2 entering
    water raised from start_ph to end_ph.

    The atmosphere is assumed to be in equilibrium with the water at start_ph,
    so the CO2 imbalance is the drop in [CO2] between the two pH values.
    """
    start = carbonate_concentrations(temperature, salinity, dic, start_ph)
    end = carbonate_concentrations(temperature, salinity, dic, end_ph)

    imbalance = start.co2.sub(end.co2)
    co2_flux = imbalance.mul(transfer_velocity(wind_speed))

    # Incoming CO2 speciates as at end_ph: one H+ per HCO3-, two per CO3^{2-}.
    protons_per_co2 = end.hco3.div(dic).add(end.co3.cmul(2).div(dic))
    return co2_flux.mul(protons_per_co2)
