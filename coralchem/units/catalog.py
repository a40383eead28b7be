"""
Unit Catalog
============

The compiled-in unit table. Units are declared in dependency order: each
derived unit only refers to units declared above it.

``REGISTRY`` is built from this table once, when the module is first imported,
and is shared read-only by every quantity in the process.
"""

from coralchem.units.registry import BaseUnit, UnitRegistry, base_unit, build_registry, derived_unit


# Approximate weight of a liter of seawater, in kilograms.
SEAWATER_DENSITY_KG_PER_L = 1.025


UNIT_DEFINITIONS = [
    # -------------------------------------------------------------------------
    # BASE
    # -------------------------------------------------------------------------
    derived_unit("number", "1", description="dimensionless"),
    base_unit("kelvin", "K", BaseUnit.KELVIN),
    base_unit("salinity", "psu", BaseUnit.SALINITY, description="practical salinity, ~g/kg"),
    base_unit("ph", "pH", BaseUnit.PH, description="acidity, -log10 [H+]"),
    base_unit("moles", "mol", BaseUnit.MOLES),
    base_unit("grams", "g", BaseUnit.GRAMS),
    base_unit("meters", "m", BaseUnit.METERS),
    base_unit("seconds", "s", BaseUnit.SECONDS),
    base_unit("coulombs", "C", BaseUnit.COULOMBS),
    base_unit("joules", "J", BaseUnit.JOULES),

    # -------------------------------------------------------------------------
    # DERIVED FROM BASE
    # -------------------------------------------------------------------------
    derived_unit("celsius", "degC", "kelvin", offset=273.15),
    derived_unit("decimeters", "dm", "meters", scale=0.1),
    derived_unit("centimeters", "cm", "meters", scale=0.01),
    derived_unit("kilograms", "kg", "grams", scale=1000.0),
    derived_unit("grams_per_second", "g/s", "grams", ("seconds", -1)),
    derived_unit("grams_per_mole", "g/mol", "grams", ("moles", -1)),
    derived_unit("square_meters", "m^2", ("meters", 2)),
    derived_unit("cubic_meters", "m^3", ("meters", 3)),
    derived_unit("meters_per_second", "m/s", "meters", ("seconds", -1)),
    derived_unit("square_meters_per_second", "m^2/s", ("meters", 2), ("seconds", -1)),
    derived_unit("moles_per_second", "mol/s", "moles", ("seconds", -1)),
    derived_unit("moles_per_square_meter", "mol/m^2", "moles", ("meters", -2)),
    derived_unit("moles_per_cubic_meter", "mol/m^3", "moles", ("meters", -3)),
    derived_unit("hours", "h", "seconds", scale=3600.0),
    derived_unit("amperes", "A", "coulombs", ("seconds", -1)),
    derived_unit("volts", "V", "joules", ("coulombs", -1)),
    derived_unit("joules_per_kelvin_mole", "J K^-1 mol^-1", "joules", ("kelvin", -1), ("moles", -1)),
    derived_unit("coulombs_per_mole", "C/mol", "coulombs", ("moles", -1)),

    # -------------------------------------------------------------------------
    # SECOND TIER
    # -------------------------------------------------------------------------
    derived_unit("liters", "l", ("decimeters", 3)),
    derived_unit("square_centimeters", "cm^2", ("centimeters", 2)),
    derived_unit("centimeters_per_second", "cm/s", "centimeters", ("seconds", -1)),
    derived_unit("centimeters_per_hour", "cm/h", "centimeters", ("hours", -1)),
    derived_unit("moles_per_square_meter_hour", "mol m^-2 h^-1", "moles", ("meters", -2), ("hours", -1)),
    derived_unit("watts", "W", "amperes", "volts"),
    derived_unit("amp_seconds", "A s", "amperes", "seconds"),
    derived_unit("ohms", "ohm", "volts", ("amperes", -1)),

    # -------------------------------------------------------------------------
    # THIRD TIER
    # -------------------------------------------------------------------------
    derived_unit("molarity", "mol/l", "moles", ("liters", -1)),
    derived_unit("grams_per_liter", "g/l", "grams", ("liters", -1)),
    derived_unit("kilograms_per_liter", "kg/l", "kilograms", ("liters", -1)),
    derived_unit("moles_per_kilogram", "mol/kg", "moles", ("kilograms", -1),
                 description="molality, per kilogram of H2O"),
    derived_unit("liters_per_second", "l/s", "liters", ("seconds", -1)),
    derived_unit("moles_squared_per_liter_squared", "mol^2 l^-2", ("moles", 2), ("liters", -2)),
    derived_unit("siemens", "S", ("ohms", -1)),
    derived_unit("seawater_kg", "kg-sw", "liters", scale=1 / SEAWATER_DENSITY_KG_PER_L,
                 description="a kilogram of seawater as a unit of volume"),

    # -------------------------------------------------------------------------
    # FOURTH TIER
    # -------------------------------------------------------------------------
    derived_unit("siemens_per_meter", "S/m", "siemens", ("meters", -1)),
    derived_unit("siemens_square_centimeters_per_mole", "S cm^2 mol^-1",
                 "siemens", ("centimeters", 2), ("moles", -1)),
    derived_unit("moles_per_seawater_kg", "mol/kg-sw", "moles", ("seawater_kg", -1)),
    derived_unit("moles_squared_per_seawater_kg_squared", "mol^2 kg-sw^-2",
                 ("moles", 2), ("seawater_kg", -2)),
]


REGISTRY: UnitRegistry = build_registry(UNIT_DEFINITIONS)
